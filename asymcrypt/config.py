"""
Configuration Management

Initialization-time tunables loaded from environment variables
(prefix ``ASYMCRYPT_``) using Pydantic Settings. Curve domain parameters are
not configurable; they live as constants in ``asymcrypt.ecc``.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASYMCRYPT_",
        case_sensitive=False,
        extra="ignore",
    )

    rsa_bits: int = Field(3072, ge=16, description="RSA modulus size in bits")
    miller_rabin_rounds: int = Field(40, ge=1, description="Miller-Rabin rounds per candidate")
    max_signing_attempts: int = Field(
        1000,
        ge=1,
        description="Nonce draws allowed before ECDSA/Schnorr signing gives up",
    )

    @field_validator("rsa_bits")
    @classmethod
    def _even_modulus(cls, value: int) -> int:
        if value % 2:
            raise ValueError("rsa_bits must be even (two primes of rsa_bits/2 bits)")
        return value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get library settings (singleton).

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings
