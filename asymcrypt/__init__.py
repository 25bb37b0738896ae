# asymcrypt/__init__.py
"""
asymcrypt - Asymmetric Cryptography Primitives

This package provides:
- RSA key generation, signatures and textbook encryption
- Elliptic curve arithmetic (Curve25519 by default, secp256k1, P-256)
- ECDH key agreement
- ECDSA and Schnorr digital signatures
- Ed25519 twisted Edwards arithmetic and EdDSA signatures

Hash functions are supplied by the caller as ``hash(*parts) -> int``;
``sha256`` and ``make_hash`` wrap hashlib for convenience.
"""

from .config import Settings, get_settings, reload_settings
from .ecc import (
    CURVE25519,
    CURVES,
    ECC,
    INFINITY,
    P256,
    SECP256K1,
    Affine,
    Curve,
    ECPoint,
    EcKeyPair,
    Infinity,
)
from .ecdsa import ECDSA, EcdsaSignature
from .eddsa import EdDSA, EddsaSignature
from .edwards import ED25519, Edwards, EdwardsCurve
from .exceptions import (
    AsymCryptError,
    InvalidCurveError,
    InvalidPointError,
    NotInvertibleError,
    SigningError,
)
from .primes import SMALL_PRIMES, is_prime
from .rsa import RSA, RsaKeyPair, RsaPrivateKey, RsaPublicKey
from .schnorr import Schnorr, SchnorrSignature
from .utils import hash_to_int, make_hash, mod_inverse, sha256

__all__ = [
    'Affine', 'AsymCryptError', 'CURVE25519', 'CURVES', 'Curve', 'ECC', 'ECDSA',
    'ECPoint', 'ED25519', 'EcKeyPair', 'EcdsaSignature', 'EdDSA', 'EddsaSignature',
    'Edwards', 'EdwardsCurve', 'INFINITY', 'Infinity',
    'InvalidCurveError', 'InvalidPointError', 'NotInvertibleError', 'P256',
    'RSA', 'RsaKeyPair', 'RsaPrivateKey', 'RsaPublicKey', 'SECP256K1',
    'SMALL_PRIMES', 'Schnorr', 'SchnorrSignature', 'Settings', 'SigningError',
    'get_settings', 'hash_to_int', 'is_prime', 'make_hash', 'mod_inverse',
    'reload_settings', 'sha256',
]
