"""
ECDSA Digital Signature Implementation

Signing:      r = x(kG) mod n,  s = (H(m) + r*sk) / k mod n
Verification: x(u1*G + u2*P) = r (mod n) with u1 = H(m)/s, u2 = r/s
"""

import logging
from typing import NamedTuple

from .config import get_settings
from .ecc import ECC, Curve
from .exceptions import SigningError
from .utils import HashFunction, mod_div, mod_inverse, random_range

logger = logging.getLogger(__name__)


class EcdsaSignature(NamedTuple):
    r: int
    s: int


class ECDSA:
    """
    ECDSA over any curve supported by ``ECC``.

    Usage:
        ecdsa = ECDSA()
        keys = ecdsa.generate_keypair()
        signature = ecdsa.sign(sha256, message, keys.private)
        valid = ecdsa.verify(sha256, message, signature, keys.public)
    """

    def __init__(self, curve: Curve = None, rng=None, max_attempts: int = None):
        """
        Args:
            curve: Curve domain parameters (defaults to Curve25519)
            rng: Random source for keys and nonces
            max_attempts: Nonce draws allowed per signature before giving up
                          (defaults to the configured max_signing_attempts)
        """
        self.ecc = ECC(curve, rng)
        self.curve = self.ecc.curve
        self.rng = rng
        self.max_attempts = (max_attempts if max_attempts is not None
                             else get_settings().max_signing_attempts)

    def generate_keypair(self):
        """Generate a key pair (delegates to ECC)."""
        return self.ecc.generate_keypair()

    def sign(self, hash_fn: HashFunction, message, private_key: int) -> EcdsaSignature:
        """
        Create an ECDSA signature.

        Algorithm:
        1. k <- random in [1, n-1]        (ephemeral nonce)
        2. r = x(kG) mod n
        3. s = (H(m) + r*sk) / k mod n
        4. If r or s is zero, start again with a fresh k

        Raises:
            SigningError: if max_attempts nonces in a row were degenerate
        """
        n = self.curve.n
        z = hash_fn(message) % n

        for attempt in range(1, self.max_attempts + 1):
            k = random_range(1, n, self.rng)
            R = self.ecc.scalar_multiply(k, self.ecc.G)
            r = R.x % n if not R.infinity else 0
            s = mod_div(z + r * private_key, k, n) if r else 0
            if r and s:
                return EcdsaSignature(r, s)
            logger.warning("Degenerate ECDSA nonce on attempt %d, retrying", attempt)

        raise SigningError(f"No valid ECDSA nonce after {self.max_attempts} attempts")

    def verify(self, hash_fn: HashFunction, message, signature, public_key) -> bool:
        """
        Verify an ECDSA signature.

        Rejects unless the public key is a finite on-curve point of order n
        and 0 < r, s < n. Never raises for malformed signatures.
        """
        try:
            r, s = signature
        except (TypeError, ValueError):
            return False
        if not isinstance(r, int) or not isinstance(s, int):
            return False

        n = self.curve.n
        if not (0 < r < n and 0 < s < n):
            return False
        if not self.ecc.validate_public_key(public_key):
            return False

        z = hash_fn(message) % n
        s_inv = mod_inverse(s, n)
        u1 = (z * s_inv) % n
        u2 = (r * s_inv) % n

        X = self.ecc.point_add(
            self.ecc.scalar_multiply(u1, self.ecc.G),
            self.ecc.scalar_multiply(u2, public_key),
        )
        if X.infinity:
            return False
        return r == X.x % n
