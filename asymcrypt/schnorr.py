"""
Schnorr Digital Signature Scheme Implementation

Implements Schnorr signatures over elliptic curves:
- Signing: r = x(kG) mod n, e = H(r, m) mod n, s = k - sk*e (mod n)
- Verification: e == H(x(sG + eP) mod n, m) mod n

Security based on the Discrete Logarithm Problem.
"""

import logging
from typing import NamedTuple

from .config import get_settings
from .ecc import ECC, Affine, Curve, ECPoint
from .exceptions import SigningError
from .utils import HashFunction, random_range

logger = logging.getLogger(__name__)


class SchnorrSignature(NamedTuple):
    s: int
    e: int


class Schnorr:
    """
    Schnorr Digital Signature Scheme over elliptic curves.

    The signature is the pair (s, e); the commitment point is not sent and
    is recomputed by the verifier as sG + eP.

    Usage:
        schnorr = Schnorr()
        keys = schnorr.generate_keypair()
        signature = schnorr.sign(sha256, message, keys.private)
        valid = schnorr.verify(sha256, message, signature, keys.public)
    """

    def __init__(self, curve: Curve = None, rng=None, max_attempts: int = None):
        """
        Initialize Schnorr signature scheme.

        Args:
            curve: Curve domain parameters (defaults to Curve25519)
            rng: Random source for keys and nonces
            max_attempts: Nonce draws allowed per signature before giving up
        """
        self.ecc = ECC(curve, rng)
        self.curve = self.ecc.curve
        self.rng = rng
        self.max_attempts = (max_attempts if max_attempts is not None
                             else get_settings().max_signing_attempts)

    def generate_keypair(self):
        """
        Generate a Schnorr key pair.

        Private key: Random integer x in [1, n-1]
        Public key: Point P = xG
        """
        return self.ecc.generate_keypair()

    def _challenge(self, hash_fn: HashFunction, r: int, message) -> int:
        """Challenge e = H(r, m) mod n (Fiat-Shamir)."""
        return hash_fn(r, message) % self.curve.n

    def sign(self, hash_fn: HashFunction, message, private_key: int) -> SchnorrSignature:
        """
        Create a Schnorr signature.

        Algorithm:
        1. k <- random in [1, n-1]     (ephemeral nonce)
        2. r = x(kG) mod n             (commitment)
        3. e = H(r, m) mod n           (challenge)
        4. s = (k - x * e) mod n       (response)
        5. If any of r, e, s is zero, start again with a fresh k

        CRITICAL: Never reuse the nonce k! If the same k is used for
        two different messages, the private key can be recovered.

        Raises:
            SigningError: if max_attempts nonces in a row were degenerate
        """
        n = self.curve.n

        for attempt in range(1, self.max_attempts + 1):
            k = random_range(1, n, self.rng)
            R = self.ecc.scalar_multiply(k, self.ecc.G)
            r = R.x % n if not R.infinity else 0
            if r:
                e = self._challenge(hash_fn, r, message)
                s = (k - private_key * e) % n
                if e and s:
                    return SchnorrSignature(s, e)
            logger.warning("Degenerate Schnorr nonce on attempt %d, retrying", attempt)

        raise SigningError(f"No valid Schnorr nonce after {self.max_attempts} attempts")

    def verify(self, hash_fn: HashFunction, message, signature,
               public_key: ECPoint) -> bool:
        """
        Verify a Schnorr signature.

        Algorithm:
        1. Parse signature as (s, e)
        2. R' = sG + eP
        3. r' = x(R') mod n
        4. Accept iff e == H(r', m) mod n

        Correctness:
            sG + eP = (k - x*e)G + e*xG = kG

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            s, e = signature
        except (TypeError, ValueError):
            return False
        if not isinstance(s, int) or not isinstance(e, int):
            return False

        n = self.curve.n
        if not (0 < s < n and 0 < e < n):
            return False
        if not isinstance(public_key, Affine):
            return False
        if not self.ecc.is_on_curve(public_key):
            return False

        R = self.ecc.point_add(
            self.ecc.scalar_multiply(s, self.ecc.G),
            self.ecc.scalar_multiply(e, public_key),
        )
        if R.infinity:
            return False
        return e == self._challenge(hash_fn, R.x % n, message)
