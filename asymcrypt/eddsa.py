"""
EdDSA-style Signatures over Twisted Edwards Curves

Signing:      R = kG,  h = H(R, A, m) mod n,  s = k + h*sk mod n
Verification: sG == R + h*A

The nonce is drawn from the random source rather than derived from the
key and message, and no byte encoding is defined; this is the algebraic
scheme, not RFC 8032.
"""

from typing import NamedTuple

from .ecc import Affine
from .edwards import Edwards, EdwardsCurve
from .utils import HashFunction, random_range


class EddsaSignature(NamedTuple):
    R: Affine
    s: int


class EdDSA:
    """
    EdDSA over Ed25519 (or another ``EdwardsCurve``).

    Usage:
        eddsa = EdDSA()
        keys = eddsa.generate_keypair()
        signature = eddsa.sign(sha256, message, keys.private)
        valid = eddsa.verify(sha256, message, signature, keys.public)
    """

    def __init__(self, curve: EdwardsCurve = None, rng=None):
        """
        Args:
            curve: Edwards domain parameters (defaults to Ed25519)
            rng: Random source for keys and nonces
        """
        self.edwards = Edwards(curve, rng)
        self.curve = self.edwards.curve
        self.rng = rng

    def generate_keypair(self):
        """Generate a key pair (delegates to Edwards)."""
        return self.edwards.generate_keypair()

    def _challenge(self, hash_fn: HashFunction, R: Affine, public_key: Affine, message) -> int:
        """Challenge h = H(R, A, m) mod n."""
        return hash_fn(R.x, R.y, public_key.x, public_key.y, message) % self.curve.n

    def sign(self, hash_fn: HashFunction, message, private_key: int) -> EddsaSignature:
        """
        Create a signature.

        Algorithm:
        1. k <- random in [1, n-1]
        2. R = kG
        3. h = H(R, A, m) mod n with A = sk*G
        4. s = (k + h*sk) mod n

        R is never the identity since 0 < k < n, so no retry is needed.

        Raises:
            ValueError: if private_key is not in [1, n-1]
        """
        public_key = self.edwards.public_key(private_key)
        n = self.curve.n

        k = random_range(1, n, self.rng)
        R = self.edwards.scalar_multiply(k, self.edwards.G)
        h = self._challenge(hash_fn, R, public_key, message)
        return EddsaSignature(R, (k + h * private_key) % n)

    def verify(self, hash_fn: HashFunction, message, signature, public_key) -> bool:
        """
        Verify a signature.

        Rejects unless R is a point on the curve, 0 <= s < n and the public
        key is a non-identity point of order n. Never raises for malformed
        signatures.
        """
        try:
            R, s = signature
        except (TypeError, ValueError):
            return False
        if not isinstance(s, int) or isinstance(s, bool):
            return False
        if not 0 <= s < self.curve.n:
            return False
        if not self.edwards.is_on_curve(R):
            return False
        if not self.edwards.validate_public_key(public_key):
            return False

        h = self._challenge(hash_fn, R, public_key, message)
        ed = self.edwards
        return ed.scalar_multiply(s, ed.G) == ed.point_add(R, ed.scalar_multiply(h, public_key))
