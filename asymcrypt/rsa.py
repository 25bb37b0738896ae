"""
RSA Implementation

Implements:
- Probable-prime generation (incremental search above a random seed)
- Key pair generation with Carmichael's lambda
- The raw RSA transform m^exp mod n
- Hash-then-transform signing and verification
- Textbook encryption/decryption

No padding scheme is applied; callers choose a hash whose output is
smaller than the modulus.
"""

import logging
from typing import NamedTuple

from .config import get_settings
from .primes import is_prime
from .utils import HashFunction, extended_gcd, lcm, mod_inverse, random_bits, random_below

logger = logging.getLogger(__name__)


class RsaPublicKey(NamedTuple):
    e: int
    n: int


class RsaPrivateKey(NamedTuple):
    d: int
    n: int


class RsaKeyPair(NamedTuple):
    public: RsaPublicKey
    private: RsaPrivateKey


class RSA:
    """
    RSA key generation, transform, signatures and encryption.

    Usage:
        rsa = RSA()  # 3072-bit modulus by default
        keys = rsa.generate_keypair()
        signature = RSA.sign(sha256, message, keys.private)
        valid = RSA.verify(sha256, message, signature, keys.public)
    """

    def __init__(self, bits: int = None, rng=None):
        """
        Args:
            bits: Modulus size in bits (defaults to the configured rsa_bits)
            rng: Random source for primes and exponents
                 (defaults to secrets.SystemRandom)
        """
        self.bits = bits if bits is not None else get_settings().rsa_bits
        if self.bits < 16 or self.bits % 2:
            raise ValueError(f"RSA modulus size must be an even number >= 16, got {self.bits}")
        self.rng = rng

    # =========================================================================
    # KEY GENERATION
    # =========================================================================

    def generate_prime(self, bits: int = None) -> int:
        """
        Generate a probable prime of at least ``bits`` bits.

        Draws a random seed with its top bit set and walks upward
        (n, n+1, n+2, ...) until a candidate passes is_prime. This favours
        primes that follow long prime gaps; the distribution is not uniform.
        When the seed sits just below 2^bits the search can run past it, so
        the result occasionally has bits + 1 bits.
        """
        if bits is None:
            bits = self.bits // 2
        if bits < 2:
            raise ValueError(f"Prime size must be at least 2 bits, got {bits}")

        n = random_bits(bits, self.rng) | (1 << (bits - 1))
        tried = 1
        while not is_prime(n, rng=self.rng):
            n += 1
            tried += 1
        logger.debug("Found %d-bit prime after %d candidates", n.bit_length(), tried)
        return n

    def generate_keypair(self) -> RsaKeyPair:
        """
        Generate an RSA key pair.

        Algorithm:
        1. p, q <- two independent primes of bits/2 bits
        2. n = p * q, lambda = lcm(p - 1, q - 1)
        3. e = first integer >= random start in [0, lambda) coprime to lambda
        4. d = e^(-1) mod lambda

        Returns:
            RsaKeyPair(public=(e, n), private=(d, n))
        """
        p = self.generate_prime()
        q = self.generate_prime()
        while q == p:
            q = self.generate_prime()

        n = p * q
        lam = lcm(p - 1, q - 1)

        e = random_below(lam, self.rng)
        while e < 3 or extended_gcd(e, lam)[0] != 1:
            e += 1
        d = mod_inverse(e, lam)

        logger.debug("Generated %d-bit RSA modulus", n.bit_length())
        return RsaKeyPair(RsaPublicKey(e, n), RsaPrivateKey(d, n))

    # =========================================================================
    # TRANSFORM
    # =========================================================================

    @staticmethod
    def transform(m: int, key) -> int:
        """
        Raw RSA: m^exponent mod modulus.

        Works with either half of the key pair; the result is reduced mod n
        even when m >= n.
        """
        exponent, modulus = key
        return pow(m, exponent, modulus)

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    @staticmethod
    def sign(hash_fn: HashFunction, message, private_key: RsaPrivateKey) -> int:
        """
        Sign a message: transform(hash(message), private_key).

        Raises:
            ValueError: if the digest is not smaller than the modulus
        """
        digest = hash_fn(message)
        if not 0 <= digest < private_key.n:
            raise ValueError("Digest does not fit below the RSA modulus")
        return RSA.transform(digest, private_key)

    @staticmethod
    def verify(hash_fn: HashFunction, message, signature: int,
               public_key: RsaPublicKey) -> bool:
        """
        Verify a signature: transform(signature, public_key) == hash(message).

        Returns False for signatures that are not integers in [0, n).
        """
        if not isinstance(signature, int) or isinstance(signature, bool):
            return False
        if not 0 <= signature < public_key.n:
            return False
        return RSA.transform(signature, public_key) == hash_fn(message)

    # =========================================================================
    # ENCRYPTION
    # =========================================================================

    @staticmethod
    def encrypt(m: int, public_key: RsaPublicKey) -> int:
        """
        Textbook RSA encryption.

        Raises:
            ValueError: unless 1 < m < n - 1 (0, 1 and n-1 are fixed points)
        """
        if not 1 < m < public_key.n - 1:
            raise ValueError("Plaintext must satisfy 1 < m < n - 1")
        return RSA.transform(m, public_key)

    @staticmethod
    def decrypt(c: int, private_key: RsaPrivateKey) -> int:
        """
        Textbook RSA decryption.

        Raises:
            ValueError: unless 1 < c < n - 1
        """
        if not 1 < c < private_key.n - 1:
            raise ValueError("Ciphertext must satisfy 1 < c < n - 1")
        return RSA.transform(c, private_key)
