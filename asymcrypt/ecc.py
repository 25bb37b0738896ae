"""
Elliptic Curve Cryptography Implementation

Implements:
- ECPoint variants: Infinity (identity) and Affine(x, y)
- Curve domain parameters for the general cubic
      y^2 = x^3 + a*x^2 + b*x + c (mod p)
  which covers Montgomery curves with B = 1 (Curve25519) as well as short
  Weierstrass curves (a = 0: secp256k1, P-256)
- Point addition, doubling, and scalar multiplication
- EC key generation and ECDH shared secrets

Not constant time: scalar multiplication branches on secret bits.
"""

import logging
from typing import NamedTuple

from .exceptions import InvalidCurveError, InvalidPointError
from .utils import HashFunction, mod_div, random_range

logger = logging.getLogger(__name__)


# =============================================================================
# CURVE PARAMETERS
# =============================================================================

class Curve(NamedTuple):
    """Immutable curve domain parameters."""
    name: str
    p: int   # prime field modulus
    a: int   # coefficient of x^2
    b: int   # coefficient of x
    c: int   # constant term
    gx: int  # base point
    gy: int
    n: int   # order of the base point
    h: int   # cofactor


_P25519 = (1 << 255) - 19

# Curve25519 in Montgomery form: y^2 = x^3 + 486662x^2 + x
CURVE25519 = Curve(
    name='Curve25519',
    p=_P25519,
    a=486662,
    b=1,
    c=0,
    gx=9,
    gy=43114425171068552920764898935933967039370386198203806730763910166200978582548,
    n=(1 << 252) + 27742317777372353535851937790883648493,
    h=8,
)

# secp256k1: y^2 = x^3 + 7
SECP256K1 = Curve(
    name='secp256k1',
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=0,
    c=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    h=1,
)

# NIST P-256 (secp256r1): y^2 = x^3 - 3x + b
P256 = Curve(
    name='P-256',
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0,
    b=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    c=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    h=1,
)

CURVES = {curve.name: curve for curve in (CURVE25519, SECP256K1, P256)}


# =============================================================================
# POINTS
# =============================================================================

class ECPoint:
    """
    A point on an elliptic curve.

    Exactly two variants exist: ``Infinity`` (the identity element, use the
    ``INFINITY`` singleton) and ``Affine(x, y)``. Points are immutable and
    carry no curve reference; the ``ECC`` instance supplies the curve.
    """

    __slots__ = ()

    infinity = False

    def __new__(cls, *args, **kwargs):
        if cls is ECPoint:
            raise TypeError("ECPoint is abstract; use Affine(x, y) or INFINITY")
        return super().__new__(cls)


class Infinity(ECPoint):
    """The point at infinity (identity element)."""

    __slots__ = ()
    _instance = None

    infinity = True

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other) -> bool:
        return isinstance(other, Infinity)

    def __hash__(self) -> int:
        return hash('ECPoint.Infinity')

    def __repr__(self) -> str:
        return "ECPoint(infinity)"


INFINITY = Infinity()


class Affine(ECPoint):
    """A finite point with integer coordinates (x, y)."""

    __slots__ = ('x', 'y')

    def __init__(self, x: int, y: int):
        if not isinstance(x, int) or not isinstance(y, int):
            raise TypeError("Affine point coordinates must be integers")
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)

    def __setattr__(self, name, value):
        raise AttributeError("ECPoint is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Affine):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"ECPoint(x={hex(self.x)}, y={hex(self.y)})"


class EcKeyPair(NamedTuple):
    private: int
    public: Affine


# =============================================================================
# GROUP OPERATIONS
# =============================================================================

class ECC:
    """
    Elliptic Curve Cryptography operations.

    Provides:
    - Point arithmetic (add, double, multiply)
    - Key generation and public key validation
    - ECDH shared secret computation

    Usage:
        ecc = ECC()  # Uses Curve25519 by default
        alice = ecc.generate_keypair()
        bob = ecc.generate_keypair()
        secret = ecc.compute_shared_secret(sha256, alice.private, bob.public)
    """

    def __init__(self, curve: Curve = None, rng=None):
        """
        Initialize ECC with curve parameters.

        Args:
            curve: Curve domain parameters (defaults to Curve25519)
            rng: Random source for key generation
                 (defaults to secrets.SystemRandom)
        """
        self.curve = curve if curve is not None else CURVE25519
        self.rng = rng
        self.G = Affine(self.curve.gx, self.curve.gy)

        if not self.is_on_curve(self.G):
            raise InvalidCurveError(f"Generator point not on curve {self.curve.name}")

    @property
    def order(self) -> int:
        return self.curve.n

    def is_on_curve(self, P: ECPoint) -> bool:
        """
        Verify that a point lies on the curve.

        Checks: y^2 = x^3 + a*x^2 + b*x + c (mod p), coordinates in [0, p)
        """
        if P.infinity:
            return True

        p = self.curve.p
        if not (0 <= P.x < p and 0 <= P.y < p):
            return False

        lhs = (P.y * P.y) % p
        rhs = (pow(P.x, 3, p) + self.curve.a * P.x * P.x + self.curve.b * P.x + self.curve.c) % p
        return lhs == rhs

    def point_negate(self, P: ECPoint) -> ECPoint:
        """Return the negation of a point: -P = (x, -y mod p)."""
        if P.infinity:
            return INFINITY
        return Affine(P.x, (-P.y) % self.curve.p)

    def point_double(self, P: ECPoint) -> ECPoint:
        """
        Double a point on the curve.

        R = 2P using the tangent line:
            s = (3x^2 + 2ax + b) / (2y) mod p
            x3 = s^2 - a - 2x mod p
            y3 = s(x - x3) - y mod p
        """
        p = self.curve.p
        if P.infinity or P.y % p == 0:
            return INFINITY

        a = self.curve.a
        s = mod_div(3 * P.x * P.x + 2 * a * P.x + self.curve.b, 2 * P.y, p)

        x3 = (s * s - a - 2 * P.x) % p
        y3 = (s * (P.x - x3) - P.y) % p
        return Affine(x3, y3)

    def point_add(self, P: ECPoint, Q: ECPoint) -> ECPoint:
        """
        Add two points on the curve.

        - If P = O (infinity): return Q
        - If Q = O (infinity): return P
        - If P = Q: use point_double
        - If P = -Q (vertical chord): return O
        - Otherwise:
            s = (y1 - y2) / (x1 - x2) mod p
            x3 = s^2 - a - x1 - x2 mod p
            y3 = s(x1 - x3) - y1 mod p
        """
        if P.infinity:
            return Q
        if Q.infinity:
            return P

        p = self.curve.p
        if P.x % p == Q.x % p:
            if P.y % p == Q.y % p:
                return self.point_double(P)
            return INFINITY

        s = mod_div(P.y - Q.y, P.x - Q.x, p)
        x3 = (s * s - self.curve.a - P.x - Q.x) % p
        y3 = (s * (P.x - x3) - P.y) % p
        return Affine(x3, y3)

    def scalar_multiply(self, k: int, P: ECPoint) -> ECPoint:
        """
        Scalar multiplication using the Double-and-Add algorithm.

        Processes the bits of k from least to most significant, adding the
        running base into the result for each set bit and doubling the base
        every iteration. Stops early once the base reaches infinity.

        k is not reduced modulo the group order, so n*P really computes n*P
        (the subgroup check depends on it).
        """
        if not isinstance(k, int):
            raise TypeError("Scalar must be an integer")
        if k < 0:
            k = -k
            P = self.point_negate(P)

        result = INFINITY
        base = P
        while k > 0 and not base.infinity:
            if k & 1:
                result = self.point_add(result, base)
            base = self.point_double(base)
            k >>= 1
        return result

    # =========================================================================
    # KEYS
    # =========================================================================

    def generate_keypair(self) -> EcKeyPair:
        """
        Generate an EC key pair.

        Private key: Random integer sk in [1, n-1]
        Public key: Point sk*G
        """
        private_key = random_range(1, self.curve.n, self.rng)
        logger.debug("Generated key pair on %s", self.curve.name)
        return EcKeyPair(private_key, self.scalar_multiply(private_key, self.G))

    def public_key(self, private_key: int) -> Affine:
        """Derive the public key sk*G of a secret key in [1, n-1]."""
        if not isinstance(private_key, int) or not 1 <= private_key < self.curve.n:
            raise ValueError(f"Private key must be an integer in [1, n-1] for {self.curve.name}")
        return self.scalar_multiply(private_key, self.G)

    def validate_public_key(self, P) -> bool:
        """
        Check that P is usable as a public key: a finite point on the curve
        inside the subgroup generated by G (n*P = infinity).
        """
        if not isinstance(P, Affine):
            return False
        if not self.is_on_curve(P):
            return False
        return self.scalar_multiply(self.curve.n, P).infinity

    # =========================================================================
    # ECDH KEY EXCHANGE
    # =========================================================================

    def compute_shared_secret(self, hash_fn: HashFunction, private_key: int,
                              other_public_key: ECPoint) -> int:
        """
        Compute an ECDH shared secret.

        S = sk_A * Q_B = sk_A * sk_B * G = sk_B * Q_A

        The peer key is not validated here; run validate_public_key on
        untrusted keys first.

        Returns:
            hash_fn(x-coordinate of S)

        Raises:
            InvalidPointError: if S is the point at infinity
        """
        shared_point = self.scalar_multiply(private_key, other_public_key)
        if shared_point.infinity:
            raise InvalidPointError("Shared secret computation resulted in point at infinity")
        return hash_fn(shared_point.x)
