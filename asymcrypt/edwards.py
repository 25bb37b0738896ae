"""
Twisted Edwards Curve Arithmetic

Implements:
- Curve domain parameters for a*x^2 + y^2 = 1 + d*x^2*y^2 (mod p)
- Ed25519, birationally equivalent to Curve25519 (u = (1 + y) / (1 - y))
- Point addition, doubling, and scalar multiplication
- Key generation and public key validation

The identity is the affine point (0, 1), so every point is an ``Affine``;
the addition law is complete for Ed25519 and needs no special cases.
Not constant time.
"""

import logging
from typing import NamedTuple

from .ecc import Affine, EcKeyPair
from .exceptions import InvalidCurveError
from .utils import mod_div, random_range

logger = logging.getLogger(__name__)


class EdwardsCurve(NamedTuple):
    """Immutable twisted Edwards domain parameters."""
    name: str
    p: int
    a: int
    d: int
    gx: int
    gy: int
    n: int   # order of the base point
    h: int   # cofactor


_P25519 = (1 << 255) - 19

ED25519 = EdwardsCurve(
    name='Ed25519',
    p=_P25519,
    a=-1,
    d=mod_div(-121665, 121666, _P25519),
    gx=15112221349535400772501151409588531511454012693041857206046113283949847762202,
    gy=mod_div(4, 5, _P25519),
    n=(1 << 252) + 27742317777372353535851937790883648493,
    h=8,
)


class Edwards:
    """
    Group operations on a twisted Edwards curve.

    Usage:
        ed = Edwards()  # Ed25519 by default
        keys = ed.generate_keypair()
        ed.validate_public_key(keys.public)
    """

    def __init__(self, curve: EdwardsCurve = None, rng=None):
        self.curve = curve if curve is not None else ED25519
        self.rng = rng
        self.identity = Affine(0, 1)
        self.G = Affine(self.curve.gx, self.curve.gy)

        if not self.is_on_curve(self.G):
            raise InvalidCurveError(f"Base point not on curve {self.curve.name}")

    @property
    def order(self) -> int:
        return self.curve.n

    def is_on_curve(self, P) -> bool:
        """Check a*x^2 + y^2 = 1 + d*x^2*y^2 (mod p) with coordinates in [0, p)."""
        if not isinstance(P, Affine):
            return False
        p = self.curve.p
        if not (0 <= P.x < p and 0 <= P.y < p):
            return False

        xx, yy = P.x * P.x, P.y * P.y
        return (self.curve.a * xx + yy - 1 - self.curve.d * xx * yy) % p == 0

    def point_negate(self, P: Affine) -> Affine:
        """-P = (-x mod p, y)."""
        return Affine((-P.x) % self.curve.p, P.y)

    def point_double(self, P: Affine) -> Affine:
        """
        Double a point:
            x3 = 2xy / (a*x^2 + y^2)
            y3 = (y^2 - a*x^2) / (2 - a*x^2 - y^2)
        """
        p, a = self.curve.p, self.curve.a
        x, y = P
        ax2 = a * x * x
        return Affine(
            mod_div(2 * x * y, ax2 + y * y, p),
            mod_div(y * y - ax2, 2 - ax2 - y * y, p),
        )

    def point_add(self, P: Affine, Q: Affine) -> Affine:
        """
        Add two points:
            x3 = (x1*y2 + x2*y1) / (1 + d*x1*x2*y1*y2)
            y3 = (y1*y2 - a*x1*x2) / (1 - d*x1*x2*y1*y2)
        """
        if P == Q:
            return self.point_double(P)

        p = self.curve.p
        x1, y1 = P
        x2, y2 = Q
        t = self.curve.d * x1 * x2 * y1 * y2 % p
        return Affine(
            mod_div(x1 * y2 + x2 * y1, 1 + t, p),
            mod_div(y1 * y2 - self.curve.a * x1 * x2, 1 - t, p),
        )

    def scalar_multiply(self, k: int, P: Affine) -> Affine:
        """
        Double-and-add over the bits of k, least significant first.

        k is not reduced modulo the group order.
        """
        if not isinstance(k, int):
            raise TypeError("Scalar must be an integer")
        if k < 0:
            k = -k
            P = self.point_negate(P)

        result = self.identity
        base = P
        while k > 0:
            if k & 1:
                result = self.point_add(result, base)
            base = self.point_double(base)
            k >>= 1
        return result

    # =========================================================================
    # KEYS
    # =========================================================================

    def generate_keypair(self) -> EcKeyPair:
        """sk uniform in [1, n-1], pk = sk*G."""
        private_key = random_range(1, self.curve.n, self.rng)
        logger.debug("Generated key pair on %s", self.curve.name)
        return EcKeyPair(private_key, self.scalar_multiply(private_key, self.G))

    def public_key(self, private_key: int) -> Affine:
        if not isinstance(private_key, int) or not 1 <= private_key < self.curve.n:
            raise ValueError(f"Private key must be an integer in [1, n-1] for {self.curve.name}")
        return self.scalar_multiply(private_key, self.G)

    def validate_public_key(self, P) -> bool:
        """P must be on the curve, not the identity, and satisfy n*P = identity."""
        if not self.is_on_curve(P) or P == self.identity:
            return False
        return self.scalar_multiply(self.curve.n, P) == self.identity
