"""
Error types raised by the asymcrypt primitives.

Each error also derives from the builtin the primitives historically raised
(ValueError or RuntimeError), so existing ``except ValueError`` blocks keep
catching them.
"""


class AsymCryptError(Exception):
    """Base class for all asymcrypt errors."""


class NotInvertibleError(AsymCryptError, ValueError):
    """Raised when a modular inverse does not exist (gcd(x, n) != 1)."""

    def __init__(self, x: int, n: int, gcd: int):
        self.x = x
        self.n = n
        self.gcd = gcd
        super().__init__(f"{x} has no inverse modulo {n} (gcd is {gcd})")


class InvalidPointError(AsymCryptError, ValueError):
    """Raised when an operation needs an affine curve point and got something else."""


class InvalidCurveError(AsymCryptError, ValueError):
    """Raised when curve domain parameters are inconsistent."""


class SigningError(AsymCryptError, RuntimeError):
    """Raised when signing keeps drawing degenerate nonces."""
