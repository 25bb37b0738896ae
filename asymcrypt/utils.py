# Number-theoretic and randomness helpers shared by RSA and the EC schemes.

import hashlib
import secrets
from typing import Callable, Union

from .exceptions import NotInvertibleError

# Caller-supplied hash: any number of bytes/str/int parts in, integer out.
HashFunction = Callable[..., int]

_system_random = secrets.SystemRandom()


def bytes_to_int(b: bytes) -> int:
    """Convert bytes to integer (big-endian)."""
    return int.from_bytes(b, 'big')


def int_to_bytes(n: int, length: int = None) -> bytes:
    """Convert a non-negative integer to bytes (big-endian, minimal length by default)."""
    if length is None:
        length = max(1, (n.bit_length() + 7) // 8)
    return n.to_bytes(length, 'big')


def extended_gcd(a: int, b: int) -> tuple:
    """
    Extended Euclidean Algorithm.
    Returns (gcd, x, y) such that a*x + b*y = gcd.
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def mod_inverse(x: int, n: int) -> int:
    """
    Compute the modular multiplicative inverse of x modulo n.

    Runs the Extended Euclidean Algorithm on (x mod n, n).

    Returns:
        y in [0, n) with x*y = 1 (mod n)

    Raises:
        ValueError: if n < 2
        NotInvertibleError: if gcd(x, n) != 1
    """
    if n < 2:
        raise ValueError(f"Modulus must be at least 2, got {n}")
    g, y, _ = extended_gcd(x % n, n)
    if g != 1:
        raise NotInvertibleError(x, n, g)
    return y % n


def mod_div(x: int, y: int, n: int) -> int:
    """Compute x / y modulo n, i.e. x * y^(-1) mod n."""
    return (x % n) * mod_inverse(y, n) % n


def lcm(a: int, b: int) -> int:
    """Least common multiple of two positive integers."""
    g, _, _ = extended_gcd(a, b)
    return a // g * b


# =============================================================================
# RANDOMNESS
# =============================================================================

def random_range(low: int, high: int, rng=None) -> int:
    """
    Draw a uniform integer in [low, high).

    Args:
        rng: random source offering ``randrange(low, high)`` (the
             ``random.Random`` interface) or ``randbelow(n)``
             (defaults to ``secrets.SystemRandom``)
    """
    if rng is None:
        rng = _system_random
    if hasattr(rng, 'randrange'):
        return rng.randrange(low, high)
    return low + rng.randbelow(high - low)


def random_below(n: int, rng=None) -> int:
    """Generate a random integer in [0, n-1]."""
    return random_range(0, n, rng)


def random_bits(k: int, rng=None) -> int:
    """Generate a random integer of at most k bits."""
    if rng is None:
        rng = _system_random
    return rng.getrandbits(k)


# =============================================================================
# HASH ADAPTERS
# =============================================================================

def _encode_part(part: Union[bytes, str, int]) -> bytes:
    if isinstance(part, (bytes, bytearray, memoryview)):
        data = bytes(part)
    elif isinstance(part, str):
        data = part.encode('utf-8')
    elif isinstance(part, int):
        # Sign byte then magnitude, so -x and x hash differently
        data = (b'\x01' if part < 0 else b'\x00') + int_to_bytes(abs(part))
    else:
        raise TypeError(f"Cannot hash value of type {type(part).__name__}")
    # Length prefix keeps (b'ab', b'c') and (b'a', b'bc') apart
    return len(data).to_bytes(4, 'big') + data


def hash_to_int(*parts, algorithm: str = 'sha256') -> int:
    """
    Hash any number of bytes/str/int parts into a non-negative integer.

    Every part is length-prefixed before hashing so the encoding of a
    sequence of parts is unambiguous.

    Args:
        parts: values to hash, in order
        algorithm: any name accepted by ``hashlib.new``

    Returns:
        The digest interpreted as a big-endian integer
    """
    h = hashlib.new(algorithm)
    for part in parts:
        h.update(_encode_part(part))
    return bytes_to_int(h.digest())


def make_hash(algorithm: str) -> HashFunction:
    """Build a ``hash(*parts) -> int`` callable for a hashlib algorithm."""
    hashlib.new(algorithm)  # fail fast on unknown names

    def _hash(*parts) -> int:
        return hash_to_int(*parts, algorithm=algorithm)

    _hash.__name__ = f"{algorithm.replace('-', '_')}_to_int"
    return _hash


sha256 = make_hash('sha256')
