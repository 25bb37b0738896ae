"""
Primality Testing

Two-stage probabilistic test used by RSA key generation:
1. Trial division against the first 50 primes
2. Miller-Rabin with k random bases (k = 40 by default)

A composite survives k Miller-Rabin rounds with probability at most 4^-k.
"""

from .config import get_settings
from .utils import random_range


SMALL_PRIME_COUNT = 50


def first_primes(count: int) -> tuple:
    """Return the first ``count`` primes, found by trial division."""
    primes = []
    candidate = 2
    while len(primes) < count:
        if all(candidate % p for p in primes if p * p <= candidate):
            primes.append(candidate)
        candidate += 1
    return tuple(primes)


# Computed once at import; tuple so it cannot be mutated afterwards
SMALL_PRIMES = first_primes(SMALL_PRIME_COUNT)


def quick_prime_check(n: int) -> bool:
    """
    Trial division against SMALL_PRIMES.

    Returns True for table primes and for numbers with no small factor
    ("maybe prime"), False for numbers with a small factor.
    No false negatives, many false positives.
    """
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False
    return True


def miller_rabin(n: int, rounds: int = 40, rng=None) -> bool:
    """
    Miller-Rabin probabilistic primality test.

    Args:
        n: Candidate integer
        rounds: Number of independent random bases
        rng: Random source for the bases

    Returns:
        False if n is certainly composite, True if n is probably prime
    """
    if n == 2 or n == 3:
        return True
    if n < 2 or n % 2 == 0:
        return False

    # n - 1 = 2^r * d with d odd
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = random_range(2, n - 1, rng)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def is_prime(n: int, rounds: int = None, rng=None) -> bool:
    """
    Probabilistic primality test: trial division, then Miller-Rabin.

    Args:
        n: Candidate integer
        rounds: Miller-Rabin rounds (defaults to the configured value, 40)
        rng: Random source for the Miller-Rabin bases
    """
    if n < 2:
        return False
    if rounds is None:
        rounds = get_settings().miller_rabin_rounds
    return quick_prime_check(n) and miller_rabin(n, rounds, rng)
