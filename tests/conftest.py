"""
Shared fixtures: seeded random sources, hash functions and settings isolation.
"""
import random

import pytest

from asymcrypt import reload_settings
from asymcrypt.ecc import ECC, Curve
from asymcrypt.utils import sha256 as sha256_to_int


class SequenceRng:
    """Random source that replays a fixed list of draws (for nonce tests)."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, low, high=None):
        value = self.values.pop(0)
        assert (low if high is not None else 0) <= value < (high if high is not None else low)
        return value

    def getrandbits(self, k):
        return self.values.pop(0) & ((1 << k) - 1)


class BelowOnlyRng:
    """Seeded source exposing only ``randbelow`` and ``getrandbits``, like ``secrets``."""

    def __init__(self, seed):
        self._random = random.Random(seed)

    def randbelow(self, n):
        return self._random.randrange(n)

    def getrandbits(self, k):
        return self._random.getrandbits(k)


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(0xC0FFEE)


@pytest.fixture
def sha256():
    return sha256_to_int


@pytest.fixture
def ecc(rng):
    return ECC(rng=rng)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings, unaffected by the environment."""
    for name in ("ASYMCRYPT_RSA_BITS", "ASYMCRYPT_MILLER_RABIN_ROUNDS",
                 "ASYMCRYPT_MAX_SIGNING_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def sequence_rng():
    """Factory for random sources that replay a fixed list of draws."""
    return SequenceRng


@pytest.fixture
def below_only_rng():
    """Random source without ``randrange``."""
    return BelowOnlyRng(0xBEEF)


@pytest.fixture
def toy_curve():
    """y^2 = x^3 + 2x + 2 over F_17: cyclic group of order 19 generated by (5, 1)."""
    return Curve(name='toy-17', p=17, a=0, b=2, c=2, gx=5, gy=1, n=19, h=1)


@pytest.fixture
def toy_hash():
    """Transparent hash for hand-checked vectors: ints count as themselves, bytes by length."""
    def _hash(*parts):
        return sum(part if isinstance(part, int) else len(part) for part in parts)
    return _hash
