"""
Unit tests for EdDSA signing and verification on Ed25519.
"""
import random

import pytest

from asymcrypt.ecc import Affine
from asymcrypt.eddsa import EdDSA, EddsaSignature
from asymcrypt.edwards import ED25519

N = ED25519.n


@pytest.fixture
def eddsa(rng):
    return EdDSA(rng=rng)


@pytest.fixture
def keys(eddsa):
    return eddsa.generate_keypair()


class TestSignVerify:

    @pytest.mark.parametrize("message", [b"", b"hello", "unicode text ✓", b"\x00" * 80])
    def test_round_trip(self, eddsa, keys, sha256, message):
        signature = eddsa.sign(sha256, message, keys.private)
        assert isinstance(signature, EddsaSignature)
        assert eddsa.edwards.is_on_curve(signature.R)
        assert 0 <= signature.s < N
        assert eddsa.verify(sha256, message, signature, keys.public)

    def test_wrong_message_rejected(self, eddsa, keys, sha256):
        signature = eddsa.sign(sha256, b"hello", keys.private)
        assert not eddsa.verify(sha256, b"hellp", signature, keys.public)

    def test_wrong_key_rejected(self, eddsa, keys, sha256):
        other = eddsa.generate_keypair()
        signature = eddsa.sign(sha256, b"hello", keys.private)
        assert not eddsa.verify(sha256, b"hello", signature, other.public)

    @pytest.mark.parametrize("bit", [0, 1, 100, 251])
    def test_bit_flip_in_s_rejected(self, eddsa, keys, sha256, bit):
        R, s = eddsa.sign(sha256, b"hello", keys.private)
        assert not eddsa.verify(sha256, b"hello", (R, s ^ (1 << bit)), keys.public)

    def test_other_commitment_rejected(self, eddsa, keys, sha256):
        R, s = eddsa.sign(sha256, b"hello", keys.private)
        assert not eddsa.verify(sha256, b"hello", (eddsa.edwards.point_negate(R), s), keys.public)
        assert not eddsa.verify(sha256, b"hello", (eddsa.edwards.G, s), keys.public)

    def test_fixed_nonce_matches_formula(self, sequence_rng, sha256):
        sk, k = 0x0123456789ABCDEF, 0xFEDCBA9876543210
        eddsa = EdDSA(rng=sequence_rng([k]))
        ed = eddsa.edwards
        R, s = eddsa.sign(sha256, b"known", sk)
        A = ed.scalar_multiply(sk, ed.G)
        assert R == ed.scalar_multiply(k, ed.G)
        h = sha256(R.x, R.y, A.x, A.y, b"known") % N
        assert s == (k + h * sk) % N

    def test_same_seed_same_signature(self, sha256):
        signatures = []
        for _ in range(2):
            eddsa = EdDSA(rng=random.Random(808))
            keys = eddsa.generate_keypair()
            signatures.append(eddsa.sign(sha256, b"m", keys.private))
        assert signatures[0] == signatures[1]

    def test_rejects_out_of_range_private_key(self, eddsa, sha256):
        with pytest.raises(ValueError):
            eddsa.sign(sha256, b"m", 0)


class TestVerifyRejections:

    @pytest.mark.parametrize("signature", [None, 7, (1,), (1, 2, 3), ("R", 1)])
    def test_malformed_signature_does_not_raise(self, eddsa, keys, sha256, signature):
        assert not eddsa.verify(sha256, b"m", signature, keys.public)

    def test_out_of_range_s(self, eddsa, keys, sha256):
        R, s = eddsa.sign(sha256, b"m", keys.private)
        assert not eddsa.verify(sha256, b"m", (R, s + N), keys.public)
        assert not eddsa.verify(sha256, b"m", (R, -1), keys.public)
        assert not eddsa.verify(sha256, b"m", (R, float(s)), keys.public)

    def test_off_curve_commitment(self, eddsa, keys, sha256):
        R, s = eddsa.sign(sha256, b"m", keys.private)
        assert not eddsa.verify(sha256, b"m", (Affine(R.x, (R.y + 1) % ED25519.p), s), keys.public)

    def test_identity_public_key(self, eddsa, keys, sha256):
        signature = eddsa.sign(sha256, b"m", keys.private)
        assert not eddsa.verify(sha256, b"m", signature, eddsa.edwards.identity)

    def test_public_key_outside_subgroup(self, eddsa, keys, sha256):
        signature = eddsa.sign(sha256, b"m", keys.private)
        torsion = Affine(0, ED25519.p - 1)
        mixed = eddsa.edwards.point_add(keys.public, torsion)
        assert eddsa.edwards.is_on_curve(mixed)
        assert not eddsa.verify(sha256, b"m", signature, mixed)

    def test_non_point_public_key(self, eddsa, keys, sha256):
        signature = eddsa.sign(sha256, b"m", keys.private)
        assert not eddsa.verify(sha256, b"m", signature, tuple(keys.public))

    def test_commitment_chosen_after_challenge_fails(self, eddsa, keys, sha256):
        # With a message-only challenge, R = sG - H(m)*A would verify for any s
        ed = eddsa.edwards
        s = 12345
        h = sha256(b"forged") % N
        R = ed.point_add(ed.scalar_multiply(s, ed.G),
                         ed.point_negate(ed.scalar_multiply(h, keys.public)))
        assert not eddsa.verify(sha256, b"forged", (R, s), keys.public)
