"""
HMAC 承诺方案测试
Commitment Scheme Tests
"""
import hashlib
import hmac
import random
import re
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fairrps.game.commitment import CommitmentScheme, SecretKey, verify_commitment
from fairrps.game.commitment import commitment_scheme
from fairrps.utils.exceptions import ConfigurationException, RandomnessFailure


def test_new_key_is_fresh_and_long_enough():
    scheme = CommitmentScheme()
    first = scheme.new_key()
    second = scheme.new_key()

    assert len(first.material) == 32
    assert first != second


def test_key_length_below_256_bits_is_rejected():
    with pytest.raises(ConfigurationException):
        CommitmentScheme(key_bytes=16)


def test_unsupported_digest_is_rejected():
    with pytest.raises(ConfigurationException):
        CommitmentScheme(digest="shake_128")


def test_commit_matches_independent_hmac():
    scheme = CommitmentScheme()
    key = scheme.new_key()

    commitment = scheme.commit(key, "Rock")

    expected = hmac.new(key.material, b"Rock", hashlib.sha256).hexdigest()
    assert commitment.digest == expected
    assert re.fullmatch(r"[0-9a-f]{64}", str(commitment))


def test_reveal_round_trip_and_binding():
    scheme = CommitmentScheme()
    key = scheme.new_key()
    commitment = scheme.commit(key, "Paper")
    key_hex = scheme.reveal(key)

    assert bytes.fromhex(key_hex) == key.material
    assert scheme.verify(commitment.digest, key_hex, "Paper")
    assert not scheme.verify(commitment.digest, key_hex, "Rock")
    assert not scheme.verify(commitment.digest, key_hex, "paper")


def test_different_keys_hide_the_same_move():
    scheme = CommitmentScheme()
    a = scheme.commit(scheme.new_key(), "Rock")
    b = scheme.commit(scheme.new_key(), "Rock")
    assert a.digest != b.digest


def test_verify_rejects_malformed_input():
    assert not verify_commitment("ab" * 32, "not-hex", "Rock")
    assert not verify_commitment("ключ", "00" * 32, "Rock")


def test_verify_accepts_uppercase_commitment():
    key = SecretKey(bytes(range(32)))
    digest = CommitmentScheme().commit(key, "Lizard").digest
    assert verify_commitment(digest.upper(), key.hex(), "Lizard")


def test_secret_key_repr_does_not_leak_material():
    key = SecretKey(b"\xab" * 32)
    assert "ab" not in repr(key)


def test_choose_move_uses_supplied_rng():
    moves = ["Rock", "Paper", "Scissors"]
    picks = {CommitmentScheme.choose_move(moves, random.Random(seed)) for seed in range(50)}
    assert picks == set(moves)


def test_choose_move_defaults_to_system_random():
    assert CommitmentScheme.choose_move(["a", "b", "c"]) in {"a", "b", "c"}


def test_randomness_failure_is_fatal(monkeypatch):
    def broken(_):
        raise OSError("no entropy")

    monkeypatch.setattr(commitment_scheme.secrets, "token_bytes", broken)
    with pytest.raises(RandomnessFailure):
        CommitmentScheme().new_key()


def test_short_random_read_is_fatal(monkeypatch):
    monkeypatch.setattr(commitment_scheme.secrets, "token_bytes", lambda n: b"\x00" * (n - 1))
    with pytest.raises(RandomnessFailure):
        CommitmentScheme().new_key()


def test_other_digest_from_config():
    scheme = CommitmentScheme.from_config({'key_bytes': 48, 'digest': 'sha512'})
    key = scheme.new_key()
    commitment = scheme.commit(key, "Spock")

    assert len(key.material) == 48
    assert commitment.algorithm == 'sha512'
    assert verify_commitment(commitment.digest, key.hex(), "Spock", digest='sha512')
