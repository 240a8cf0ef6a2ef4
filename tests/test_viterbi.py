import random

import numpy as np
import pytest

from lritkit.correlator import ENCODED_SYNC_WORDS, CorrelationType
from lritkit.viterbi import Viterbi

SYNC_WORD = bytes.fromhex("1acffc1d")


def _soft(encoded: bytes, bits: int, one: int = 255, zero: int = 0) -> bytes:
    hard = np.unpackbits(np.frombuffer(encoded, dtype=np.uint8))[:bits]
    return bytes(np.where(hard == 1, one, zero).astype(np.uint8))


def _message(length: int, seed: int = 7) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(length))


@pytest.fixture
def viterbi():
    return Viterbi()


def test_sync_word_encoding_matches_known_prefix(viterbi):
    expected = ENCODED_SYNC_WORDS[CorrelationType.LRIT_PHASE_000].to_bytes(8, "big")
    assert viterbi.encode(SYNC_WORD)[:8] == expected


@pytest.mark.parametrize("length", [0, 1, 4, 33])
def test_encoded_size_follows_encode_length(viterbi, length):
    bits = viterbi.encode_length(length)
    assert len(viterbi.encode(bytes(length))) == (bits + 7) // 8
    assert viterbi.encode_length(length + 1) - bits == 8 * Viterbi.RATE


def test_all_zero_message_encodes_to_zeros(viterbi):
    encoded = viterbi.encode(bytes(16))
    assert encoded == bytes(len(encoded))


def test_decode_round_trip(viterbi):
    msg = _message(64)
    encoded = viterbi.encode(msg)
    bits = viterbi.encode_length(len(msg))
    decoded = viterbi.decode_soft(_soft(encoded, bits), bits)
    assert decoded[: len(msg)] == msg
    assert decoded[len(msg):] == bytes(len(decoded) - len(msg))


def test_decode_with_weak_symbols(viterbi):
    msg = _message(40, seed=3)
    bits = viterbi.encode_length(len(msg))
    soft = _soft(viterbi.encode(msg), bits, one=180, zero=70)
    assert viterbi.decode_soft(soft, bits)[: len(msg)] == msg


def test_decode_corrects_scattered_symbol_errors(viterbi):
    msg = _message(20, seed=11)
    bits = viterbi.encode_length(len(msg))
    soft = bytearray(_soft(viterbi.encode(msg), bits))
    for position in (40, 120, 200):
        soft[position] = 255 - soft[position]
    assert viterbi.decode_soft(bytes(soft), bits)[: len(msg)] == msg


def test_decode_rejects_odd_bit_count(viterbi):
    with pytest.raises(ValueError):
        viterbi.decode_soft(bytes(11), 11)


def test_decode_rejects_short_input(viterbi):
    with pytest.raises(ValueError):
        viterbi.decode_soft(bytes(10), 20)


def test_compare_soft_counts_flipped_symbols(viterbi):
    msg = _message(32, seed=5)
    bits = viterbi.encode_length(len(msg))
    soft = bytearray(_soft(viterbi.encode(msg), bits))
    assert viterbi.compare_soft(bytes(soft), msg) == 0
    flipped = (3, 50, 101, 300, 511)
    for position in flipped:
        soft[position] = 255 - soft[position]
    assert viterbi.compare_soft(bytes(soft), msg) == len(flipped)


def test_compare_soft_rejects_short_original(viterbi):
    with pytest.raises(ValueError):
        viterbi.compare_soft(bytes(10), bytes(4))