"""Computation of the Viterbi-encoded LRIT and HRIT sync words."""

import argparse
import sys

from .correlator import CorrelationType
from .viterbi import Viterbi

SYNC_WORD = bytes.fromhex("1acffc1d")
_PREFIX_BYTES = 8
_PREFIX_MASK = (1 << (8 * _PREFIX_BYTES)) - 1

_LABELS = {
    CorrelationType.LRIT_PHASE_000: "LRIT:   phase 0",
    CorrelationType.LRIT_PHASE_180: "LRIT: phase 180",
    CorrelationType.HRIT_PHASE_000: "HRIT:   phase 0",
    CorrelationType.HRIT_PHASE_180: "HRIT: phase 180",
}


def nrzm_encode(data, b: int) -> bytes:
    """NRZ-M encode ``data``: a 1 bit toggles the level, a 0 bit keeps it.

    ``b`` is the initial level (0 or 1).
    """
    if b not in (0, 1):
        raise ValueError(f"initial level must be 0 or 1, got {b!r}")
    level = b
    out = bytearray()
    for byte in bytes(data):
        value = 0
        for shift in range(7, -1, -1):
            if (byte >> shift) & 1:
                level ^= 1
            value = (value << 1) | level
        out.append(value)
    return bytes(out)


def _encoded_prefix(viterbi: Viterbi, word: bytes) -> int:
    return int.from_bytes(viterbi.encode(word)[:_PREFIX_BYTES], "big")


def encoded_sync_words() -> dict:
    """Return the 64-bit encoded sync word for every correlation type."""
    viterbi = Viterbi()
    # LRIT is NRZ-L, so the phase ambiguity is resolved by inverting the encoding.
    lrit = _encoded_prefix(viterbi, SYNC_WORD)
    # HRIT is NRZ-M; each initial level gives one phase.
    return {
        CorrelationType.LRIT_PHASE_000: lrit,
        CorrelationType.LRIT_PHASE_180: lrit ^ _PREFIX_MASK,
        CorrelationType.HRIT_PHASE_000: _encoded_prefix(viterbi, nrzm_encode(SYNC_WORD, 0)),
        CorrelationType.HRIT_PHASE_180: _encoded_prefix(viterbi, nrzm_encode(SYNC_WORD, 1)),
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the Viterbi-encoded LRIT and HRIT sync words."
    )
    parser.parse_args(argv)
    for kind, word in encoded_sync_words().items():
        print(f"{_LABELS[kind]}: 0x{word:016x}")
    return 0


if __name__ == "__main__":
    sys.exit(main())