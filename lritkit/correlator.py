"""Correlation of a soft-symbol stream against encoded LRIT/HRIT sync words."""

import enum
from dataclasses import dataclass

ENCODED_SYNC_WORD_BITS = 64
_MASK = (1 << ENCODED_SYNC_WORD_BITS) - 1


class CorrelationType(enum.IntEnum):
    LRIT_PHASE_000 = 0
    LRIT_PHASE_180 = 1
    HRIT_PHASE_000 = 2
    HRIT_PHASE_180 = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_LABELS = {
    CorrelationType.LRIT_PHASE_000: "LRIT 0 deg",
    CorrelationType.LRIT_PHASE_180: "LRIT 180 deg",
    CorrelationType.HRIT_PHASE_000: "HRIT 0 deg",
    CorrelationType.HRIT_PHASE_180: "HRIT 180 deg",
}

# Viterbi-encoded sync words, indexed by CorrelationType.
ENCODED_SYNC_WORDS = (
    0x035D49C24FF2686B,
    0xFCA2B63DB00D9794,
    0x03B10B02F33D2076,
    0xDAFEF4FD0CC2DF89,
)


@dataclass(frozen=True)
class Correlation:
    """Best match found in a symbol stream."""

    position: int
    value: int
    type: CorrelationType


def correlate(data) -> Correlation:
    """Find the position in ``data`` that best matches any encoded sync word.

    Each byte is a soft symbol; its most significant bit is the hard bit.
    The position is the index of the first symbol of the matching window.
    """
    best_value = [0] * len(ENCODED_SYNC_WORDS)
    best_position = [0] * len(ENCODED_SYNC_WORDS)
    window = 0

    for index, symbol in enumerate(bytes(data)):
        window = ((window << 1) | (symbol >> 7)) & _MASK
        if index < ENCODED_SYNC_WORD_BITS - 1:
            continue
        for kind, word in enumerate(ENCODED_SYNC_WORDS):
            value = ENCODED_SYNC_WORD_BITS - (window ^ word).bit_count()
            if value > best_value[kind]:
                best_value[kind] = value
                best_position[kind] = index - (ENCODED_SYNC_WORD_BITS - 1)

    best = 0
    for kind, value in enumerate(best_value):
        if value > best_value[best]:
            best = kind

    return Correlation(best_position[best], best_value[best], CorrelationType(best))