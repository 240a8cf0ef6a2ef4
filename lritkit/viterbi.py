"""Rate 1/2, constraint length 7 convolutional code with soft-decision Viterbi decoding."""

from itertools import repeat
from typing import Iterator

import numpy as np

ORDER = 7
RATE = 2
POLYNOMIALS = (0x4F, 0x6D)

_REGISTERS = 1 << ORDER
_STATES = 1 << (ORDER - 1)
_REGISTER_MASK = _REGISTERS - 1
_UNREACHABLE = 1 << 40


def _parity(value: int) -> int:
    return value.bit_count() & 1


# Encoder output bits for every register value, in transmission order.
_OUTPUTS = tuple(
    tuple(_parity(register & poly) for poly in POLYNOMIALS)
    for register in range(_REGISTERS)
)

# Ideal soft symbols (0 or 255) for every register value.
_EXPECTED = np.array(
    [[255 * bit for bit in outputs] for outputs in _OUTPUTS], dtype=np.int32
)

# Predecessor states of every state, for a shifted-out bit of 0 and 1.
_PRED0 = np.arange(_STATES) >> 1
_PRED1 = _PRED0 | (_STATES >> 1)


class Viterbi:
    """Encoder and soft-decision decoder for the LRIT/HRIT convolutional code.

    Soft symbols are bytes where 0 is a confident 0 and 255 a confident 1.
    """

    ORDER = ORDER
    RATE = RATE
    POLYNOMIALS = POLYNOMIALS

    def encode_length(self, length: int) -> int:
        """Number of encoded bits produced for a message of ``length`` bytes."""
        return RATE * (8 * length + ORDER + 1)

    @staticmethod
    def _input_bits(msg: bytes) -> Iterator[int]:
        for byte in msg:
            for shift in range(7, -1, -1):
                yield (byte >> shift) & 1
        # Flush the shift register with zeros.
        yield from repeat(0, ORDER + 1)

    def encode(self, msg) -> bytes:
        """Encode ``msg``; the result is zero-padded to a whole number of bytes."""
        msg = bytes(msg)
        register = 0
        bits = []
        for bit in self._input_bits(msg):
            register = ((register << 1) | bit) & _REGISTER_MASK
            bits.extend(_OUTPUTS[register])
        return np.packbits(np.array(bits, dtype=np.uint8)).tobytes()

    def decode_soft(self, encoded, bits: int) -> bytes:
        """Decode the first ``bits`` soft symbols of ``encoded``.

        Returns ``bits / 2`` decoded bits packed into bytes, most significant first.
        """
        if bits % RATE:
            raise ValueError(f"number of encoded bits must be a multiple of {RATE}")
        symbols = np.frombuffer(bytes(encoded), dtype=np.uint8)
        if len(symbols) < bits:
            raise ValueError(f"need {bits} soft symbols, got {len(symbols)}")
        sets = bits // RATE
        if sets == 0:
            return b""

        soft = symbols[:bits].astype(np.int32).reshape(sets, RATE)
        costs = np.abs(soft[:, None, :] - _EXPECTED[None, :, :]).sum(axis=2)
        costs_from_low = costs[:, :_STATES]
        costs_from_high = costs[:, _STATES:]

        metric = np.full(_STATES, _UNREACHABLE, dtype=np.int64)
        metric[0] = 0
        decisions = np.empty((sets, _STATES), dtype=bool)
        for step in range(sets):
            from_low = metric[_PRED0] + costs_from_low[step]
            from_high = metric[_PRED1] + costs_from_high[step]
            choose_high = from_high < from_low
            decisions[step] = choose_high
            metric = np.where(choose_high, from_high, from_low)
            metric -= metric.min()

        state = int(np.argmin(metric))
        decoded = np.empty(sets, dtype=np.uint8)
        for step in range(sets - 1, -1, -1):
            decoded[step] = state & 1
            high = int(decisions[step, state])
            state = (state >> 1) | (high << (ORDER - 2))
        return np.packbits(decoded).tobytes()

    def compare_soft(self, original, msg) -> int:
        """Count soft symbols in ``original`` whose hard bit differs from re-encoded ``msg``."""
        msg = bytes(msg)
        bits = self.encode_length(len(msg))
        symbols = np.frombuffer(bytes(original), dtype=np.uint8)
        if len(symbols) < bits:
            raise ValueError(f"need {bits} soft symbols, got {len(symbols)}")
        recoded = np.unpackbits(np.frombuffer(self.encode(msg), dtype=np.uint8))[:bits]
        return int(np.count_nonzero((symbols[:bits] >> 7) != recoded))