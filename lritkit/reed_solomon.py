"""CCSDS Reed-Solomon (255,223) with interleaving depth 4 and dual-basis symbols."""

import numpy as np

PRIMITIVE_POLYNOMIAL = 0x187
FIRST_CONSECUTIVE_ROOT = 112
ROOT_GAP = 11
NUM_ROOTS = 32
BLOCK_LENGTH = 255
MESSAGE_LENGTH = BLOCK_LENGTH - NUM_ROOTS
INTERLEAVING = 4
FRAME_BYTES = BLOCK_LENGTH * INTERLEAVING
DATA_BYTES = MESSAGE_LENGTH * INTERLEAVING

_ORDER = 255
_MAX_ERRORS = NUM_ROOTS // 2

# Column-by-column representation of the conventional-to-dual basis transform.
_DUAL_BASIS = (
    0b11111110,
    0b01101001,
    0b01101011,
    0b00001101,
    0b11101111,
    0b11110010,
    0b01011011,
    0b11000111,
)


class ReedSolomonError(ValueError):
    """Raised when a block has more errors than the code can correct."""


def _build_field():
    exp = [0] * (2 * _ORDER)
    log = [0] * 256
    value = 1
    for power in range(_ORDER):
        exp[power] = value
        log[value] = power
        value <<= 1
        if value & 0x100:
            value ^= PRIMITIVE_POLYNOMIAL
    for power in range(_ORDER, 2 * _ORDER):
        exp[power] = exp[power - _ORDER]
    return exp, log


_EXP, _LOG = _build_field()
_EXP_NP = np.array(_EXP[:_ORDER], dtype=np.uint8)
_LOG_NP = np.array(_LOG, dtype=np.int64)


def _mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _EXP[_LOG[a] + _LOG[b]]


def _div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("division by zero in GF(256)")
    if a == 0:
        return 0
    return _EXP[(_LOG[a] - _LOG[b]) % _ORDER]


def _evaluate(poly, x: int) -> int:
    """Evaluate a polynomial given lowest degree first."""
    value = 0
    for coefficient in reversed(poly):
        value = _mul(value, x) ^ coefficient
    return value


_ROOT_LOGS = [(ROOT_GAP * (FIRST_CONSECUTIVE_ROOT + i)) % _ORDER for i in range(NUM_ROOTS)]


def _build_generator():
    generator = [1]  # highest degree first
    for root_log in _ROOT_LOGS:
        root = _EXP[root_log]
        extended = generator + [0]
        for index in range(1, len(extended)):
            extended[index] ^= _mul(generator[index - 1], root)
        generator = extended
    return generator


_GENERATOR = _build_generator()

# Exponent (base alpha) of root i raised to the degree of byte position p.
_DEGREES = np.arange(BLOCK_LENGTH - 1, -1, -1, dtype=np.int64)
_SYNDROME_EXPONENTS = np.outer(np.array(_ROOT_LOGS, dtype=np.int64), _DEGREES) % _ORDER


def _syndromes(block) -> list:
    symbols = np.frombuffer(bytes(block), dtype=np.uint8)
    nonzero = symbols != 0
    if not nonzero.any():
        return [0] * NUM_ROOTS
    logs = _LOG_NP[symbols[nonzero]]
    exponents = (_SYNDROME_EXPONENTS[:, nonzero] + logs) % _ORDER
    return [int(v) for v in np.bitwise_xor.reduce(_EXP_NP[exponents], axis=1)]


def _berlekamp_massey(syndromes):
    locator = [1]
    previous = [1]
    length = 0
    shift = 1
    last_discrepancy = 1
    for n, syndrome in enumerate(syndromes):
        discrepancy = syndrome
        for i in range(1, min(length, len(locator) - 1) + 1):
            discrepancy ^= _mul(locator[i], syndromes[n - i])
        if discrepancy == 0:
            shift += 1
            continue
        coefficient = _div(discrepancy, last_discrepancy)
        updated = locator + [0] * max(0, len(previous) + shift - len(locator))
        for i, term in enumerate(previous):
            updated[i + shift] ^= _mul(coefficient, term)
        if 2 * length <= n:
            previous = locator
            length = n + 1 - length
            last_discrepancy = discrepancy
            shift = 1
        else:
            shift += 1
        locator = updated
    while len(locator) > 1 and locator[-1] == 0:
        locator.pop()
    return locator, length


def _decode_block(block: bytes) -> bytes:
    syndromes = _syndromes(block)
    if not any(syndromes):
        return bytes(block)

    locator, errors = _berlekamp_massey(syndromes)
    if errors > _MAX_ERRORS or len(locator) - 1 != errors:
        raise ReedSolomonError("block is not correctable")

    degrees = [
        degree
        for degree in range(BLOCK_LENGTH)
        if _evaluate(locator, _EXP[(-ROOT_GAP * degree) % _ORDER]) == 0
    ]
    if len(degrees) != errors:
        raise ReedSolomonError("block is not correctable")

    evaluator = [0] * NUM_ROOTS
    for i, term in enumerate(locator):
        for j, syndrome in enumerate(syndromes):
            if i + j < NUM_ROOTS:
                evaluator[i + j] ^= _mul(term, syndrome)
    derivative = [term if i % 2 else 0 for i, term in enumerate(locator)][1:]

    corrected = bytearray(block)
    for degree in degrees:
        x_log = (ROOT_GAP * degree) % _ORDER
        x_inverse = _EXP[(-x_log) % _ORDER]
        denominator = _evaluate(derivative, x_inverse)
        if denominator == 0:
            raise ReedSolomonError("block is not correctable")
        scale = _EXP[(x_log * (1 - FIRST_CONSECUTIVE_ROOT)) % _ORDER]
        magnitude = _mul(scale, _div(_evaluate(evaluator, x_inverse), denominator))
        corrected[BLOCK_LENGTH - 1 - degree] ^= magnitude

    if any(_syndromes(corrected)):
        raise ReedSolomonError("block is not correctable")
    return bytes(corrected)


def _encode_block(message: bytes) -> bytes:
    remainder = [0] * NUM_ROOTS
    for byte in message:
        feedback = byte ^ remainder[0]
        remainder = remainder[1:] + [0]
        if feedback:
            for k in range(NUM_ROOTS):
                remainder[k] ^= _mul(feedback, _GENERATOR[k + 1])
    return bytes(message) + bytes(remainder)


def _build_dual_tables():
    conv_to_dual = bytearray(256)
    dual_to_conv = bytearray(256)
    for symbol in range(256):
        value = 0
        for column, basis in enumerate(_DUAL_BASIS):
            value |= ((symbol & basis).bit_count() & 1) << (7 - column)
        conv_to_dual[symbol] = value
        dual_to_conv[value] = symbol
    return bytes(conv_to_dual), bytes(dual_to_conv)


class ReedSolomon:
    """Decoder and encoder for interleaved CCSDS Reed-Solomon frames."""

    FRAME_BYTES = FRAME_BYTES
    DATA_BYTES = DATA_BYTES

    def __init__(self) -> None:
        self._conv_to_dual, self._dual_to_conv = _build_dual_tables()

    def run(self, data) -> tuple:
        """Correct a 1020-byte frame.

        Returns the 892 data bytes and the number of corrected data bytes.
        Raises ReedSolomonError if any block cannot be corrected.
        """
        data = bytes(data)
        if len(data) != FRAME_BYTES:
            raise ValueError(f"expected {FRAME_BYTES} bytes, got {len(data)}")
        out = bytearray(DATA_BYTES)
        corrected = 0
        for lane in range(INTERLEAVING):
            block = data[lane::INTERLEAVING].translate(self._dual_to_conv)
            decoded = _decode_block(block)
            corrected += sum(
                a != b for a, b in zip(block[:MESSAGE_LENGTH], decoded[:MESSAGE_LENGTH])
            )
            out[lane::INTERLEAVING] = decoded[:MESSAGE_LENGTH].translate(self._conv_to_dual)
        return bytes(out), corrected

    def encode(self, data) -> bytes:
        """Encode 892 data bytes into an interleaved 1020-byte frame."""
        data = bytes(data)
        if len(data) != DATA_BYTES:
            raise ValueError(f"expected {DATA_BYTES} bytes, got {len(data)}")
        out = bytearray(FRAME_BYTES)
        for lane in range(INTERLEAVING):
            message = data[lane::INTERLEAVING].translate(self._dual_to_conv)
            out[lane::INTERLEAVING] = _encode_block(message).translate(self._conv_to_dual)
        return bytes(out)