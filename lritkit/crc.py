"""CRC-16 used by LRIT transport packets (CCITT polynomial, initial value 0xFFFF)."""

_POLYNOMIAL = 0x1021
_INITIAL = 0xFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for index in range(256):
        value = index << 8
        for _ in range(8):
            if value & 0x8000:
                value = (value << 1) ^ _POLYNOMIAL
            else:
                value <<= 1
            value &= 0xFFFF
        table.append(value)
    return tuple(table)


_TABLE = _build_table()


def crc(data) -> int:
    """Return the 16-bit CRC of a bytes-like object."""
    value = _INITIAL
    for byte in bytes(data):
        value = ((value << 8) & 0xFFFF) ^ _TABLE[(value >> 8) ^ byte]
    return value