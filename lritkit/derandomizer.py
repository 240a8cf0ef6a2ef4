"""CCSDS pseudo-random sequence removal."""

FRAME_BYTES = 1020


def _build_table(size: int) -> bytes:
    # Sequence generated by h(x) = x^8 + x^7 + x^5 + x^3 + 1, seeded with all ones.
    lfsr = 0xFF
    table = bytearray(size)
    for index in range(size):
        value = 0
        for _ in range(8):
            value = (value << 1) | (lfsr & 0x1)
            bit = ((lfsr >> 7) ^ (lfsr >> 5) ^ (lfsr >> 3) ^ lfsr) & 0x1
            lfsr = (lfsr >> 1) | (bit << 7)
        table[index] = value
    return bytes(table)


class Derandomizer:
    """XORs a frame with the CCSDS pseudo-random sequence."""

    SIZE = FRAME_BYTES

    def __init__(self) -> None:
        self.table = _build_table(FRAME_BYTES)
        self._table_int = int.from_bytes(self.table, "big")

    def run(self, data) -> bytes:
        """Return ``data`` (exactly 1020 bytes) with the sequence removed."""
        if len(data) != FRAME_BYTES:
            raise ValueError(f"expected {FRAME_BYTES} bytes, got {len(data)}")
        value = int.from_bytes(bytes(data), "big") ^ self._table_int
        return value.to_bytes(FRAME_BYTES, "big")