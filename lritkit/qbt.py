"""QBT packets carried in EMWIN-over-LRIT fragments."""

import re
from typing import List, Optional

FRAGMENT_SIZE = 836
PACKET_SIZE = 1116
COUNTER_MODULUS = 1 << 16

_PAYLOAD_START = 86
_PAYLOAD_END = 1110
_UNSIGNED = re.compile(rb"\s*\+?(\d+)")

# Byte values that every packet prefix holds at fixed offsets.
_PREFIX_CHECKS = (
    *((offset, 0x00) for offset in range(6)),
    (6, ord("/")), (7, ord("P")), (8, ord("F")),
    (21, ord("/")), (22, ord("P")), (23, ord("N")),
    (30, ord("/")), (31, ord("P")), (32, ord("T")),
    (39, ord("/")), (40, ord("C")), (41, ord("S")),
)


def diff_with_wrap(a: int, b: int, n: int) -> int:
    """Distance from counter ``a`` forward to counter ``b`` modulo ``n``."""
    if not 0 <= a < n or not 0 <= b < n:
        raise ValueError(f"counters must lie in [0, {n}), got {a} and {b}")
    return b - a if a <= b else n - a + b


def is_packet_prefix(buf, pos: int = 0) -> bool:
    """True if a packet prefix may start at ``pos``; bytes past the end are not checked."""
    end = len(buf)
    for offset, value in _PREFIX_CHECKS:
        index = pos + offset
        if index < end and buf[index] != value:
            return False
    return True


def _unsigned(field: bytes, name: str) -> int:
    match = _UNSIGNED.match(field)
    if match is None:
        raise ValueError(f"invalid {name}: {field!r}")
    return int(match.group(1))


class Fragment:
    """Data portion of one EMWIN S_PDU together with its counter."""

    __slots__ = ("counter", "data")

    def __init__(self, counter: int, data) -> None:
        data = bytes(data)
        if len(data) > FRAGMENT_SIZE:
            raise ValueError(f"fragment holds at most {FRAGMENT_SIZE} bytes, got {len(data)}")
        self.counter = counter & 0xFFFF
        self.data = data.ljust(FRAGMENT_SIZE, b"\x00")


class Packet:
    """A 1116-byte QBT packet."""

    __slots__ = ("data",)

    def __init__(self, data) -> None:
        data = bytes(data)
        if len(data) != PACKET_SIZE:
            raise ValueError(f"packet must be {PACKET_SIZE} bytes, got {len(data)}")
        self.data = data

    def filename(self) -> str:
        """Product file name, cut three characters after the first dot."""
        text = self.data[9:21].decode("latin-1")
        dot = text.find(".")
        # Without a dot only the first three characters remain.
        return text[: dot + 4] if dot >= 0 else text[:3]

    def packet_number(self) -> int:
        return _unsigned(self.data[24:30], "packet number")

    def packet_total(self) -> int:
        return _unsigned(self.data[33:39], "packet total")

    def payload(self) -> bytes:
        return self.data[_PAYLOAD_START:_PAYLOAD_END]


class Assembler:
    """Joins fragments into QBT packets.

    A fragment holds 836 bytes and a packet 1116, so each fragment
    carries part of one or two packets.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._tmp = bytearray()

    def process(self, fragment: Fragment) -> Optional[Packet]:
        skip = diff_with_wrap(self._counter, fragment.counter, COUNTER_MODULUS)
        self._counter = fragment.counter

        # A gap means the pending packet cannot be completed.
        if skip > 1:
            self._tmp.clear()

        self._tmp += fragment.data

        tmp = self._tmp
        start = next((i for i in range(len(tmp)) if is_packet_prefix(tmp, i)), len(tmp))
        del tmp[:start]

        if len(tmp) >= PACKET_SIZE:
            packet = Packet(tmp[:PACKET_SIZE])
            del tmp[:PACKET_SIZE]
            return packet
        return None


def split_fragments(data, first_counter: int = 1) -> List[Fragment]:
    """Cut ``data`` into consecutive fragments starting at ``first_counter``."""
    data = bytes(data)
    return [
        Fragment((first_counter + index) % COUNTER_MODULUS, data[start:start + FRAGMENT_SIZE])
        for index, start in enumerate(range(0, len(data), FRAGMENT_SIZE))
    ]