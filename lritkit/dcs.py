"""Parsing of Data Collection System (DCS) files carried over LRIT."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator

_DECIMAL = re.compile(rb"\s*[+-]?\d+")
_HEX = re.compile(rb"\s*([0-9A-Fa-f]+)")

# Two 14-character timestamps, a space, and a 4-byte prelude follow each payload.
_TRAILER_BYTES = 14 + 1 + 14 + 4


class DCSFormatError(ValueError):
    """Raised when DCS data is malformed or truncated."""


def _decimal(field: bytes, name: str) -> int:
    match = _DECIMAL.match(field)
    if match is None:
        raise DCSFormatError(f"invalid {name}: {field!r}")
    return int(match.group().decode("ascii"))


def _hexadecimal(field: bytes, name: str) -> int:
    match = _HEX.match(field)
    if match is None:
        raise DCSFormatError(f"invalid {name}: {field!r}")
    return int(match.group(1).decode("ascii"), 16)


def _require(buf, size: int, what: str) -> bytes:
    if len(buf) < size:
        raise DCSFormatError(f"{what} needs {size} bytes, got {len(buf)}")
    return bytes(buf[:size])


@dataclass(frozen=True)
class FileHeader:
    """Header at the beginning of an LRIT DCS file."""

    name: str
    length: int
    misc1: str
    misc2: bytes

    SIZE = 68

    @classmethod
    def read_from(cls, buf) -> "FileHeader":
        raw = _require(buf, cls.SIZE, "DCS file header")
        return cls(
            name=raw[0:32].decode("latin-1"),
            length=_decimal(raw[32:40], "file length"),
            misc1=raw[40:60].decode("latin-1"),
            misc2=raw[60:68],
        )


@dataclass(frozen=True)
class Header:
    """Header of a single DCS message."""

    address: int
    time: datetime
    failure: str
    signal_strength: int
    frequency_offset: int
    modulation_index: str
    data_quality: str
    receive_channel: int
    spacecraft: str
    data_source_code: str
    data_length: int

    SIZE = 37

    @classmethod
    def read_from(cls, buf) -> "Header":
        raw = _require(buf, cls.SIZE, "DCS message header")

        year = _decimal(raw[8:10], "year")
        day = _decimal(raw[10:13], "day of year")
        hour = _decimal(raw[13:15], "hour")
        minute = _decimal(raw[15:17], "minute")
        second = _decimal(raw[17:19], "second")
        try:
            received = datetime(2000 + year, 1, 1, tzinfo=timezone.utc) + timedelta(
                days=day - 1, hours=hour, minutes=minute, seconds=second
            )
        except (ValueError, OverflowError) as exc:
            raise DCSFormatError(f"invalid receive time: {raw[8:19]!r}") from exc

        # The offset can read "+A" or "-A", whose meaning is unknown.
        if raw[22:23] in (b"+", b"-") and raw[23:24] == b"A":
            frequency_offset = 0
        else:
            frequency_offset = _decimal(raw[22:24], "frequency offset")

        return cls(
            address=_hexadecimal(raw[0:8], "address"),
            time=received,
            failure=chr(raw[19]),
            signal_strength=_decimal(raw[20:22], "signal strength"),
            frequency_offset=frequency_offset,
            modulation_index=chr(raw[24]),
            data_quality=chr(raw[25]),
            receive_channel=_decimal(raw[26:29], "receive channel"),
            spacecraft=chr(raw[29]),
            data_source_code=raw[30:32].decode("latin-1"),
            data_length=_decimal(raw[32:37], "data length"),
        )


def iter_headers(buf) -> Iterator[Header]:
    """Yield the message headers of a DCS file's data section."""
    buf = bytes(buf)
    FileHeader.read_from(buf)
    pos = FileHeader.SIZE
    while pos < len(buf):
        header = Header.read_from(buf[pos:])
        yield header
        pos += Header.SIZE + header.data_length + _TRAILER_BYTES
    if pos != len(buf):
        raise DCSFormatError(f"DCS data ends at {pos}, buffer holds {len(buf)} bytes")