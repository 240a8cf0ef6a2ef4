"""Frame synchronisation and decoding of a soft-symbol stream into VCDUs."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO, Iterator, Optional, Tuple

from .correlator import CorrelationType, correlate
from .derandomizer import Derandomizer
from .reed_solomon import ReedSolomon, ReedSolomonError
from .viterbi import Viterbi

logger = logging.getLogger(__name__)

FRAME_BITS = 8192
SYNC_WORD_BITS = 32
FRAME_PRELUDE_BITS = 32

# The convolutional code has rate 1/2, so every bit becomes two symbols.
ENCODED_FRAME_BITS = 2 * FRAME_BITS
ENCODED_SYNC_WORD_BITS = 2 * SYNC_WORD_BITS
ENCODED_FRAME_PRELUDE_BITS = 2 * FRAME_PRELUDE_BITS

FRAME_BYTES = FRAME_BITS // 8
SYNC_WORD_BYTES = SYNC_WORD_BITS // 8
FRAME_PRELUDE_BYTES = FRAME_PRELUDE_BITS // 8

# A frame prelude is kept in front of every frame so the Viterbi decoder
# has symbols to warm up on; the decoded prelude is discarded.
BUFFER_SYMBOLS = ENCODED_FRAME_PRELUDE_BITS + ENCODED_FRAME_BITS + ENCODED_SYNC_WORD_BITS
_TAIL_SYMBOLS = ENCODED_FRAME_PRELUDE_BITS + ENCODED_SYNC_WORD_BITS
_DECODE_SYMBOLS = ENCODED_FRAME_PRELUDE_BITS + ENCODED_FRAME_BITS

LRIT_SYMBOL_RATE = 293883
HRIT_SYMBOL_RATE = 927000

_LRIT_TYPES = (CorrelationType.LRIT_PHASE_000, CorrelationType.LRIT_PHASE_180)
_HRIT_TYPES = (CorrelationType.HRIT_PHASE_000, CorrelationType.HRIT_PHASE_180)


@dataclass(frozen=True)
class Details:
    """What happened while extracting one frame."""

    symbol_pos: int
    skipped_symbols: int
    viterbi_bits: int
    reed_solomon_bytes: int
    ok: bool
    relative_time: timedelta
    correlation_type: CorrelationType


class Packetizer:
    """Turns a stream of soft symbols (one byte each) into 892-byte VCDUs.

    ``reader`` is any object with a binary ``read(n)`` method.
    """

    def __init__(self, reader: BinaryIO) -> None:
        self._reader = reader
        self._viterbi = Viterbi()
        self._derandomizer = Derandomizer()
        self._reed_solomon = ReedSolomon()
        self._buf = bytearray()
        self._lock = False
        self._sync_type = CorrelationType.LRIT_PHASE_000
        self._symbol_rate = LRIT_SYMBOL_RATE
        self._symbol_pos = 0

    def _fill(self) -> bool:
        """Fill the buffer; False at end of stream."""
        needed = BUFFER_SYMBOLS - len(self._buf)
        chunk = bytearray()
        while len(chunk) < needed:
            data = self._reader.read(needed - len(chunk))
            if not data:
                break
            chunk += data
        if not chunk:
            return False
        if len(chunk) < needed:
            raise EOFError(f"symbol stream ended {needed - len(chunk)} symbols short of a frame")
        self._buf += chunk
        self._symbol_pos += needed
        return True

    def _check_phase(self) -> None:
        # With a lock on LRIT, only the sync word is correlated, to catch
        # phase flips quickly without letting frame data steal the lock.
        previous = self._sync_type
        start = ENCODED_FRAME_PRELUDE_BITS
        window = bytes(self._buf[start:start + ENCODED_SYNC_WORD_BITS])
        self._sync_type = correlate(window).type
        if self._sync_type != previous:
            logger.warning("Phase flip detected from %s to %s", previous, self._sync_type)

    def _acquire(self) -> Optional[int]:
        """Align the buffer on a sync word; returns symbols skipped or None at end."""
        skipped = 0
        while True:
            found = correlate(bytes(self._buf[ENCODED_FRAME_PRELUDE_BITS:]))
            self._sync_type = found.type
            if found.position in (0, ENCODED_FRAME_BITS):
                break
            skipped += found.position
            # The position is relative to the prelude, so the prelude is kept.
            del self._buf[:found.position]
            if not self._fill():
                return None
        self._symbol_rate = HRIT_SYMBOL_RATE if self._sync_type in _HRIT_TYPES else LRIT_SYMBOL_RATE
        return skipped

    def next_packet(self) -> Optional[Tuple[Optional[bytes], Details]]:
        """Decode the next frame.

        Returns ``(packet, details)``, where ``packet`` is None when the frame
        could not be corrected, or None when the stream has ended.
        """
        if not self._fill():
            return None

        if self._lock and self._sync_type in _LRIT_TYPES:
            self._check_phase()

        skipped = 0
        if not self._lock:
            acquired = self._acquire()
            if acquired is None:
                return None
            skipped = acquired

        symbols = bytes(self._buf)
        decoded = self._viterbi.decode_soft(symbols, _DECODE_SYMBOLS)
        viterbi_bits = self._viterbi.compare_soft(symbols, decoded)

        # The tail becomes the prelude and sync word of the next frame.
        self._buf = bytearray(self._buf[-_TAIL_SYMBOLS:])

        value = int.from_bytes(decoded, "big")
        nbits = 8 * len(decoded)
        if self._sync_type == CorrelationType.LRIT_PHASE_180:
            value ^= (1 << nbits) - 1
        elif self._sync_type in _HRIT_TYPES:
            # NRZ-M decoding: in[i] = o[i] ^ o[i-1].
            value ^= value >> 1
        frame = value.to_bytes(len(decoded), "big")[FRAME_PRELUDE_BYTES + SYNC_WORD_BYTES:]

        frame = self._derandomizer.run(frame)
        try:
            packet, corrected = self._reed_solomon.run(frame)
        except ReedSolomonError:
            packet, corrected = None, -1
        self._lock = corrected >= 0

        pos = self._symbol_pos - (ENCODED_FRAME_BITS + ENCODED_SYNC_WORD_BITS)
        rate = self._symbol_rate
        relative_time = timedelta(
            seconds=pos // rate, microseconds=(pos % rate) * 1_000_000 // rate
        )
        details = Details(
            symbol_pos=pos,
            skipped_symbols=skipped,
            viterbi_bits=viterbi_bits,
            reed_solomon_bytes=corrected,
            ok=self._lock,
            relative_time=relative_time,
            correlation_type=self._sync_type,
        )
        return packet, details

    def __iter__(self) -> Iterator[Tuple[Optional[bytes], Details]]:
        while (result := self.next_packet()) is not None:
            yield result