"""Transport protocol data unit (CCSDS source packet) assembly."""

from .crc import crc as compute_crc

HEADER_BYTES = 6
DATA_BYTES = 8192


class TransportPDU:
    """A source packet that is filled incrementally from M_PDU data zones."""

    HEADER_BYTES = HEADER_BYTES
    DATA_BYTES = DATA_BYTES

    def __init__(self) -> None:
        self.header = bytearray()
        self.data = bytearray()

    def read(self, data) -> int:
        """Consume bytes into the header and then the user data.

        Returns the number of bytes consumed from ``data``.
        """
        chunk_source = bytes(data)
        nread = 0

        missing_header = HEADER_BYTES - len(self.header)
        if missing_header > 0:
            chunk = chunk_source[:missing_header]
            self.header += chunk
            nread += len(chunk)

        if nread < len(chunk_source):
            missing_data = self.length() - len(self.data)
            if missing_data > 0:
                chunk = chunk_source[nread:nread + missing_data]
                self.data += chunk
                nread += len(chunk)

        return nread

    def header_complete(self) -> bool:
        return len(self.header) == HEADER_BYTES

    def data_complete(self) -> bool:
        return self.header_complete() and len(self.data) == self.length()

    # Packet identification

    def version(self) -> int:
        return (self.header[0] >> 5) & 0x7

    def type(self) -> int:
        return (self.header[0] >> 4) & 0x1

    def secondary_header_flag(self) -> int:
        return (self.header[0] >> 3) & 0x1

    def apid(self) -> int:
        return ((self.header[0] & 0x7) << 8) | self.header[1]

    # Packet sequence control

    def sequence_flag(self) -> int:
        return (self.header[2] >> 6) & 0x3

    def sequence_count(self) -> int:
        return ((self.header[2] & 0x3F) << 8) | self.header[3]

    def length(self) -> int:
        """Length of the user data in bytes (the header field plus one)."""
        return (((self.header[4] << 8) | self.header[5]) + 1) & 0xFFFF

    def crc(self) -> int:
        """CRC stored in the last two bytes of the user data."""
        end = self.length()
        return (self.data[end - 2] << 8) | self.data[end - 1]

    def verify_crc(self) -> bool:
        length = self.length()
        if length < 2:
            return False
        return compute_crc(self.data[:length - 2]) == self.crc()