"""EMWIN files assembled from QBT packets."""

from typing import Dict, List, Optional, Sequence

from .qbt import Packet

_ZIP_END_SIGNATURE = b"PK\x05\x06"
_ZIP_END_RECORD = 22


class File:
    """A complete EMWIN file made of consecutive QBT packets."""

    def __init__(self, packets: Sequence[Packet]) -> None:
        if not packets:
            raise ValueError("no packets")
        self.packets: List[Packet] = list(packets)

    def filename(self) -> str:
        return self.packets[0].filename()

    def extension(self) -> str:
        name = self.filename()
        return name[name.find(".") + 1:].lower()

    def data(self) -> bytes:
        """Concatenated payloads, with the padding of the last packet removed."""
        out = b"".join(packet.payload() for packet in self.packets)
        if self.extension() == "zis":
            # Cut after the end-of-central-directory record of the ZIP archive.
            end = out.rfind(_ZIP_END_SIGNATURE, 0, len(out) - _ZIP_END_RECORD + 4)
            return out[: end + _ZIP_END_RECORD]
        return out.rstrip(b"\x00")


class Assembler:
    """Collects QBT packets per file name until a file is complete."""

    def __init__(self) -> None:
        self._pending: Dict[str, List[Packet]] = {}

    def process(self, packet: Packet) -> Optional[File]:
        name = packet.filename()
        packets = self._pending.setdefault(name, [])

        previous = packets[-1].packet_number() if packets else 0
        # Anything but the direct successor breaks the file.
        if packet.packet_number() != previous + 1:
            packets.clear()
            return None

        packets.append(packet)
        if len(packets) == packet.packet_total():
            del self._pending[name]
            return File(packets)
        return None