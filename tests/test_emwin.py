import pytest

from lritkit.emwin import Assembler, File
from lritkit.qbt import Packet


def make_packet(name=b"ZFOOBARX.TXT", number=1, total=1, payload=b""):
    header = (
        b"\x00" * 6
        + b"/PF" + name.ljust(12)
        + b"/PN" + f"{number:06d}".encode()
        + b"/PT" + f"{total:06d}".encode()
        + b"/CS"
    ).ljust(86, b" ")
    return Packet(header + payload.ljust(1024, b"\x00") + b"\r\n\r\n\r\n")


def test_file_requires_packets():
    with pytest.raises(ValueError):
        File([])


def test_filename_and_extension():
    file = File([make_packet(name=b"ZFOOBARX.TXT")])
    assert file.filename() == "ZFOOBARX.TXT"
    assert file.extension() == "txt"


def test_data_trims_trailing_nuls():
    file = File([make_packet(number=1, total=2, payload=b"A" * 1024),
                 make_packet(number=2, total=2, payload=b"hello")])
    assert file.data() == b"A" * 1024 + b"hello"


def test_zis_data_ends_after_zip_record():
    record = b"PK\x05\x06" + b"\x01" * 18
    payload = b"PK\x03\x04body" + record + b"\x07" * 10
    file = File([make_packet(name=b"ZFOOBARX.ZIS", payload=payload)])
    data = file.data()
    assert data.endswith(record)
    assert data == payload[: payload.index(record) + len(record)]


def test_assembler_completes_file():
    assembler = Assembler()
    first = make_packet(number=1, total=2, payload=b"one")
    second = make_packet(number=2, total=2, payload=b"two")
    assert assembler.process(first) is None
    file = assembler.process(second)
    assert [p.packet_number() for p in file.packets] == [1, 2]


def test_assembler_single_packet_file():
    assembler = Assembler()
    file = assembler.process(make_packet(number=1, total=1, payload=b"x"))
    assert file.data().startswith(b"x")


def test_assembler_out_of_order_resets():
    assembler = Assembler()
    assert assembler.process(make_packet(number=1, total=3)) is None
    assert assembler.process(make_packet(number=3, total=3)) is None
    # The pending file was discarded, so packet 2 is no longer a successor.
    assert assembler.process(make_packet(number=2, total=3)) is None
    assert assembler.process(make_packet(number=1, total=1)) is None


def test_assembler_keeps_files_apart():
    assembler = Assembler()
    assert assembler.process(make_packet(name=b"AAAAAAAA.TXT", number=1, total=2)) is None
    assert assembler.process(make_packet(name=b"BBBBBBBB.TXT", number=1, total=2)) is None
    file = assembler.process(make_packet(name=b"AAAAAAAA.TXT", number=2, total=2))
    assert file.filename() == "AAAAAAAA.TXT"