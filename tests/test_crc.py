import pytest

from lritkit.crc import crc


def test_empty_input_yields_initial_value():
    assert crc(b"") == 0xFFFF


def test_standard_check_value():
    assert crc(b"123456789") == 0x29B1


@pytest.mark.parametrize(
    "payload",
    [b"\x00", b"hello world", bytes(range(256)), b"\xff" * 100],
)
def test_appending_crc_gives_zero_residue(payload):
    value = crc(payload)
    assert crc(payload + value.to_bytes(2, "big")) == 0


def test_accepts_any_bytes_like():
    payload = b"satellite downlink"
    expected = crc(payload)
    assert crc(bytearray(payload)) == expected
    assert crc(memoryview(payload)) == expected


def test_result_fits_sixteen_bits():
    for size in range(0, 64, 7):
        assert 0 <= crc(bytes(range(size))) <= 0xFFFF