import base64
import zlib

import pytest

from zpl_crc16 import crc16
from zpl_encode import (
    HEXMAP, acs_encode, compress_hex, expand_hex, repeat_count, to_hex, z64_encode,
)
from zpl_rotate import Bitmap


def test_hexmap():
    assert isinstance(HEXMAP, tuple)
    assert HEXMAP[0] == "00"
    assert HEXMAP[10] == "0a"
    assert HEXMAP[255] == "ff"


def test_to_hex():
    assert to_hex(b"\x00\x0f\xf0\xff") == "000ff0ff"
    assert to_hex(b"") == ""


@pytest.mark.parametrize("length,count", [
    (1, "G"), (3, "I"), (19, "Y"), (20, "g"), (21, "gG"), (40, "h"),
    (399, "yY"), (400, "z"), (401, "zG"), (420, "zg"), (800, "zz"), (845, "zzhK"),
])
def test_repeat_count(length, count):
    assert repeat_count(length) == count


@pytest.mark.parametrize("hex_data,acs", [
    ("", ""),
    ("00", "00"),
    ("000", "I0"),
    ("0" * 19, "Y0"),
    ("0" * 20, "g0"),
    ("0" * 21, "gG0"),
    ("0" * 399, "yY0"),
    ("0" * 400, "z0"),
    ("0" * 401, "zG0"),
    ("12fff3", "12If3"),
    ("ab" + "0" * 25 + "cd", "abgK0cd"),
    ("ffff0000", "JfJ0"),
    ("a1b2c3", "a1b2c3"),
])
def test_compress_hex(hex_data, acs):
    assert compress_hex(hex_data) == acs


@pytest.mark.parametrize("run", [0, 2, 3, 19, 20, 399, 400, 401])
def test_expand_reverses_compress(run):
    hex_data = "a" + "5" * run + "b" + "f" * run + "0e"
    assert expand_hex(compress_hex(hex_data)) == hex_data


def test_z64_encode():
    data = bytes(range(256)) * 3
    token = z64_encode(Bitmap(data, 64, len(data) // 8))
    assert token.startswith(":Z64:")
    b64, crc = token[len(":Z64:"):].rsplit(":", 1)
    assert crc == crc16(b64)
    assert zlib.decompress(base64.b64decode(b64)) == data


def test_z64_encode_empty():
    token = z64_encode(Bitmap(b"", 0, 0))
    b64, crc = token[len(":Z64:"):].rsplit(":", 1)
    assert zlib.decompress(base64.b64decode(b64)) == b""
    assert crc == crc16(b64)


def test_acs_encode():
    assert acs_encode(Bitmap(b"\x00" * 10, 16, 5)) == "g0"
    assert acs_encode(Bitmap(b"\xf0", 8, 1)) == "f0"
    assert acs_encode(Bitmap(b"", 0, 0)) == ""
