"""
Bitmap encoders
Z64 (deflate + base64 + CRC) and the hex run-length
"Alternative Data Compression Scheme" (ACS)
"""

import base64
import logging
import re
import zlib

from zpl_crc16 import crc16

log = logging.getLogger(__name__)

Z64_PREFIX = ":Z64:"

HEXMAP = tuple(f"{i:02x}" for i in range(256))

# Repeat counts:
#      G   H   I   J   K   L   M   N   O   P   Q   R   S   T   U   V   W   X   Y
#      1   2   3   4   5   6   7   8   9  10  11  12  13  14  15  16  17  18  19
#
#      g   h   i   j   k   l   m   n   o   p   q   r   s   t   u   v   w   x   y   z
#     20  40  60  80 100 120 140 160 180 200 220 240 260 280 300 320 340 360 380 400
UNITS = "_GHIJKLMNOPQRSTUVWXY"
TWENTIES = "_ghijklmnopqrstuvwxy"
FOUR_HUNDRED = "z"

RUN_RE = re.compile(r"([0-9a-fA-F])\1{2,}")
TOKEN_RE = re.compile(r"([G-Yg-z]+)([0-9a-fA-F])")


def z64_encode(bitmap):
    """Deflate and base64 the bitmap bytes, then append the CRC of the base64 text"""
    b64 = base64.b64encode(zlib.compress(bitmap.data)).decode("ascii")
    log.debug("Z64: %d bytes -> %d base64 chars", len(bitmap.data), len(b64))
    return f"{Z64_PREFIX}{b64}:{crc16(b64)}"


def to_hex(data):
    return "".join(HEXMAP[b] for b in data)


def repeat_count(length):
    """Run length as repeat-count characters"""
    out = FOUR_HUNDRED * (length // 400)
    length %= 400
    if length >= 20:
        out += TWENTIES[length // 20]
        length %= 20
    if length:
        out += UNITS[length]
    return out


def compress_hex(hex_data):
    """Collapse runs of 3 or more identical hex digits into count + digit"""
    parts = []
    offset = 0
    for match in RUN_RE.finditer(hex_data):
        parts.append(hex_data[offset:match.start()])
        parts.append(repeat_count(len(match.group(0))))
        parts.append(match.group(1))
        offset = match.end()
    parts.append(hex_data[offset:])
    return "".join(parts)


def _count_value(counts):
    total = 0
    for ch in counts:
        if ch == FOUR_HUNDRED:
            total += 400
        elif ch in TWENTIES:
            total += TWENTIES.index(ch) * 20
        else:
            total += UNITS.index(ch)
    return total


def expand_hex(acs):
    """Inverse of compress_hex"""
    return TOKEN_RE.sub(lambda m: m.group(2) * _count_value(m.group(1)), acs)


def acs_encode(bitmap):
    hex_data = to_hex(bitmap.data)
    acs = compress_hex(hex_data)
    log.debug("ACS: %d hex chars -> %d chars", len(hex_data), len(acs))
    return acs
