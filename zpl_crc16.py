"""
CRC-16 checksum for Z64 graphic data
Zero-seeded CCITT table variant expected by the printer firmware
"""

from zpl_errors import InvalidCharacter

CCITT_POLY = 0x1021

# Starting value of the checksum. The usual CCITT form seeds with 0xFFFF and
# inverts; the firmware wants neither.
ZEBRA_CRC_SEED = 0x0000


def _build_table(poly):
    table = []
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ poly
            else:
                crc = crc << 1
        table.append(crc & 0xFFFF)
    return tuple(table)


CRC_TABLE = _build_table(CCITT_POLY)


def crc16(text):
    """
    Checksum a string of Latin-1 characters

    Args:
        text: ASCII/Latin-1 string (the base64 text of a Z64 block)

    Returns:
        4 lowercase hex digits

    Raises:
        InvalidCharacter: if any character code is above 255
    """
    crc = ZEBRA_CRC_SEED
    for pos, ch in enumerate(text):
        c = ord(ch)
        if c > 255:
            raise InvalidCharacter(f"Character {ch!r} at {pos} is not Latin-1")
        j = (c ^ (crc >> 8)) & 0xFF
        crc = (CRC_TABLE[j] ^ (crc << 8)) & 0xFFFF
    return f"{crc:04x}"
