"""
Rotate a monochrome mask while packing it into bitmap bytes
8 pixels per byte, MSB = leftmost pixel, each row padded to a byte boundary
"""

from typing import NamedTuple

from zpl_monochrome import Mask

ROTATE_NONE = "N"
ROTATE_LEFT = "L"
ROTATE_RIGHT = "R"
ROTATE_INVERT = "I"


class Bitmap(NamedTuple):
    data: bytes
    width: int
    height: int

    @property
    def row_stride(self):
        return (self.width + 7) // 8


def _pack_rows(pixels, width, height):
    # Row-major packing, a byte is flushed after 8 bits or at the end of a row
    buf = bytearray()
    byte = 0
    bitx = 0
    for px in pixels:
        byte |= px << (7 - (bitx & 7))
        bitx += 1
        if bitx == width or not bitx & 7:
            buf.append(byte)
            byte = 0
            if bitx == width:
                bitx = 0
    return Bitmap(bytes(buf), width, height)


def normal(mask):
    """No rotation"""
    return _pack_rows(mask.data, mask.width, mask.height)


def invert(mask):
    """Rotate 180 degrees"""
    return _pack_rows(reversed(mask.data), mask.width, mask.height)


def left(mask):
    """Rotate 90 degrees counter-clockwise"""
    width, height = mask.width, mask.height
    data = mask.data
    buf = bytearray()
    byte = 0
    for x in range(width - 1, -1, -1):
        bitx = 0
        for y in range(height):
            byte |= data[y * width + x] << (7 - (bitx & 7))
            bitx += 1
            if y == height - 1 or not bitx & 7:
                buf.append(byte)
                byte = 0
    return Bitmap(bytes(buf), height, width)


def right(mask):
    """Rotate 90 degrees clockwise"""
    width, height = mask.width, mask.height
    data = mask.data
    buf = bytearray()
    byte = 0
    for x in range(width):
        bitx = 0
        for y in range(height - 1, -1, -1):
            byte |= data[y * width + x] << (7 - (bitx & 7))
            bitx += 1
            if y == 0 or not bitx & 7:
                buf.append(byte)
                byte = 0
    return Bitmap(bytes(buf), height, width)


ROTATIONS = {
    ROTATE_NONE: normal,
    ROTATE_LEFT: left,
    ROTATE_RIGHT: right,
    ROTATE_INVERT: invert,
}


ROTATE_CODES = {
    "N": ROTATE_NONE,
    "none": ROTATE_NONE,
    "L": ROTATE_LEFT,
    "B": ROTATE_LEFT,
    "left": ROTATE_LEFT,
    "ccw": ROTATE_LEFT,
    "R": ROTATE_RIGHT,
    "right": ROTATE_RIGHT,
    "cw": ROTATE_RIGHT,
    "I": ROTATE_INVERT,
    "invert": ROTATE_INVERT,
    "180": ROTATE_INVERT,
}


def lookup_rotate(value):
    """Rotation code for an option value, None when the value is not recognised"""
    if value is None:
        return None
    key = str(value)
    return (ROTATE_CODES.get(key) or ROTATE_CODES.get(key.upper())
            or ROTATE_CODES.get(key.lower()))


def rotate_code(value):
    """Normalise a rotation option, unknown values mean no rotation"""
    return lookup_rotate(value) or ROTATE_NONE


def rotate(mask, mode=ROTATE_NONE):
    return ROTATIONS[rotate_code(mode)](mask)


def unpack(bitmap):
    """
    Expand a packed bitmap back into a mask, dropping the row padding bits

    Args:
        bitmap: Bitmap as returned by normal/left/right/invert

    Returns:
        Mask with the bitmap's width and height
    """
    width, height = bitmap.width, bitmap.height
    stride = bitmap.row_stride
    pixels = bytearray()
    for row in range(height):
        row_start = row * stride
        for col in range(width):
            byte_val = bitmap.data[row_start + (col >> 3)]
            pixels.append((byte_val >> (7 - (col & 7))) & 1)
    return Mask(bytes(pixels), width, height)
