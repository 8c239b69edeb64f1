#!/usr/bin/env python3
"""
Image to ZPL graphic field data
Converts RGBA pixels to a cropped, rotated 1-bit bitmap and encodes it
as Z64 (compressed + CRC) or ACS (hex run-length) text
"""

import io
import logging
import sys
from typing import NamedTuple

from PIL import Image

from zpl_encode import acs_encode, z64_encode
from zpl_errors import InvalidWidth
from zpl_monochrome import monochrome
from zpl_rotate import ROTATE_NONE, rotate, rotate_code

log = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    "black": 50,
    "rotate": ROTATE_NONE,
    "notrim": False,
}


class ZplImage(NamedTuple):
    length: int      # uncompressed number of bitmap bytes
    row_stride: int  # packed bytes per row
    width: int       # rotated width in pixels
    height: int      # rotated height in pixels
    token: str       # Z64 or ACS data


def merge_options(options):
    opts = DEFAULT_OPTIONS.copy()
    if options:
        opts.update({k: v for k, v in options.items() if k in DEFAULT_OPTIONS})
        if "skip_crop" in options:
            opts["notrim"] = options["skip_crop"]
    # 0 or missing blackness falls back to the default
    opts["black"] = float(opts["black"] or DEFAULT_OPTIONS["black"])
    opts["rotate"] = rotate_code(opts["rotate"])
    opts["notrim"] = bool(opts["notrim"])
    return opts


def _to_bitmap(rgba, width, options):
    try:
        width = int(width)
    except (TypeError, ValueError):
        raise InvalidWidth(f"Invalid width: {width!r}") from None
    if width <= 0:
        raise InvalidWidth(f"Invalid width: {width}")
    if len(rgba) % (width * 4):
        raise InvalidWidth(
            f"Buffer of {len(rgba)} bytes is not a whole number of {width} pixel RGBA rows")
    height = len(rgba) // (width * 4)

    opts = merge_options(options)
    log.debug("Converting %dx%d image, options %s", width, height, opts)
    mono = monochrome(rgba, width, height, opts["black"], opts["notrim"])
    return rotate(mono, opts["rotate"])


def rgba_to_z64(rgba, width, options=None):
    """
    Convert RGBA pixels to Z64 graphic data

    Args:
        rgba: bytes/bytearray/list of ints, 4 per pixel, row-major
        width: Image width in pixels
        options: dict with black (1..99), rotate (N/L/R/I/B) and notrim

    Returns:
        ZplImage whose token is ":Z64:<base64>:<crc16>"

    Usage: '^GFA,{0.length},{0.length},{0.row_stride},{0.token}'.format(rv)
    """
    buf = _to_bitmap(rgba, width, options)
    return ZplImage(len(buf.data), buf.row_stride, buf.width, buf.height, z64_encode(buf))


def rgba_to_acs(rgba, width, options=None):
    """Same as rgba_to_z64 but the token is ACS run-length hex"""
    buf = _to_bitmap(rgba, width, options)
    return ZplImage(len(buf.data), buf.row_stride, buf.width, buf.height, acs_encode(buf))


rgba_to_binary_token = rgba_to_z64
rgba_to_text_token = rgba_to_acs


def image_rgba(img):
    """
    Pixel source for the converters

    Args:
        img: PIL Image, path to an image file, or encoded image bytes

    Returns:
        (rgba_bytes, width)
    """
    if isinstance(img, (bytes, bytearray)):
        img = Image.open(io.BytesIO(img))
    elif not isinstance(img, Image.Image):
        img = Image.open(img)
    img = img.convert("RGBA")
    return img.tobytes(), img.width


def image_to_z64(img, options=None):
    rgba, width = image_rgba(img)
    return rgba_to_z64(rgba, width, options)


def image_to_acs(img, options=None):
    rgba, width = image_rgba(img)
    return rgba_to_acs(rgba, width, options)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    convert = image_to_z64
    if argv and argv[0] == "--acs":
        convert = image_to_acs
        argv = argv[1:]

    if not argv:
        print("Usage: python image_to_zpl.py [--acs] <image.png> [black] [rotate]")
        print("   rotate: N (none), L (ccw), R (cw), I (180)")
        return 1

    options = {}
    if len(argv) > 1:
        options["black"] = int(argv[1])
    if len(argv) > 2:
        options["rotate"] = argv[2]

    rv = convert(argv[0], options)
    print(f"Image: {argv[0]}")
    print(f"Bitmap: {rv.width}x{rv.height} pixels ({rv.row_stride} bytes per row, {rv.length} bytes)")
    print()
    print(rv.token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
