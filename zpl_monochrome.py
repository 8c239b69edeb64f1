"""
RGBA to monochrome mask
Alpha blends every pixel against white and thresholds a luma estimate
"""

import logging
from typing import NamedTuple

log = logging.getLogger(__name__)

# Luma weights for R, G, B
WR, WG, WB = 0.30, 0.59, 0.11


class Mask(NamedTuple):
    """One byte per pixel, 1 = dark (print), 0 = light."""
    data: bytes
    width: int
    height: int


EMPTY_MASK = Mask(b"", 0, 0)


def _gray(rgba, i):
    # Alpha blend with white
    a = rgba[i + 3] / 255
    r = rgba[i] * WR * a + 255 * (1 - a)
    g = rgba[i + 1] * WG * a + 255 * (1 - a)
    b = rgba[i + 2] * WB * a + 255 * (1 - a)
    return r + g + b


def bounding_box(rgba, width, height, cutoff):
    """
    Inclusive box around every dark pixel

    Returns:
        (minx, miny, maxx, maxy), or None when no pixel is dark
    """
    minx, miny = width, height
    maxx = maxy = -1
    i = 0
    for y in range(height):
        for x in range(width):
            if _gray(rgba, i) <= cutoff:
                if x < minx:
                    minx = x
                if x > maxx:
                    maxx = x
                if y < miny:
                    miny = y
                maxy = y
            i += 4
    if maxx < 0:
        return None
    return minx, miny, maxx, maxy


def monochrome(rgba, width, height, black=50, notrim=False):
    """
    Convert RGBA pixels to a 1 byte per pixel mask

    Args:
        rgba: RGBA bytes, row-major, 4 bytes per pixel
        width, height: Image size in pixels
        black: Blackness threshold percent (1..99)
        notrim: Keep the whole image instead of cropping to the dark pixels

    Returns:
        Mask, empty (0x0) when cropping finds no dark pixel
    """
    cutoff = 255 * black / 100

    if notrim:
        box = (0, 0, width - 1, height - 1) if width and height else None
    else:
        box = bounding_box(rgba, width, height, cutoff)

    if box is None:
        log.debug("No dark pixels in %dx%d image, mask is empty", width, height)
        return EMPTY_MASK

    minx, miny, maxx, maxy = box
    buf = bytearray()
    for y in range(miny, maxy + 1):
        i = (y * width + minx) * 4
        for x in range(minx, maxx + 1):
            buf.append(1 if _gray(rgba, i) <= cutoff else 0)
            i += 4

    cx = maxx - minx + 1
    cy = maxy - miny + 1
    log.debug("Mask %dx%d cropped from %dx%d", cx, cy, width, height)
    return Mask(bytes(buf), cx, cy)
