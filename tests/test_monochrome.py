from zpl_monochrome import EMPTY_MASK, Mask, bounding_box, monochrome

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
CLEAR = (0, 0, 0, 0)


def rgba(*pixels):
    return bytes(v for px in pixels for v in px)


def test_half_black_row_no_crop():
    data = rgba(*[BLACK] * 4, *[WHITE] * 4)
    mask = monochrome(data, 8, 1, 50, notrim=True)
    assert mask == Mask(bytes([1, 1, 1, 1, 0, 0, 0, 0]), 8, 1)


def test_half_black_row_cropped():
    data = rgba(*[BLACK] * 4, *[WHITE] * 4)
    mask = monochrome(data, 8, 1)
    assert mask == Mask(bytes([1, 1, 1, 1]), 4, 1)


def test_single_black_pixel():
    assert monochrome(rgba(BLACK), 1, 1) == Mask(b"\x01", 1, 1)


def test_crop_box():
    pixels = [WHITE] * 16
    pixels[1 * 4 + 1] = BLACK
    pixels[3 * 4 + 2] = BLACK
    data = rgba(*pixels)
    assert bounding_box(data, 4, 4, 127.5) == (1, 1, 2, 3)
    mask = monochrome(data, 4, 4)
    assert (mask.width, mask.height) == (2, 3)
    assert list(mask.data) == [1, 0,
                               0, 0,
                               0, 1]


def test_all_white_crops_to_empty():
    data = rgba(*[WHITE] * 12)
    assert bounding_box(data, 4, 3, 127.5) is None
    assert monochrome(data, 4, 3) == EMPTY_MASK


def test_transparent_crops_to_empty():
    assert monochrome(rgba(*[CLEAR] * 6), 3, 2) == EMPTY_MASK


def test_all_white_without_crop_keeps_size():
    mask = monochrome(rgba(*[WHITE] * 6), 3, 2, notrim=True)
    assert mask == Mask(bytes(6), 3, 2)


def test_zero_height():
    assert monochrome(b"", 5, 0) == EMPTY_MASK
    assert monochrome(b"", 5, 0, notrim=True) == EMPTY_MASK


def test_threshold():
    gray = rgba((100, 100, 100, 255))
    assert monochrome(gray, 1, 1, 50).data == b"\x01"
    assert monochrome(gray, 1, 1, 30) == EMPTY_MASK
    assert monochrome(gray, 1, 1, 30, notrim=True).data == b"\x00"


def test_alpha_blends_with_white():
    data = rgba(BLACK, CLEAR)
    assert monochrome(data, 2, 1, notrim=True).data == b"\x01\x00"


def test_luma_weights():
    # opaque red, green and blue blend to 76.5, 150.45 and 28.05
    data = rgba((255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255))
    assert monochrome(data, 3, 1, 50, notrim=True).data == b"\x01\x00\x01"
    assert monochrome(data, 3, 1, 25, notrim=True).data == b"\x00\x00\x01"
    assert monochrome(data, 3, 1, 60, notrim=True).data == b"\x01\x01\x01"
