"""Errors raised by the image to ZPL bitmap converter."""


class ZplImageError(ValueError):
    pass


class InvalidWidth(ZplImageError):
    """Width is not positive or does not fit the RGBA buffer length."""


class InvalidCharacter(ZplImageError):
    """Checksum input holds a character outside Latin-1."""
