# palette_gen/errors.py
from __future__ import annotations

"""
Error kinds and exceptions raised while building a palette.

Every failure aborts the whole generate() call for that palette. Callers
match on the exception class or on its `kind`.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    ALLOCATION_FAILURE = "allocation failure"
    IMAGE_NOT_FOUND = "image not found"
    IMAGE_LOAD_FAILURE = "image load failure"
    TOO_MANY_FIXED_COLORS = "too many fixed colors"
    EMPTY_PALETTE = "empty palette"
    QUANTIZE_FAILURE = "quantize failure"
    INVALID_CONFIG = "invalid configuration"
    UNRESOLVED_FIXED_COLOR = "unresolved fixed color"


class PaletteError(Exception):
    """Base class. `palette_name` names the palette being built, if known."""

    kind: ErrorKind = ErrorKind.ALLOCATION_FAILURE

    def __init__(self, message: str, palette_name: Optional[str] = None) -> None:
        self.message = message
        self.palette_name = palette_name
        if palette_name is not None:
            message = f"palette '{palette_name}': {message}"
        super().__init__(message)


class ImageRegistrationError(PaletteError):
    kind = ErrorKind.ALLOCATION_FAILURE


class PaletteFullError(PaletteError):
    """No free slot left to relocate a displaced entry."""

    kind = ErrorKind.ALLOCATION_FAILURE


class ImageNotFoundError(PaletteError):
    kind = ErrorKind.IMAGE_NOT_FOUND


class ImageLoadError(PaletteError):
    kind = ErrorKind.IMAGE_LOAD_FAILURE


class TooManyFixedColorsError(PaletteError):
    kind = ErrorKind.TOO_MANY_FIXED_COLORS


class EmptyPaletteError(PaletteError):
    kind = ErrorKind.EMPTY_PALETTE


class QuantizeError(PaletteError):
    kind = ErrorKind.QUANTIZE_FAILURE


class PaletteConfigError(PaletteError):
    kind = ErrorKind.INVALID_CONFIG


class UnresolvedFixedColorError(PaletteError):
    """A non-exact fixed colour did not survive quantization."""

    kind = ErrorKind.UNRESOLVED_FIXED_COLOR


__all__ = [
    "ErrorKind",
    "PaletteError",
    "ImageRegistrationError",
    "PaletteFullError",
    "ImageNotFoundError",
    "ImageLoadError",
    "TooManyFixedColorsError",
    "EmptyPaletteError",
    "QuantizeError",
    "PaletteConfigError",
    "UnresolvedFixedColorError",
]
