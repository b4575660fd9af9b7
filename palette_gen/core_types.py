# palette_gen/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]
HexStr = str

U8Pixels = NDArray[np.uint8]  # (H, W, 4) RGBA8, or (N, 4) flattened
PackedTargets = NDArray[np.uint32]  # (...,) mode-packed values

# Value objects


@dataclass(frozen=True)
class Color:
    """
    A colour in RGBA8 together with its packed form for a colour mode.

    In a generated table `rgba` holds the colour after a round trip through
    the mode, so two colours that pack to the same target compare equal on
    `rgb`. Fixed colours handed to Palette.add_fixed_color keep their raw
    source values until they are placed.
    """

    rgba: RGBATuple
    target: int = 0

    @property
    def rgb(self) -> RGBTuple:
        return (self.rgba[0], self.rgba[1], self.rgba[2])

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self.rgb)


BLACK = Color((0, 0, 0, 255), 0)


@dataclass
class PaletteEntry:
    """
    One slot of the palette table, or one fixed colour constraint.

    `index` only matters for fixed entries before placement. `valid` marks an
    occupied slot in the final table.
    """

    color: Color = BLACK
    index: int = 0
    exact: bool = False
    valid: bool = False

    def copy(self) -> "PaletteEntry":
        return PaletteEntry(self.color, self.index, self.exact, self.valid)


@dataclass
class ImageRef:
    """Source image registered as palette input. Pixels are loaded on demand."""

    path: str
    name: str = ""
    rotate: int = 0
    flipx: bool = False
    flipy: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            self.name = Path(self.path).stem


# Small helpers


def rgb_to_hex(rgb: Sequence[int]) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def coerce_to_rgba_tuple(
    value: Union[Sequence[int], NDArray[np.generic]], alpha: int = 255
) -> RGBATuple:
    """
    Coerce a 3- or 4-length sequence or array row to an (r, g, b, a) tuple.
    Missing alpha defaults to `alpha`.
    """
    v = value.tolist() if isinstance(value, np.ndarray) else list(value)
    if len(v) < 3:
        raise ValueError("sequence too small for RGB")
    a = int(v[3]) if len(v) > 3 else alpha
    return (int(v[0]), int(v[1]), int(v[2]), a)


def assert_u8_rgba(pixels: np.ndarray) -> U8Pixels:
    """Validate a uint8 (H,W,4) or (N,4) RGBA buffer and return it typed."""
    if pixels.dtype != np.uint8 or pixels.ndim not in (2, 3) or pixels.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) or (N,4) RGBA pixels")
    return pixels  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "RGBATuple",
    "HexStr",
    "U8Pixels",
    "PackedTargets",
    # value objects
    "Color",
    "BLACK",
    "PaletteEntry",
    "ImageRef",
    # helpers
    "rgb_to_hex",
    "hex_to_rgb",
    "coerce_to_rgba_tuple",
    "assert_u8_rgba",
]
