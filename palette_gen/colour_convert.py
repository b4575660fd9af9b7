# palette_gen/colour_convert.py
from __future__ import annotations

"""
Colour mode conversions.

Exports:
  convert_pixels(rgba, mode) -> (rgba_rounded, targets)
  convert_color(rgba, mode) -> Color
  unpack_target(target, mode) -> RGBTuple
  check_mode(mode)

Every mode packs RGB8 into an integer target and back. The round trip
snaps each channel onto the mode's grid, and converting an already
converted colour returns it unchanged.

Layouts (bit 15 first):
  1555_gbgr : g0 | b4..b0 | g5..g1 | r4..r0   (6-bit green, low bit on top)
  1555_grgb : g0 | r4..r0 | g5..g1 | b4..b0
  565_rgb   : r4..r0 | g5..g0 | b4..b0
  565_bgr   : b4..b0 | g5..g0 | r4..r0
  888_rgb   : 0x00RRGGBB
"""

from typing import Sequence, Tuple

import numpy as np

from .constants import (
    COLOR_MODES,
    COLOR_MODE_1555_GBGR,
    COLOR_MODE_1555_GRGB,
    COLOR_MODE_565_RGB,
    COLOR_MODE_565_BGR,
    COLOR_MODE_888_RGB,
)
from .core_types import Color, PackedTargets, RGBTuple, U8Pixels, coerce_to_rgba_tuple
from .errors import PaletteConfigError


def check_mode(mode: str) -> str:
    """Return `mode` if known, else raise PaletteConfigError."""
    if mode not in COLOR_MODES:
        raise PaletteConfigError(
            f"unknown color mode '{mode}' (expected one of {', '.join(COLOR_MODES)})"
        )
    return mode


# Channel scaling


def _to_bits(channel: np.ndarray, max_value: int) -> np.ndarray:
    """8-bit channel -> [0, max_value], rounded to nearest."""
    return (channel.astype(np.uint32) * max_value + 127) // 255


def _from_bits(channel: np.ndarray, max_value: int) -> np.ndarray:
    """[0, max_value] channel -> 8-bit, rounded to nearest."""
    return (channel.astype(np.uint32) * 255 + max_value // 2) // max_value


def _channel_depths(mode: str) -> Tuple[int, int, int]:
    if mode == COLOR_MODE_888_RGB:
        return 255, 255, 255
    return 31, 63, 31


# Packing


def _pack(r: np.ndarray, g: np.ndarray, b: np.ndarray, mode: str) -> PackedTargets:
    if mode == COLOR_MODE_1555_GBGR:
        t = ((g & 1) << 15) | (b << 10) | ((g >> 1) << 5) | r
    elif mode == COLOR_MODE_1555_GRGB:
        t = ((g & 1) << 15) | (r << 10) | ((g >> 1) << 5) | b
    elif mode == COLOR_MODE_565_RGB:
        t = (r << 11) | (g << 5) | b
    elif mode == COLOR_MODE_565_BGR:
        t = (b << 11) | (g << 5) | r
    else:
        t = (r << 16) | (g << 8) | b
    return t.astype(np.uint32, copy=False)


def _unpack(t: np.ndarray, mode: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    t = t.astype(np.uint32, copy=False)
    if mode == COLOR_MODE_1555_GBGR:
        r = t & 0x1F
        g = (((t >> 5) & 0x1F) << 1) | ((t >> 15) & 1)
        b = (t >> 10) & 0x1F
    elif mode == COLOR_MODE_1555_GRGB:
        b = t & 0x1F
        g = (((t >> 5) & 0x1F) << 1) | ((t >> 15) & 1)
        r = (t >> 10) & 0x1F
    elif mode == COLOR_MODE_565_RGB:
        r = (t >> 11) & 0x1F
        g = (t >> 5) & 0x3F
        b = t & 0x1F
    elif mode == COLOR_MODE_565_BGR:
        b = (t >> 11) & 0x1F
        g = (t >> 5) & 0x3F
        r = t & 0x1F
    else:
        r = (t >> 16) & 0xFF
        g = (t >> 8) & 0xFF
        b = t & 0xFF
    return r, g, b


# Public API


def convert_pixels(rgba: U8Pixels, mode: str) -> Tuple[U8Pixels, PackedTargets]:
    """
    Convert an RGBA8 buffer of shape (...,4) into `mode`.

    Returns (rounded, targets): `rounded` has the same shape as the input with
    RGB snapped to the mode grid (alpha untouched); `targets` has shape (...).
    """
    check_mode(mode)
    rgba = np.asarray(rgba, dtype=np.uint8)
    r_max, g_max, b_max = _channel_depths(mode)

    r = _to_bits(rgba[..., 0], r_max)
    g = _to_bits(rgba[..., 1], g_max)
    b = _to_bits(rgba[..., 2], b_max)
    targets = _pack(r, g, b, mode)

    ur, ug, ub = _unpack(targets, mode)
    rounded = np.empty_like(rgba)
    rounded[..., 0] = _from_bits(ur, r_max)
    rounded[..., 1] = _from_bits(ug, g_max)
    rounded[..., 2] = _from_bits(ub, b_max)
    rounded[..., 3] = rgba[..., 3]
    return rounded, targets


def convert_color(rgba: Sequence[int], mode: str) -> Color:
    """Convert one RGB or RGBA colour into a Color for `mode`."""
    row = np.array([coerce_to_rgba_tuple(rgba)], dtype=np.uint8)
    rounded, targets = convert_pixels(row, mode)
    return Color(coerce_to_rgba_tuple(rounded[0]), int(targets[0]))


def unpack_target(target: int, mode: str) -> RGBTuple:
    """Packed target -> RGB8 for `mode`."""
    check_mode(mode)
    r_max, g_max, b_max = _channel_depths(mode)
    r, g, b = _unpack(np.array([target], dtype=np.uint32), mode)
    return (
        int(_from_bits(r, r_max)[0]),
        int(_from_bits(g, g_max)[0]),
        int(_from_bits(b, b_max)[0]),
    )


__all__ = ["check_mode", "convert_pixels", "convert_color", "unpack_target"]
