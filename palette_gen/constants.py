"""
Global limits and tunables used across the project.

- PALETTE_MAX_ENTRIES, PALETTE_DEFAULT_QUANTIZE_SPEED
- Builtin palette identifiers
- Colour mode names
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Palette limits
# =========================
PALETTE_MAX_ENTRIES: int = 256

# 1 = slowest/best, 10 = fastest/roughest
PALETTE_DEFAULT_QUANTIZE_SPEED: int = 3
QUANTIZE_SPEED_MIN: int = 1
QUANTIZE_SPEED_MAX: int = 10

# =========================
# Builtin palettes
# =========================
BUILTIN_XLIBC: str = "xlibc"
BUILTIN_RGB332: str = "rgb332"
BUILTIN_PALETTE_NAMES: Tuple[str, ...] = (BUILTIN_XLIBC, BUILTIN_RGB332)

# =========================
# Colour modes (bit layouts)
# =========================
COLOR_MODE_1555_GBGR: str = "1555_gbgr"
COLOR_MODE_1555_GRGB: str = "1555_grgb"
COLOR_MODE_565_RGB: str = "565_rgb"
COLOR_MODE_565_BGR: str = "565_bgr"
COLOR_MODE_888_RGB: str = "888_rgb"

COLOR_MODES: Tuple[str, ...] = (
    COLOR_MODE_1555_GBGR,
    COLOR_MODE_1555_GRGB,
    COLOR_MODE_565_RGB,
    COLOR_MODE_565_BGR,
    COLOR_MODE_888_RGB,
)
DEFAULT_COLOR_MODE: str = COLOR_MODE_1555_GBGR

# Extensions accepted when expanding image globs
IMAGE_EXTENSIONS: Tuple[str, ...] = (".png", ".bmp", ".gif", ".jpg", ".jpeg", ".tga", ".webp")
