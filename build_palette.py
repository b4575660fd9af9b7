#!/usr/bin/env python3
"""
build_palette.py
Build an indexed palette (up to 256 entries) from images and fixed colours.

Usage:
  python build_palette.py NAME [IMAGE_OR_GLOB ...] --fixed 0:#000000:exact --mode 1555_gbgr
                          --max-entries 256 --speed 3 --debug --strict-fixed

Builtin palettes:
  xlibc, rgb332 : fixed 256-colour tables. Images and fixed colours are ignored.

Fixed colours:
  INDEX:#RRGGBB        colour pinned to INDEX, still offered to the quantizer
  INDEX:#RRGGBB:exact  colour written verbatim at INDEX, its pixels are not quantized

Output:
  One line per palette slot: index, hex colour, packed value for the mode.
  Exits with status 1 on any palette error.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from palette_gen.builder import PaletteBuilder
from palette_gen.constants import (
    COLOR_MODES,
    COLOR_MODE_888_RGB,
    DEFAULT_COLOR_MODE,
    PALETTE_DEFAULT_QUANTIZE_SPEED,
    PALETTE_MAX_ENTRIES,
)
from palette_gen.core_types import Color, hex_to_rgb
from palette_gen.errors import PaletteError
from palette_gen.palette import Palette
from palette_gen.utils import (
    enable_line_buffered_stdout,
    error,
    log,
    print_banner,
)


# CLI args & small helpers


def parse_fixed_arg(text: str) -> Tuple[int, Color, bool]:
    """
    Parse 'INDEX:#RRGGBB[:exact]' into (index, Color, exact).
    Raises argparse.ArgumentTypeError on malformed input.
    """
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected INDEX:#RRGGBB[:exact], got '{text}'")
    exact = False
    if len(parts) == 3:
        if parts[2].lower() != "exact":
            raise argparse.ArgumentTypeError(f"unknown fixed color flag '{parts[2]}'")
        exact = True
    try:
        index = int(parts[0], 0)
        r, g, b = hex_to_rgb(parts[1])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"bad fixed color '{text}': {e}") from e
    return index, Color((r, g, b, 255)), exact


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        name: palette name (or builtin identifier)
        images: image paths or glob patterns
        fixed: list of (index, Color, exact)
        mode: colour mode
        max_entries: palette capacity
        speed: quantizer speed 1..10
        debug: bool for verbose details
        strict_fixed: bool, fail when a fixed colour is dropped by the quantizer
    """
    parser = argparse.ArgumentParser(
        prog="build_palette",
        description="Build an indexed palette from images and fixed colours.",
    )
    parser.add_argument("name", help="Palette name, or a builtin: xlibc, rgb332")
    parser.add_argument("images", nargs="*", help="Image paths or glob patterns")
    parser.add_argument(
        "--fixed",
        action="append",
        type=parse_fixed_arg,
        default=[],
        metavar="INDEX:#RRGGBB[:exact]",
        help="Pin a colour to a palette index. Repeatable.",
    )
    parser.add_argument(
        "--mode", choices=list(COLOR_MODES), default=DEFAULT_COLOR_MODE, help="Colour mode."
    )
    parser.add_argument(
        "--max-entries",
        type=int,
        default=PALETTE_MAX_ENTRIES,
        help=f"Palette capacity (1..{PALETTE_MAX_ENTRIES}).",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=PALETTE_DEFAULT_QUANTIZE_SPEED,
        help="Quantizer speed, 1 (best) .. 10 (fastest).",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    parser.add_argument(
        "--strict-fixed",
        action="store_true",
        help="Fail when a non-exact fixed colour is missing from the quantized palette.",
    )
    return parser.parse_args(argv)


def palette_from_args(args: argparse.Namespace) -> Palette:
    palette = Palette(
        name=args.name,
        max_entries=args.max_entries,
        mode=args.mode,
        quantize_speed=args.speed,
        debug=args.debug,
    )
    for index, color, exact in args.fixed:
        palette.add_fixed_color(index, color, exact)
    for pattern in args.images:
        palette.add_path(pattern)
    return palette


def format_table(palette: Palette) -> List[str]:
    """One line per slot below num_entries; holes are shown as '-'."""
    width = 6 if palette.mode == COLOR_MODE_888_RGB else 4
    lines: List[str] = []
    for i, entry in enumerate(palette.entries[: palette.num_entries]):
        if not entry.valid:
            lines.append(f"  {i:3d}  -")
            continue
        flag = "  exact" if entry.exact else ""
        lines.append(f"  {i:3d}  {entry.color.hex}  0x{entry.color.target:0{width}X}{flag}")
    return lines


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        palette = palette_from_args(args)
        builder = PaletteBuilder(debug=args.debug, strict_fixed=args.strict_fixed)
        builder.generate(palette)
    except PaletteError as e:
        error(str(e))
        return 1

    print_banner(palette.name)
    for line in format_table(palette):
        log(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
