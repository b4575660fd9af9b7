"""
palette_gen package.

Purpose:
  Build fixed-capacity indexed palettes (up to 256 entries) from source
  images, pinned colours and a colour mode. See build_palette.py for CLI.

Public API:
  PaletteBuilder : runs the construction protocol with injected collaborators.
  generate       : convenience wrapper around PaletteBuilder.
  Palette        : palette configuration and final entry table.
  ConvertJob     : job descriptor used by automatic palettes.
  colour_convert : colour mode conversions.
  errors         : ErrorKind and the PaletteError hierarchy.

Quick start:
  from palette_gen import Palette, generate
  from palette_gen.colour_convert import convert_color
"""

__version__ = "0.1.0"

from . import colour_convert
from . import core_types
from . import errors
from . import palette_data
from . import quantize
from . import utils

from .automatic import ConvertJob, Tileset, TilesetGroup  # noqa: E402,F401
from .builder import PaletteBuilder, generate  # noqa: E402,F401
from .core_types import Color, ImageRef, PaletteEntry  # noqa: E402,F401
from .errors import ErrorKind, PaletteError  # noqa: E402,F401
from .palette import Palette  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "errors",
    "palette_data",
    "quantize",
    "utils",
    "ConvertJob",
    "Tileset",
    "TilesetGroup",
    "PaletteBuilder",
    "generate",
    "Color",
    "ImageRef",
    "PaletteEntry",
    "ErrorKind",
    "PaletteError",
    "Palette",
]
