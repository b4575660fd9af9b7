# palette_gen/palette.py
from __future__ import annotations

"""
Palette definition and its entry table.

A Palette holds the configuration of one named palette (capacity, fixed
colours, colour mode, quantizer speed, input images) and, once generated,
the final table. The table always has `max_entries` slots; a slot is in use
only when its `valid` flag is set. `num_entries` is 1 + the highest
occupied index, so unused slots ("holes") may sit below it.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from .colour_convert import check_mode
from .constants import (
    DEFAULT_COLOR_MODE,
    PALETTE_DEFAULT_QUANTIZE_SPEED,
    PALETTE_MAX_ENTRIES,
    QUANTIZE_SPEED_MAX,
    QUANTIZE_SPEED_MIN,
)
from .core_types import Color, ImageRef, PaletteEntry
from .errors import ImageNotFoundError, ImageRegistrationError, PaletteConfigError
from .image_io import find_images
from .utils import debug_log

ImageFinder = Callable[[str], Sequence[str]]


def empty_table(size: int) -> List[PaletteEntry]:
    return [PaletteEntry() for _ in range(size)]


@dataclass
class Palette:
    name: str
    max_entries: int = PALETTE_MAX_ENTRIES
    mode: str = DEFAULT_COLOR_MODE
    quantize_speed: int = PALETTE_DEFAULT_QUANTIZE_SPEED
    automatic: bool = False
    fixed_entries: List[PaletteEntry] = field(default_factory=list)
    images: List[ImageRef] = field(default_factory=list)
    entries: List[PaletteEntry] = field(default_factory=list)
    num_entries: int = 0
    holes: int = 0
    unresolved: List[PaletteEntry] = field(default_factory=list)
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.entries:
            self.entries = empty_table(max(0, self.max_entries))

    # Configuration

    def add_fixed_color(self, index: int, color: Color, exact: bool = False) -> PaletteEntry:
        """
        Pin `color` to `index`.

        `color.rgba` is the raw source colour, not rounded to the mode. Exact
        colours drop source pixels whose RGB equals it, so build it from the
        image's own values (e.g. Color((r, g, b, 255))) rather than from
        convert_color(). Rounding happens when the entry is placed.
        """
        entry = PaletteEntry(color=color, index=int(index), exact=bool(exact))
        self.fixed_entries.append(entry)
        return entry

    def validate(self) -> None:
        """Raise PaletteConfigError if the configuration cannot be built."""
        if not 1 <= self.max_entries <= PALETTE_MAX_ENTRIES:
            raise PaletteConfigError(
                f"max entries must be in 1..{PALETTE_MAX_ENTRIES}, got {self.max_entries}",
                self.name,
            )
        if not QUANTIZE_SPEED_MIN <= self.quantize_speed <= QUANTIZE_SPEED_MAX:
            raise PaletteConfigError(
                f"quantize speed must be in {QUANTIZE_SPEED_MIN}..{QUANTIZE_SPEED_MAX}, "
                f"got {self.quantize_speed}",
                self.name,
            )
        try:
            check_mode(self.mode)
        except PaletteConfigError as e:
            raise PaletteConfigError(e.message, self.name) from e
        for fixed in self.fixed_entries:
            if not 0 <= fixed.index < self.max_entries:
                raise PaletteConfigError(
                    f"fixed color {fixed.color.hex} index {fixed.index} "
                    f"outside 0..{self.max_entries - 1}",
                    self.name,
                )
        pinned: Dict[int, PaletteEntry] = {}
        for fixed in self.fixed_entries:
            if not fixed.exact:
                continue
            other = pinned.setdefault(fixed.index, fixed)
            if other is not fixed:
                raise PaletteConfigError(
                    f"exact fixed colors {other.color.hex} and {fixed.color.hex} "
                    f"both pinned to index {fixed.index}",
                    self.name,
                )

    # Images

    def add_image(self, path: str, debug: bool = False) -> ImageRef:
        """Register an image file as palette input (does not load it)."""
        if not path:
            raise ImageRegistrationError("cannot add an image with an empty path", self.name)
        image = ImageRef(path=str(path))
        self.images.append(image)
        if self.debug or debug:
            debug_log(f"Adding image: {image.path} [{image.name}]")
        return image

    def add_path(self, pattern: str, finder: ImageFinder = find_images) -> List[ImageRef]:
        """Register every image matched by a path or glob pattern."""
        paths = list(finder(pattern))
        if not paths:
            raise ImageNotFoundError(f"could not find file(s): '{pattern}'", self.name)
        return [self.add_image(p) for p in paths]

    # Results

    @property
    def exact_entries(self) -> int:
        return sum(1 for f in self.fixed_entries if f.exact)

    def reset_table(self) -> None:
        self.entries = empty_table(self.max_entries)
        self.num_entries = 0
        self.holes = 0
        self.unresolved = []


__all__ = ["Palette", "ImageFinder", "empty_table"]
