# palette_gen/automatic.py
from __future__ import annotations

"""
Automatic palettes: collect input images from the conversion jobs that use
a palette, instead of listing them on the palette itself.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .core_types import ImageRef
from .palette import Palette


@dataclass
class Tileset:
    image: ImageRef


@dataclass
class TilesetGroup:
    tilesets: List[Tileset] = field(default_factory=list)


@dataclass
class ConvertJob:
    """Descriptor of an external conversion job, as far as palettes care."""

    name: str
    palette_name: str
    images: List[ImageRef] = field(default_factory=list)
    tileset_group: Optional[TilesetGroup] = None

    def source_paths(self) -> List[str]:
        """Job images first, then tileset images, in declaration order."""
        paths = [img.path for img in self.images]
        if self.tileset_group is not None:
            paths.extend(t.image.path for t in self.tileset_group.tilesets)
        return paths


def collect_automatic_images(
    palette: Palette, jobs: Iterable[ConvertJob], debug: bool = False
) -> int:
    """
    Register the images of every job whose palette is `palette`.
    Returns the number of images added. Registration errors propagate.
    """
    added = 0
    for job in jobs:
        if job.palette_name != palette.name:
            continue
        for path in job.source_paths():
            palette.add_image(path, debug=debug)
            added += 1
    return added


__all__ = ["Tileset", "TilesetGroup", "ConvertJob", "collect_automatic_images"]
