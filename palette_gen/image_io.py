# palette_gen/image_io.py
from __future__ import annotations

import glob
from pathlib import Path
from typing import List

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import IMAGE_EXTENSIONS
from .core_types import ImageRef, U8Pixels
from .errors import ImageLoadError

"""
Image I/O helpers: RGBA8 loading with rotate/flip transforms, and path
discovery for palette inputs.
"""

_ROTATIONS = {
    0: None,
    90: Image.Transpose.ROTATE_90,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_270,
}


def apply_transforms(im: Image.Image, rotate: int, flipx: bool, flipy: bool) -> Image.Image:
    """Rotate counter-clockwise by a multiple of 90 degrees, then mirror/flip."""
    key = int(rotate) % 360
    if key not in _ROTATIONS:
        raise ValueError(f"rotation must be a multiple of 90 degrees, got {rotate}")
    transpose = _ROTATIONS[key]
    if transpose is not None:
        im = im.transpose(transpose)
    if flipx:
        im = ImageOps.mirror(im)
    if flipy:
        im = ImageOps.flip(im)
    return im


class PillowImageSource:
    """Decode image files with Pillow into (H, W, 4) uint8 RGBA buffers."""

    def load(self, image: ImageRef) -> U8Pixels:
        try:
            with Image.open(image.path) as im0:
                im = ImageOps.exif_transpose(im0).convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(f"failed to load image '{image.path}': {e}") from e
        try:
            im = apply_transforms(im, image.rotate, image.flipx, image.flipy)
        except ValueError as e:
            raise ImageLoadError(f"failed to load image '{image.path}': {e}") from e
        return np.array(im, dtype=np.uint8)


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def find_images(pattern: str) -> List[str]:
    """
    Expand a path or glob into a sorted list of image file paths.
    Non-image files are skipped; an empty list means nothing matched.
    """
    matches = glob.glob(pattern, recursive=True)
    if not matches and Path(pattern).is_file():
        matches = [pattern]
    out = [m for m in matches if Path(m).is_file() and is_image_path(Path(m))]
    out.sort()
    return out


__all__ = [
    "apply_transforms",
    "PillowImageSource",
    "is_image_path",
    "find_images",
]
