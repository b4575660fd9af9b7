# palette_gen/pixels.py
from __future__ import annotations

"""
Image iteration and pixel filtering ahead of quantization.

Pixels whose RGB equals an exact fixed colour (alpha ignored) are dropped:
exact colours are placed verbatim later and must not influence what the
quantizer picks. What remains is converted into the palette's colour mode
and flattened into a single (1, N, 4) row.
"""

from typing import Iterable, Iterator, Protocol, Sequence, Tuple

import numpy as np

from .colour_convert import convert_pixels
from .core_types import ImageRef, PaletteEntry, U8Pixels, assert_u8_rgba


class ImageSource(Protocol):
    def load(self, image: ImageRef) -> U8Pixels: ...


def _pack_rgb(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.uint32, copy=False)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def exact_rgb_keys(fixed_entries: Sequence[PaletteEntry]) -> np.ndarray:
    """Packed 0xRRGGBB keys of the exact fixed colours, as given."""
    rows = [f.color.rgb for f in fixed_entries if f.exact]
    if not rows:
        return np.zeros((0,), dtype=np.uint32)
    return np.unique(_pack_rgb(np.array(rows, dtype=np.uint8)))


def filter_exact_pixels(pixels: U8Pixels, exact_keys: np.ndarray) -> U8Pixels:
    """Flatten to (N,4) and drop pixels whose RGB matches an exact key."""
    flat = assert_u8_rgba(np.asarray(pixels)).reshape(-1, 4)
    if exact_keys.shape[0] == 0:
        return flat
    keep = ~np.isin(_pack_rgb(flat[:, :3]), exact_keys)
    return flat[keep]


def prepare_pixels(pixels: U8Pixels, exact_keys: np.ndarray, mode: str) -> U8Pixels:
    """Filtered, mode-converted pixels as one (1, N, 4) row. N may be 0."""
    kept = filter_exact_pixels(pixels, exact_keys)
    converted, _targets = convert_pixels(kept, mode)
    return converted.reshape(1, -1, 4)


def iter_image_pixels(
    images: Iterable[ImageRef], source: ImageSource
) -> Iterator[Tuple[ImageRef, U8Pixels]]:
    """
    Yield (image, pixels) one image at a time, in order.

    The buffer is dropped before the next image is loaded, so only one
    decoded image is resident at once. Load errors propagate.
    """
    for image in images:
        pixels = source.load(image)
        yield image, pixels
        del pixels


__all__ = [
    "ImageSource",
    "exact_rgb_keys",
    "filter_exact_pixels",
    "prepare_pixels",
    "iter_image_pixels",
]
