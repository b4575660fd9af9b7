# palette_gen/quantize.py
from __future__ import annotations

"""
Colour quantizer interface and the default Pillow-backed implementation.

A quantizer lives for a single generate() call:

    with factory(speed, max_colors) as q:
        q.add_fixed_color(rgba, 0)
        q.add_image_pixels(row)
        colours = q.quantize()

Leaving the `with` block calls destroy() on every exit path.

The output order is not guaranteed to be stable across implementations or
runs. Callers must not rely on it.
"""

from typing import Callable, List, Optional

import numpy as np
from PIL import Image

from .core_types import RGBATuple, U8Pixels, coerce_to_rgba_tuple
from .errors import QuantizeError

# Upper bound on pixels materialised when handing the histogram to Pillow
_SAMPLE_LIMIT = 1 << 20


class Quantizer:
    """Base class for quantizers. Subclasses implement the four operations."""

    def __init__(self, speed: int, max_colors: int) -> None:
        self.speed = int(speed)
        self.max_colors = int(max_colors)

    def add_fixed_color(self, rgba: RGBATuple, weight: float = 0.0) -> None:
        raise NotImplementedError

    def add_image_pixels(self, pixels: U8Pixels) -> None:
        raise NotImplementedError

    def quantize(self) -> List[RGBATuple]:
        raise NotImplementedError

    def destroy(self) -> None:
        pass

    def __enter__(self) -> "Quantizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()


QuantizerFactory = Callable[[int, int], Quantizer]


def _pack_rgb(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.uint32, copy=False)
    return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


def _unpack_rgb(keys: np.ndarray) -> np.ndarray:
    keys = keys.astype(np.uint32, copy=False)
    out = np.empty((keys.shape[0], 3), dtype=np.uint8)
    out[:, 0] = (keys >> 16) & 0xFF
    out[:, 1] = (keys >> 8) & 0xFF
    out[:, 2] = keys & 0xFF
    return out


def pillow_method_for_speed(speed: int) -> Image.Quantize:
    """Median cut up to speed 5, fast octree above."""
    return Image.Quantize.MEDIANCUT if speed <= 5 else Image.Quantize.FASTOCTREE


class PillowQuantizer(Quantizer):
    """
    Weighted RGB histogram quantized with Pillow.

    Pixels are folded into a histogram of unique colours as they arrive, so
    memory is bounded by the number of distinct colours rather than by the
    number of images. Fixed colours are seeds: they take reserved slots and
    carry no weight, so they never bias which other colours are picked.
    """

    def __init__(self, speed: int, max_colors: int) -> None:
        super().__init__(speed, max_colors)
        self._seeds: List[RGBATuple] = []
        self._keys: Optional[np.ndarray] = np.zeros((0,), dtype=np.uint32)
        self._counts: Optional[np.ndarray] = np.zeros((0,), dtype=np.int64)

    def _check_alive(self) -> None:
        if self._keys is None or self._counts is None:
            raise QuantizeError("quantizer used after destroy()")

    def add_fixed_color(self, rgba: RGBATuple, weight: float = 0.0) -> None:
        self._check_alive()
        colour = coerce_to_rgba_tuple(rgba)
        if colour[:3] not in [s[:3] for s in self._seeds]:
            self._seeds.append(colour)

    def add_image_pixels(self, pixels: U8Pixels) -> None:
        self._check_alive()
        flat = np.asarray(pixels, dtype=np.uint8).reshape(-1, 4)
        if flat.shape[0] == 0:
            return
        keys, counts = np.unique(_pack_rgb(flat[:, :3]), return_counts=True)
        merged_keys = np.concatenate([self._keys, keys])
        merged_counts = np.concatenate([self._counts, counts.astype(np.int64)])
        self._keys, inverse = np.unique(merged_keys, return_inverse=True)
        self._counts = np.bincount(
            inverse.reshape(-1), weights=merged_counts, minlength=self._keys.shape[0]
        ).astype(np.int64)

    def _histogram_colours(self, budget: int) -> List[RGBATuple]:
        keys, counts = self._keys, self._counts
        if budget < 1 or keys.shape[0] == 0:
            return []

        if keys.shape[0] <= budget:
            order = np.argsort(-counts, kind="stable")
            rows = _unpack_rgb(keys[order])
            return [(int(r), int(g), int(b), 255) for r, g, b in rows.tolist()]

        total = int(counts.sum())
        weights = counts
        if total > _SAMPLE_LIMIT:
            weights = np.maximum(1, (counts * _SAMPLE_LIMIT) // total)
        samples = _unpack_rgb(np.repeat(keys, weights))
        img = Image.fromarray(samples.reshape(1, -1, 3))

        quantized = img.quantize(
            colors=budget,
            method=pillow_method_for_speed(self.speed),
            kmeans=max(0, 10 - self.speed),
            dither=Image.Dither.NONE,
        )
        flat_pal = quantized.getpalette() or []
        used = quantized.getcolors(maxcolors=256) or []

        out: List[RGBATuple] = []
        for _count, idx in sorted(used, key=lambda cu: cu[1]):
            r, g, b = flat_pal[idx * 3 : idx * 3 + 3]
            colour = (int(r), int(g), int(b), 255)
            if colour not in out:
                out.append(colour)
        return out[:budget]

    def quantize(self) -> List[RGBATuple]:
        self._check_alive()
        budget = self.max_colors - len(self._seeds)
        try:
            colours = self._histogram_colours(budget)
        except (ValueError, OSError, MemoryError) as e:
            raise QuantizeError(f"quantization failed: {e}") from e

        seen = {c[:3] for c in colours}
        for seed in self._seeds:
            if seed[:3] not in seen:
                colours.append((seed[0], seed[1], seed[2], 255))
                seen.add(seed[:3])
        return colours[: self.max_colors]

    def destroy(self) -> None:
        self._keys = None
        self._counts = None
        self._seeds = []


__all__ = [
    "Quantizer",
    "QuantizerFactory",
    "PillowQuantizer",
    "pillow_method_for_speed",
]
