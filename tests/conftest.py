from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from palette_gen.core_types import ImageRef, RGBATuple
from palette_gen.errors import ImageLoadError, QuantizeError
from palette_gen.quantize import Quantizer


def make_pixels(colour_counts: Sequence[Tuple[Tuple[int, int, int], int]]) -> np.ndarray:
    """(1, N, 4) RGBA buffer with each colour repeated `count` times, in order."""
    rows: List[Tuple[int, int, int, int]] = []
    for (r, g, b), count in colour_counts:
        rows.extend([(r, g, b, 255)] * count)
    return np.array(rows, dtype=np.uint8).reshape(1, -1, 4)


def save_png_rgba(path: Path, rgba: np.ndarray) -> Path:
    """Write an (H, W, 4) uint8 array as an RGBA PNG and return the path."""
    Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8)).save(path)
    return path


class FakeQuantizer(Quantizer):
    """
    Deterministic quantizer. Returns `result` when given, otherwise every
    distinct pixel colour in first-seen order followed by unseen seeds.
    """

    def __init__(
        self,
        speed: int,
        max_colors: int,
        result: Optional[Sequence[RGBATuple]] = None,
        fail: bool = False,
    ) -> None:
        super().__init__(speed, max_colors)
        self.result = result
        self.fail = fail
        self.seeds: List[Tuple[RGBATuple, float]] = []
        self.rows: List[np.ndarray] = []
        self.quantize_calls = 0
        self.destroyed = False

    def add_fixed_color(self, rgba, weight=0.0):
        self.seeds.append((tuple(int(v) for v in rgba), weight))

    def add_image_pixels(self, pixels):
        self.rows.append(np.array(pixels, copy=True))

    def pixel_colours(self) -> List[Tuple[int, int, int]]:
        seen: Dict[Tuple[int, int, int], None] = {}
        for row in self.rows:
            for r, g, b, _a in row.reshape(-1, 4).tolist():
                seen.setdefault((r, g, b), None)
        return list(seen)

    def quantize(self):
        self.quantize_calls += 1
        if self.fail:
            raise QuantizeError("fake quantizer failure")
        if self.result is not None:
            return [tuple(c) for c in self.result]
        out = [(r, g, b, 255) for r, g, b in self.pixel_colours()]
        for rgba, _w in self.seeds:
            if (rgba[0], rgba[1], rgba[2], 255) not in out:
                out.append((rgba[0], rgba[1], rgba[2], 255))
        return out[: self.max_colors]

    def destroy(self):
        self.destroyed = True


class FakeQuantizerFactory:
    def __init__(self, result=None, fail=False) -> None:
        self.result = result
        self.fail = fail
        self.created: List[FakeQuantizer] = []

    def __call__(self, speed: int, max_colors: int) -> FakeQuantizer:
        q = FakeQuantizer(speed, max_colors, self.result, self.fail)
        self.created.append(q)
        return q

    @property
    def last(self) -> FakeQuantizer:
        return self.created[-1]


class DictImageSource:
    """Image source backed by a dict of path -> RGBA array."""

    def __init__(self, images: Optional[Dict[str, np.ndarray]] = None) -> None:
        self.images = dict(images or {})
        self.loaded: List[str] = []

    def load(self, image: ImageRef) -> np.ndarray:
        if image.path not in self.images:
            raise ImageLoadError(f"failed to load image '{image.path}'")
        self.loaded.append(image.path)
        return np.array(self.images[image.path], copy=True)


@pytest.fixture
def quantizer_factory() -> FakeQuantizerFactory:
    return FakeQuantizerFactory()


@pytest.fixture
def image_source() -> DictImageSource:
    return DictImageSource()
