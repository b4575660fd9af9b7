from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from conftest import make_pixels
from palette_gen.errors import QuantizeError
from palette_gen.quantize import PillowQuantizer, pillow_method_for_speed

WHITE = (255, 255, 255)
RED = (255, 0, 0)
BLUE = (0, 0, 255)


def many_colours(n: int, repeat: int = 1) -> np.ndarray:
    rows = [((i * 5) % 256, (i * 11) % 256, (i * 17) % 256) for i in range(n)]
    return make_pixels([(rgb, repeat) for rgb in rows])


def test_few_colours_come_back_exactly_by_weight():
    with PillowQuantizer(3, 16) as q:
        q.add_image_pixels(make_pixels([(RED, 2), (BLUE, 7), (WHITE, 1)]))
        assert q.quantize() == [(0, 0, 255, 255), (255, 0, 0, 255), (255, 255, 255, 255)]


def test_histogram_accumulates_across_images():
    with PillowQuantizer(3, 16) as q:
        q.add_image_pixels(make_pixels([(RED, 1), (BLUE, 3)]))
        q.add_image_pixels(make_pixels([(RED, 5)]))
        assert q.quantize() == [(255, 0, 0, 255), (0, 0, 255, 255)]


def test_seed_is_kept_without_duplicates():
    with PillowQuantizer(3, 16) as q:
        q.add_fixed_color((255, 255, 255, 255), 0)
        q.add_image_pixels(make_pixels([(WHITE, 3), (RED, 1)]))
        assert q.quantize() == [(255, 255, 255, 255), (255, 0, 0, 255)]


@pytest.mark.parametrize("speed", [1, 3, 8, 10])
def test_quantizes_down_and_keeps_seed(speed):
    with PillowQuantizer(speed, 8) as q:
        q.add_fixed_color((255, 255, 255, 255), 0)
        q.add_image_pixels(many_colours(50, repeat=3))
        out = q.quantize()
    assert 1 < len(out) <= 8
    assert (255, 255, 255, 255) in out
    assert len(set(out)) == len(out)


def test_large_histogram_is_sampled():
    with PillowQuantizer(5, 16) as q:
        q.add_image_pixels(many_colours(300, repeat=4000))
        out = q.quantize()
    assert 1 < len(out) <= 16


def test_seeds_beyond_capacity_are_truncated():
    with PillowQuantizer(3, 1) as q:
        q.add_fixed_color((1, 2, 3, 255), 0)
        q.add_fixed_color((4, 5, 6, 255), 0)
        assert q.quantize() == [(1, 2, 3, 255)]


def test_use_after_destroy():
    q = PillowQuantizer(3, 4)
    with q:
        pass
    with pytest.raises(QuantizeError):
        q.quantize()


def test_method_for_speed():
    assert pillow_method_for_speed(1) == Image.Quantize.MEDIANCUT
    assert pillow_method_for_speed(5) == Image.Quantize.MEDIANCUT
    assert pillow_method_for_speed(6) == Image.Quantize.FASTOCTREE
