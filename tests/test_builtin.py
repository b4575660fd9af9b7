from __future__ import annotations

import pytest

from conftest import DictImageSource, FakeQuantizerFactory
from palette_gen.builder import PaletteBuilder
from palette_gen.colour_convert import convert_color
from palette_gen.core_types import Color, hex_to_rgb
from palette_gen.palette import Palette
from palette_gen.palette_data import BUILTIN_PALETTES, PALETTE_RGB332, PALETTE_XLIBC, is_builtin


def test_tables_have_256_entries():
    assert len(PALETTE_XLIBC) == 256
    assert len(PALETTE_RGB332) == 256
    assert PALETTE_XLIBC[0] == "#000000"
    assert PALETTE_XLIBC[-1] == "#ffffff"
    assert is_builtin("xlibc") and is_builtin("rgb332")
    assert not is_builtin("sprites")


@pytest.mark.parametrize("name", sorted(BUILTIN_PALETTES))
@pytest.mark.parametrize("mode", ["1555_gbgr", "565_rgb"])
def test_builtin_bypasses_fixed_colours_and_images(name, mode):
    pal = Palette(name=name, mode=mode, automatic=True, max_entries=16)
    pal.add_fixed_color(0, Color((1, 2, 3, 255)), exact=True)
    pal.add_image("does/not/exist.png")
    source = DictImageSource()
    factory = FakeQuantizerFactory()

    PaletteBuilder(image_source=source, quantizer_factory=factory).generate(pal)

    assert source.loaded == []
    assert factory.created == []
    assert pal.num_entries == 256
    assert len(pal.entries) == 256
    assert all(e.valid for e in pal.entries)
    for entry, hx in zip(pal.entries, BUILTIN_PALETTES[name]):
        assert entry.color == convert_color(hex_to_rgb(hx), mode)


def test_xlibc_corners_in_1555():
    pal = Palette(name="xlibc")
    PaletteBuilder(quantizer_factory=FakeQuantizerFactory()).generate(pal)
    assert pal.entries[0].color.target == 0x0000
    assert pal.entries[255].color.target == 0xFFFF
