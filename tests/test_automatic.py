from __future__ import annotations

import pytest

from conftest import DictImageSource, FakeQuantizerFactory, make_pixels
from palette_gen.automatic import ConvertJob, Tileset, TilesetGroup, collect_automatic_images
from palette_gen.builder import PaletteBuilder
from palette_gen.core_types import Color, ImageRef
from palette_gen.errors import ErrorKind, ImageRegistrationError
from palette_gen.palette import Palette


def make_jobs():
    return [
        ConvertJob(
            name="sprites",
            palette_name="global",
            images=[ImageRef("hero.png"), ImageRef("enemy.png")],
            tileset_group=TilesetGroup([Tileset(ImageRef("tiles.png"))]),
        ),
        ConvertJob(name="ui", palette_name="ui_pal", images=[ImageRef("button.png")]),
        ConvertJob(name="fx", palette_name="global", images=[ImageRef("spark.png")]),
    ]


def test_collects_matching_jobs_in_order():
    pal = Palette(name="global", automatic=True)
    added = collect_automatic_images(pal, make_jobs())

    assert added == 4
    assert [img.path for img in pal.images] == ["hero.png", "enemy.png", "tiles.png", "spark.png"]
    assert [img.name for img in pal.images] == ["hero", "enemy", "tiles", "spark"]


def test_automatic_palette_reads_job_images():
    pal = Palette(name="global", automatic=True)
    images = {
        p: make_pixels([((i * 30, 0, 0), 2)])
        for i, p in enumerate(["hero.png", "enemy.png", "tiles.png", "spark.png"], 1)
    }
    source = DictImageSource(images)
    PaletteBuilder(image_source=source, quantizer_factory=FakeQuantizerFactory()).generate(
        pal, make_jobs()
    )

    assert source.loaded == ["hero.png", "enemy.png", "tiles.png", "spark.png"]
    assert pal.num_entries == 4


def test_builder_debug_lists_collected_images(capsys):
    pal = Palette(name="global", automatic=True)
    images = {p: make_pixels([((9, 9, 9), 1)]) for p in ["hero.png", "enemy.png", "tiles.png", "spark.png"]}
    PaletteBuilder(
        image_source=DictImageSource(images), quantizer_factory=FakeQuantizerFactory(), debug=True
    ).generate(pal, make_jobs())

    out = capsys.readouterr().out
    assert "[debug] Adding image: hero.png [hero]" in out
    assert "[debug] Adding image: spark.png [spark]" in out


def test_jobs_ignored_when_not_automatic():
    pal = Palette(name="global")
    pal.add_fixed_color(0, Color((0, 0, 0, 255)))
    PaletteBuilder(image_source=DictImageSource(), quantizer_factory=FakeQuantizerFactory()).generate(
        pal, make_jobs()
    )
    assert pal.images == []


def test_registration_failure_aborts(capsys):
    pal = Palette(name="global", automatic=True)
    jobs = [ConvertJob(name="bad", palette_name="global", images=[ImageRef("")])]
    with pytest.raises(ImageRegistrationError) as excinfo:
        PaletteBuilder(image_source=DictImageSource(), quantizer_factory=FakeQuantizerFactory()).generate(
            pal, jobs
        )
    assert excinfo.value.kind is ErrorKind.ALLOCATION_FAILURE
    assert "[error]" in capsys.readouterr().err
