from __future__ import annotations

import argparse

import numpy as np
import pytest

from build_palette import main, parse_fixed_arg
from conftest import save_png_rgba


def test_parse_fixed_arg():
    index, colour, exact = parse_fixed_arg("0:#000000:exact")
    assert (index, colour.rgba, exact) == (0, (0, 0, 0, 255), True)

    index, colour, exact = parse_fixed_arg("0x10:ff8000")
    assert (index, colour.rgb, exact) == (16, (255, 128, 0), False)

    for bad in ("12", "1:#12345", "1:#000000:loose", "x:#000000"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_fixed_arg(bad)


def test_builtin_table(capsys):
    assert main(["xlibc"]) == 0
    out = capsys.readouterr().out
    assert "=== xlibc ===" in out
    assert "    0  #000000  0x0000" in out
    assert "  255  #ffffff  0xFFFF" in out


def test_fixed_only(capsys):
    assert main(["ui", "--fixed", "2:#ff0000", "--fixed", "0:#000000:exact"]) == 0
    out = capsys.readouterr().out
    assert "    0  #000000  0x0000  exact" in out
    assert "    1  -" in out
    assert "    2  #ff0000  0x001F" in out


def test_errors_exit_with_status_1(capsys, tmp_path):
    assert main(["empty"]) == 1
    assert "[error]" in capsys.readouterr().err

    assert main(["p", str(tmp_path / "none*.png")]) == 1
    assert "could not find" in capsys.readouterr().err


def test_images_end_to_end(capsys, tmp_path):
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[0, :2, 0] = 255  # two red
    pixels[1, 0, 2] = 255  # one blue
    save_png_rgba(tmp_path / "sprite.png", pixels)

    code = main(["sprites", str(tmp_path / "*.png"), "--fixed", "0:#000000:exact", "--debug"])
    out = capsys.readouterr().out

    assert code == 0
    assert "    0  #000000  0x0000  exact" in out
    assert "#ff0000" in out
    assert "#0000ff" in out
    assert "Generated palette 'sprites' with 3 colors" in out
