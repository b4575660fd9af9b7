# palette_gen/palette_data.py
from __future__ import annotations

"""
Builtin palettes and the provider that expands them into a palette table.

Exports:
  PALETTE_XLIBC: list[str]   # 256 "#rrggbb" entries
  PALETTE_RGB332: list[str]  # 256 "#rrggbb" entries
  BUILTIN_PALETTES: dict name -> table
  is_builtin(name) -> bool
  generate_builtin(palette) -> None
"""

from typing import Dict, List

import numpy as np

from .colour_convert import convert_pixels
from .constants import BUILTIN_RGB332, BUILTIN_XLIBC, PALETTE_MAX_ENTRIES
from .core_types import Color, PaletteEntry, coerce_to_rgba_tuple, hex_to_rgb


PALETTE_XLIBC: List[str] = [
    "#000000", "#002008", "#004110", "#006118", "#008221", "#00a229", "#00c331", "#00e339",
    "#080042", "#08204a", "#084152", "#08615a", "#088263", "#08a26b", "#08c373", "#08e37b",
    "#100084", "#10208c", "#104194", "#10619c", "#1082a5", "#10a2ad", "#10c3b5", "#10e3bd",
    "#1800c6", "#1820ce", "#1841d6", "#1861de", "#1882e7", "#18a2ef", "#18c3f7", "#18e3ff",
    "#210400", "#212408", "#214510", "#216518", "#218621", "#21a629", "#21c731", "#21e739",
    "#290442", "#29244a", "#294552", "#29655a", "#298663", "#29a66b", "#29c773", "#29e77b",
    "#310484", "#31248c", "#314594", "#31659c", "#3186a5", "#31a6ad", "#31c7b5", "#31e7bd",
    "#3904c6", "#3924ce", "#3945d6", "#3965de", "#3986e7", "#39a6ef", "#39c7f7", "#39e7ff",
    "#420800", "#422808", "#424910", "#426918", "#428a21", "#42aa29", "#42cb31", "#42eb39",
    "#4a0842", "#4a284a", "#4a4952", "#4a695a", "#4a8a63", "#4aaa6b", "#4acb73", "#4aeb7b",
    "#520884", "#52288c", "#524994", "#52699c", "#528aa5", "#52aaad", "#52cbb5", "#52ebbd",
    "#5a08c6", "#5a28ce", "#5a49d6", "#5a69de", "#5a8ae7", "#5aaaef", "#5acbf7", "#5aebff",
    "#630c00", "#632c08", "#634d10", "#636d18", "#638e21", "#63ae29", "#63cf31", "#63ef39",
    "#6b0c42", "#6b2c4a", "#6b4d52", "#6b6d5a", "#6b8e63", "#6bae6b", "#6bcf73", "#6bef7b",
    "#730c84", "#732c8c", "#734d94", "#736d9c", "#738ea5", "#73aead", "#73cfb5", "#73efbd",
    "#7b0cc6", "#7b2cce", "#7b4dd6", "#7b6dde", "#7b8ee7", "#7baeef", "#7bcff7", "#7befff",
    "#841000", "#843008", "#845110", "#847118", "#849221", "#84b229", "#84d331", "#84f339",
    "#8c1042", "#8c304a", "#8c5152", "#8c715a", "#8c9263", "#8cb26b", "#8cd373", "#8cf37b",
    "#941084", "#94308c", "#945194", "#94719c", "#9492a5", "#94b2ad", "#94d3b5", "#94f3bd",
    "#9c10c6", "#9c30ce", "#9c51d6", "#9c71de", "#9c92e7", "#9cb2ef", "#9cd3f7", "#9cf3ff",
    "#a51400", "#a53408", "#a55510", "#a57518", "#a59621", "#a5b629", "#a5d731", "#a5f739",
    "#ad1442", "#ad344a", "#ad5552", "#ad755a", "#ad9663", "#adb66b", "#add773", "#adf77b",
    "#b51484", "#b5348c", "#b55594", "#b5759c", "#b596a5", "#b5b6ad", "#b5d7b5", "#b5f7bd",
    "#bd14c6", "#bd34ce", "#bd55d6", "#bd75de", "#bd96e7", "#bdb6ef", "#bdd7f7", "#bdf7ff",
    "#c61800", "#c63808", "#c65910", "#c67918", "#c69a21", "#c6ba29", "#c6db31", "#c6fb39",
    "#ce1842", "#ce384a", "#ce5952", "#ce795a", "#ce9a63", "#ceba6b", "#cedb73", "#cefb7b",
    "#d61884", "#d6388c", "#d65994", "#d6799c", "#d69aa5", "#d6baad", "#d6dbb5", "#d6fbbd",
    "#de18c6", "#de38ce", "#de59d6", "#de79de", "#de9ae7", "#debaef", "#dedbf7", "#defbff",
    "#e71c00", "#e73c08", "#e75d10", "#e77d18", "#e79e21", "#e7be29", "#e7df31", "#e7ff39",
    "#ef1c42", "#ef3c4a", "#ef5d52", "#ef7d5a", "#ef9e63", "#efbe6b", "#efdf73", "#efff7b",
    "#f71c84", "#f73c8c", "#f75d94", "#f77d9c", "#f79ea5", "#f7bead", "#f7dfb5", "#f7ffbd",
    "#ff1cc6", "#ff3cce", "#ff5dd6", "#ff7dde", "#ff9ee7", "#ffbeef", "#ffdff7", "#ffffff",
]


PALETTE_RGB332: List[str] = [
    "#000000", "#000068", "#0000b7", "#0000ff", "#330000", "#330068", "#3300b7", "#3300ff",
    "#5c0000", "#5c0068", "#5c00b7", "#5c00ff", "#7f0000", "#7f0068", "#7f00b7", "#7f00ff",
    "#a20000", "#a20068", "#a200b7", "#a200ff", "#c10000", "#c10068", "#c100b7", "#c100ff",
    "#e10000", "#e10068", "#e100b7", "#e100ff", "#ff0000", "#ff0068", "#ff00b7", "#ff00ff",
    "#003300", "#003368", "#0033b7", "#0033ff", "#333300", "#333368", "#3333b7", "#3333ff",
    "#5c3300", "#5c3368", "#5c33b7", "#5c33ff", "#7f3300", "#7f3368", "#7f33b7", "#7f33ff",
    "#a23300", "#a23368", "#a233b7", "#a233ff", "#c13300", "#c13368", "#c133b7", "#c133ff",
    "#e13300", "#e13368", "#e133b7", "#e133ff", "#ff3300", "#ff3368", "#ff33b7", "#ff33ff",
    "#005c00", "#005c68", "#005cb7", "#005cff", "#335c00", "#335c68", "#335cb7", "#335cff",
    "#5c5c00", "#5c5c68", "#5c5cb7", "#5c5cff", "#7f5c00", "#7f5c68", "#7f5cb7", "#7f5cff",
    "#a25c00", "#a25c68", "#a25cb7", "#a25cff", "#c15c00", "#c15c68", "#c15cb7", "#c15cff",
    "#e15c00", "#e15c68", "#e15cb7", "#e15cff", "#ff5c00", "#ff5c68", "#ff5cb7", "#ff5cff",
    "#007f00", "#007f68", "#007fb7", "#007fff", "#337f00", "#337f68", "#337fb7", "#337fff",
    "#5c7f00", "#5c7f68", "#5c7fb7", "#5c7fff", "#7f7f00", "#7f7f68", "#7f7fb7", "#7f7fff",
    "#a27f00", "#a27f68", "#a27fb7", "#a27fff", "#c17f00", "#c17f68", "#c17fb7", "#c17fff",
    "#e17f00", "#e17f68", "#e17fb7", "#e17fff", "#ff7f00", "#ff7f68", "#ff7fb7", "#ff7fff",
    "#00a200", "#00a268", "#00a2b7", "#00a2ff", "#33a200", "#33a268", "#33a2b7", "#33a2ff",
    "#5ca200", "#5ca268", "#5ca2b7", "#5ca2ff", "#7fa200", "#7fa268", "#7fa2b7", "#7fa2ff",
    "#a2a200", "#a2a268", "#a2a2b7", "#a2a2ff", "#c1a200", "#c1a268", "#c1a2b7", "#c1a2ff",
    "#e1a200", "#e1a268", "#e1a2b7", "#e1a2ff", "#ffa200", "#ffa268", "#ffa2b7", "#ffa2ff",
    "#00c100", "#00c168", "#00c1b7", "#00c1ff", "#33c100", "#33c168", "#33c1b7", "#33c1ff",
    "#5cc100", "#5cc168", "#5cc1b7", "#5cc1ff", "#7fc100", "#7fc168", "#7fc1b7", "#7fc1ff",
    "#a2c100", "#a2c168", "#a2c1b7", "#a2c1ff", "#c1c100", "#c1c168", "#c1c1b7", "#c1c1ff",
    "#e1c100", "#e1c168", "#e1c1b7", "#e1c1ff", "#ffc100", "#ffc168", "#ffc1b7", "#ffc1ff",
    "#00e100", "#20e168", "#00e1b7", "#00e1ff", "#33e100", "#33e168", "#33e1b7", "#33e1ff",
    "#5ce100", "#5ce168", "#5ce1b7", "#5ce1ff", "#7fe100", "#7fe168", "#7fe1b7", "#7fe1ff",
    "#a2e100", "#a2e168", "#a2e1b7", "#a2e1ff", "#c1e100", "#c1e168", "#c1e1b7", "#c1e1ff",
    "#e1e100", "#e1e168", "#e1e1b7", "#e1e1ff", "#ffe100", "#ffe168", "#ffe1b7", "#ffe1ff",
    "#00ff00", "#00ff68", "#00ffb7", "#00ffff", "#33ff00", "#33ff68", "#33ffb7", "#33ffff",
    "#5cff00", "#5cff68", "#5cffb7", "#5cffff", "#7fff00", "#7fff68", "#7fffb7", "#7fffff",
    "#a2ff00", "#a2ff68", "#a2ffb7", "#a2ffff", "#c1ff00", "#c1ff68", "#c1ffb7", "#c1ffff",
    "#e1ff00", "#e1ff68", "#e1ffb7", "#e1ffff", "#ffff00", "#ffff68", "#ffffb7", "#ffffff",
]

BUILTIN_PALETTES: Dict[str, List[str]] = {
    BUILTIN_XLIBC: PALETTE_XLIBC,
    BUILTIN_RGB332: PALETTE_RGB332,
}


def is_builtin(name: str) -> bool:
    return name in BUILTIN_PALETTES


def generate_builtin(palette) -> None:
    """
    Fill `palette` with the builtin table named by `palette.name`.

    Fixed entries, images and the automatic flag are not consulted. The
    table is converted into `palette.mode` in table order and every slot is
    marked valid.
    """
    table = BUILTIN_PALETTES[palette.name]
    rgba = np.array([hex_to_rgb(hx) + (255,) for hx in table], dtype=np.uint8)
    rounded, targets = convert_pixels(rgba, palette.mode)

    palette.entries = [
        PaletteEntry(
            color=Color(coerce_to_rgba_tuple(rounded[i]), int(targets[i])),
            index=i,
            valid=True,
        )
        for i in range(PALETTE_MAX_ENTRIES)
    ]
    palette.num_entries = PALETTE_MAX_ENTRIES
    palette.holes = 0


__all__ = [
    "PALETTE_XLIBC",
    "PALETTE_RGB332",
    "BUILTIN_PALETTES",
    "is_builtin",
    "generate_builtin",
]
