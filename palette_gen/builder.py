# palette_gen/builder.py
from __future__ import annotations

"""
Palette construction.

PaletteBuilder.generate(palette, jobs) runs the whole protocol for one
palette:

  builtin name   -> copy the builtin table, done
  automatic      -> collect images from the jobs using this palette
  capacity check -> more fixed colours than slots is an error
  images         -> filter + quantize + resolve fixed colours
  no images      -> fixed colours only

Any failure raises a PaletteError and leaves no partial table behind as a
success. The quantizer is released on every exit path.
"""

import time
from typing import Iterable, List, Optional

from .automatic import ConvertJob, collect_automatic_images
from .colour_convert import convert_color
from .core_types import RGBATuple
from .errors import (
    EmptyPaletteError,
    ImageLoadError,
    PaletteError,
    QuantizeError,
    TooManyFixedColorsError,
)
from .image_io import PillowImageSource
from .palette import Palette
from .palette_data import generate_builtin, is_builtin
from .pixels import ImageSource, exact_rgb_keys, iter_image_pixels, prepare_pixels
from .quantize import PillowQuantizer, QuantizerFactory
from .resolve import FixedColorResolver
from .utils import (
    debug_log,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_config_line,
    warn,
)


class PaletteBuilder:
    """
    Builds palettes with injected collaborators.

    Args:
      image_source      : object with load(ImageRef) -> (H,W,4) uint8 RGBA
      quantizer_factory : callable (speed, max_colors) -> Quantizer
      debug             : print debug lines (also on when palette.debug is set)
      strict_fixed      : raise instead of warn when a non-exact fixed
                          colour is missing from the quantizer output
    """

    def __init__(
        self,
        image_source: Optional[ImageSource] = None,
        quantizer_factory: QuantizerFactory = PillowQuantizer,
        debug: bool = False,
        strict_fixed: bool = False,
    ) -> None:
        self.image_source = image_source if image_source is not None else PillowImageSource()
        self.quantizer_factory = quantizer_factory
        self.debug = debug
        self.strict_fixed = strict_fixed

    def generate(self, palette: Palette, jobs: Iterable[ConvertJob] = ()) -> None:
        debug = self.debug or palette.debug
        if is_builtin(palette.name):
            generate_builtin(palette)
            if debug:
                debug_log(f"builtin palette '{palette.name}' ({palette.mode})")
            return

        t_start = time.perf_counter()
        log(f"Generating palette '{palette.name}'")

        if palette.automatic:
            try:
                added = collect_automatic_images(palette, jobs, debug=debug)
            except PaletteError:
                error(f"Failed building automatic palette '{palette.name}'.")
                raise
            if debug:
                debug_log(f"automatic palette '{palette.name}': {added} image(s)")

        if len(palette.fixed_entries) > palette.max_entries:
            raise TooManyFixedColorsError(
                f"number of fixed colors ({len(palette.fixed_entries)}) exceeds "
                f"maximum palette size ({palette.max_entries})",
                palette.name,
            )

        palette.validate()
        if debug:
            print_config_line(
                "palette",
                [
                    ("Mode", palette.mode),
                    ("Max entries", palette.max_entries),
                    ("Speed", palette.quantize_speed),
                    ("Fixed", len(palette.fixed_entries)),
                    ("Images", len(palette.images)),
                    ("Automatic", palette.automatic),
                ],
                debug=True,
            )

        palette.reset_table()
        resolver = FixedColorResolver(palette, strict=self.strict_fixed, debug=debug)

        try:
            if palette.images:
                self._generate_with_images(palette, resolver, debug)
            else:
                warn(f"Creating palette '{palette.name}' without images")
                if not palette.fixed_entries:
                    raise EmptyPaletteError(
                        "no images and no fixed colors to create palette with", palette.name
                    )
                resolver.place_all_direct()
            resolver.finish()
        except PaletteError:
            palette.reset_table()
            raise

        unused = palette.max_entries - palette.num_entries + palette.holes
        log(
            f"Generated palette '{palette.name}' with {palette.num_entries} colors "
            f"({unused} unused)"
        )
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Quantized", resolver.quantized_count),
                        ("Holes", palette.holes),
                        ("Unresolved", len(palette.unresolved)),
                        ("Time", format_seconds_compact(time.perf_counter() - t_start)),
                    ]
                )
            )

    def _generate_with_images(
        self, palette: Palette, resolver: FixedColorResolver, debug: bool
    ) -> None:
        capacity = palette.max_entries - palette.exact_entries
        if debug:
            debug_log(f"Available quantization colors: {capacity}")

        exact_keys = exact_rgb_keys(palette.fixed_entries)
        need_quantize = False
        colours: List[RGBATuple] = []

        with self.quantizer_factory(palette.quantize_speed, capacity) as quantizer:
            for fixed in palette.fixed_entries:
                if not fixed.exact:
                    seed = convert_color(fixed.color.rgba, palette.mode)
                    quantizer.add_fixed_color(seed.rgba, 0)

            images = palette.images if capacity > 1 else []
            try:
                for image, pixels in iter_image_pixels(images, self.image_source):
                    log(f" - Reading '{image.path}'")
                    row = prepare_pixels(pixels, exact_keys, palette.mode)
                    del pixels
                    if row.shape[1] > 0:
                        quantizer.add_image_pixels(row)
                        need_quantize = True
                    del row
            except ImageLoadError as e:
                error(f"Failed to load image for palette '{palette.name}'")
                raise ImageLoadError(e.message, palette.name) from e

            if need_quantize:
                try:
                    colours = quantizer.quantize()
                except QuantizeError as e:
                    error(f"Failed to generate palette '{palette.name}'")
                    raise QuantizeError(e.message, palette.name) from e

        if need_quantize:
            resolver.store_quantized(colours)
            resolver.place_non_exact()
        else:
            if debug:
                debug_log("no pixels left to quantize; using fixed colors only")
            for fixed in palette.fixed_entries:
                if not fixed.exact:
                    resolver.place(fixed)
        resolver.place_exact()


def generate(
    palette: Palette,
    jobs: Iterable[ConvertJob] = (),
    **builder_kwargs,
) -> Palette:
    """Convenience wrapper: build `palette` with a default PaletteBuilder."""
    PaletteBuilder(**builder_kwargs).generate(palette, jobs)
    return palette


__all__ = ["PaletteBuilder", "generate"]
