# palette_gen/resolve.py
from __future__ import annotations

"""
Merge quantizer output with fixed colour constraints.

Order of operations:
  1. store_quantized : quantized colours go to slots [0, count), valid.
  2. place_non_exact : each non-exact fixed colour is looked up among the
                       quantized slots and swapped into its pinned index;
                       the previous occupant moves to the vacated slot.
  3. place_exact     : each exact fixed colour is written verbatim at its
                       pinned index; a valid occupant is first moved to the
                       lowest free slot.
  4. finish          : num_entries = 1 + highest index touched; unused slots
                       below it are counted as holes.

No step ever drops a valid entry: a displaced entry is swapped or moved,
and running out of free slots is an error.
"""

from typing import List, Optional, Sequence

from .colour_convert import convert_color
from .core_types import PaletteEntry, RGBATuple
from .errors import PaletteFullError, QuantizeError, UnresolvedFixedColorError
from .palette import Palette
from .utils import debug_log, warn


class FixedColorResolver:
    def __init__(self, palette: Palette, strict: bool = False, debug: bool = False) -> None:
        self.palette = palette
        self.strict = strict
        self.debug = debug
        self.max_index = -1
        self.quantized_count = 0

    def _touch(self, index: int) -> None:
        if index > self.max_index:
            self.max_index = index

    def _free_slot(self) -> Optional[int]:
        for j, entry in enumerate(self.palette.entries):
            if not entry.valid:
                return j
        return None

    # 1

    def store_quantized(self, colours: Sequence[RGBATuple]) -> int:
        pal = self.palette
        capacity = pal.max_entries - pal.exact_entries
        if len(colours) > capacity:
            raise QuantizeError(
                f"quantizer returned {len(colours)} colors, at most {capacity} allowed",
                pal.name,
            )
        for i, rgba in enumerate(colours):
            pal.entries[i] = PaletteEntry(
                color=convert_color(rgba, pal.mode), index=i, valid=True
            )
            self._touch(i)
        self.quantized_count = len(colours)
        return self.quantized_count

    # 2

    def place_non_exact(self) -> List[PaletteEntry]:
        """Swap non-exact fixed colours into place. Returns the unresolved ones."""
        pal = self.palette
        entries = pal.entries
        unresolved: List[PaletteEntry] = []

        for fixed in pal.fixed_entries:
            if fixed.exact:
                continue
            want = convert_color(fixed.color.rgba, pal.mode).rgb
            dst = fixed.index

            for j in range(self.quantized_count):
                entry = entries[j]
                if entry.valid and entry.color.rgb == want:
                    entries[j], entries[dst] = entries[dst], entries[j]
                    entries[dst].index = dst
                    entries[dst].valid = True
                    entries[j].index = j
                    self._touch(dst)
                    break
            else:
                unresolved.append(fixed)
                self._report_unresolved(fixed)

        pal.unresolved.extend(unresolved)
        return unresolved

    def _report_unresolved(self, fixed: PaletteEntry) -> None:
        msg = (
            f"fixed color {fixed.color.hex} for index {fixed.index} "
            "was not kept by the quantizer"
        )
        if self.strict:
            raise UnresolvedFixedColorError(msg, self.palette.name)
        warn(f"palette '{self.palette.name}': {msg}; slot left as quantized")

    # 3

    def place(self, fixed: PaletteEntry) -> int:
        """Write a fixed colour at its index, moving a valid occupant away first."""
        pal = self.palette
        entries = pal.entries
        dst = fixed.index

        if entries[dst].valid:
            j = self._free_slot()
            if j is None:
                raise PaletteFullError(
                    f"no free slot to relocate entry {dst} for fixed color {fixed.color.hex}",
                    pal.name,
                )
            moved = entries[dst].copy()
            moved.index = j
            entries[j] = moved
            self._touch(j)
            if self.debug:
                debug_log(f"moved {moved.color.hex} from index {dst} to {j}")

        entries[dst] = PaletteEntry(
            color=convert_color(fixed.color.rgba, pal.mode),
            index=dst,
            exact=fixed.exact,
            valid=True,
        )
        self._touch(dst)
        return dst

    def place_exact(self) -> None:
        for fixed in self.palette.fixed_entries:
            if fixed.exact:
                self.place(fixed)

    def place_all_direct(self) -> None:
        """No quantizer output: non-exact fixed colours first, then exact ones."""
        for fixed in self.palette.fixed_entries:
            if not fixed.exact:
                self.place(fixed)
        self.place_exact()

    # 4

    def finish(self) -> int:
        pal = self.palette
        pal.num_entries = self.max_index + 1
        pal.holes = sum(1 for e in pal.entries[: pal.num_entries] if not e.valid)
        return pal.num_entries


__all__ = ["FixedColorResolver"]
