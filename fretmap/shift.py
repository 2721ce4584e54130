"""Octave fold applied to the grid after marking.

Marks are placed relative to the first root fret of each string, so a
sequence can end up drawn an octave higher than where the display expects
it, depending on which end of the board is rendered first. Folding tags
down onto the fret an octave below makes the lowest octave complete
whatever the orientation.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from fretmap.constants import OCTAVE
from fretmap.grid import Fret, Grid, SequenceTag

TagFilter = Callable[[Fret, SequenceTag], bool]
"""Decides whether a tag may be added to a fret, given the fret as it is now."""


def _fold_into(lower: Fret, upper: Fret, accepts: Optional[TagFilter]) -> Fret:
    # Repeat until stable so a tag accepted late can unlock an earlier one
    folded = lower
    while True:
        added = [
            tag
            for tag in upper.sequences
            if tag not in folded.sequences
            and (accepts is None or accepts(folded, tag))
        ]
        if not added:
            return folded
        folded = folded.with_tags(added, upper.is_highlighted)


def shift_sequences_down(grid: Grid, accepts: Optional[TagFilter] = None) -> Grid:
    """Copy the tags of each fret onto the fret an octave below it.

    Frets are visited from the highest number down, so tags cascade through
    every lower octave of the same string. A tag is only copied onto a fret
    that ``accepts`` agrees to, which lets the caller keep tags inside their
    sequence's display window. A lower fret becomes highlighted when the
    upper fret is highlighted and contributed at least one tag. Tags already
    present are not added twice.

    Args:
        grid: The marked grid.
        accepts: Filter for copied tags, every tag is copied if None.

    Returns:
        A new grid with the same frets in the same order.
    """
    frets = list(grid)
    index_of: Dict[Tuple[int, int], int] = {
        (fret.string, fret.number): i for i, fret in enumerate(frets)
    }
    for i in sorted(range(len(frets)), key=lambda j: -frets[j].number):
        upper = frets[i]
        if upper.number < OCTAVE or not upper.sequences:
            continue
        lower_index = index_of.get((upper.string, upper.number - OCTAVE))
        if lower_index is None:
            continue
        frets[lower_index] = _fold_into(frets[lower_index], upper, accepts)
    return tuple(frets)
