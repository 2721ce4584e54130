"""Records of the fret grid produced by the fret mapper.

The grid is a flat tuple of ``Fret`` records, string by string, each string
ordered by fret number. Records are immutable: every transformation of the
grid builds new records instead of editing existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from fretmap.notes import NoteName


@dataclass(frozen=True)
class SequenceTag:
    """Marks a fret as belonging to a sequence at a given interval."""

    index: int
    """Position of the sequence in the caller's list of sequences."""
    interval: int
    """Half-steps from the sequence root to the note of the fret."""


@dataclass(frozen=True)
class Fret:
    """One cell of the fretboard and the sequences that claim it."""

    string: int
    """String number, the index of the string in the tuning."""
    number: int
    """Fret number; 0 is the open string."""
    note: NoteName
    """Note sounded at this fret, ignoring any capo."""
    sequences: Tuple[SequenceTag, ...] = ()
    """Tags of the sequences shown on this fret, in marking order."""
    is_highlighted: bool = False
    """Whether a sequence highlighted the interval it has on this fret."""

    def with_tags(self, tags: Iterable[SequenceTag], highlight: bool = False) -> Fret:
        """Add tags to this fret, skipping tags it already carries.

        Args:
            tags: The tags to add, in order.
            highlight: Whether to set the highlight flag.

        Returns:
            A new fret, or this fret if nothing changed.
        """
        added = list(self.sequences)
        for tag in tags:
            if tag not in added:
                added.append(tag)
        is_highlighted = self.is_highlighted or highlight
        if len(added) == len(self.sequences) and is_highlighted == self.is_highlighted:
            return self
        return replace(self, sequences=tuple(added), is_highlighted=is_highlighted)

    def has_tag_from(self, indices: Iterable[int]) -> bool:
        """Check whether any tag on this fret belongs to one of ``indices``."""
        wanted = set(indices)
        return any(tag.index in wanted for tag in self.sequences)


Grid = Tuple[Fret, ...]
"""The flat fret grid, string by string."""


def string_frets(grid: Grid, string: int) -> Tuple[Fret, ...]:
    """All frets of one string, in grid order."""
    return tuple(fret for fret in grid if fret.string == string)
