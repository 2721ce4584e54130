"""Sequence descriptors: the scale and pattern overlays shown on a fretboard."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto, unique
from typing import Optional, Tuple

from fretmap.base import InvalidSequenceConfigError
from fretmap.notes import NoteName

CUSTOM_POSITION = -1
"""Position value selecting the sequence's own fret bounds."""

WHOLE_POSITION = 0
"""Position value showing the sequence over the whole fretboard."""


@unique
class PositionKind(Enum):
    """How the ``position`` of a sequence restricts where it is shown."""

    Custom = auto()  # Use custom_fret_bounds
    Whole = auto()  # No window
    Named = auto()  # 1-based index into the model's positions table

    @staticmethod
    def of(position: int) -> PositionKind:
        """Classify a position value.

        Args:
            position: The position of a sequence.

        Returns:
            The kind of window the position selects.

        Raises:
            InvalidSequenceConfigError: If the position is below -1.
        """
        if position == CUSTOM_POSITION:
            return PositionKind.Custom
        elif position == WHOLE_POSITION:
            return PositionKind.Whole
        elif position > WHOLE_POSITION:
            return PositionKind.Named
        else:
            raise InvalidSequenceConfigError(f"Invalid position: {position}")


@dataclass(frozen=True)
class Sequence:
    """A scale or pattern overlay to highlight on the fretboard.

    The sequence is rooted at ``tonality`` and takes its intervals (and its
    optional positions table) from the model registered under ``model``.
    """

    tonality: NoteName
    """The root note of the sequence."""
    model: str
    """Name of the model in the registry (e.g. ``"major"``)."""
    position: int = WHOLE_POSITION
    """-1 for custom bounds, 0 for the whole fretboard, >0 for a named position."""
    custom_fret_bounds: Optional[Tuple[int, int]] = None
    """Inclusive ``(low, high)`` fret bounds, used iff ``position == -1``."""
    is_intersected: bool = False
    """Only show this sequence on frets already marked by another sequence."""
    highlighted_interval: Optional[int] = None
    """Interval whose frets get the highlight flag, if any."""

    @property
    def position_kind(self) -> PositionKind:
        return PositionKind.of(self.position)

    def with_position(self, position: int) -> Sequence:
        """Return a copy of this sequence displayed in another position."""
        return replace(self, position=position)

    def with_custom_bounds(self, low: int, high: int) -> Sequence:
        """Return a copy of this sequence restricted to frets ``low..high``."""
        return replace(self, position=CUSTOM_POSITION, custom_fret_bounds=(low, high))
