"""Base exceptions for fretmap.

Every error raised by the fret mapping is a ``FretmapError`` so that callers
can catch the whole family at once. Errors always abort the grid build; no
partial grid is ever returned.
"""

from __future__ import annotations

from typing import Any


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")


class FretmapError(Exception):
    """Root of the fretmap error taxonomy."""


class InvalidNoteError(FretmapError):
    """Raised when a note is not one of the twelve chromatic note names."""

    def __init__(self, note: Any) -> None:
        """Initialize with the offending note.

        Args:
            note: The value that could not be resolved to a note name.
        """
        super().__init__(f"Invalid note: {note!r}")
        self.note = note


class InvalidSequenceConfigError(FretmapError):
    """Raised when a sequence or model cannot be placed on the fretboard.

    Covers unknown models, positions outside a model's positions table, and
    custom positions without usable fret bounds.
    """


class InvalidFretboardConfigError(FretmapError):
    """Raised for fret counts or capo values the grid cannot be built with."""


class ParseError(FretmapError):
    """Raised when a sequence descriptor cannot be parsed."""
