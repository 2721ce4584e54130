"""Chromatic note names and interval arithmetic.

All fret and interval computations work on the twelve pitch classes of the
chromatic scale. Notes are compared by identity and converted to indices
with ``note_index``; everything else is modular arithmetic over
``MAX_NOTES``.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Dict

from fretmap.base import InvalidNoteError


@unique
class NoteName(Enum):
    """Enumeration of the twelve chromatic note names.

    Values correspond to semitone offsets from C within an octave.
    Uses flat notation for accidentals (Db, Eb, Gb, Ab, Bb).
    """

    C = 0  # C natural
    Db = 1  # D flat
    D = 2  # D natural
    Eb = 3  # E flat
    E = 4  # E natural
    F = 5  # F natural
    Gb = 6  # G flat
    G = 7  # G natural
    Ab = 8  # A flat
    A = 9  # A natural
    Bb = 10  # B flat
    B = 11  # B natural

    def add_steps(self, steps: int) -> NoteName:
        """Add semitone steps to this note name.

        Args:
            steps: Number of semitones to add (can be negative).

        Returns:
            The resulting note name after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + steps) % MAX_NOTES]

    @property
    def sharp_name(self) -> str:
        """The name of this note spelled with a sharp, if it is an accidental."""
        return SHARP_NAMES[self.value]


MAX_NOTES = 12
"""Number of distinct note names in the chromatic scale."""

NOTE_LOOKUP: Dict[int, NoteName] = {n.value: n for n in NoteName}
"""Lookup table from semitone offset (0-11) to NoteName."""

SHARP_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
"""Sharp spellings of the chromatic cycle, indexed by semitone offset."""


def _build_name_lookup() -> Dict[str, NoteName]:
    d: Dict[str, NoteName] = {}
    for n in NoteName:
        d[n.name.lower()] = n
        d[SHARP_NAMES[n.value].lower()] = n
    # Enharmonic spellings that cross a natural
    d["e#"] = NoteName.F
    d["fb"] = NoteName.E
    d["b#"] = NoteName.C
    d["cb"] = NoteName.B
    return d


_NAME_LOOKUP = _build_name_lookup()


def parse_note(name: str) -> NoteName:
    """Parse a note name such as ``"E"``, ``"F#"``, ``"Bb"`` or ``"G♯"``.

    Parsing is case-insensitive and accepts both sharp and flat spellings.

    Args:
        name: The note name to parse.

    Returns:
        The corresponding NoteName.

    Raises:
        InvalidNoteError: If the name does not denote a chromatic note.
    """
    key = name.strip().replace("♯", "#").replace("♭", "b").lower()
    try:
        return _NAME_LOOKUP[key]
    except KeyError:
        raise InvalidNoteError(name) from None


def to_note(note: object) -> NoteName:
    """Coerce a NoteName or a note-name string into a NoteName.

    Raises:
        InvalidNoteError: For any other value.
    """
    if isinstance(note, NoteName):
        return note
    elif isinstance(note, str):
        return parse_note(note)
    else:
        raise InvalidNoteError(note)


def note_index(note: object) -> int:
    """Index of a note in the chromatic cycle (C is 0).

    Args:
        note: A NoteName or a note-name string.

    Returns:
        The semitone offset of the note from C.

    Raises:
        InvalidNoteError: If the note is not in the chromatic set.
    """
    return to_note(note).value


def get_interval(note1: object, note2: object) -> int:
    """Return the positive number of half-steps between two notes.

    This is the minimum number of half-steps that will take you from
    ``note1`` upwards to ``note2``, so the result is always in ``[0, 11]``.

    Args:
        note1: The starting note.
        note2: The target note.

    Returns:
        The number of half-steps from ``note1`` up to ``note2``.

    Raises:
        InvalidNoteError: If either note is not in the chromatic set.
    """
    return (note_index(note2) - note_index(note1)) % MAX_NOTES


def note_at_fret(open_note: object, fret: int) -> NoteName:
    """Note sounded at a fret of a string tuned to ``open_note``."""
    return NOTE_LOOKUP[(note_index(open_note) + fret) % MAX_NOTES]
