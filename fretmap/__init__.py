"""Map scales and patterns onto the frets of a stringed instrument."""

from fretmap.base import (
    FretmapError,
    InvalidFretboardConfigError,
    InvalidNoteError,
    InvalidSequenceConfigError,
    ParseError,
)
from fretmap.fretboard import get_frets
from fretmap.grid import Fret, Grid, SequenceTag
from fretmap.models import DEFAULT_REGISTRY, Model, ModelRegistry
from fretmap.notes import NoteName, get_interval, parse_note
from fretmap.sequence import Sequence

__all__ = [
    "DEFAULT_REGISTRY",
    "Fret",
    "FretmapError",
    "Grid",
    "InvalidFretboardConfigError",
    "InvalidNoteError",
    "InvalidSequenceConfigError",
    "Model",
    "ModelRegistry",
    "NoteName",
    "ParseError",
    "Sequence",
    "SequenceTag",
    "get_frets",
    "get_interval",
    "parse_note",
]
