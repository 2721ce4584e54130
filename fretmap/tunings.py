"""Tuning presets for common fretted instruments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Dict, Tuple

from fretmap.base import InvalidNoteError
from fretmap.notes import NoteName, parse_note


@unique
class Instrument(Enum):
    """Instruments with a preset tuning."""

    StandardGuitar = auto()
    DropDGuitar = auto()
    OpenGGuitar = auto()
    OpenDGuitar = auto()
    DadgadGuitar = auto()
    StandardBass = auto()
    FiveStringBass = auto()
    Ukulele = auto()
    Mandolin = auto()
    Banjo = auto()


@dataclass(frozen=True)
class TuningConfig:
    """Open string notes of an instrument, lowest string first."""

    name: str
    notes: Tuple[NoteName, ...]


def parse_tuning(text: str) -> Tuple[NoteName, ...]:
    """Parse a tuning written as note names, e.g. ``"D A D G B E"``.

    Names may be separated by spaces or commas. A string without
    separators is read one note at a time, so ``"EADGBE"`` and ``"DADF#AD"``
    also work.

    Raises:
        InvalidNoteError: If a name is not a note, or the tuning is empty.
    """
    parts = text.replace(",", " ").split()
    if len(parts) == 1:
        parts = _split_compact(parts[0])
    if not parts:
        raise InvalidNoteError(text)
    return tuple(parse_note(p) for p in parts)


def _split_compact(text: str) -> list[str]:
    parts: list[str] = []
    for ch in text:
        if parts and (ch in "#♯♭" or (ch == "b" and parts[-1][0].isupper())):
            parts[-1] += ch
        else:
            parts.append(ch)
    return parts


E, A, D, G, B, C, Gb = (
    NoteName.E,
    NoteName.A,
    NoteName.D,
    NoteName.G,
    NoteName.B,
    NoteName.C,
    NoteName.Gb,
)

TUNINGS: Dict[Instrument, TuningConfig] = {
    Instrument.StandardGuitar: TuningConfig("Standard guitar", (E, A, D, G, B, E)),
    Instrument.DropDGuitar: TuningConfig("Drop D guitar", (D, A, D, G, B, E)),
    Instrument.OpenGGuitar: TuningConfig("Open G guitar", (D, G, D, G, B, D)),
    Instrument.OpenDGuitar: TuningConfig("Open D guitar", (D, A, D, Gb, A, D)),
    Instrument.DadgadGuitar: TuningConfig("DADGAD guitar", (D, A, D, G, A, D)),
    Instrument.StandardBass: TuningConfig("Standard bass", (E, A, D, G)),
    Instrument.FiveStringBass: TuningConfig("Five-string bass", (B, E, A, D, G)),
    # Reentrant, listed in string order rather than pitch order
    Instrument.Ukulele: TuningConfig("Ukulele", (G, C, E, A)),
    Instrument.Mandolin: TuningConfig("Mandolin", (G, D, A, E)),
    Instrument.Banjo: TuningConfig("Banjo", (G, D, G, B, D)),
}
"""Preset tunings, lowest string first."""


def instrument_from_name(name: str) -> Instrument:
    """Find an instrument by enum name, ignoring case and separators.

    Raises:
        ValueError: If no instrument has this name.
    """
    key = name.replace("-", "").replace("_", "").replace(" ", "").lower()
    for inst in Instrument:
        if inst.name.lower() == key:
            return inst
    raise ValueError(f"Unknown instrument: {name}")
