"""Configuration of the fretboard the sequences are mapped onto.

This module defines the ``Config`` class holding the instrument, tuning,
capo, orientation and fret counts, along with constructors for the preset
instruments.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from fretmap import constants
from fretmap.base import InvalidFretboardConfigError
from fretmap.models import DEFAULT_REGISTRY, ModelRegistry
from fretmap.notes import NoteName
from fretmap.tunings import TUNINGS, Instrument, parse_tuning


@dataclass(frozen=True)
class Config:
    """Complete fretboard configuration.

    The tuning is always stored lowest string first; ``flipped`` only
    changes the order the strings are handed to the fret mapper in, so
    that a display drawing the highest string first can use the grid's
    string numbers as row numbers.
    """

    instrument_name: str  # Name of the instrument or tuning preset
    tuning: Tuple[NoteName, ...]  # Open string notes, lowest string first
    capo: int  # Fret of the capo, 0 for none
    flipped: bool  # Hand the tuning to the mapper highest string first
    nb_frets: int  # Frets computed per string
    max_nb_frets: int  # Frets per string after extension
    visible_frets: int  # Frets shown by the text printer
    registry: ModelRegistry  # Models sequences are looked up in

    @property
    def tuning_notes(self) -> Tuple[NoteName, ...]:
        """The tuning in the order the fret mapper expects it.

        Returns:
            The tuning reversed when flipped, otherwise as stored.
        """
        return tuple(reversed(self.tuning)) if self.flipped else self.tuning

    def with_tuning_text(self, text: str) -> Config:
        """Return a copy of this config with a custom tuning.

        Args:
            text: Note names, lowest string first (e.g. ``"D A D G B E"``).

        Returns:
            A new config with the parsed tuning.
        """
        return replace(self, instrument_name="Custom", tuning=parse_tuning(text))

    def validate(self) -> None:
        """Check that a fret grid can be built with this configuration.

        Raises:
            InvalidFretboardConfigError: If the fret counts, capo or tuning
                are unusable.
        """
        if not self.tuning:
            raise InvalidFretboardConfigError("Tuning must have at least one string")
        if self.nb_frets <= 0 or self.nb_frets % constants.OCTAVE != 0:
            raise InvalidFretboardConfigError(
                f"Number of frets must be a positive multiple of {constants.OCTAVE}"
            )
        if self.max_nb_frets < self.nb_frets:
            raise InvalidFretboardConfigError(
                "Maximum number of frets must not be below the number of frets"
            )
        if not 0 <= self.capo < self.nb_frets:
            raise InvalidFretboardConfigError(f"Capo out of range: {self.capo}")
        if not 0 < self.visible_frets <= self.max_nb_frets:
            raise InvalidFretboardConfigError(
                f"Visible frets out of range: {self.visible_frets}"
            )


def get_config_for_instrument(
    instrument: Instrument,
    capo: int = 0,
    flipped: bool = False,
    visible_frets: int = constants.VISIBLE_FRETS,
) -> Config:
    """Get the configuration for a preset instrument.

    Args:
        instrument: The instrument whose tuning to use.
        capo: Fret of the capo, 0 for none.
        flipped: Whether the display draws the highest string first.
        visible_frets: Frets shown by the text printer.

    Returns:
        A Config with the instrument's tuning and the default fret counts
        and models.
    """
    tuning = TUNINGS[instrument]
    return Config(
        instrument_name=tuning.name,
        tuning=tuning.notes,
        capo=capo,
        flipped=flipped,
        nb_frets=constants.NB_FRETS,
        max_nb_frets=constants.MAX_NB_FRETS,
        visible_frets=visible_frets,
        registry=DEFAULT_REGISTRY,
    )


def init_config() -> Config:
    """Initialize a default configuration: standard guitar, no capo, not flipped."""
    return get_config_for_instrument(Instrument.StandardGuitar)
