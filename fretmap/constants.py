"""Fretboard dimensions shared by the fret mapper and the command line."""

OCTAVE = 12
"""Number of half-steps (and frets) in an octave."""

NB_FRETS = 24
"""Frets computed per string before extension; must be a multiple of OCTAVE."""

MAX_NB_FRETS = 30
"""Frets per string after the extension by duplication."""

VISIBLE_FRETS = 22
"""Frets shown by the text printer by default."""
