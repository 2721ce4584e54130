"""Fret mapping: which frets belong to which sequences.

This module builds the fret grid for a tuning and marks every fret that
belongs to one of the requested sequences. The work happens in three
phases:

1. For each string, build the frets and their notes.
2. Mark the frets of each sequence: the root and every interval of the
   sequence's model, plus the fret an octave away, skipping frets outside
   the sequence's position window. Non-intersected sequences are marked
   first; intersected sequences only mark frets that a non-intersected
   sequence already marked.
3. Extend each string by duplicating its first frets, fold the grid down an
   octave without leaving any sequence's window, and clear the tags of the
   frets below the capo.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Set

from fretmap.base import InvalidFretboardConfigError, MatchException
from fretmap.constants import MAX_NB_FRETS, NB_FRETS, OCTAVE
from fretmap.grid import Fret, Grid, SequenceTag
from fretmap.models import (
    DEFAULT_REGISTRY,
    ModelRegistry,
    PositionWindow,
    intervals_for_sequence,
    validate_sequence,
)
from fretmap.notes import NoteName, get_interval, note_at_fret, to_note
from fretmap.sequence import PositionKind, Sequence
from fretmap.shift import TagFilter, shift_sequences_down

GridTransform = Callable[[Grid, TagFilter], Grid]
"""A whole-grid post-processing pass, given the filter for tags it adds."""


def lowest_tuning_note(tuning_notes: List[NoteName], flipped: bool) -> NoteName:
    """Find the tuning note of the lowest string.

    The incoming tuning notes may be flipped for display purposes. If they
    are, the lowest string is the last element, otherwise the first.

    Args:
        tuning_notes: Open string notes, one per string.
        flipped: Whether the tuning is listed highest string first.

    Returns:
        The open note of the lowest string.
    """
    return tuning_notes[-1] if flipped else tuning_notes[0]


def position_offsets(
    sequences: List[Sequence], tuning_notes: List[NoteName], flipped: bool
) -> List[int]:
    """Compute the position offset of each sequence.

    The offset of a sequence is the fret of its root on the lowest string,
    i.e. the half-steps from the lowest open string to the tonality. Model
    position windows are relative to that fret.

    Args:
        sequences: The sequences, in input order.
        tuning_notes: Open string notes, one per string.
        flipped: Whether the tuning is listed highest string first.

    Returns:
        One offset per sequence, in input order.
    """
    if not tuning_notes:
        return [0 for _ in sequences]
    lowest = lowest_tuning_note(tuning_notes, flipped)
    return [get_interval(lowest, seq.tonality) for seq in sequences]


def is_in_position(fret_number: int, position: PositionWindow, offset: int) -> bool:
    """Check that a fret is in the boundaries of a position.

    A window whose start is not below its stop wraps around: it covers the
    frets from its start upwards and the frets up to its stop.

    Args:
        fret_number: The fret to check.
        position: The ``(start_offset, stop_offset)`` window of the position.
        offset: The fret of the sequence root on the lowest string.

    Returns:
        True if the fret lies in the window.
    """
    start = position[0] + offset
    stop = position[1] + offset
    if start < stop:
        return start <= fret_number <= stop
    else:
        return fret_number >= start or fret_number <= stop


def should_display_fret(
    fret: int,
    index: int,
    seq: Sequence,
    offsets: List[int],
    registry: ModelRegistry,
) -> bool:
    """Decide whether sequence ``seq`` may be shown on fret number ``fret``.

    Args:
        fret: The fret number.
        index: Input position of the sequence, used to find its offset.
        seq: The sequence.
        offsets: Position offsets of all sequences, in input order.
        registry: Registry holding the sequence's model.

    Returns:
        True if the fret is within the sequence's display window.
    """
    kind = seq.position_kind
    if kind == PositionKind.Custom:
        assert seq.custom_fret_bounds is not None
        low, high = seq.custom_fret_bounds
        return low <= fret <= high
    elif kind == PositionKind.Whole:
        return True
    elif kind == PositionKind.Named:
        model = registry.get(seq.model)
        if not model.has_positions:
            return True
        return is_in_position(fret, model.position_window(seq.position), offsets[index])
    else:
        raise MatchException(kind)


def build_string_frets(string: int, open_note: NoteName, nb_frets: int) -> List[Fret]:
    """Create the unmarked frets of one string.

    Args:
        string: The string number.
        open_note: The note of the open string.
        nb_frets: Number of frets to create, starting from the open string.

    Returns:
        The frets ``0 .. nb_frets - 1`` of the string.
    """
    return [
        Fret(string=string, number=number, note=note_at_fret(open_note, number))
        for number in range(nb_frets)
    ]


def extend_string_frets(
    frets: List[Fret], nb_frets: int, max_nb_frets: int
) -> List[Fret]:
    """Extend a string by duplicating the frets needed to reach the upper limit.

    Since ``nb_frets`` is a whole number of octaves, the duplicated frets keep
    their notes and tags, only their numbers move up by ``nb_frets``.
    """
    extra = [
        replace(fret, number=fret.number + nb_frets)
        for fret in frets[: max_nb_frets - nb_frets]
    ]
    return frets + extra


def find_root_fret(frets: List[Fret], tonality: NoteName) -> int:
    """Number of the first fret whose note is ``tonality``."""
    for fret in frets:
        if fret.note == tonality:
            return fret.number
    raise InvalidFretboardConfigError(f"No fret sounds {tonality.name}")


def _apply_sequence(
    frets: List[Fret],
    index: int,
    seq: Sequence,
    offsets: List[int],
    registry: ModelRegistry,
    nb_frets: int,
    required_indices: Optional[Set[int]],
) -> int:
    root_fret = find_root_fret(frets, to_note(seq.tonality))
    skipped = 0
    for interval in [0, *intervals_for_sequence(seq, registry)]:
        fret_number = (root_fret + interval) % nb_frets
        tag = SequenceTag(index=index, interval=interval)
        # Modify the fret and the one 12 half-steps above/below it
        for target in (fret_number, (fret_number + OCTAVE) % nb_frets):
            fret = frets[target]
            if required_indices is not None and not fret.has_tag_from(
                required_indices
            ):
                skipped += 1
                continue
            if not should_display_fret(target, index, seq, offsets, registry):
                continue
            frets[target] = fret.with_tags([tag], interval == seq.highlighted_interval)
    return skipped


def mark_string_frets(
    frets: Iterable[Fret],
    sequences: List[Sequence],
    offsets: List[int],
    registry: ModelRegistry,
    nb_frets: int = NB_FRETS,
) -> List[Fret]:
    """Mark the frets of one string that belong to each sequence.

    Marking happens in two phases. First every non-intersected sequence
    marks its frets. Then every intersected sequence marks only those of its
    frets that already carry a tag from a non-intersected sequence. The
    order of the sequences within a phase does not change the tags a fret
    ends up with, only their order.

    Args:
        frets: The unmarked frets ``0 .. nb_frets - 1`` of the string.
        sequences: All sequences, in input order.
        offsets: Position offsets of the sequences, in input order.
        registry: Registry holding the sequences' models.
        nb_frets: Number of frets on the string.

    Returns:
        New frets for the string, with their tags.
    """
    marked = list(frets)
    base = [(i, seq) for i, seq in enumerate(sequences) if not seq.is_intersected]
    intersected = [(i, seq) for i, seq in enumerate(sequences) if seq.is_intersected]
    base_indices = {i for i, _ in base}
    for index, seq in base:
        _apply_sequence(marked, index, seq, offsets, registry, nb_frets, None)
    for index, seq in intersected:
        skipped = _apply_sequence(
            marked, index, seq, offsets, registry, nb_frets, base_indices
        )
        if skipped:
            logging.debug(
                "Intersected sequence %d skipped %d unmarked frets", index, skipped
            )
    return marked


def window_tag_filter(
    sequences: List[Sequence], offsets: List[int], registry: ModelRegistry
) -> TagFilter:
    """Build the filter that keeps tags added after marking in their windows.

    A tag is accepted on a fret when its sequence may be shown there and,
    for an intersected sequence, when the fret already carries a tag from a
    non-intersected sequence. These are the same rules the marking applies.
    """
    base_indices = {i for i, seq in enumerate(sequences) if not seq.is_intersected}

    def accepts(fret: Fret, tag: SequenceTag) -> bool:
        seq = sequences[tag.index]
        if seq.is_intersected and not fret.has_tag_from(base_indices):
            return False
        return should_display_fret(fret.number, tag.index, seq, offsets, registry)

    return accepts


def filter_capo(frets: Grid, capo: int) -> Grid:
    """Remove the sequence tags of the frets below the capo.

    The highlight flag and the note of those frets are left as they are.
    """
    return tuple(
        replace(fret, sequences=()) if fret.number < capo else fret for fret in frets
    )


def check_dimensions(nb_frets: int, max_nb_frets: int, capo: int) -> None:
    """Validate fret counts and capo.

    Raises:
        InvalidFretboardConfigError: If ``nb_frets`` is not a positive
            multiple of an octave, ``max_nb_frets`` is below it, or the capo
            is negative.
    """
    if nb_frets <= 0 or nb_frets % OCTAVE != 0:
        raise InvalidFretboardConfigError(
            f"Number of frets must be a positive multiple of {OCTAVE}: {nb_frets}"
        )
    if max_nb_frets < nb_frets:
        raise InvalidFretboardConfigError(
            f"Maximum number of frets {max_nb_frets} is below {nb_frets}"
        )
    if capo < 0:
        raise InvalidFretboardConfigError(f"Capo must not be negative: {capo}")


def get_frets(
    sequences: Iterable[Sequence],
    tuning_notes: Iterable[object],
    capo: int = 0,
    flipped: bool = False,
    registry: Optional[ModelRegistry] = None,
    nb_frets: int = NB_FRETS,
    max_nb_frets: int = MAX_NB_FRETS,
    shift: GridTransform = shift_sequences_down,
) -> Grid:
    """Generate the list of frets with infos on the sequences they belong to.

    Args:
        sequences: The sequences to show, in input order. Tags refer to
            sequences by their position in this list.
        tuning_notes: Open string notes, one per string (NoteName or name).
        capo: Fret of the capo; frets below it carry no tags.
        flipped: Whether the tuning is listed highest string first.
        registry: Models to look sequences up in, DEFAULT_REGISTRY if None.
        nb_frets: Frets computed per string, a multiple of 12.
        max_nb_frets: Frets per string after extension by duplication.
        shift: Whole-grid pass applied after marking, before the capo. It
            receives the filter that tags it adds must pass.

    Returns:
        The frets of all strings, string by string.

    Raises:
        InvalidNoteError: If a tuning note or tonality is not a chromatic note.
        InvalidSequenceConfigError: If a sequence cannot be placed.
        InvalidFretboardConfigError: If the dimensions or capo are invalid.
    """
    check_dimensions(nb_frets, max_nb_frets, capo)
    models = DEFAULT_REGISTRY if registry is None else registry
    seqs = list(sequences)
    tuning = [to_note(note) for note in tuning_notes]
    for seq in seqs:
        validate_sequence(seq, models)
    logging.debug(
        "Mapping %d sequences on %d strings (capo %d, flipped %s)",
        len(seqs),
        len(tuning),
        capo,
        flipped,
    )

    offsets = position_offsets(seqs, tuning, flipped)

    all_frets: List[Fret] = []
    for string, open_note in enumerate(tuning):
        frets = build_string_frets(string, open_note, nb_frets)
        frets = mark_string_frets(frets, seqs, offsets, models, nb_frets)
        all_frets.extend(extend_string_frets(frets, nb_frets, max_nb_frets))

    grid: Grid = tuple(all_frets)
    grid = shift(grid, window_tag_filter(seqs, offsets, models))
    return filter_capo(grid, capo)
