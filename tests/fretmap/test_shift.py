from __future__ import annotations

from typing import Dict, List, Tuple

from fretmap.grid import Fret, Grid, SequenceTag
from fretmap.notes import NoteName, note_at_fret
from fretmap.shift import shift_sequences_down


def make_grid(
    tags: Dict[Tuple[int, int], List[SequenceTag]],
    highlighted: Tuple[Tuple[int, int], ...] = (),
    strings: int = 2,
    frets: int = 30,
) -> Grid:
    return tuple(
        Fret(
            string=s,
            number=n,
            note=note_at_fret(NoteName.E, n),
            sequences=tuple(tags.get((s, n), [])),
            is_highlighted=(s, n) in highlighted,
        )
        for s in range(strings)
        for n in range(frets)
    )


def at(grid: Grid, string: int, number: int) -> Fret:
    return next(f for f in grid if f.string == string and f.number == number)


def test_folds_tags_down_an_octave() -> None:
    tag = SequenceTag(0, 4)
    grid = shift_sequences_down(make_grid({(0, 16): [tag]}))
    assert at(grid, 0, 4).sequences == (tag,)
    assert at(grid, 0, 16).sequences == (tag,)
    assert not at(grid, 1, 4).sequences


def test_cascades_through_octaves() -> None:
    tag = SequenceTag(1, 2)
    grid = shift_sequences_down(make_grid({(1, 26): [tag]}))
    assert at(grid, 1, 14).sequences == (tag,)
    assert at(grid, 1, 2).sequences == (tag,)


def test_does_not_duplicate_tags() -> None:
    a, b = SequenceTag(0, 0), SequenceTag(1, 7)
    grid = shift_sequences_down(make_grid({(0, 0): [a], (0, 12): [a, b]}))
    assert at(grid, 0, 0).sequences == (a, b)


def test_carries_highlight_with_tags() -> None:
    a = SequenceTag(0, 0)
    grid = shift_sequences_down(make_grid({(0, 12): [a]}, highlighted=((0, 12),)))
    assert at(grid, 0, 0).is_highlighted


def test_highlight_without_new_tags_is_not_carried() -> None:
    a = SequenceTag(0, 0)
    grid = shift_sequences_down(
        make_grid({(0, 0): [a], (0, 12): [a]}, highlighted=((0, 12),))
    )
    assert not at(grid, 0, 0).is_highlighted


def test_keeps_order_and_input() -> None:
    original = make_grid({(0, 20): [SequenceTag(0, 3)]})
    shifted = shift_sequences_down(original)
    assert [(f.string, f.number) for f in shifted] == [
        (f.string, f.number) for f in original
    ]
    assert not at(original, 0, 8).sequences
    assert shift_sequences_down(()) == ()


def test_skips_tags_the_filter_rejects() -> None:
    tag = SequenceTag(0, 4)
    grid = shift_sequences_down(
        make_grid({(0, 16): [tag]}, highlighted=((0, 16),)),
        accepts=lambda fret, _: fret.number >= 12,
    )
    assert not at(grid, 0, 4).sequences
    assert not at(grid, 0, 4).is_highlighted
    assert at(grid, 0, 16).sequences == (tag,)


def test_filter_sees_tags_added_during_the_fold() -> None:
    # The second tag is only accepted once the first one landed
    first, second = SequenceTag(0, 0), SequenceTag(1, 0)
    grid = shift_sequences_down(
        make_grid({(0, 12): [second, first]}),
        accepts=lambda fret, tag: tag.index == 0 or bool(fret.sequences),
    )
    assert at(grid, 0, 0).sequences == (first, second)
