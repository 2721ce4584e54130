from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretmap.base import InvalidNoteError
from fretmap.notes import (
    MAX_NOTES,
    NoteName,
    get_interval,
    note_at_fret,
    note_index,
    parse_note,
)
from tests.fretmap.hypo import configure_hypo

configure_hypo()

notes = st.sampled_from(list(NoteName))


@given(notes)
def test_interval_to_self_is_zero(a: NoteName) -> None:
    assert get_interval(a, a) == 0


@given(notes, notes)
def test_interval_is_antisymmetric(a: NoteName, b: NoteName) -> None:
    ab = get_interval(a, b)
    ba = get_interval(b, a)
    assert 0 <= ab < MAX_NOTES
    assert (ab + ba) % MAX_NOTES == 0
    if a != b:
        assert ab + ba == MAX_NOTES


@pytest.mark.parametrize(
    "note1, note2, expected",
    [
        (NoteName.E, NoteName.A, 5),
        (NoteName.A, NoteName.E, 7),
        (NoteName.B, NoteName.C, 1),
        (NoteName.C, NoteName.B, 11),
        ("E", "G#", 4),
        ("F#", NoteName.Gb, 0),
    ],
)
def test_interval(note1: object, note2: object, expected: int) -> None:
    assert get_interval(note1, note2) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("C", NoteName.C),
        ("c#", NoteName.Db),
        ("Db", NoteName.Db),
        ("G♯", NoteName.Ab),
        ("B♭", NoteName.Bb),
        (" e ", NoteName.E),
        ("E#", NoteName.F),
        ("Cb", NoteName.B),
    ],
)
def test_parse_note(name: str, expected: NoteName) -> None:
    assert parse_note(name) == expected


@pytest.mark.parametrize("bad", ["H", "", "C##", "do"])
def test_parse_note_invalid(bad: str) -> None:
    with pytest.raises(InvalidNoteError):
        parse_note(bad)


@pytest.mark.parametrize("bad", [3, None, "X", 4.0])
def test_interval_invalid_note(bad: object) -> None:
    with pytest.raises(InvalidNoteError):
        get_interval(bad, NoteName.C)
    with pytest.raises(InvalidNoteError):
        get_interval(NoteName.C, bad)


def test_note_index() -> None:
    assert note_index(NoteName.C) == 0
    assert note_index("B") == 11


def test_add_steps_wraps() -> None:
    assert NoteName.B.add_steps(1) == NoteName.C
    assert NoteName.C.add_steps(-1) == NoteName.B
    assert NoteName.E.add_steps(24) == NoteName.E


def test_note_at_fret() -> None:
    assert note_at_fret(NoteName.E, 0) == NoteName.E
    assert note_at_fret(NoteName.E, 5) == NoteName.A
    assert note_at_fret(NoteName.E, 12) == NoteName.E
    assert note_at_fret("A", 3) == NoteName.C


def test_sharp_name() -> None:
    assert NoteName.Gb.sharp_name == "F#"
    assert NoteName.E.sharp_name == "E"
