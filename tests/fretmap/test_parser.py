import pytest

from fretmap.base import ParseError
from fretmap.notes import NoteName
from fretmap.parser import parse_sequence, parse_sequences
from fretmap.sequence import Sequence


def test_parse_whole_scale() -> None:
    assert parse_sequence("E major") == Sequence(tonality=NoteName.E, model="major")


def test_parse_named_position() -> None:
    seq = parse_sequence("A minor_pentatonic@2")
    assert seq.tonality == NoteName.A
    assert seq.model == "minor_pentatonic"
    assert seq.position == 2


def test_parse_custom_bounds() -> None:
    seq = parse_sequence("C major@[3-7]")
    assert seq.position == -1
    assert seq.custom_fret_bounds == (3, 7)


def test_parse_highlight_and_intersect() -> None:
    seq = parse_sequence("G major*0")
    assert seq.highlighted_interval == 0
    assert not seq.is_intersected
    assert parse_sequence("D major_arpeggio&").is_intersected


def test_parse_everything() -> None:
    seq = parse_sequence("F# Minor-Pentatonic @ 1 * 3 &")
    assert seq == Sequence(
        tonality=NoteName.Gb,
        model="minor_pentatonic",
        position=1,
        is_intersected=True,
        highlighted_interval=3,
    )


@pytest.mark.parametrize(
    "text, note",
    [("Bb major", NoteName.Bb), ("eb dorian", NoteName.Eb), ("C♯ major", NoteName.Db)],
)
def test_parse_accidentals(text: str, note: NoteName) -> None:
    assert parse_sequence(text).tonality == note


def test_parse_zero_position_is_whole() -> None:
    assert parse_sequence("E major@0").position == 0


@pytest.mark.parametrize(
    "text",
    ["", "E", "H major", "E major@", "E major@[3]", "E major*", "E major&&", "major E"],
)
def test_parse_invalid(text: str) -> None:
    with pytest.raises(ParseError):
        parse_sequence(text)


def test_parse_sequences_keeps_order() -> None:
    seqs = parse_sequences(["E major", "A minor&"])
    assert [s.tonality for s in seqs] == [NoteName.E, NoteName.A]
    assert seqs[1].is_intersected
