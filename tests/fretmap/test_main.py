from __future__ import annotations

import pytest

from fretmap.config import init_config
from fretmap.fretboard import get_frets
from fretmap.grid import Fret, SequenceTag
from fretmap.main import main, make_parser, run
from fretmap.notes import NoteName
from fretmap.printer import format_fret, print_grid
from fretmap.sequence import Sequence

STANDARD = [NoteName.E, NoteName.A, NoteName.D, NoteName.G, NoteName.B, NoteName.E]


def test_format_fret() -> None:
    empty = Fret(string=0, number=1, note=NoteName.F)
    assert format_fret(empty) == "-"
    root = Fret(0, 0, NoteName.E, (SequenceTag(0, 0),), True)
    assert format_fret(root) == "R*"
    third = Fret(0, 4, NoteName.Ab, (SequenceTag(1, 4), SequenceTag(0, 7)))
    assert format_fret(third) == "4"
    # Highlight left over below a capo is not drawn
    capoed = Fret(0, 0, NoteName.E, (), True)
    assert format_fret(capoed) == "-"


def test_print_grid() -> None:
    grid = get_frets([Sequence(NoteName.E, "major", highlighted_interval=0)], STANDARD)
    lines = print_grid(grid, 5).splitlines()
    assert lines[0] == "   |   0   1   2   3   4"
    assert len(lines) == 1 + len(STANDARD)
    assert lines[-1] == "E  |  R*   -   2   -   4"
    assert lines[1] == lines[-1]
    # The B string is drawn second from the top
    assert lines[2].startswith("B  |")


def test_print_grid_flipped() -> None:
    tuning = list(reversed(STANDARD))
    grid = get_frets([Sequence(NoteName.E, "major")], tuning, 0, True)
    lines = print_grid(grid, 3, flipped=True).splitlines()
    assert lines[2].startswith("B  |")
    assert lines[-2].startswith("A  |")


def test_run_uses_config() -> None:
    config = init_config()
    grid = run(config, ["E major*0"])
    assert grid == get_frets(
        [Sequence(NoteName.E, "major", highlighted_interval=0)], STANDARD
    )


def test_make_parser_defaults() -> None:
    args = make_parser().parse_args(["E major"])
    assert args.sequences == ["E major"]
    assert args.capo == 0
    assert not args.flipped


def test_main_prints_grid(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--frets", "5", "E major*0"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "   |   0   1   2   3   4"
    assert out[-1] == "E  |  R*   -   2   -   4"


def test_main_capo(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--frets", "3", "--capo", "2", "E major"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "E  |   -   -   2"


def test_main_custom_tuning(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--frets", "1", "--tuning", "D A D G B E", "D major"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "D  |   R"


def test_main_list_models(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list-models"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "major" in out
    assert "minor_pentatonic" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["H major"],
        ["E bebop"],
        ["E major@9"],
        ["--instrument", "theremin", "E major"],
        ["--tuning", "E X", "E major"],
        ["--capo", "40", "E major"],
    ],
)
def test_main_errors(argv: list) -> None:
    assert main(argv) == 1
