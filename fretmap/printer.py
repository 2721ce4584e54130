"""Plain text dump of a fret grid for the command line."""

from __future__ import annotations

from typing import Dict, List

from fretmap.grid import Fret, Grid, string_frets

CELL_WIDTH = 4


def format_fret(fret: Fret) -> str:
    """Format one fret: the interval of its first tag, ``R`` for the root.

    A highlighted fret gets a ``*`` suffix; a fret without tags is ``-``.
    """
    if not fret.sequences:
        label = "-"
    else:
        interval = fret.sequences[0].interval
        label = "R" if interval == 0 else str(interval)
    if fret.is_highlighted and fret.sequences:
        label += "*"
    return label


def print_grid(grid: Grid, visible_frets: int, flipped: bool = False) -> str:
    """Render a grid as text, one line per string.

    Strings are drawn highest first: when the grid is not flipped string 0
    is the lowest string and goes at the bottom.

    Args:
        grid: The grid returned by ``get_frets``.
        visible_frets: Number of frets to draw, from the open string.
        flipped: Whether string 0 of the grid is the highest string.

    Returns:
        The rendered lines joined by newlines.
    """
    strings = sorted({fret.string for fret in grid})
    if not flipped:
        strings.reverse()
    header = "   |" + "".join(
        f"{number:>{CELL_WIDTH}}" for number in range(visible_frets)
    )
    lines: List[str] = [header]
    for string in strings:
        by_number: Dict[int, Fret] = {
            fret.number: fret for fret in string_frets(grid, string)
        }
        label = by_number[0].note.sharp_name if 0 in by_number else "?"
        cells = []
        for number in range(visible_frets):
            text = format_fret(by_number[number]) if number in by_number else ""
            cells.append(f"{text:>{CELL_WIDTH}}")
        lines.append(f"{label:<3}|" + "".join(cells))
    return "\n".join(lines)
