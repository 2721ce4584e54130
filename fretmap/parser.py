"""Parser for one-line sequence descriptors using Lark.

A descriptor names the tonality and model of a sequence, optionally
followed by a position, a highlighted interval and an intersection flag::

    E major              whole fretboard
    A minor_pentatonic@2 second position of the model
    C major@[3-7]        custom bounds, frets 3 to 7
    G major*0            highlight the root
    D major_arpeggio&    only where another sequence is shown
"""

from __future__ import annotations

from typing import Iterable, List

from lark import Lark, Transformer
from lark.exceptions import LarkError, VisitError

from fretmap.base import ParseError
from fretmap.models import normalize_model_name
from fretmap.notes import parse_note
from fretmap.sequence import CUSTOM_POSITION, Sequence

SEQUENCE_GRAMMAR = """
%import common.WS
%ignore WS

NOTE: /[A-Ga-g](#|b|♯|♭)?/
MODEL: /[a-zA-Z][a-zA-Z0-9_-]*/
INT: /\\d+/

start: sequence

sequence: NOTE MODEL position? highlight? intersect?

position: "@" INT                  -> named_position
        | "@" "[" INT "-" INT "]"  -> custom_position

highlight: "*" INT
intersect: "&"
"""

_PARSER = Lark(SEQUENCE_GRAMMAR, parser="lalr")


class SequenceTransformer(Transformer):
    """Transform a parsed descriptor into a Sequence."""

    def start(self, items):
        return items[0]

    def sequence(self, items):
        """Combine tonality, model and the optional suffixes."""
        tonality, model = items[0], items[1]
        fields = {}
        for item in items[2:]:
            fields.update(item)
        return Sequence(tonality=tonality, model=model, **fields)

    def named_position(self, items):
        return {"position": int(items[0])}

    def custom_position(self, items):
        return {
            "position": CUSTOM_POSITION,
            "custom_fret_bounds": (int(items[0]), int(items[1])),
        }

    def highlight(self, items):
        return {"highlighted_interval": int(items[0])}

    def intersect(self, _items):
        return {"is_intersected": True}

    def NOTE(self, token):
        return parse_note(str(token))

    def MODEL(self, token):
        return normalize_model_name(str(token))


def parse_sequence(text: str) -> Sequence:
    """Parse a sequence descriptor.

    Args:
        text: A descriptor such as ``"A minor_pentatonic@2*0"``.

    Returns:
        The described Sequence. The model name is normalized but not looked
        up; unknown models are reported when the fret grid is built.

    Raises:
        ParseError: If the text is not a valid descriptor.
    """
    try:
        tree = _PARSER.parse(text)
        return SequenceTransformer().transform(tree)
    except VisitError as e:
        raise e.orig_exc from None
    except LarkError as e:
        raise ParseError(f"Invalid sequence descriptor {text!r}: {e}") from e


def parse_sequences(texts: Iterable[str]) -> List[Sequence]:
    """Parse several descriptors, keeping their order."""
    return [parse_sequence(text) for text in texts]
