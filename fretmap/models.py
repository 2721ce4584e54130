"""Scale and arpeggio models and the registry they are looked up in.

A model describes the intervals of a sequence relative to its root, and
optionally a table of positions: fret windows, relative to the root fret on
the lowest string, in which the sequence can be displayed one "box" at a
time. The registry is an explicit value handed to the fret mapper; there is
no global lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, cast

from fretmap.base import InvalidSequenceConfigError
from fretmap.notes import MAX_NOTES, to_note
from fretmap.sequence import PositionKind, Sequence

PositionWindow = Tuple[int, int]
"""A ``(start_offset, stop_offset)`` window relative to the root fret."""


def normalize_model_name(name: str) -> str:
    """Normalize a model name for lookup (``"Minor Pentatonic"`` -> ``"minor_pentatonic"``)."""
    return "_".join(name.strip().lower().replace("-", " ").split())


@dataclass(frozen=True)
class Model:
    """A scale or pattern definition.

    The intervals always start with 0 (the root) and ascend strictly within
    one octave. For example, major scale: ``(0, 2, 4, 5, 7, 9, 11)``.
    """

    name: str
    """Registry key of this model."""
    intervals: Tuple[int, ...]
    """Semitone intervals from the root, starting with 0."""
    positions: Optional[Tuple[PositionWindow, ...]] = None
    """Optional table of display windows, addressed by 1-based position."""

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise InvalidSequenceConfigError(
                f"Model {self.name} intervals must start with the root (0)"
            )
        last_steps = -1
        for steps in self.intervals:
            if not isinstance(steps, int) or steps < 0 or steps >= MAX_NOTES:
                raise InvalidSequenceConfigError(
                    f"Model {self.name} has out of range interval {steps!r}"
                )
            if steps <= last_steps:
                raise InvalidSequenceConfigError(
                    f"Model {self.name} intervals must be strictly ascending"
                )
            last_steps = steps
        if self.positions is not None:
            for window in self.positions:
                if len(window) != 2 or not all(isinstance(x, int) for x in window):
                    raise InvalidSequenceConfigError(
                        f"Model {self.name} has invalid position window {window!r}"
                    )

    @property
    def has_positions(self) -> bool:
        """Whether this model has a positions table."""
        return self.positions is not None

    def position_window(self, position: int) -> PositionWindow:
        """Look up a named position.

        Args:
            position: The 1-based position index.

        Returns:
            The ``(start_offset, stop_offset)`` window of the position.

        Raises:
            InvalidSequenceConfigError: If the model has no such position.
        """
        if self.positions is None or not 1 <= position <= len(self.positions):
            raise InvalidSequenceConfigError(
                f"Model {self.name} has no position {position}"
            )
        return self.positions[position - 1]


class ModelRegistry:
    """An immutable collection of models keyed by normalized name."""

    def __init__(self, models: Iterable[Model] = ()) -> None:
        self._models: Dict[str, Model] = {}
        for model in models:
            self._models[normalize_model_name(model.name)] = model

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_model_name(name) in self._models

    def __len__(self) -> int:
        return len(self._models)

    def names(self) -> List[str]:
        """Names of all registered models, in registration order."""
        return list(self._models)

    def get(self, name: str) -> Model:
        """Find a model by name.

        Args:
            name: The model name; case and separators are normalized.

        Returns:
            The registered model.

        Raises:
            InvalidSequenceConfigError: If no model has this name.
        """
        try:
            return self._models[normalize_model_name(name)]
        except KeyError:
            raise InvalidSequenceConfigError(f"Unknown model: {name!r}") from None

    def positions(self, name: str) -> Optional[Tuple[PositionWindow, ...]]:
        """Positions table of a model, or None if it has none."""
        return self.get(name).positions

    def register(self, model: Model) -> ModelRegistry:
        """Return a new registry that also contains ``model``.

        A model registered under an existing name replaces it.
        """
        return ModelRegistry([*self._models.values(), model])

    @classmethod
    def from_mapping(
        cls, spec: Mapping[str, Mapping[str, Any]]
    ) -> ModelRegistry:
        """Build a registry from plain data.

        Each entry maps a model name to ``{"intervals": [...]}`` with an
        optional ``"positions": [[start, stop], ...]`` table.
        """
        models = []
        for name, entry in spec.items():
            raw_positions = entry.get("positions")
            positions: Optional[Tuple[PositionWindow, ...]] = (
                None
                if raw_positions is None
                else tuple(cast(PositionWindow, tuple(w)) for w in raw_positions)
            )
            models.append(
                Model(
                    name=name,
                    intervals=tuple(entry["intervals"]),
                    positions=positions,
                )
            )
        return cls(models)


def intervals_for_sequence(seq: Sequence, registry: ModelRegistry) -> List[int]:
    """Intervals of a sequence after its root, in ascending order.

    Args:
        seq: The sequence to expand.
        registry: Registry holding the sequence's model.

    Returns:
        The model's intervals without the leading root interval.
    """
    return list(registry.get(seq.model).intervals[1:])


def validate_sequence(seq: Sequence, registry: ModelRegistry) -> None:
    """Check that a sequence can be placed on the fretboard.

    Raises:
        InvalidNoteError: If the tonality is not a chromatic note.
        InvalidSequenceConfigError: If the model is unknown, the position is
            outside the model's positions table, or a custom position lacks
            usable bounds.
    """
    to_note(seq.tonality)
    model = registry.get(seq.model)
    kind = seq.position_kind
    if kind == PositionKind.Custom:
        bounds = seq.custom_fret_bounds
        if (
            bounds is None
            or len(bounds) != 2
            or not all(isinstance(b, int) for b in bounds)
            or bounds[0] < 0
            or bounds[0] > bounds[1]
        ):
            raise InvalidSequenceConfigError(
                f"Custom position needs fret bounds (low, high), got {bounds!r}"
            )
    elif kind == PositionKind.Named and model.has_positions:
        model.position_window(seq.position)
    if seq.highlighted_interval is not None and not isinstance(
        seq.highlighted_interval, int
    ):
        raise InvalidSequenceConfigError(
            f"Invalid highlighted interval: {seq.highlighted_interval!r}"
        )


# Windows are offsets from the root fret on the lowest string.
_SEVEN_NOTE_POSITIONS: Tuple[PositionWindow, ...] = (
    (0, 4),
    (2, 5),
    (4, 8),
    (7, 10),
    (9, 12),
)
_MINOR_POSITIONS: Tuple[PositionWindow, ...] = (
    (0, 4),
    (2, 5),
    (3, 7),
    (7, 10),
    (8, 12),
)
_MINOR_PENTATONIC_POSITIONS: Tuple[PositionWindow, ...] = (
    (0, 3),
    (2, 5),
    (4, 8),
    (7, 10),
    (9, 12),
)
_MAJOR_PENTATONIC_POSITIONS: Tuple[PositionWindow, ...] = (
    (0, 3),
    (1, 5),
    (4, 7),
    (6, 10),
    (9, 12),
)

MODELS: List[Model] = [
    Model("major", (0, 2, 4, 5, 7, 9, 11), _SEVEN_NOTE_POSITIONS),
    Model("minor", (0, 2, 3, 5, 7, 8, 10), _MINOR_POSITIONS),
    Model("dorian", (0, 2, 3, 5, 7, 9, 10)),
    Model("phrygian", (0, 1, 3, 5, 7, 8, 10)),
    Model("lydian", (0, 2, 4, 6, 7, 9, 11)),
    Model("mixolydian", (0, 2, 4, 5, 7, 9, 10)),
    Model("locrian", (0, 1, 3, 5, 6, 8, 10)),
    Model("harmonic_minor", (0, 2, 3, 5, 7, 8, 11)),
    Model("melodic_minor", (0, 2, 3, 5, 7, 9, 11)),
    Model("minor_pentatonic", (0, 3, 5, 7, 10), _MINOR_PENTATONIC_POSITIONS),
    Model("major_pentatonic", (0, 2, 4, 7, 9), _MAJOR_PENTATONIC_POSITIONS),
    Model("minor_blues", (0, 3, 5, 6, 7, 10)),
    Model("whole_tone", (0, 2, 4, 6, 8, 10)),
    Model("chromatic", (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11)),
    Model("major_arpeggio", (0, 4, 7)),
    Model("minor_arpeggio", (0, 3, 7)),
    Model("dominant_seventh_arpeggio", (0, 4, 7, 10)),
]
"""Built-in scales and arpeggios."""

DEFAULT_REGISTRY = ModelRegistry(MODELS)
"""Registry of the built-in models, used when no registry is given."""
