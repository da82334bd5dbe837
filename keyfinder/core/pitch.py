"""Pitch-class helpers: normalisation, naming and parsing."""

from typing import Iterable, List, Union

from .constants import PITCH_ALIASES, PITCH_NAMES


def normalize_pitch_class(value: int) -> int:
    """Reduce any integer pitch (or MIDI number) to a pitch class 0-11."""
    return int(value) % 12


def normalize_pitch_classes(values: Iterable[int]) -> List[int]:
    """Reduce, deduplicate and sort a collection of pitches."""
    return sorted({normalize_pitch_class(v) for v in values})


def pitch_class_name(pc: int) -> str:
    """Get the sharp-spelled name of a pitch class (e.g. 1 -> 'C#')."""
    return PITCH_NAMES[normalize_pitch_class(pc)]


def parse_pitch_class(value: Union[str, int]) -> int:
    """
    Parse a note name ("C", "Db", "f#", "A#4") or integer into a pitch class.

    Raises:
        ValueError: If the name is not a recognised note spelling
    """
    if isinstance(value, int):
        return normalize_pitch_class(value)

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return normalize_pitch_class(int(text))

    # Drop a trailing octave number ("C#4", "Bb-1")
    name = text.rstrip("0123456789").rstrip("-").upper()
    if name not in PITCH_ALIASES:
        raise ValueError(f"Unknown note name: {value!r}")
    return PITCH_ALIASES[name]
