"""Core types and constants for keyfinder."""

from .note import Note
from .pitch import (
    normalize_pitch_class,
    normalize_pitch_classes,
    pitch_class_name,
    parse_pitch_class,
)
from .constants import (
    PITCH_NAMES,
    NUM_PITCH_CLASSES,
    DEFAULT_FALLBACK_SIZE,
)

__all__ = [
    "Note",
    "normalize_pitch_class",
    "normalize_pitch_classes",
    "pitch_class_name",
    "parse_pitch_class",
    "PITCH_NAMES",
    "NUM_PITCH_CLASSES",
    "DEFAULT_FALLBACK_SIZE",
]
