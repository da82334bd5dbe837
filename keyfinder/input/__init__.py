"""Input layer - reading notes from files."""

from .loader import MidiLoader

__all__ = ["MidiLoader"]
