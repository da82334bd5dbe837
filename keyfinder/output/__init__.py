"""Output layer - export to MIDI.

This layer handles exporting scale previews as MIDI files.
"""

from .midi import PreviewExporter

__all__ = [
    "PreviewExporter",
]
