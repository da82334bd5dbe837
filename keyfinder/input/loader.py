"""MIDI loading utilities."""

import logging
from pathlib import Path
from typing import List

import pretty_midi

from ..core import Note
from ..core.constants import MIDI_SUFFIXES
from ..inference.weighting import NoteWeights, weights_from_notes

logger = logging.getLogger(__name__)


class MidiLoader:
    """Reads MIDI files into Note lists."""

    SUPPORTED_FORMATS = MIDI_SUFFIXES

    def __init__(self, include_drums: bool = False):
        """
        Initialize MidiLoader.

        Args:
            include_drums: Keep notes from drum tracks (unpitched) if True
        """
        self.include_drums = include_drums

    def load(self, path) -> List[Note]:
        """
        Load every note of a MIDI file.

        Args:
            path: Path to a .mid/.midi file

        Returns:
            Notes from all (non-drum) instruments, ordered by onset

        Raises:
            ValueError: If file format not supported or unreadable
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"MIDI file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        try:
            midi = pretty_midi.PrettyMIDI(str(path))
        except (OSError, EOFError, ValueError, KeyError, IndexError) as e:
            raise ValueError(f"Could not parse MIDI file {path}: {e}") from e

        notes = []
        for instrument in midi.instruments:
            if instrument.is_drum and not self.include_drums:
                continue
            for midi_note in instrument.notes:
                notes.append(Note(
                    pitch=midi_note.pitch,
                    onset=midi_note.start,
                    offset=midi_note.end,
                    velocity=midi_note.velocity,
                    instrument=instrument.name or None,
                ))

        notes.sort(key=lambda n: (n.onset, n.pitch))
        logger.info("Loaded %d notes from %s", len(notes), path.name)
        return notes

    def load_weights(self, path) -> NoteWeights:
        """Load a MIDI file and weigh pitch classes by total duration."""
        return weights_from_notes(self.load(path))
