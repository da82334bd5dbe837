"""MIDI export of scale previews."""

import logging
from pathlib import Path
from typing import List, Union

import pretty_midi

from ..core import Note
from ..core.constants import PREVIEW_BASE_MIDI, PREVIEW_NOTE_LENGTH, PREVIEW_TEMPO
from ..inference.scales import Mode, preview_sequence

logger = logging.getLogger(__name__)


class PreviewExporter:
    """Render a scale as an ascending one-octave MIDI phrase."""

    def __init__(
        self,
        tempo: float = PREVIEW_TEMPO,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        note_length: float = PREVIEW_NOTE_LENGTH,
        velocity: int = 108,
        base: int = PREVIEW_BASE_MIDI,
    ):
        """
        Initialize PreviewExporter.

        Args:
            tempo: Tempo in BPM written to the file
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            note_length: Seconds between successive preview notes
            velocity: MIDI velocity of the scale notes (the final tonic is
                played at full velocity)
            base: MIDI number of C in the preview octave
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.note_length = note_length
        self.velocity = velocity
        self.base = base

    def build_notes(self, root: int, mode: Union[Mode, str]) -> List[Note]:
        """Notes for the preview phrase; the closing tonic is held twice as long."""
        pitches = preview_sequence(root, mode, base=self.base)
        notes = []
        for idx, pitch in enumerate(pitches):
            onset = idx * self.note_length
            last = idx == len(pitches) - 1
            notes.append(Note(
                pitch=pitch,
                onset=onset,
                offset=onset + self.note_length * (2 if last else 1),
                velocity=127 if last else self.velocity,
            ))
        return notes

    def to_pretty_midi(self, notes: List[Note]) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )
        for note in notes:
            instrument.notes.append(pretty_midi.Note(
                velocity=note.velocity,
                pitch=note.pitch,
                start=note.onset,
                end=note.offset,
            ))

        midi.instruments.append(instrument)
        return midi

    def export(self, root: int, mode: Union[Mode, str], output_path) -> List[Note]:
        """
        Write the preview of a scale to a MIDI file.

        Args:
            root: Root pitch class
            mode: Major or Minor
            output_path: Path to output MIDI file

        Returns:
            The notes written
        """
        notes = self.build_notes(root, mode)
        midi = self.to_pretty_midi(notes)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))
        logger.info("Wrote %d preview notes to %s", len(notes), output_path)
        return notes
