"""Shared fixtures: small MIDI files written with pretty_midi."""

from pathlib import Path
from typing import Iterable, Tuple

import pretty_midi
import pytest


def write_midi(
    path: Path,
    notes: Iterable[Tuple[int, float, float]],
    drums: Iterable[Tuple[int, float, float]] = (),
) -> Path:
    """Write (pitch, start, end) notes to a single-piano MIDI file."""
    midi = pretty_midi.PrettyMIDI(initial_tempo=120.0)

    piano = pretty_midi.Instrument(program=0, name="Piano")
    for pitch, start, end in notes:
        piano.notes.append(pretty_midi.Note(velocity=90, pitch=pitch, start=start, end=end))
    midi.instruments.append(piano)

    drums = list(drums)
    if drums:
        kit = pretty_midi.Instrument(program=0, is_drum=True, name="Drums")
        for pitch, start, end in drums:
            kit.notes.append(pretty_midi.Note(velocity=100, pitch=pitch, start=start, end=end))
        midi.instruments.append(kit)

    path.parent.mkdir(parents=True, exist_ok=True)
    midi.write(str(path))
    return path


# C held long, then a short E and G: a C major triad leaning on C
C_HEAVY_NOTES = [
    (60, 0.0, 2.0),  # C4
    (64, 2.0, 2.5),  # E4
    (67, 2.5, 3.0),  # G4
    (72, 3.0, 4.0),  # C5
]


@pytest.fixture
def c_heavy_midi(tmp_path) -> Path:
    """MIDI file weighing C 3s, E 0.5s, G 0.5s."""
    return write_midi(tmp_path / "c_heavy.mid", C_HEAVY_NOTES)


@pytest.fixture
def midi_writer():
    """The write_midi helper, for tests that build their own files."""
    return write_midi
