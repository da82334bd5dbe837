"""Global constants for keyfinder."""

# Pitch names (sharps), index == pitch class
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Accepted spellings when parsing note names
PITCH_ALIASES = {
    "C": 0, "B#": 0,
    "C#": 1, "DB": 1,
    "D": 2,
    "D#": 3, "EB": 3,
    "E": 4, "FB": 4,
    "F": 5, "E#": 5,
    "F#": 6, "GB": 6,
    "G": 7,
    "G#": 8, "AB": 8,
    "A": 9,
    "A#": 10, "BB": 10,
    "B": 11, "CB": 11,
}

NUM_PITCH_CLASSES = 12

# Manual notes added on top of a MIDI baseline get a fraction of the
# quietest baseline note, floored at MIN_ADDED_WEIGHT
ADDED_NOTE_FRACTION = 0.25
MIN_ADDED_WEIGHT = 0.0001

# Weighted fallback list length when no scale contains every note
DEFAULT_FALLBACK_SIZE = 12

# Scale preview defaults
PREVIEW_BASE_MIDI = 60  # C4
PREVIEW_TEMPO = 120.0
PREVIEW_NOTE_LENGTH = 0.19  # seconds between preview notes


MIDI_SUFFIXES = {".mid", ".midi"}
