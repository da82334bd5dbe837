"""keyfinder - Major/Minor key guessing from MIDI files and note selections.

Architecture Layers:
    1. core/      - Note type, pitch-class names and constants
    2. input/     - MIDI loading
    3. inference/ - Weighting, scale model, matching, ranking, explanation
    4. session/   - Interactive selection state with undo/redo
    5. output/    - Scale preview export (MIDI)
"""

__version__ = "0.1.0"

# Core types
from .core import Note

# Input layer
from .input import MidiLoader

# Inference layer
from .inference import (
    Mode,
    KeyRanker,
    Ranking,
    Candidate,
    ScoringParams,
    WeightingPolicy,
    ContainmentMatcher,
    WeightedScorer,
)

# Session layer
from .session import SelectionHistory, SelectionSession

# Output layer
from .output import PreviewExporter

__all__ = [
    # Core
    "Note",
    # Input
    "MidiLoader",
    # Inference
    "Mode",
    "KeyRanker",
    "Ranking",
    "Candidate",
    "ScoringParams",
    "WeightingPolicy",
    "ContainmentMatcher",
    "WeightedScorer",
    # Session
    "SelectionHistory",
    "SelectionSession",
    # Output
    "PreviewExporter",
]
