"""Pitch-class weighting - reduce notes or selections to NoteWeights.

NoteWeights is a plain ``Dict[int, float]`` from pitch class (0-11) to a
non-negative weight. Absent pitch classes weigh 0.

File-derived input weighs each pitch class by its total sounding duration.
Manual selections are weighed by a ``WeightingPolicy``: uniformly, or from a
previously loaded MIDI baseline so that hand-added notes do not dominate the
emphasis-based explanation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..core import Note
from ..core.constants import ADDED_NOTE_FRACTION, MIN_ADDED_WEIGHT, NUM_PITCH_CLASSES
from ..core.pitch import normalize_pitch_class, normalize_pitch_classes

logger = logging.getLogger(__name__)

NoteWeights = Dict[int, float]


def weights_from_events(events: Iterable[Tuple[int, float]]) -> NoteWeights:
    """
    Sum (pitch_class, duration_or_count) pairs per pitch class.

    Args:
        events: Pairs of pitch (any integer, reduced mod 12) and weight

    Returns:
        NoteWeights; empty when no events are given
    """
    weights: NoteWeights = {}
    for pitch, amount in events:
        pc = normalize_pitch_class(pitch)
        weights[pc] = weights.get(pc, 0.0) + float(amount)
    return weights


def weights_from_notes(notes: Iterable[Note]) -> NoteWeights:
    """Weigh each pitch class by the cumulative duration of its notes."""
    return weights_from_events((note.pitch_class, note.duration) for note in notes)


def total_weight(weights: NoteWeights) -> float:
    """Sum of all weights (0.0 for an empty mapping)."""
    return float(sum(weights.values()))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return int(np.floor(value + 0.5))


def distribution(weights: NoteWeights) -> np.ndarray:
    """
    12-element normalised pitch class histogram.

    Returns all zeros when the total weight is 0.
    """
    histogram = np.zeros(NUM_PITCH_CLASSES)
    for pc, w in weights.items():
        histogram[normalize_pitch_class(pc)] += w
    if histogram.sum() > 0:
        histogram /= histogram.sum()
    return histogram


def percentages(weights: NoteWeights) -> Dict[int, int]:
    """Share of the total weight per pitch class, in whole percent."""
    shares = distribution(weights)
    return {pc: round_half_up(100.0 * shares[normalize_pitch_class(pc)]) for pc in weights}


@dataclass(frozen=True)
class WeightingPolicy:
    """How to weigh a bare selection of pitch classes.

    Attributes:
        baseline: Weights from a loaded MIDI file, or empty for uniform
    """

    baseline: NoteWeights = field(default_factory=dict)

    @classmethod
    def uniform(cls) -> "WeightingPolicy":
        """Every selected pitch class weighs 1."""
        return cls()

    @classmethod
    def from_baseline(cls, baseline: Optional[NoteWeights]) -> "WeightingPolicy":
        """Weights come from a MIDI baseline; an empty baseline means uniform."""
        return cls(baseline=dict(baseline or {}))

    @property
    def has_emphasis(self) -> bool:
        """True when weights carry real emphasis data from a file."""
        return len(self.baseline) > 0

    @property
    def added_note_weight(self) -> float:
        """Weight given to selected pitch classes missing from the baseline."""
        if not self.baseline:
            return 1.0
        return max(MIN_ADDED_WEIGHT, min(self.baseline.values()) * ADDED_NOTE_FRACTION)

    def weigh(self, pitch_classes: Iterable[int]) -> NoteWeights:
        """
        Build NoteWeights for a selection.

        Args:
            pitch_classes: Selected pitch classes (duplicates ignored)

        Returns:
            NoteWeights with one entry per selected pitch class
        """
        pcs: List[int] = normalize_pitch_classes(pitch_classes)
        if not self.has_emphasis:
            return {pc: 1.0 for pc in pcs}

        default = self.added_note_weight
        weights = {pc: float(self.baseline.get(pc, default)) for pc in pcs}
        added = [pc for pc in pcs if pc not in self.baseline]
        if added:
            logger.debug("Weighting %d added notes at %.4f", len(added), default)
        return weights
