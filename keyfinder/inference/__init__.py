"""Inference layer - key guessing from pitch classes.

This layer turns notes into candidate keys:
- Pitch-class weighting (durations, uniform or baseline selections)
- Scale model (Major / natural Minor, 24 transpositions)
- Containment matching and weighted scoring
- Candidate ranking with coverage and emphasis annotations
- Best-guess explanation

Pipeline: Notes → NoteWeights → [Containment, Weighted scores] → Ranking
"""

from .scales import (
    Mode,
    SCALE_INTERVALS,
    scale_instance,
    scale_degrees,
    all_scale_keys,
    key_name,
    relative_key,
    parallel_key,
    preview_sequence,
)
from .weighting import (
    NoteWeights,
    WeightingPolicy,
    weights_from_events,
    weights_from_notes,
    total_weight,
    percentages,
    distribution,
)
from .matching import (
    ScoringParams,
    ScaleScore,
    ContainmentMatcher,
    WeightedScorer,
    DEFAULT_PARAMS,
)
from .key import KeyRanker, Ranking, Candidate, coverage_pct
from .explanation import Reason, explain, ambiguity_hints

__all__ = [
    # Scale model
    "Mode",
    "SCALE_INTERVALS",
    "scale_instance",
    "scale_degrees",
    "all_scale_keys",
    "key_name",
    "relative_key",
    "parallel_key",
    "preview_sequence",
    # Weighting
    "NoteWeights",
    "WeightingPolicy",
    "weights_from_events",
    "weights_from_notes",
    "total_weight",
    "percentages",
    "distribution",
    # Matching
    "ScoringParams",
    "ScaleScore",
    "ContainmentMatcher",
    "WeightedScorer",
    "DEFAULT_PARAMS",
    # Ranking
    "KeyRanker",
    "Ranking",
    "Candidate",
    "coverage_pct",
    # Explanation
    "Reason",
    "explain",
    "ambiguity_hints",
]
