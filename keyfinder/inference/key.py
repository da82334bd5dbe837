"""Key ranking - merge containment and weighted results into candidate keys.

Implements the key guess with:
- Containment matching (keys that hold every used note)
- Degree-weighted scoring (tonic, dominant, third emphasis)
- Weighted fallback when no key contains every note
- Coverage percentages per candidate
- Emphasis rank annotation for 100% ties
- A plain-language explanation of the best guess
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.constants import DEFAULT_FALLBACK_SIZE
from ..core.pitch import normalize_pitch_classes
from .explanation import Reason, ambiguity_hints, explain
from .matching import ContainmentMatcher, ScaleScore, ScoringParams, WeightedScorer
from .scales import Mode, key_name, scale_instance
from .weighting import NoteWeights, round_half_up, total_weight, weights_from_events

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """A candidate key with its derived fields."""
    root: int
    mode: Mode
    contains_all: bool
    score: float
    penalty: float
    coverage_in_pct: int = 0
    coverage_out_pct: int = 0
    weighted_rank: int = 0  # Position in the full 24-key weighted order
    emphasis_rank: Optional[int] = None  # Position among 100% ties, if any

    @property
    def net_score(self) -> float:
        return self.score - self.penalty

    @property
    def name(self) -> str:
        return key_name(self.root, self.mode)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "mode": self.mode.value,
            "name": self.name,
            "contains_all": self.contains_all,
            "coverage_in_pct": self.coverage_in_pct,
            "coverage_out_pct": self.coverage_out_pct,
            "net_score": self.net_score,
            "emphasis_rank": self.emphasis_rank,
        }


@dataclass
class Ranking:
    """Container for one ranking call."""

    used_notes: List[int]
    weights: NoteWeights
    candidates: List[Candidate] = field(default_factory=list)
    contained: bool = False  # Candidates all contain every used note
    has_emphasis: bool = False  # Weights carry real emphasis data
    reasons: List[Reason] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)

    @property
    def best(self) -> Optional[Candidate]:
        """The best guess: first candidate, or None for empty input."""
        return self.candidates[0] if self.candidates else None

    @property
    def perfect_matches(self) -> List[Candidate]:
        """Candidates with 100% coverage, in ranking order."""
        return [c for c in self.candidates if c.coverage_in_pct == 100]

    def by_coverage(self) -> List[Candidate]:
        """
        Display order: best guess first, then coverage, then emphasis.

        Does not change ``candidates``.
        """
        best = self.best
        return sorted(
            self.candidates,
            key=lambda c: (
                c is not best,
                -c.coverage_in_pct,
                c.coverage_out_pct,
                c.weighted_rank,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        best = self.best
        return {
            "used_notes": list(self.used_notes),
            "weights": {str(pc): w for pc, w in sorted(self.weights.items())},
            "contained": self.contained,
            "has_emphasis": self.has_emphasis,
            "best": best.to_dict() if best else None,
            "candidates": [c.to_dict() for c in self.candidates],
            "reasons": [r.text for r in self.reasons],
            "hints": list(self.hints),
        }


class KeyRanker:
    """Rank candidate Major/Minor keys for a set of pitch classes.

    The ranker is stateless between calls; every call builds a fresh Ranking.
    """

    def __init__(
        self,
        params: Optional[ScoringParams] = None,
        fallback_size: int = DEFAULT_FALLBACK_SIZE,
    ):
        """
        Initialize KeyRanker.

        Args:
            params: Degree multipliers for the weighted scorer
            fallback_size: Number of weighted candidates returned when no key
                contains every used note
        """
        if fallback_size < 1:
            raise ValueError(f"fallback_size must be positive, got {fallback_size}")
        self.matcher = ContainmentMatcher()
        self.scorer = WeightedScorer(params)
        self.fallback_size = fallback_size

    @property
    def params(self) -> ScoringParams:
        return self.scorer.params

    def rank(
        self,
        used_notes: Iterable[int],
        weights: Optional[NoteWeights] = None,
        has_emphasis: Optional[bool] = None,
    ) -> Ranking:
        """
        Rank keys for the used notes.

        Args:
            used_notes: Pitch classes in use
            weights: NoteWeights; None means uniform weight 1
            has_emphasis: Whether weights carry emphasis data; defaults to
                True when weights are given

        Returns:
            Ranking; empty (no best guess) when no notes are used
        """
        used = normalize_pitch_classes(used_notes)
        if has_emphasis is None:
            has_emphasis = weights is not None
        if weights is None:
            weights = {pc: 1.0 for pc in used}
        else:
            # Colliding pitch classes sum; unused classes carry no weight
            summed = weights_from_events(weights.items())
            weights = {pc: w for pc, w in summed.items() if pc in used}

        if not used:
            return Ranking(used_notes=[], weights=weights, has_emphasis=has_emphasis)

        weighted = self.scorer.ranked(used, weights)
        weighted_rank = {s.key: idx for idx, s in enumerate(weighted)}
        matches = set(self.matcher.match(used))

        if matches:
            # Stable sort keeps generation order for equal net scores
            selected = [s for s in weighted if s.key in matches]
        else:
            selected = weighted[:self.fallback_size]

        total = total_weight(weights)
        candidates = [
            self._build_candidate(s, used, weights, total, (s.root, s.mode) in matches)
            for s in selected
        ]
        for candidate in candidates:
            candidate.weighted_rank = weighted_rank[(candidate.root, candidate.mode)]
        self._annotate_emphasis(candidates)

        ranking = Ranking(
            used_notes=used,
            weights=weights,
            candidates=candidates,
            contained=bool(matches),
            has_emphasis=has_emphasis,
        )
        ranking.reasons = explain(ranking.best, weights)
        ranking.hints = ambiguity_hints(ranking)

        logger.debug(
            "Ranked %d notes: %d candidates (%s), best %s",
            len(used),
            len(candidates),
            "containment" if matches else "weighted fallback",
            ranking.best.name,
        )
        return ranking

    def best_guess(
        self,
        used_notes: Iterable[int],
        weights: Optional[NoteWeights] = None,
    ) -> Optional[Candidate]:
        """Simplified interface returning just the top candidate."""
        return self.rank(used_notes, weights).best

    def _build_candidate(
        self,
        scale_score: ScaleScore,
        used: List[int],
        weights: NoteWeights,
        total: float,
        contains_all: bool,
    ) -> Candidate:
        inside, outside = coverage_pct(scale_score.root, scale_score.mode, used, weights, total)
        return Candidate(
            root=scale_score.root,
            mode=scale_score.mode,
            contains_all=contains_all,
            score=scale_score.score,
            penalty=scale_score.penalty,
            coverage_in_pct=inside,
            coverage_out_pct=outside,
        )

    @staticmethod
    def _annotate_emphasis(candidates: List[Candidate]) -> None:
        """Number 100%-coverage ties in ranking order when there are two or more."""
        perfect = [c for c in candidates if c.coverage_in_pct == 100]
        if len(perfect) < 2:
            return
        for idx, candidate in enumerate(perfect):
            candidate.emphasis_rank = idx


def coverage_pct(
    root: int,
    mode: Mode,
    used_notes: Iterable[int],
    weights: NoteWeights,
    total: Optional[float] = None,
) -> Tuple[int, int]:
    """
    Share of the used weight inside a scale, in whole percent.

    Returns:
        (coverage_in_pct, coverage_out_pct); (0, 0) when the total weight is 0
    """
    used = normalize_pitch_classes(used_notes)
    if total is None:
        total = total_weight({pc: weights.get(pc, 0.0) for pc in used})
    if total <= 0:
        return 0, 0

    scale = scale_instance(root, mode)
    inside = sum(weights.get(pc, 0.0) for pc in used if pc in scale)
    in_pct = round_half_up(100.0 * inside / total)
    return in_pct, max(0, 100 - in_pct)
