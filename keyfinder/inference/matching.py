"""Scale matching - containment ("simple") matching and weighted scoring.

ContainmentMatcher answers which keys contain every used note.
WeightedScorer gives every one of the 24 keys a score and a penalty from the
note weights, emphasising the tonic, dominant and mode-defining third.
"""

import json
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.pitch import normalize_pitch_classes
from .scales import Mode, ScaleKey, all_scale_keys, scale_instance
from .weighting import NoteWeights


@dataclass(frozen=True)
class ScoringParams:
    """Degree multipliers for weighted scoring.

    Attributes:
        tonic: Multiplier for the root (degree 0)
        dominant: Multiplier for the fifth (degree 7)
        subdominant: Multiplier for the fourth (degree 5); below 1 because the
            fourth is shared by both relative keys
        third: Multiplier for the mode's own third (4 Major, 3 Minor)
        outside: Penalty multiplier for notes outside the scale
        wrong_third: Extra penalty when an outside note is the other mode's third
    """

    tonic: float = 4.5
    dominant: float = 2.0
    subdominant: float = 0.5
    third: float = 1.5
    outside: float = 2.5
    wrong_third: float = 1.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")

    def degree_multiplier(self, degree: int, mode: Mode) -> float:
        """Multiplier for an in-scale note at ``degree`` semitones above the root."""
        if degree == 0:
            return self.tonic
        if degree == 7:
            return self.dominant
        if degree == 5:
            return self.subdominant
        if degree == mode.third:
            return self.third
        return 1.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringParams":
        """
        Build params from a mapping; missing keys keep their defaults.

        Raises:
            ValueError: On unknown keys, non-numeric or negative values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown scoring parameters: {sorted(unknown)}")
        values = {}
        for name, value in data.items():
            try:
                values[name] = float(value)
            except (TypeError, ValueError) as err:
                raise ValueError(f"{name} must be a number, got {value!r}") from err
        return cls(**values)

    @classmethod
    def load(cls, path) -> "ScoringParams":
        """Read params from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Parameter file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Parameter file must contain a JSON object: {path}")
        return cls.from_dict(data)

    def save(self, path) -> None:
        """Write params to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


DEFAULT_PARAMS = ScoringParams()


@dataclass(frozen=True)
class ScaleScore:
    """Weighted score of one key."""
    root: int
    mode: Mode
    score: float
    penalty: float

    @property
    def net(self) -> float:
        return self.score - self.penalty

    @property
    def key(self) -> ScaleKey:
        return self.root, self.mode


class ContainmentMatcher:
    """Find every key whose scale contains all used pitch classes."""

    def match(self, used_notes: Iterable[int]) -> List[ScaleKey]:
        """
        Args:
            used_notes: Pitch classes in use (weights ignored)

        Returns:
            Matching (root, mode) pairs in generation order. An empty
            selection matches nothing.
        """
        used = set(normalize_pitch_classes(used_notes))
        if not used:
            return []
        return [
            (root, mode)
            for root, mode in all_scale_keys()
            if used <= scale_instance(root, mode)
        ]


class WeightedScorer:
    """Score every key against weighted pitch classes."""

    def __init__(self, params: Optional[ScoringParams] = None):
        """
        Initialize WeightedScorer.

        Args:
            params: Degree multipliers; defaults to DEFAULT_PARAMS
        """
        self.params = params or DEFAULT_PARAMS

    def score_key(
        self,
        root: int,
        mode: Mode,
        used_notes: List[int],
        weights: NoteWeights,
    ) -> Tuple[float, float]:
        """Return (score, penalty) for one key."""
        scale = scale_instance(root, mode)
        score = 0.0
        penalty = 0.0

        for pc in used_notes:
            weight = weights.get(pc, 0.0)
            degree = (pc - root) % 12

            if pc in scale:
                score += weight * self.params.degree_multiplier(degree, mode)
            else:
                penalty += weight * self.params.outside
                # The other mode's third is the strongest Major/Minor signal
                if degree == mode.other.third:
                    penalty += weight * self.params.wrong_third

        return score, penalty

    def score(self, used_notes: Iterable[int], weights: NoteWeights) -> List[ScaleScore]:
        """
        Score all 24 keys.

        Args:
            used_notes: Pitch classes in use
            weights: NoteWeights (missing pitch classes weigh 0)

        Returns:
            24 ScaleScore entries in generation order (unsorted)
        """
        used = normalize_pitch_classes(used_notes)
        results = []
        for root, mode in all_scale_keys():
            score, penalty = self.score_key(root, mode, used, weights)
            results.append(ScaleScore(root=root, mode=mode, score=score, penalty=penalty))
        return results

    def ranked(self, used_notes: Iterable[int], weights: NoteWeights) -> List[ScaleScore]:
        """All 24 keys sorted by net score, descending; ties keep generation order."""
        return sorted(self.score(used_notes, weights), key=lambda s: s.net, reverse=True)
