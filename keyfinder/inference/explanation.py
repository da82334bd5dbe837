"""Best-guess explanation - why a key was picked, in plain words.

The reasons follow a fixed decision table over ratios to the heaviest single
pitch class. Nothing here is probabilistic.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ..core.pitch import pitch_class_name
from .scales import Mode
from .weighting import NoteWeights

if TYPE_CHECKING:
    from .key import Candidate, Ranking

TONIC_STRONG_RATIO = 0.6
THIRD_STRONG_RATIO = 0.3
DOMINANT_STRONG_RATIO = 0.5


@dataclass(frozen=True)
class Reason:
    """One line of the best-guess explanation."""
    kind: str
    text: str
    pitch_class: Optional[int] = None


def explain(best: Optional["Candidate"], weights: NoteWeights) -> List[Reason]:
    """
    Explain a best guess from the note weights.

    Args:
        best: The best-guess candidate (anything with ``root`` and ``mode``)
        weights: NoteWeights the guess was made from

    Returns:
        Ordered reasons; a single "no clear emphasis" reason when nothing
        qualifies, and an empty list when there is no guess or no weights
    """
    if best is None or not weights:
        return []

    mode = Mode.parse(best.mode)
    root = best.root
    reasons: List[Reason] = []
    max_weight = max(weights.values())

    if max_weight > 0:
        root_name = pitch_class_name(root)
        root_weight = weights.get(root, 0.0)
        if root_weight == max_weight:
            reasons.append(Reason(
                "tonic_most_used",
                f"{root_name} is the most-used note (often feels like \"home\")",
                root,
            ))
        elif root_weight > max_weight * TONIC_STRONG_RATIO:
            reasons.append(Reason(
                "tonic_used_a_lot",
                f"{root_name} is used a lot (can point to the home note)",
                root,
            ))

        third_pc = (root + mode.third) % 12
        third_name = pitch_class_name(third_pc)
        third_weight = weights.get(third_pc, 0.0)
        if third_weight > max_weight * THIRD_STRONG_RATIO:
            reasons.append(Reason(
                "third_stands_out",
                f"The {third_name} ({mode.value} 3rd) stands out "
                "(the 3rd helps decide Major vs Minor)",
                third_pc,
            ))
        elif third_weight > 0:
            reasons.append(Reason(
                "third_present",
                f"The {third_name} ({mode.value} 3rd) is present "
                "(the 3rd helps decide Major vs Minor)",
                third_pc,
            ))

        dominant_pc = (root + 7) % 12
        dominant_name = pitch_class_name(dominant_pc)
        dominant_weight = weights.get(dominant_pc, 0.0)
        if dominant_weight > max_weight * DOMINANT_STRONG_RATIO:
            reasons.append(Reason(
                "dominant_strong",
                f"The dominant {dominant_name} is strong "
                "(dominant often leads back to the home note)",
                dominant_pc,
            ))
        elif dominant_weight > 0:
            reasons.append(Reason(
                "dominant_appears",
                f"The dominant {dominant_name} appears "
                "(dominant often leads back to the home note)",
                dominant_pc,
            ))

    if not reasons:
        reasons.append(Reason(
            "no_clear_emphasis",
            "No clear single-note emphasis; this is the closest overall match "
            "(notes are spread more evenly)",
        ))

    return reasons


def ambiguity_hints(ranking: "Ranking") -> List[str]:
    """
    Explanatory notes for ambiguous rankings.

    Only produced when several keys contain every used note.
    """
    if not ranking.contained or len(ranking.candidates) <= 1:
        return []

    perfect = sum(1 for c in ranking.candidates if c.coverage_in_pct == 100)

    hints = [
        "Many keys can contain the same notes. The best guess uses which "
        "notes are emphasized in the MIDI/selection."
    ]
    if perfect > 1:
        hints.append(
            "When multiple keys are 100% match, the order is a tie-break "
            "based on note emphasis (tonic/3rd/5th)."
        )
    return hints
