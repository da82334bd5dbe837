"""Selection session - interactive note selection state.

One session holds everything an interactive front end edits: the MIDI
baseline (if a file was loaded), the current selection, the scale the user
applied last, and the undo/redo history. The ranking itself stays in the
stateless KeyRanker; the session only feeds it.
"""

import logging
from typing import FrozenSet, Iterable, Optional, Tuple

from ..core.pitch import normalize_pitch_class, normalize_pitch_classes
from ..inference.key import KeyRanker, Ranking
from ..inference.scales import Mode, ScaleKey, scale_instance
from ..inference.weighting import NoteWeights, WeightingPolicy
from .history import SelectionHistory

logger = logging.getLogger(__name__)


class SelectionSession:
    """Mutable selection state for one interactive user.

    Must be driven from a single thread of control.
    """

    def __init__(self, ranker: Optional[KeyRanker] = None):
        """
        Initialize SelectionSession.

        Args:
            ranker: KeyRanker used by analyze(); a default one if omitted
        """
        self.ranker = ranker or KeyRanker()
        self.history = SelectionHistory()
        self.baseline: NoteWeights = {}
        self.selected: FrozenSet[int] = frozenset()
        self.applied_scale: Optional[ScaleKey] = None

    @property
    def has_baseline(self) -> bool:
        return len(self.baseline) > 0

    @property
    def baseline_pitch_classes(self) -> FrozenSet[int]:
        return frozenset(self.baseline)

    @property
    def policy(self) -> WeightingPolicy:
        """Baseline weighting when a file is loaded, else uniform."""
        if self.has_baseline:
            return WeightingPolicy.from_baseline(self.baseline)
        return WeightingPolicy.uniform()

    def weights(self) -> NoteWeights:
        """NoteWeights for the current selection."""
        return self.policy.weigh(self.selected)

    def analyze(self) -> Ranking:
        """Rank keys for the current selection."""
        policy = self.policy
        return self.ranker.rank(
            self.selected,
            policy.weigh(self.selected),
            has_emphasis=policy.has_emphasis,
        )

    def _apply(self, pitch_classes: Iterable[int], record: bool = True) -> FrozenSet[int]:
        self.selected = frozenset(normalize_pitch_classes(pitch_classes))
        if record:
            self.history.push(self.selected)
        return self.selected

    def load_baseline(self, weights: NoteWeights) -> FrozenSet[int]:
        """
        Use file-derived weights as the baseline and select its notes.

        Args:
            weights: NoteWeights from a MIDI file
        """
        self.baseline = {normalize_pitch_class(pc): float(w) for pc, w in weights.items()}
        self.applied_scale = None
        logger.info("Loaded baseline with %d pitch classes", len(self.baseline))
        return self._apply(self.baseline)

    def select(self, pitch_classes: Iterable[int]) -> FrozenSet[int]:
        """Replace the selection (a manual edit)."""
        self.applied_scale = None
        return self._apply(pitch_classes)

    def toggle(self, pitch_class: int) -> FrozenSet[int]:
        """Add or remove one pitch class."""
        pc = normalize_pitch_class(pitch_class)
        return self.select(self.selected ^ {pc})

    def add(self, pitch_class: int) -> FrozenSet[int]:
        return self.select(self.selected | {normalize_pitch_class(pitch_class)})

    def remove(self, pitch_class: int) -> FrozenSet[int]:
        return self.select(self.selected - {normalize_pitch_class(pitch_class)})

    def clear(self) -> FrozenSet[int]:
        """Empty the selection (recorded in history)."""
        return self.select([])

    def reset_to_baseline(self) -> FrozenSet[int]:
        """Restore the baseline notes; no-op without a baseline."""
        if not self.has_baseline:
            return self.selected
        return self.select(self.baseline_pitch_classes)

    def reset_all(self) -> FrozenSet[int]:
        """Forget the baseline, the selection and the history."""
        self.baseline = {}
        self.applied_scale = None
        self.selected = frozenset()
        self.history.reset()
        logger.info("Session reset")
        return self.selected

    def apply_scale(self, root: int, mode) -> FrozenSet[int]:
        """Select every note of a scale and remember it as the applied key."""
        mode = Mode.parse(mode)
        root = normalize_pitch_class(root)
        selected = self._apply(scale_instance(root, mode))
        self.applied_scale = (root, mode)
        return selected

    def undo(self) -> FrozenSet[int]:
        """Replay the previous selection without recording it."""
        return self._replay(self.history.undo())

    def redo(self) -> FrozenSet[int]:
        """Replay the next selection without recording it."""
        return self._replay(self.history.redo())

    def _replay(self, entry: FrozenSet[int]) -> FrozenSet[int]:
        with self.history.suppressed():
            self.applied_scale = None
            return self._apply(entry)

    @property
    def toolbar_state(self) -> Tuple[bool, bool]:
        """(can_undo, can_redo) for enabling front-end controls."""
        return self.history.can_undo, self.history.can_redo
