"""Offline tuning - grid search over scoring multipliers.

Reads a folder of MIDI files labelled by name (``C_Major.mid``,
``Eb_Minor_intro.mid``) and finds the ScoringParams under which the most
best guesses match their labels.
"""

import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .core.pitch import parse_pitch_class
from .input import MidiLoader
from .inference.key import KeyRanker
from .inference.matching import ScoringParams
from .inference.scales import Mode
from .inference.weighting import NoteWeights

logger = logging.getLogger(__name__)

# Search ranges per multiplier
DEFAULT_GRID: Dict[str, Sequence[float]] = {
    "tonic": (2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0, 5.5, 6.0),
    "dominant": (1.0, 1.5, 2.0, 2.5, 3.0),
    "subdominant": (0.5, 1.0, 1.5, 2.0),
    "third": (1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0),
    "wrong_third": (0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 4.0, 5.0),
    "outside": (1.0, 1.5, 2.0, 2.5, 3.0),
}


@dataclass
class LabelledSample:
    """One MIDI file with its expected key."""
    name: str
    weights: NoteWeights
    root: int
    mode: Mode


@dataclass
class TuningResult:
    """Outcome of a grid search."""
    params: Optional[ScoringParams]
    correct: int
    total: int
    tested: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0


def parse_label(filename: str) -> Optional[Tuple[int, Mode]]:
    """
    Read the expected key from a file name like ``F#_Minor.mid``.

    Returns:
        (root, mode), or None when the name carries no Major/Minor label
    """
    parts = Path(filename).stem.split("_")
    if len(parts) < 2:
        return None
    try:
        return parse_pitch_class(parts[0]), Mode.parse(parts[1])
    except ValueError:
        return None


class ParameterTuner:
    """Exhaustive search over a grid of ScoringParams."""

    def __init__(
        self,
        grid: Optional[Dict[str, Sequence[float]]] = None,
        loader: Optional[MidiLoader] = None,
    ):
        """
        Initialize ParameterTuner.

        Args:
            grid: Candidate values per ScoringParams field; fields left out
                keep their defaults
            loader: MidiLoader used by load_samples
        """
        self.grid = dict(DEFAULT_GRID if grid is None else grid)
        # Fail early on misspelled fields
        ScoringParams.from_dict({name: values[0] for name, values in self.grid.items() if values})
        self.loader = loader or MidiLoader()

    @property
    def combinations(self) -> int:
        return int(np.prod([len(v) for v in self.grid.values()])) if self.grid else 1

    def iter_params(self):
        """Yield every ScoringParams in the grid, in nested-loop order."""
        names = list(self.grid)
        for values in itertools.product(*(self.grid[name] for name in names)):
            yield ScoringParams.from_dict(dict(zip(names, values)))

    def load_samples(self, folder) -> List[LabelledSample]:
        """
        Load every labelled MIDI file in a folder.

        Raises:
            FileNotFoundError: If the folder doesn't exist
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise FileNotFoundError(f"MIDI folder not found: {folder}")

        samples = []
        for path in sorted(folder.iterdir()):
            if path.suffix.lower() not in MidiLoader.SUPPORTED_FORMATS:
                continue
            label = parse_label(path.name)
            if label is None:
                logger.debug("Skipping unlabelled file %s", path.name)
                continue
            try:
                weights = self.loader.load_weights(path)
            except ValueError as e:
                logger.warning("Skipping %s: %s", path.name, e)
                continue
            samples.append(LabelledSample(path.name, weights, label[0], label[1]))

        logger.info("Loaded %d labelled samples from %s", len(samples), folder)
        return samples

    @staticmethod
    def accuracy(samples: Sequence[LabelledSample], params: ScoringParams) -> int:
        """Number of samples whose best guess equals the label."""
        ranker = KeyRanker(params)
        correct = 0
        for sample in samples:
            best = ranker.best_guess(sample.weights.keys(), sample.weights)
            if best is not None and best.root == sample.root and best.mode is sample.mode:
                correct += 1
        return correct

    def search(
        self,
        samples: Sequence[LabelledSample],
        progress: Optional[Callable[[int, int], None]] = None,
    ) -> TuningResult:
        """
        Try every combination and keep the first one with the most hits.

        Args:
            samples: Labelled samples
            progress: Called as progress(tested, total) after each combination
        """
        total = self.combinations
        result = TuningResult(params=None, correct=-1, total=len(samples))

        for params in self.iter_params():
            correct = self.accuracy(samples, params)
            result.tested += 1

            if correct > result.correct:
                result.correct = correct
                result.params = params
                logger.info(
                    "New best: %d/%d %s", correct, len(samples), params.to_dict()
                )

            if progress is not None:
                progress(result.tested, total)

        result.correct = max(result.correct, 0)
        return result
