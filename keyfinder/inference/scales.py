"""Scale model - the two supported scale templates and their transpositions.

Only Major and natural Minor are modelled. Every (root, mode) pair maps to a
seven-note set of pitch classes; there are exactly 24 of them.
"""

from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, List, Tuple, Union

from ..core.constants import PREVIEW_BASE_MIDI
from ..core.pitch import normalize_pitch_class, pitch_class_name


class Mode(Enum):
    """Supported modes."""
    MAJOR = "Major"
    MINOR = "Minor"

    @classmethod
    def parse(cls, value: Union["Mode", str]) -> "Mode":
        """
        Coerce a mode or mode name ("Major", "minor", "MINOR") to a Mode.

        Raises:
            ValueError: For anything other than the two supported modes
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if value.strip().lower() == mode.value.lower():
                    return mode
        raise ValueError(
            f"Unsupported mode: {value!r}. Supported: "
            f"{', '.join(m.value for m in cls)}"
        )

    @property
    def third(self) -> int:
        """Interval of the mode-defining third."""
        return 4 if self is Mode.MAJOR else 3

    @property
    def other(self) -> "Mode":
        return Mode.MINOR if self is Mode.MAJOR else Mode.MAJOR


SCALE_INTERVALS: Dict[Mode, Tuple[int, ...]] = {
    Mode.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    Mode.MINOR: (0, 2, 3, 5, 7, 8, 10),  # Natural minor
}

ScaleKey = Tuple[int, Mode]


@lru_cache(maxsize=None)
def _instance(root: int, mode: Mode) -> FrozenSet[int]:
    return frozenset((root + interval) % 12 for interval in SCALE_INTERVALS[mode])


def scale_instance(root: int, mode: Union[Mode, str]) -> FrozenSet[int]:
    """
    Get the pitch classes of a scale.

    Args:
        root: Root pitch class (reduced mod 12)
        mode: Mode.MAJOR / Mode.MINOR or their names

    Returns:
        Frozen set of the seven pitch classes

    Raises:
        ValueError: If mode is not Major or Minor
    """
    return _instance(normalize_pitch_class(root), Mode.parse(mode))


def scale_degrees(root: int, mode: Union[Mode, str]) -> List[int]:
    """Scale pitch classes in ascending degree order starting at the root."""
    root = normalize_pitch_class(root)
    return [(root + interval) % 12 for interval in SCALE_INTERVALS[Mode.parse(mode)]]


def all_scale_keys() -> List[ScaleKey]:
    """All 24 (root, mode) pairs: roots 0-11, Major before Minor per root."""
    return [(root, mode) for root in range(12) for mode in Mode]


def key_name(root: int, mode: Union[Mode, str]) -> str:
    """Human-readable key name, e.g. 'A Minor'."""
    return f"{pitch_class_name(root)} {Mode.parse(mode).value}"


def relative_key(root: int, mode: Union[Mode, str]) -> ScaleKey:
    """
    Get the relative major/minor key (same notes, different tonic).

    Relative minor is 3 semitones down from major.
    Relative major is 3 semitones up from minor.
    """
    mode = Mode.parse(mode)
    root = normalize_pitch_class(root)
    if mode is Mode.MAJOR:
        return (root + 9) % 12, Mode.MINOR
    return (root + 3) % 12, Mode.MAJOR


def parallel_key(root: int, mode: Union[Mode, str]) -> ScaleKey:
    """Get the parallel major/minor key (same root, different mode)."""
    return normalize_pitch_class(root), Mode.parse(mode).other


def preview_sequence(
    root: int,
    mode: Union[Mode, str],
    base: int = PREVIEW_BASE_MIDI,
) -> List[int]:
    """
    MIDI note numbers for an ascending one-octave scale preview.

    Starts at ``base + root`` and ends on the tonic an octave up.
    """
    start = base + normalize_pitch_class(root)
    intervals = SCALE_INTERVALS[Mode.parse(mode)] + (12,)
    return [start + interval for interval in intervals]
