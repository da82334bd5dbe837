"""Note data class - a single sounding note read from MIDI."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Note:
    """Represents a musical note."""

    pitch: int  # MIDI pitch (0-127)
    onset: float  # Start time in seconds
    offset: float  # End time in seconds
    velocity: int = 64  # MIDI velocity (0-127)
    instrument: Optional[str] = None

    @property
    def duration(self) -> float:
        """Note duration in seconds."""
        return max(0.0, self.offset - self.onset)

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.pitch % 12
