"""Session layer - interactive selection state.

- Selection history (undo/redo log)
- Selection session (baseline, current selection, applied scale)
"""

from .history import SelectionHistory
from .selection import SelectionSession

__all__ = [
    "SelectionHistory",
    "SelectionSession",
]
