"""Selection history - linear undo/redo log of pitch-class selections."""

import logging
from contextlib import contextmanager
from typing import FrozenSet, Iterable, Iterator, List

from ..core.pitch import normalize_pitch_classes

logger = logging.getLogger(__name__)


class SelectionHistory:
    """Undo/redo stack over pitch-class sets.

    Starts with a single empty entry at cursor 0. Entries are stored as frozen
    sets, so comparisons ignore ordering and duplicates.
    """

    def __init__(self):
        self._entries: List[FrozenSet[int]] = [frozenset()]
        self._cursor = 0
        self._suppress_depth = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> List[FrozenSet[int]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    @property
    def is_suppressed(self) -> bool:
        return self._suppress_depth > 0

    def current(self) -> FrozenSet[int]:
        """The selection at the cursor."""
        return self._entries[self._cursor]

    def push(self, pitch_classes: Iterable[int]) -> bool:
        """
        Record a selection.

        Dropped when suppressed or equal to the current entry. Otherwise every
        entry after the cursor is discarded before appending.

        Returns:
            True if a new entry was recorded
        """
        if self.is_suppressed:
            return False

        entry = frozenset(normalize_pitch_classes(pitch_classes))
        if entry == self.current():
            return False

        del self._entries[self._cursor + 1:]
        self._entries.append(entry)
        self._cursor = len(self._entries) - 1
        logger.debug("History push %s (%d entries)", sorted(entry), len(self._entries))
        return True

    def undo(self) -> FrozenSet[int]:
        """Step back one entry; no-op at the earliest entry."""
        if self.can_undo:
            self._cursor -= 1
        return self.current()

    def redo(self) -> FrozenSet[int]:
        """Step forward one entry; no-op at the latest entry."""
        if self.can_redo:
            self._cursor += 1
        return self.current()

    def reset(self) -> None:
        """Back to a single empty entry."""
        self._entries = [frozenset()]
        self._cursor = 0

    @contextmanager
    def suppressed(self) -> Iterator["SelectionHistory"]:
        """Ignore pushes while replaying a stored selection."""
        self._suppress_depth += 1
        try:
            yield self
        finally:
            self._suppress_depth -= 1
