"""
Composer Kernel — History

Linear snapshot history: an ordered list of Snapshots plus a cursor.

  commit(s)  truncate everything after the cursor, append a deep copy of s,
             move the cursor to it
  undo()     cursor - 1 (no-op at 0)
  redo()     cursor + 1 (no-op at the last entry)

Snapshots are copied going in and coming out, so nothing outside the buffer
ever holds a reference to a stored entry. Undo and redo never fail.

With max_entries set, the oldest entries are dropped on commit. The cursor
always satisfies 0 <= cursor < length.
"""

from __future__ import annotations

import copy
import logging

from composer.kernel.types import Snapshot, empty_snapshot

logger = logging.getLogger(__name__)


class History:
    def __init__(self, initial: Snapshot | None = None, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            max_entries = None
        self._entries: list[Snapshot] = [copy.deepcopy(initial) if initial is not None else empty_snapshot()]
        self._cursor = 0
        self.max_entries = max_entries

    # -----------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------

    def commit(self, snapshot: Snapshot) -> Snapshot:
        """Append a snapshot after the cursor, discarding any redo entries."""
        del self._entries[self._cursor + 1:]
        self._entries.append(copy.deepcopy(snapshot))
        self._cursor = len(self._entries) - 1

        if self.max_entries is not None and len(self._entries) > self.max_entries:
            overflow = len(self._entries) - self.max_entries
            del self._entries[:overflow]
            self._cursor -= overflow
            logger.debug("history: dropped %d oldest entries (limit %d)", overflow, self.max_entries)

        return self.current()

    def undo(self) -> Snapshot:
        if self._cursor > 0:
            self._cursor -= 1
        return self.current()

    def redo(self) -> Snapshot:
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
        return self.current()

    def reset(self, initial: Snapshot | None = None) -> None:
        """Start over with a single entry."""
        self._entries = [copy.deepcopy(initial) if initial is not None else empty_snapshot()]
        self._cursor = 0

    # -----------------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------------

    def current(self) -> Snapshot:
        return copy.deepcopy(self._entries[self._cursor])

    def entries(self) -> list[Snapshot]:
        return copy.deepcopy(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def position(self) -> int:
        """Cursor as a 1-indexed position, for display."""
        return self._cursor + 1

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)
