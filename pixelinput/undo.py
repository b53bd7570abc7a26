from typing import Optional


class HistoryStack:
    """Bounded, linear undo/redo log of full buffer snapshots.

    ``index`` points at the snapshot matching the current content; -1 means
    the state before the first recorded edit, which is always empty text.
    """

    def __init__(self, max_entries: int = 256):
        self._entries: list[str] = []
        self._index = -1
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def clear(self):
        self._entries.clear()
        self._index = -1

    def push(self, snapshot: str):
        # Any new edit invalidates redo history
        del self._entries[self._index + 1:]
        self._entries.append(snapshot)
        # Cap history, evicting the oldest snapshots
        overflow = len(self._entries) - self._max_entries
        if overflow > 0:
            del self._entries[:overflow]
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> str:
        self._index = max(-1, self._index - 1)
        if self._index == -1:
            return ""
        return self._entries[self._index]

    def redo(self) -> Optional[str]:
        self._index = min(len(self._entries) - 1, self._index + 1)
        if self._index == -1:
            # Nothing was ever recorded
            return None
        return self._entries[self._index]
