import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import InputConstants
from .undo import HistoryStack

logger = logging.getLogger(__name__)


class TextBuffer:
    """Sanitized, length-bounded text content."""

    def __init__(self, max_length: int, allowed_characters: Iterable[str]):
        self.content = ""
        self.max_length = max_length
        self.allowed_characters = frozenset(allowed_characters)

    def __len__(self) -> int:
        return len(self.content)

    def allows(self, char: str) -> bool:
        return char in self.allowed_characters

    def sanitize(self, text: str) -> str:
        """Drop every character that is not allowed, keeping order."""
        return ''.join(char for char in text if char in self.allowed_characters)

    def splice(self, text: str, start: int, end: Optional[int]) -> str:
        """Return the content with ``[start:end)`` replaced by ``text``.

        ``end`` of None, or past the buffer, means "to the end of the buffer".
        """
        tail = "" if end is None else self.content[end:]
        return self.content[:start] + text + tail


@dataclass
class Selection:
    """Cursor and anchor offsets into the buffer.

    The anchor is where the cursor was when selecting started; it equals
    the cursor when nothing is selected.
    """
    cursor_pos: int = 0
    anchor_pos: int = 0

    @property
    def start(self) -> int:
        return min(self.cursor_pos, self.anchor_pos)

    @property
    def end(self) -> int:
        return max(self.cursor_pos, self.anchor_pos)

    @property
    def is_empty(self) -> bool:
        return self.cursor_pos == self.anchor_pos

    def collapse(self, position: int):
        self.cursor_pos = position
        self.anchor_pos = position

    def move_to(self, position: int, extend: bool = False):
        """Move the cursor; keep the anchor only when extending the selection."""
        self.cursor_pos = position
        if not extend:
            self.anchor_pos = position


class TextModel:
    """Editing state of one input: buffer, selection and undo history."""

    buffer: TextBuffer
    selection: Selection
    history: HistoryStack

    def __init__(self, max_length: int = InputConstants.DEFAULT_CHARACTER_LIMIT,
                 allowed_characters: Iterable[str] = (),
                 history_limit: int = InputConstants.DEFAULT_HISTORY_LIMIT):
        self.buffer = TextBuffer(max_length, allowed_characters)
        self.selection = Selection()
        self.history = HistoryStack(history_limit)

    @property
    def text(self) -> str:
        return self.buffer.content

    @text.setter
    def text(self, value: str):
        self.set_text(value)

    @property
    def cursor_pos(self) -> int:
        return self.selection.cursor_pos

    @property
    def anchor_pos(self) -> int:
        return self.selection.anchor_pos

    @property
    def selection_start(self) -> int:
        return self.selection.start

    @property
    def selection_end(self) -> int:
        return self.selection.end

    @property
    def multiline(self) -> bool:
        return self.buffer.allows(InputConstants.LINE_BREAK)

    def get_selected_text(self) -> str:
        return self.buffer.content[self.selection.start:self.selection.end]

    def set_text(self, value: str) -> bool:
        """Replace the whole buffer programmatically.

        Not a user edit, so nothing is recorded in the history.
        """
        return self.insert_text(value, 0, None, record_history=False)

    def insert_text(self, text: str, start: int, end: Optional[int],
                    record_history: bool = True) -> bool:
        """Replace ``[start:end)`` with the sanitized ``text``.

        Returns:
            False if the result would exceed the character limit, in which
            case content, cursor and anchor are left untouched.
        """
        text = self.buffer.sanitize(text)
        start = min(max(0, start), len(self.buffer))
        if end is not None:
            end = max(end, start)
        candidate = self.buffer.splice(text, start, end)
        if len(candidate) > self.buffer.max_length:
            logger.debug(f"Rejected insert of {len(text)} characters: "
                         f"{len(candidate)} exceeds limit {self.buffer.max_length}")
            return False
        changed = candidate != self.buffer.content
        self.buffer.content = candidate
        self.selection.collapse(start + len(text))
        # Edits that leave the content as it was add nothing to undo
        if record_history and changed:
            self.history.push(candidate)
        return True

    def replace_selection(self, text: str) -> bool:
        return self.insert_text(text, self.selection.start, self.selection.end)

    def delete_backward(self) -> bool:
        """Delete the selection, or the character before the cursor."""
        start = self.selection.start
        if start == self.selection.end:
            start -= 1
        return self.insert_text("", max(0, start), self.selection.end)

    def select_all(self):
        self.selection.cursor_pos = len(self.buffer)
        self.selection.anchor_pos = 0

    def move_cursor(self, delta: int, extend: bool = False):
        position = min(len(self.buffer), max(0, self.selection.cursor_pos + delta))
        self.selection.move_to(position, extend)

    def seek_line(self, down: bool, extend: bool = False) -> bool:
        """Move the cursor to the same column of the next or previous line.

        The column is clamped to the length of the target line. Only logical
        line breaks count; wrapped lines are not known to the model.

        Returns:
            False when line breaks are not allowed and nothing moved.
        """
        if not self.multiline:
            return False
        text = self.buffer.content
        cursor = self.selection.cursor_pos
        line_break = InputConstants.LINE_BREAK
        line_start = text.rfind(line_break, 0, cursor)
        column = cursor - line_start - 1
        if down:
            target_break = text.find(line_break, cursor)
            if target_break < 0:
                target_break = len(text)
        elif line_start < 0:
            # Already on the first line
            target_break = -1
        else:
            target_break = text.rfind(line_break, 0, line_start)
        target_end = text.find(line_break, target_break + 1)
        if target_end < 0:
            target_end = len(text)
        self.selection.move_to(min(target_end, target_break + 1 + column), extend)
        return True

    def undo(self):
        # Replaying a snapshot is not an edit of its own
        self.insert_text(self.history.undo(), 0, None, record_history=False)

    def redo(self):
        snapshot = self.history.redo()
        if snapshot is not None:
            self.insert_text(snapshot, 0, None, record_history=False)

    def clear_history(self):
        self.history.clear()
