"""Command pattern implementation for input editing actions."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .constants import InputConstants
from .keyboard import KeyCodes

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .widget import PixelInput


class KeyType(Enum):
    """How a key event is looked up in the registry."""
    CTRL = "ctrl"
    SPECIAL = "special"


class EditorCommand(ABC):
    """Base class for editing commands.

    Commands act on any object exposing ``model`` (a TextModel) and
    ``clipboard`` (a ClipboardBridge).
    """

    @abstractmethod
    def execute(self, editor: 'PixelInput', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Object owning the model and clipboard
            key_event: The key event that triggered this command

        Returns:
            True if the command changed the text
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands.

    Holding Shift keeps the anchor where it is and so extends the selection.
    """

    def execute(self, editor: 'PixelInput', key_event: 'KeyEvent') -> bool:
        self._move(editor, key_event.is_shift)
        return False

    @abstractmethod
    def _move(self, editor: 'PixelInput', extend: bool):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, extend):
        editor.model.move_cursor(-1, extend)


class RightCharCommand(MovementCommand):
    def _move(self, editor, extend):
        editor.model.move_cursor(1, extend)


class UpLineCommand(MovementCommand):
    def _move(self, editor, extend):
        editor.model.seek_line(down=False, extend=extend)


class DownLineCommand(MovementCommand):
    def _move(self, editor, extend):
        editor.model.seek_line(down=True, extend=extend)


class EditCommand(EditorCommand):
    """Base class for commands that edit the text as the user."""

    def execute(self, editor: 'PixelInput', key_event: 'KeyEvent') -> bool:
        before = editor.model.text
        self._edit(editor, key_event)
        return editor.model.text != before

    @abstractmethod
    def _edit(self, editor: 'PixelInput', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.delete_backward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.replace_selection(InputConstants.LINE_BREAK)


class TabCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.replace_selection(InputConstants.TAB_TEXT)


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.replace_selection(key_event.key)


class CutCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.clipboard.set(editor.model.get_selected_text())
        editor.model.replace_selection("")


class PasteCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.replace_selection(editor.clipboard.get())


class SystemCommand(EditorCommand):
    """Base class for commands that do not edit as the user."""

    def execute(self, editor: 'PixelInput', key_event: 'KeyEvent') -> bool:
        before = editor.model.text
        self._execute_system(editor, key_event)
        return editor.model.text != before

    @abstractmethod
    def _execute_system(self, editor: 'PixelInput', key_event: 'KeyEvent'):
        """Perform the action."""
        pass


class SelectAllCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.model.select_all()


class CopyCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.clipboard.set(editor.model.get_selected_text())


class UndoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.model.undo()


class RedoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.model.redo()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    MULTILINE_KEYS = (KeyCodes.ENTER, KeyCodes.UP, KeyCodes.DOWN)

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, int], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Ctrl combinations
        self.register((KeyType.CTRL, KeyCodes.A), SelectAllCommand())
        self.register((KeyType.CTRL, KeyCodes.C), CopyCommand())
        self.register((KeyType.CTRL, KeyCodes.V), PasteCommand())
        self.register((KeyType.CTRL, KeyCodes.X), CutCommand())
        self.register((KeyType.CTRL, KeyCodes.Y), RedoCommand())
        self.register((KeyType.CTRL, KeyCodes.Z), UndoCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, KeyCodes.BACKSPACE), BackspaceCommand())
        self.register((KeyType.SPECIAL, KeyCodes.ENTER), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, KeyCodes.TAB), TabCommand())

        # Movement commands
        self.register((KeyType.SPECIAL, KeyCodes.LEFT), LeftCharCommand())
        self.register((KeyType.SPECIAL, KeyCodes.RIGHT), RightCharCommand())
        self.register((KeyType.SPECIAL, KeyCodes.UP), UpLineCommand())
        self.register((KeyType.SPECIAL, KeyCodes.DOWN), DownLineCommand())

    def register(self, key: Tuple[KeyType, int], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, key_code: int) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, key_code))

    def resolve(self, editor: 'PixelInput', key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Pick the one command a key event stands for, or None.

        Ctrl combinations never fall through to plain keys, so an unbound
        Ctrl+key does nothing rather than typing the letter.
        """
        if key_event.is_ctrl:
            return self.get_command(KeyType.CTRL, key_event.key_code)

        # Printable characters may share key codes with named keys ('%' and
        # ArrowLeft are both 37), so only named keys take the special route
        if key_event.is_printable:
            return InsertTextCommand()

        # Line-oriented keys only exist when line breaks may be typed
        if key_event.key_code in self.MULTILINE_KEYS and not editor.model.multiline:
            return None

        return self.get_command(KeyType.SPECIAL, key_event.key_code)

    def execute(self, editor: 'PixelInput', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the text was modified
        """
        command = self.resolve(editor, key_event)
        if command:
            return command.execute(editor, key_event)
        return False
