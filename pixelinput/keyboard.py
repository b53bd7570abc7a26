"""Keyboard events, curtsies-style token parsing and event subscription."""

from typing import Callable, Optional
from dataclasses import dataclass


class KeyCodes:
    """Key codes, numbered the way browsers report ``KeyboardEvent.keyCode``."""
    BACKSPACE = 8
    TAB = 9
    ENTER = 13
    ESC = 27
    SPACE = 32
    LEFT = 37
    UP = 38
    RIGHT = 39
    DOWN = 40
    DELETE = 46
    A = 65
    C = 67
    V = 86
    X = 88
    Y = 89
    Z = 90


# Named keys: token name -> (key name, key code)
NAMED_KEYS = {
    'backspace': ('Backspace', KeyCodes.BACKSPACE),
    'tab': ('Tab', KeyCodes.TAB),
    'enter': ('Enter', KeyCodes.ENTER),
    'return': ('Enter', KeyCodes.ENTER),
    'esc': ('Escape', KeyCodes.ESC),
    'escape': ('Escape', KeyCodes.ESC),
    'left': ('ArrowLeft', KeyCodes.LEFT),
    'up': ('ArrowUp', KeyCodes.UP),
    'right': ('ArrowRight', KeyCodes.RIGHT),
    'down': ('ArrowDown', KeyCodes.DOWN),
    'delete': ('Delete', KeyCodes.DELETE),
}


def key_code_for_char(char: str) -> int:
    """Key code a single typed character would be reported with."""
    if 'a' <= char <= 'z':
        return ord(char.upper())
    return ord(char)


@dataclass
class KeyEvent:
    """Represents one physical key press.

    ``key`` is the typed character for printable keys and a key name such
    as 'ArrowLeft' or 'Backspace' otherwise.
    """
    key: str
    key_code: int
    raw: str = ""
    is_ctrl: bool = False
    is_shift: bool = False
    is_alt: bool = False

    @classmethod
    def char(cls, char: str, is_ctrl: bool = False, is_shift: bool = False) -> 'KeyEvent':
        return cls(key=char, key_code=key_code_for_char(char), raw=char,
                   is_ctrl=is_ctrl, is_shift=is_shift)

    @classmethod
    def named(cls, name: str, is_ctrl: bool = False, is_shift: bool = False) -> 'KeyEvent':
        key, code = NAMED_KEYS[name.lower()]
        return cls(key=key, key_code=code, raw=f"<{name}>", is_ctrl=is_ctrl, is_shift=is_shift)

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1


KeyHandler = Callable[[KeyEvent], None]


class KeyEventEmitter:
    """Delivers key events to subscribed handlers, in subscription order."""

    def __init__(self):
        self._handlers: list[KeyHandler] = []

    def subscribe(self, handler: KeyHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: KeyHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def emit(self, event: KeyEvent) -> None:
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers):
            handler(event)


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface=None):
        """Initialize with a terminal interface (only needed for reading)."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event from the terminal."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies-style key token into a KeyEvent.

        Args:
            key: Token such as 'a', '<LEFT>', '<Ctrl-a>' or '<Shift-LEFT>',
                or any object whose str() is one

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            # Support both '-' and '+' as modifier separators
            parts = name.replace('+', '-').split('-')
            base = parts[-1]
            mods = {m.lower() for m in parts[:-1]}
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            is_ctrl = 'ctrl' in mods
            is_shift = 'shift' in mods
            is_alt = 'alt' in mods
            lower = base.lower()
            if lower in ('space', 'spacebar', 'spc'):
                base = ' '
            # Ctrl-J / Ctrl-M are what terminals send for Enter
            if is_ctrl and lower in ('j', 'm'):
                return KeyEvent(key='Enter', key_code=KeyCodes.ENTER, raw=key_str)
            if len(base) == 1:
                return KeyEvent(key=base, key_code=key_code_for_char(base), raw=key_str,
                                is_ctrl=is_ctrl, is_shift=is_shift, is_alt=is_alt)
            if lower in NAMED_KEYS:
                named, code = NAMED_KEYS[lower]
                return KeyEvent(key=named, key_code=code, raw=key_str,
                                is_ctrl=is_ctrl, is_shift=is_shift, is_alt=is_alt)
            # Unknown token: a named key nothing is bound to
            return KeyEvent(key=base, key_code=0, raw=key_str,
                            is_ctrl=is_ctrl, is_shift=is_shift, is_alt=is_alt)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\n', '\r'):
                return KeyEvent(key='Enter', key_code=KeyCodes.ENTER, raw=key_str)
            if key_str == '\t':
                return KeyEvent(key='Tab', key_code=KeyCodes.TAB, raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key='Backspace', key_code=KeyCodes.BACKSPACE, raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(key='Escape', key_code=KeyCodes.ESC, raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key=ch, key_code=key_code_for_char(ch), raw=key_str, is_ctrl=True)
            return KeyEvent(key=key_str, key_code=key_code_for_char(key_str), raw=key_str,
                            is_shift=key_str.isupper())

        # Multi-character text (e.g. a pasted chunk) is not a single key
        return KeyEvent(key=key_str, key_code=0, raw=key_str)
