"""Terminal demo host: one input widget driven by the real keyboard."""

import logging
import sys
import termios
from typing import Optional

from .constants import TEXT_SET1, InputConstants
from .keyboard import KeyboardHandler, KeyCodes, KeyEventEmitter
from .terminal import CELL_UNITS, TerminalRenderer
from .widget import PixelInput

logger = logging.getLogger(__name__)


def configure_tty() -> Optional[list]:
    """Let Ctrl-Z, Ctrl-Y, Ctrl-C and Ctrl-V reach the application as keys.

    Turns off flow control, signal generation and literal-next handling.

    Returns:
        The previous terminal attributes, or None if stdin is not a tty
    """
    try:
        old_settings = termios.tcgetattr(sys.stdin)
    except (termios.error, AttributeError, OSError):
        return None
    new_settings = list(old_settings)
    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
    new_settings[3] &= ~(termios.ISIG | getattr(termios, 'IEXTEN', 0))
    try:
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, OSError) as e:
        logger.debug(f"Could not adjust terminal settings: {e}")
    return old_settings


def restore_tty(old_settings: Optional[list]) -> None:
    if old_settings is None:
        return
    try:
        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
    except (termios.error, OSError) as e:
        logger.debug(f"Could not restore terminal settings: {e}")


class Editor:
    """Runs a PixelInput in the terminal until Escape is pressed."""

    HELP = "Esc quits | Ctrl-A/C/X/V select all, copy, cut, paste | Ctrl-Z/Y undo, redo"

    def __init__(self, multiline: bool = False, columns: int = 40, rows: int = 1,
                 renderer: Optional[TerminalRenderer] = None):
        """Initialize the demo.

        Args:
            multiline: Allow line breaks (enables Enter, Up and Down)
            columns: Visible text columns
            rows: Visible text lines
            renderer: Terminal renderer to draw with
        """
        self.renderer = renderer or TerminalRenderer()
        self.keyboard = KeyboardHandler(self.renderer)
        self.emitter = KeyEventEmitter()
        allowed = TEXT_SET1 + (InputConstants.LINE_BREAK if multiline else "")
        # Padding on both sides plus the cell each side of the text area
        frame = InputConstants.PADDING * 2
        self.input = PixelInput(
            self.renderer,
            self.emitter,
            width=columns * CELL_UNITS + frame,
            height=rows * CELL_UNITS + frame,
            font="terminal",
            font_size=CELL_UNITS,
            allowed_characters=allowed,
        )
        self.running = False

    def _draw_status(self):
        term = self.renderer.term
        box = self.input.instructions.border
        status = (f"{len(self.input.text)}/{self.input.config.character_limit} chars, "
                  f"selection {self.input.selection_start}-{self.input.selection_end}")
        row = self.renderer.row + box.height // CELL_UNITS + 1
        print(term.move(row, self.renderer.col) + term.clear_eol + status, end='')
        print(term.move(row + 1, self.renderer.col) + term.clear_eol + self.HELP,
              end='', flush=True)

    def process_key(self, key) -> bool:
        """Feed one key token to the widget.

        Returns:
            False when the key asks the demo to quit
        """
        event = self.keyboard.parse_key(key)
        if event.key_code == KeyCodes.ESC and not event.is_ctrl:
            return False
        self.emitter.emit(event)
        return True

    def run(self):
        """Run the main loop."""
        self.renderer.setup()
        old_settings = configure_tty()
        self.running = True
        try:
            self.input.refresh()
            while self.running:
                self._draw_status()
                key = self.renderer.get_key(timeout=None)
                if key is None:
                    # No input source available
                    break
                self.running = self.process_key(key)
        finally:
            restore_tty(old_settings)
            self.input.destroy()
            self.renderer.cleanup()
        return self.input.text
