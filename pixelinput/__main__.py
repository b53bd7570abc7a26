"""pixelinput CLI entry point.

Allows running the terminal demo via `python -m pixelinput` and provides
the console script defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    # Represent control/escape characters visibly
    return s.encode('unicode_escape').decode('ascii')


def describe_key_event(event) -> str:
    """One line describing a parsed key event."""
    parts = [f"key={event.key!r}", f"code={event.key_code}", f"raw='{_escape_bytes(event.raw)}'"]
    flags = [name for name, on in (('alt', event.is_alt), ('ctrl', event.is_ctrl),
                                   ('shift', event.is_shift)) if on]
    if flags:
        parts.append(f"flags={'+'.join(flags)}")
    return ' '.join(parts)


def run_keyboard_test() -> None:
    """Print the KeyEvent every key press parses to. Quit with ESC."""
    from .editor import configure_tty, restore_tty
    from .keyboard import KeyboardHandler, KeyCodes
    from .terminal import TerminalRenderer

    term = TerminalRenderer()
    term.setup()
    old_settings = configure_tty()
    print("Keyboard test mode - press keys to see parsed events.\r")
    print("Quit with ESC.\r")

    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                break
            if ev.key_code == KeyCodes.ESC:
                print("Exiting keyboard test.\r")
                break
            print(describe_key_event(ev) + "\r")
    finally:
        restore_tty(old_settings)
        term.cleanup()


def main() -> None:
    # Very small arg parsing: version, keyboard test and demo options
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(multiline='--multiline' in args, rows=5 if '--multiline' in args else 1)
    text = editor.run()
    print(text)


if __name__ == "__main__":  # pragma: no cover
    main()
