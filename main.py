#!/usr/bin/env python3
"""pixelinput - terminal demo of the text input widget.

Usage:
    python main.py [--multiline]

Controls:
    Arrow keys: Move the cursor (Shift extends the selection)
    Ctrl-A / Ctrl-C / Ctrl-X / Ctrl-V: Select all, copy, cut, paste
    Ctrl-Z / Ctrl-Y: Undo, redo
    Esc: Quit and print the text
"""

import sys
from pixelinput.editor import Editor


def main():
    multiline = "--multiline" in sys.argv[1:]
    editor = Editor(multiline=multiline, rows=5 if multiline else 1)
    print(editor.run())


if __name__ == "__main__":
    main()
