"""Constants and defaults for the pixelinput widget."""

# Printable ASCII, space through tilde; the classic retro bitmap font set.
TEXT_SET1 = (
    " !\"#$%&'()*+,-./0123456789:;<=>?@"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_`"
    "abcdefghijklmnopqrstuvwxyz{|}~"
)


class InputConstants:
    """Central configuration constants for the input widget."""

    # Box geometry (pixels)
    BORDER = 1  # Border thickness drawn around the background
    PADDING = 2  # Inset of the text from the widget edges

    # Clipboard
    CLIPBOARD_KEY = "pixelinput.clipboard"  # Key of the shared clipboard mirror

    # Editing
    TAB_TEXT = "  "  # Tab inserts two spaces
    LINE_BREAK = "\n"

    # Widget defaults
    DEFAULT_WIDTH = 100
    DEFAULT_HEIGHT = 10
    DEFAULT_FONT_SIZE = 16
    DEFAULT_CHARACTER_LIMIT = 256
    DEFAULT_HISTORY_LIMIT = 256

    # Default colors (0xRRGGBB)
    DEFAULT_BORDER_COLOR = 0x000000
    DEFAULT_BG_COLOR = 0xFFFFFF
    DEFAULT_TEXT_COLOR = 0x000000
    DEFAULT_SELECTION_COLOR = 0x888888
    DEFAULT_SELECTED_TEXT_COLOR = 0xFFFFFF

    # Persistent store
    STORE_APP_NAME = "pixelinput"
    STORE_FILENAME = "store.json"
    STORE_DIR_ENV = "PIXELINPUT_STORE_DIR"  # Overrides the platformdirs location
