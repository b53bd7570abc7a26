"""pixelinput - An editable text input for pixel fonts."""

from .clipboard import ClipboardBridge
from .config import FontMetrics, InputConfig, fix_line_height
from .constants import TEXT_SET1, InputConstants
from .keyboard import KeyEvent, KeyEventEmitter
from .layout import GlyphRecord, LayoutMapper, Point, Rect, RenderInstructions
from .model import TextModel
from .persistence import PersistentStore, get_store, reset_store
from .widget import KeyboardSource, PixelInput, Renderer

__all__ = [
    'ClipboardBridge',
    'FontMetrics',
    'GlyphRecord',
    'InputConfig',
    'InputConstants',
    'KeyEvent',
    'KeyEventEmitter',
    'KeyboardSource',
    'LayoutMapper',
    'PersistentStore',
    'PixelInput',
    'Point',
    'Rect',
    'RenderInstructions',
    'Renderer',
    'TEXT_SET1',
    'TextModel',
    'fix_line_height',
    'get_store',
    'reset_store',
]
