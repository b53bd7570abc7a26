"""The input widget: editing core wired to a renderer and a keyboard source."""

import logging
from typing import Any, Optional, Protocol, Sequence

from .clipboard import ClipboardBridge
from .commands import CommandRegistry
from .config import FontMetrics, InputConfig, fix_line_height
from .constants import InputConstants
from .keyboard import KeyEvent, KeyHandler
from .layout import GlyphRecord, LayoutMapper, Point, RenderInstructions
from .model import TextModel

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Rendering capability a widget draws through.

    The widget never touches drawing objects itself; it asks the renderer
    for glyph extents and hands back complete RenderInstructions.
    """

    def font_metrics(self, font: str, font_size: float) -> FontMetrics:
        ...

    def measure(self, text: str, line_spacing: float) -> Sequence[GlyphRecord]:
        ...

    def draw(self, instructions: RenderInstructions) -> None:
        ...

    def destroy(self) -> None:
        ...


class KeyboardSource(Protocol):
    """Something that delivers key events to subscribed handlers."""

    def subscribe(self, handler: KeyHandler) -> None:
        ...

    def unsubscribe(self, handler: KeyHandler) -> None:
        ...


class PixelInput:
    """A single-widget text input.

    Owns the text model and the undo history; shares the clipboard with
    every other widget in the process. Key events arrive through the
    keyboard source it subscribes to at construction.
    """

    def __init__(self, renderer: Renderer, keyboard: KeyboardSource,
                 config: Optional[InputConfig] = None,
                 clipboard: Optional[ClipboardBridge] = None,
                 **overrides: Any):
        """Initialize the widget and render it once.

        Args:
            renderer: Rendering capability for this widget
            keyboard: Source of key events
            config: Base configuration, defaults if omitted
            clipboard: Clipboard to share, the process-wide one if omitted
            **overrides: Individual InputConfig fields overriding ``config``
        """
        if config is None:
            config = InputConfig.from_mapping(overrides)
        elif overrides:
            config = InputConfig.from_mapping(vars(config), **overrides)
        self.config = config
        self.renderer = renderer
        self.keyboard = keyboard
        self.clipboard = clipboard or ClipboardBridge()
        self.visible = True
        self._destroyed = False

        metrics = renderer.font_metrics(config.font, config.font_size)
        self.line_height, self.line_spacing = fix_line_height(metrics, config.font_size)

        self.model = TextModel(config.character_limit, config.allowed_characters,
                               config.history_limit)
        self.commands = CommandRegistry()
        self.layout = LayoutMapper(config.width, config.height, self.line_height)
        self.origin = Point(InputConstants.PADDING, InputConstants.PADDING)
        self.instructions: Optional[RenderInstructions] = None

        self.refresh()
        keyboard.subscribe(self.handle_key_event)

    @property
    def text(self) -> str:
        return self.model.text

    @text.setter
    def text(self, value: str):
        # Programmatic changes are not undoable
        self.model.set_text(value)
        self.refresh()

    @property
    def selection_start(self) -> int:
        return self.model.selection_start

    @property
    def selection_end(self) -> int:
        return self.model.selection_end

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def clear_history(self):
        self.model.clear_history()

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Apply one key event and redraw.

        Hidden or destroyed widgets ignore input entirely.
        """
        if not self.visible or self._destroyed:
            return
        self.commands.execute(self, key_event)
        self.refresh()

    def refresh(self) -> RenderInstructions:
        """Measure the current text, scroll to the caret and draw."""
        glyphs = self.renderer.measure(self.model.text, self.line_spacing)
        self.instructions = self.layout.layout(
            self.model.text,
            glyphs,
            self.model.cursor_pos,
            self.model.anchor_pos,
            self.origin,
            self.config,
            line_spacing=self.line_spacing,
        )
        self.origin = self.instructions.origin
        self.renderer.draw(self.instructions)
        return self.instructions

    def destroy(self) -> None:
        """Stop listening for keys, then release the renderer.

        The keyboard subscription goes first so no event can reach a widget
        whose drawing resources are gone. Calling this twice is harmless.
        """
        if self._destroyed:
            return
        self._destroyed = True
        self.keyboard.unsubscribe(self.handle_key_event)
        self.renderer.destroy()
        logger.debug("Input widget destroyed")
