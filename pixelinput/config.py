"""Widget configuration and font metric helpers.

This module defines the static configuration of an input widget, fixed at
construction, and the line-height correction applied to bitmap font metrics.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Tuple

from .constants import TEXT_SET1, InputConstants


@dataclass(frozen=True)
class FontMetrics:
    """Metrics of a bitmap font as reported by the renderer.

    Attributes:
        size: Size the font was designed at (its native point size)
        line_height: Line height at the native size, possibly fractional
    """
    size: float
    line_height: float


def fix_line_height(metrics: FontMetrics, font_size: float) -> Tuple[int, float]:
    """Round the scaled line height up to a whole number of pixels.

    Scaling a bitmap font usually produces a fractional line height, which
    would put every glyph row on a sub-pixel offset. The extra space needed
    to reach the next whole pixel is returned as line spacing expressed in
    the font's native units, which is what renderers expect.

    Args:
        metrics: Native font metrics
        font_size: Size the text is rendered at

    Returns:
        Tuple of (line_height, line_spacing)
    """
    scale = font_size / metrics.size
    raw_line_height = metrics.line_height * scale
    line_height = math.ceil(raw_line_height)
    line_spacing = (line_height - raw_line_height) / scale
    return line_height, line_spacing


@dataclass(frozen=True)
class InputConfig:
    """Static configuration of an input widget.

    Attributes:
        x: Horizontal position of the widget
        y: Vertical position of the widget
        width: Widget width in pixels, border included
        height: Widget height in pixels, border included
        font: Font reference handed to the renderer
        font_size: Size the text is rendered at
        border_color: Color of the one pixel border
        bg_color: Background fill color
        text_color: Color of unselected text
        selection_color: Fill color of the selection highlight and caret
        selected_text_color: Color of selected text
        allowed_characters: Characters the buffer accepts, order irrelevant
        character_limit: Maximum buffer length
        history_limit: Maximum number of undo snapshots
    """
    x: int = 0
    y: int = 0
    width: int = InputConstants.DEFAULT_WIDTH
    height: int = InputConstants.DEFAULT_HEIGHT
    font: str = "please specify a font"
    font_size: float = InputConstants.DEFAULT_FONT_SIZE
    border_color: int = InputConstants.DEFAULT_BORDER_COLOR
    bg_color: int = InputConstants.DEFAULT_BG_COLOR
    text_color: int = InputConstants.DEFAULT_TEXT_COLOR
    selection_color: int = InputConstants.DEFAULT_SELECTION_COLOR
    selected_text_color: int = InputConstants.DEFAULT_SELECTED_TEXT_COLOR
    allowed_characters: str = TEXT_SET1
    character_limit: int = InputConstants.DEFAULT_CHARACTER_LIMIT
    history_limit: int = InputConstants.DEFAULT_HISTORY_LIMIT

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Widget size must be positive, got {self.width}x{self.height}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        if self.character_limit < 0:
            raise ValueError(f"character_limit must be >= 0, got {self.character_limit}")
        if self.history_limit < 0:
            raise ValueError(f"history_limit must be >= 0, got {self.history_limit}")
        # Accept any iterable of characters but keep a hashable, ordered form
        if not isinstance(self.allowed_characters, str):
            object.__setattr__(self, 'allowed_characters', ''.join(self.allowed_characters))

    @property
    def multiline(self) -> bool:
        """Whether line breaks may be typed into the buffer."""
        return InputConstants.LINE_BREAK in self.allowed_characters

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> 'InputConfig':
        """Create a configuration from defaults overlaid with overrides.

        Unknown keys raise TypeError so that typos do not silently fall back
        to defaults.
        """
        values = dict(overrides or {})
        values.update(kwargs)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"Unknown configuration keys: {', '.join(unknown)}")
        return replace(DEFAULT_CONFIG, **values)


DEFAULT_CONFIG = InputConfig()
