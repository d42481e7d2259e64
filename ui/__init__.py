"""UI components for the terminal interface."""

from ui.base import ColorPair, setup_colors
from ui.text_panel import TextPanel

__all__ = [
    "ColorPair",
    "setup_colors",
    "TextPanel",
]
