"""Base UI utilities and color definitions."""

import curses
from enum import IntEnum


class ColorPair(IntEnum):
    """Color pair indices for the UI.

    Designed for dark terminal backgrounds.
    """

    TITLE = 1        # Light cyan, bold title bar
    HELP = 2         # White status/help line
    BORDER_DIM = 3   # Unfocused panel border
    SOURCE = 4       # Yellow, source panel while editing
    PATTERN = 5      # Magenta, pattern panel while editing
    REPLACEMENT = 6  # Blue, replacement panel while editing
    OUTPUT = 7       # Green preview text
    ERROR = 8        # Red, regex error in the preview


def setup_colors() -> None:
    """Initialize curses color pairs."""
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()

    curses.init_pair(ColorPair.TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(ColorPair.HELP, curses.COLOR_WHITE, -1)
    curses.init_pair(ColorPair.BORDER_DIM, curses.COLOR_WHITE, -1)
    curses.init_pair(ColorPair.SOURCE, curses.COLOR_YELLOW, -1)
    curses.init_pair(ColorPair.PATTERN, curses.COLOR_MAGENTA, -1)
    curses.init_pair(ColorPair.REPLACEMENT, curses.COLOR_BLUE, -1)
    curses.init_pair(ColorPair.OUTPUT, curses.COLOR_GREEN, -1)
    curses.init_pair(ColorPair.ERROR, curses.COLOR_RED, -1)


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to fit within width, breaking at spaces where possible.

    Explicit newlines always start a new line. Words longer than the width
    are hard-wrapped.

    Args:
        text: Text to wrap.
        width: Maximum line width.

    Returns:
        List of wrapped lines.
    """
    if width <= 0:
        return []

    wrapped: list[str] = []
    for line in text.split("\n"):
        current = ""
        for word in line.split(" "):
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= width:
                current = candidate
                continue
            if current:
                wrapped.append(current)
            while len(word) > width:
                wrapped.append(word[:width])
                word = word[width:]
            current = word
        wrapped.append(current)

    return wrapped


def safe_addstr(
    window: "curses.window",
    y: int,
    x: int,
    text: str,
    attr: int = 0,
) -> None:
    """Write text, clipping at the window edge and ignoring curses errors.

    Args:
        window: Curses window to write to.
        y: Row position.
        x: Column position.
        text: Text to write.
        attr: Optional attributes.
    """
    try:
        height, width = window.getmaxyx()
        if y < 0 or y >= height or x < 0:
            return
        max_len = width - x - 1
        if max_len <= 0:
            return
        window.addstr(y, x, text[:max_len], attr)
    except curses.error:
        pass


def draw_box(window: "curses.window", attr: int = 0) -> None:
    """Draw a border around a window.

    Args:
        window: Curses window to draw border on.
        attr: Attributes for the border.
    """
    try:
        window.attron(attr)
        window.border()
        window.attroff(attr)
    except curses.error:
        pass
