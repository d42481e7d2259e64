"""Boxed, titled panel that shows one block of text."""

import curses

from ui.base import ColorPair, draw_box, safe_addstr, wrap_text


class TextPanel:
    """Read-only view of a text buffer.

    The editor owns all text; a panel only knows how to paint it. When the
    panel is focused, the view follows the end of the text (where typing
    happens) and the terminal cursor is parked there.
    """

    def __init__(
        self,
        window: "curses.window",
        title: str,
        focus_color: ColorPair = ColorPair.SOURCE,
    ) -> None:
        """Initialize the panel.

        Args:
            window: Curses window to render into.
            title: Title drawn on the top border.
            focus_color: Color used for border and text while focused.
        """
        self.window = window
        self.title = title
        self.focus_color = focus_color
        self.focused: bool = False

    def draw(self, text: str, text_attr: int = 0) -> None:
        """Render the panel.

        Args:
            text: Content to show.
            text_attr: Attributes for the content when not focused.
        """
        self.window.erase()
        height, width = self.window.getmaxyx()

        if self.focused:
            attr = curses.color_pair(self.focus_color)
        else:
            attr = curses.color_pair(ColorPair.BORDER_DIM)
        draw_box(self.window, attr)
        safe_addstr(self.window, 0, 2, self.title)

        content_height = height - 2
        content_width = width - 4
        lines = wrap_text(text, content_width)

        # Follow the end of the text while typing into it
        if self.focused and len(lines) > content_height:
            lines = lines[-content_height:]

        body_attr = attr if self.focused else text_attr
        for i, line in enumerate(lines[:max(0, content_height)]):
            safe_addstr(self.window, i + 1, 2, line, body_attr)

        if self.focused and lines:
            row = min(len(lines), content_height)
            col = min(len(lines[row - 1]) + 2, width - 2)
            try:
                self.window.move(row, col)
            except curses.error:
                pass

        self.window.noutrefresh()
