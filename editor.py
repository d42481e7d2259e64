"""Curses front end: screen layout, rendering and the main loop."""

import curses
from typing import Optional

from agents.pattern_agent import PatternAgent
from engine.keys import from_curses
from engine.machine import EditStateMachine
from engine.transform import REGEX_ERROR_PREFIX
from logging_config import get_logger
from models.buffer import TextBuffer
from models.config import AppConfig
from models.state import EditorMode, EditorState
from ui.base import ColorPair, safe_addstr, setup_colors
from ui.text_panel import TextPanel


# Input poll interval; the screen is repainted at least this often
POLL_TIMEOUT_MS = 100

# Rows used by the single-line pattern and replacement panels
LINE_PANEL_HEIGHT = 3

MODE_NAMES = {
    EditorMode.BROWSING: "BROWSE",
    EditorMode.EDITING_SOURCE: "EDITING SOURCE",
    EditorMode.EDITING_PATTERN: "EDITING REGEX",
    EditorMode.EDITING_REPLACEMENT: "EDITING REPLACEMENT",
}

HELP_TEXT = {
    EditorMode.BROWSING: "q: Quit",
    EditorMode.EDITING_SOURCE: "Enter: New line | Esc: Done",
    EditorMode.EDITING_PATTERN: "Enter/Esc: Done",
    EditorMode.EDITING_REPLACEMENT: "Enter/Esc: Done",
}


class RegexEditor:
    """Main editor application.

    Owns the curses screen and the session state. Key events go to the
    edit-state machine; after each one the whole screen is repainted.
    """

    def __init__(
        self,
        stdscr: "curses.window",
        config: AppConfig,
        agent: Optional[PatternAgent] = None,
    ) -> None:
        """Initialize the editor.

        Args:
            stdscr: Main curses screen.
            config: Application configuration.
            agent: Pattern suggestion agent, None disables TAB.
        """
        self.stdscr = stdscr
        self.config = config
        self.logger = get_logger("editor")

        try:
            curses.curs_set(1)
        except curses.error:
            pass
        setup_colors()
        self.stdscr.keypad(True)
        self.stdscr.timeout(POLL_TIMEOUT_MS)

        self.state = EditorState(source=TextBuffer(config.initial_source))
        self.machine = EditStateMachine(
            self.state,
            match_view=config.match_view,
            agent=agent,
            on_busy=self._refresh_all,
        )
        self.machine.refresh()

        self._create_windows()
        self.logger.info(
            f"Editor initialized (match_view={config.match_view.value}, "
            f"provider={agent.provider_name if agent else None})"
        )

    def _create_windows(self) -> None:
        """Create or recreate windows based on terminal size."""
        height, width = self.stdscr.getmaxyx()

        # Layout: header(1) + source + pattern(3) + replacement(3)
        # + output + footer(1)
        free = max(2, height - 2 - 2 * LINE_PANEL_HEIGHT)
        source_height = max(3, free * 2 // 5)
        output_height = max(3, free - source_height)

        top = 1
        source_win = curses.newwin(source_height, width, top, 0)
        top += source_height
        pattern_win = curses.newwin(LINE_PANEL_HEIGHT, width, top, 0)
        top += LINE_PANEL_HEIGHT
        replacement_win = curses.newwin(LINE_PANEL_HEIGHT, width, top, 0)
        top += LINE_PANEL_HEIGHT
        output_win = curses.newwin(output_height, width, top, 0)

        self.source_panel = TextPanel(
            source_win, " [Source Text] ('s') ", ColorPair.SOURCE
        )
        self.pattern_panel = TextPanel(
            pattern_win, " [Regex Pattern] ('r') ", ColorPair.PATTERN
        )
        self.replacement_panel = TextPanel(
            replacement_win,
            " [Replace With] ('t' - sed mode) ",
            ColorPair.REPLACEMENT,
        )
        self.output_panel = TextPanel(output_win, " [Output Preview] ")

    def _update_focus(self) -> None:
        """Highlight the panel that owns keyboard input."""
        mode = self.state.mode
        self.source_panel.focused = mode == EditorMode.EDITING_SOURCE
        self.pattern_panel.focused = mode == EditorMode.EDITING_PATTERN
        self.replacement_panel.focused = (
            mode == EditorMode.EDITING_REPLACEMENT
        )

    def _draw_header(self) -> None:
        """Draw the title line."""
        _, width = self.stdscr.getmaxyx()
        header = f"── REGEX WYSIWYG - MODE: {MODE_NAMES[self.state.mode]} "
        header = header + "─" * max(0, width - len(header) - 1)
        safe_addstr(
            self.stdscr,
            0,
            0,
            header,
            curses.color_pair(ColorPair.TITLE) | curses.A_BOLD,
        )

    def _draw_footer(self) -> None:
        """Draw the status/help line."""
        height, _ = self.stdscr.getmaxyx()
        help_text = HELP_TEXT[self.state.mode]
        if self.state.mode == EditorMode.BROWSING:
            footer = f" {self.state.status} | {help_text}"
        else:
            footer = f" {help_text}"
        safe_addstr(
            self.stdscr,
            height - 1,
            0,
            footer,
            curses.color_pair(ColorPair.HELP),
        )

    def _refresh_all(self) -> None:
        """Repaint every window."""
        self._update_focus()
        self.stdscr.erase()
        self._draw_header()
        self._draw_footer()
        self.stdscr.noutrefresh()

        self.source_panel.draw(self.state.source.text)
        self.pattern_panel.draw(self.state.pattern.text)
        self.replacement_panel.draw(self.state.replacement.text)

        output_color = (
            ColorPair.ERROR
            if self.state.output.startswith(REGEX_ERROR_PREFIX)
            else ColorPair.OUTPUT
        )
        self.output_panel.draw(
            self.state.output, curses.color_pair(output_color)
        )

        # Park the cursor in the focused panel, drawn last
        for panel in (
            self.source_panel,
            self.pattern_panel,
            self.replacement_panel,
        ):
            if panel.focused:
                panel.window.noutrefresh()

        curses.doupdate()

    def _handle_resize(self) -> None:
        curses.update_lines_cols()
        self.stdscr.clear()
        try:
            self._create_windows()
        except curses.error:
            # Too small for the layout; keep the old windows until it grows
            self.logger.warning("Terminal too small after resize")

    def run(self) -> None:
        """Main application loop."""
        self.logger.info("Starting main loop")

        while self.state.running:
            self._refresh_all()

            try:
                wch = self.stdscr.get_wch()
            except curses.error:
                # Poll timeout, nothing typed
                continue

            if wch == curses.KEY_RESIZE:
                self._handle_resize()
                continue

            self.machine.handle_event(from_curses(wch))

        self.logger.info("Main loop finished")
