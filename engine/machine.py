"""Edit-state machine: routes key events to buffers and switches modes."""

from typing import Callable, Optional

from agents.pattern_agent import PatternAgent
from engine.keys import Key, KeyEvent
from engine.transform import MatchView, transform
from logging_config import get_logger
from models.state import EditorMode, EditorState


# Browsing-mode command keys and the editing mode each one enters
MODE_KEYS = {
    "s": EditorMode.EDITING_SOURCE,
    "r": EditorMode.EDITING_PATTERN,
    "t": EditorMode.EDITING_REPLACEMENT,
}
QUIT_KEY = "q"


class EditStateMachine:
    """Consumes key events and keeps ``state.output`` current.

    Every processed key press is followed by exactly one transform run, so
    the output shown on the next frame always reflects the last keystroke.
    No key can make this class raise; invalid patterns surface through the
    transform output instead.
    """

    def __init__(
        self,
        state: EditorState,
        match_view: MatchView = MatchView.MATCHES,
        agent: Optional[PatternAgent] = None,
        on_busy: Optional[Callable[[], None]] = None,
    ) -> None:
        """Initialize the machine.

        Args:
            state: Session state, mutated in place.
            match_view: Filter variant used when there is no replacement.
            agent: Pattern suggestion agent used on TAB. None disables it.
            on_busy: Called right before a blocking suggestion request,
                so the caller can repaint the status line.
        """
        self.state = state
        self.match_view = match_view
        self.agent = agent
        self.on_busy = on_busy
        self.logger = get_logger("machine")
        self.handlers: dict[EditorMode, Callable[[KeyEvent], None]] = {
            EditorMode.BROWSING: self._handle_browsing_keys,
            EditorMode.EDITING_SOURCE: self._handle_source_keys,
            EditorMode.EDITING_PATTERN: self._handle_line_keys,
            EditorMode.EDITING_REPLACEMENT: self._handle_line_keys,
        }

    def refresh(self) -> None:
        """Recompute the output from the current buffers."""
        self.state.output = transform(
            self.state.source.text,
            self.state.pattern.text,
            self.state.replacement.text,
            self.match_view,
        )

    def handle_event(self, event: KeyEvent) -> None:
        """Process one key event.

        Repeat and release events are dropped so a single physical
        keystroke is never applied twice.

        Args:
            event: The key event.
        """
        if not event.is_press:
            return
        self.handlers[self.state.mode](event)
        self.refresh()

    def _enter_mode(self, mode: EditorMode) -> None:
        """Switch to an editing mode, discarding that buffer's contents."""
        self.state.buffer_for(mode).clear()
        self.state.mode = mode
        self.logger.debug(f"Entered {mode.name}")

    def _leave_editing(self) -> None:
        self.logger.debug(f"Left {self.state.mode.name}")
        self.state.mode = EditorMode.BROWSING

    def _handle_browsing_keys(self, event: KeyEvent) -> None:
        """Handle keys while no buffer is being edited."""
        if event.key == Key.TAB:
            self.suggest()
        elif event.key == Key.CHAR:
            if event.char == QUIT_KEY:
                self.state.running = False
            elif event.char in MODE_KEYS:
                self._enter_mode(MODE_KEYS[event.char])

    def _edit_buffer(self, event: KeyEvent) -> bool:
        """Apply keys shared by every editing mode.

        Returns:
            True if the key was handled.
        """
        buffer = self.state.buffer_for(self.state.mode)
        if event.key == Key.CHAR:
            buffer.append(event.char)
        elif event.key == Key.BACKSPACE:
            buffer.pop()
        elif event.key == Key.ESCAPE:
            self._leave_editing()
        else:
            return False
        return True

    def _handle_source_keys(self, event: KeyEvent) -> None:
        """Source text is multi-line: Enter inserts a newline."""
        if self._edit_buffer(event):
            return
        if event.key == Key.ENTER:
            self.state.source.append("\n")

    def _handle_line_keys(self, event: KeyEvent) -> None:
        """Pattern and replacement are single-line: Enter confirms."""
        if self._edit_buffer(event):
            return
        if event.key == Key.ENTER:
            self._leave_editing()

    def suggest(self) -> None:
        """Ask the suggestion agent for a pattern.

        Blocks until the provider answers. On success the pattern buffer is
        replaced; on failure only the status line changes.
        """
        if self.agent is None:
            self.state.status = "No suggestion provider configured."
            return

        self.state.status = f"Asking {self.agent.provider_name}..."
        if self.on_busy:
            self.on_busy()

        result = self.agent.execute(
            pattern=self.state.pattern.text,
            source=self.state.source.text,
        )
        if result.success:
            self.state.pattern.set(result.text)
            self.state.status = "Suggestion applied!"
            self.logger.info(f"Applied suggested pattern: {result.text!r}")
        else:
            self.state.status = result.error or "Suggestion failed."
            self.logger.warning(f"Suggestion failed: {result.error}")
