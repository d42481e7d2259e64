"""Editor modes and the per-session editor state."""

from dataclasses import dataclass, field
from enum import Enum, auto

from models.buffer import TextBuffer


DEFAULT_SOURCE = "Praliné saber no ocupa el lugar de argentino."
DEFAULT_STATUS = "Ready. 's': Source, 'r': Regex, 't': Replace, 'TAB': AI"


class EditorMode(Enum):
    """Which buffer, if any, owns keyboard input."""

    BROWSING = auto()             # Commands only, no buffer focused
    EDITING_SOURCE = auto()       # Typing into the source text
    EDITING_PATTERN = auto()      # Typing the regex pattern
    EDITING_REPLACEMENT = auto()  # Typing the replacement string


@dataclass
class EditorState:
    """Centralized editor state.

    One instance exists per session. It is owned by the event loop and
    mutated in place by the edit-state machine.
    """

    source: TextBuffer = field(
        default_factory=lambda: TextBuffer(DEFAULT_SOURCE)
    )
    pattern: TextBuffer = field(default_factory=TextBuffer)
    replacement: TextBuffer = field(default_factory=TextBuffer)
    mode: EditorMode = EditorMode.BROWSING
    output: str = ""
    status: str = DEFAULT_STATUS
    running: bool = True

    def buffer_for(self, mode: EditorMode) -> TextBuffer:
        """Return the buffer owned by an editing mode.

        Args:
            mode: One of the EDITING_* modes.

        Returns:
            The matching buffer.

        Raises:
            ValueError: If ``mode`` does not own a buffer.
        """
        if mode == EditorMode.EDITING_SOURCE:
            return self.source
        elif mode == EditorMode.EDITING_PATTERN:
            return self.pattern
        elif mode == EditorMode.EDITING_REPLACEMENT:
            return self.replacement
        raise ValueError(f"{mode.name} does not own a buffer")
