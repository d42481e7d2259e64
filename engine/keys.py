"""Key events as seen by the edit-state machine."""

import curses
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class Key(Enum):
    """Keys the editor distinguishes."""

    CHAR = auto()       # Printable character, see KeyEvent.char
    BACKSPACE = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    OTHER = auto()      # Arrows, function keys, control codes


class KeyKind(Enum):
    """Press state of a key event."""

    PRESS = auto()
    REPEAT = auto()
    RELEASE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A single key event."""

    key: Key
    char: str = ""
    kind: KeyKind = KeyKind.PRESS

    @classmethod
    def char_press(cls, char: str) -> "KeyEvent":
        """Press of a printable character."""
        return cls(Key.CHAR, char)

    @classmethod
    def press(cls, key: Key) -> "KeyEvent":
        """Press of a non-character key."""
        return cls(key)

    @property
    def is_press(self) -> bool:
        return self.kind == KeyKind.PRESS


_CONTROL_CHARS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESCAPE,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}

_CURSES_KEYS = {
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
}


def from_curses(wch: Union[str, int]) -> KeyEvent:
    """Translate a value returned by ``window.get_wch()``.

    curses only reports key presses, so every event produced here is a
    PRESS. Terminals deliver characters as ``str`` and special keys as
    ``int`` key codes; control bytes may arrive either way.

    Args:
        wch: Character or key code.

    Returns:
        The matching KeyEvent.
    """
    if isinstance(wch, int):
        if wch in _CURSES_KEYS:
            return KeyEvent.press(_CURSES_KEYS[wch])
        if 0 <= wch < 0x110000 and chr(wch) in _CONTROL_CHARS:
            return KeyEvent.press(_CONTROL_CHARS[chr(wch)])
        return KeyEvent.press(Key.OTHER)

    if wch in _CONTROL_CHARS:
        return KeyEvent.press(_CONTROL_CHARS[wch])
    if wch.isprintable():
        return KeyEvent.char_press(wch)
    return KeyEvent.press(Key.OTHER)
