"""Transform engine and key handling."""

from engine.keys import Key, KeyEvent, KeyKind, from_curses
from engine.transform import MatchView, NO_MATCHES, REGEX_ERROR_PREFIX, transform

__all__ = [
    "Key",
    "KeyEvent",
    "KeyKind",
    "from_curses",
    "MatchView",
    "NO_MATCHES",
    "REGEX_ERROR_PREFIX",
    "transform",
]
