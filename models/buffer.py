"""Append-only text buffer used for the editable fields."""


class TextBuffer:
    """Ordered, mutable character sequence.

    Editing only ever happens at the end: characters are appended, the last
    one can be removed, and the whole buffer can be cleared.
    """

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)

    @property
    def text(self) -> str:
        """Current contents as a string."""
        return "".join(self._chars)

    def append(self, char: str) -> None:
        """Append one character (or a pasted run of characters)."""
        self._chars.extend(char)

    def pop(self) -> None:
        """Remove the last character. Does nothing when empty."""
        if self._chars:
            self._chars.pop()

    def clear(self) -> None:
        """Remove everything."""
        self._chars.clear()

    def set(self, text: str) -> None:
        """Replace the contents wholesale."""
        self._chars = list(text)

    def __len__(self) -> int:
        return len(self._chars)

    def __bool__(self) -> bool:
        return bool(self._chars)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextBuffer({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return self._chars == other._chars
        if isinstance(other, str):
            return self.text == other
        return NotImplemented
