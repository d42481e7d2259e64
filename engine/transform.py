"""Text transform engine.

Derives the preview output from the source text, the pattern and the
optional replacement. Everything here is pure: the pattern is compiled fresh
on every call and nothing is kept between calls.

Matching runs on the ``regex`` package with a time budget, so a pattern that
backtracks catastrophically turns into a regex error instead of freezing the
event loop.
"""

import time
from enum import Enum
from typing import Optional

import regex


REGEX_ERROR_PREFIX = "Regex Error: "
NO_MATCHES = "(No hay coincidencias)"
MATCH_SEPARATOR = " | "

# Seconds one transform may spend matching
MATCH_TIMEOUT = 0.25

# $$, ${name} and $name, where a name made only of digits is a group index
_GROUP_REF = regex.compile(r"\$(?:(\$)|\{([_0-9A-Za-z]+)\}|([_0-9A-Za-z]+))")


class MatchView(Enum):
    """How matches are shown when there is no replacement."""

    MATCHES = "matches"  # Every match across the whole text, joined
    LINES = "lines"      # Whole lines that contain a match


class _Deadline:
    """Time budget shared by all matching calls of one transform."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        self.expires = time.monotonic() + seconds

    def remaining(self) -> float:
        """Seconds left, raising TimeoutError once the budget is spent."""
        left = self.expires - time.monotonic()
        if left <= 0:
            raise TimeoutError(
                f"pattern took longer than {self.seconds}s to match"
            )
        return left


def expand_replacement(template: str, match: "regex.Match") -> str:
    """Expand group references in a replacement template for one match.

    Supports ``$1``, ``${1}``, ``$name``, ``${name}`` and ``$$`` for a
    literal dollar sign. References to unknown groups, or to groups that
    did not take part in the match, expand to an empty string. Any other
    character, including a backslash, is copied as is.

    Args:
        template: Replacement text typed by the user.
        match: The match being replaced.

    Returns:
        The text to put in place of the match.
    """

    def _resolve(ref: "regex.Match") -> str:
        if ref.group(1):
            return "$"
        name = ref.group(2) or ref.group(3)
        key = int(name) if name.isdigit() else name
        try:
            value = match.group(key)
        except IndexError:
            return ""
        return value or ""

    return _GROUP_REF.sub(_resolve, template)


def filter_lines(
    pattern: "regex.Pattern", source: str, deadline: _Deadline
) -> str:
    """Keep the lines of ``source`` that contain a match."""
    kept = [
        line
        for line in source.split("\n")
        if pattern.search(line, timeout=deadline.remaining())
    ]
    if not kept:
        return NO_MATCHES
    return "".join(f"{line}\n" for line in kept)


def extract_matches(
    pattern: "regex.Pattern", source: str, deadline: _Deadline
) -> str:
    """Join every non-overlapping match in ``source``."""
    found = [
        m.group(0)
        for m in pattern.finditer(source, timeout=deadline.remaining())
    ]
    if not found:
        return NO_MATCHES
    return MATCH_SEPARATOR.join(found)


def substitute(
    pattern: "regex.Pattern",
    source: str,
    replacement: str,
    deadline: _Deadline,
) -> str:
    """Replace every non-overlapping match, keeping the surrounding text."""
    return pattern.sub(
        lambda m: expand_replacement(replacement, m),
        source,
        timeout=deadline.remaining(),
    )


def transform(
    source: str,
    pattern: str,
    replacement: Optional[str] = None,
    view: MatchView = MatchView.MATCHES,
) -> str:
    """Compute the preview output.

    Args:
        source: Text the pattern is applied to.
        pattern: Regular expression typed by the user.
        replacement: Replacement text. Empty or None selects filter mode.
        view: Filter variant used when there is no replacement.

    Returns:
        The transformed text, the source itself when the pattern is empty,
        or a ``"Regex Error: ..."`` diagnostic when the pattern is invalid
        or takes longer than MATCH_TIMEOUT to run.
    """
    if not pattern:
        return source

    try:
        compiled = regex.compile(pattern)
    except (regex.error, OverflowError, RecursionError) as e:
        return f"{REGEX_ERROR_PREFIX}{e}"

    deadline = _Deadline(MATCH_TIMEOUT)
    try:
        if replacement:
            return substitute(compiled, source, replacement, deadline)
        if view == MatchView.LINES:
            return filter_lines(compiled, source, deadline)
        return extract_matches(compiled, source, deadline)
    except TimeoutError as e:
        return f"{REGEX_ERROR_PREFIX}{e}"
