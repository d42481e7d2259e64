"""Agent that proposes a regex pattern for the current source text."""

from agents.base import AgentBase, AgentResult
from wrappers.provider import SuggestionProvider


PATTERN_PROMPT = (
    "Give me ONLY the regex pattern (no text, no backticks, no markdown) "
    "to match or extract this: '{pattern}' in the text: '{source}'."
)

# Removed in this order, so the language tag goes together with its fence
FENCE_MARKERS = ("```regex", "```", "`")


def strip_fences(text: str) -> str:
    """Remove Markdown code fences and backticks, then trim whitespace.

    Args:
        text: Raw provider answer.

    Returns:
        The bare candidate pattern.
    """
    for marker in FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


class PatternAgent(AgentBase):
    """Turns the user's pattern draft and the source into a suggestion.

    The current pattern buffer acts as the user's guidance (it may be a
    rough regex or a plain description) and the source text is the context.
    """

    operation_name = "suggest_pattern"

    def __init__(
        self,
        provider: SuggestionProvider,
        context_chars: int = 2000,
    ) -> None:
        """Initialize the agent.

        Args:
            provider: Provider that answers prompts.
            context_chars: Maximum source characters included in the prompt.
        """
        super().__init__(provider)
        self.context_chars = context_chars

    def build_prompt(self, pattern: str = "", source: str = "") -> str:
        """Build the suggestion prompt.

        Args:
            pattern: Current pattern buffer.
            source: Current source text, truncated to ``context_chars``.

        Returns:
            Prompt text.
        """
        if self.context_chars >= 0:
            source = source[:self.context_chars]
        return PATTERN_PROMPT.format(pattern=pattern, source=source)

    def clean_response(self, text: str) -> str:
        return strip_fences(text)

    def execute(self, pattern: str, source: str) -> AgentResult:
        """Ask for a pattern.

        Args:
            pattern: Current pattern buffer.
            source: Current source text.

        Returns:
            AgentResult whose text is the candidate pattern on success.
        """
        return self.run(pattern=pattern, source=source)
