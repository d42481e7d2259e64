"""Base agent class for provider-backed operations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from wrappers.provider import ProviderResponse, SuggestionProvider


@dataclass
class AgentResult:
    """Result from agent operation."""

    success: bool
    text: str
    operation: str
    error: Optional[str] = None


class AgentBase(ABC):
    """Base class for agents.

    An agent turns editor content into a prompt, sends it to a suggestion
    provider, and post-processes the raw answer.
    """

    # Operation name for logging
    operation_name: str = "agent"

    def __init__(self, provider: SuggestionProvider) -> None:
        """Initialize the agent.

        Args:
            provider: Provider that answers prompts.
        """
        self.provider = provider

    @property
    def provider_name(self) -> str:
        """Display name of the provider."""
        return self.provider.name

    @abstractmethod
    def build_prompt(self, **kwargs: str) -> str:
        """Build the prompt text for this agent."""
        pass

    def clean_response(self, text: str) -> str:
        """Post-process the raw answer. Default strips whitespace."""
        return text.strip()

    def run(self, **kwargs: str) -> AgentResult:
        """Build the prompt, query the provider and clean the answer.

        Returns:
            AgentResult with the operation outcome. An answer that is empty
            after cleaning counts as a failure.
        """
        prompt = self.build_prompt(**kwargs)
        response: ProviderResponse = self.provider.suggest(prompt)

        if not response.success:
            return AgentResult(
                success=False,
                text="",
                operation=self.operation_name,
                error=response.error,
            )

        text = self.clean_response(response.text)
        if not text:
            return AgentResult(
                success=False,
                text="",
                operation=self.operation_name,
                error=f"{self.provider_name} returned nothing.",
            )
        return AgentResult(
            success=True,
            text=text,
            operation=self.operation_name,
        )
