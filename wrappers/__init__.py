"""Wrappers for external suggestion tools."""

from wrappers.provider import (
    CommandLineProvider,
    OpenAICompatibleProvider,
    ProviderResponse,
    SuggestionProvider,
)

__all__ = [
    "ProviderResponse",
    "SuggestionProvider",
    "CommandLineProvider",
    "OpenAICompatibleProvider",
]
