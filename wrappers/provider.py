"""Pattern suggestion providers: external AI CLI or OpenAI-compatible API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence
import json
import logging
import shlex
import subprocess

from logging_config import get_logger


# Characters of stderr shown on the status line for a failed command
STDERR_PREVIEW_CHARS = 30

SYSTEM_PROMPT = (
    "You write regular expressions for Python's re module. "
    "Answer with the pattern only."
)


@dataclass
class ProviderResponse:
    """Standardized response from a suggestion provider."""

    text: str
    success: bool
    error: Optional[str] = None


class SuggestionProvider(ABC):
    """Maps a free-form prompt to a raw text answer.

    Implementations never raise for provider problems; they report them in
    the returned ProviderResponse with ``success=False`` and a short,
    human-readable ``error``.
    """

    name: str = "Provider"

    @abstractmethod
    def suggest(self, prompt: str) -> ProviderResponse:
        """Send the prompt and wait for the answer.

        Args:
            prompt: Complete prompt text.

        Returns:
            ProviderResponse with the raw answer.
        """
        pass


class CommandLineProvider(SuggestionProvider):
    """Runs an AI command-line tool with the prompt as its last argument."""

    def __init__(
        self,
        command: Sequence[str],
        name: str = "Gemini",
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        debug: bool = False,
    ) -> None:
        """Initialize the provider.

        Args:
            command: Program and leading arguments, e.g. ["gemini", "-p"].
            name: Name shown on the status line.
            timeout: Seconds to wait for the command, None waits forever.
            logger: Optional logger instance.
            debug: Log prompts and raw output.
        """
        self.command = list(command)
        self.name = name
        self.timeout = timeout
        self.logger = logger or get_logger("provider")
        self.debug = debug

    @classmethod
    def from_string(cls, command: str, **kwargs) -> "CommandLineProvider":
        """Build from a shell-style command string such as ``"gemini -p"``."""
        return cls(shlex.split(command), **kwargs)

    def suggest(self, prompt: str) -> ProviderResponse:
        """Run the command and return its stdout."""
        argv = self.command + [prompt]
        self.logger.info(
            f"Running {self.command[0] if self.command else '?'}: "
            f"{len(prompt)} chars prompt"
        )
        if self.debug:
            self.logger.debug(f"argv: {json.dumps(argv, ensure_ascii=False)}")

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            self.logger.error(f"{self.name} timed out after {self.timeout}s")
            return ProviderResponse(
                text="",
                success=False,
                error=f"{self.name} timed out.",
            )
        except (OSError, ValueError) as e:
            self.logger.error(f"Could not run {argv[0]}: {e}")
            return ProviderResponse(
                text="",
                success=False,
                error=f"Execution error: {e}",
            )

        stdout = completed.stdout.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            self.logger.error(
                f"{self.name} exited with {completed.returncode}: {stderr}"
            )
            return ProviderResponse(
                text=stdout,
                success=False,
                error=f"{self.name} error: {stderr[:STDERR_PREVIEW_CHARS]}",
            )

        if self.debug:
            self.logger.debug(f"stdout: {stdout!r}")
        if not stdout.strip():
            return ProviderResponse(
                text="",
                success=False,
                error=f"{self.name} returned nothing.",
            )
        return ProviderResponse(text=stdout, success=True)


class OpenAICompatibleProvider(SuggestionProvider):
    """Asks an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.2,
        name: str = "AI",
        logger: Optional[logging.Logger] = None,
        debug: bool = False,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: API key. Can be empty for local servers that don't
                require auth.
            base_url: Base URL for the API endpoint.
            model: Model name to use for completions.
            temperature: Sampling temperature.
            name: Name shown on the status line.
            logger: Optional logger instance.
            debug: Log request and response payloads.
        """
        # Import here so the command-line provider works without openai
        from openai import OpenAI

        # OpenAI client requires a non-empty api_key even if server ignores it
        effective_key = api_key if api_key else "not-needed"

        self.client = OpenAI(base_url=base_url, api_key=effective_key)
        self.model = model
        self.temperature = temperature
        self.name = name
        self.logger = logger or get_logger("provider")
        self.debug = debug

    def suggest(self, prompt: str) -> ProviderResponse:
        """Send the prompt as a single user message."""
        request_payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
        }
        self.logger.info(
            f"API call: {len(prompt)} chars prompt, model={self.model}"
        )
        if self.debug:
            self.logger.debug(
                json.dumps(request_payload, indent=2, ensure_ascii=False)
            )

        try:
            response = self.client.chat.completions.create(**request_payload)
        except Exception as e:
            self.logger.error(f"API error: {e}")
            return ProviderResponse(
                text="",
                success=False,
                error=f"{self.name} error: {str(e)[:STDERR_PREVIEW_CHARS]}",
            )

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        if self.debug:
            self.logger.debug(f"API response: {text!r}")
        if not text.strip():
            return ProviderResponse(
                text="",
                success=False,
                error=f"{self.name} returned nothing.",
            )
        return ProviderResponse(text=text, success=True)
