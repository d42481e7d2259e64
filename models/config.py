"""Configuration models for Regex WYSIWYG."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional
import json
import os

from engine.transform import MatchView
from logging_config import get_logger
from models.state import DEFAULT_SOURCE


# Environment variable names for fallback configuration
ENV_CONFIG_DIR = "RW_CONFIG_DIR"
ENV_API_KEY = "RW_API_KEY"
ENV_API_URL = "RW_API_URL"
ENV_MODEL = "RW_MODEL"
ENV_PROVIDER = "RW_PROVIDER"
ENV_COMMAND = "RW_COMMAND"
ENV_MATCH_VIEW = "RW_MATCH_VIEW"

PROVIDER_COMMAND = "command"
PROVIDER_OPENAI = "openai"
PROVIDERS = (PROVIDER_COMMAND, PROVIDER_OPENAI)

logger = get_logger("config")


def default_config_dir() -> Path:
    """Directory holding config.json, secrets.json and the log folder."""
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".config" / "regex-wysiwyg"


def _read_number(
    data: dict,
    key: str,
    convert: Callable[[Any], Any],
    default: Any,
) -> Any:
    """Read a numeric setting, falling back to ``default`` if unusable.

    JSON hand-edits often quote numbers ("5"), so strings are converted too.
    A missing key or an explicit null gives the default.
    """
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        # bool is an int subclass; true/false is never a sensible number here
        logger.warning(f"Invalid {key} {value!r}, using {default!r}")
        return default
    try:
        return convert(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {key} {value!r}, using {default!r}")
        return default


@dataclass
class ProviderConfig:
    """Pattern suggestion provider settings."""

    kind: str = PROVIDER_COMMAND
    command: str = "gemini -p"
    display_name: str = "Gemini"
    timeout: Optional[float] = None
    api_url: str = "https://api.openai.com/v1"
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.2

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderConfig":
        """Deserialize from dictionary.

        Environment variables take precedence over config.json when set:
        - RW_PROVIDER overrides kind
        - RW_COMMAND overrides command
        - RW_API_URL overrides api_url
        - RW_MODEL overrides model_name
        """
        defaults = cls()
        kind = os.environ.get(ENV_PROVIDER) or data.get("kind") or defaults.kind
        if kind not in PROVIDERS:
            logger.warning(f"Unknown provider {kind!r}, using {defaults.kind!r}")
            kind = defaults.kind

        return cls(
            kind=kind,
            command=(
                os.environ.get(ENV_COMMAND)
                or data.get("command")
                or defaults.command
            ),
            display_name=str(data.get("display_name", defaults.display_name)),
            timeout=_read_number(data, "timeout", float, defaults.timeout),
            api_url=(
                os.environ.get(ENV_API_URL)
                or data.get("api_url")
                or defaults.api_url
            ),
            model_name=(
                os.environ.get(ENV_MODEL)
                or data.get("model_name")
                or defaults.model_name
            ),
            temperature=_read_number(
                data, "temperature", float, defaults.temperature
            ),
        )


@dataclass
class AppConfig:
    """Application-level configuration."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    match_view: MatchView = MatchView.MATCHES
    initial_source: str = DEFAULT_SOURCE
    context_chars: int = 2000
    log_path: str = "logs/regex_wysiwyg.log"
    debug: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Deserialize from dictionary.

        RW_MATCH_VIEW overrides match_view when set.
        """
        view_name = os.environ.get(ENV_MATCH_VIEW) or data.get(
            "match_view", MatchView.MATCHES.value
        )
        try:
            match_view = MatchView(view_name)
        except ValueError:
            logger.warning(
                f"Unknown match_view {view_name!r}, using "
                f"{MatchView.MATCHES.value!r}"
            )
            match_view = MatchView.MATCHES

        provider = data.get("provider", {})
        if not isinstance(provider, dict):
            logger.warning(f"Ignoring non-object provider setting {provider!r}")
            provider = {}

        return cls(
            provider=ProviderConfig.from_dict(provider),
            match_view=match_view,
            initial_source=str(data.get("initial_source", DEFAULT_SOURCE)),
            context_chars=_read_number(data, "context_chars", int, 2000),
            log_path=str(data.get("log_path", "logs/regex_wysiwyg.log")),
            debug=data.get("debug") is True,
        )

    @classmethod
    def load(cls, config_path: Path) -> "AppConfig":
        """Load configuration from config.json.

        Args:
            config_path: Path to config.json file.

        Returns:
            AppConfig instance, using defaults for missing values.
        """
        data: dict = {}
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_path}: not a JSON object")
            data = {}
        # Environment overrides apply even without a config file
        return cls.from_dict(data)


@dataclass
class Secrets:
    """Sensitive configuration stored separately."""

    api_key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Secrets":
        """Deserialize from dictionary."""
        return cls(
            api_key=str(data.get("api_key", "")),
        )

    @classmethod
    def load(cls, secrets_path: Path) -> "Secrets":
        """Load secrets from secrets.json.

        RW_API_KEY environment variable takes precedence over the file.

        Args:
            secrets_path: Path to secrets.json file.

        Returns:
            Secrets instance, empty if file doesn't exist and no env var.
        """
        secrets = cls()
        if secrets_path.exists():
            try:
                with open(secrets_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                secrets = cls.from_dict(data)
            except (json.JSONDecodeError, OSError, AttributeError) as e:
                logger.warning(f"Ignoring unreadable secrets file: {e}")

        env_key = os.environ.get(ENV_API_KEY)
        if env_key is not None:
            secrets.api_key = env_key

        return secrets
