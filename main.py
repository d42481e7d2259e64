#!/usr/bin/env python3
"""Regex WYSIWYG - live regular expression preview in the terminal.

Type or paste source text, write a pattern (and optionally a replacement)
and watch the transformed output update on every keystroke. TAB asks an AI
tool for a pattern.

Usage:
    regex-wysiwyg

Keys (browse mode):
    s  edit source text      r  edit regex pattern
    t  edit replacement      TAB  ask for a pattern suggestion
    q  quit

Configuration:
    Files live in $RW_CONFIG_DIR (default ~/.config/regex-wysiwyg):
    - config.json: provider, match_view ("matches" or "lines"), ...
    - secrets.json: "api_key" for the OpenAI-compatible provider

    Environment variables (override config.json):
    - RW_PROVIDER: "command" (default) or "openai"
    - RW_COMMAND: suggestion command, prompt appended (default: gemini -p)
    - RW_API_URL, RW_MODEL, RW_API_KEY: OpenAI-compatible endpoint
    - RW_MATCH_VIEW: "matches" or "lines"
"""

import curses
import os
import sys
from pathlib import Path
from typing import Optional

from agents.pattern_agent import PatternAgent
from editor import RegexEditor
from logging_config import get_logger, setup_logging
from models.config import (
    PROVIDER_OPENAI,
    AppConfig,
    Secrets,
    default_config_dir,
)
from wrappers.provider import (
    CommandLineProvider,
    OpenAICompatibleProvider,
    SuggestionProvider,
)


def build_provider(
    config: AppConfig,
    secrets: Secrets,
) -> Optional[SuggestionProvider]:
    """Create the configured suggestion provider.

    Args:
        config: Application configuration.
        secrets: API credentials.

    Returns:
        The provider, or None if it could not be set up.
    """
    logger = get_logger("main")
    provider_config = config.provider

    if provider_config.kind == PROVIDER_OPENAI:
        try:
            return OpenAICompatibleProvider(
                api_key=secrets.api_key,
                base_url=provider_config.api_url,
                model=provider_config.model_name,
                temperature=provider_config.temperature,
                name=provider_config.display_name,
                logger=get_logger("provider"),
                debug=config.debug,
            )
        except ImportError as e:
            logger.error(f"OpenAI provider unavailable: {e}")
            return None

    try:
        return CommandLineProvider.from_string(
            provider_config.command,
            name=provider_config.display_name,
            timeout=provider_config.timeout,
            logger=get_logger("provider"),
            debug=config.debug,
        )
    except ValueError as e:
        logger.error(f"Invalid suggestion command: {e}")
        return None


def main(stdscr: "curses.window", config: AppConfig, secrets: Secrets) -> None:
    """Run one editor session on an initialized curses screen.

    Args:
        stdscr: Main curses screen.
        config: Application configuration.
        secrets: API credentials.
    """
    provider = build_provider(config, secrets)
    agent = (
        PatternAgent(provider, context_chars=config.context_chars)
        if provider
        else None
    )
    RegexEditor(stdscr, config, agent).run()


def run() -> None:
    """Entry point wrapper."""
    config_dir = default_config_dir()
    config = AppConfig.load(config_dir / "config.json")
    secrets = Secrets.load(config_dir / "secrets.json")

    log_path = Path(config.log_path)
    if not log_path.is_absolute():
        log_path = config_dir / log_path
    setup_logging(str(log_path), debug=config.debug)

    logger = get_logger("main")
    logger.info("Starting Regex WYSIWYG")

    # Make a lone Escape register without the default one second delay
    os.environ.setdefault("ESCDELAY", "25")

    exit_code = 0
    try:
        # curses.wrapper restores the terminal on every exit path
        curses.wrapper(main, config, secrets)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 130
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    finally:
        logger.info("Regex WYSIWYG shutdown")

    sys.exit(exit_code)


if __name__ == "__main__":
    run()
