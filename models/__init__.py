"""Data models for Regex WYSIWYG."""

from models.buffer import TextBuffer
from models.state import EditorMode, EditorState
from models.config import AppConfig, ProviderConfig, Secrets

__all__ = [
    "TextBuffer",
    "EditorMode",
    "EditorState",
    "AppConfig",
    "ProviderConfig",
    "Secrets",
]
