"""Agents that call suggestion providers."""

from agents.base import AgentBase, AgentResult
from agents.pattern_agent import PatternAgent, strip_fences

__all__ = [
    "AgentBase",
    "AgentResult",
    "PatternAgent",
    "strip_fences",
]
