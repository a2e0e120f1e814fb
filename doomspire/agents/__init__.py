"""
Agents - Things that answer decisions.

Provides:
- Scripted agents (random, first option, preference list)
- Human agents (in-process callback, remote over HTTP)
- A reasoning-model agent backed by Anthropic Claude
"""

from .scripted import RandomAgent, FirstOptionAgent, PreferenceAgent
from .human import CallbackAgent, RemoteAgent
from .reasoning import ReasoningAgent, ReasoningConfig, parse_reply

__all__ = [
    "RandomAgent",
    "FirstOptionAgent",
    "PreferenceAgent",
    "CallbackAgent",
    "RemoteAgent",
    "ReasoningAgent",
    "ReasoningConfig",
    "parse_reply",
]
