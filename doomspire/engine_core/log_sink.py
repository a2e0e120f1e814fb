"""
Log Sink - Narrative audit trail of a resolution.

The sink is a plain callable (category, message). It is observational
only: nothing in the engine branches on what was logged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging


class LogCategory(str, Enum):
    """Narrative log categories."""
    COMBAT = "combat"
    EVENT = "event"
    SYSTEM = "system"
    VICTORY = "victory"


LogSink = Callable[[str, str], None]


def logging_sink(logger: logging.Logger | None = None, level: int = logging.INFO) -> LogSink:
    """Forward narrative entries to a stdlib logger."""
    target = logger or logging.getLogger("doomspire.narrative")

    def sink(category: str, message: str) -> None:
        target.log(level, "[%s] %s", getattr(category, "value", category), message)

    return sink


def null_sink(category: str, message: str) -> None:
    """Discard everything."""


@dataclass
class RecordingSink:
    """Keeps every entry in memory (tests, UI replays)."""
    entries: list[tuple[str, str]] = field(default_factory=list)

    def __call__(self, category: str, message: str) -> None:
        self.entries.append((getattr(category, "value", category), message))

    def messages(self, category: str | None = None) -> list[str]:
        return [m for c, m in self.entries if category is None or c == category]

    def contains(self, fragment: str) -> bool:
        return any(fragment in m for _, m in self.entries)
