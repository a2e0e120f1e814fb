"""Result record shared by every event card handler."""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field


class EventCardResult(BaseModel):
    """
    Outcome of one event card.

    The summary fields are for logs and UIs only; no rule branches on
    them. The record round-trips through JSON unchanged.
    """
    event_processed: bool = True
    error_message: Optional[str] = None
    players_affected: list[str] = Field(default_factory=list)
    resources_changed: dict[str, dict[str, int]] = Field(default_factory=dict)
    boats_moved: bool = False
    oasis_tokens_added: int = 0

    @classmethod
    def failure(cls, message: str) -> EventCardResult:
        return cls(event_processed=False, error_message=message)

    def affect(self, player_name: str) -> None:
        if player_name not in self.players_affected:
            self.players_affected.append(player_name)

    def record_change(self, player_name: str, resource: str, delta: int) -> None:
        """Accumulate a resource (or fame/might) delta for a player."""
        if delta == 0:
            return
        key = getattr(resource, "value", resource)
        changes = self.resources_changed.setdefault(player_name, {})
        changes[key] = changes.get(key, 0) + delta
        self.affect(player_name)
