"""
Scripted Agents - Deterministic and random decision agents.

Used for:
- Testing
- Baseline comparison
- Filling empty seats in simulations
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import random

from ..engine_core.decision import Decision, DecisionAgent, DecisionContext

if TYPE_CHECKING:
    from ..engine_core.state import GameState


class RandomAgent(DecisionAgent):
    """Random agent - picks an option uniformly at random."""

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        return Decision(choice=self.rng.choice(context.options), reasoning="Selected randomly")


class FirstOptionAgent(DecisionAgent):
    """First-option agent - always picks the first option offered."""

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        return Decision(choice=context.options[0], reasoning="Selected first option")


class PreferenceAgent(DecisionAgent):
    """
    Picks by a fixed preference list.

    preferences maps a decision type to option ids in order of
    preference; entries under "*" apply to every type. An option id
    ending in "*" matches by prefix ("resource_*"). Without a match the
    first option is used.
    """

    def __init__(self, preferences: dict[str, list[str]] | None = None):
        self.preferences = preferences or {}
        self.history: list[tuple[str, str]] = []

    def _matches(self, pattern: str, option_id: str) -> bool:
        if pattern.endswith("*"):
            return option_id.startswith(pattern[:-1])
        return option_id == pattern

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        wanted = self.preferences.get(context.type, []) + self.preferences.get("*", [])
        for pattern in wanted:
            for option in context.options:
                if self._matches(pattern, option.id):
                    self.history.append((context.type, option.id))
                    return Decision(choice=option, reasoning=f"Preferred {pattern}")

        self.history.append((context.type, context.options[0].id))
        return Decision(choice=context.options[0], reasoning="No preference matched")
