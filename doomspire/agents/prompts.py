"""Prompt text for reasoning-model agents."""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..engine_core.decision import DecisionContext

if TYPE_CHECKING:
    from ..engine_core.state import GameState

SYSTEM_PROMPT = """You are playing Lords of Doomspire, a dice-driven territory board game for four lords.

Lords win by reaching the Doomspire tile with 10+ fame, 10+ gold or 3+ starred
resource tiles, or by defeating the dragon there. Combat is decided by might plus
a D3 roll (faces 1-3).

You will be asked one question at a time with a closed list of options.
Reply with a single JSON object and nothing else:
{"choice": "<option id>", "reasoning": "<one or two sentences>"}
The choice must be exactly one of the listed option ids."""


def describe_state(state: GameState, player_name: str | None = None) -> str:
    """Compact text summary of every lord, the asking player first."""
    players = sorted(state.players, key=lambda p: p.name != player_name)
    lines = [f"Turn {state.turn_number}"]
    for player in players:
        resources = ", ".join(f"{r.value} {amount}" for r, amount in player.resources.items())
        buildings = ", ".join(sorted(b.value for b in player.buildings)) or "none"
        you = " (you)" if player.name == player_name else ""
        lines.append(
            f"- {player.name}{you}: fame {player.fame}, might {player.might}, {resources}; "
            f"buildings: {buildings}; claimed tiles: {len(state.claimed_tiles(player.name))}"
        )
        for champion in player.champions:
            items = ", ".join(item.name for item in champion.items) or "no items"
            lines.append(f"    champion {champion.champion_id} at {champion.position} ({items})")
        for boat in player.boats:
            lines.append(f"    boat {boat.boat_id} in the {boat.position.value} sea")
    return "\n".join(lines)


def build_prompt(context: DecisionContext, state: GameState | None = None) -> str:
    parts = []
    if state is not None:
        parts.append("Current game state:\n" + describe_state(state, context.player))
    parts.append(f"Decision ({context.type}): {context.description}")
    parts.append("Options:\n" + "\n".join(
        f"- {option.id}: {option.description}" for option in context.options
    ))
    return "\n\n".join(parts)
