"""
Victory Evaluator - Pure predicate over players and board.

A player whose champion stands on the doomspire tile wins by the first
satisfied threshold, checked in order: fame, gold, starred claimed
tiles. Standing there with none satisfied is not a loss; defeating the
dragon is a separate victory recorded by the combat path.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..config import GameSettings, DEFAULT_SETTINGS
from .state import GameState, Player, TileType


class VictoryType(str, Enum):
    FAME = "fame"
    GOLD = "gold"
    ECONOMIC = "economic"
    COMBAT = "combat"


@dataclass(frozen=True)
class VictoryResult:
    player_name: str
    victory_type: VictoryType
    detail: str = ""


def alternative_victory(
    state: GameState,
    player: Player,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> VictoryType | None:
    """First threshold the player meets, regardless of position."""
    if player.fame >= settings.victory_fame_threshold:
        return VictoryType.FAME
    if player.resources.get("gold", 0) >= settings.victory_gold_threshold:
        return VictoryType.GOLD
    if state.starred_tile_count(player.name) >= settings.victory_starred_tiles_threshold:
        return VictoryType.ECONOMIC
    return None


def on_doomspire(state: GameState, player: Player) -> bool:
    for champion in player.champions:
        tile = state.get_tile(champion.position)
        if tile is not None and tile.tile_type == TileType.DOOMSPIRE:
            return True
    return False


def evaluate_victories(
    state: GameState,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> list[VictoryResult]:
    """Every player who currently satisfies a victory condition."""
    results = []
    for player in state.players:
        if not on_doomspire(state, player):
            continue
        victory_type = alternative_victory(state, player, settings)
        if victory_type is not None:
            results.append(VictoryResult(player.name, victory_type, _describe(victory_type, settings)))
    return results


def check_victory(
    state: GameState,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> VictoryResult | None:
    """The first winner in player order, if any."""
    results = evaluate_victories(state, settings)
    return results[0] if results else None


def _describe(victory_type: VictoryType, settings: GameSettings) -> str:
    if victory_type == VictoryType.FAME:
        return f"recruited the dragon with {settings.victory_fame_threshold}+ fame"
    if victory_type == VictoryType.GOLD:
        return f"bribed the dragon with {settings.victory_gold_threshold}+ gold"
    return f"impressed the dragon with {settings.victory_starred_tiles_threshold}+ starred tiles"


def describe_victory(victory_type: VictoryType, settings: GameSettings = DEFAULT_SETTINGS) -> str:
    if victory_type == VictoryType.COMBAT:
        return "defeated the dragon"
    return _describe(victory_type, settings)
