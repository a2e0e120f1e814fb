"""Helpers shared by several event handlers."""

from __future__ import annotations

from ..context import ResolutionContext
from ..decision import DecisionContext, DecisionOption
from ..dice import DiceSource
from ..log_sink import LogCategory
from ..state import GameState, Position, Tile, TileType
from .result import EventCardResult


async def ask_yes_no(
    ctx: ResolutionContext,
    decision_type: str,
    description: str,
    yes: str,
    no: str,
) -> bool:
    decision = await ctx.decide(DecisionContext(
        type=decision_type,
        description=description,
        options=[
            DecisionOption(id="yes", description=yes),
            DecisionOption(id="no", description=no),
        ],
    ))
    return decision.choice_id == "yes"


def nearest_tile(tiles: list[Tile], origin: Position, dice: DiceSource) -> Tile:
    """Closest tile to origin; ties are settled by the dice."""
    best = min(tile.position.distance_to(origin) for tile in tiles)
    return dice.choice([t for t in tiles if t.position.distance_to(origin) == best])


def add_oasis_tokens(state: GameState, result: EventCardResult, ctx: ResolutionContext) -> None:
    """Every oasis gains one adventure token."""
    oases = state.board.find_tiles(lambda tile: tile.tile_type == TileType.OASIS)
    for tile in oases:
        tile.adventure_tokens += 1
    result.oasis_tokens_added += len(oases)
    if oases:
        ctx.log(LogCategory.EVENT, f"{len(oases)} oasis tile(s) gain a mystery card")
