"""
Item-Effect Interceptors - Rule overrides triggered by held items.

Each interceptor is a guard plus an override. When the guard fails it
returns "no effect" and the default path runs unchanged. When it holds,
the interceptor builds the same options the default path would offer
and settles them: a single option applies automatically, otherwise the
affected player's agent decides (uniform-random when there is none).

- Padded helmet (loot): the defeated player chooses what is given up
- Backpack (loot): same redirection for backpack holders
- Padded helmet (respawn): come back on a claimed resource tile near
  home instead of at home
"""

from __future__ import annotations
from dataclasses import dataclass

from ..content.trader_items import BACKPACK, PADDED_HELMET
from .context import ResolutionContext
from .decision import DecisionContext, DecisionOption
from .log_sink import LogCategory
from .loot import apply_loot, loot_options
from .state import Champion, Player, Position, Tile, TileType


@dataclass
class InterceptResult:
    applied: bool = False
    description: str = ""
    position: Position | None = None

    @classmethod
    def no_effect(cls) -> InterceptResult:
        return cls(applied=False)


async def _defeated_player_gives_loot(
    ctx: ResolutionContext,
    item_id: str,
    winning_player: Player,
    winning_champion: Champion,
    defeated_player: Player,
    defeated_champion: Champion,
) -> InterceptResult:
    if not defeated_player.has_item(item_id):
        return InterceptResult.no_effect()

    options = loot_options(
        winning_player, winning_champion, defeated_player, defeated_champion, ctx.settings
    )
    if not options:
        return InterceptResult.no_effect()

    decision = await ctx.decide(DecisionContext(
        type=f"{item_id.replace('-', '_')}_loot_choice",
        description=f"You lost the battle but carry a {item_id}. Choose what to give to {winning_player.name}:",
        options=options,
    ), defeated_player.name)

    description = apply_loot(
        decision.choice, winning_player, winning_champion, defeated_player, defeated_champion
    )
    ctx.log(LogCategory.COMBAT, f"{winning_player.name} {description} ({item_id} effect)")
    return InterceptResult(applied=True, description=description)


async def padded_helmet_loot(
    ctx: ResolutionContext,
    winning_player: Player,
    winning_champion: Champion,
    defeated_player: Player,
    defeated_champion: Champion,
) -> InterceptResult:
    """The defeated padded-helmet holder chooses the loot."""
    return await _defeated_player_gives_loot(
        ctx, PADDED_HELMET, winning_player, winning_champion, defeated_player, defeated_champion
    )


async def backpack_loot(
    ctx: ResolutionContext,
    winning_player: Player,
    winning_champion: Champion,
    defeated_player: Player,
    defeated_champion: Champion,
) -> InterceptResult:
    """The defeated backpack holder chooses the loot."""
    return await _defeated_player_gives_loot(
        ctx, BACKPACK, winning_player, winning_champion, defeated_player, defeated_champion
    )


LOOT_INTERCEPTORS = (padded_helmet_loot, backpack_loot)


def respawn_tiles(ctx: ResolutionContext, player: Player) -> list[Tile]:
    """Claimed resource tiles within the helmet's band of home, free of enemies."""
    low = ctx.settings.padded_helmet_min_distance
    high = ctx.settings.padded_helmet_max_distance
    return [
        tile for tile in ctx.state.claimed_tiles(player.name)
        if tile.tile_type == TileType.RESOURCE
        and low <= tile.position.distance_to(player.home_position) <= high
        and not ctx.state.opposing_champions_at(player.name, tile.position)
    ]


async def padded_helmet_respawn(
    ctx: ResolutionContext,
    player: Player,
    champion: Champion,
) -> InterceptResult:
    """Pick the respawn tile for a defeated padded-helmet holder."""
    if not player.has_item(PADDED_HELMET):
        return InterceptResult.no_effect()

    tiles = respawn_tiles(ctx, player)
    if not tiles:
        ctx.log(LogCategory.COMBAT, "Padded helmet available but no eligible claimed tiles to respawn at")
        return InterceptResult.no_effect()

    options = [
        DecisionOption(
            id=f"tile_{tile.position.row}_{tile.position.col}",
            description=(
                f"Tile {tile.position} - "
                f"{tile.position.distance_to(player.home_position)} steps from home"
            ),
            data={"row": tile.position.row, "col": tile.position.col},
        )
        for tile in tiles
    ]
    decision = await ctx.decide(DecisionContext(
        type="padded_helmet_respawn",
        description="Your padded helmet lets you respawn at a claimed tile near home. Choose where:",
        options=options,
    ), player.name)

    position = Position(decision.choice.data["row"], decision.choice.data["col"])
    champion.position = position
    ctx.log(LogCategory.COMBAT, f"Padded helmet lets {champion.label} respawn at {position}")
    return InterceptResult(applied=True, description=f"respawned at {position}", position=position)
