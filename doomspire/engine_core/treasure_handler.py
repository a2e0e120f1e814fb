"""
Treasure Cards - Resolution of treasures found on adventure tiles.

Carriable treasures are handed to the finding champion; with full slots
the holder drops something or leaves the treasure on the tile.
Special cards resolve on the spot:
- Broken shield: 1 ore, or 2 ore for 1 might
- Mysterious ring: D3 for a stuck ring, a swap with another champion,
  or a dragonsbane ring
- Sword in a stone: pull it for a half sword or Cloudslicer, or it
  stays put and the card returns to the deck
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional
import logging

from ..content.treasures import (
    BROKEN_SHIELD,
    CLOUDSLICER,
    DRAGONSBANE_RING,
    HALF_SWORD,
    MYSTERIOUS_RING,
    SWORD_IN_STONE,
    TREASURES,
    create_treasure,
)
from ..errors import EntityNotFoundError
from .context import ResolutionContext
from .decision import DecisionContext, DecisionOption
from .items import give_item
from .log_sink import LogCategory
from .state import Champion, Item, ResourceType, Tile

logger = logging.getLogger(__name__)

BROKEN_SHIELD_ORE_COST = 2
BROKEN_SHIELD_ORE_REWARD = 1


@dataclass
class TreasureCardResult:
    card_processed: bool = True
    card_id: str = ""
    effect: str = ""
    item_taken: bool = False
    # The card goes back on top of its deck instead of being discarded
    returned_to_deck: bool = False
    error_message: Optional[str] = None

    @classmethod
    def failure(cls, card_id: str, message: str) -> TreasureCardResult:
        return cls(card_processed=False, card_id=card_id, error_message=message)


TreasureHandler = Callable[[ResolutionContext, Champion, Optional[Tile]], Awaitable[TreasureCardResult]]


async def _take_or_leave(
    ctx: ResolutionContext,
    champion: Champion,
    item: Item,
    tile: Tile | None,
) -> bool:
    """Give item to champion; a refused item stays on the tile."""
    taken = await give_item(ctx, ctx.player, champion, item, tile)
    if not taken and tile is not None:
        tile.items.append(item)
        ctx.log(LogCategory.EVENT, f"The {item.name} is left at {tile.position}")
    return taken


async def _carriable_treasure(
    ctx: ResolutionContext,
    champion: Champion,
    tile: Tile | None,
    card_id: str,
) -> TreasureCardResult:
    item = create_treasure(card_id)
    taken = await _take_or_leave(ctx, champion, item, tile)
    effect = f"picked up the {item.name}" if taken else f"left the {item.name}"
    return TreasureCardResult(card_id=card_id, effect=effect, item_taken=taken)


async def handle_broken_shield(
    ctx: ResolutionContext,
    champion: Champion,
    tile: Tile | None,
) -> TreasureCardResult:
    player = ctx.player
    options = [DecisionOption(id="gain_ore", description=f"Gain +{BROKEN_SHIELD_ORE_REWARD} ore")]
    if player.resources[ResourceType.ORE] >= BROKEN_SHIELD_ORE_COST and player.might < ctx.settings.max_might:
        options.append(DecisionOption(
            id="gain_might",
            description=f"Spend {BROKEN_SHIELD_ORE_COST} ore to gain +1 might",
        ))

    decision = await ctx.decide(DecisionContext(
        type="broken_shield",
        description=f"{champion.label} found a Broken Shield! Choose one:",
        options=options,
    ))

    if decision.choice_id == "gain_might":
        player.remove_resource(ResourceType.ORE, BROKEN_SHIELD_ORE_COST)
        player.gain_might(1, ctx.settings.max_might)
        effect = f"spent {BROKEN_SHIELD_ORE_COST} ore for +1 might"
    else:
        player.add_resource(ResourceType.ORE, BROKEN_SHIELD_ORE_REWARD)
        effect = f"gained {BROKEN_SHIELD_ORE_REWARD} ore"
    ctx.log(LogCategory.EVENT, f"{champion.label} {effect} from the Broken Shield")
    return TreasureCardResult(card_id=BROKEN_SHIELD, effect=effect)


def _swap_targets(ctx: ResolutionContext, champion: Champion) -> list[Champion]:
    """Champions away from their own home, other than the finder."""
    targets = []
    for player in ctx.state.players:
        for other in player.champions:
            if other is champion or other.position == player.home_position:
                continue
            targets.append(other)
    return targets


async def _ring_swap(ctx: ResolutionContext, champion: Champion) -> str:
    targets = _swap_targets(ctx, champion)
    if not targets:
        ctx.log(LogCategory.EVENT, "The ring breaks with no champion to swap with")
        return "ring broke without a swap"

    decision = await ctx.decide(DecisionContext(
        type="mysterious_ring_swap",
        description=f"{champion.label} can swap places with any champion. Choose who:",
        options=[
            DecisionOption(
                id=f"swap_{target.owner}_{target.champion_id}",
                description=f"Swap with {target.label} at {target.position}",
                data={"owner": target.owner, "champion_id": target.champion_id},
            )
            for target in targets
        ],
    ))
    target = ctx.state.get_champion(decision.choice.data["owner"], decision.choice.data["champion_id"])
    if target is None:
        raise EntityNotFoundError(f"Swap target {decision.choice_id} not found")

    champion.position, target.position = target.position, champion.position
    ctx.log(LogCategory.EVENT, f"{champion.label} swaps places with {target.label}, then the ring breaks")
    return f"swapped with {target.label}"


async def handle_mysterious_ring(
    ctx: ResolutionContext,
    champion: Champion,
    tile: Tile | None,
) -> TreasureCardResult:
    roll = ctx.dice.roll_d3()
    ctx.log(LogCategory.EVENT, f"{champion.label} found a Mysterious Ring! Rolled {roll}")
    result = TreasureCardResult(card_id=MYSTERIOUS_RING)

    if roll == 1:
        # The stuck ring cannot be refused
        result.item_taken = await give_item(
            ctx, ctx.player, champion, create_treasure(MYSTERIOUS_RING), tile, may_refuse=False
        )
        result.effect = "ring is stuck" if result.item_taken else "ring vanished"
    elif roll == 2:
        result.effect = await _ring_swap(ctx, champion)
    else:
        result.item_taken = await _take_or_leave(ctx, champion, create_treasure(DRAGONSBANE_RING), tile)
        result.effect = "gained +3 might against dragons" if result.item_taken else "left the dragonsbane ring"
    return result


async def handle_sword_in_stone(
    ctx: ResolutionContext,
    champion: Champion,
    tile: Tile | None,
) -> TreasureCardResult:
    decision = await ctx.decide(DecisionContext(
        type="sword_in_stone_attempt",
        description=f"{champion.label} found a Sword in a Stone! Attempt to pull it out?",
        options=[
            DecisionOption(id="attempt_pull", description="Attempt to pull the sword from the stone"),
            DecisionOption(id="leave_sword", description="Leave the sword alone"),
        ],
    ))
    if decision.choice_id == "leave_sword":
        ctx.log(LogCategory.EVENT, f"{champion.label} leaves the sword in the stone")
        return TreasureCardResult(card_id=SWORD_IN_STONE, effect="left the sword", returned_to_deck=True)

    roll = ctx.dice.roll_d3()
    ctx.log(LogCategory.EVENT, f"{champion.label} pulls at the sword... rolled {roll}")
    if roll == 2:
        ctx.log(LogCategory.EVENT, "The sword resists and stays in the stone")
        return TreasureCardResult(card_id=SWORD_IN_STONE, effect="sword resisted", returned_to_deck=True)

    item = create_treasure(HALF_SWORD if roll == 1 else CLOUDSLICER)
    taken = await _take_or_leave(ctx, champion, item, tile)
    return TreasureCardResult(
        card_id=SWORD_IN_STONE,
        effect=f"pulled out the {item.name}",
        item_taken=taken,
    )


TREASURE_HANDLERS: dict[str, TreasureHandler] = {
    BROKEN_SHIELD: handle_broken_shield,
    MYSTERIOUS_RING: handle_mysterious_ring,
    SWORD_IN_STONE: handle_sword_in_stone,
}


async def resolve_treasure_card(card_id: str, ctx: ResolutionContext) -> TreasureCardResult:
    """
    Resolve a treasure card found by ctx's champion on its tile.

    Cards without a special handler are carriable items. Unknown cards
    and missing champions come back as failed results.
    """
    definition = TREASURES.get(card_id)
    if definition is None:
        ctx.log(LogCategory.EVENT, f"Unknown treasure card {card_id}")
        return TreasureCardResult.failure(card_id, f"Unknown treasure card {card_id}")

    try:
        champion = ctx.require_champion()
    except EntityNotFoundError as e:
        logger.warning("Treasure card %s could not be resolved: %s", card_id, e)
        return TreasureCardResult.failure(card_id, str(e))

    tile = ctx.state.get_tile(champion.position)
    ctx.log(LogCategory.EVENT, f"{champion.label} found treasure: {definition.name}!")

    handler = TREASURE_HANDLERS.get(card_id)
    if handler is not None:
        return await handler(ctx, champion, tile)
    if not definition.carriable:
        return TreasureCardResult.failure(card_id, f"Treasure card {card_id} not implemented")
    return await _carriable_treasure(ctx, champion, tile, card_id)
