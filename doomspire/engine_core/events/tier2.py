"""
Tier 2 event cards.

- Sudden storm: boats drift, oases gain mystery cards
- Druid rampage: a runed dagger, then a bear
- Dragon hunger: rewards scaled by claimed tiles
- Blessing of the lonesome: lone and crowded lords blessed differently
- Riches for all: everyone collects, oases gain mystery cards
"""

from __future__ import annotations

from ...content.monsters import create_monster
from ...content.treasures import RUNED_DAGGER, create_treasure
from ..context import ResolutionContext
from ..decision import DecisionContext, DecisionOption
from ..items import give_item
from ..log_sink import LogCategory
from ..state import OCEAN_ADJACENCY, RESOURCE_ORDER, Champion, ResourceType
from .common import add_oasis_tokens
from .result import EventCardResult


async def handle_sudden_storm(ctx: ResolutionContext) -> EventCardResult:
    state = ctx.state
    result = EventCardResult(boats_moved=True)
    ctx.log(LogCategory.EVENT, "A sudden storm sweeps the seas!")

    for player in state.players:
        for boat in player.boats:
            origin = boat.position
            boat.position = ctx.dice.choice(OCEAN_ADJACENCY[origin])
            result.affect(player.name)
            ctx.log(LogCategory.EVENT, f"{player.name}'s boat {boat.boat_id} drifts from {origin.value} to {boat.position.value}")

    add_oasis_tokens(state, result, ctx)
    return result


async def handle_druid_rampage(ctx: ResolutionContext) -> EventCardResult:
    player = ctx.player
    champion = ctx.require_champion()
    tile = ctx.state.get_tile(champion.position)

    ctx.log(LogCategory.EVENT, f"A wild druid hands {champion.label} a runed dagger")
    result = EventCardResult()
    if await give_item(ctx, player, champion, create_treasure(RUNED_DAGGER), tile):
        result.affect(player.name)

    if tile is not None and tile.monster is None:
        tile.monster = create_monster("bear")
        ctx.log(LogCategory.EVENT, f"The druid turns into a bear at {tile.position}")
    return result


async def handle_dragon_hunger(ctx: ResolutionContext) -> EventCardResult:
    """
    3+ claimed tiles: +1 fame. 5+: +1 might as well. 7+: +3 gold as
    well. Might is capped.
    """
    player = ctx.player
    claimed = len(ctx.state.claimed_tiles(player.name))
    result = EventCardResult()

    if claimed < 3:
        ctx.log(LogCategory.EVENT, f"The dragon ignores {player.name}'s {claimed} claimed tile(s)")
        return result

    player.fame += 1
    result.record_change(player.name, "fame", 1)
    if claimed >= 5:
        gained = player.gain_might(1, ctx.settings.max_might)
        result.record_change(player.name, "might", gained)
    if claimed >= 7:
        player.add_resource(ResourceType.GOLD, 3)
        result.record_change(player.name, ResourceType.GOLD, 3)

    changes = result.resources_changed.get(player.name, {})
    summary = ", ".join(f"+{amount} {key}" for key, amount in changes.items())
    ctx.log(LogCategory.EVENT, f"The dragon is impressed by {player.name}'s {claimed} tiles: {summary}")
    return result


async def handle_blessing_of_the_lonesome(ctx: ResolutionContext) -> EventCardResult:
    """
    The acting player picks one of two blessings. Either way food tax
    is doubled for the next turn.
    """
    state, settings = ctx.state, ctx.settings
    decision = await ctx.decide(DecisionContext(
        type="blessing_of_the_lonesome",
        description="Choose a blessing for the island's lords:",
        options=[
            DecisionOption(
                id="recruit",
                description="Lords with one champion recruit another for free; others gain 2 gold per champion",
            ),
            DecisionOption(
                id="might",
                description="Lords with one champion gain 1 might; others gain 1 fame",
            ),
        ],
    ))

    result = EventCardResult()
    for player in state.players:
        lone = len(player.champions) == 1
        if decision.choice_id == "recruit":
            if lone and len(player.champions) < settings.max_champions:
                champion = Champion(
                    champion_id=player.next_champion_id(),
                    owner=player.name,
                    position=player.home_position,
                )
                player.champions.append(champion)
                result.affect(player.name)
                ctx.log(LogCategory.EVENT, f"{player.name} recruits champion {champion.champion_id} for free")
            elif not lone:
                gold = 2 * len(player.champions)
                player.add_resource(ResourceType.GOLD, gold)
                result.record_change(player.name, ResourceType.GOLD, gold)
                ctx.log(LogCategory.EVENT, f"{player.name} gains {gold} gold")
        elif lone:
            gained = player.gain_might(1, settings.max_might)
            result.record_change(player.name, "might", gained)
            ctx.log(LogCategory.EVENT, f"{player.name} gains {gained} might")
        else:
            player.fame += 1
            result.record_change(player.name, "fame", 1)
            ctx.log(LogCategory.EVENT, f"{player.name} gains 1 fame")

    state.food_tax_multiplier = 2
    ctx.log(LogCategory.EVENT, "Food tax is doubled next turn")
    return result


async def handle_riches_for_all(ctx: ResolutionContext) -> EventCardResult:
    state = ctx.state
    result = EventCardResult()
    for player in state.players:
        for resource in RESOURCE_ORDER:
            player.add_resource(resource, 1)
            result.record_change(player.name, resource, 1)
    ctx.log(LogCategory.EVENT, "Riches for all! Every player collects 1 of each resource")
    add_oasis_tokens(state, result, ctx)
    return result
