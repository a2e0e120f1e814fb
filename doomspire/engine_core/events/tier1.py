"""
Tier 1 event cards.

- Hungry pests: one chosen player loses 1 food
- Market day: everyone sends a champion to the trader or pays 1 gold
- Thug ambush: rolled outcome, possibly a bandit fight
- Landslide: rolled outcome, possibly a forced move
- Temple trial: give a resource for fame, or take one at a fame cost
"""

from __future__ import annotations

from ...content.monsters import create_monster
from ..combat_handler import resolve_immediate_combat
from ..context import ResolutionContext
from ..decision import DecisionContext, DecisionOption, decide_all
from ..flee import nearest_unoccupied_claimed_tiles
from ..log_sink import LogCategory
from ..state import RESOURCE_ORDER, ResourceType, TileType
from .common import ask_yes_no, nearest_tile
from .result import EventCardResult


async def handle_hungry_pests(ctx: ResolutionContext) -> EventCardResult:
    state = ctx.state
    decision = await ctx.decide(DecisionContext(
        type="hungry_pests_target",
        description="Hungry pests! Choose a player who loses 1 food:",
        options=[
            DecisionOption(
                id=player.name,
                description=f"{player.name} ({player.resources[ResourceType.FOOD]} food)",
            )
            for player in state.players
        ],
    ))

    result = EventCardResult()
    target = state.get_player(decision.choice_id)
    lost = target.remove_resource(ResourceType.FOOD, 1)
    if lost:
        result.record_change(target.name, ResourceType.FOOD, -lost)
        ctx.log(LogCategory.EVENT, f"Hungry pests eat 1 food from {target.name}")
    else:
        ctx.log(LogCategory.EVENT, f"Hungry pests find no food at {target.name}'s")
    return result


async def handle_market_day(ctx: ResolutionContext) -> EventCardResult:
    """
    The acting player decides whether it is market day. If so every
    player either sends one champion to the nearest trader or pays 1
    gold. Players whose champions are all at a trader already attend.
    """
    state = ctx.state
    traders = state.board.find_tiles(lambda tile: tile.tile_type == TileType.TRADER)
    if not traders:
        ctx.log(LogCategory.EVENT, "No trader tiles available for market day")
        return EventCardResult.failure("No trader tiles available")

    held = await ask_yes_no(
        ctx,
        "market_day",
        "Is today market day? Every player must send a champion to the trader or pay 1 gold.",
        yes="Declare market day",
        no="No market today",
    )
    if not held:
        ctx.log(LogCategory.EVENT, f"{ctx.player.name} decides today is not market day")
        return EventCardResult()

    ctx.log(LogCategory.EVENT, f"{ctx.player.name} declares market day!")
    players = []
    requests = []
    for player in state.players:
        away = [
            champion for champion in player.champions
            if state.get_tile(champion.position) is None
            or state.get_tile(champion.position).tile_type != TileType.TRADER
        ]
        if player.champions and not away:
            ctx.log(LogCategory.EVENT, f"{player.name}'s champions are already at the market")
            continue

        options = [
            DecisionOption(
                id=f"champion-{champion.champion_id}",
                description=f"Send champion {champion.champion_id} from {champion.position} to the trader",
                data={"champion_id": champion.champion_id},
            )
            for champion in away
        ]
        if player.resources[ResourceType.GOLD] >= 1:
            options.append(DecisionOption(id="pay-gold", description="Pay 1 gold in tax"))
        if not options:
            ctx.log(LogCategory.EVENT, f"{player.name} has neither a champion to send nor gold to pay")
            continue

        players.append(player)
        requests.append((
            DecisionContext(
                type="market_day_choice",
                description="Market day! Send a champion to the trader or pay 1 gold.",
                player=player.name,
                options=options,
            ),
            ctx.agent_for(player.name),
        ))

    result = EventCardResult()
    decisions = await decide_all(requests, ctx.dice, state)
    for player, decision in zip(players, decisions):
        if decision.choice_id == "pay-gold":
            player.remove_resource(ResourceType.GOLD, 1)
            result.record_change(player.name, ResourceType.GOLD, -1)
            ctx.log(LogCategory.EVENT, f"{player.name} pays 1 gold instead of attending the market")
            continue
        champion = player.get_champion(decision.choice.data["champion_id"])
        destination = nearest_tile(traders, champion.position, ctx.dice)
        champion.position = destination.position
        result.affect(player.name)
        ctx.log(LogCategory.EVENT, f"{champion.label} travels to the trader at {destination.position}")
    return result


async def handle_thug_ambush(ctx: ResolutionContext) -> EventCardResult:
    player = ctx.player
    champion = ctx.require_champion()
    roll = ctx.dice.roll_d3()
    ctx.log(LogCategory.EVENT, f"{champion.label} is ambushed by thugs and rolls [{roll}]")

    result = EventCardResult()
    if roll == 1:
        lost = player.remove_resource(ResourceType.GOLD, 1)
        if lost:
            result.record_change(player.name, ResourceType.GOLD, -lost)
            ctx.log(LogCategory.EVENT, f"The thugs steal 1 gold from {player.name}")
        else:
            ctx.log(LogCategory.EVENT, f"The thugs find no gold on {champion.label}")
    elif roll == 2:
        bandit = create_monster("bandit")
        combat = await resolve_immediate_combat(ctx, bandit, champion.champion_id)
        if combat.victory:
            result.record_change(player.name, "fame", bandit.fame)
            for resource, amount in bandit.resources.items():
                result.record_change(player.name, resource, amount)
        else:
            result.affect(player.name)
    else:
        player.fame += 1
        result.record_change(player.name, "fame", 1)
        ctx.log(LogCategory.EVENT, f"{champion.label} scares the thugs off and gains 1 fame")
    return result


async def handle_landslide(ctx: ResolutionContext) -> EventCardResult:
    state, player = ctx.state, ctx.player
    champion = ctx.require_champion()
    roll = ctx.dice.roll_d3()
    ctx.log(LogCategory.EVENT, f"A landslide hits {champion.label}, who rolls [{roll}]")

    result = EventCardResult()
    if roll == 1:
        state.move_champion_home(champion)
        ctx.log(LogCategory.EVENT, f"{champion.label} flees home")
        result.affect(player.name)
    elif roll == 2:
        nearest = nearest_unoccupied_claimed_tiles(state, player, champion)
        if nearest:
            champion.position = ctx.dice.choice(nearest).position
            ctx.log(LogCategory.EVENT, f"{champion.label} flees to claimed tile {champion.position}")
        else:
            state.move_champion_home(champion)
            ctx.log(LogCategory.EVENT, f"{champion.label} has no claimed tile to flee to and goes home")
        result.affect(player.name)
    else:
        player.add_resource(ResourceType.ORE, 2)
        result.record_change(player.name, ResourceType.ORE, 2)
        ctx.log(LogCategory.EVENT, f"Miracle! {champion.label} digs 2 ore out of the rubble")
    return result


async def handle_temple_trial(ctx: ResolutionContext) -> EventCardResult:
    """
    Offering: give 1 resource to another player and gain 1 fame.
    Sacrilege: take 1 resource from another player and lose 1 fame.
    """
    state, player = ctx.state, ctx.player
    options = []
    for other in state.players:
        if other.name == player.name:
            continue
        for resource in RESOURCE_ORDER:
            if player.resources[resource] > 0:
                options.append(DecisionOption(
                    id=f"offer:{other.name}:{resource.value}",
                    description=f"Offering: give 1 {resource.value} to {other.name}, +1 fame",
                    data={"action": "offer", "player": other.name, "resource": resource.value},
                ))
            if other.resources[resource] > 0:
                options.append(DecisionOption(
                    id=f"take:{other.name}:{resource.value}",
                    description=f"Sacrilege: take 1 {resource.value} from {other.name}, -1 fame",
                    data={"action": "take", "player": other.name, "resource": resource.value},
                ))

    if not options:
        ctx.log(LogCategory.EVENT, "Nobody has anything to offer or take at the temple")
        return EventCardResult()

    decision = await ctx.decide(DecisionContext(
        type="temple_trial",
        description="The temple trial: make an offering or commit sacrilege.",
        options=options,
    ))
    data = decision.choice.data
    other = state.get_player(data["player"])
    resource = ResourceType(data["resource"])

    result = EventCardResult()
    if data["action"] == "offer":
        player.remove_resource(resource, 1)
        other.add_resource(resource, 1)
        player.fame += 1
        result.record_change(player.name, resource, -1)
        result.record_change(player.name, "fame", 1)
        result.record_change(other.name, resource, 1)
        ctx.log(LogCategory.EVENT, f"{player.name} offers 1 {resource.value} to {other.name} and gains 1 fame")
    else:
        other.remove_resource(resource, 1)
        player.add_resource(resource, 1)
        lost = player.lose_fame(1)
        result.record_change(other.name, resource, -1)
        result.record_change(player.name, resource, 1)
        result.record_change(player.name, "fame", -lost)
        ctx.log(LogCategory.EVENT, f"{player.name} takes 1 {resource.value} from {other.name} and loses {lost} fame")
    return result
