"""
Tier 3 event cards.

- Curse of the earth: pay 2 gold so every player loses 2 might
- Thieving crows: every player loses all of one resource
- Dragon raid: every player gives up one claimed tile
- Sea monsters: boats in one sea fight or flee
"""

from __future__ import annotations
import asyncio

from ..context import ResolutionContext
from ..decision import Decision, DecisionContext, DecisionOption, decide_all
from ..log_sink import LogCategory
from ..state import OCEAN_ADJACENCY, Boat, OceanPosition, Player, ResourceType, TileType
from .common import ask_yes_no
from .result import EventCardResult

CURSE_COST = 2
CURSE_MIGHT_LOSS = 2
SEA_MONSTER_FAME = 2
CROW_TARGETS = (ResourceType.FOOD, ResourceType.WOOD, ResourceType.ORE)


async def handle_curse_of_the_earth(ctx: ResolutionContext) -> EventCardResult:
    player = ctx.player
    gold = player.resources[ResourceType.GOLD]
    if gold < CURSE_COST:
        ctx.log(LogCategory.EVENT, f"{player.name} cannot afford to pay the Bogwitch (needs {CURSE_COST} gold, has {gold})")
        return EventCardResult()

    cursed = await ask_yes_no(
        ctx,
        "curse_of_the_earth",
        f"The Bogwitch offers to curse the lands for {CURSE_COST} gold. "
        f"ALL players, you included, lose {CURSE_MIGHT_LOSS} might. Pay?",
        yes=f"Pay {CURSE_COST} gold to curse all players",
        no="Refuse the Bogwitch's offer",
    )
    if not cursed:
        ctx.log(LogCategory.EVENT, f"{player.name} refuses the Bogwitch's offer")
        return EventCardResult()

    result = EventCardResult()
    player.remove_resource(ResourceType.GOLD, CURSE_COST)
    result.record_change(player.name, ResourceType.GOLD, -CURSE_COST)
    ctx.log(LogCategory.EVENT, f"{player.name} pays the Bogwitch {CURSE_COST} gold to curse the lands!")

    for victim in ctx.state.players:
        loss = min(CURSE_MIGHT_LOSS, victim.might)
        if loss:
            victim.might -= loss
            result.record_change(victim.name, "might", -loss)
            ctx.log(LogCategory.EVENT, f"{victim.name} loses {loss} might as weapons rust and crumble")
    return result


async def handle_thieving_crows(ctx: ResolutionContext) -> EventCardResult:
    decision = await ctx.decide(DecisionContext(
        type="thieving_crows",
        description="Thieving crows! Choose a resource that ALL players lose entirely:",
        options=[
            DecisionOption(id=resource.value, description=f"All players lose all their {resource.value}")
            for resource in CROW_TARGETS
        ],
    ))
    resource = ResourceType(decision.choice_id)

    result = EventCardResult()
    for player in ctx.state.players:
        lost = player.remove_resource(resource, player.resources[resource])
        if lost:
            result.record_change(player.name, resource, -lost)
            ctx.log(LogCategory.EVENT, f"Crows steal {lost} {resource.value} from {player.name}")
    if not result.players_affected:
        ctx.log(LogCategory.EVENT, f"The crows find no {resource.value} anywhere")
    return result


async def handle_dragon_raid(ctx: ResolutionContext) -> EventCardResult:
    """Each player with a non-home claimed tile chooses one to lose."""
    state = ctx.state
    ctx.log(LogCategory.EVENT, "The dragon raids the island!")

    players: list[Player] = []
    requests = []
    for player in state.players:
        raidable = [t for t in state.claimed_tiles(player.name) if t.tile_type != TileType.HOME]
        if not raidable:
            ctx.log(LogCategory.EVENT, f"{player.name} has no tiles that can be raided")
            continue
        players.append(player)
        requests.append((
            DecisionContext(
                type="dragon_raid",
                description="The dragon raids your lands. Choose a claimed tile to lose:",
                player=player.name,
                options=[
                    DecisionOption(
                        id=f"tile_{tile.position.row}_{tile.position.col}",
                        description=f"{tile.tile_type.value} tile at {tile.position}",
                        data={"row": tile.position.row, "col": tile.position.col},
                    )
                    for tile in raidable
                ],
            ),
            ctx.agent_for(player.name),
        ))

    result = EventCardResult()
    decisions = await decide_all(requests, ctx.dice, state)
    for player, decision in zip(players, decisions):
        for tile in state.claimed_tiles(player.name):
            if (tile.position.row, tile.position.col) == (decision.choice.data["row"], decision.choice.data["col"]):
                tile.claimed_by = None
                result.affect(player.name)
                ctx.log(LogCategory.EVENT, f"{player.name} loses tile {tile.position} to the dragon")
                break
    return result


async def _boat_choices(ctx: ResolutionContext, owner: Player, boats: list[Boat]) -> list[Decision]:
    """One owner's fight/flee answers, asked boat by boat."""
    fame = owner.fame
    decisions = []
    for boat in boats:
        options = [DecisionOption(id="fight", description=f"Fight: +{SEA_MONSTER_FAME} fame, lose the boat")]
        if fame > 0:
            options.append(DecisionOption(id="flee", description="Flee: -1 fame, move to an adjacent sea"))
        decision = await ctx.decide(DecisionContext(
            type="sea_monsters",
            description=f"Sea monsters attack your boat {boat.boat_id} in the {boat.position.value} sea!",
            options=options,
        ), owner.name)
        if decision.choice_id == "flee":
            fame -= 1
        else:
            fame += SEA_MONSTER_FAME
        decisions.append(decision)
    return decisions


async def handle_sea_monsters(ctx: ResolutionContext) -> EventCardResult:
    """
    The acting player picks the sea. Boat owners there answer at the
    same time; each owner's boats are then settled in order.
    """
    state = ctx.state
    decision = await ctx.decide(DecisionContext(
        type="sea_monsters_sea",
        description="Sea monsters rise! Choose the sea they invade:",
        options=[
            DecisionOption(id=sea.value, description=f"{sea.value} sea ({len(state.boats_in(sea))} boats)")
            for sea in OceanPosition
        ],
    ))
    sea = OceanPosition(decision.choice_id)
    ctx.log(LogCategory.EVENT, f"Sea monsters invade the {sea.value} sea")

    owners = [p for p in state.players if any(b.position == sea for b in p.boats)]
    if not owners:
        ctx.log(LogCategory.EVENT, f"No boats in the {sea.value} sea")
        return EventCardResult()

    fleets = [[b for b in owner.boats if b.position == sea] for owner in owners]
    answers = await asyncio.gather(*(
        _boat_choices(ctx, owner, boats) for owner, boats in zip(owners, fleets)
    ))

    result = EventCardResult()
    for owner, boats, decisions in zip(owners, fleets, answers):
        for boat, choice in zip(boats, decisions):
            if choice.choice_id == "flee" and owner.fame > 0:
                owner.lose_fame(1)
                boat.position = ctx.dice.choice(OCEAN_ADJACENCY[sea])
                result.boats_moved = True
                result.record_change(owner.name, "fame", -1)
                ctx.log(LogCategory.EVENT, f"{owner.name}'s boat {boat.boat_id} flees to the {boat.position.value} sea")
            else:
                owner.fame += SEA_MONSTER_FAME
                owner.boats.remove(boat)
                result.record_change(owner.name, "fame", SEA_MONSTER_FAME)
                ctx.log(LogCategory.EVENT, f"{owner.name}'s boat {boat.boat_id} fights the sea monsters: +{SEA_MONSTER_FAME} fame, boat lost")
    return result
