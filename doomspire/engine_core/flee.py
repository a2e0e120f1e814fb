"""
Flee State Machine - Escaping combat one did not choose.

States:
    eligible -> fighting | fleeing
    fleeing  -> failed (back to fighting) | partial | full

A side that initiated combat is never eligible. The dragon always lets
you go (home, minus the defeat fame penalty). Anything else rolls a D3:

    1  failed: combat proceeds, champion stays put
    2  partial: nearest unoccupied claimed tile (home if none), lose the
       first held resource in food, wood, ore, gold order, or 1 fame
    3  full: home, no loss
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .context import ResolutionContext
from .decision import DecisionContext, DecisionOption
from .log_sink import LogCategory
from .state import Champion, GameState, Player, Position, ResourceType, Tile


class CombatType(str, Enum):
    CHAMPION = "champion"
    MONSTER = "monster"
    DRAGON = "dragon"


class FleeOutcome(str, Enum):
    NOT_ELIGIBLE = "not_eligible"
    FIGHT = "fight"
    FAILED = "failed"
    PARTIAL = "partial"
    FULL = "full"


@dataclass
class FleeContext:
    """Who is deciding whether to flee, and from what."""
    combat_type: CombatType
    actively_chosen: bool
    player: Player
    champion: Champion
    opponent_name: str | None = None


@dataclass
class FleeResult:
    outcome: FleeOutcome
    roll: int | None = None
    destination: Position | None = None
    fame_lost: int = 0
    resource_lost: ResourceType | None = None
    reasoning: str = ""

    @property
    def attempted_flee(self) -> bool:
        return self.outcome in (FleeOutcome.FAILED, FleeOutcome.PARTIAL, FleeOutcome.FULL)

    @property
    def fled(self) -> bool:
        """True when combat is avoided."""
        return self.outcome in (FleeOutcome.PARTIAL, FleeOutcome.FULL)


def can_flee(context: FleeContext) -> bool:
    """Players who actively chose to fight cannot flee."""
    return not context.actively_chosen


def nearest_unoccupied_claimed_tiles(
    state: GameState,
    player: Player,
    champion: Champion,
) -> list[Tile]:
    """
    Claimed tiles of player with no other champion on them, closest to
    the champion first-equal (all tiles sharing the minimum distance).
    """
    candidates = [
        tile for tile in state.claimed_tiles(player.name)
        if tile.position != champion.position
        and not state.is_occupied(tile.position, ignore=champion)
    ]
    if not candidates:
        return []
    best = min(tile.position.distance_to(champion.position) for tile in candidates)
    return [t for t in candidates if t.position.distance_to(champion.position) == best]


def apply_flee_penalty(player: Player) -> tuple[ResourceType | None, int]:
    """
    Lose one unit of the first held resource in priority order, or one
    fame if no resources remain. Returns (resource lost, fame lost).
    """
    available = player.available_resources()
    if available:
        player.remove_resource(available[0], 1)
        return available[0], 0
    return None, player.lose_fame(1)


def resolve_flee_roll(ctx: ResolutionContext, context: FleeContext) -> FleeResult:
    """Apply the outcome of a flee attempt the player has already chosen."""
    player, champion = context.player, context.champion

    if context.combat_type == CombatType.DRAGON:
        champion.position = player.home_position
        lost = player.lose_fame(ctx.settings.defeat_fame_penalty)
        ctx.log(LogCategory.COMBAT, f"{champion.label} fled from the dragon, returned home and lost {lost} fame")
        return FleeResult(FleeOutcome.FULL, destination=player.home_position, fame_lost=lost)

    roll = ctx.dice.roll_d3()
    ctx.log(LogCategory.COMBAT, f"{champion.label} attempts to flee, rolled [{roll}]")

    if roll == 1:
        ctx.log(LogCategory.COMBAT, "Flee attempt failed, combat proceeds")
        return FleeResult(FleeOutcome.FAILED, roll=roll)

    if roll == 2:
        nearest = nearest_unoccupied_claimed_tiles(ctx.state, player, champion)
        if nearest:
            destination = ctx.dice.choice(nearest).position
            ctx.log(LogCategory.COMBAT, f"{champion.label} fled to claimed tile {destination}")
        else:
            destination = player.home_position
            ctx.log(LogCategory.COMBAT, f"{champion.label} fled home (no unoccupied claimed tiles)")
        champion.position = destination

        resource, fame_lost = apply_flee_penalty(player)
        if resource is not None:
            ctx.log(LogCategory.COMBAT, f"{player.name} lost 1 {resource.value} from fleeing")
        elif fame_lost:
            ctx.log(LogCategory.COMBAT, f"{player.name} lost 1 fame from fleeing (no resources)")
        else:
            ctx.log(LogCategory.COMBAT, f"{player.name} had nothing to lose from fleeing")
        return FleeResult(
            FleeOutcome.PARTIAL,
            roll=roll,
            destination=destination,
            fame_lost=fame_lost,
            resource_lost=resource,
        )

    champion.position = player.home_position
    ctx.log(LogCategory.COMBAT, f"{champion.label} fled home without loss")
    return FleeResult(FleeOutcome.FULL, roll=roll, destination=player.home_position)


async def handle_flee_decision(ctx: ResolutionContext, context: FleeContext) -> FleeResult:
    """
    Offer fight/flee to an eligible side and resolve a flee.

    The decision goes to context.player's agent (found through ctx).
    """
    if not can_flee(context):
        return FleeResult(FleeOutcome.NOT_ELIGIBLE, reasoning="Cannot flee - actively chose to fight")

    against = f" against {context.opponent_name}" if context.opponent_name else ""
    decision = await ctx.decide(DecisionContext(
        type="fight_or_flee",
        description=f"{context.champion.label} is in {context.combat_type.value} combat{against}. Fight or flee?",
        options=[
            DecisionOption(id="fight", description="Fight"),
            DecisionOption(id="flee", description="Attempt to flee"),
        ],
    ), context.player.name)

    if decision.choice_id == "fight":
        return FleeResult(FleeOutcome.FIGHT, reasoning=decision.reasoning or "Chose to fight")

    result = resolve_flee_roll(ctx, context)
    result.reasoning = decision.reasoning
    return result
