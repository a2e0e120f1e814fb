"""
Combat Handler - Applies battle outcomes to the game state.

Wraps the pure battle functions with everything around them:
- Fight/flee choice for sides that did not start the fight
- Item bonuses and broken items
- Fame, resource rewards and loot
- Defeat handling (respawn interceptor, going home, healing cost)
- Dragon encounters, including alternative victories
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import EntityNotFoundError
from .combat import DragonEncounter, resolve_champion_battle, resolve_monster_battle
from .context import ResolutionContext
from .decision import DecisionContext, DecisionOption
from .flee import CombatType, FleeContext, handle_flee_decision
from .interceptors import LOOT_INTERCEPTORS, padded_helmet_respawn
from .items import combat_item_bonus, remove_broken_items
from .log_sink import LogCategory
from .loot import apply_loot, loot_options
from .state import NON_COMBAT_TILES, Champion, Monster, Player, Tile, TileType
from .victory import VictoryType, alternative_victory, describe_victory


@dataclass
class CombatResult:
    """
    Outcome of a combat resolution from the acting player's side.

    victory with combat_occurred False means an alternative victory at
    the dragon (victory_type says which).
    """
    combat_occurred: bool = False
    victory: bool = False
    defeat: bool = False
    fled: bool = False
    details: str = ""
    victory_type: VictoryType | None = None

    @classmethod
    def no_combat(cls, details: str = "") -> CombatResult:
        return cls(combat_occurred=False, details=details)


def _champion(ctx: ResolutionContext, champion_id: int | None) -> Champion:
    if champion_id is None:
        return ctx.require_champion()
    champion = ctx.player.get_champion(champion_id)
    if champion is None:
        raise EntityNotFoundError(f"Champion {champion_id} not found for player {ctx.player.name}")
    return champion


def _format_resources(resources: dict) -> str:
    parts = [f"{amount} {getattr(r, 'value', r)}" for r, amount in resources.items() if amount]
    return ", ".join(parts) if parts else "nothing"


# =============================================================================
# Defeat
# =============================================================================

async def pay_healing_cost(ctx: ResolutionContext, player: Player) -> str:
    """
    One resource of the player's choice, or the defeat fame penalty
    when no resources are held.
    """
    available = player.available_resources()
    if not available:
        lost = player.lose_fame(ctx.settings.defeat_fame_penalty)
        if lost:
            return f"had no resources to heal so lost {lost} fame"
        return "had no resources to heal and no fame to lose"

    decision = await ctx.decide(DecisionContext(
        type="healing_cost",
        description="Your champion was defeated. Choose 1 resource to pay for healing:",
        options=[
            DecisionOption(
                id=resource.value,
                description=f"1 {resource.value} ({player.resources[resource]} held)",
            )
            for resource in available
        ],
    ), player.name)
    player.remove_resource(decision.choice_id, 1)
    return f"paid 1 {decision.choice_id} to heal"


async def apply_champion_defeat(
    ctx: ResolutionContext,
    player: Player,
    champion: Champion,
    heal: bool = True,
) -> str:
    """Send a defeated champion away (respawn interceptor or home), then heal."""
    respawn = await padded_helmet_respawn(ctx, player, champion)
    if respawn.applied:
        outcome = respawn.description
    else:
        ctx.state.move_champion_home(champion)
        outcome = "went home"

    if heal:
        outcome = f"{outcome}, {await pay_healing_cost(ctx, player)}"
    ctx.log(LogCategory.COMBAT, f"{champion.label} was defeated and {outcome}")
    return outcome


# =============================================================================
# Champion vs champion
# =============================================================================

async def _settle_loot(
    ctx: ResolutionContext,
    winner: Player,
    winning_champion: Champion,
    loser: Player,
    losing_champion: Champion,
) -> str:
    for interceptor in LOOT_INTERCEPTORS:
        intercepted = await interceptor(ctx, winner, winning_champion, loser, losing_champion)
        if intercepted.applied:
            return intercepted.description

    options = loot_options(winner, winning_champion, loser, losing_champion, ctx.settings)
    if not options:
        return "nothing to loot"

    decision = await ctx.decide(DecisionContext(
        type="champion_loot",
        description=f"Choose what to take from {losing_champion.label}:",
        options=options,
    ), winner.name)
    return apply_loot(decision.choice, winner, winning_champion, loser, losing_champion)


async def resolve_champion_combat(
    ctx: ResolutionContext,
    tile: Tile,
    champion_id: int | None = None,
) -> CombatResult:
    """
    The acting player's champion attacks the first opposing champion on
    tile. The attacker chose this fight; the defender may flee.
    """
    attacker = ctx.player
    attacking_champion = _champion(ctx, champion_id)

    if tile.tile_type in NON_COMBAT_TILES:
        return CombatResult.no_combat()
    opposing = ctx.state.opposing_champions_at(attacker.name, tile.position)
    if not opposing:
        return CombatResult.no_combat()

    defending_champion = opposing[0]
    defender = ctx.state.get_player(defending_champion.owner)
    if defender is None:
        raise EntityNotFoundError(f"Opposing player {defending_champion.owner} not found")
    defender_ctx = ctx.for_player(defender, defending_champion.champion_id)

    flee = await handle_flee_decision(defender_ctx, FleeContext(
        combat_type=CombatType.CHAMPION,
        actively_chosen=False,
        player=defender,
        champion=defending_champion,
        opponent_name=attacker.name,
    ))
    if flee.fled:
        return CombatResult(
            fled=True,
            details=f"{defending_champion.label} fled from {attacking_champion.label}",
        )

    attacker_bonus = await combat_item_bonus(ctx, attacker, attacking_champion, defender.might)
    defender_bonus = await combat_item_bonus(defender_ctx, defender, defending_champion, attacker.might)

    battle = resolve_champion_battle(
        attacker.might + attacker_bonus.might_bonus,
        defender.might + defender_bonus.might_bonus,
        ctx.dice,
    )
    for attempt, (a_roll, d_roll) in enumerate(zip(battle.attacker_rolls, battle.defender_rolls)):
        if attempt:
            ctx.log(LogCategory.COMBAT, "Combat tied, rerolling...")
        ctx.log(LogCategory.COMBAT, f"{attacker.name} rolled [{a_roll}], {defender.name} rolled [{d_roll}]")

    if battle.attacker_wins:
        winner, winning_champion, loser, losing_champion = (
            attacker, attacking_champion, defender, defending_champion
        )
        loser_ctx = defender_ctx
    else:
        winner, winning_champion, loser, losing_champion = (
            defender, defending_champion, attacker, attacking_champion
        )
        loser_ctx = ctx

    winner.fame += ctx.settings.champion_vs_champion_fame_award
    loot = await _settle_loot(ctx, winner, winning_champion, loser, losing_champion)

    remove_broken_items(attacking_champion, attacker_bonus.broken_items, ctx.log)
    remove_broken_items(defending_champion, defender_bonus.broken_items, ctx.log)

    # Looted champions skip the healing cost
    await apply_champion_defeat(loser_ctx, loser, losing_champion, heal=False)

    details = (
        f"{winning_champion.label} defeated {losing_champion.label} "
        f"({battle.attacker_total} vs {battle.defender_total}), {winner.name} {loot}"
    )
    ctx.log(LogCategory.COMBAT, details)
    return CombatResult(
        combat_occurred=True,
        victory=battle.attacker_wins,
        defeat=not battle.attacker_wins,
        details=details,
    )


# =============================================================================
# Champion vs monster
# =============================================================================

async def _fight_monster(
    ctx: ResolutionContext,
    champion: Champion,
    monster: Monster,
    tile: Tile | None,
) -> CombatResult:
    player = ctx.player
    bonus = await combat_item_bonus(
        ctx, player, champion, monster.might,
        versus_beast=monster.is_beast,
        versus_troll=monster.monster_id.startswith("troll"),
    )
    battle = resolve_monster_battle(player.might + bonus.might_bonus, monster.might, ctx.dice)
    ctx.log(LogCategory.COMBAT, f"{champion.label} rolled [{battle.roll}] against the {monster.name}")
    remove_broken_items(champion, bonus.broken_items, ctx.log)

    if battle.champion_wins:
        player.fame += monster.fame
        for resource, amount in monster.resources.items():
            player.add_resource(resource, amount)
        if tile is not None and tile.monster is monster:
            tile.monster = None
        details = (
            f"Defeated {monster.name} ({battle.champion_total} vs {monster.might}), "
            f"gained {monster.fame} fame and got {_format_resources(monster.resources)}"
        )
        ctx.log(LogCategory.COMBAT, details)
        return CombatResult(combat_occurred=True, victory=True, details=details)

    details = f"Fought {monster.name}, but was defeated ({battle.champion_total} vs {monster.might})"
    ctx.log(LogCategory.COMBAT, details)
    await apply_champion_defeat(ctx, player, champion)
    return CombatResult(combat_occurred=True, defeat=True, details=details)


async def resolve_monster_combat(
    ctx: ResolutionContext,
    tile: Tile,
    champion_id: int | None = None,
    actively_chosen: bool = True,
) -> CombatResult:
    """Fight the monster on tile. A lost fight leaves the monster in place."""
    if tile.monster is None:
        return CombatResult.no_combat()
    champion = _champion(ctx, champion_id)
    monster = tile.monster

    flee = await handle_flee_decision(ctx, FleeContext(
        combat_type=CombatType.MONSTER,
        actively_chosen=actively_chosen,
        player=ctx.player,
        champion=champion,
        opponent_name=monster.name,
    ))
    if flee.fled:
        return CombatResult(fled=True, details=f"{champion.label} fled from the {monster.name}")

    return await _fight_monster(ctx, champion, monster, tile)


async def resolve_immediate_combat(
    ctx: ResolutionContext,
    monster: Monster,
    champion_id: int | None = None,
) -> CombatResult:
    """Fight a monster that is never placed on the board (event ambushes)."""
    return await _fight_monster(ctx, _champion(ctx, champion_id), monster, None)


# =============================================================================
# Dragon
# =============================================================================

async def resolve_dragon_encounter(
    ctx: ResolutionContext,
    tile: Tile,
    champion_id: int | None = None,
    actively_chosen: bool = True,
) -> CombatResult:
    """
    Reach the dragon's tile.

    Fame, gold and starred-tile victories are checked before any fight.
    Losing the fight gets the champion eaten: removed from the game with
    its items and followers.
    """
    if tile.tile_type != TileType.DOOMSPIRE:
        return CombatResult.no_combat()
    player = ctx.player
    champion = _champion(ctx, champion_id)

    victory_type = alternative_victory(ctx.state, player, ctx.settings)
    if victory_type is not None:
        details = f"{victory_type.value.title()} Victory! {player.name} {describe_victory(victory_type, ctx.settings)}"
        ctx.log(LogCategory.VICTORY, details)
        return CombatResult(victory=True, victory_type=victory_type, details=details)

    flee = await handle_flee_decision(ctx, FleeContext(
        combat_type=CombatType.DRAGON,
        actively_chosen=actively_chosen,
        player=player,
        champion=champion,
        opponent_name="the dragon",
    ))
    if flee.fled:
        return CombatResult(fled=True, details=f"{champion.label} fled from the dragon")

    encounter = DragonEncounter(ctx.dice, ctx.settings.dragon_base_might)
    bonus = await combat_item_bonus(ctx, player, champion, encounter.might, versus_dragon=True)
    battle = encounter.fight(player.might + bonus.might_bonus)
    ctx.log(
        LogCategory.COMBAT,
        f"{champion.label} rolled [{battle.roll}] vs the dragon's [{battle.dragon_roll}]",
    )
    remove_broken_items(champion, bonus.broken_items, ctx.log)

    if battle.champion_wins:
        details = (
            f"Combat Victory! {player.name} defeated the dragon "
            f"({battle.champion_total} vs {battle.dragon_might})"
        )
        ctx.log(LogCategory.VICTORY, details)
        return CombatResult(
            combat_occurred=True, victory=True, victory_type=VictoryType.COMBAT, details=details
        )

    details = f"{champion.label} was eaten by the dragon ({battle.champion_total} vs {battle.dragon_might})"
    ctx.log(LogCategory.COMBAT, details)
    if champion.items:
        ctx.log(LogCategory.COMBAT, f"{champion.label}'s items are lost forever")
    if champion.followers:
        ctx.log(LogCategory.COMBAT, f"{champion.label}'s followers flee in terror")
    player.champions.remove(champion)
    return CombatResult(combat_occurred=True, defeat=True, details=details)
