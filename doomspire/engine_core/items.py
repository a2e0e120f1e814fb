"""
Item Effects - Carrying capacity, combat bonuses and item hand-off.

Bonuses by item:
- Any item: its combat_bonus
- Spear: +1, another +1 against beasts
- Long sword: +2
- Rusty sword: +2 if the holder chooses to use it, then it breaks
- Porcupine: +2 when the opponent's base might exceeds the holder's
- Dragonsbane ring: +3 against the dragon only
- Trollsbane: +1 against trolls for 1 fame, if the holder chooses to pay
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import GameSettings, DEFAULT_SETTINGS
from ..content.trader_items import BACKPACK, SPEAR
from ..content.treasures import DRAGONSBANE_RING, LONG_SWORD, PORCUPINE, RUSTY_SWORD, TROLLSBANE
from .context import ResolutionContext
from .decision import DecisionContext, DecisionOption
from .log_sink import LogCategory, LogSink
from .state import Champion, Item, Player, Tile


def item_capacity(player: Player, settings: GameSettings = DEFAULT_SETTINGS) -> int:
    """Item slots per champion for this player."""
    slots = settings.base_item_slots
    if player.has_item(BACKPACK):
        slots += settings.backpack_extra_slots
    return slots


def has_free_slot(player: Player, champion: Champion, settings: GameSettings = DEFAULT_SETTINGS) -> bool:
    return len(champion.items) < item_capacity(player, settings)


@dataclass
class CombatBonus:
    """Might added by items for one battle, plus items that break afterwards."""
    might_bonus: int = 0
    broken_items: list[Item] = field(default_factory=list)


async def combat_item_bonus(
    ctx: ResolutionContext,
    player: Player,
    champion: Champion | None,
    opponent_might: int,
    *,
    versus_beast: bool = False,
    versus_dragon: bool = False,
    versus_troll: bool = False,
) -> CombatBonus:
    """
    Total item bonus for a champion entering a battle.

    The rusty sword asks its holder (via the decision protocol) whether
    to spend it on this battle.
    """
    bonus = CombatBonus()
    if champion is None:
        return bonus

    for item in list(champion.items):
        if item.combat_bonus:
            bonus.might_bonus += item.combat_bonus
            ctx.log(LogCategory.COMBAT, f"{item.name} provides +{item.combat_bonus} might")

        if item.item_id == SPEAR:
            spear = 2 if versus_beast else 1
            bonus.might_bonus += spear
            ctx.log(LogCategory.COMBAT, f"Spear provides +{spear} might")
        elif item.item_id == LONG_SWORD:
            bonus.might_bonus += 2
            ctx.log(LogCategory.COMBAT, f"{item.name} provides +2 might")
        elif item.item_id == PORCUPINE and opponent_might > player.might:
            bonus.might_bonus += 2
            ctx.log(LogCategory.COMBAT, "Porcupine provides +2 might (opponent has more might)")
        elif item.item_id == DRAGONSBANE_RING and versus_dragon:
            bonus.might_bonus += 3
            ctx.log(LogCategory.COMBAT, "Dragonsbane ring provides +3 might against the dragon")
        elif item.item_id == RUSTY_SWORD:
            decision = await ctx.decide(DecisionContext(
                type="use_rusty_sword",
                description=f"Use the rusty sword for {champion.label}? +2 might, but it breaks.",
                options=[
                    DecisionOption(id="use", description="Use it (+2 might, breaks)"),
                    DecisionOption(id="keep", description="Keep it for later"),
                ],
            ), player.name)
            if decision.choice_id == "use":
                bonus.might_bonus += 2
                bonus.broken_items.append(item)
                ctx.log(LogCategory.COMBAT, "Rusty sword provides +2 might but breaks after this fight")
        elif item.item_id == TROLLSBANE and versus_troll and player.fame > 0:
            decision = await ctx.decide(DecisionContext(
                type="use_trollsbane",
                description=f"Pay 1 fame for +1 might with the trollsbane for {champion.label}?",
                options=[
                    DecisionOption(id="pay", description="Pay 1 fame (+1 might)"),
                    DecisionOption(id="keep", description="Keep your fame"),
                ],
            ), player.name)
            if decision.choice_id == "pay":
                player.lose_fame(1)
                bonus.might_bonus += 1
                ctx.log(LogCategory.COMBAT, "Trollsbane provides +1 might for 1 fame")

    return bonus


def remove_broken_items(champion: Champion | None, broken: list[Item], log: LogSink) -> None:
    """Drop items that break after combat, won or lost."""
    if champion is None:
        return
    for item in broken:
        if item in champion.items:
            champion.items.remove(item)
            log(LogCategory.COMBAT, f"{item.name} breaks and is removed from {champion.label}")


async def give_item(
    ctx: ResolutionContext,
    player: Player,
    champion: Champion,
    item: Item,
    tile: Tile | None,
    *,
    may_refuse: bool = True,
) -> bool:
    """
    Hand an item to a champion.

    With full slots the holder chooses a non-stuck item to drop onto the
    tile, or refuses the new one when may_refuse is set. Without a tile
    the dropped item is lost. Returns whether the item was taken.
    """
    if has_free_slot(player, champion, ctx.settings):
        champion.items.append(item)
        ctx.log(LogCategory.EVENT, f"{champion.label} receives the {item.name}")
        return True

    options = [
        DecisionOption(
            id=f"drop_{index}",
            description=f"Drop {held.name} for the {item.name}",
            data={"index": index},
        )
        for index, held in enumerate(champion.items)
        if not held.stuck
    ]
    if may_refuse:
        options.append(DecisionOption(id="refuse", description=f"Refuse the {item.name}"))
    if not options:
        ctx.log(LogCategory.EVENT, f"{champion.label} has no room for the {item.name}")
        return False

    decision = await ctx.decide(DecisionContext(
        type="choose_item_to_drop",
        description=f"{champion.label}'s inventory is full. Choose what to drop for the {item.name}:",
        options=options,
    ), player.name)

    if decision.choice_id == "refuse":
        ctx.log(LogCategory.EVENT, f"{champion.label} refused the {item.name}")
        return False

    dropped = champion.items.pop(decision.choice.data["index"])
    champion.items.append(item)
    if tile is not None:
        tile.items.append(dropped)
        ctx.log(LogCategory.EVENT, f"{champion.label} dropped {dropped.name} and took the {item.name}")
    else:
        ctx.log(LogCategory.EVENT, f"{champion.label} took the {item.name}; {dropped.name} is lost")
    return True
