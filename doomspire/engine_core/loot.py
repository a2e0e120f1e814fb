"""
Combat Loot - What a winner may take from a defeated champion.

The same option list is used by the default path (winner chooses) and
by every interceptor that changes who chooses, so both paths always
offer identical loot.
"""

from __future__ import annotations

from ..config import GameSettings, DEFAULT_SETTINGS
from .decision import DecisionOption
from .items import has_free_slot
from .state import RESOURCE_ORDER, Champion, Player, ResourceType


def loot_options(
    winning_player: Player,
    winning_champion: Champion,
    defeated_player: Player,
    defeated_champion: Champion,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> list[DecisionOption]:
    """
    One option per resource the loser holds, plus one per lootable item
    when the winner has a free slot. Stuck and unstealable items are
    never offered; followers are never lootable.
    """
    options = [
        DecisionOption(
            id=f"resource_{resource.value}",
            description=f"1 {resource.value} ({defeated_player.resources[resource]} held)",
            data={"kind": "resource", "resource": resource.value},
        )
        for resource in RESOURCE_ORDER
        if defeated_player.resources.get(resource, 0) > 0
    ]

    if has_free_slot(winning_player, winning_champion, settings):
        for index, item in enumerate(defeated_champion.items):
            if item.stuck or item.unstealable:
                continue
            options.append(DecisionOption(
                id=f"item_{index}",
                description=f"{item.name} (item)",
                data={"kind": "item", "index": index},
            ))

    return options


def apply_loot(
    option: DecisionOption,
    winning_player: Player,
    winning_champion: Champion,
    defeated_player: Player,
    defeated_champion: Champion,
) -> str:
    """Transfer the chosen loot. Returns a short description."""
    kind = option.data.get("kind")

    if kind == "resource":
        resource = ResourceType(option.data["resource"])
        taken = defeated_player.remove_resource(resource, 1)
        if not taken:
            return f"found no {resource.value} to take"
        winning_player.add_resource(resource, taken)
        return f"took 1 {resource.value}"

    if kind == "item":
        index = option.data["index"]
        if not 0 <= index < len(defeated_champion.items):
            return "found no item to take"
        item = defeated_champion.items.pop(index)
        winning_champion.items.append(item)
        return f"took {item.name}"

    return "took nothing"
