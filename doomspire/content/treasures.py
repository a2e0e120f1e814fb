"""Treasure card definitions."""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import Item, ItemKind
from ..errors import EntityNotFoundError

RUSTY_SWORD = "rusty-sword"
LONG_SWORD = "long-sword"
PORCUPINE = "porcupine"
DRAGONSBANE_RING = "dragonsbane-ring"
MYSTERIOUS_RING = "mysterious-ring"
TROLLSBANE = "trollsbane"
RUNED_DAGGER = "runed-dagger"
BROKEN_SHIELD = "broken-shield"
SWORD_IN_STONE = "sword-in-stone"
HALF_SWORD = "half-sword"
CLOUDSLICER = "cloudslicer"


@dataclass(frozen=True)
class TreasureDef:
    item_id: str
    name: str
    tier: int
    description: str
    combat_bonus: int = 0
    stuck: bool = False
    unstealable: bool = False
    # Non-carriable cards resolve on the spot and never become items
    carriable: bool = True


TREASURES: dict[str, TreasureDef] = {t.item_id: t for t in [
    TreasureDef(RUSTY_SWORD, "Rusty sword", 1, "+2 might for one battle, then it breaks."),
    TreasureDef(TROLLSBANE, "Trollsbane", 1, "A cursed axe forged against trolls."),
    TreasureDef(MYSTERIOUS_RING, "Mysterious Ring", 1, "Does nothing and is stuck until the temple.",
                stuck=True),
    TreasureDef(DRAGONSBANE_RING, "Dragonsbane Ring", 1, "+3 might against dragons.", unstealable=True),
    TreasureDef(LONG_SWORD, "Long Sword", 2, "+2 might."),
    TreasureDef(PORCUPINE, "Porcupine", 2, "+2 might if the opponent has more might."),
    TreasureDef(RUNED_DAGGER, "Runed Dagger", 2, "A mystical blade from the wild druid.",
                combat_bonus=1),
    TreasureDef(BROKEN_SHIELD, "Broken Shield", 1, "Gain 1 ore, or spend 2 ore for 1 might.",
                carriable=False),
    TreasureDef(SWORD_IN_STONE, "Sword in a stone", 2, "Attempt to pull the sword out.",
                carriable=False),
    TreasureDef(HALF_SWORD, "Half Sword", 2, "It broke off. +2 might.", combat_bonus=2),
    TreasureDef(CLOUDSLICER, "Cloudslicer", 2, "A legendary blade. +4 might.", combat_bonus=4),
]}


def create_treasure(item_id: str) -> Item:
    definition = TREASURES.get(item_id)
    if definition is None or not definition.carriable:
        raise EntityNotFoundError(f"Treasure item {item_id} not found")
    return Item(
        item_id=definition.item_id,
        name=definition.name,
        kind=ItemKind.TREASURE,
        combat_bonus=definition.combat_bonus,
        stuck=definition.stuck,
        unstealable=definition.unstealable,
    )
