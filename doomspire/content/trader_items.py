"""Items sold at trader tiles."""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import Item, ItemKind
from ..errors import EntityNotFoundError

SPEAR = "spear"
BACKPACK = "backpack"
PADDED_HELMET = "padded-helmet"


@dataclass(frozen=True)
class TraderItemDef:
    item_id: str
    name: str
    cost: int  # gold
    description: str


TRADER_ITEMS: dict[str, TraderItemDef] = {item.item_id: item for item in [
    TraderItemDef(SPEAR, "Spear", 1, "+1 might, another +1 against beasts."),
    TraderItemDef(BACKPACK, "Backpack", 2, "Two extra item slots. When defeated, you choose what is taken."),
    TraderItemDef(PADDED_HELMET, "Padded helmet", 2,
                  "When defeated, choose what to give and respawn on a claimed tile near home."),
]}


def create_trader_item(item_id: str) -> Item:
    definition = TRADER_ITEMS.get(item_id)
    if definition is None:
        raise EntityNotFoundError(f"Trader item {item_id} not found")
    return Item(item_id=definition.item_id, name=definition.name, kind=ItemKind.TRADER)
