"""
Content - Card and item catalogues.

Provides:
- Monster cards
- Trader items
- Treasure cards
- Event cards
"""

from .monsters import MonsterCard, MONSTER_CARDS, create_monster
from .trader_items import TraderItemDef, TRADER_ITEMS, create_trader_item
from .treasures import TreasureDef, TREASURES, create_treasure
from .event_cards import EventCardDef, EVENT_CARDS, get_event_card, build_event_deck

__all__ = [
    "MonsterCard",
    "MONSTER_CARDS",
    "create_monster",
    "TraderItemDef",
    "TRADER_ITEMS",
    "create_trader_item",
    "TreasureDef",
    "TREASURES",
    "create_treasure",
    "EventCardDef",
    "EVENT_CARDS",
    "get_event_card",
    "build_event_deck",
]
