"""Event card catalogue."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class EventCardDef:
    card_id: str
    name: str
    tier: int
    description: str
    count: int = 1
    disabled: bool = False


EVENT_CARDS: list[EventCardDef] = [
    # Tier 1
    EventCardDef("hungry-pests", "Hungry pests", 1,
                 "Choose 1 player who loses 1 food to a mischief of starved rats.", count=2),
    EventCardDef("market-day", "Market day", 1,
                 "Decide if today is Market Day. If so, every player sends 1 champion to the "
                 "trader or pays 1 gold in tax.", count=2),
    EventCardDef("thug-ambush", "Thug Ambush", 1,
                 "Roll: (1) they steal 1 gold, (2) fight a bandit, (3) scare them off, +1 fame.",
                 count=2),
    EventCardDef("landslide", "Landslide", 1,
                 "Roll: (1) flee home, (2) flee to your nearest unoccupied claimed tile, "
                 "(3) miracle, +2 ore.", count=2),
    EventCardDef("temple-trial", "Temple Trial", 1,
                 "Offering: give 1 resource to any player, +1 fame. Sacrilege: take 1 resource "
                 "from any player, -1 fame.", count=2),
    # Tier 2
    EventCardDef("sudden-storm", "Sudden storm", 2,
                 "All boats move into an adjacent sea. All oases gain +1 mystery card.", count=2),
    EventCardDef("hornet-swarm", "Hornet swarm", 2,
                 "Roll 2D3 to flee the swarm.", count=2, disabled=True),
    EventCardDef("druid-rampage", "Druid rampage", 2,
                 "A druid hands you a runed dagger (+1 might), then turns into a bear.", count=2),
    EventCardDef("dragon-hunger", "Dragon hunger", 2,
                 "3+ claimed tiles: +1 fame. 5+: +1 fame, +1 might. 7+: +1 fame, +1 might, +3 gold."),
    EventCardDef("blessing-of-the-lonesome", "Blessing of the lonesome", 2,
                 "Choose a blessing for lone and crowded lords. Food tax is doubled next turn."),
    EventCardDef("riches-for-all", "Riches for all!", 2,
                 "All players collect 1 of each resource. All oases gain +1 mystery card.", count=2),
    # Tier 3
    EventCardDef("curse-of-the-earth", "Curse of the Earth", 3,
                 "Pay 2 gold to make every player lose 2 might."),
    EventCardDef("thieving-crows", "Thieving crows", 3,
                 "Choose food, wood or ore. All players lose all of that resource."),
    EventCardDef("dragon-raid", "Dragon raid", 3,
                 "Each player loses 1 claimed tile of their choice. Home tiles are never raided."),
    EventCardDef("sea-monsters", "Sea monsters", 3,
                 "Sea monsters invade a sea of your choice. Each boat there fights (+2 fame, lose "
                 "the boat) or flees (-1 fame, move one step)."),
]

_BY_ID = {card.card_id: card for card in EVENT_CARDS}


def get_event_card(card_id: str) -> EventCardDef | None:
    return _BY_ID.get(card_id)


def build_event_deck() -> list[str]:
    """Card ids for a fresh deck, copies included, disabled cards left out."""
    return [card.card_id for card in EVENT_CARDS if not card.disabled for _ in range(card.count)]
