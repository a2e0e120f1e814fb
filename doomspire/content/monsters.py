"""Monster card definitions."""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.state import Monster, ResourceType
from ..errors import EntityNotFoundError


@dataclass(frozen=True)
class MonsterCard:
    monster_id: str
    name: str
    tier: int
    might: int
    fame: int
    resources: dict[str, int] = field(default_factory=dict)
    is_beast: bool = False


MONSTER_CARDS: dict[str, MonsterCard] = {card.monster_id: card for card in [
    MonsterCard("wolf", "Wolf", tier=1, might=2, fame=1, resources={"food": 2}, is_beast=True),
    MonsterCard("boar", "Boar", tier=1, might=2, fame=1, resources={"food": 2}, is_beast=True),
    MonsterCard("bandit", "Bandit", tier=1, might=3, fame=1, resources={"gold": 2}),
    MonsterCard("dwerm", "Dwerm", tier=1, might=2, fame=1, resources={"ore": 2}),
    MonsterCard("rock-golem", "Rock golem", tier=1, might=3, fame=1, resources={"ore": 2}),
    MonsterCard("troll-spawn", "Troll spawn", tier=1, might=5, fame=2, resources={"ore": 2, "gold": 2}),
    MonsterCard("sprout", "Sprout", tier=1, might=2, fame=1, resources={"wood": 2}),
    MonsterCard("fairy", "Fairy", tier=1, might=2, fame=1, resources={"wood": 2}),
    MonsterCard("entling", "Entling", tier=1, might=4, fame=1, resources={"wood": 3}),
    MonsterCard("bear", "Bear", tier=2, might=5, fame=2, resources={"food": 3}, is_beast=True),
]}


def create_monster(monster_id: str) -> Monster:
    """Fresh Monster instance from its card."""
    card = MONSTER_CARDS.get(monster_id)
    if card is None:
        raise EntityNotFoundError(f"Monster card {monster_id} not found")
    return Monster(
        monster_id=card.monster_id,
        name=card.name,
        might=card.might,
        fame=card.fame,
        resources={ResourceType(r): amount for r, amount in card.resources.items()},
        is_beast=card.is_beast,
        tier=card.tier,
    )
