"""
Game State - Mutable container for players, champions and the board.

Design principles:
- Resolvers mutate state in place, one turn resolution at a time
- State is passed explicitly into every resolver (no singletons)
- Resource counters never go negative: decrements are clamped
- The board is given; it is never generated here
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator
from copy import deepcopy
from enum import Enum

from ..errors import EntityNotFoundError


class ResourceType(str, Enum):
    """Stockpiled resources."""
    FOOD = "food"
    WOOD = "wood"
    ORE = "ore"
    GOLD = "gold"


# Fixed priority order used whenever a rule says "first available resource"
RESOURCE_ORDER: tuple[ResourceType, ...] = (
    ResourceType.FOOD,
    ResourceType.WOOD,
    ResourceType.ORE,
    ResourceType.GOLD,
)


class TileType(str, Enum):
    """Kinds of land tiles."""
    HOME = "home"
    RESOURCE = "resource"
    ADVENTURE = "adventure"
    OASIS = "oasis"
    TRADER = "trader"
    TEMPLE = "temple"
    MERCENARY = "mercenary"
    DOOMSPIRE = "doomspire"


# Champions never fight each other on these tiles
NON_COMBAT_TILES = frozenset({
    TileType.HOME,
    TileType.TEMPLE,
    TileType.TRADER,
    TileType.MERCENARY,
})


class OceanPosition(str, Enum):
    """The four seas surrounding the island."""
    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"


OCEAN_ADJACENCY: dict[OceanPosition, tuple[OceanPosition, OceanPosition]] = {
    OceanPosition.NW: (OceanPosition.NE, OceanPosition.SW),
    OceanPosition.NE: (OceanPosition.NW, OceanPosition.SE),
    OceanPosition.SW: (OceanPosition.NW, OceanPosition.SE),
    OceanPosition.SE: (OceanPosition.NE, OceanPosition.SW),
}


class Building(str, Enum):
    """Buildings a player may own (each at most once)."""
    BLACKSMITH = "blacksmith"
    MARKET = "market"
    FLETCHER = "fletcher"
    CHAPEL = "chapel"
    MONASTERY = "monastery"


class ItemKind(str, Enum):
    """Where an item came from."""
    TREASURE = "treasure"
    TRADER = "trader"


@dataclass(frozen=True)
class Position:
    """A board coordinate."""
    row: int
    col: int

    def distance_to(self, other: Position) -> int:
        """Manhattan distance."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass
class Item:
    """
    A carriable item instance.

    stuck items can be neither dropped nor looted; unstealable items
    can be dropped voluntarily but never taken in combat.
    """
    item_id: str
    name: str
    kind: ItemKind = ItemKind.TREASURE
    combat_bonus: int = 0
    stuck: bool = False
    unstealable: bool = False


@dataclass
class Champion:
    """A champion on the board. champion_id is scoped to its owner."""
    champion_id: int
    owner: str
    position: Position
    items: list[Item] = field(default_factory=list)
    followers: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.owner}'s Champion{self.champion_id}"

    def has_item(self, item_id: str) -> bool:
        return any(item.item_id == item_id for item in self.items)


@dataclass
class Boat:
    """A boat in one of the four seas."""
    boat_id: int
    owner: str
    position: OceanPosition


@dataclass
class Monster:
    """A monster guarding a tile. Removed when defeated."""
    monster_id: str
    name: str
    might: int
    fame: int = 0
    resources: dict[ResourceType, int] = field(default_factory=dict)
    is_beast: bool = False
    tier: int = 1


@dataclass
class Tile:
    """A land tile."""
    position: Position
    tile_type: TileType
    monster: Monster | None = None
    claimed_by: str | None = None
    is_starred: bool = False
    adventure_tokens: int = 0
    items: list[Item] = field(default_factory=list)


@dataclass
class Board:
    """Tiles indexed by position."""
    tiles: dict[Position, Tile] = field(default_factory=dict)

    @classmethod
    def from_tiles(cls, tiles: list[Tile]) -> Board:
        return cls(tiles={tile.position: tile for tile in tiles})

    def get_tile(self, position: Position) -> Tile | None:
        return self.tiles.get(position)

    def find_tiles(self, predicate: Callable[[Tile], bool]) -> list[Tile]:
        """All tiles matching predicate, in insertion order."""
        return [tile for tile in self.tiles.values() if predicate(tile)]

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles.values())


def _empty_resources() -> dict[ResourceType, int]:
    return {resource: 0 for resource in RESOURCE_ORDER}


@dataclass
class Player:
    """
    State for a single player (a "lord").

    Resources are keyed by ResourceType; plain strings like "food"
    also work as keys because ResourceType is a str enum.
    """
    name: str
    home_position: Position
    fame: int = 0
    might: int = 0
    resources: dict[ResourceType, int] = field(default_factory=_empty_resources)
    buildings: set[Building] = field(default_factory=set)
    champions: list[Champion] = field(default_factory=list)
    boats: list[Boat] = field(default_factory=list)

    def get_champion(self, champion_id: int) -> Champion | None:
        for champion in self.champions:
            if champion.champion_id == champion_id:
                return champion
        return None

    def add_resource(self, resource: ResourceType | str, amount: int = 1) -> None:
        resource = ResourceType(resource)
        self.resources[resource] = self.resources.get(resource, 0) + amount

    def remove_resource(self, resource: ResourceType | str, amount: int = 1) -> int:
        """Remove up to amount, never going below zero. Returns the amount removed."""
        resource = ResourceType(resource)
        held = self.resources.get(resource, 0)
        removed = min(held, amount)
        self.resources[resource] = held - removed
        return removed

    def lose_fame(self, amount: int) -> int:
        """Lose up to amount fame, clamped at zero. Returns the amount lost."""
        lost = min(self.fame, amount)
        self.fame -= lost
        return lost

    def gain_might(self, amount: int, cap: int) -> int:
        """Gain might up to cap. Returns the amount actually gained."""
        gained = max(0, min(amount, cap - self.might))
        self.might += gained
        return gained

    def can_afford(self, cost: dict[str, int]) -> bool:
        return all(
            self.resources.get(ResourceType(resource), 0) >= amount
            for resource, amount in cost.items()
        )

    def pay(self, cost: dict[str, int]) -> None:
        """Deduct cost. Callers check can_afford first."""
        for resource, amount in cost.items():
            self.remove_resource(resource, amount)

    @property
    def has_resources(self) -> bool:
        return any(amount > 0 for amount in self.resources.values())

    def available_resources(self) -> list[ResourceType]:
        """Resource types held in a positive amount, in priority order."""
        return [r for r in RESOURCE_ORDER if self.resources.get(r, 0) > 0]

    def has_item(self, item_id: str) -> bool:
        """Whether any of this player's champions carries the item."""
        return any(champion.has_item(item_id) for champion in self.champions)

    def next_champion_id(self) -> int:
        return max((c.champion_id for c in self.champions), default=0) + 1

    def next_boat_id(self) -> int:
        return max((b.boat_id for b in self.boats), default=0) + 1


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Only one turn resolution mutates a state at a time.
    """
    players: list[Player] = field(default_factory=list)
    board: Board = field(default_factory=Board)
    turn_number: int = 0

    # Set by Blessing of the Lonesome; read by the (external) harvest step
    food_tax_multiplier: int = 1

    metadata: dict[str, Any] = field(default_factory=dict)

    def get_player(self, name: str) -> Player | None:
        for p in self.players:
            if p.name == name:
                return p
        return None

    def get_champion(self, owner: str, champion_id: int) -> Champion | None:
        player = self.get_player(owner)
        return player.get_champion(champion_id) if player else None

    def get_tile(self, position: Position) -> Tile | None:
        return self.board.get_tile(position)

    def all_champions(self) -> list[Champion]:
        return [c for p in self.players for c in p.champions]

    def champions_at(self, position: Position) -> list[Champion]:
        return [c for c in self.all_champions() if c.position == position]

    def opposing_champions_at(self, player_name: str, position: Position) -> list[Champion]:
        """Champions of other players standing on position."""
        return [c for c in self.champions_at(position) if c.owner != player_name]

    def is_occupied(self, position: Position, ignore: Champion | None = None) -> bool:
        """Whether any champion (other than ignore) stands on position."""
        return any(c is not ignore for c in self.champions_at(position))

    def claimed_tiles(self, player_name: str) -> list[Tile]:
        return self.board.find_tiles(lambda tile: tile.claimed_by == player_name)

    def starred_tile_count(self, player_name: str) -> int:
        """Starred resource tiles claimed by the player."""
        return sum(
            1 for tile in self.claimed_tiles(player_name)
            if tile.is_starred and tile.tile_type == TileType.RESOURCE
        )

    def boats_in(self, sea: OceanPosition) -> list[Boat]:
        return [b for p in self.players for b in p.boats if b.position == sea]

    def move_champion_home(self, champion: Champion) -> Position:
        player = self.get_player(champion.owner)
        if player is None:
            raise EntityNotFoundError(f"Player {champion.owner} not found")
        champion.position = player.home_position
        return champion.position

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
