"""
Economy - Building, building usage and trading.

Every operation is all-or-nothing: each failure path returns a result
with a reason and leaves the player exactly as it was.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from ..config import GameSettings, DEFAULT_SETTINGS
from ..content.trader_items import TRADER_ITEMS, create_trader_item
from .items import has_free_slot
from .log_sink import LogCategory, LogSink, null_sink
from .state import Boat, Building, Champion, GameState, OceanPosition, Player, ResourceType, TileType

DEFAULT_BOAT_SEA = OceanPosition.NW


class BuildType(str, Enum):
    BLACKSMITH = "blacksmith"
    MARKET = "market"
    FLETCHER = "fletcher"
    CHAPEL = "chapel"
    MONASTERY = "monastery"
    CHAMPION = "champion"
    BOAT = "boat"


@dataclass
class BuildResult:
    success: bool
    build_type: BuildType
    reason: str = ""
    fame_gained: int = 0

    @classmethod
    def failure(cls, build_type: BuildType, reason: str) -> BuildResult:
        return cls(success=False, build_type=build_type, reason=reason)


def _format_cost(cost: dict[str, int]) -> str:
    return " + ".join(f"{amount} {resource}" for resource, amount in cost.items())


def build_cost(player: Player, build_type: BuildType, settings: GameSettings = DEFAULT_SETTINGS) -> dict[str, int] | None:
    """Cost of the next build of this type; None when no further unit exists."""
    if build_type == BuildType.CHAMPION:
        index = len(player.champions) - 1
        if not 0 <= index < len(settings.champion_costs):
            return None
        return settings.champion_costs[index]
    return {
        BuildType.BLACKSMITH: settings.blacksmith_cost,
        BuildType.MARKET: settings.market_cost,
        BuildType.FLETCHER: settings.fletcher_cost,
        BuildType.CHAPEL: settings.chapel_cost,
        BuildType.MONASTERY: settings.monastery_cost,
        BuildType.BOAT: settings.boat_cost,
    }[build_type]


def _check_constraints(player: Player, build_type: BuildType, settings: GameSettings) -> str | None:
    """Cardinality and prerequisite checks. Returns a failure reason or None."""
    if build_type in (BuildType.BLACKSMITH, BuildType.MARKET, BuildType.FLETCHER):
        if Building(build_type.value) in player.buildings:
            return f"Already has {build_type.value}"
    elif build_type == BuildType.CHAPEL:
        if {Building.CHAPEL, Building.MONASTERY} & player.buildings:
            return "Already has chapel or monastery"
    elif build_type == BuildType.MONASTERY:
        if Building.MONASTERY in player.buildings:
            return "Already has monastery"
        if Building.CHAPEL not in player.buildings:
            return "No chapel to upgrade"
    elif build_type == BuildType.CHAMPION:
        if len(player.champions) >= settings.max_champions:
            return "Maximum champions reached"
        if not player.champions:
            return "Invalid champion count"
    elif build_type == BuildType.BOAT:
        if len(player.boats) >= settings.max_boats:
            return "Maximum boats reached"
    return None


def resolve_build(
    state: GameState,
    player: Player,
    build_type: BuildType | str,
    log: LogSink = null_sink,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> BuildResult:
    """
    Build a building or unit for player.

    Constraints are checked first, then affordability; only then is the
    cost deducted and the effect applied.
    """
    build_type = BuildType(build_type)

    reason = _check_constraints(player, build_type, settings)
    if reason is not None:
        log(LogCategory.SYSTEM, f"{player.name} cannot build {build_type.value}: {reason}")
        return BuildResult.failure(build_type, reason)

    cost = build_cost(player, build_type, settings)
    if cost is None:
        return BuildResult.failure(build_type, "Maximum champions reached")
    if not player.can_afford(cost):
        log(LogCategory.SYSTEM, f"{player.name} cannot afford {build_type.value} - requires {_format_cost(cost)}")
        return BuildResult.failure(build_type, "Insufficient resources")

    player.pay(cost)
    fame = 0

    if build_type == BuildType.CHAMPION:
        champion = Champion(
            champion_id=player.next_champion_id(),
            owner=player.name,
            position=player.home_position,
        )
        player.champions.append(champion)
        message = f"Recruited champion {champion.champion_id}"
    elif build_type == BuildType.BOAT:
        sea = player.boats[0].position if player.boats else DEFAULT_BOAT_SEA
        boat = Boat(boat_id=player.next_boat_id(), owner=player.name, position=sea)
        player.boats.append(boat)
        message = f"Built boat {boat.boat_id} in the {sea.value} sea"
    elif build_type == BuildType.MONASTERY:
        player.buildings.discard(Building.CHAPEL)
        player.buildings.add(Building.MONASTERY)
        fame = settings.monastery_fame
        message = "Upgraded chapel to monastery"
    else:
        player.buildings.add(Building(build_type.value))
        if build_type == BuildType.CHAPEL:
            fame = settings.chapel_fame
        message = f"Built a {build_type.value}"

    player.fame += fame
    suffix = f", gained {fame} fame" if fame else ""
    log(LogCategory.SYSTEM, f"{player.name}: {message} for {_format_cost(cost)}{suffix}")
    return BuildResult(success=True, build_type=build_type, fame_gained=fame)


# =============================================================================
# Building usage
# =============================================================================

@dataclass
class UsageResult:
    blacksmith_used: bool = False
    fletcher_used: bool = False
    market_used: bool = False
    might_gained: int = 0
    gold_gained: int = 0
    resources_sold: int = 0
    failed_actions: list[tuple[str, str]] = field(default_factory=list)


def _buy_might(
    player: Player,
    building: Building,
    cost: dict[str, int],
    result: UsageResult,
    log: LogSink,
    settings: GameSettings,
) -> bool:
    if building not in player.buildings:
        result.failed_actions.append((building.value, f"No {building.value}"))
        return False
    if not player.can_afford(cost):
        reason = f"Cannot use {building.value} - requires {_format_cost(cost)}"
        result.failed_actions.append((building.value, reason))
        log(LogCategory.SYSTEM, reason)
        return False
    if player.might >= settings.max_might:
        result.failed_actions.append((building.value, "Already at maximum might"))
        return False
    player.pay(cost)
    result.might_gained += player.gain_might(1, settings.max_might)
    log(LogCategory.SYSTEM, f"Used {building.value} to buy 1 might for {_format_cost(cost)}")
    return True


def use_buildings(
    player: Player,
    *,
    use_blacksmith: bool = False,
    use_fletcher: bool = False,
    sell_at_market: dict[str, int] | None = None,
    log: LogSink = null_sink,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> UsageResult:
    """
    Use owned buildings after a turn.

    Blacksmith and fletcher each buy 1 might. The market sells
    resources at settings.market_sell_ratio to 1 gold, counted over all
    resources sold together; a line that cannot be covered is skipped.
    """
    result = UsageResult()

    if use_blacksmith:
        result.blacksmith_used = _buy_might(
            player, Building.BLACKSMITH, settings.blacksmith_usage_cost, result, log, settings
        )
    if use_fletcher:
        result.fletcher_used = _buy_might(
            player, Building.FLETCHER, settings.fletcher_usage_cost, result, log, settings
        )

    if sell_at_market:
        if Building.MARKET not in player.buildings:
            result.failed_actions.append(("market", "No market"))
        else:
            sold: list[str] = []
            for resource, amount in sell_at_market.items():
                resource = ResourceType(resource)
                if amount <= 0 or resource == ResourceType.GOLD:
                    continue
                if player.resources[resource] < amount:
                    reason = f"Cannot sell {amount} {resource.value} - only have {player.resources[resource]}"
                    result.failed_actions.append((f"market_{resource.value}", reason))
                    log(LogCategory.SYSTEM, reason)
                    continue
                player.remove_resource(resource, amount)
                result.resources_sold += amount
                sold.append(f"{amount} {resource.value}")

            if result.resources_sold:
                result.gold_gained = result.resources_sold // settings.market_sell_ratio
                player.add_resource(ResourceType.GOLD, result.gold_gained)
                result.market_used = True
                log(LogCategory.SYSTEM, f"Sold {', '.join(sold)} for {result.gold_gained} gold at market")

    return result


# =============================================================================
# Trader
# =============================================================================

@dataclass
class PurchaseResult:
    success: bool
    item_id: str
    reason: str = ""

    @classmethod
    def failure(cls, item_id: str, reason: str) -> PurchaseResult:
        return cls(success=False, item_id=item_id, reason=reason)


def purchase_trader_item(
    state: GameState,
    player: Player,
    champion_id: int,
    item_id: str,
    log: LogSink = null_sink,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> PurchaseResult:
    """Buy an item for a champion standing on a trader tile."""
    definition = TRADER_ITEMS.get(item_id)
    if definition is None:
        return PurchaseResult.failure(item_id, f"Unknown trader item {item_id}")

    champion = player.get_champion(champion_id)
    if champion is None:
        return PurchaseResult.failure(item_id, f"Champion {champion_id} not found")

    tile = state.get_tile(champion.position)
    if tile is None or tile.tile_type != TileType.TRADER:
        return PurchaseResult.failure(item_id, "Champion is not at a trader")
    if not has_free_slot(player, champion, settings):
        return PurchaseResult.failure(item_id, "Inventory full")
    if player.resources[ResourceType.GOLD] < definition.cost:
        return PurchaseResult.failure(item_id, "Insufficient resources")

    player.remove_resource(ResourceType.GOLD, definition.cost)
    champion.items.append(create_trader_item(item_id))
    log(LogCategory.SYSTEM, f"{champion.label} bought a {definition.name} for {definition.cost} gold")
    return PurchaseResult(success=True, item_id=item_id)
