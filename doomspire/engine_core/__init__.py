"""
Engine Core - Rule resolution for Lords of Doomspire.

Provides:
- Game state data structures
- Dice sources
- The decision protocol and resolution context
- Pure combat, flee and victory rules

Resolvers that read card content (combat_handler, economy, events,
interceptors, items, loot) are imported from their own modules.
"""

from .state import (
    ResourceType,
    RESOURCE_ORDER,
    TileType,
    NON_COMBAT_TILES,
    OceanPosition,
    OCEAN_ADJACENCY,
    Building,
    ItemKind,
    Position,
    Item,
    Champion,
    Boat,
    Monster,
    Tile,
    Board,
    Player,
    GameState,
)
from .dice import DiceSource, RandomDice, ScriptedDice
from .log_sink import LogCategory, LogSink, logging_sink, null_sink, RecordingSink
from .decision import (
    DecisionOption,
    DecisionContext,
    Decision,
    DecisionAgent,
    AgentResolver,
    decide,
    decide_all,
)
from .context import ResolutionContext
from .combat import (
    ChampionBattleResult,
    MonsterBattleResult,
    DragonBattleResult,
    DragonEncounter,
    resolve_champion_battle,
    resolve_monster_battle,
    resolve_dragon_battle,
)
from .flee import CombatType, FleeOutcome, FleeContext, FleeResult, can_flee
from .victory import VictoryType, VictoryResult, check_victory, evaluate_victories

__all__ = [
    "ResourceType",
    "RESOURCE_ORDER",
    "TileType",
    "NON_COMBAT_TILES",
    "OceanPosition",
    "OCEAN_ADJACENCY",
    "Building",
    "ItemKind",
    "Position",
    "Item",
    "Champion",
    "Boat",
    "Monster",
    "Tile",
    "Board",
    "Player",
    "GameState",
    "DiceSource",
    "RandomDice",
    "ScriptedDice",
    "LogCategory",
    "LogSink",
    "logging_sink",
    "null_sink",
    "RecordingSink",
    "DecisionOption",
    "DecisionContext",
    "Decision",
    "DecisionAgent",
    "AgentResolver",
    "decide",
    "decide_all",
    "ResolutionContext",
    "ChampionBattleResult",
    "MonsterBattleResult",
    "DragonBattleResult",
    "DragonEncounter",
    "resolve_champion_battle",
    "resolve_monster_battle",
    "resolve_dragon_battle",
    "CombatType",
    "FleeOutcome",
    "FleeContext",
    "FleeResult",
    "can_flee",
    "VictoryType",
    "VictoryResult",
    "check_victory",
    "evaluate_victories",
]
