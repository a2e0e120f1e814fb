"""
Pytest fixtures for Doomspire tests.

The board is a small hand-built island:

    (0,0) Alice's home       (0,6) Bob's home
    (0,1) (0,2) (1,1) resource tiles
    (1,3) trader   (2,0) oasis   (2,4) temple
    (2,2) adventure   (3,3) doomspire
"""

import pytest

from ..engine_core.context import ResolutionContext
from ..engine_core.dice import ScriptedDice
from ..engine_core.log_sink import RecordingSink
from ..engine_core.state import (
    Board,
    Champion,
    GameState,
    Player,
    Position,
    Tile,
    TileType,
)

ALICE_HOME = Position(0, 0)
BOB_HOME = Position(0, 6)


def make_player(name: str, home: Position, champions: int = 1, **kwargs) -> Player:
    """A player with champions standing at home."""
    player = Player(name=name, home_position=home, **kwargs)
    for champion_id in range(1, champions + 1):
        player.champions.append(Champion(champion_id=champion_id, owner=name, position=home))
    return player


def make_board() -> Board:
    return Board.from_tiles([
        Tile(ALICE_HOME, TileType.HOME, claimed_by="Alice"),
        Tile(BOB_HOME, TileType.HOME, claimed_by="Bob"),
        Tile(Position(0, 1), TileType.RESOURCE),
        Tile(Position(0, 2), TileType.RESOURCE),
        Tile(Position(1, 1), TileType.RESOURCE),
        Tile(Position(1, 3), TileType.TRADER),
        Tile(Position(2, 0), TileType.OASIS),
        Tile(Position(2, 4), TileType.TEMPLE),
        Tile(Position(2, 2), TileType.ADVENTURE),
        Tile(Position(3, 3), TileType.DOOMSPIRE),
    ])


@pytest.fixture
def alice() -> Player:
    return make_player("Alice", ALICE_HOME)


@pytest.fixture
def bob() -> Player:
    return make_player("Bob", BOB_HOME)


@pytest.fixture
def state(alice: Player, bob: Player) -> GameState:
    """Two-lord game on the test island."""
    return GameState(players=[alice, bob], board=make_board())


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_ctx(state: GameState, sink: RecordingSink):
    """
    Factory for a ResolutionContext acting for Alice by default.

    rolls and picks feed a ScriptedDice.
    """
    def factory(
        player: Player | None = None,
        agent=None,
        rolls=(),
        picks=(),
        champion_id: int | None = 1,
        agents: dict | None = None,
        **kwargs,
    ) -> ResolutionContext:
        resolver = None
        if agents is not None:
            resolver = agents.get
        return ResolutionContext(
            state=state,
            player=player or state.players[0],
            agent=agent,
            log=sink,
            dice=ScriptedDice(rolls, picks),
            agent_resolver=resolver,
            champion_id=champion_id,
            **kwargs,
        )

    return factory
