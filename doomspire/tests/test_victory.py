"""
Tests for victory evaluation.
"""

from ..config import DEFAULT_SETTINGS
from ..engine_core.state import Position, ResourceType, TileType
from ..engine_core.victory import (
    VictoryType,
    alternative_victory,
    check_victory,
    describe_victory,
    evaluate_victories,
)

DOOMSPIRE = Position(3, 3)


def star(state, player_name, *positions):
    for position in positions:
        tile = state.get_tile(position)
        tile.claimed_by = player_name
        tile.is_starred = True


class TestAlternativeVictory:
    """Thresholds, checked in order."""

    def test_nothing_met(self, state, alice):
        assert alternative_victory(state, alice) is None

    def test_fame_first(self, state, alice):
        alice.fame = 10
        alice.resources[ResourceType.GOLD] = 15
        assert alternative_victory(state, alice) == VictoryType.FAME

    def test_gold(self, state, alice):
        alice.resources[ResourceType.GOLD] = 10
        assert alternative_victory(state, alice) == VictoryType.GOLD

    def test_starred_resource_tiles(self, state, alice):
        star(state, "Alice", Position(0, 1), Position(0, 2), Position(1, 1))
        assert alternative_victory(state, alice) == VictoryType.ECONOMIC

    def test_only_resource_tiles_count(self, state, alice):
        """A starred home tile is not a starred resource tile."""
        star(state, "Alice", Position(0, 1), Position(0, 2), Position(0, 0))
        assert state.starred_tile_count("Alice") == 2
        assert alternative_victory(state, alice) is None

    def test_custom_threshold(self, state, alice):
        alice.fame = 4
        settings = DEFAULT_SETTINGS.with_overrides(victory_fame_threshold=4)
        assert alternative_victory(state, alice, settings) == VictoryType.FAME


class TestEvaluateVictories:
    """Winners must stand on the doomspire."""

    def test_threshold_away_from_doomspire(self, state, alice):
        alice.fame = 12
        assert evaluate_victories(state) == []
        assert check_victory(state) is None

    def test_winner_on_doomspire(self, state, alice):
        alice.fame = 12
        alice.champions[0].position = DOOMSPIRE
        result = check_victory(state)
        assert result.player_name == "Alice"
        assert result.victory_type == VictoryType.FAME

    def test_standing_there_is_not_enough(self, state, alice):
        alice.champions[0].position = DOOMSPIRE
        assert check_victory(state) is None

    def test_all_winners_in_player_order(self, state, alice, bob):
        alice.resources[ResourceType.GOLD] = 10
        bob.fame = 10
        alice.champions[0].position = DOOMSPIRE
        bob.champions[0].position = DOOMSPIRE
        results = evaluate_victories(state)
        assert [(r.player_name, r.victory_type) for r in results] == [
            ("Alice", VictoryType.GOLD),
            ("Bob", VictoryType.FAME),
        ]
        assert check_victory(state).player_name == "Alice"

    def test_doomspire_tile_type(self, state):
        assert state.get_tile(DOOMSPIRE).tile_type == TileType.DOOMSPIRE


class TestDescriptions:
    def test_combat(self):
        assert describe_victory(VictoryType.COMBAT) == "defeated the dragon"

    def test_threshold_mentioned(self):
        assert "10+ gold" in describe_victory(VictoryType.GOLD)
