"""
Tests for treasure card resolution.
"""

import asyncio

import pytest

from ..agents import PreferenceAgent
from ..content.treasures import (
    BROKEN_SHIELD,
    CLOUDSLICER,
    DRAGONSBANE_RING,
    HALF_SWORD,
    LONG_SWORD,
    MYSTERIOUS_RING,
    PORCUPINE,
    SWORD_IN_STONE,
    TREASURES,
    create_treasure,
)
from ..engine_core.state import Position, ResourceType
from ..engine_core.treasure_handler import TREASURE_HANDLERS, TreasureCardResult, resolve_treasure_card
from ..errors import EntityNotFoundError

ADVENTURE = Position(2, 2)


def run(card_id, ctx) -> TreasureCardResult:
    return asyncio.run(resolve_treasure_card(card_id, ctx))


@pytest.fixture
def finder(alice):
    """Alice's champion standing on the adventure tile."""
    champion = alice.champions[0]
    champion.position = ADVENTURE
    return champion


class TestDispatch:
    """Tests for card dispatch."""

    def test_special_cards_are_not_items(self):
        for card_id in (BROKEN_SHIELD, SWORD_IN_STONE):
            with pytest.raises(EntityNotFoundError):
                create_treasure(card_id)

    def test_unknown_card(self, make_ctx, sink):
        result = run("no-such-card", make_ctx())
        assert not result.card_processed
        assert result.error_message == "Unknown treasure card no-such-card"
        assert sink.contains("Unknown treasure card")

    def test_missing_champion(self, make_ctx):
        result = run(LONG_SWORD, make_ctx(champion_id=9))
        assert not result.card_processed
        assert "Champion 9 not found" in result.error_message

    def test_carriable_treasure_is_taken(self, make_ctx, finder):
        result = run(LONG_SWORD, make_ctx())
        assert result.card_processed
        assert result.item_taken
        assert finder.has_item(LONG_SWORD)

    def test_refused_treasure_stays_on_tile(self, make_ctx, state, finder):
        finder.items.extend([create_treasure(PORCUPINE), create_treasure(HALF_SWORD)])
        agent = PreferenceAgent({"choose_item_to_drop": ["refuse"]})
        result = run(LONG_SWORD, make_ctx(agent=agent))
        assert not result.item_taken
        assert not finder.has_item(LONG_SWORD)
        assert [i.item_id for i in state.get_tile(ADVENTURE).items] == [LONG_SWORD]

    def test_every_card_has_a_definition(self):
        assert set(TREASURE_HANDLERS) <= set(TREASURES)


class TestBrokenShield:

    def test_little_ore_gains_ore(self, make_ctx, alice, finder):
        alice.resources[ResourceType.ORE] = 1
        result = run(BROKEN_SHIELD, make_ctx())
        assert alice.resources[ResourceType.ORE] == 2
        assert result.effect == "gained 1 ore"
        assert not finder.items

    def test_trade_ore_for_might(self, make_ctx, alice, finder):
        alice.resources[ResourceType.ORE] = 3
        alice.might = 2
        agent = PreferenceAgent({"broken_shield": ["gain_might"]})
        run(BROKEN_SHIELD, make_ctx(agent=agent))
        assert alice.resources[ResourceType.ORE] == 1
        assert alice.might == 3

    def test_keep_ore(self, make_ctx, alice, finder):
        alice.resources[ResourceType.ORE] = 2
        agent = PreferenceAgent({"broken_shield": ["gain_ore"]})
        run(BROKEN_SHIELD, make_ctx(agent=agent))
        assert alice.resources[ResourceType.ORE] == 3
        assert agent.history == [("broken_shield", "gain_ore")]


class TestMysteriousRing:

    def test_stuck_ring(self, make_ctx, finder):
        result = run(MYSTERIOUS_RING, make_ctx(rolls=[1]))
        assert result.item_taken
        assert finder.items[0].stuck

    def test_stuck_ring_cannot_be_refused(self, make_ctx, state, finder):
        finder.items.extend([create_treasure(LONG_SWORD), create_treasure(PORCUPINE)])
        agent = PreferenceAgent({"choose_item_to_drop": ["refuse", "drop_1"]})
        result = run(MYSTERIOUS_RING, make_ctx(agent=agent, rolls=[1]))
        assert result.item_taken
        assert [i.item_id for i in finder.items] == [LONG_SWORD, MYSTERIOUS_RING]
        assert [i.item_id for i in state.get_tile(ADVENTURE).items] == [PORCUPINE]

    def test_ring_vanishes_when_everything_is_stuck(self, make_ctx, finder):
        finder.items.extend([create_treasure(MYSTERIOUS_RING), create_treasure(MYSTERIOUS_RING)])
        result = run(MYSTERIOUS_RING, make_ctx(rolls=[1]))
        assert not result.item_taken
        assert result.effect == "ring vanished"
        assert len(finder.items) == 2

    def test_swap_with_champion_away_from_home(self, make_ctx, bob, finder):
        rival = bob.champions[0]
        rival.position = Position(0, 2)
        result = run(MYSTERIOUS_RING, make_ctx(rolls=[2]))
        assert finder.position == Position(0, 2)
        assert rival.position == ADVENTURE
        assert result.effect == "swapped with Bob's Champion1"
        assert not finder.items

    def test_ring_breaks_without_targets(self, make_ctx, bob, finder, sink):
        result = run(MYSTERIOUS_RING, make_ctx(rolls=[2]))
        assert finder.position == ADVENTURE
        assert bob.champions[0].position == bob.home_position
        assert result.effect == "ring broke without a swap"
        assert sink.contains("no champion to swap with")

    def test_dragonsbane_ring(self, make_ctx, finder):
        result = run(MYSTERIOUS_RING, make_ctx(rolls=[3]))
        assert result.item_taken
        assert finder.has_item(DRAGONSBANE_RING)


class TestSwordInStone:

    def test_leave_sword(self, make_ctx, finder):
        agent = PreferenceAgent({"sword_in_stone_attempt": ["leave_sword"]})
        result = run(SWORD_IN_STONE, make_ctx(agent=agent))
        assert result.returned_to_deck
        assert not finder.items

    @pytest.mark.parametrize("roll, item_id", [(1, HALF_SWORD), (3, CLOUDSLICER)])
    def test_pulled_out(self, make_ctx, finder, roll, item_id):
        agent = PreferenceAgent({"sword_in_stone_attempt": ["attempt_pull"]})
        result = run(SWORD_IN_STONE, make_ctx(agent=agent, rolls=[roll]))
        assert result.item_taken
        assert not result.returned_to_deck
        assert finder.has_item(item_id)

    def test_sword_resists(self, make_ctx, finder, sink):
        agent = PreferenceAgent({"sword_in_stone_attempt": ["attempt_pull"]})
        result = run(SWORD_IN_STONE, make_ctx(agent=agent, rolls=[2]))
        assert result.returned_to_deck
        assert not finder.items
        assert sink.contains("The sword resists")

    def test_cloudslicer_bonus(self):
        assert create_treasure(CLOUDSLICER).combat_bonus == 4
        assert create_treasure(HALF_SWORD).combat_bonus == 2
