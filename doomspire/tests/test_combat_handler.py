"""
Tests for combat orchestration.

Tests:
- Monster fights (win, loss, flee, healing)
- Champion duels with loot
- Item bonuses and interceptors in combat
- The dragon
"""

import asyncio

import pytest

from ..agents import PreferenceAgent
from ..content.monsters import create_monster
from ..content.trader_items import PADDED_HELMET, SPEAR, create_trader_item
from ..content.treasures import RUSTY_SWORD, TROLLSBANE, create_treasure
from ..engine_core.combat_handler import (
    apply_champion_defeat,
    pay_healing_cost,
    resolve_champion_combat,
    resolve_dragon_encounter,
    resolve_immediate_combat,
    resolve_monster_combat,
)
from ..engine_core.state import Position, ResourceType
from ..engine_core.victory import VictoryType
from ..errors import EntityNotFoundError
from .conftest import ALICE_HOME, BOB_HOME

ADVENTURE = Position(2, 2)
FIELD = Position(0, 1)
DOOMSPIRE = Position(3, 3)


@pytest.fixture
def monster_tile(state, alice):
    """Alice's champion on the adventure tile, facing a bandit (might 3)."""
    tile = state.get_tile(ADVENTURE)
    tile.monster = create_monster("bandit")
    alice.champions[0].position = ADVENTURE
    return tile


class TestMonsterCombat:
    """Tests for champion vs monster."""

    def test_win_collects_rewards(self, make_ctx, alice, monster_tile):
        """Monster might 3, player might 3, roll 1: the champion wins."""
        alice.might = 3
        result = asyncio.run(resolve_monster_combat(make_ctx(rolls=[1]), monster_tile))
        assert result.combat_occurred
        assert result.victory
        assert alice.fame == 1
        assert alice.resources[ResourceType.GOLD] == 2
        assert monster_tile.monster is None

    def test_loss_sends_home_and_heals(self, make_ctx, alice, monster_tile):
        """Lost fight: home, pay one resource, monster stays."""
        alice.resources[ResourceType.WOOD] = 2
        result = asyncio.run(resolve_monster_combat(make_ctx(rolls=[1]), monster_tile))
        assert result.defeat
        assert alice.champions[0].position == ALICE_HOME
        assert alice.resources[ResourceType.WOOD] == 1
        assert monster_tile.monster is not None

    def test_loss_without_resources_costs_fame(self, make_ctx, alice, monster_tile):
        alice.fame = 1
        asyncio.run(resolve_monster_combat(make_ctx(rolls=[1]), monster_tile))
        assert alice.fame == 0

    def test_passive_fight_can_flee(self, make_ctx, alice, monster_tile):
        """A monster that found the champion can be fled."""
        agent = PreferenceAgent({"fight_or_flee": ["flee"]})
        result = asyncio.run(resolve_monster_combat(
            make_ctx(agent=agent, rolls=[3]), monster_tile, actively_chosen=False
        ))
        assert result.fled
        assert not result.combat_occurred
        assert alice.champions[0].position == ALICE_HOME
        assert monster_tile.monster is not None

    def test_no_monster_no_combat(self, make_ctx, state):
        result = asyncio.run(resolve_monster_combat(make_ctx(), state.get_tile(FIELD)))
        assert not result.combat_occurred

    def test_spear_doubles_against_beasts(self, make_ctx, alice, monster_tile):
        """Spear gives +2 against a beast: might 0 + 2 + roll 1 beats a wolf."""
        monster_tile.monster = create_monster("wolf")
        alice.champions[0].items.append(create_trader_item(SPEAR))
        result = asyncio.run(resolve_monster_combat(make_ctx(rolls=[1]), monster_tile))
        assert result.victory

    def test_rusty_sword_breaks_after_use(self, make_ctx, alice, monster_tile):
        alice.might = 1
        alice.champions[0].items.append(create_treasure(RUSTY_SWORD))
        agent = PreferenceAgent({"use_rusty_sword": ["use"]})
        result = asyncio.run(resolve_monster_combat(make_ctx(agent=agent, rolls=[1]), monster_tile))
        assert result.victory
        assert not alice.champions[0].items

    def test_rusty_sword_kept(self, make_ctx, alice, monster_tile):
        alice.champions[0].items.append(create_treasure(RUSTY_SWORD))
        agent = PreferenceAgent({"use_rusty_sword": ["keep"]})
        result = asyncio.run(resolve_monster_combat(make_ctx(agent=agent, rolls=[1]), monster_tile))
        assert result.defeat
        assert alice.champions[0].has_item(RUSTY_SWORD)

    def test_trollsbane_trades_fame_for_might(self, make_ctx, alice, monster_tile):
        """Troll spawn might 5: might 3 + trollsbane 1 + roll 1 wins."""
        monster_tile.monster = create_monster("troll-spawn")
        alice.might = 3
        alice.fame = 1
        alice.champions[0].items.append(create_treasure(TROLLSBANE))
        agent = PreferenceAgent({"use_trollsbane": ["pay"]})
        result = asyncio.run(resolve_monster_combat(make_ctx(agent=agent, rolls=[1]), monster_tile))
        assert result.victory
        assert alice.fame == 2

    def test_trollsbane_needs_fame(self, make_ctx, alice, monster_tile):
        monster_tile.monster = create_monster("troll-spawn")
        alice.might = 3
        alice.champions[0].items.append(create_treasure(TROLLSBANE))
        agent = PreferenceAgent({"use_trollsbane": ["pay"]})
        result = asyncio.run(resolve_monster_combat(make_ctx(agent=agent, rolls=[1]), monster_tile))
        assert result.defeat
        assert ("use_trollsbane", "pay") not in agent.history

    def test_immediate_combat_leaves_board_alone(self, make_ctx, alice, state):
        alice.might = 3
        result = asyncio.run(resolve_immediate_combat(make_ctx(rolls=[2]), create_monster("bandit")))
        assert result.victory
        assert all(tile.monster is None for tile in state.board)

    def test_missing_champion(self, make_ctx, monster_tile):
        with pytest.raises(EntityNotFoundError):
            asyncio.run(resolve_monster_combat(make_ctx(champion_id=9, rolls=[1]), monster_tile))


@pytest.fixture
def duel(state, alice, bob):
    """Both champions on an unclaimed resource tile."""
    alice.champions[0].position = FIELD
    bob.champions[0].position = FIELD
    return state.get_tile(FIELD)


class TestChampionCombat:
    """Tests for champion vs champion."""

    def test_attacker_wins_and_loots(self, make_ctx, alice, bob, duel):
        """Winner gains fame and the only loot; loser goes home without healing."""
        bob.resources[ResourceType.GOLD] = 2
        bob.resources[ResourceType.FOOD] = 0
        ctx = make_ctx(rolls=[3, 1], agents={"Bob": PreferenceAgent({"fight_or_flee": ["fight"]})})
        result = asyncio.run(resolve_champion_combat(ctx, duel))
        assert result.victory
        assert alice.fame == 1
        assert alice.resources[ResourceType.GOLD] == 1
        assert bob.resources[ResourceType.GOLD] == 1
        assert bob.champions[0].position == BOB_HOME

    def test_defender_wins(self, make_ctx, alice, bob, duel):
        alice.resources[ResourceType.ORE] = 1
        ctx = make_ctx(rolls=[1, 3], agents={"Bob": PreferenceAgent({"fight_or_flee": ["fight"]})})
        result = asyncio.run(resolve_champion_combat(ctx, duel))
        assert result.defeat
        assert bob.fame == 1
        assert bob.resources[ResourceType.ORE] == 1
        assert alice.resources[ResourceType.ORE] == 0
        assert alice.champions[0].position == ALICE_HOME

    def test_defender_flees(self, make_ctx, bob, duel):
        ctx = make_ctx(rolls=[3], agents={"Bob": PreferenceAgent({"fight_or_flee": ["flee"]})})
        result = asyncio.run(resolve_champion_combat(ctx, duel))
        assert result.fled
        assert bob.champions[0].position == BOB_HOME

    def test_no_combat_at_trader(self, make_ctx, state, alice, bob):
        trader = Position(1, 3)
        alice.champions[0].position = trader
        bob.champions[0].position = trader
        result = asyncio.run(resolve_champion_combat(make_ctx(), state.get_tile(trader)))
        assert not result.combat_occurred

    def test_no_opponent(self, make_ctx, alice, duel, bob):
        bob.champions[0].position = BOB_HOME
        result = asyncio.run(resolve_champion_combat(make_ctx(), duel))
        assert not result.combat_occurred

    def test_padded_helmet_holder_chooses_loot(self, make_ctx, alice, bob, duel):
        """The defeated helmet holder decides what the winner gets."""
        bob.resources[ResourceType.FOOD] = 1
        bob.resources[ResourceType.GOLD] = 1
        bob.champions[0].items.append(create_trader_item(PADDED_HELMET))
        bob_agent = PreferenceAgent({
            "fight_or_flee": ["fight"],
            "padded_helmet_loot_choice": ["resource_gold"],
        })
        # Alice would take the helmet if she were choosing
        alice_agent = PreferenceAgent({"champion_loot": ["item_*"]})
        ctx = make_ctx(agent=alice_agent, rolls=[3, 1], agents={"Bob": bob_agent})
        asyncio.run(resolve_champion_combat(ctx, duel))
        assert alice.resources[ResourceType.GOLD] == 1
        assert bob.resources[ResourceType.FOOD] == 1
        assert bob.champions[0].has_item(PADDED_HELMET)
        assert ("padded_helmet_loot_choice", "resource_gold") in bob_agent.history

    def test_nothing_to_loot(self, make_ctx, alice, bob, duel):
        ctx = make_ctx(rolls=[3, 1], agents={"Bob": PreferenceAgent({"fight_or_flee": ["fight"]})})
        result = asyncio.run(resolve_champion_combat(ctx, duel))
        assert "nothing to loot" in result.details


class TestDefeat:
    """Tests for defeat handling."""

    def test_padded_helmet_respawn(self, make_ctx, state, alice):
        """Helmet holders come back on a claimed resource tile near home."""
        state.get_tile(FIELD).claimed_by = "Alice"
        champion = alice.champions[0]
        champion.position = ADVENTURE
        champion.items.append(create_trader_item(PADDED_HELMET))
        outcome = asyncio.run(apply_champion_defeat(make_ctx(), alice, champion))
        assert champion.position == FIELD
        assert "respawned" in outcome

    def test_respawn_skips_tiles_with_enemies(self, make_ctx, state, alice, bob):
        state.get_tile(FIELD).claimed_by = "Alice"
        bob.champions[0].position = FIELD
        champion = alice.champions[0]
        champion.items.append(create_trader_item(PADDED_HELMET))
        asyncio.run(apply_champion_defeat(make_ctx(), alice, champion))
        assert champion.position == ALICE_HOME

    def test_healing_choice(self, make_ctx, alice):
        alice.resources[ResourceType.FOOD] = 1
        alice.resources[ResourceType.GOLD] = 1
        agent = PreferenceAgent({"healing_cost": ["gold"]})
        outcome = asyncio.run(pay_healing_cost(make_ctx(agent=agent), alice))
        assert alice.resources[ResourceType.GOLD] == 0
        assert alice.resources[ResourceType.FOOD] == 1
        assert outcome == "paid 1 gold to heal"


class TestDragon:
    """Tests for the dragon encounter."""

    @pytest.fixture
    def at_doomspire(self, alice):
        alice.champions[0].position = DOOMSPIRE
        return alice.champions[0]

    def test_fame_victory_before_fighting(self, make_ctx, state, alice, at_doomspire):
        alice.fame = 10
        ctx = make_ctx()
        result = asyncio.run(resolve_dragon_encounter(ctx, state.get_tile(DOOMSPIRE)))
        assert result.victory
        assert result.victory_type == VictoryType.FAME
        assert not result.combat_occurred
        assert ctx.dice.rolls_used == 0

    def test_defeating_the_dragon(self, make_ctx, state, alice, at_doomspire):
        """Dragon 6 + 1, champion 6 + 1: the tie goes to the champion."""
        alice.might = 6
        result = asyncio.run(resolve_dragon_encounter(make_ctx(rolls=[1, 1]), state.get_tile(DOOMSPIRE)))
        assert result.victory
        assert result.victory_type == VictoryType.COMBAT

    def test_losing_gets_eaten(self, make_ctx, state, alice, at_doomspire):
        at_doomspire.items.append(create_trader_item(SPEAR))
        result = asyncio.run(resolve_dragon_encounter(make_ctx(rolls=[3, 1]), state.get_tile(DOOMSPIRE)))
        assert result.defeat
        assert alice.champions == []

    def test_passive_encounter_can_flee(self, make_ctx, state, alice, at_doomspire):
        alice.fame = 2
        agent = PreferenceAgent({"fight_or_flee": ["flee"]})
        result = asyncio.run(resolve_dragon_encounter(
            make_ctx(agent=agent), state.get_tile(DOOMSPIRE), actively_chosen=False
        ))
        assert result.fled
        assert at_doomspire.position == ALICE_HOME
        assert alice.fame == 1

    def test_not_the_doomspire(self, make_ctx, state, at_doomspire):
        result = asyncio.run(resolve_dragon_encounter(make_ctx(), state.get_tile(FIELD)))
        assert not result.combat_occurred
