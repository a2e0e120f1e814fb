"""
Combat Resolver - Pure battle arithmetic.

No state is touched here. Each function takes might values and a dice
source and returns the rolls and totals so callers can log and apply
the outcome.

- Champion vs champion: both roll, ties reroll until unequal
- Champion vs monster: one roll, win iff total >= monster might
- Champion vs dragon: same threshold, dragon might drawn once per encounter
"""

from __future__ import annotations
from dataclasses import dataclass

from .dice import DiceSource


@dataclass(frozen=True)
class ChampionBattleResult:
    """Outcome of a champion duel. Rolls are listed per attempt."""
    attacker_wins: bool
    attacker_rolls: tuple[int, ...]
    defender_rolls: tuple[int, ...]
    attacker_total: int
    defender_total: int

    @property
    def roll_count(self) -> int:
        return len(self.attacker_rolls)

    @property
    def ties(self) -> int:
        return self.roll_count - 1


@dataclass(frozen=True)
class MonsterBattleResult:
    champion_wins: bool
    roll: int
    champion_total: int
    monster_might: int


@dataclass(frozen=True)
class DragonBattleResult:
    champion_wins: bool
    roll: int
    champion_total: int
    dragon_roll: int
    dragon_might: int


def resolve_champion_battle(
    attacker_might: int,
    defender_might: int,
    dice: DiceSource,
) -> ChampionBattleResult:
    """
    Roll both sides until the totals differ.

    Terminates almost surely; a scripted dice source that keeps
    producing ties will eventually run out of rolls.
    """
    attacker_rolls: list[int] = []
    defender_rolls: list[int] = []

    while True:
        attacker_roll = dice.roll_d3()
        defender_roll = dice.roll_d3()
        attacker_rolls.append(attacker_roll)
        defender_rolls.append(defender_roll)

        attacker_total = attacker_might + attacker_roll
        defender_total = defender_might + defender_roll
        if attacker_total != defender_total:
            break

    return ChampionBattleResult(
        attacker_wins=attacker_total > defender_total,
        attacker_rolls=tuple(attacker_rolls),
        defender_rolls=tuple(defender_rolls),
        attacker_total=attacker_total,
        defender_total=defender_total,
    )


def resolve_monster_battle(
    champion_might: int,
    monster_might: int,
    dice: DiceSource,
) -> MonsterBattleResult:
    """Single roll; a total equal to the monster's might is a win."""
    roll = dice.roll_d3()
    total = champion_might + roll
    return MonsterBattleResult(
        champion_wins=total >= monster_might,
        roll=roll,
        champion_total=total,
        monster_might=monster_might,
    )


class DragonEncounter:
    """
    One encounter with the dragon.

    The dragon's might (base + one D3) is drawn when the encounter is
    created and reused by every fight() call within it.
    """

    def __init__(self, dice: DiceSource, base_might: int = 6):
        self.dice = dice
        self.base_might = base_might
        self.dragon_roll = dice.roll_d3()

    @property
    def might(self) -> int:
        return self.base_might + self.dragon_roll

    def fight(self, champion_might: int) -> DragonBattleResult:
        roll = self.dice.roll_d3()
        total = champion_might + roll
        return DragonBattleResult(
            champion_wins=total >= self.might,
            roll=roll,
            champion_total=total,
            dragon_roll=self.dragon_roll,
            dragon_might=self.might,
        )


def resolve_dragon_battle(
    champion_might: int,
    dice: DiceSource,
    base_might: int = 6,
) -> DragonBattleResult:
    """Draw the dragon's might and fight it once."""
    return DragonEncounter(dice, base_might).fight(champion_might)
