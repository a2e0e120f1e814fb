"""
Dice - The sole source of randomness for the engine.

Every combat, flee and event resolution draws fresh values from an
injected DiceSource, so tests can substitute deterministic sequences.
A D3 is a six-sided die with faces 1,1,2,2,3,3.
"""

from __future__ import annotations
from collections import deque
from typing import Iterable, Protocol, Sequence, TypeVar
import random

T = TypeVar("T")

D3_FACES = (1, 1, 2, 2, 3, 3)


class DiceSource(Protocol):
    """Uniform 1..3 rolls plus uniform picks from a sequence."""

    def roll_d3(self) -> int:
        ...

    def choice(self, options: Sequence[T]) -> T:
        ...


class RandomDice:
    """
    Seedable dice backed by random.Random.

    Used for:
    - Live games
    - Uniform-random fallback when no agent can decide
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def roll_d3(self) -> int:
        return self.rng.choice(D3_FACES)

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return self.rng.choice(options)


class ScriptedDice:
    """
    Deterministic dice for tests.

    rolls are consumed in order by roll_d3; picks are indices consumed
    by choice (index 0 once picks run out).
    """

    def __init__(self, rolls: Iterable[int] = (), picks: Iterable[int] = ()):
        self.rolls = deque(rolls)
        self.picks = deque(picks)
        self.rolls_used = 0

    def roll_d3(self) -> int:
        if not self.rolls:
            raise RuntimeError("ScriptedDice ran out of rolls")
        roll = self.rolls.popleft()
        if roll not in (1, 2, 3):
            raise ValueError(f"Scripted roll {roll} is not a D3 face")
        self.rolls_used += 1
        return roll

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        index = self.picks.popleft() if self.picks else 0
        return options[index % len(options)]
