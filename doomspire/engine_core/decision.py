"""
Decision Protocol - How player intent enters the engine.

A resolver that needs a player's judgment builds a DecisionContext (a
description plus a closed, non-empty list of options) and awaits a
Decision naming exactly one of those options.

Rules applied uniformly by decide():
- A single option is selected without asking anyone
- With no agent bound, the choice is uniform-random and flagged simulated
- An agent that raises or answers with an unknown option id is logged
  and replaced by a uniform-random choice

DecisionOption, DecisionContext and Decision are pydantic models so they
can cross a process or network boundary as JSON unchanged.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional
import asyncio
import logging

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .dice import DiceSource
    from .state import GameState

logger = logging.getLogger(__name__)


class DecisionOption(BaseModel):
    """One selectable option. id is stable within its context."""
    id: str
    description: str = ""
    data: dict[str, Any] = Field(default_factory=dict)


class DecisionContext(BaseModel):
    """A question put to a single player."""
    type: str = "choice"
    description: str
    player: Optional[str] = None
    options: list[DecisionOption] = Field(min_length=1)

    def option(self, option_id: str) -> DecisionOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    @property
    def option_ids(self) -> list[str]:
        return [option.id for option in self.options]


class Decision(BaseModel):
    """Exactly one chosen option plus optional rationale."""
    choice: DecisionOption
    reasoning: str = ""
    simulated: bool = False

    @property
    def choice_id(self) -> str:
        return self.choice.id


class DecisionAgent(ABC):
    """
    Abstract base class for anything that answers decisions.

    Human interfaces, scripted bots and reasoning-model bots all
    implement this one method and are interchangeable per player.
    """

    @abstractmethod
    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        """
        Choose one option from the context.

        Args:
            context: The question and its options
            state: Current game state, for agents that look at it

        Returns:
            Decision naming one of context.options
        """
        pass

    def get_name(self) -> str:
        """Get the agent's name/identifier."""
        return self.__class__.__name__


AgentResolver = Callable[[str], Optional[DecisionAgent]]


def simulated_decision(context: DecisionContext, dice: DiceSource, reason: str) -> Decision:
    """Uniform-random pick over the context's options."""
    return Decision(choice=dice.choice(context.options), reasoning=reason, simulated=True)


async def decide(
    context: DecisionContext,
    agent: DecisionAgent | None,
    dice: DiceSource,
    state: GameState | None = None,
) -> Decision:
    """
    Obtain exactly one option for context.

    Never raises because of the agent: failures degrade to a random
    choice so the turn always resolves.
    """
    if len(context.options) == 1:
        return Decision(choice=context.options[0], reasoning="Only one option available")

    if agent is None:
        return simulated_decision(context, dice, "No agent available, chosen randomly")

    try:
        answer = await agent.request_decision(context, state)
    except Exception as e:
        logger.warning(
            "Agent %s failed on %r (%s), choosing randomly", agent.get_name(), context.type, e
        )
        return simulated_decision(context, dice, f"Agent error: {e}")

    chosen = context.option(answer.choice.id)
    if chosen is None:
        logger.warning(
            "Agent %s picked unknown option %r for %r, choosing randomly",
            agent.get_name(), answer.choice.id, context.type,
        )
        return simulated_decision(context, dice, f"Invalid option {answer.choice.id!r}")

    return Decision(choice=chosen, reasoning=answer.reasoning, simulated=answer.simulated)


async def decide_all(
    requests: list[tuple[DecisionContext, DecisionAgent | None]],
    dice: DiceSource,
    state: GameState | None = None,
) -> list[Decision]:
    """
    Ask independent players at the same time.

    Results come back in request order once every decision is in.
    """
    return list(await asyncio.gather(*(
        decide(context, agent, dice, state) for context, agent in requests
    )))
