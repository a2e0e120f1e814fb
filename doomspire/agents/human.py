"""
Human Agents - Decisions made by people.

- CallbackAgent: an in-process interface (terminal prompt, GUI) answers
  through a plain function or coroutine
- RemoteAgent: the question is parked in a DecisionBroker and answered
  over the HTTP API
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Awaitable, Callable, Union
import inspect

from ..engine_core.decision import Decision, DecisionAgent, DecisionContext
from ..errors import DecisionError

if TYPE_CHECKING:
    from ..api.service import DecisionBroker
    from ..engine_core.state import GameState

# The callback returns an option id, a (option id, reasoning) pair or a Decision
CallbackResult = Union[str, tuple[str, str], Decision]
DecisionCallback = Callable[
    [DecisionContext, "GameState | None"],
    Union[CallbackResult, Awaitable[CallbackResult]],
]


class CallbackAgent(DecisionAgent):
    """Adapts a sync or async callback to the agent interface."""

    def __init__(self, callback: DecisionCallback, name: str | None = None):
        self.callback = callback
        self.name = name

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        answer = self.callback(context, state)
        if inspect.isawaitable(answer):
            answer = await answer

        if isinstance(answer, Decision):
            return answer
        reasoning = ""
        if isinstance(answer, tuple):
            answer, reasoning = answer
        option = context.option(answer)
        if option is None:
            raise DecisionError(f"Callback chose unknown option {answer!r}")
        return Decision(choice=option, reasoning=reasoning)

    def get_name(self) -> str:
        return self.name or super().get_name()


class RemoteAgent(DecisionAgent):
    """
    A seat played through the HTTP API.

    Each request is tagged with the player's name and waits in the
    broker until someone posts an answer.
    """

    def __init__(self, player: str, broker: DecisionBroker):
        self.player = player
        self.broker = broker

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        if context.player != self.player:
            context = context.model_copy(update={"player": self.player})
        return await self.broker.wait_for_decision(context)

    def get_name(self) -> str:
        return f"RemoteAgent({self.player})"
