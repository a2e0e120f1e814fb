"""
Resolution Context - Everything a resolver needs, passed explicitly.

Bundles the shared state, the acting player and their agent, the log
sink, the dice and an optional resolver for other players' agents.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..config import GameSettings, DEFAULT_SETTINGS
from ..errors import EntityNotFoundError
from .decision import AgentResolver, Decision, DecisionAgent, DecisionContext, decide
from .dice import DiceSource, RandomDice
from .log_sink import LogSink, null_sink
from .state import Champion, GameState, Player


@dataclass
class ResolutionContext:
    """
    Context for resolving one player action.

    champion_id names the champion the action concerns (events drawn on
    a tile, combat), when there is one.
    """
    state: GameState
    player: Player
    agent: DecisionAgent | None = None
    log: LogSink = null_sink
    dice: DiceSource | None = None
    agent_resolver: AgentResolver | None = None
    settings: GameSettings = DEFAULT_SETTINGS
    champion_id: int | None = None

    def __post_init__(self):
        if self.dice is None:
            self.dice = RandomDice()

    @property
    def champion(self) -> Champion | None:
        if self.champion_id is None:
            return None
        return self.player.get_champion(self.champion_id)

    def require_champion(self) -> Champion:
        champion = self.champion
        if champion is None:
            raise EntityNotFoundError(
                f"Champion {self.champion_id} not found for player {self.player.name}"
            )
        return champion

    def agent_for(self, player_name: str) -> DecisionAgent | None:
        """The agent bound to player_name, if one can be found."""
        if player_name == self.player.name:
            return self.agent
        if self.agent_resolver is None:
            return None
        return self.agent_resolver(player_name)

    async def decide(self, context: DecisionContext, player_name: str | None = None) -> Decision:
        """Ask player_name (default: the acting player) via the decision protocol."""
        name = player_name or self.player.name
        if context.player is None:
            context = context.model_copy(update={"player": name})
        return await decide(context, self.agent_for(name), self.dice, self.state)

    def for_player(self, player: Player, champion_id: int | None = None) -> ResolutionContext:
        """A context acting on behalf of another player."""
        return ResolutionContext(
            state=self.state,
            player=player,
            agent=self.agent_for(player.name),
            log=self.log,
            dice=self.dice,
            agent_resolver=self.agent_resolver,
            settings=self.settings,
            champion_id=champion_id,
        )
