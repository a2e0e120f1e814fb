"""
Tests for decision agents.

Tests:
- Scripted agents
- Callback and remote human agents
- The reasoning agent against a fake Anthropic client
"""

import asyncio
from types import SimpleNamespace

import pytest

from ..agents import (
    CallbackAgent,
    FirstOptionAgent,
    PreferenceAgent,
    RandomAgent,
    ReasoningAgent,
    ReasoningConfig,
    RemoteAgent,
    parse_reply,
)
from ..agents.prompts import build_prompt, describe_state
from ..api.service import DecisionBroker
from ..engine_core.decision import Decision, DecisionContext, DecisionOption, decide
from ..engine_core.dice import ScriptedDice
from ..errors import DecisionError


def fight_or_flee(player=None) -> DecisionContext:
    return DecisionContext(
        type="fight_or_flee",
        description="A bandit blocks the road.",
        player=player,
        options=[
            DecisionOption(id="fight", description="Fight"),
            DecisionOption(id="flee", description="Flee"),
        ],
    )


class TestScriptedAgents:
    """Tests for scripted agents."""

    def test_first_option(self):
        decision = asyncio.run(FirstOptionAgent().request_decision(fight_or_flee()))
        assert decision.choice_id == "fight"

    def test_random_agent_is_seeded(self):
        """Same seed, same sequence."""
        picks = []
        for _ in range(2):
            agent = RandomAgent(seed=7)
            picks.append([
                asyncio.run(agent.request_decision(fight_or_flee())).choice_id for _ in range(5)
            ])
        assert picks[0] == picks[1]
        assert set(picks[0]) <= {"fight", "flee"}

    def test_preference_by_type(self):
        agent = PreferenceAgent({"fight_or_flee": ["flee"]})
        assert asyncio.run(agent.request_decision(fight_or_flee())).choice_id == "flee"
        assert agent.history == [("fight_or_flee", "flee")]

    def test_wildcard_type_and_prefix(self):
        agent = PreferenceAgent({"*": ["fl*"]})
        assert asyncio.run(agent.request_decision(fight_or_flee())).choice_id == "flee"

    def test_preference_falls_back_to_first(self):
        agent = PreferenceAgent({"other": ["flee"]})
        assert asyncio.run(agent.request_decision(fight_or_flee())).choice_id == "fight"

    def test_agent_name(self):
        assert FirstOptionAgent().get_name() == "FirstOptionAgent"


class TestCallbackAgent:
    """Tests for in-process human agents."""

    def test_sync_callback(self):
        agent = CallbackAgent(lambda context, state: "flee")
        assert asyncio.run(agent.request_decision(fight_or_flee())).choice_id == "flee"

    def test_async_callback_with_reasoning(self):
        async def ask(context, state):
            return "fight", "I am strong"

        decision = asyncio.run(CallbackAgent(ask).request_decision(fight_or_flee()))
        assert decision.choice_id == "fight"
        assert decision.reasoning == "I am strong"

    def test_unknown_id_raises(self):
        agent = CallbackAgent(lambda context, state: "dance")
        with pytest.raises(DecisionError):
            asyncio.run(agent.request_decision(fight_or_flee()))

    def test_unknown_id_falls_back_in_decide(self):
        agent = CallbackAgent(lambda context, state: "dance", name="terminal")
        decision = asyncio.run(decide(fight_or_flee(), agent, ScriptedDice(picks=[1])))
        assert decision.choice_id == "flee"
        assert decision.simulated

    def test_name(self):
        assert CallbackAgent(lambda c, s: "fight", name="terminal").get_name() == "terminal"


class TestRemoteAgent:
    """Tests for decisions answered through the broker."""

    def test_answer_resumes_agent(self):
        broker = DecisionBroker()
        agent = RemoteAgent("Alice", broker)

        async def scenario():
            task = asyncio.create_task(agent.request_decision(fight_or_flee()))
            while not broker.list_pending("Alice"):
                await asyncio.sleep(0)
            pending = broker.list_pending("Alice")[0]
            assert pending.context.player == "Alice"
            broker.answer(pending.request_id, "flee", reasoning="too strong")
            return await task

        decision = asyncio.run(scenario())
        assert decision.choice_id == "flee"
        assert decision.reasoning == "too strong"
        assert broker.list_pending() == []

    def test_cancelled_wait_is_discarded(self):
        broker = DecisionBroker()
        agent = RemoteAgent("Bob", broker)

        async def scenario():
            task = asyncio.create_task(agent.request_decision(fight_or_flee()))
            while not broker.list_pending():
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        assert broker.list_pending() == []


class FakeMessages:
    """Stands in for client.messages; replays canned replies or errors."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(text=reply)])


def fake_client(*replies):
    return SimpleNamespace(messages=FakeMessages(replies))


class TestReasoningAgent:
    """Tests for the Anthropic-backed agent."""

    def test_reply_is_parsed(self):
        client = fake_client('{"choice": "flee", "reasoning": "outmatched"}')
        agent = ReasoningAgent(ReasoningConfig(model="test-model"), client=client)
        decision = asyncio.run(agent.request_decision(fight_or_flee()))
        assert decision.choice_id == "flee"
        assert decision.reasoning == "outmatched"
        call = client.messages.calls[0]
        assert call["model"] == "test-model"
        assert "fight_or_flee" in call["messages"][0]["content"]

    def test_retries_then_succeeds(self):
        client = fake_client(RuntimeError("overloaded"), '{"choice": "fight"}')
        agent = ReasoningAgent(ReasoningConfig(retry_delay=0), client=client)
        assert asyncio.run(agent.request_decision(fight_or_flee())).choice_id == "fight"
        assert len(client.messages.calls) == 2

    def test_gives_up_after_retries(self):
        client = fake_client(*[RuntimeError("down")] * 3)
        agent = ReasoningAgent(ReasoningConfig(retry_delay=0), client=client)
        with pytest.raises(DecisionError):
            asyncio.run(agent.request_decision(fight_or_flee()))

    def test_unavailable_without_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        agent = ReasoningAgent()
        assert not agent.is_available()
        with pytest.raises(DecisionError):
            asyncio.run(agent.request_decision(fight_or_flee()))

    def test_bad_reply_falls_back(self):
        agent = ReasoningAgent(client=fake_client("I would rather dance."))
        decision = asyncio.run(decide(fight_or_flee(), agent, ScriptedDice()))
        assert decision.simulated
        assert decision.choice_id == "fight"

    def test_prompt_includes_state(self, state):
        prompt = build_prompt(fight_or_flee(player="Alice"), state)
        assert "Alice (you)" in prompt
        assert "- flee: Flee" in prompt


class TestParseReply:
    """Tests for parse_reply()."""

    def test_prose_and_fences_tolerated(self):
        text = 'Sure.\n```json\n{"choice": "fight", "reasoning": "why not"}\n```'
        decision = parse_reply(text, fight_or_flee())
        assert decision == Decision(choice=DecisionOption(id="fight", description="Fight"), reasoning="why not")

    @pytest.mark.parametrize("text", [
        "no json here",
        '{"choice": ',
        '{"reasoning": "forgot the choice"}',
        '{"choice": "dance"}',
    ])
    def test_unusable_replies(self, text):
        with pytest.raises(DecisionError):
            parse_reply(text, fight_or_flee())


class TestDescribeState:
    def test_asking_player_first(self, state):
        lines = describe_state(state, "Bob").splitlines()
        assert lines[1].startswith("- Bob (you)")
