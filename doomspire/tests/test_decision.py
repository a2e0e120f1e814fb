"""
Tests for the decision protocol.

Tests:
- Single options never reach an agent
- Missing, failing and misbehaving agents fall back to a random pick
- Independent decisions run concurrently
- Records round-trip through JSON
"""

import asyncio

import pytest
from pydantic import ValidationError

from ..agents import FirstOptionAgent
from ..engine_core.decision import (
    Decision,
    DecisionAgent,
    DecisionContext,
    DecisionOption,
    decide,
    decide_all,
)
from ..engine_core.dice import ScriptedDice


def make_context(*ids: str, type: str = "choice") -> DecisionContext:
    return DecisionContext(
        type=type,
        description="Pick one",
        options=[DecisionOption(id=i, description=i.title()) for i in ids],
    )


class CountingAgent(DecisionAgent):
    """Picks a fixed id and counts how often it was asked."""

    def __init__(self, choice: str):
        self.choice = choice
        self.calls = 0

    async def request_decision(self, context, state=None):
        self.calls += 1
        return Decision(choice=DecisionOption(id=self.choice), reasoning="fixed")


class FailingAgent(DecisionAgent):
    async def request_decision(self, context, state=None):
        raise RuntimeError("boom")


class SlowAgent(DecisionAgent):
    """Records when it starts and finishes so overlap can be checked."""

    def __init__(self, log: list, name: str):
        self.log = log
        self.name = name

    async def request_decision(self, context, state=None):
        self.log.append(f"start {self.name}")
        await asyncio.sleep(0.01)
        self.log.append(f"end {self.name}")
        return Decision(choice=context.options[-1])


class TestDecide:
    """Tests for decide()."""

    def test_single_option_is_automatic(self):
        """The agent is never consulted for a single option."""
        agent = CountingAgent("only")
        decision = asyncio.run(decide(make_context("only"), agent, ScriptedDice()))
        assert decision.choice_id == "only"
        assert agent.calls == 0
        assert not decision.simulated

    def test_agent_choice_is_used(self):
        agent = CountingAgent("b")
        decision = asyncio.run(decide(make_context("a", "b"), agent, ScriptedDice()))
        assert decision.choice_id == "b"
        assert decision.reasoning == "fixed"
        assert agent.calls == 1

    def test_returned_option_is_the_offered_one(self):
        """The answer carries the offered option's description and data."""
        agent = CountingAgent("b")
        decision = asyncio.run(decide(make_context("a", "b"), agent, ScriptedDice()))
        assert decision.choice.description == "B"

    def test_no_agent_is_simulated(self):
        """No agent: random pick flagged as simulated."""
        decision = asyncio.run(decide(make_context("a", "b", "c"), None, ScriptedDice(picks=[1])))
        assert decision.choice_id == "b"
        assert decision.simulated

    def test_agent_error_falls_back(self):
        decision = asyncio.run(decide(make_context("a", "b"), FailingAgent(), ScriptedDice(picks=[1])))
        assert decision.choice_id == "b"
        assert decision.simulated
        assert "boom" in decision.reasoning

    def test_unknown_option_falls_back(self):
        """An id outside the option list is never applied."""
        decision = asyncio.run(decide(make_context("a", "b"), CountingAgent("zzz"), ScriptedDice()))
        assert decision.choice_id == "a"
        assert decision.simulated

    def test_empty_options_rejected(self):
        """A context must offer at least one option."""
        with pytest.raises(ValidationError):
            DecisionContext(description="Nothing to pick", options=[])


class TestDecideAll:
    """Tests for concurrent decisions."""

    def test_decisions_overlap(self):
        """Both agents start before either finishes."""
        log: list = []
        requests = [
            (make_context("a", "b"), SlowAgent(log, "one")),
            (make_context("c", "d"), SlowAgent(log, "two")),
        ]
        decisions = asyncio.run(decide_all(requests, ScriptedDice()))
        assert [d.choice_id for d in decisions] == ["b", "d"]
        assert log[:2] == ["start one", "start two"]

    def test_results_in_request_order(self):
        requests = [
            (make_context("x", "y"), FirstOptionAgent()),
            (make_context("only"), None),
        ]
        decisions = asyncio.run(decide_all(requests, ScriptedDice()))
        assert [d.choice_id for d in decisions] == ["x", "only"]

    def test_no_requests(self):
        assert asyncio.run(decide_all([], ScriptedDice())) == []


class TestSerialization:
    """Decision records survive a JSON round trip."""

    def test_context_round_trip(self):
        context = make_context("fight", "flee", type="fight_or_flee")
        context.options[0].data["row"] = 2
        restored = DecisionContext.model_validate_json(context.model_dump_json())
        assert restored == context

    def test_decision_round_trip(self):
        decision = Decision(choice=DecisionOption(id="flee", data={"x": 1}), reasoning="scared")
        assert Decision.model_validate_json(decision.model_dump_json()) == decision
