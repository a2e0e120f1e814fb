"""
Decision Broker - Parks decision requests until a remote player answers.

The broker:
1. Registers a request when a RemoteAgent needs an answer
2. Lists and describes pending requests for a UI
3. Validates answers and wakes the waiting agent

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Answers may arrive on any thread; agents wait on the event loop.
"""

from __future__ import annotations
from concurrent.futures import Future, InvalidStateError
from dataclasses import dataclass, field
from datetime import datetime, timezone
import asyncio
import logging
import threading
import uuid

from ..engine_core.decision import Decision, DecisionContext
from ..errors import DecisionError, EntityNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class PendingDecision:
    """A request waiting for its player's answer."""
    request_id: str
    player: str
    context: DecisionContext
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    future: Future = field(default_factory=Future)


@dataclass
class DecisionBroker:
    """
    In-memory registry of pending decisions.

    Usage:
        broker = DecisionBroker()

        # Game side (inside a RemoteAgent)
        decision = await broker.wait_for_decision(context)

        # UI side (HTTP handler)
        broker.answer(request_id, "fight", reasoning="Feeling lucky")
    """
    _pending: dict[str, PendingDecision] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def submit(self, context: DecisionContext) -> PendingDecision:
        """Register a request and return its handle."""
        if context.player is None:
            raise DecisionError("Remote decisions need a player name")
        pending = PendingDecision(
            request_id=uuid.uuid4().hex[:12],
            player=context.player,
            context=context,
        )
        with self._lock:
            self._pending[pending.request_id] = pending
        logger.info("Decision %s (%s) waiting for %s", pending.request_id, context.type, pending.player)
        return pending

    async def wait_for_decision(self, context: DecisionContext) -> Decision:
        """Submit context and suspend until it is answered."""
        pending = self.submit(context)
        try:
            return await asyncio.wrap_future(pending.future)
        finally:
            self.discard(pending.request_id)

    def list_pending(self, player: str | None = None) -> list[PendingDecision]:
        with self._lock:
            pending = list(self._pending.values())
        if player is not None:
            pending = [p for p in pending if p.player == player]
        return sorted(pending, key=lambda p: p.created_at)

    def get(self, request_id: str) -> PendingDecision:
        with self._lock:
            pending = self._pending.get(request_id)
        if pending is None:
            raise EntityNotFoundError(f"Decision request {request_id} not found")
        return pending

    def answer(self, request_id: str, choice: str, reasoning: str = "") -> Decision:
        """
        Resolve a pending request with one of its option ids.

        Raises:
            EntityNotFoundError: unknown or already answered request
            DecisionError: choice is not one of the request's options
        """
        pending = self.get(request_id)
        option = pending.context.option(choice)
        if option is None:
            raise DecisionError(
                f"Invalid option {choice!r}; expected one of {pending.context.option_ids}"
            )

        decision = Decision(choice=option, reasoning=reasoning)
        with self._lock:
            if self._pending.pop(request_id, None) is None:
                raise EntityNotFoundError(f"Decision request {request_id} not found")
        try:
            pending.future.set_result(decision)
        except InvalidStateError:
            raise EntityNotFoundError(f"Decision request {request_id} is no longer waiting")
        logger.info("Decision %s answered by %s: %s", request_id, pending.player, choice)
        return decision

    def discard(self, request_id: str) -> None:
        with self._lock:
            self._pending.pop(request_id, None)
