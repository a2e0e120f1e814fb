"""
Reasoning Agent - Decisions made by an Anthropic Claude model.

The model is ADVISORY ONLY: it picks one of the offered option ids. It
never rolls dice or touches state, and an unusable reply is reported as
a DecisionError so the decision protocol falls back to a random choice.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional
import asyncio
import json
import logging
import os
import re
import time

from ..engine_core.decision import Decision, DecisionAgent, DecisionContext
from ..errors import DecisionError
from .prompts import SYSTEM_PROMPT, build_prompt

if TYPE_CHECKING:
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@dataclass
class ReasoningConfig:
    """Configuration for the reasoning agent."""
    model: str = field(default_factory=lambda: os.getenv("DOOMSPIRE_LLM_MODEL", DEFAULT_MODEL))
    max_tokens: int = 1024
    api_key: Optional[str] = None

    # Rate limiting
    max_retries: int = 3
    retry_delay: float = 1.0

    # Include a state summary in every prompt
    include_state: bool = True


def parse_reply(text: str, context: DecisionContext) -> Decision:
    """
    Read {"choice": ..., "reasoning": ...} out of a model reply.

    Surrounding prose and code fences are tolerated.
    """
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise DecisionError(f"No JSON object in reply: {text[:200]!r}")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise DecisionError(f"Malformed JSON in reply: {e}") from e
    if not isinstance(payload, dict) or "choice" not in payload:
        raise DecisionError("Reply has no 'choice' field")

    option = context.option(str(payload["choice"]))
    if option is None:
        raise DecisionError(
            f"Reply chose {payload['choice']!r}, not one of {context.option_ids}"
        )
    return Decision(choice=option, reasoning=str(payload.get("reasoning", "")))


class ReasoningAgent(DecisionAgent):
    """
    Agent backed by the Anthropic Messages API.

    Usage:
        agent = ReasoningAgent()              # reads ANTHROPIC_API_KEY
        agent = ReasoningAgent(client=fake)   # any object with messages.create
    """

    def __init__(self, config: ReasoningConfig | None = None, client: Any = None):
        self.config = config or ReasoningConfig()
        self._client = client
        if client is None:
            self._initialize_client()

    def _initialize_client(self) -> None:
        """Initialize the Anthropic client."""
        try:
            import anthropic

            api_key = self.config.api_key or os.getenv("ANTHROPIC_API_KEY")
            if api_key:
                self._client = anthropic.Anthropic(api_key=api_key)
            else:
                logger.warning(
                    "ANTHROPIC_API_KEY not set. Set the environment variable or pass api_key in config."
                )
        except ImportError:
            logger.warning("anthropic package not installed. Install with: pip install anthropic")
        except Exception as e:
            logger.error(f"Failed to initialize Anthropic client: {e}")

    def is_available(self) -> bool:
        """Check if the Anthropic API is available."""
        return self._client is not None

    def _complete(self, prompt: str) -> str:
        for attempt in range(self.config.max_retries):
            try:
                response = self._client.messages.create(
                    model=self.config.model,
                    max_tokens=self.config.max_tokens,
                    system=SYSTEM_PROMPT,
                    messages=[{"role": "user", "content": prompt}],
                )
                return response.content[0].text if response.content else ""
            except Exception as e:
                logger.warning(f"Anthropic API attempt {attempt + 1} failed: {e}")
                if attempt < self.config.max_retries - 1:
                    time.sleep(self.config.retry_delay * (attempt + 1))

        raise DecisionError("Anthropic request failed after retries")

    async def request_decision(
        self,
        context: DecisionContext,
        state: GameState | None = None,
    ) -> Decision:
        if not self.is_available():
            raise DecisionError("Anthropic client unavailable")

        prompt = build_prompt(context, state if self.config.include_state else None)
        # Blocking client call
        text = await asyncio.to_thread(self._complete, prompt)
        return parse_reply(text, context)

    def get_name(self) -> str:
        return f"ReasoningAgent({self.config.model})"
