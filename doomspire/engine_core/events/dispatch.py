"""Event card dispatch keyed by card id."""

from __future__ import annotations
from typing import Awaitable, Callable
import logging

from ...content.event_cards import get_event_card
from ...errors import EntityNotFoundError
from ..context import ResolutionContext
from ..log_sink import LogCategory
from .result import EventCardResult
from .tier1 import (
    handle_hungry_pests,
    handle_landslide,
    handle_market_day,
    handle_temple_trial,
    handle_thug_ambush,
)
from .tier2 import (
    handle_blessing_of_the_lonesome,
    handle_dragon_hunger,
    handle_druid_rampage,
    handle_riches_for_all,
    handle_sudden_storm,
)
from .tier3 import (
    handle_curse_of_the_earth,
    handle_dragon_raid,
    handle_sea_monsters,
    handle_thieving_crows,
)

logger = logging.getLogger(__name__)

EventHandler = Callable[[ResolutionContext], Awaitable[EventCardResult]]

EVENT_HANDLERS: dict[str, EventHandler] = {
    "hungry-pests": handle_hungry_pests,
    "market-day": handle_market_day,
    "thug-ambush": handle_thug_ambush,
    "landslide": handle_landslide,
    "temple-trial": handle_temple_trial,
    "sudden-storm": handle_sudden_storm,
    "druid-rampage": handle_druid_rampage,
    "dragon-hunger": handle_dragon_hunger,
    "blessing-of-the-lonesome": handle_blessing_of_the_lonesome,
    "riches-for-all": handle_riches_for_all,
    "curse-of-the-earth": handle_curse_of_the_earth,
    "thieving-crows": handle_thieving_crows,
    "dragon-raid": handle_dragon_raid,
    "sea-monsters": handle_sea_monsters,
}


async def resolve_event_card(card_id: str, ctx: ResolutionContext) -> EventCardResult:
    """
    Resolve one drawn event card for ctx.player.

    Unknown and disabled cards, and cards whose champion or player
    cannot be found, come back as failed results instead of raising.
    """
    card = get_event_card(card_id)
    handler = EVENT_HANDLERS.get(card_id)
    if card is None or card.disabled or handler is None:
        ctx.log(LogCategory.EVENT, f"Event card {card_id} not implemented")
        return EventCardResult.failure(f"Event card {card_id} not implemented")

    ctx.log(LogCategory.EVENT, f"{ctx.player.name} draws event card: {card.name}")
    try:
        return await handler(ctx)
    except EntityNotFoundError as e:
        logger.warning("Event card %s could not be resolved: %s", card_id, e)
        ctx.log(LogCategory.SYSTEM, f"Event card {card.name} could not be resolved: {e}")
        return EventCardResult.failure(str(e))
