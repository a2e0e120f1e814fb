"""
Game Settings - Rule constants and environment overrides.

All numeric rules live here so resolvers never hard-code them:
- Dragon and might limits
- Victory thresholds
- Penalties and awards
- Building, unit and usage costs

Resolvers receive a GameSettings instance explicitly and default to
DEFAULT_SETTINGS. Integer fields can be overridden with environment
variables named DOOMSPIRE_<FIELD_NAME_UPPERCASE>.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
import logging
import os

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOOMSPIRE_"


def _cost(**amounts: int) -> dict[str, int]:
    return dict(amounts)


@dataclass(frozen=True)
class GameSettings:
    """Numeric rule constants."""
    dragon_base_might: int = 6
    max_might: int = 10

    victory_fame_threshold: int = 10
    victory_gold_threshold: int = 10
    victory_starred_tiles_threshold: int = 3

    defeat_fame_penalty: int = 1
    champion_vs_champion_fame_award: int = 1

    max_champions: int = 3
    max_boats: int = 2
    base_item_slots: int = 2
    backpack_extra_slots: int = 2

    # Padded helmet respawn band (steps from home, inclusive)
    padded_helmet_min_distance: int = 1
    padded_helmet_max_distance: int = 3

    chapel_fame: int = 3
    monastery_fame: int = 5
    market_sell_ratio: int = 2

    # Costs keyed by resource name (food, wood, ore, gold)
    blacksmith_cost: dict[str, int] = field(default_factory=lambda: _cost(food=2, ore=2))
    market_cost: dict[str, int] = field(default_factory=lambda: _cost(food=2, wood=2))
    fletcher_cost: dict[str, int] = field(
        default_factory=lambda: _cost(food=1, wood=1, ore=1, gold=1)
    )
    chapel_cost: dict[str, int] = field(default_factory=lambda: _cost(wood=3, gold=4))
    monastery_cost: dict[str, int] = field(default_factory=lambda: _cost(wood=4, gold=5, ore=2))
    boat_cost: dict[str, int] = field(default_factory=lambda: _cost(wood=2, gold=2))
    # Index 0 is the second champion, index 1 the third
    champion_costs: tuple[dict[str, int], ...] = field(
        default_factory=lambda: (
            _cost(food=3, gold=3, ore=1),
            _cost(food=6, gold=6, ore=3),
        )
    )

    blacksmith_usage_cost: dict[str, int] = field(default_factory=lambda: _cost(gold=1, ore=2))
    fletcher_usage_cost: dict[str, int] = field(default_factory=lambda: _cost(wood=3, ore=1))

    def with_overrides(self, **overrides) -> GameSettings:
        """Return a copy with some fields replaced."""
        return replace(self, **overrides)


DEFAULT_SETTINGS = GameSettings()


def load_settings(environ: dict[str, str] | None = None) -> GameSettings:
    """
    Build settings from the environment.

    Only integer fields are overridable. A malformed value raises
    ConfigError rather than silently falling back to the default.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        GameSettings with any overrides applied
    """
    source = os.environ if environ is None else environ
    overrides: dict[str, int] = {}

    for f in fields(GameSettings):
        if f.type not in ("int", int):
            continue
        key = ENV_PREFIX + f.name.upper()
        raw = source.get(key)
        if raw is None:
            continue
        try:
            overrides[f.name] = int(raw)
        except ValueError:
            raise ConfigError(f"{key} must be an integer, got {raw!r}")
        logger.debug("Setting %s overridden from environment: %s", f.name, raw)

    return DEFAULT_SETTINGS.with_overrides(**overrides) if overrides else DEFAULT_SETTINGS
