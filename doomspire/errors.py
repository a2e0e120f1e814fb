"""
Exceptions raised by the engine.

Rule violations (unaffordable builds, full inventories) are never raised;
they come back as failure results. Exceptions are reserved for
programming errors, bad configuration and unusable agent answers.
"""


class DoomspireError(Exception):
    """Base class for engine errors."""


class ConfigError(DoomspireError):
    """Invalid configuration value."""


class EntityNotFoundError(DoomspireError):
    """A player, champion or tile could not be found."""


class DecisionError(DoomspireError):
    """An agent could not produce a usable decision."""
