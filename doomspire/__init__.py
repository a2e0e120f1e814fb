"""
Doomspire - Rule Resolution Engine

Resolves the consequences of turn actions in a four-player dice-driven
territory game. The engine provides:
- Combat resolution (champions, monsters, the dragon)
- Flee handling and item-effect interceptors
- Event card handlers
- Building and trading
- Victory evaluation

Every point of player judgment is delegated to a pluggable DecisionAgent.
"""

__version__ = "0.1.0"
