"""
Component base class for battle data.

Components are small pydantic models holding game state (a combatant's
health, the player's vitals). Validation on assignment keeps field types
honest while the engine mutates them between turns.

Usage:
    class Vitals(Component):
        current: int
        maximum: int
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Components use Pydantic for:
    - Automatic validation
    - JSON serialization
    - Type hints
    - Default values
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )
