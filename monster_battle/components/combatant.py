"""
Combatant component - a monster on the other side of the battle.
"""

from __future__ import annotations

import random

from pydantic import Field, field_validator

from battlekit.core.component import Component
from battlekit.display.surface import CombatantView


class Combatant(Component):
    """
    An opposing monster.

    Health is stored raw: damage is subtracted unconditionally and may
    push it below zero. Anything deciding life or death must go through
    ``is_alive`` rather than reading ``health``.

    Attributes:
        name: Display label
        health: Current raw health (may be negative)
        max_health: Starting health, used for health bars
        damage: Attack strength, rounded to two decimals
        speed: 1-10, shown but not used for turn order
        special: Display-only ability label
    """
    name: str = "Monster"
    health: int = 50
    max_health: int = 0
    damage: float = Field(default=10.0, ge=0)
    speed: int = 1
    special: str = ""

    @field_validator("damage")
    @classmethod
    def _round_damage(cls, value: float) -> float:
        return round(value, 2)

    def model_post_init(self, __context) -> None:
        """Default max_health to the starting health."""
        if self.max_health <= 0:
            self.max_health = max(self.health, 1)

    @property
    def is_alive(self) -> bool:
        """Alive while raw health is above zero."""
        return self.health > 0

    def apply_damage(self, amount: int) -> None:
        """Subtract damage. No floor."""
        self.health -= amount

    def to_view(self) -> CombatantView:
        """Immutable snapshot for the display."""
        return CombatantView(
            name=self.name,
            health=self.health,
            max_health=self.max_health,
            damage=self.damage,
            speed=self.speed,
            special=self.special,
        )


def roll_combatant(
    rng: random.Random,
    name: str = "Monster",
    health_range: tuple[int, int] = (21, 100),
    damage_range: tuple[float, float] = (10.0, 51.0),
    speed_range: tuple[int, int] = (1, 10),
    special: str = "",
) -> Combatant:
    """
    Create a combatant with random stats.

    Args:
        rng: Random source
        name: Display label
        health_range: Inclusive starting health bounds
        damage_range: Damage bounds
        speed_range: Inclusive speed bounds
        special: Optional ability label

    Returns:
        A fresh, living combatant
    """
    health = rng.randint(*health_range)
    return Combatant(
        name=name,
        health=health,
        max_health=health,
        damage=rng.uniform(*damage_range),
        speed=rng.randint(*speed_range),
        special=special,
    )
