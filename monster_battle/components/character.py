"""
Player components - vitals, stats and character builds.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from pydantic import Field

from battlekit.core.component import Component


class CharacterClass(Enum):
    """Character builds, in action-slot order."""
    FIGHTER = 0
    TANK = 1
    HEALER = 2
    NINJA = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, code: int) -> CharacterClass:
        """Map an action code (0-3) to a build."""
        return cls(code)


class PlayerVitals(Component):
    """
    Player health.

    ``current`` is clamped to ``[0, maximum]`` by every mutation, so it
    is never negative and never above the maximum.
    """
    current: int = 100
    maximum: int = Field(default=100, ge=1)

    def model_post_init(self, __context) -> None:
        self.current = _clamp(self.current, 0, self.maximum)

    @property
    def is_defeated(self) -> bool:
        return self.current <= 0

    @property
    def percent(self) -> float:
        return self.current / self.maximum

    def set_current(self, value: int) -> None:
        self.current = _clamp(value, 0, self.maximum)

    def set_maximum(self, maximum: int) -> None:
        """Change max health; current is re-clamped."""
        self.maximum = max(1, maximum)
        self.current = _clamp(self.current, 0, self.maximum)

    def heal(self, amount: int) -> int:
        """
        Heal health.

        Args:
            amount: Amount to heal (negative or oversized amounts are clamped)

        Returns:
            Actual change in health
        """
        old = self.current
        self.set_current(self.current + amount)
        return self.current - old

    def take_damage(self, amount: int) -> int:
        """
        Take damage.

        Returns:
            Actual health lost
        """
        old = self.current
        self.set_current(self.current - max(0, amount))
        return old - self.current


class PlayerStats(Component):
    """
    Player combat stats, shaped by the chosen build.

    Attributes:
        damage: Attack stat; an attack deals 15% of it, plus up to 100% more
        shield: Percent of incoming damage blocked while defending
        heal: Heal stat; a heal restores between half of it and all of it
        speed: Shown on the build screen
    """
    damage: int = Field(default=200, ge=0)
    shield: int = Field(default=50, ge=0)
    heal: int = Field(default=50, ge=0)
    speed: int = Field(default=10, ge=0)
    character_class: CharacterClass | None = None


@dataclass
class BuildRule:
    """Random penalties a build applies to the base stats."""
    description: str
    # stat name -> inclusive (low, high) reduction
    penalties: dict[str, tuple[int, int]] = field(default_factory=dict)


BUILD_RULES: dict[CharacterClass, BuildRule] = {
    CharacterClass.FIGHTER: BuildRule(
        "High damage, but weak defense.",
        {"shield": (6, 50), "heal": (5, 50)},
    ),
    CharacterClass.TANK: BuildRule(
        "Tough defense, but slow attacks.",
        {"speed": (1, 9), "damage": (100, 199)},
    ),
    CharacterClass.HEALER: BuildRule(
        "Great recovery, but fragile.",
        {"damage": (5, 30), "shield": (5, 50)},
    ),
    CharacterClass.NINJA: BuildRule(
        "Fast and deadly, but risky.",
        {"heal": (5, 50), "max_health": (5, 25)},
    ),
}


@dataclass
class CharacterBuild:
    """Outcome of picking a build."""
    character_class: CharacterClass
    stats: PlayerStats
    max_health: int

    @property
    def message(self) -> str:
        rule = BUILD_RULES[self.character_class]
        return f"You chose {self.character_class.label}! {rule.description}"


def roll_build(
    character_class: CharacterClass,
    rng: random.Random,
    base: PlayerStats | None = None,
    max_health: int = 100,
) -> CharacterBuild:
    """
    Apply a build's random penalties to the base stats.

    Stats never drop below zero and max health never below one.
    """
    stats = (base or PlayerStats()).model_copy()
    stats.character_class = character_class

    for stat, (low, high) in BUILD_RULES[character_class].penalties.items():
        reduction = rng.randint(low, high)
        if stat == "max_health":
            max_health = max(1, max_health - reduction)
        else:
            setattr(stats, stat, max(0, getattr(stats, stat) - reduction))

    return CharacterBuild(character_class=character_class, stats=stats, max_health=max_health)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
