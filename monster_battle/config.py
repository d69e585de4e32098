"""
Battle configuration.

Every tunable number of a battle lives here. Defaults reproduce the
classic demo: three random monsters, 100 HP, two potions and a bomb.

Example battle.json:
    {
        "monster_count": 4,
        "target_policy": "first_living",
        "inventory": [
            {"kind": "mega_potion", "amount": 50},
            {"kind": "bomb", "amount": 20}
        ]
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battlekit.core.config import WindowConfig, load_model
from battlekit.display.surface import validate_labels
from monster_battle.battle.items import ItemKind
from monster_battle.battle.targeting import TargetPolicy

COMBAT_LABELS = ("Attack", "Defend", "Heal", "Use Item")
BUILD_LABELS = ("Fighter", "Tank", "Healer", "Ninja")


class ItemEntry(BaseModel):
    """One starting inventory item."""

    model_config = ConfigDict(extra='forbid')

    kind: ItemKind
    amount: Optional[int] = Field(default=None, ge=0)


class MonsterRolls(BaseModel):
    """Random ranges for new monsters (inclusive)."""

    model_config = ConfigDict(extra='forbid')

    health: tuple[int, int] = (21, 100)
    damage: tuple[float, float] = (10.0, 51.0)
    speed: tuple[int, int] = (1, 10)

    @field_validator("health", "damage", "speed")
    @classmethod
    def _ordered(cls, value):
        low, high = value
        if low > high:
            raise ValueError(f"range low {low} is above high {high}")
        if low < 0:
            raise ValueError("ranges must not be negative")
        return value


class BattleConfig(BaseModel):
    """Configuration for one battle."""

    model_config = ConfigDict(extra='forbid')

    # Player
    player_max_health: int = Field(default=100, ge=1)
    player_damage: int = Field(default=200, ge=0)
    player_shield: int = Field(default=50, ge=0)
    player_heal: int = Field(default=50, ge=0)
    player_speed: int = Field(default=10, ge=0)
    choose_build: bool = True

    # Monsters
    monster_count: int = Field(default=3, ge=0)
    monster_rolls: MonsterRolls = Field(default_factory=MonsterRolls)
    monster_specials: list[str] = Field(default_factory=list)

    # Items
    inventory: list[ItemEntry] = Field(default_factory=lambda: [
        ItemEntry(kind=ItemKind.HEALTH_POTION, amount=30),
        ItemEntry(kind=ItemKind.HEALTH_POTION, amount=30),
        ItemEntry(kind=ItemKind.BOMB, amount=20),
    ])

    # Rules
    target_policy: TargetPolicy = TargetPolicy.RANDOM_LIVING
    attack_ratio: float = Field(default=0.15, ge=0)
    combat_labels: tuple[str, ...] = COMBAT_LABELS
    build_labels: tuple[str, ...] = BUILD_LABELS

    # Timing (seconds)
    turn_pause: float = Field(default=0.5, ge=0)
    highlight_duration: float = Field(default=0.3, ge=0)
    build_pause: float = Field(default=1.5, ge=0)
    action_timeout: Optional[float] = Field(default=None, gt=0)

    # Misc
    seed: Optional[int] = None
    window: WindowConfig = Field(default_factory=WindowConfig)

    @field_validator("combat_labels", "build_labels")
    @classmethod
    def _four_labels(cls, value):
        # Label arity is checked when the config loads, not mid-battle
        return validate_labels(value)

    @model_validator(mode="after")
    def _specials_fit(self) -> BattleConfig:
        if len(self.monster_specials) > self.monster_count:
            raise ValueError("more monster_specials than monsters")
        return self


def load_battle_config(path: Path | str) -> BattleConfig:
    """Load a battle configuration from JSON."""
    return load_model(path, BattleConfig)
