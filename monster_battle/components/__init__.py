"""
Battle components - data models for both sides of a battle.

Includes:
- Combatant: a monster
- PlayerVitals, PlayerStats: the player
- CharacterClass, roll_build: one-time build choice
"""

from monster_battle.components.combatant import Combatant, roll_combatant
from monster_battle.components.character import (
    CharacterClass,
    PlayerVitals,
    PlayerStats,
    CharacterBuild,
    BuildRule,
    BUILD_RULES,
    roll_build,
)

__all__ = [
    "Combatant",
    "roll_combatant",
    "CharacterClass",
    "PlayerVitals",
    "PlayerStats",
    "CharacterBuild",
    "BuildRule",
    "BUILD_RULES",
    "roll_build",
]
