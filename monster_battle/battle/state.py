"""
Battle state - phases and the state item effects operate on.
"""

from __future__ import annotations

from enum import Enum, auto

from pydantic import Field

from battlekit.core.component import Component
from monster_battle.battle.targeting import TargetPolicy, count_living
from monster_battle.components import Combatant, PlayerStats, PlayerVitals


class BattlePhase(Enum):
    """Phase of the battle loop."""
    SETUP = auto()
    AWAITING_PLAYER_ACTION = auto()
    RESOLVING_PLAYER_ACTION = auto()
    MONSTER_TURN = auto()
    CHECK_OUTCOME = auto()
    VICTORY = auto()
    DEFEAT = auto()
    ABORTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (BattlePhase.VICTORY, BattlePhase.DEFEAT, BattlePhase.ABORTED)


class ActionCode(int, Enum):
    """Combat action slots. NO_ACTION means the wait was aborted."""
    NO_ACTION = -1
    ATTACK = 0
    DEFEND = 1
    HEAL = 2
    USE_ITEM = 3


class BattleState(Component):
    """
    Everything a turn reads or writes, apart from the inventory.

    Item effects take a state and return a new one, so this model is
    deep-copied rather than shared.
    """
    combatants: list[Combatant] = Field(default_factory=list)
    vitals: PlayerVitals = Field(default_factory=PlayerVitals)
    stats: PlayerStats = Field(default_factory=PlayerStats)
    guarding: bool = False
    target_policy: TargetPolicy = TargetPolicy.RANDOM_LIVING

    @property
    def living_count(self) -> int:
        return count_living(self.combatants)

    @property
    def all_defeated(self) -> bool:
        return self.living_count == 0

    def copy_state(self) -> BattleState:
        """Deep copy for effect functions."""
        return self.model_copy(deep=True)
