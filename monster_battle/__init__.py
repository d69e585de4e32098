"""
Monster Battle

A turn-based battle against a group of randomly rolled monsters, played
through a four-button display surface.

Quick Start:
    from battlekit.display import HeadlessDisplay
    from monster_battle import BattleEngine, BattleConfig

    display = HeadlessDisplay(actions=[0, 0, 0, 3])
    result = BattleEngine(display, BattleConfig(seed=1)).run()
"""

__version__ = "0.1.0"

# The battle package must load before config (config imports battle.items)
from monster_battle.battle import (
    BattleEngine,
    BattleEvent,
    BattleResult,
    BattlePhase,
    ActionCode,
    TargetPolicy,
    start_battle_thread,
)
from monster_battle.config import BattleConfig, load_battle_config

__all__ = [
    "BattleEngine",
    "BattleEvent",
    "BattleResult",
    "BattlePhase",
    "ActionCode",
    "TargetPolicy",
    "start_battle_thread",
    "BattleConfig",
    "load_battle_config",
]
