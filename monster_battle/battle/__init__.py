"""
Battle module - turn-based monster battle.

Provides:
- Targeting policies over the combatant list
- Items (command objects) and the inventory
- Action execution (attack, defend, heal, item, monster attack)
- The battle engine state machine and its worker thread
"""

# Leaf modules first: monster_battle.config imports items and targeting,
# and the engine imports monster_battle.config.
from monster_battle.battle.targeting import (
    TargetPolicy,
    count_living,
    living_indices,
    pick_living_target,
)
from monster_battle.battle.state import BattlePhase, BattleState, ActionCode
from monster_battle.battle.items import (
    Item,
    ItemKind,
    ItemTemplate,
    ITEM_CATALOG,
    EffectOutcome,
    apply_item,
)
from monster_battle.battle.inventory import Inventory
from monster_battle.battle.actions import (
    BattleActionExecutor,
    ActionResult,
    NO_ITEMS_MESSAGE,
)
from monster_battle.battle.system import (
    BattleEngine,
    BattleEvent,
    BattleResult,
    start_battle_thread,
)

__all__ = [
    # Targeting
    "TargetPolicy",
    "count_living",
    "living_indices",
    "pick_living_target",
    # State
    "BattlePhase",
    "BattleState",
    "ActionCode",
    # Items
    "Item",
    "ItemKind",
    "ItemTemplate",
    "ITEM_CATALOG",
    "EffectOutcome",
    "apply_item",
    "Inventory",
    # Actions
    "BattleActionExecutor",
    "ActionResult",
    "NO_ITEMS_MESSAGE",
    # System
    "BattleEngine",
    "BattleEvent",
    "BattleResult",
    "start_battle_thread",
]
