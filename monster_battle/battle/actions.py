"""
Battle actions - attack, defend, heal, item, and the monster's attack.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from monster_battle.battle.items import Item, apply_item
from monster_battle.battle.state import ActionCode, BattleState
from monster_battle.battle.targeting import pick_living_target

NO_ITEMS_MESSAGE = "No items in inventory!"


@dataclass
class ActionResult:
    """Result of executing a battle action."""
    action: Optional[ActionCode] = None
    success: bool = True
    message: str = ""
    target_index: Optional[int] = None  # combatant to highlight
    damage_dealt: dict[int, int] = field(default_factory=dict)  # combatant index -> damage
    defeated: list[int] = field(default_factory=list)
    healing_done: int = 0
    damage_taken: int = 0
    blocked: int = 0
    item: Optional[Item] = None
    state: Optional[BattleState] = None  # replacement state from an item effect


class BattleActionExecutor:
    """
    Executes battle actions against a BattleState.

    Attack, defend, heal and the monster turn update the state in place.
    Items go through their effect function and hand back a new state in
    ``ActionResult.state``.
    """

    def __init__(self, rng: random.Random, attack_ratio: float = 0.15):
        self.rng = rng
        self.attack_ratio = attack_ratio

    # Formulas

    def attack_damage(self, state: BattleState) -> int:
        """Base of ``attack_ratio`` x damage stat, plus up to the same again."""
        base = int(state.stats.damage * self.attack_ratio)
        return base + int(self.rng.random() * base)

    def heal_amount(self, state: BattleState) -> int:
        """Half the heal stat, plus up to another half."""
        heal = state.stats.heal
        return int(heal * 0.5) + int(self.rng.random() * heal * 0.5)

    def monster_damage(self, damage_stat: float) -> int:
        """Anywhere from 0 up to (not including) the monster's damage."""
        return int(self.rng.random() * damage_stat)

    # Player actions

    def execute(self, code: ActionCode, state: BattleState) -> ActionResult:
        """Dispatch attack/defend/heal. Items go through execute_item."""
        if code == ActionCode.ATTACK:
            return self.execute_attack(state)
        if code == ActionCode.DEFEND:
            return self.execute_defend(state)
        if code == ActionCode.HEAL:
            return self.execute_heal(state)
        raise ValueError(f"Action {code!r} is not resolved by execute()")

    def execute_attack(self, state: BattleState) -> ActionResult:
        """Hit one living combatant chosen by the target policy."""
        result = ActionResult(action=ActionCode.ATTACK)

        index = pick_living_target(state.combatants, state.target_policy, self.rng)
        if index is None:
            result.success = False
            result.message = "There is nothing left to attack."
            return result

        target = state.combatants[index]
        damage = self.attack_damage(state)
        target.apply_damage(damage)

        result.target_index = index
        result.damage_dealt[index] = damage
        result.message = f"You hit {target.name} for {damage} damage!"
        if not target.is_alive:
            result.defeated.append(index)
            result.message += f" {target.name} is defeated!"
        return result

    def execute_defend(self, state: BattleState) -> ActionResult:
        """Raise a guard that softens the next monster attack."""
        state.guarding = True
        return ActionResult(
            action=ActionCode.DEFEND,
            message=f"You brace for impact! (Shield: {state.stats.shield})",
        )

    def execute_heal(self, state: BattleState) -> ActionResult:
        """Heal the player, clamped to max health."""
        healed = state.vitals.heal(self.heal_amount(state))
        return ActionResult(
            action=ActionCode.HEAL,
            healing_done=healed,
            message=f"You healed for {healed} HP!",
        )

    def execute_item(self, item: Optional[Item], state: BattleState) -> ActionResult:
        """
        Apply a consumed item.

        Args:
            item: Item already removed from the inventory, or None if empty
            state: Current state (left untouched)
        """
        result = ActionResult(action=ActionCode.USE_ITEM, item=item)
        if item is None:
            result.success = False
            result.message = NO_ITEMS_MESSAGE
            return result

        outcome = apply_item(item, state, self.rng)
        result.state = outcome.state
        result.message = outcome.message
        result.healing_done = outcome.healed
        result.damage_dealt = dict(outcome.damaged)
        result.defeated = [
            i for i in outcome.damaged
            if state.combatants[i].is_alive and not outcome.state.combatants[i].is_alive
        ]
        if len(outcome.damaged) == 1:
            result.target_index = next(iter(outcome.damaged))
        return result

    # Monster turn

    def execute_monster_turn(self, state: BattleState) -> ActionResult:
        """One living combatant attacks the player."""
        result = ActionResult()

        index = pick_living_target(state.combatants, state.target_policy, self.rng)
        if index is None:
            result.success = False
            return result

        attacker = state.combatants[index]
        damage = self.monster_damage(attacker.damage)

        if state.guarding:
            shield = min(state.stats.shield, 100)
            result.blocked = int(damage * shield / 100)
            damage -= result.blocked
            state.guarding = False

        result.target_index = index
        result.damage_taken = state.vitals.take_damage(damage)
        result.message = f"{attacker.name} attacks! You take {damage} damage!"
        if result.blocked:
            result.message += f" (Blocked {result.blocked})"
        return result
