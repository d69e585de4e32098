"""
Battle system - the turn-based battle engine.

The engine runs on a worker thread and drives a display surface:

    SETUP -> CHECK_OUTCOME -> AWAITING_PLAYER_ACTION
          -> RESOLVING_PLAYER_ACTION -> MONSTER_TURN -> CHECK_OUTCOME
          -> (AWAITING_PLAYER_ACTION | VICTORY | DEFEAT)

Any wait that returns NO_ACTION moves straight to ABORTED. VICTORY,
DEFEAT and ABORTED are terminal: ``step()`` does nothing once one is
reached.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from battlekit.core.events import EventBus
from battlekit.display.rendezvous import NO_ACTION
from battlekit.display.surface import NO_HIGHLIGHT, DisplaySurface
from monster_battle.battle.actions import ActionResult, BattleActionExecutor
from monster_battle.battle.inventory import Inventory
from monster_battle.battle.items import Item
from monster_battle.battle.state import ActionCode, BattlePhase, BattleState
from monster_battle.components import (
    CharacterClass,
    Combatant,
    PlayerStats,
    PlayerVitals,
    roll_build,
    roll_combatant,
)
from monster_battle.config import BattleConfig

logger = logging.getLogger(__name__)

BUILD_PROMPT = "---- PICK YOUR BUILD ----"
VICTORY_MESSAGE = "VICTORY! You defeated all monsters!"
DEFEAT_MESSAGE = "DEFEAT! You have been defeated..."
ABORT_MESSAGE = "Battle aborted."


class BattleEvent(Enum):
    """Battle events published on the engine's event bus."""
    BATTLE_STARTED = auto()
    BUILD_CHOSEN = auto()
    TURN_STARTED = auto()
    ACTION_SELECTED = auto()
    DAMAGE_DEALT = auto()
    HEALING_DONE = auto()
    ITEM_USED = auto()
    PLAYER_DAMAGED = auto()
    COMBATANT_DEFEATED = auto()
    VICTORY = auto()
    DEFEAT = auto()
    ABORTED = auto()


@dataclass
class BattleResult:
    """Summary of a finished (or stopped) battle."""
    phase: BattlePhase
    turns: int
    player_health: int
    player_max_health: int
    living_combatants: int
    character_class: Optional[CharacterClass] = None

    @property
    def won(self) -> bool:
        return self.phase == BattlePhase.VICTORY


class BattleEngine:
    """
    Turn-based battle controller.

    Manages:
    - Build choice and battle setup
    - Player action requests through the display
    - Action and monster-turn resolution
    - Win/lose conditions

    Usage:
        engine = BattleEngine(display, BattleConfig(seed=7))
        result = engine.run()           # blocks; call from a worker thread
    """

    def __init__(
        self,
        display: DisplaySurface,
        config: Optional[BattleConfig] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.display = display
        self.config = config or BattleConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.events = event_bus or EventBus()

        self.phase = BattlePhase.SETUP
        self.state = BattleState(target_policy=self.config.target_policy)
        self.inventory = Inventory()
        self.executor = BattleActionExecutor(self.rng, self.config.attack_ratio)

        self.turn = 0
        self.character_class: Optional[CharacterClass] = None
        self._pending_action: Optional[ActionCode] = None

        self._handlers: dict[BattlePhase, Callable[[], BattlePhase]] = {
            BattlePhase.SETUP: self._setup,
            BattlePhase.AWAITING_PLAYER_ACTION: self._await_action,
            BattlePhase.RESOLVING_PLAYER_ACTION: self._resolve_action,
            BattlePhase.MONSTER_TURN: self._monster_turn,
            BattlePhase.CHECK_OUTCOME: self._check_outcome,
        }

    # Lifecycle

    def run(self) -> BattleResult:
        """Run the battle to a terminal phase."""
        logger.info("Battle starting")
        while not self.phase.is_terminal:
            self.step()
        result = self.result()
        logger.info(f"Battle finished: {result.phase.name} after {result.turns} turns")
        return result

    def step(self) -> BattlePhase:
        """Advance exactly one phase. No-op once terminal."""
        if self.phase.is_terminal:
            return self.phase

        previous = self.phase
        self.phase = self._handlers[previous]()
        logger.debug(f"{previous.name} -> {self.phase.name}")
        return self.phase

    def result(self) -> BattleResult:
        return BattleResult(
            phase=self.phase,
            turns=self.turn,
            player_health=self.state.vitals.current,
            player_max_health=self.state.vitals.maximum,
            living_combatants=self.state.living_count,
            character_class=self.character_class,
        )

    @property
    def is_finished(self) -> bool:
        return self.phase.is_terminal

    # Phases

    def _setup(self) -> BattlePhase:
        config = self.config
        stats = PlayerStats(
            damage=config.player_damage,
            shield=config.player_shield,
            heal=config.player_heal,
            speed=config.player_speed,
        )
        max_health = config.player_max_health

        if config.choose_build:
            self.display.set_action_buttons(config.build_labels)
            self.display.display_message(BUILD_PROMPT)

            code = self.display.wait_for_action()
            if code == NO_ACTION:
                return self._abort()

            build = roll_build(CharacterClass.from_code(code), self.rng, stats, max_health)
            stats, max_health = build.stats, build.max_health
            self.character_class = build.character_class

            self.display.display_message(build.message)
            self.events.publish(
                BattleEvent.BUILD_CHOSEN,
                character_class=build.character_class,
                stats=stats,
                max_health=max_health,
            )
            self.display.pause(config.build_pause)

        self.state.stats = stats
        self.state.vitals = PlayerVitals(current=max_health, maximum=max_health)
        self.display.set_player_max_health(max_health)
        self.display.update_player_health(max_health)

        self.state.combatants = self._roll_combatants()
        self._push_combatants()

        self.inventory = Inventory(
            Item.create(entry.kind, entry.amount) for entry in config.inventory
        )
        self._push_inventory()

        self.display.set_action_buttons(config.combat_labels)

        if self.character_class is not None:
            self.display.display_message(f"Battle Start! You are a {self.character_class.label}!")
        else:
            self.display.display_message("Battle Start! Choose your action.")

        self.events.publish(
            BattleEvent.BATTLE_STARTED,
            combatants=len(self.state.combatants),
            items=len(self.inventory),
        )
        logger.info(
            f"Setup complete: {len(self.state.combatants)} monsters, "
            f"{len(self.inventory)} items, {max_health} HP"
        )
        # Zero monsters is won before the first turn
        return BattlePhase.CHECK_OUTCOME

    def _await_action(self) -> BattlePhase:
        self.turn += 1
        vitals = self.state.vitals
        self.events.publish(BattleEvent.TURN_STARTED, turn=self.turn)
        self.display.display_message(
            f"Your turn! HP: {vitals.current} | DMG: {self.state.stats.damage}"
        )

        code = self.display.wait_for_action()
        if code == NO_ACTION:
            return self._abort()

        self._pending_action = ActionCode(code)
        self.events.publish(BattleEvent.ACTION_SELECTED, action=self._pending_action, turn=self.turn)
        return BattlePhase.RESOLVING_PLAYER_ACTION

    def _resolve_action(self) -> BattlePhase:
        action = self._pending_action
        self._pending_action = None

        if action == ActionCode.USE_ITEM:
            result = self._use_item()
        else:
            result = self.executor.execute(action, self.state)

        self._report(result)
        self.display.pause(self.config.turn_pause)

        if self.state.all_defeated or self.state.vitals.is_defeated:
            return BattlePhase.CHECK_OUTCOME
        return BattlePhase.MONSTER_TURN

    def _monster_turn(self) -> BattlePhase:
        result = self.executor.execute_monster_turn(self.state)
        if result.success:
            self._report(result)
            self.events.publish(
                BattleEvent.PLAYER_DAMAGED,
                attacker=result.target_index,
                damage=result.damage_taken,
                blocked=result.blocked,
                health=self.state.vitals.current,
            )
            self.display.pause(self.config.turn_pause)
        return BattlePhase.CHECK_OUTCOME

    def _check_outcome(self) -> BattlePhase:
        if self.state.all_defeated:
            self.display.display_message(VICTORY_MESSAGE)
            self.events.publish(BattleEvent.VICTORY, turns=self.turn)
            return BattlePhase.VICTORY

        if self.state.vitals.is_defeated:
            self.display.display_message(DEFEAT_MESSAGE)
            self.events.publish(BattleEvent.DEFEAT, turns=self.turn)
            return BattlePhase.DEFEAT

        return BattlePhase.AWAITING_PLAYER_ACTION

    def _abort(self) -> BattlePhase:
        logger.info("Action wait aborted, stopping battle")
        self.display.display_message(ABORT_MESSAGE)
        self.events.publish(BattleEvent.ABORTED, turn=self.turn)
        return BattlePhase.ABORTED

    # Helpers

    def _roll_combatants(self) -> list[Combatant]:
        rolls = self.config.monster_rolls
        specials = self.config.monster_specials
        return [
            roll_combatant(
                self.rng,
                name=f"Monster {i + 1}",
                health_range=rolls.health,
                damage_range=rolls.damage,
                speed_range=rolls.speed,
                special=specials[i] if i < len(specials) else "",
            )
            for i in range(self.config.monster_count)
        ]

    def _use_item(self) -> ActionResult:
        item = self.inventory.consume_first()
        if item is not None:
            # The shortened inventory is shown before the effect lands
            self._push_inventory()

        result = self.executor.execute_item(item, self.state)
        if result.state is not None:
            self.state = result.state

        if item is not None:
            self.events.publish(BattleEvent.ITEM_USED, item=item, remaining=len(self.inventory))
        return result

    def _report(self, result: ActionResult) -> None:
        """Push a resolved action to the display and the event bus."""
        self._push_combatants()
        self.display.update_player_health(self.state.vitals.current)
        if result.message:
            self.display.display_message(result.message)

        for index, amount in result.damage_dealt.items():
            self.events.publish(BattleEvent.DAMAGE_DEALT, target=index, damage=amount)
        for index in result.defeated:
            self.events.publish(BattleEvent.COMBATANT_DEFEATED, target=index)
        if result.healing_done:
            self.events.publish(BattleEvent.HEALING_DONE, amount=result.healing_done)

        if result.target_index is not None:
            self._flash(result.target_index)

    def _flash(self, index: int) -> None:
        """Highlight a combatant briefly."""
        self.display.highlight_combatant(index)
        self.display.pause(self.config.highlight_duration)
        self.display.highlight_combatant(NO_HIGHLIGHT)

    def _push_combatants(self) -> None:
        self.display.update_combatants([c.to_view() for c in self.state.combatants])

    def _push_inventory(self) -> None:
        self.display.update_inventory(self.inventory.views())


def start_battle_thread(engine: BattleEngine, name: str = "battle-engine") -> threading.Thread:
    """Run ``engine.run()`` on a daemon worker thread and return it."""

    def _run() -> None:
        try:
            engine.run()
        except Exception:
            logger.exception("Battle engine stopped with an error")

    thread = threading.Thread(target=_run, name=name, daemon=True)
    thread.start()
    return thread
