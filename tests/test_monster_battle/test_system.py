import random

import pytest

from battlekit.display.headless import HeadlessDisplay
from monster_battle.battle import BattleEngine, BattleEvent, BattlePhase, start_battle_thread
from monster_battle.battle.actions import NO_ITEMS_MESSAGE
from monster_battle.battle.system import (
    ABORT_MESSAGE,
    BUILD_PROMPT,
    DEFEAT_MESSAGE,
    VICTORY_MESSAGE,
)
from monster_battle.components import CharacterClass
from monster_battle.config import BUILD_LABELS, COMBAT_LABELS, MonsterRolls


class FixedRandom(random.Random):
    """random() always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def _config(config, **updates):
    return config.model_copy(update=updates)


def test_one_weak_monster_gives_victory(config):
    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(20, 20)))
    display = HeadlessDisplay(actions=[0])
    engine = BattleEngine(display, config)

    result = engine.run()

    assert result.phase is BattlePhase.VICTORY
    assert result.won
    assert result.turns == 1
    assert result.living_combatants == 0
    assert display.transcript[-1] == VICTORY_MESSAGE
    # The defeated monster never got a turn
    assert result.player_health == config.player_max_health


def test_player_at_ten_health_is_defeated(config):
    config = _config(
        config,
        monster_count=1,
        monster_rolls=MonsterRolls(health=(500, 500), damage=(30.0, 30.0)),
    )
    display = HeadlessDisplay(actions=[0])
    engine = BattleEngine(display, config, rng=FixedRandom(0.5))

    assert engine.step() is BattlePhase.CHECK_OUTCOME
    engine.state.vitals.set_current(10)

    result = engine.run()

    assert result.phase is BattlePhase.DEFEAT
    assert result.player_health == 0
    assert display.transcript[-2] == "Monster 1 attacks! You take 15 damage!"
    assert display.transcript[-1] == DEFEAT_MESSAGE
    assert display.state.player_health == 0


def test_phase_order(config):
    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(500, 500)))
    display = HeadlessDisplay(actions=[1])
    engine = BattleEngine(display, config)

    phases = [engine.step() for _ in range(6)]

    assert phases == [
        BattlePhase.CHECK_OUTCOME,
        BattlePhase.AWAITING_PLAYER_ACTION,
        BattlePhase.RESOLVING_PLAYER_ACTION,
        BattlePhase.MONSTER_TURN,
        BattlePhase.CHECK_OUTCOME,
        BattlePhase.AWAITING_PLAYER_ACTION,
    ]


def test_terminal_phase_is_final(config):
    config = _config(config, monster_count=0)
    display = HeadlessDisplay(actions=[0, 0, 0])
    engine = BattleEngine(display, config)
    engine.run()

    transcript = list(display.transcript)
    for _ in range(3):
        assert engine.step() is BattlePhase.VICTORY

    assert display.transcript == transcript
    assert engine.is_finished


def test_zero_monsters_win_before_first_turn(config):
    config = _config(config, monster_count=0)
    display = HeadlessDisplay(actions=[0])
    result = BattleEngine(display, config).run()

    assert result.phase is BattlePhase.VICTORY
    assert result.turns == 0
    assert display.request_count == 0


def test_abort_is_not_attack(config):
    display = HeadlessDisplay(actions=[])
    engine = BattleEngine(display, config)

    result = engine.run()

    assert result.phase is BattlePhase.ABORTED
    assert display.transcript[-1] == ABORT_MESSAGE
    assert all(c.health == c.max_health for c in engine.state.combatants)


def test_abort_during_build_choice(config):
    config = _config(config, choose_build=True)
    display = HeadlessDisplay(actions=[])

    result = BattleEngine(display, config).run()

    assert result.phase is BattlePhase.ABORTED
    assert result.turns == 0
    assert BUILD_PROMPT in display.transcript


def test_build_choice_sets_class_and_labels(config):
    config = _config(config, choose_build=True)
    display = HeadlessDisplay(actions=[3])
    engine = BattleEngine(display, config)

    result = engine.run()

    assert result.character_class is CharacterClass.NINJA
    assert 75 <= result.player_max_health <= 95
    assert display.state.player_max_health == result.player_max_health
    assert display.label_sets == [BUILD_LABELS, COMBAT_LABELS]
    assert any(m.startswith("You chose Ninja!") for m in display.transcript)


def test_setup_pushes_everything(config):
    display = HeadlessDisplay(actions=[])
    engine = BattleEngine(display, config)
    engine.step()

    state = display.state
    assert len(state.combatants) == 3
    assert [c.name for c in state.combatants] == ["Monster 1", "Monster 2", "Monster 3"]
    assert [item.name for item in state.items] == ["Health Potion", "Health Potion", "Bomb"]
    assert state.labels == COMBAT_LABELS
    assert state.player_health == state.player_max_health == 100


def test_use_item_consumes_first(config):
    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(500, 500)))
    display = HeadlessDisplay(actions=[3])
    engine = BattleEngine(display, config)

    engine.run()

    assert len(engine.inventory) == 2
    assert [item.name for item in display.state.items] == ["Health Potion", "Bomb"]
    assert any(m.startswith("Used Health Potion!") for m in display.transcript)


def test_empty_inventory_message(config):
    config = _config(
        config,
        inventory=[],
        monster_count=1,
        monster_rolls=MonsterRolls(health=(500, 500)),
    )
    display = HeadlessDisplay(actions=[3])
    engine = BattleEngine(display, config)

    engine.step()
    monster_health = engine.state.combatants[0].health
    player_health = engine.state.vitals.current
    engine.step()  # CHECK_OUTCOME -> AWAITING
    engine.step()  # AWAITING -> RESOLVING
    engine.step()  # RESOLVING -> MONSTER_TURN

    assert NO_ITEMS_MESSAGE in display.transcript
    assert engine.state.combatants[0].health == monster_health
    assert engine.state.vitals.current == player_health


def test_attack_highlights_then_clears(config):
    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(500, 500)))
    display = HeadlessDisplay(actions=[0])
    engine = BattleEngine(display, config)

    for _ in range(4):
        engine.step()

    assert display.highlights == [0, -1]


def test_battle_events(config, event_bus):
    seen = []
    def record(event):
        seen.append(event.type)
    for event_type in BattleEvent:
        event_bus.subscribe(event_type, record)

    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(20, 20)))
    BattleEngine(HeadlessDisplay(actions=[0]), config, event_bus=event_bus).run()

    assert seen == [
        BattleEvent.BATTLE_STARTED,
        BattleEvent.TURN_STARTED,
        BattleEvent.ACTION_SELECTED,
        BattleEvent.DAMAGE_DEALT,
        BattleEvent.COMBATANT_DEFEATED,
        BattleEvent.VICTORY,
    ]


def test_same_seed_same_battle(config):
    def play():
        display = HeadlessDisplay(actions=[0, 2, 1, 3, 0, 0, 0, 0])
        BattleEngine(display, config).run()
        return display.transcript

    assert play() == play()


def test_worker_thread_with_close(config):
    display = HeadlessDisplay()
    engine = BattleEngine(display, config)

    worker = start_battle_thread(engine)
    deadline = 200
    while not display.rendezvous.is_awaiting and deadline:
        worker.join(timeout=0.01)
        deadline -= 1

    display.close()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert engine.phase is BattlePhase.ABORTED


def test_worker_thread_with_clicks(config):
    config = _config(config, monster_count=1, monster_rolls=MonsterRolls(health=(20, 20)))
    display = HeadlessDisplay()
    engine = BattleEngine(display, config)

    worker = start_battle_thread(engine)
    deadline = 200
    while not display.submit_action(0) and deadline:
        worker.join(timeout=0.01)
        deadline -= 1

    worker.join(timeout=2)
    assert engine.phase is BattlePhase.VICTORY


def test_worker_thread_logs_engine_error_once(config, caplog):
    def chooser(state):
        raise RuntimeError("display broke")

    engine = BattleEngine(HeadlessDisplay(chooser=chooser), config)

    worker = start_battle_thread(engine)
    worker.join(timeout=2)

    assert not worker.is_alive()
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert "Battle engine stopped with an error" in errors[0].getMessage()
    assert not engine.is_finished
