import random
from unittest.mock import MagicMock

import pytest

from monster_battle.battle.actions import BattleActionExecutor
from monster_battle.battle.items import Item, ItemKind
from monster_battle.battle.state import ActionCode
from monster_battle.components import PlayerStats


def _fixed_rng(value):
    rng = MagicMock()
    rng.random.return_value = value
    rng.randrange.return_value = 0
    return rng


def test_attack_damage_range(make_state):
    state = make_state(monsters=[("A", 1000, 10.0)])
    executor = BattleActionExecutor(random.Random(3))

    for _ in range(100):
        damage = executor.attack_damage(state)
        assert 30 <= damage < 60


def test_attack_hits_first_living(make_state):
    state = make_state(monsters=[("A", 0, 10.0), ("B", 100, 10.0)])
    executor = BattleActionExecutor(_fixed_rng(0.5))

    result = executor.execute(ActionCode.ATTACK, state)

    # base 30, plus int(0.5 * 30)
    assert result.damage_dealt == {1: 45}
    assert result.target_index == 1
    assert state.combatants[1].health == 55
    assert result.message == "You hit B for 45 damage!"


def test_attack_reports_defeat(make_state):
    state = make_state(monsters=[("A", 20, 10.0)])
    executor = BattleActionExecutor(_fixed_rng(0.0))

    result = executor.execute_attack(state)

    assert state.combatants[0].health == -10
    assert result.defeated == [0]
    assert result.message.endswith("A is defeated!")


def test_attack_without_targets(make_state):
    state = make_state(monsters=[("A", 0, 10.0)])
    result = BattleActionExecutor(_fixed_rng(0.5)).execute_attack(state)

    assert not result.success
    assert result.target_index is None


def test_heal_amount_range(make_state):
    state = make_state(current=1, maximum=1000)
    executor = BattleActionExecutor(random.Random(8))

    for _ in range(100):
        amount = executor.heal_amount(state)
        assert 25 <= amount <= 50


def test_heal_clamped(make_state):
    state = make_state(current=95, maximum=100)
    result = BattleActionExecutor(_fixed_rng(0.99)).execute(ActionCode.HEAL, state)

    assert state.vitals.current == 100
    assert result.healing_done == 5
    assert result.message == "You healed for 5 HP!"


def test_defend_softens_next_hit_once(make_state):
    state = make_state(monsters=[("A", 50, 40.0)], current=100)
    state.stats = PlayerStats(shield=50)
    executor = BattleActionExecutor(_fixed_rng(0.5))

    executor.execute(ActionCode.DEFEND, state)
    assert state.guarding

    # 20 damage, half blocked
    first = executor.execute_monster_turn(state)
    assert first.blocked == 10
    assert first.damage_taken == 10
    assert not state.guarding

    second = executor.execute_monster_turn(state)
    assert second.blocked == 0
    assert second.damage_taken == 20
    assert state.vitals.current == 70


def test_shield_above_hundred_blocks_everything(make_state):
    state = make_state(monsters=[("A", 50, 40.0)])
    state.stats = PlayerStats(shield=250)
    state.guarding = True

    result = BattleActionExecutor(_fixed_rng(0.5)).execute_monster_turn(state)

    assert result.damage_taken == 0
    assert state.vitals.current == 100


def test_monster_turn_clamps_player(make_state):
    state = make_state(monsters=[("A", 50, 30.0)], current=10)
    result = BattleActionExecutor(_fixed_rng(0.5)).execute_monster_turn(state)

    assert state.vitals.current == 0
    assert result.damage_taken == 10
    assert result.message == "A attacks! You take 15 damage!"
    assert result.target_index == 0


def test_monster_turn_skips_defeated(make_state):
    state = make_state(monsters=[("A", -3, 99.0), ("B", 5, 10.0)])
    result = BattleActionExecutor(_fixed_rng(0.5)).execute_monster_turn(state)

    assert result.target_index == 1
    assert result.message.startswith("B attacks!")


def test_monster_turn_with_no_living(make_state):
    state = make_state(monsters=[("A", 0, 10.0)])
    result = BattleActionExecutor(_fixed_rng(0.5)).execute_monster_turn(state)

    assert not result.success
    assert state.vitals.current == 100


def test_execute_rejects_item_code(make_state):
    with pytest.raises(ValueError):
        BattleActionExecutor(_fixed_rng(0.5)).execute(ActionCode.USE_ITEM, make_state())


def test_bomb_item_reports_defeats(make_state):
    state = make_state(monsters=[("A", 20, 10.0), ("B", 50, 10.0)])
    result = BattleActionExecutor(_fixed_rng(0.5)).execute_item(Item.create(ItemKind.BOMB, 20), state)

    assert result.defeated == [0]
    assert result.damage_dealt == {0: 20, 1: 20}
    assert result.target_index is None
    assert state.combatants[0].health == 20
