import random
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from monster_battle.battle.actions import BattleActionExecutor, NO_ITEMS_MESSAGE
from monster_battle.battle.inventory import Inventory
from monster_battle.battle.items import ITEM_CATALOG, Item, ItemKind, apply_item


def test_catalog_defaults():
    assert Item.create(ItemKind.HEALTH_POTION).amount == 30
    assert Item.create(ItemKind.MEGA_POTION).amount == 50
    assert Item.create(ItemKind.BOMB).amount == 20
    assert Item.create(ItemKind.MAGIC_SCROLL).amount == 30
    assert set(ITEM_CATALOG) == set(ItemKind)


def test_amount_override():
    bomb = Item.create(ItemKind.BOMB, 35)
    assert bomb.amount == 35
    assert bomb.name == "Bomb"


def test_items_are_frozen():
    potion = Item.create(ItemKind.HEALTH_POTION)
    with pytest.raises(ValidationError):
        potion.amount = 99


def test_potion_heals_and_leaves_input_untouched(make_state, rng):
    state = make_state(current=50, maximum=100)
    outcome = apply_item(Item.create(ItemKind.HEALTH_POTION, 30), state, rng)

    assert outcome.state.vitals.current == 80
    assert outcome.healed == 30
    assert outcome.message == "Used Health Potion! Healed 30 HP!"
    assert state.vitals.current == 50


def test_potion_clamps_to_max(make_state, rng):
    state = make_state(current=90, maximum=100)
    outcome = apply_item(Item.create(ItemKind.MEGA_POTION), state, rng)

    assert outcome.state.vitals.current == 100
    assert outcome.healed == 10


def test_bomb_hits_only_living(make_state, rng):
    state = make_state(monsters=[("A", 30, 10.0), ("B", 0, 10.0), ("C", 15, 10.0)])
    outcome = apply_item(Item.create(ItemKind.BOMB, 20), state, rng)

    assert [c.health for c in outcome.state.combatants] == [10, 0, -5]
    assert outcome.damaged == {0: 20, 2: 20}
    assert outcome.message == "BOOM! All monsters take 20 damage!"
    assert [c.health for c in state.combatants] == [30, 0, 15]


def test_scroll_heal_branch(make_state):
    rng = MagicMock()
    rng.random.return_value = 0.1
    state = make_state(monsters=[("A", 30, 10.0)], current=50)

    outcome = apply_item(Item.create(ItemKind.MAGIC_SCROLL), state, rng)

    assert outcome.state.vitals.current == 75
    assert outcome.state.combatants[0].health == 30


def test_scroll_damage_branch_uses_policy(make_state):
    rng = MagicMock()
    rng.random.return_value = 0.9
    state = make_state(monsters=[("A", 0, 10.0), ("B", 40, 10.0)], current=50)

    outcome = apply_item(Item.create(ItemKind.MAGIC_SCROLL), state, rng)

    assert outcome.state.combatants[1].health == 10
    assert outcome.damaged == {1: 30}
    assert outcome.state.vitals.current == 50


def test_scroll_fizzles_without_targets(make_state):
    rng = MagicMock()
    rng.random.return_value = 0.9
    state = make_state(monsters=[("A", 0, 10.0)])

    outcome = apply_item(Item.create(ItemKind.MAGIC_SCROLL), state, rng)

    assert "fizzles" in outcome.message
    assert outcome.damaged == {}


def test_inventory_consumes_in_order():
    potion = Item.create(ItemKind.HEALTH_POTION)
    bomb = Item.create(ItemKind.BOMB)
    inventory = Inventory([potion, bomb])

    assert inventory.peek() == potion
    assert inventory.consume_first() == potion
    assert [view.name for view in inventory.views()] == ["Bomb"]
    assert inventory.consume_first() == bomb
    assert inventory.is_empty
    assert inventory.consume_first() is None


def test_potion_at_half_health_empties_inventory(make_state, rng):
    state = make_state(current=50, maximum=100)
    inventory = Inventory([Item.create(ItemKind.HEALTH_POTION, 30)])
    executor = BattleActionExecutor(rng)

    result = executor.execute_item(inventory.consume_first(), state)

    assert result.state.vitals.current == 80
    assert len(inventory) == 0


def test_empty_inventory_changes_nothing(make_state, rng):
    state = make_state(monsters=[("A", 30, 10.0)], current=50)
    before = state.model_dump()
    executor = BattleActionExecutor(rng)

    result = executor.execute_item(Inventory().consume_first(), state)

    assert not result.success
    assert result.message == NO_ITEMS_MESSAGE
    assert result.state is None
    assert state.model_dump() == before
