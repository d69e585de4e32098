"""
Items - consumable command objects and their effects.

An item is plain data (kind, name, icon, amount). What it does lives in
an effect function looked up by kind:

    effect(state, item, rng) -> EffectOutcome(new_state, message)

Effects never mutate the state they are given; the engine swaps in the
returned state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from battlekit.display.surface import ItemView
from monster_battle.battle.state import BattleState
from monster_battle.battle.targeting import pick_living_target

SCROLL_HEAL = 25


class ItemKind(Enum):
    """Kinds of consumable item."""
    HEALTH_POTION = "health_potion"
    MEGA_POTION = "mega_potion"
    BOMB = "bomb"
    MAGIC_SCROLL = "magic_scroll"


@dataclass(frozen=True)
class ItemTemplate:
    """Display name, icon and default amount for an item kind."""
    name: str
    icon: str
    amount: int


ITEM_CATALOG: dict[ItemKind, ItemTemplate] = {
    ItemKind.HEALTH_POTION: ItemTemplate("Health Potion", "🧪", 30),
    ItemKind.MEGA_POTION: ItemTemplate("Mega Potion", "🧪", 50),
    ItemKind.BOMB: ItemTemplate("Bomb", "💣", 20),
    ItemKind.MAGIC_SCROLL: ItemTemplate("Magic Scroll", "✨", 30),
}


class Item(BaseModel):
    """
    A consumable item.

    Attributes:
        kind: Selects the effect
        name: Display name
        icon: Display icon
        amount: Effect strength (heal or damage)
    """

    model_config = ConfigDict(frozen=True)

    kind: ItemKind
    name: str
    icon: str
    amount: int

    @classmethod
    def create(cls, kind: ItemKind, amount: Optional[int] = None) -> Item:
        """Build an item from the catalog, optionally overriding the amount."""
        template = ITEM_CATALOG[kind]
        return cls(
            kind=kind,
            name=template.name,
            icon=template.icon,
            amount=template.amount if amount is None else amount,
        )

    def to_view(self) -> ItemView:
        return ItemView(name=self.name, icon=self.icon)


@dataclass
class EffectOutcome:
    """Result of applying an item effect."""
    state: BattleState
    message: str
    healed: int = 0
    damaged: dict[int, int] = field(default_factory=dict)  # combatant index -> damage


ItemEffect = Callable[[BattleState, Item, random.Random], EffectOutcome]


def _heal_player(state: BattleState, item: Item, rng: random.Random) -> EffectOutcome:
    new_state = state.copy_state()
    healed = new_state.vitals.heal(item.amount)
    return EffectOutcome(
        new_state,
        f"Used {item.name}! Healed {healed} HP!",
        healed=healed,
    )


def _bomb(state: BattleState, item: Item, rng: random.Random) -> EffectOutcome:
    new_state = state.copy_state()
    damaged = {}
    for i, combatant in enumerate(new_state.combatants):
        if combatant.is_alive:
            combatant.apply_damage(item.amount)
            damaged[i] = item.amount
    return EffectOutcome(
        new_state,
        f"BOOM! All monsters take {item.amount} damage!",
        damaged=damaged,
    )


def _magic_scroll(state: BattleState, item: Item, rng: random.Random) -> EffectOutcome:
    new_state = state.copy_state()

    if rng.random() < 0.5:
        healed = new_state.vitals.heal(SCROLL_HEAL)
        return EffectOutcome(new_state, f"Magic healed you for {healed} HP!", healed=healed)

    index = pick_living_target(new_state.combatants, new_state.target_policy, rng)
    if index is None:
        return EffectOutcome(new_state, "The magic fizzles. No monster to strike!")

    new_state.combatants[index].apply_damage(item.amount)
    return EffectOutcome(
        new_state,
        f"Magic struck {new_state.combatants[index].name} for {item.amount} damage!",
        damaged={index: item.amount},
    )


ITEM_EFFECTS: dict[ItemKind, ItemEffect] = {
    ItemKind.HEALTH_POTION: _heal_player,
    ItemKind.MEGA_POTION: _heal_player,
    ItemKind.BOMB: _bomb,
    ItemKind.MAGIC_SCROLL: _magic_scroll,
}


def apply_item(item: Item, state: BattleState, rng: random.Random) -> EffectOutcome:
    """Run an item's effect against ``state``."""
    return ITEM_EFFECTS[item.kind](state, item, rng)
