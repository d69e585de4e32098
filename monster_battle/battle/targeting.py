"""
Target selection over a combatant list.

Defeated combatants stay in the list so indices remain stable for
highlighting; these helpers filter them out. An empty or all-dead list
is a normal input and yields ``None``.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence

from monster_battle.components.combatant import Combatant


class TargetPolicy(Enum):
    """How a single living combatant is picked."""
    FIRST_LIVING = "first_living"
    RANDOM_LIVING = "random_living"


def living_indices(combatants: Sequence[Combatant]) -> list[int]:
    """Indices of combatants still alive, in list order."""
    return [i for i, c in enumerate(combatants) if c.is_alive]


def count_living(combatants: Sequence[Combatant]) -> int:
    """Number of combatants still alive."""
    return sum(1 for c in combatants if c.is_alive)


def pick_living_target(
    combatants: Sequence[Combatant],
    policy: TargetPolicy,
    rng: random.Random,
) -> Optional[int]:
    """
    Pick one living combatant.

    Args:
        combatants: Full combatant list, defeated ones included
        policy: Selection policy
        rng: Random source (only used by RANDOM_LIVING)

    Returns:
        Index into ``combatants``, or None if nobody is alive
    """
    alive = living_indices(combatants)
    if not alive:
        return None

    if policy is TargetPolicy.FIRST_LIVING:
        return alive[0]
    return alive[rng.randrange(len(alive))]
