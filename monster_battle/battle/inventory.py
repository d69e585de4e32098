"""
Inventory - ordered list of consumable items.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from battlekit.display.surface import ItemView
from monster_battle.battle.items import Item

logger = logging.getLogger(__name__)


class Inventory:
    """
    Items in the order they were added.

    Items are always consumed from the front; the player does not choose
    which one.
    """

    def __init__(self, items: Iterable[Item] = ()):
        self._items: list[Item] = list(items)

    def consume_first(self) -> Optional[Item]:
        """
        Remove and return the first item.

        Returns:
            The item, or None when the inventory is empty
        """
        if not self._items:
            return None
        item = self._items.pop(0)
        logger.debug(f"Consumed {item.name}, {len(self._items)} left")
        return item

    def peek(self) -> Optional[Item]:
        return self._items[0] if self._items else None

    def views(self) -> list[ItemView]:
        """Snapshots for the display."""
        return [item.to_view() for item in self._items]

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))
