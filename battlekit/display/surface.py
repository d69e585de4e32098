"""
Display surface API.

The battle engine talks to its display only through ``DisplaySurface``:
fire-and-forget state pushes plus one blocking ``wait_for_action``. The
engine hands over immutable snapshots (``CombatantView``, ``ItemView``),
never its own lists, so the foreground thread cannot observe a list the
worker is still mutating.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

from battlekit.core.errors import ActionLabelError
from battlekit.display.rendezvous import ACTION_SLOTS

MESSAGE_HISTORY = 3
NO_HIGHLIGHT = -1


@dataclass(frozen=True)
class CombatantView:
    """Read-only combatant snapshot for display."""
    name: str
    health: int
    max_health: int
    damage: float
    speed: int
    special: str = ""

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def health_percent(self) -> float:
        """Health as 0-1 for bars, floored at 0."""
        if self.max_health <= 0:
            return 0.0
        return max(0.0, min(1.0, self.health / self.max_health))


@dataclass(frozen=True)
class ItemView:
    """Read-only inventory entry for display."""
    name: str
    icon: str


@runtime_checkable
class DisplaySurface(Protocol):
    """
    Everything the battle engine may ask of a display.

    Pushes must not block the caller. ``wait_for_action`` is the only
    blocking call.
    """

    def update_combatants(self, combatants: Sequence[CombatantView]) -> None:
        """Show the current combatant list (defeated ones included)."""

    def update_inventory(self, items: Sequence[ItemView]) -> None:
        """Show the current inventory."""

    def update_player_health(self, current: int) -> None:
        """Show the player's current health."""

    def set_player_max_health(self, maximum: int) -> None:
        """Set the player's maximum health."""

    def display_message(self, message: str) -> None:
        """Show a message; the newest one is emphasised."""

    def set_action_buttons(self, labels: Sequence[str]) -> None:
        """Label the action controls. Exactly four labels."""

    def set_buttons_enabled(self, enabled: bool) -> None:
        """Enable or disable the action controls."""

    def wait_for_action(self) -> int:
        """Block until an action is chosen. Returns 0-3, or -1 on abort."""

    def highlight_combatant(self, index: int) -> None:
        """Highlight one combatant, or clear with -1."""

    def pause(self, seconds: float) -> None:
        """Hold the calling thread so the player can follow along."""


def validate_labels(labels: Sequence[str], slots: int = ACTION_SLOTS) -> tuple[str, ...]:
    """
    Check an action label set.

    Raises:
        ActionLabelError: unless exactly ``slots`` string labels are given
    """
    if isinstance(labels, str):
        raise ActionLabelError("Action labels must be a sequence, not a string")

    labels = tuple(labels)
    if len(labels) != slots:
        raise ActionLabelError(
            f"Must provide exactly {slots} action labels, got {len(labels)}"
        )
    for label in labels:
        if not isinstance(label, str):
            raise ActionLabelError(f"Action label must be a string: {label!r}")
    return labels


class MessageLog:
    """
    Last few messages, oldest first.

    The display renders ``messages[-1]`` brightest.
    """

    def __init__(self, capacity: int = MESSAGE_HISTORY, initial: Iterable[str] = ()):
        self._messages: deque[str] = deque(initial, maxlen=capacity)

    def push(self, message: str) -> None:
        self._messages.append(message)

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    @property
    def latest(self) -> str:
        return self._messages[-1] if self._messages else ""

    def __len__(self) -> int:
        return len(self._messages)
