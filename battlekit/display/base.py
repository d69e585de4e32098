"""
Shared display surface implementation.

``BaseDisplay`` turns every push into a command applied to a
``DisplayState``. Subclasses decide where commands run: the headless
display applies them at once, the pygame display queues them for its
frame loop. Either way they are applied in the order they were sent.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from battlekit.core.events import DisplayEvent, EventBus
from battlekit.display.rendezvous import ACTION_SLOTS, ActionRendezvous
from battlekit.display.surface import (
    NO_HIGHLIGHT,
    CombatantView,
    ItemView,
    MessageLog,
    validate_labels,
)

logger = logging.getLogger(__name__)

DEFAULT_LABELS = ("Action 1", "Action 2", "Action 3", "Action 4")
WELCOME_MESSAGE = "Welcome to Monster Battle!"

DisplayCommand = Callable[["DisplayState"], None]


@dataclass
class DisplayState:
    """Everything a display shows. Owned by the foreground thread."""
    combatants: tuple[CombatantView, ...] = ()
    items: tuple[ItemView, ...] = ()
    player_health: int = 100
    player_max_health: int = 100
    labels: tuple[str, ...] = DEFAULT_LABELS
    buttons_enabled: bool = False
    highlight: int = NO_HIGHLIGHT
    log: MessageLog = field(default_factory=lambda: MessageLog(initial=[WELCOME_MESSAGE]))

    @property
    def messages(self) -> list[str]:
        return self.log.messages

    @property
    def player_health_percent(self) -> float:
        if self.player_max_health <= 0:
            return 0.0
        return max(0.0, min(1.0, self.player_health / self.player_max_health))


class BaseDisplay(ABC):
    """
    Common display surface behaviour.

    Subclasses implement ``_post`` to run commands on their foreground
    context.
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        action_timeout: Optional[float] = None,
    ):
        self.event_bus = event_bus
        self.state = DisplayState()
        self.rendezvous = ActionRendezvous(
            slots=ACTION_SLOTS,
            on_open=self._on_request_opened,
            on_close=self._on_request_closed,
            timeout=action_timeout,
        )
        self._closed = threading.Event()

    # Engine-facing API

    def update_combatants(self, combatants: Sequence[CombatantView]) -> None:
        snapshot = tuple(combatants)
        self._post(lambda s: setattr(s, "combatants", snapshot))

    def update_inventory(self, items: Sequence[ItemView]) -> None:
        snapshot = tuple(items)
        self._post(lambda s: setattr(s, "items", snapshot))

    def update_player_health(self, current: int) -> None:
        self._post(lambda s: setattr(s, "player_health", current))

    def set_player_max_health(self, maximum: int) -> None:
        self._post(lambda s: setattr(s, "player_max_health", maximum))

    def display_message(self, message: str) -> None:
        logger.debug(f"message: {message}")
        self._post(lambda s: s.log.push(message))

    def set_action_buttons(self, labels: Sequence[str]) -> None:
        checked = validate_labels(labels, self.rendezvous.slots)
        self._post(lambda s: setattr(s, "labels", checked))

    def set_buttons_enabled(self, enabled: bool) -> None:
        self._post(lambda s: setattr(s, "buttons_enabled", enabled))

    def wait_for_action(self) -> int:
        return self.rendezvous.request()

    def highlight_combatant(self, index: int) -> None:
        self._post(lambda s: setattr(s, "highlight", index))

    def pause(self, seconds: float) -> None:
        # Returns early if the display closes
        if seconds > 0:
            self._closed.wait(seconds)

    # Foreground-facing API

    def submit_action(self, code: int) -> bool:
        """Report an action chosen by the player. Foreground thread."""
        accepted = self.rendezvous.submit(code)
        if self.event_bus:
            event = DisplayEvent.ACTION_SUBMITTED if accepted else DisplayEvent.ACTION_REJECTED
            self.event_bus.publish(event, code=code)
        return accepted

    def close(self) -> None:
        """Shut the display and abort any pending action request."""
        if self._closed.is_set():
            return
        self._closed.set()
        self.rendezvous.abort()
        if self.event_bus:
            self.event_bus.publish(DisplayEvent.WINDOW_CLOSED)

    @property
    def is_closed(self) -> bool:
        return self._closed.is_set()

    # Internal

    def _on_request_opened(self) -> None:
        self.set_buttons_enabled(True)
        if self.event_bus:
            self.event_bus.publish(DisplayEvent.CONTROLS_ENABLED)

    def _on_request_closed(self) -> None:
        self.set_buttons_enabled(False)
        if self.event_bus:
            self.event_bus.publish(DisplayEvent.CONTROLS_DISABLED)

    @abstractmethod
    def _post(self, command: DisplayCommand) -> None:
        """
        Run a display command on the foreground context.

        Override to decide when commands are applied. Commands must run in
        the order they were posted.
        """
        pass
