"""
Headless display - a display surface with no window.

Used by the test suite and by the ``--headless`` autoplay mode. Pushes
are applied immediately, and action requests can be answered from a
script of codes or a chooser callback:

    display = HeadlessDisplay(actions=[0, 0, 3])   # build, attack, item
    engine = BattleEngine(display, config)
    engine.run()                                    # aborts when script ends

With neither a script nor a chooser, requests wait for
``submit_action`` from another thread, like a real window.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Callable, Iterable, Optional

from battlekit.core.events import EventBus
from battlekit.display.base import BaseDisplay, DisplayCommand, DisplayState
from battlekit.display.surface import MessageLog

logger = logging.getLogger(__name__)

ActionChooser = Callable[[DisplayState], Optional[int]]


class HeadlessDisplay(BaseDisplay):
    """
    In-memory display surface.

    Args:
        actions: Scripted action codes, answered in order
        chooser: Callback picking a code from the current state;
            returning None ends the session
        event_bus: Optional bus for display events
        action_timeout: Seconds before an unanswered request gives up
        real_time: Honour pause() durations instead of skipping them
    """

    def __init__(
        self,
        actions: Optional[Iterable[int]] = None,
        chooser: Optional[ActionChooser] = None,
        event_bus: Optional[EventBus] = None,
        action_timeout: Optional[float] = None,
        real_time: bool = False,
    ):
        super().__init__(event_bus=event_bus, action_timeout=action_timeout)
        self._lock = threading.Lock()
        self._script = iter(actions) if actions is not None else None
        self._chooser = chooser
        self.real_time = real_time

        # History for tests and logs
        self.transcript: list[str] = []
        self.highlights: list[int] = []
        self.label_sets: list[tuple[str, ...]] = []
        self.request_count = 0

    @property
    def is_scripted(self) -> bool:
        return self._script is not None or self._chooser is not None

    def snapshot(self) -> DisplayState:
        """Copy of the current display state."""
        with self._lock:
            return dataclasses.replace(
                self.state,
                log=MessageLog(initial=self.state.messages),
            )

    # Recording overrides

    def display_message(self, message: str) -> None:
        with self._lock:
            self.transcript.append(message)
        logger.info(message)
        super().display_message(message)

    def highlight_combatant(self, index: int) -> None:
        with self._lock:
            self.highlights.append(index)
        super().highlight_combatant(index)

    def set_action_buttons(self, labels) -> None:
        super().set_action_buttons(labels)
        with self._lock:
            self.label_sets.append(self.state.labels)

    def pause(self, seconds: float) -> None:
        if self.real_time:
            super().pause(seconds)

    # Internal

    def _post(self, command: DisplayCommand) -> None:
        with self._lock:
            command(self.state)

    def _on_request_opened(self) -> None:
        super()._on_request_opened()
        self.request_count += 1

        if not self.is_scripted:
            return

        code = self._next_code()
        if code is None:
            logger.info("Action script exhausted, closing headless display")
            self.close()
            return

        if not self.submit_action(code):
            # Nobody else will answer a scripted request
            logger.warning(f"Scripted action {code!r} rejected, closing headless display")
            self.close()

    def _next_code(self) -> Optional[int]:
        if self._chooser is not None:
            return self._chooser(self.snapshot())
        return next(self._script, None)
