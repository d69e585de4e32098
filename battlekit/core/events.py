"""
Typed event bus for decoupled communication.

Uses Enums for event types so observers (loggers, displays, tests)
can follow a battle without the engine knowing about them.

Usage:
    # Define events
    class BattleEvent(Enum):
        DAMAGE_DEALT = auto()
        VICTORY = auto()

    # Subscribe
    event_bus.subscribe(BattleEvent.DAMAGE_DEALT, on_damage)

    # Publish
    event_bus.publish(BattleEvent.DAMAGE_DEALT, amount=12, target=0)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class DisplayEvent(Enum):
    """Events raised by display surfaces."""
    CONTROLS_ENABLED = auto()
    CONTROLS_DISABLED = auto()
    ACTION_SUBMITTED = auto()
    ACTION_REJECTED = auto()
    WINDOW_CLOSED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def __getitem__(self, key: str) -> Any:
        """Get event data by key (dict-style)."""
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Features:
    - Typed events (Enum-based)
    - Priority ordering
    - Weak references (auto-cleanup when handlers are deleted)
    - One-shot handlers
    - Event consumption (stops propagation)

    Subscriptions may come from the foreground thread while the battle
    worker publishes, so the handler table is guarded by a lock. Handlers
    themselves run on the publishing thread.
    """

    def __init__(self):
        # event type -> list of (priority, handler_ref, one_shot)
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False
        self._lock = threading.RLock()

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, use weak reference (handler auto-removed if deleted)
        """
        if weak:
            if hasattr(handler, '__self__'):
                handler_ref = WeakMethod(handler)
            else:
                handler_ref = ref(handler)
        else:
            handler_ref = handler

        with self._lock:
            handlers = self._handlers.setdefault(event_type, [])
            entry = (priority, handler_ref, one_shot)

            # Stable insert: after every handler of equal or higher priority
            insert_idx = len(handlers)
            for i, (p, _, _) in enumerate(handlers):
                if priority > p:
                    insert_idx = i
                    break

            handlers.insert(insert_idx, entry)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Unsubscribe a handler from an event type."""
        with self._lock:
            if event_type not in self._handlers:
                return

            self._handlers[event_type] = [
                (p, h, o) for p, h, o in self._handlers[event_type]
                if self._get_handler(h) != handler
            ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        with self._lock:
            if self._is_publishing:
                # Re-entrant publish from inside a handler
                self._event_queue.append(event)
            else:
                self._dispatch(event)
        return event

    def handler_count(self, event_type: Enum) -> int:
        """Number of live handlers for an event type."""
        with self._lock:
            return sum(
                1 for _, h, _ in self._handlers.get(event_type, [])
                if self._get_handler(h) is not None
            )

    def _dispatch(self, event: Event) -> None:
        """Dispatch event to handlers. Caller holds the lock."""
        self._is_publishing = True
        try:
            self._dispatch_one(event)
            while self._event_queue:
                self._dispatch_one(self._event_queue.pop(0))
        finally:
            self._is_publishing = False

    def _dispatch_one(self, event: Event) -> None:
        handlers = self._handlers.get(event.type)
        if not handlers:
            return

        to_remove = []
        for entry in list(handlers):
            _, handler_ref, one_shot = entry
            handler = self._get_handler(handler_ref)

            if handler is None:
                # Weak reference was garbage collected
                to_remove.append(entry)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

            if one_shot:
                to_remove.append(entry)

            if event.consumed:
                break

        for entry in to_remove:
            if entry in handlers:
                handlers.remove(entry)

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        """Resolve handler from reference."""
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
