"""
Core module.

Exports:
- Component: pydantic component base
- EventBus, Event, DisplayEvent: event system
- WindowConfig, load_model: configuration
- configure_logging: logging setup for entry points
- BattleKitError and subclasses
"""

from battlekit.core.component import Component
from battlekit.core.events import EventBus, Event, DisplayEvent
from battlekit.core.config import WindowConfig, load_model
from battlekit.core.log import configure_logging
from battlekit.core.errors import (
    BattleKitError,
    ConfigError,
    ActionLabelError,
    RendezvousBusyError,
)

__all__ = [
    # Components
    "Component",
    # Events
    "EventBus",
    "Event",
    "DisplayEvent",
    # Config
    "WindowConfig",
    "load_model",
    "configure_logging",
    # Errors
    "BattleKitError",
    "ConfigError",
    "ActionLabelError",
    "RendezvousBusyError",
]
