"""
Battle Kit

Infrastructure for turn-based battles driven through a display surface:
a typed event bus, pydantic components and config, the blocking action
rendezvous, and headless and pygame displays.

Quick Start:
    from battlekit.display import HeadlessDisplay

    display = HeadlessDisplay(actions=[0, 1, 2])
    display.set_action_buttons(["Attack", "Defend", "Heal", "Use Item"])
    code = display.wait_for_action()   # -> 0
"""

__version__ = "0.1.0"

from battlekit.core import (
    Component,
    EventBus,
    Event,
    DisplayEvent,
    WindowConfig,
    load_model,
    configure_logging,
    BattleKitError,
    ConfigError,
    ActionLabelError,
    RendezvousBusyError,
)
from battlekit.display import (
    DisplaySurface,
    CombatantView,
    ItemView,
    ActionRendezvous,
    NO_ACTION,
    HeadlessDisplay,
)

__all__ = [
    # Core
    "Component",
    "EventBus",
    "Event",
    "DisplayEvent",
    "WindowConfig",
    "load_model",
    "configure_logging",
    # Errors
    "BattleKitError",
    "ConfigError",
    "ActionLabelError",
    "RendezvousBusyError",
    # Display
    "DisplaySurface",
    "CombatantView",
    "ItemView",
    "ActionRendezvous",
    "NO_ACTION",
    "HeadlessDisplay",
]
