"""
Display module - the surface a battle is shown on.

Provides:
- DisplaySurface protocol and view snapshots
- ActionRendezvous (blocking action hand-off)
- BaseDisplay / HeadlessDisplay implementations
"""

from battlekit.display.rendezvous import (
    ActionRendezvous,
    NO_ACTION,
    ACTION_SLOTS,
)
from battlekit.display.surface import (
    DisplaySurface,
    CombatantView,
    ItemView,
    MessageLog,
    NO_HIGHLIGHT,
    validate_labels,
)
from battlekit.display.base import BaseDisplay, DisplayState
from battlekit.display.headless import HeadlessDisplay

__all__ = [
    # Rendezvous
    "ActionRendezvous",
    "NO_ACTION",
    "ACTION_SLOTS",
    # Surface
    "DisplaySurface",
    "CombatantView",
    "ItemView",
    "MessageLog",
    "NO_HIGHLIGHT",
    "validate_labels",
    # Implementations
    "BaseDisplay",
    "DisplayState",
    "HeadlessDisplay",
]
