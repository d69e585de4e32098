"""
UI module - pygame window for battles.

Exports:
- PygameDisplay: windowed display surface
- BattleLayout: panel geometry
"""

from battlekit.ui.pygame_display import PygameDisplay, BattleLayout

__all__ = [
    "PygameDisplay",
    "BattleLayout",
]
