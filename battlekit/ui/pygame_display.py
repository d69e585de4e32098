"""
Pygame display - a windowed display surface.

The window belongs to the main thread. The battle engine runs on a
worker thread and only ever posts commands into a queue; the frame loop
drains that queue, handles input and redraws:

    display = PygameDisplay(WindowConfig(title="Monster Battle"))
    worker = start_battle_thread(BattleEngine(display, config))
    display.run(worker)          # returns when the window is closed

Layout:
    ┌──────────────────────────────────┬───────────┐
    │            MONSTERS              │ INVENTORY │
    │   [tile] [tile] [tile]           │  Potion   │
    │                                  │  Bomb     │
    ├──────────────────────────────────┤           │
    │ HP ████████░░░  80 / 100         │           │
    │ [Attack] [Defend] [Heal] [Item]  │           │
    ├──────────────────────────────────┴───────────┤
    │                 messages                     │
    └──────────────────────────────────────────────┘
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import pygame

from battlekit.core.config import WindowConfig
from battlekit.core.events import EventBus
from battlekit.display.base import BaseDisplay, DisplayCommand
from battlekit.display.rendezvous import ACTION_SLOTS
from battlekit.display.surface import CombatantView
from battlekit.ui import widgets

logger = logging.getLogger(__name__)

MARGIN = 10
INVENTORY_WIDTH = 200
MESSAGE_HEIGHT = 100
STATUS_HEIGHT = 60
BUTTON_HEIGHT = 64
TILE_COLUMNS = 3
TILE_HEIGHT = 150

ACTION_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
}


@dataclass
class BattleLayout:
    """Screen regions for a given window size."""
    monsters: pygame.Rect
    inventory: pygame.Rect
    status: pygame.Rect
    messages: pygame.Rect
    buttons: list[pygame.Rect] = field(default_factory=list)

    @classmethod
    def compute(cls, width: int, height: int) -> BattleLayout:
        """Split a window of ``width`` x ``height`` into panels."""
        messages = pygame.Rect(MARGIN, height - MARGIN - MESSAGE_HEIGHT,
                               width - 2 * MARGIN, MESSAGE_HEIGHT)
        inventory = pygame.Rect(width - MARGIN - INVENTORY_WIDTH, MARGIN,
                                INVENTORY_WIDTH, messages.top - 2 * MARGIN)
        left_width = inventory.left - 2 * MARGIN

        button_top = messages.top - MARGIN - BUTTON_HEIGHT
        status = pygame.Rect(MARGIN, button_top - MARGIN - STATUS_HEIGHT,
                             left_width, STATUS_HEIGHT)
        monsters = pygame.Rect(MARGIN, MARGIN, left_width, status.top - 2 * MARGIN)

        button_width = (left_width - (ACTION_SLOTS - 1) * MARGIN) // ACTION_SLOTS
        buttons = [
            pygame.Rect(MARGIN + i * (button_width + MARGIN), button_top,
                        button_width, BUTTON_HEIGHT)
            for i in range(ACTION_SLOTS)
        ]
        return cls(monsters, inventory, status, messages, buttons)

    def button_at(self, pos: tuple[int, int]) -> Optional[int]:
        """Index of the button under ``pos``, if any."""
        for i, rect in enumerate(self.buttons):
            if rect.collidepoint(pos):
                return i
        return None

    def tile_rect(self, index: int) -> pygame.Rect:
        """Rect of the ``index``-th combatant tile."""
        tile_width = (self.monsters.width - (TILE_COLUMNS + 1) * MARGIN) // TILE_COLUMNS
        row, col = divmod(index, TILE_COLUMNS)
        return pygame.Rect(
            self.monsters.x + MARGIN + col * (tile_width + MARGIN),
            self.monsters.y + 40 + row * (TILE_HEIGHT + MARGIN),
            tile_width,
            TILE_HEIGHT,
        )


class PygameDisplay(BaseDisplay):
    """
    Display surface backed by a pygame window.

    Construction does not touch pygame; ``open()`` (or ``run()``) creates
    the window, so the object can be built and wired up off-screen.
    """

    def __init__(
        self,
        config: Optional[WindowConfig] = None,
        event_bus: Optional[EventBus] = None,
        action_timeout: Optional[float] = None,
    ):
        super().__init__(event_bus=event_bus, action_timeout=action_timeout)
        self.config = config or WindowConfig()
        self.layout = BattleLayout.compute(self.config.width, self.config.height)

        self._commands: queue.SimpleQueue = queue.SimpleQueue()
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[Any] = None
        self._fonts: dict[str, Any] = {}
        self._mouse_pos: tuple[int, int] = (0, 0)

    # Lifecycle

    def open(self) -> None:
        """Create the window and fonts."""
        if self._screen is not None:
            return

        pygame.init()
        self._screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption(self.config.title)
        self._clock = pygame.time.Clock()

        name = self.config.font_name
        self._fonts = {
            "title": pygame.font.SysFont(name, 22, bold=True),
            "body": pygame.font.SysFont(name, 18),
            "small": pygame.font.SysFont(name, 14),
            "message": pygame.font.SysFont(name, 20, bold=True),
        }
        logger.info(f"Opened window {self.config.width}x{self.config.height}")

    def run(self, worker: Optional[threading.Thread] = None) -> None:
        """
        Run the frame loop until the window is closed.

        The window stays open after the worker finishes so the final
        message can be read.
        """
        self.open()
        worker_done_logged = False

        try:
            while not self.is_closed:
                for event in pygame.event.get():
                    self.handle_event(event)

                self.drain()
                self.render()
                pygame.display.flip()
                self._clock.tick(self.config.fps)

                if worker is not None and not worker.is_alive() and not worker_done_logged:
                    logger.info("Battle worker finished; close the window to exit")
                    worker_done_logged = True
        finally:
            self.close()
            pygame.quit()

    # Foreground processing

    def drain(self) -> int:
        """Apply queued commands in send order. Returns how many ran."""
        count = 0
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                return count
            command(self.state)
            count += 1

    def handle_event(self, event: Any) -> None:
        """Translate one pygame event."""
        if event.type == pygame.QUIT:
            logger.info("Window closed by user")
            self.close()

        elif event.type == pygame.MOUSEMOTION:
            self._mouse_pos = event.pos

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            index = self.layout.button_at(event.pos)
            if index is not None:
                self._click(index)

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.close()
            elif event.key in ACTION_KEYS:
                self._click(ACTION_KEYS[event.key])

    def _click(self, index: int) -> None:
        if not self.state.buttons_enabled:
            return
        # Disable at once so a double click cannot queue a second choice
        self.state.buttons_enabled = False
        self.submit_action(index)

    def _post(self, command: DisplayCommand) -> None:
        self._commands.put(command)

    # Rendering

    def render(self) -> None:
        """Draw the whole window from the current state."""
        screen = self._screen
        if screen is None:
            return

        screen.fill(widgets.WINDOW_BG)
        self._render_monsters(screen)
        self._render_inventory(screen)
        self._render_status(screen)
        self._render_buttons(screen)
        self._render_messages(screen)

    def _render_monsters(self, screen: pygame.Surface) -> None:
        area = self.layout.monsters
        widgets.draw_panel(screen, area)
        widgets.draw_text(screen, "MONSTERS", self._fonts["title"], (area.x + MARGIN, area.y + MARGIN))

        for i, combatant in enumerate(self.state.combatants):
            self._render_tile(screen, self.layout.tile_rect(i), combatant,
                              highlighted=(i == self.state.highlight))

    def _render_tile(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        combatant: CombatantView,
        highlighted: bool,
    ) -> None:
        alive = combatant.is_alive
        border = widgets.HIGHLIGHT_BORDER if highlighted else widgets.PANEL_BORDER
        widgets.draw_panel(
            screen, rect,
            bg=widgets.TILE_BG if alive else widgets.TILE_DEFEATED,
            border=border,
            border_width=4 if highlighted else 2,
        )

        body, small = self._fonts["body"], self._fonts["small"]
        color = widgets.TEXT_COLOR if alive else widgets.OLDEST_TEXT_COLOR
        x, y = rect.x + MARGIN, rect.y + MARGIN

        widgets.draw_text(screen, combatant.name, self._fonts["title"], (x, y), color)
        if not alive:
            widgets.draw_text(screen, "DEFEATED", body, (x, y + 30), widgets.BAR_BAD)
            return

        widgets.draw_health_bar(screen, pygame.Rect(x, y + 32, rect.width - 2 * MARGIN, 14),
                                combatant.health_percent)
        widgets.draw_text(screen, f"HP {combatant.health}", small, (x, y + 52), color)
        widgets.draw_text(screen, f"DMG {combatant.damage:.2f}", small, (x, y + 72), color)
        widgets.draw_text(screen, f"SPD {combatant.speed}", small, (x, y + 92), color)
        if combatant.special:
            widgets.draw_text(screen, combatant.special, small, (x, y + 112), widgets.HIGHLIGHT_BORDER)

    def _render_inventory(self, screen: pygame.Surface) -> None:
        area = self.layout.inventory
        widgets.draw_panel(screen, area)
        widgets.draw_text(screen, "INVENTORY", self._fonts["title"], (area.x + MARGIN, area.y + MARGIN))

        y = area.y + 45
        if not self.state.items:
            widgets.draw_text(screen, "(empty)", self._fonts["body"], (area.x + MARGIN, y),
                              widgets.OLDEST_TEXT_COLOR)
            return

        for item in self.state.items:
            widgets.draw_text(screen, f"{item.icon} {item.name}", self._fonts["body"], (area.x + MARGIN, y))
            y += 28

    def _render_status(self, screen: pygame.Surface) -> None:
        area = self.layout.status
        widgets.draw_panel(screen, area)
        state = self.state
        widgets.draw_text(screen, "HP", self._fonts["title"], (area.x + MARGIN, area.centery - 11))
        bar = pygame.Rect(area.x + 60, area.centery - 10, area.width // 2, 20)
        widgets.draw_health_bar(screen, bar, state.player_health_percent)
        widgets.draw_text(
            screen,
            f"{max(0, state.player_health)} / {state.player_max_health}",
            self._fonts["body"],
            (bar.right + 2 * MARGIN, area.centery - 9),
        )

    def _render_buttons(self, screen: pygame.Surface) -> None:
        for rect, label in zip(self.layout.buttons, self.state.labels):
            widgets.draw_button(
                screen, rect, label, self._fonts["body"],
                enabled=self.state.buttons_enabled,
                hovered=rect.collidepoint(self._mouse_pos),
            )

    def _render_messages(self, screen: pygame.Surface) -> None:
        area = self.layout.messages
        widgets.draw_panel(screen, area, border=widgets.MESSAGE_BORDER)

        messages = self.state.messages
        styles = [
            (self._fonts["small"], widgets.OLDEST_TEXT_COLOR),
            (self._fonts["body"], widgets.PREVIOUS_TEXT_COLOR),
            (self._fonts["message"], widgets.TEXT_COLOR),
        ]
        # Newest message takes the last (brightest) style
        styles = styles[len(styles) - len(messages):] if messages else []
        for line, (text, (font, color)) in enumerate(zip(messages, styles)):
            widgets.draw_text(screen, text, font, (area.centerx, area.y + 18 + line * 28),
                              color, center=True)
