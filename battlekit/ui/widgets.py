"""
Immediate-mode drawing helpers for the battle window.

Plain pygame.draw calls; every helper takes the target surface and a
rect and keeps no state between frames.
"""

from __future__ import annotations

from typing import Optional

import pygame

# Colors
WINDOW_BG = (24, 24, 32)
PANEL_BG = (30, 30, 40)
PANEL_BORDER = (90, 90, 110)
MESSAGE_BORDER = (0, 200, 200)
TEXT_COLOR = (255, 255, 255)
PREVIOUS_TEXT_COLOR = (180, 180, 180)
OLDEST_TEXT_COLOR = (120, 120, 120)
BUTTON_BG = (70, 130, 180)
BUTTON_HOVER = (100, 149, 237)
BUTTON_DISABLED = (100, 100, 100)
TILE_BG = (50, 40, 60)
TILE_DEFEATED = (45, 45, 45)
HIGHLIGHT_BORDER = (255, 220, 60)
BAR_BG = (60, 60, 60)
BAR_GOOD = (60, 200, 90)
BAR_WARN = (230, 190, 40)
BAR_BAD = (220, 60, 60)


def health_color(percent: float) -> tuple[int, int, int]:
    """Bar color for a health fraction."""
    if percent > 0.5:
        return BAR_GOOD
    if percent > 0.25:
        return BAR_WARN
    return BAR_BAD


def draw_panel(
    surface: pygame.Surface,
    rect: pygame.Rect,
    bg: tuple[int, int, int] = PANEL_BG,
    border: Optional[tuple[int, int, int]] = PANEL_BORDER,
    border_width: int = 2,
) -> None:
    """Filled rectangle with an optional border."""
    pygame.draw.rect(surface, bg, rect, border_radius=6)
    if border:
        pygame.draw.rect(surface, border, rect, border_width, border_radius=6)


def draw_text(
    surface: pygame.Surface,
    text: str,
    font: pygame.font.Font,
    pos: tuple[int, int],
    color: tuple[int, int, int] = TEXT_COLOR,
    center: bool = False,
) -> pygame.Rect:
    """Blit one line of text. ``pos`` is top-left, or the center if asked."""
    image = font.render(text, True, color)
    rect = image.get_rect()
    if center:
        rect.center = pos
    else:
        rect.topleft = pos
    surface.blit(image, rect)
    return rect


def draw_health_bar(
    surface: pygame.Surface,
    rect: pygame.Rect,
    percent: float,
) -> None:
    """Horizontal bar filled to ``percent`` (0-1)."""
    percent = max(0.0, min(1.0, percent))
    pygame.draw.rect(surface, BAR_BG, rect, border_radius=4)
    if percent > 0:
        fill = pygame.Rect(rect.x, rect.y, int(rect.width * percent), rect.height)
        pygame.draw.rect(surface, health_color(percent), fill, border_radius=4)
    pygame.draw.rect(surface, TEXT_COLOR, rect, 1, border_radius=4)


def draw_button(
    surface: pygame.Surface,
    rect: pygame.Rect,
    label: str,
    font: pygame.font.Font,
    enabled: bool,
    hovered: bool = False,
) -> None:
    """Action button; greyed out while disabled."""
    if not enabled:
        bg = BUTTON_DISABLED
    elif hovered:
        bg = BUTTON_HOVER
    else:
        bg = BUTTON_BG
    draw_panel(surface, rect, bg=bg, border=TEXT_COLOR)
    draw_text(surface, label, font, rect.center, center=True)
