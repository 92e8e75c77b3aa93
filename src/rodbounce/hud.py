"""On-screen widgets drawn over the playfield: start button, banner, name entry."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging

import pygame

from .scores import NameCallback
from .utils import BANNER_COLOR, BUTTON_COLOR, BUTTON_TEXT_COLOR, TEXT_COLOR

logger = logging.getLogger(__name__)

BANNER_DURATION_MS = 2500
MAX_NAME_LENGTH = 16


class StartButton:
    """Clickable "Start Game" button, shown only while the ball is idle."""

    def __init__(self, center: tuple[int, int], label: str = "Start Game") -> None:
        self.label = label
        self.rect = pygame.Rect(0, 0, 140, 36)
        self.rect.center = center
        self.visible = True

    def hit(self, position: tuple[int, int]) -> bool:
        return self.visible and self.rect.collidepoint(position)

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        if not self.visible:
            return
        pygame.draw.rect(surface, BUTTON_COLOR, self.rect, border_radius=6)
        text = font.render(self.label, True, BUTTON_TEXT_COLOR)
        surface.blit(text, text.get_rect(center=self.rect.center))


@dataclass(slots=True)
class _BannerMessage:
    text: str
    remaining_ms: float


class Banner:
    """Notifier that shows each announcement on screen for a short time."""

    def __init__(self, duration_ms: float = BANNER_DURATION_MS) -> None:
        self.duration_ms = duration_ms
        self.queue: deque[_BannerMessage] = deque()

    def announce(self, message: str) -> None:
        logger.info("%s", message)
        self.queue.append(_BannerMessage(message, self.duration_ms))

    @property
    def current(self) -> str | None:
        return self.queue[0].text if self.queue else None

    def update(self, dt_ms: float) -> None:
        """Age the front message and drop it once expired."""
        if not self.queue:
            return
        self.queue[0].remaining_ms -= dt_ms
        if self.queue[0].remaining_ms <= 0:
            self.queue.popleft()

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        if not self.queue:
            return
        text = font.render(self.queue[0].text, True, BUTTON_TEXT_COLOR)
        box = text.get_rect(center=(surface.get_width() // 2, surface.get_height() // 2 - 60))
        box.inflate_ip(24, 16)
        pygame.draw.rect(surface, BANNER_COLOR, box, border_radius=6)
        surface.blit(text, text.get_rect(center=box.center))


class NameEntry:
    """Keyboard text field that answers a pending name request.

    While a request is open the host routes key presses here instead of to
    the paddles. Enter submits (an empty field counts as no name), Escape cancels.
    """

    def __init__(self, title: str = "New High Score! Enter your name:") -> None:
        self.title = title
        self.text = ""
        self._on_name: NameCallback | None = None

    @property
    def active(self) -> bool:
        return self._on_name is not None

    def request_name(self, on_name: NameCallback) -> None:
        self.text = ""
        self._on_name = on_name

    def handle_key(self, key: int, unicode: str = "") -> None:
        if not self.active:
            return
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._finish(self.text or None)
        elif key == pygame.K_ESCAPE:
            self._finish(None)
        elif key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif unicode and unicode.isprintable() and len(self.text) < MAX_NAME_LENGTH:
            self.text += unicode

    def _finish(self, name: str | None) -> None:
        callback = self._on_name
        self._on_name = None
        self.text = ""
        if callback is not None:
            callback(name)

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        if not self.active:
            return
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        surface.blit(overlay, (0, 0))

        cx = surface.get_width() // 2
        cy = surface.get_height() // 2
        title = font.render(self.title, True, BUTTON_TEXT_COLOR)
        surface.blit(title, title.get_rect(center=(cx, cy - 30)))

        field = pygame.Rect(0, 0, min(surface.get_width() - 40, 280), 34)
        field.center = (cx, cy + 10)
        pygame.draw.rect(surface, BUTTON_TEXT_COLOR, field, border_radius=4)
        entry = font.render(self.text + "_", True, TEXT_COLOR)
        surface.blit(entry, (field.x + 8, field.centery - entry.get_height() // 2))
