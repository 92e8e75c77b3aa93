"""Drawing and announcement capabilities consumed by the simulator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
import logging

import pygame

from .utils import BG_COLOR, TEXT_COLOR, Color

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font and colour for a line of text."""

    size: int = 20
    family: str = "arial"
    color: Color = TEXT_COLOR
    bold: bool = False


SCORE_STYLE = TextStyle()


class Display(Protocol):
    """Minimal drawing surface."""

    def get_surface_size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def draw_rectangle(self, x: float, y: float, width: float, height: float, color: Color) -> None: ...

    def draw_circle(self, x: float, y: float, radius: float, color: Color) -> None: ...

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None: ...


class Notifier(Protocol):
    """One-way channel for player-facing messages."""

    def announce(self, message: str) -> None: ...


class LogNotifier:
    """Notifier that only writes to the log."""

    def announce(self, message: str) -> None:
        logger.info("%s", message)


class PygameDisplay:
    """Display adapter over a pygame surface."""

    def __init__(self, surface: pygame.Surface, background: Color = BG_COLOR) -> None:
        self.surface = surface
        self.background = background
        self._fonts: dict[tuple[str, int, bool], pygame.font.Font] = {}

    def get_surface_size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def clear(self) -> None:
        self.surface.fill(self.background)

    def draw_rectangle(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(round(x), round(y), round(width), round(height)))

    def draw_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        pygame.draw.circle(self.surface, color, (round(x), round(y)), round(radius))

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        """Draw text with ``y`` as the baseline, like a canvas fillText."""
        font = self.font(style)
        rendered = font.render(text, True, style.color)
        self.surface.blit(rendered, (round(x), round(y) - font.get_ascent()))

    def font(self, style: TextStyle) -> pygame.font.Font:
        key = (style.family, style.size, style.bold)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont(style.family, style.size, bold=style.bold)
        return self._fonts[key]
