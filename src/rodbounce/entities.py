"""Paddle and ball entities plus the small enums shared by the core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Side(str, Enum):
    """Which paddle a value refers to."""

    TOP = "top"
    BOTTOM = "bottom"

    @property
    def opposite(self) -> Side:
        return Side.BOTTOM if self is Side.TOP else Side.TOP


class InputCommand(Enum):
    """Discrete commands delivered by the input channel."""

    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SERVE = auto()


@dataclass(slots=True)
class Paddle:
    """Horizontal rod; only x changes after construction."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def spans(self, x: float) -> bool:
        """Return whether x lies within the paddle's horizontal extent."""
        return self.x <= x <= self.x + self.width


@dataclass(slots=True)
class Ball:
    """Ball position, fixed radius, and per-tick velocity."""

    x: float
    y: float
    radius: float
    dx: float = 0
    dy: float = 0

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    @property
    def left(self) -> float:
        return self.x - self.radius

    @property
    def right(self) -> float:
        return self.x + self.radius

    @property
    def is_moving(self) -> bool:
        return self.dx != 0 or self.dy != 0

    def advance(self) -> None:
        """Integrate one tick of velocity."""
        self.x += self.dx
        self.y += self.dy

    def stop(self) -> None:
        self.dx = 0
        self.dy = 0
