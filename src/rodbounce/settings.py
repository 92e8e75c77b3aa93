"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
import logging

import pygame

from . import utils
from .utils import load_json, save_json

logger = logging.getLogger(__name__)


class ServeTrigger(str, Enum):
    """Which host inputs are allowed to serve the ball."""

    KEY = "key"
    BUTTON = "button"
    BOTH = "both"

    @property
    def uses_key(self) -> bool:
        return self in (ServeTrigger.KEY, ServeTrigger.BOTH)

    @property
    def uses_button(self) -> bool:
        return self in (ServeTrigger.BUTTON, ServeTrigger.BOTH)


@dataclass(slots=True)
class ControlScheme:
    """Key bindings for the shared paddle controls."""

    left: int = pygame.K_LEFT
    right: int = pygame.K_RIGHT
    serve: int = pygame.K_RETURN


@dataclass(slots=True)
class PhysicsSettings:
    """Sizes and speeds of the playfield entities."""

    paddle_width: int = utils.PADDLE_WIDTH
    paddle_height: int = utils.PADDLE_HEIGHT
    paddle_step: int = utils.PADDLE_STEP
    paddle_margin: int = utils.PADDLE_MARGIN
    ball_radius: int = utils.BALL_RADIUS
    serve_speed: int = utils.SERVE_SPEED


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    surface_width: int = utils.SURFACE_WIDTH
    surface_height: int = utils.SURFACE_HEIGHT
    fps: int = utils.FPS
    serve_trigger: ServeTrigger = ServeTrigger.BOTH
    controls: ControlScheme = field(default_factory=ControlScheme)
    physics: PhysicsSettings = field(default_factory=PhysicsSettings)

    @property
    def surface_size(self) -> tuple[int, int]:
        return (self.surface_width, self.surface_height)


class SettingsManager:
    """Load and save game settings."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or utils.SETTINGS_FILE
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = self._section(load_json(self.path, {}), "settings")
        settings = GameSettings()

        settings.surface_width = self._int(raw, "surface_width", settings.surface_width)
        settings.surface_height = self._int(raw, "surface_height", settings.surface_height)
        settings.fps = max(1, self._int(raw, "fps", settings.fps))

        if raw.get("serve_trigger") in {e.value for e in ServeTrigger}:
            settings.serve_trigger = ServeTrigger(raw["serve_trigger"])

        controls = self._section(raw.get("controls", {}), "controls")
        settings.controls = ControlScheme(
            left=self._int(controls, "left", settings.controls.left),
            right=self._int(controls, "right", settings.controls.right),
            serve=self._int(controls, "serve", settings.controls.serve),
        )

        physics = self._section(raw.get("physics", {}), "physics")
        defaults = settings.physics
        settings.physics = PhysicsSettings(
            paddle_width=self._int(physics, "paddle_width", defaults.paddle_width),
            paddle_height=self._int(physics, "paddle_height", defaults.paddle_height),
            paddle_step=self._int(physics, "paddle_step", defaults.paddle_step),
            paddle_margin=self._int(physics, "paddle_margin", defaults.paddle_margin),
            ball_radius=self._int(physics, "ball_radius", defaults.ball_radius),
            serve_speed=self._int(physics, "serve_speed", defaults.serve_speed),
        )
        return settings

    def _section(self, payload: object, name: str) -> dict:
        if isinstance(payload, dict):
            return payload
        logger.warning("Ignoring malformed %s section in %s", name, self.path)
        return {}

    def _int(self, payload: dict, key: str, default: int) -> int:
        try:
            return int(payload.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s=%r in %s", key, payload[key], self.path)
            return default

    def save(self) -> None:
        """Persist settings to disk."""
        payload = asdict(self.settings)
        payload["serve_trigger"] = self.settings.serve_trigger.value
        save_json(self.path, payload)
