"""Shared constants and utility helpers for Rodbounce."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json
import os

SURFACE_WIDTH = 400
SURFACE_HEIGHT = 600
FPS = 60

PADDLE_WIDTH = 120
PADDLE_HEIGHT = 10
PADDLE_STEP = 20
PADDLE_MARGIN = 20
BALL_RADIUS = 10
SERVE_SPEED = 3

Color = Tuple[int, int, int]

BG_COLOR: Color = (255, 255, 255)
PADDLE_COLOR: Color = (0x33, 0x33, 0x33)
BALL_COLOR: Color = (0xE7, 0x4C, 0x3C)
TEXT_COLOR: Color = (0x33, 0x33, 0x33)
BUTTON_COLOR: Color = (0x2E, 0x86, 0xC1)
BUTTON_TEXT_COLOR: Color = (255, 255, 255)
BANNER_COLOR: Color = (20, 20, 20)

DATA_DIR = Path(os.environ.get("RODBOUNCE_DATA_DIR", ".rodbounce"))
SETTINGS_FILE = DATA_DIR / "settings.json"
HIGH_SCORE_FILE = DATA_DIR / "high_score.json"


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
