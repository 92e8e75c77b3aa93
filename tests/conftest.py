"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point save files at a per-test directory."""
    from rodbounce import utils

    data_dir = tmp_path / "data"
    monkeypatch.setattr(utils, "DATA_DIR", data_dir)
    monkeypatch.setattr(utils, "SETTINGS_FILE", data_dir / "settings.json")
    monkeypatch.setattr(utils, "HIGH_SCORE_FILE", data_dir / "high_score.json")
    return data_dir
