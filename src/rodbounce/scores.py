"""Best-score record persistence and the deferred name prompt."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Protocol
import logging

from . import utils
from .utils import load_json, save_json

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Anonymous"

NameCallback = Callable[[str | None], None]


@dataclass(frozen=True, slots=True)
class HighScoreRecord:
    """The single persisted best score."""

    name: str
    score: int

    @classmethod
    def from_payload(cls, payload: Any) -> HighScoreRecord | None:
        """Build a record from decoded JSON, or None when it is unusable."""
        if not isinstance(payload, dict):
            return None
        try:
            return cls(name=str(payload["name"]), score=int(payload["score"]))
        except (KeyError, TypeError, ValueError):
            return None


class NamePrompt(Protocol):
    """Asks the player for a name and reports it later through a callback."""

    def request_name(self, on_name: NameCallback) -> None: ...


class FixedNamePrompt:
    """Replies immediately with a preset name; used headless and in tests."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self.requests = 0

    def request_name(self, on_name: NameCallback) -> None:
        self.requests += 1
        on_name(self.name)


class ScoreStore:
    """Keeps the best-score record and decides when a round beats it.

    Subclasses only decide where the record lives by overriding
    ``_read`` and ``_write``.
    """

    def __init__(self, prompt: NamePrompt) -> None:
        self.prompt = prompt
        self.record: HighScoreRecord | None = None

    def load(self) -> HighScoreRecord | None:
        """Read the stored record once at startup."""
        self.record = self._read()
        if self.record is None:
            logger.info("No stored high score")
        else:
            logger.info("Loaded high score %d by %s", self.record.score, self.record.name)
        return self.record

    def is_new_record(self, score: int) -> bool:
        return self.record is None or score > self.record.score

    def check_and_update(self, score: int) -> HighScoreRecord | None:
        """Ask for a name and persist when ``score`` beats the stored record.

        The prompt may answer later; the returned record reflects whatever
        is known when this call returns.
        """
        if not self.is_new_record(score):
            return self.record
        logger.info("New high score %d, requesting player name", score)
        self.prompt.request_name(lambda name: self._commit(name, score))
        return self.record

    def _commit(self, name: str | None, score: int) -> None:
        name = name or DEFAULT_PLAYER_NAME
        self.record = HighScoreRecord(name=name, score=score)
        try:
            self._write(self.record)
        except OSError as exc:
            logger.warning("Could not persist high score: %s", exc)
            return
        logger.info("Saved high score %d by %s", score, name)

    def _read(self) -> HighScoreRecord | None:
        raise NotImplementedError

    def _write(self, record: HighScoreRecord) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    """Score store that never touches disk."""

    def __init__(self, prompt: NamePrompt, initial: HighScoreRecord | None = None) -> None:
        super().__init__(prompt)
        self._stored = initial
        self.writes: list[HighScoreRecord] = []

    def _read(self) -> HighScoreRecord | None:
        return self._stored

    def _write(self, record: HighScoreRecord) -> None:
        self._stored = record
        self.writes.append(record)


class JsonScoreStore(ScoreStore):
    """Score store backed by a small JSON file."""

    def __init__(self, prompt: NamePrompt, path: Path | None = None) -> None:
        super().__init__(prompt)
        self.path = path or utils.HIGH_SCORE_FILE

    def _read(self) -> HighScoreRecord | None:
        payload = load_json(self.path, None)
        record = HighScoreRecord.from_payload(payload)
        if payload is not None and record is None:
            logger.warning("Ignoring malformed high score file %s", self.path)
        return record

    def _write(self, record: HighScoreRecord) -> None:
        save_json(self.path, asdict(record))
