from __future__ import annotations

import logging
import random

from rodbounce.display import LogNotifier, TextStyle
from rodbounce.entities import InputCommand, Side
from rodbounce.scores import FixedNamePrompt, HighScoreRecord, MemoryScoreStore
from rodbounce.simulator import RoundSimulator


class RecordingDisplay:
    def __init__(self, size: tuple[int, int] = (400, 600)) -> None:
        self.size = size
        self.calls: list[tuple] = []

    def get_surface_size(self) -> tuple[int, int]:
        return self.size

    def clear(self) -> None:
        self.calls.append(("clear",))

    def draw_rectangle(self, x, y, width, height, color) -> None:
        self.calls.append(("rect", x, y, width, height))

    def draw_circle(self, x, y, radius, color) -> None:
        self.calls.append(("circle", x, y, radius))

    def draw_text(self, text: str, x, y, style: TextStyle) -> None:
        self.calls.append(("text", text, x, y))


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def announce(self, message: str) -> None:
        self.messages.append(message)


def _simulator(
    record: HighScoreRecord | None = None, name: str | None = "Ada"
) -> tuple[RoundSimulator, MemoryScoreStore, RecordingNotifier]:
    store = MemoryScoreStore(FixedNamePrompt(name), initial=record)
    notifier = RecordingNotifier()
    return RoundSimulator(RecordingDisplay(), store, notifier), store, notifier


def _launch(sim: RoundSimulator, x: float, y: float, dx: float, dy: float) -> None:
    sim.is_playing = True
    sim.ball.x, sim.ball.y, sim.ball.dx, sim.ball.dy = x, y, dx, dy


def test_initial_layout() -> None:
    sim, _, _ = _simulator()
    assert sim.top.x == sim.bottom.x == 140
    assert sim.top.y == 20
    assert sim.bottom.y == 570
    assert (sim.ball.x, sim.ball.y) == (200, 300)
    assert not sim.is_playing
    assert sim.serve_from == Side.BOTTOM


def test_greeting_without_record() -> None:
    _, _, notifier = _simulator()
    assert notifier.messages == ["This is your first time"]


def test_greeting_with_record() -> None:
    _, _, notifier = _simulator(record=HighScoreRecord("Bo", 7))
    assert notifier.messages == ["Highest Score: 7 by Bo"]


def test_paddles_stay_clamped_and_in_lockstep() -> None:
    sim, _, _ = _simulator()
    rng = random.Random(1234)
    for _ in range(500):
        sim.apply(rng.choice([InputCommand.MOVE_LEFT, InputCommand.MOVE_RIGHT]))
        assert 0 <= sim.top.x <= 400 - 120
        assert sim.top.x == sim.bottom.x


def test_move_clamps_at_edges() -> None:
    sim, _, _ = _simulator()
    for _ in range(20):
        sim.apply(InputCommand.MOVE_LEFT)
    assert sim.top.x == 0
    for _ in range(20):
        sim.apply(InputCommand.MOVE_RIGHT)
    assert sim.bottom.x == 280


def test_move_does_not_carry_idle_ball() -> None:
    sim, _, _ = _simulator()
    sim.apply(InputCommand.MOVE_RIGHT)
    assert sim.top.x == 160
    assert sim.ball.x == 200


def test_unknown_command_is_ignored() -> None:
    sim, _, _ = _simulator()
    before = sim.snapshot()
    sim.apply("jump")  # type: ignore[arg-type]
    sim.move(0)
    assert sim.snapshot() == before


def test_idle_update_is_noop() -> None:
    sim, _, _ = _simulator()
    before = sim.snapshot()
    sim.update()
    assert sim.snapshot() == before
    assert not sim.ball.is_moving


def test_serve_from_bottom_goes_up() -> None:
    sim, _, _ = _simulator()
    assert sim.serve()
    assert (sim.ball.dx, sim.ball.dy) == (3, -3)
    assert sim.is_playing


def test_serve_while_playing_is_noop() -> None:
    sim, _, _ = _simulator()
    sim.serve()
    sim.ball.dx = -7
    assert not sim.serve()
    assert sim.ball.dx == -7


def test_wall_bounce_flips_dx_without_correction() -> None:
    sim, _, _ = _simulator()
    _launch(sim, x=395, y=300, dx=3, dy=3)
    sim.update()
    assert sim.ball.x == 398
    assert sim.ball.dx == -3

    _launch(sim, x=11, y=300, dx=-3, dy=3)
    sim.update()
    assert sim.ball.dx == 3


def test_bottom_paddle_bounce_scores() -> None:
    sim, _, _ = _simulator()
    _launch(sim, x=200, y=560, dx=0, dy=5)
    sim.update()
    assert sim.ball.y == 565
    assert sim.ball.dy == -5
    assert sim.score == 1


def test_top_paddle_bounce_scores() -> None:
    sim, _, _ = _simulator()
    _launch(sim, x=150, y=42, dx=0, dy=-4)
    sim.update()
    assert sim.ball.dy == 4
    assert sim.score == 1


def test_collision_uses_ball_center_x() -> None:
    sim, _, _ = _simulator()
    # Ball edge overlaps the paddle, centre does not.
    _launch(sim, x=135, y=560, dx=0, dy=5)
    sim.update()
    assert sim.ball.dy == 5
    assert sim.score == 0


def test_bottom_paddle_ignored_while_moving_up() -> None:
    sim, _, _ = _simulator()
    _launch(sim, x=200, y=568, dx=0, dy=-3)
    sim.update()
    assert sim.ball.dy == -3
    assert sim.score == 0


def test_score_increases_once_per_bounce() -> None:
    sim, _, _ = _simulator()
    sim.serve()
    scores = [sim.score]
    for _ in range(400):
        sim.top.x = sim.bottom.x = max(0, min(280, sim.ball.x - 60))
        sim.update()
        if not sim.is_playing:
            break
        assert sim.score - scores[-1] in (0, 1)
        scores.append(sim.score)
    assert scores[-1] >= 2


def test_ball_exits_top_bottom_rod_wins() -> None:
    sim, store, notifier = _simulator()
    sim.score = 4
    _launch(sim, x=300, y=15, dx=0, dy=-10)
    sim.update()
    assert not sim.is_playing
    assert sim.serve_from == Side.TOP
    assert sim.score == 0
    assert notifier.messages[-1] == "Round Over! Bottom rod wins with score: 4"
    assert store.record == HighScoreRecord("Ada", 4)


def test_ball_exits_bottom_top_rod_wins() -> None:
    sim, _, notifier = _simulator()
    _launch(sim, x=5, y=595, dx=0, dy=3)
    sim.update()
    assert sim.serve_from == Side.BOTTOM
    assert notifier.messages[-1] == "Round Over! Top rod wins with score: 0"


def test_reset_after_top_exit_places_ball_on_top_paddle() -> None:
    sim, _, _ = _simulator()
    sim.apply(InputCommand.MOVE_LEFT)
    _launch(sim, x=300, y=15, dx=3, dy=-10)
    sim.update()
    assert sim.top.x == sim.bottom.x == 140
    assert (sim.ball.x, sim.ball.y) == (200, 20 + 10 + 10)
    assert not sim.ball.is_moving


def test_reset_after_bottom_exit_places_ball_on_bottom_paddle() -> None:
    sim, _, _ = _simulator()
    sim.apply(InputCommand.MOVE_RIGHT)
    _launch(sim, x=20, y=595, dx=3, dy=3)
    sim.update()
    assert sim.top.x == sim.bottom.x == 140
    assert (sim.ball.x, sim.ball.y) == (200, 570 - 10)
    assert not sim.ball.is_moving


def test_serve_alternates_with_losing_side() -> None:
    sim, _, _ = _simulator()
    _launch(sim, x=300, y=15, dx=0, dy=-10)
    sim.update()
    sim.apply(InputCommand.SERVE)
    assert sim.ball.dy == 3

    _launch(sim, x=300, y=595, dx=0, dy=3)
    sim.update()
    sim.apply(InputCommand.SERVE)
    assert sim.ball.dy == -3


def test_lower_score_keeps_record_without_prompt() -> None:
    sim, store, _ = _simulator(record=HighScoreRecord("Bo", 9))
    prompt = store.prompt
    sim.score = 3
    _launch(sim, x=300, y=15, dx=0, dy=-10)
    sim.update()
    assert store.record == HighScoreRecord("Bo", 9)
    assert prompt.requests == 0
    assert store.writes == []


def test_failed_record_write_still_resets() -> None:
    class BrokenStore(MemoryScoreStore):
        def _write(self, record: HighScoreRecord) -> None:
            raise OSError("disk full")

    store = BrokenStore(FixedNamePrompt("Ada"))
    sim = RoundSimulator(RecordingDisplay(), store, RecordingNotifier())
    sim.score = 2
    _launch(sim, x=300, y=15, dx=0, dy=-10)
    sim.update()
    assert not sim.is_playing
    assert sim.score == 0
    assert store.record == HighScoreRecord("Ada", 2)


def test_render_call_order() -> None:
    sim, _, _ = _simulator()
    sim.score = 5
    sim.render()
    calls = sim.display.calls
    assert [call[0] for call in calls] == ["clear", "rect", "rect", "circle", "text"]
    assert calls[1][1:3] == (140, 20)
    assert calls[2][1:3] == (140, 570)
    assert calls[3][1:] == (200, 300, 10)
    assert calls[4][1:] == ("Score: 5", 10, 30)


def test_snapshot_is_detached() -> None:
    sim, _, _ = _simulator()
    snap = sim.snapshot()
    sim.apply(InputCommand.MOVE_LEFT)
    assert snap.top.x == 140


def test_log_notifier_writes_greeting(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="rodbounce.display"):
        RoundSimulator(RecordingDisplay(), MemoryScoreStore(FixedNamePrompt()), LogNotifier())
    assert "This is your first time" in caplog.text
