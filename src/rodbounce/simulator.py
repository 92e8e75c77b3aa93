"""Round simulation: paddle input, ball integration, collisions, and resets."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from .display import SCORE_STYLE, Display, Notifier
from .entities import Ball, InputCommand, Paddle, Side
from .scores import ScoreStore
from .settings import PhysicsSettings
from .utils import BALL_COLOR, PADDLE_COLOR, clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoundSnapshot:
    """Read-only copy of the simulator state."""

    top: Paddle
    bottom: Paddle
    ball: Ball
    score: int
    is_playing: bool
    serve_from: Side


class RoundSimulator:
    """Owns all game state and advances it one tick at a time.

    Collaborators are injected: ``display`` for drawing and surface size,
    ``score_store`` for the best-score record, and ``notifier`` for
    player-facing messages. The surface size is read once at construction.
    """

    def __init__(
        self,
        display: Display,
        score_store: ScoreStore,
        notifier: Notifier,
        physics: PhysicsSettings | None = None,
    ) -> None:
        self.display = display
        self.score_store = score_store
        self.notifier = notifier
        self.physics = physics or PhysicsSettings()
        self.width, self.height = display.get_surface_size()

        p = self.physics
        start_x = self._centered_paddle_x()
        self.top = Paddle(x=start_x, y=p.paddle_margin, width=p.paddle_width, height=p.paddle_height)
        self.bottom = Paddle(
            x=start_x,
            y=self.height - p.paddle_margin - p.paddle_height,
            width=p.paddle_width,
            height=p.paddle_height,
        )
        self.ball = Ball(x=self.width / 2, y=self.height / 2, radius=p.ball_radius)

        self.score = 0
        self.is_playing = False
        self.serve_from = Side.BOTTOM

        self._greet()

    def _greet(self) -> None:
        record = self.score_store.load()
        if record is None:
            self.notifier.announce("This is your first time")
        else:
            self.notifier.announce(f"Highest Score: {record.score} by {record.name}")

    def _centered_paddle_x(self) -> float:
        return (self.width - self.physics.paddle_width) / 2

    # --- Input ---------------------------------------------------------------

    def apply(self, command: InputCommand) -> None:
        """Apply one command from the input channel; unknown values are ignored."""
        if command == InputCommand.MOVE_LEFT:
            self.move(-1)
        elif command == InputCommand.MOVE_RIGHT:
            self.move(1)
        elif command == InputCommand.SERVE:
            self.serve()

    def move(self, direction: int) -> None:
        """Shift both paddles one step left (-1) or right (+1)."""
        if direction not in (-1, 1):
            return
        limit = self.width - self.physics.paddle_width
        x = clamp(self.top.x + direction * self.physics.paddle_step, 0, limit)
        self.top.x = x
        self.bottom.x = x

    def serve(self) -> bool:
        """Launch the ball away from the serving paddle; no-op while playing."""
        if self.is_playing:
            return False
        speed = self.physics.serve_speed
        self.ball.dx = speed
        self.ball.dy = -speed if self.serve_from == Side.BOTTOM else speed
        self.is_playing = True
        logger.debug("Serve from %s", self.serve_from.value)
        return True

    # --- Simulation ----------------------------------------------------------

    def update(self) -> None:
        """Advance one tick."""
        if not self.is_playing:
            return

        ball = self.ball
        ball.advance()

        if ball.left < 0 or ball.right > self.width:
            ball.dx = -ball.dx

        bottom = self.bottom
        if ball.dy > 0 and bottom.y <= ball.bottom <= bottom.y + bottom.height:
            if bottom.spans(ball.x):
                ball.dy = -ball.dy
                self.score += 1

        top = self.top
        if ball.dy < 0 and top.y <= ball.top <= top.y + top.height:
            if top.spans(ball.x):
                ball.dy = -ball.dy
                self.score += 1

        if ball.top < 0:
            self._end_round(winner=Side.BOTTOM)

        if ball.bottom > self.height:
            self._end_round(winner=Side.TOP)

    def _end_round(self, winner: Side) -> None:
        score = self.score
        self.is_playing = False
        logger.info("Round over: %s wins with score %d", winner.value, score)
        self.notifier.announce(f"Round Over! {winner.value.capitalize()} rod wins with score: {score}")
        self.score_store.check_and_update(score)
        self.reset_positions(losing=winner.opposite)

    def reset_positions(self, losing: Side) -> None:
        """Re-centre paddles and park the ball against the losing paddle."""
        x = self._centered_paddle_x()
        self.top.x = x
        self.bottom.x = x

        ball = self.ball
        if losing == Side.TOP:
            ball.x = self.top.center_x
            ball.y = self.top.y + self.top.height + ball.radius
        else:
            ball.x = self.bottom.center_x
            ball.y = self.bottom.y - ball.radius
        ball.stop()

        self.serve_from = losing
        self.score = 0
        self.is_playing = False

    # --- Output --------------------------------------------------------------

    def render(self) -> None:
        """Draw the playfield through the display collaborator."""
        display = self.display
        display.clear()
        for paddle in (self.top, self.bottom):
            display.draw_rectangle(paddle.x, paddle.y, paddle.width, paddle.height, PADDLE_COLOR)
        display.draw_circle(self.ball.x, self.ball.y, self.ball.radius, BALL_COLOR)
        display.draw_text(f"Score: {self.score}", 10, 30, SCORE_STYLE)

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            top=replace(self.top),
            bottom=replace(self.bottom),
            ball=replace(self.ball),
            score=self.score,
            is_playing=self.is_playing,
            serve_from=self.serve_from,
        )
