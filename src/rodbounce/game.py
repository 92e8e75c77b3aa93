"""Pygame host: event translation, frame loop, and overlays."""

from __future__ import annotations

import logging

import pygame

from .display import PygameDisplay
from .entities import InputCommand
from .hud import Banner, NameEntry, StartButton
from .scores import JsonScoreStore, ScoreStore
from .settings import ControlScheme, GameSettings, ServeTrigger, SettingsManager
from .simulator import RoundSimulator
from .utils import ensure_data_dirs

logger = logging.getLogger(__name__)

# Held arrow keys keep moving the rods.
KEY_REPEAT_DELAY_MS = 200
KEY_REPEAT_INTERVAL_MS = 50


class KeyMap:
    """Translate key codes into input commands."""

    def __init__(self, controls: ControlScheme, serve_trigger: ServeTrigger) -> None:
        self.bindings: dict[int, InputCommand] = {
            controls.left: InputCommand.MOVE_LEFT,
            controls.right: InputCommand.MOVE_RIGHT,
        }
        if serve_trigger.uses_key:
            self.bindings[controls.serve] = InputCommand.SERVE

    def command_for(self, key: int) -> InputCommand | None:
        return self.bindings.get(key)


class RodbounceGame:
    """Runs the simulator once per frame and feeds it player input."""

    def __init__(
        self,
        settings: GameSettings | None = None,
        score_store: ScoreStore | None = None,
    ) -> None:
        pygame.init()
        pygame.font.init()
        ensure_data_dirs()

        self.settings = settings or SettingsManager().settings
        self.screen = pygame.display.set_mode(self.settings.surface_size)
        pygame.display.set_caption("Rodbounce")
        self.clock = pygame.time.Clock()
        pygame.key.set_repeat(KEY_REPEAT_DELAY_MS, KEY_REPEAT_INTERVAL_MS)
        self.ui_font = pygame.font.SysFont("arial", 18, bold=True)

        self.keymap = KeyMap(self.settings.controls, self.settings.serve_trigger)
        self.banner = Banner()
        self.name_entry = NameEntry()
        self.start_button = StartButton(
            center=(self.settings.surface_width // 2, self.settings.surface_height // 2)
        )
        self.start_button.visible = self.settings.serve_trigger.uses_button

        self.display = PygameDisplay(self.screen)
        self.score_store = score_store or JsonScoreStore(self.name_entry)
        self.simulator = RoundSimulator(
            self.display,
            self.score_store,
            self.banner,
            physics=self.settings.physics,
        )

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(self.settings.fps)
            running = self.handle_events(pygame.event.get())
            if not running:
                break
            self.step(dt_ms)
            self.render()
            pygame.display.flip()

        pygame.quit()

    def handle_events(self, events: list[pygame.event.Event]) -> bool:
        """Apply queued input; return False when the player quits."""
        for event in events:
            if event.type == pygame.QUIT:
                logger.info("Window closed, quitting")
                return False

            if event.type == pygame.KEYDOWN:
                if self.name_entry.active:
                    self.name_entry.handle_key(event.key, getattr(event, "unicode", ""))
                    continue
                if event.key == pygame.K_ESCAPE:
                    logger.info("Escape pressed, quitting")
                    return False
                command = self.keymap.command_for(event.key)
                if command is not None:
                    self.simulator.apply(command)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not self.name_entry.active and self.start_button.hit(event.pos):
                    logger.debug("Start button clicked")
                    self.simulator.apply(InputCommand.SERVE)
        return True

    def step(self, dt_ms: float) -> None:
        """Run one tick unless a name request is open."""
        if not self.name_entry.active:
            self.simulator.update()
        self.banner.update(dt_ms)
        snapshot = self.simulator.snapshot()
        self.start_button.visible = self.settings.serve_trigger.uses_button and not snapshot.is_playing

    def render(self) -> None:
        self.simulator.render()
        self.start_button.render(self.screen, self.ui_font)
        self.banner.render(self.screen, self.ui_font)
        self.name_entry.render(self.screen, self.ui_font)
