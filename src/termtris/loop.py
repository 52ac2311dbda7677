"""Fixed-cadence game loop.

Each iteration polls for at most one key (the poll timeout doubles as frame
pacing), applies gravity when its delay has elapsed and then renders the
difference from the previous frame.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .controls import Action, action_for
from .game_state import Game, LockResult
from .perf import PerformanceTracker
from .renderer import Renderer
from .terminal import Terminal


LOGGER = logging.getLogger(__name__)

# Milliseconds to wait for a key press per iteration.
POLL_TIMEOUT_MS = 16


class GameLoop:
    """Drive one :class:`Game` on a :class:`Terminal` until it ends."""

    def __init__(
        self,
        terminal: Terminal,
        game: Optional[Game] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        profiler: Optional[PerformanceTracker] = None,
    ) -> None:
        self.terminal = terminal
        self.game = game or Game.new()
        self.renderer = Renderer(terminal)
        self.clock = clock
        self.profiler = profiler or PerformanceTracker(enabled=False)
        self.running = False
        self.quit_requested = False
        self.last_gravity = 0.0

    def start(self) -> None:
        """Draw the first frame and arm the gravity timer."""

        self.renderer.draw_frame(self.game)
        self.last_gravity = self.clock()
        self.running = True

    def run(self) -> Game:
        """Play until quit or game over, then show the footer."""

        self.start()
        while self.step():
            pass
        self.renderer.draw_footer()
        return self.game

    def step(self) -> bool:
        """Run one iteration; return ``False`` once the loop has finished."""

        if not self.running:
            return False
        now = self.clock()

        with self.profiler.section("input"):
            event = self.terminal.poll_key(POLL_TIMEOUT_MS)
            if event is not None:
                action = action_for(event)
                if action is not None:
                    self.handle_action(action)
        if self.quit_requested:
            return self._finish("quit")

        with self.profiler.section("gravity"):
            if (now - self.last_gravity) * 1000.0 >= self.game.gravity_delay_ms:
                result = self.game.gravity_step()
                if result is not None:
                    self.renderer.invalidate()
                    self._log_lock(result)
                self.last_gravity = now
        if self.game.over:
            return self._finish("game over")

        with self.profiler.section("render"):
            self.renderer.render(self.game)
        return True

    def handle_action(self, action: Action) -> None:
        game = self.game
        if action in (Action.QUIT, Action.FORCE_QUIT):
            self.quit_requested = True
        elif action is Action.LEFT:
            game.move(-1)
        elif action is Action.RIGHT:
            game.move(1)
        elif action is Action.SOFT_DROP:
            game.soft_drop()
        elif action is Action.ROTATE_CW:
            game.rotate(clockwise=True)
        elif action is Action.ROTATE_CCW:
            game.rotate(clockwise=False)
        elif action is Action.HARD_DROP:
            game.hard_drop()

    def _finish(self, reason: str) -> bool:
        self.running = False
        LOGGER.info(
            "Loop finished (%s). Score: %d, level: %d, lines: %d",
            reason,
            self.game.score,
            self.game.level,
            self.game.lines,
        )
        return False

    def _log_lock(self, result: LockResult) -> None:
        if result.cleared:
            LOGGER.debug("Lock cleared %d row(s) for %d points", result.cleared, result.points)
        if result.level_up:
            LOGGER.info(
                "Level %d, gravity now %dms", self.game.level, self.game.gravity_delay_ms
            )
