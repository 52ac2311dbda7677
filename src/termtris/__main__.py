"""Play in the terminal.

Run with: `python -m termtris` (or the ``termtris`` script).

The game takes no arguments.  A few environment variables help when
debugging, since the screen belongs to curses while the game runs:

``TERMTRIS_LOG``
    Path of a file to write log records to.  Without it nothing is logged.
``TERMTRIS_LOG_LEVEL``
    Logging level name, ``INFO`` by default.
``TERMTRIS_PROFILE``
    Any non-empty value times the loop phases and logs a summary on exit.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from . import FOOTER, MIN_SIZE, CursesTerminal, Game, GameLoop, PerformanceTracker
from .perf import format_summary


LOGGER = logging.getLogger("termtris")


def configure_logging(env: Optional[Mapping[str, str]] = None) -> logging.Handler:
    """Attach a handler to the package logger according to ``env``."""

    env = os.environ if env is None else env
    level_name = env.get("TERMTRIS_LOG_LEVEL", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    path = env.get("TERMTRIS_LOG")
    handler: logging.Handler
    if path:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = logging.NullHandler()
    LOGGER.addHandler(handler)
    LOGGER.setLevel(level)
    return handler


def summary_lines(game: Game) -> list[str]:
    return [
        FOOTER,
        f"Score: {game.score}  Level: {game.level}  Lines: {game.lines}",
    ]


def main() -> None:
    configure_logging()
    profiler = PerformanceTracker(enabled=bool(os.environ.get("TERMTRIS_PROFILE")))
    try:
        with CursesTerminal(min_size=MIN_SIZE) as terminal:
            game = GameLoop(terminal, profiler=profiler).run()
    except Exception:
        LOGGER.exception("Terminal session failed")
        raise
    if profiler.enabled:
        LOGGER.info("Loop performance: %s", format_summary(profiler.summary()))
    for line in summary_lines(game):
        print(line)


if __name__ == "__main__":
    main()
