"""Keyboard bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``key`` is either a named key (``"left"``, ``"right"``, ``"up"``,
    ``"down"``, ``"esc"``) or the character typed.
    """

    key: str
    ctrl: bool = False


class Action(str, Enum):
    QUIT = "quit"
    FORCE_QUIT = "force_quit"
    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HARD_DROP = "hard_drop"


KEY_BINDINGS = {
    "q": Action.QUIT,
    "esc": Action.QUIT,
    "left": Action.LEFT,
    "a": Action.LEFT,
    "right": Action.RIGHT,
    "d": Action.RIGHT,
    "down": Action.SOFT_DROP,
    "s": Action.SOFT_DROP,
    "up": Action.ROTATE_CW,
    "w": Action.ROTATE_CW,
    "k": Action.ROTATE_CW,
    "j": Action.ROTATE_CCW,
    " ": Action.HARD_DROP,
}

HELP_LINES = (
    "a/d or arrows: move",
    "w/k/Up: rotate, j: ccw",
    "s/Down: soft drop",
    "Space: hard drop",
    "q/Esc: quit",
)


def action_for(event: KeyEvent) -> Optional[Action]:
    """Return the action bound to ``event`` or ``None`` for unbound keys."""

    if event.ctrl:
        return Action.FORCE_QUIT if event.key == "c" else None
    return KEY_BINDINGS.get(event.key)
