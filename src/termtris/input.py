"""Keyboard bindings and the deadline-bounded input poll."""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Dict, Optional


class Action(Enum):
    """Player requests understood by :meth:`termtris.game_state.GameState.apply`."""

    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    SOFT_TICK = "soft_tick"
    HARD_DROP = "hard_drop"
    TOGGLE_PREVIEW = "toggle_preview"
    ERASE_HELP = "erase_help"


# Numeric keypad layout, as printed in the in-game help text.
KEY_BINDINGS: Dict[str, Action] = {
    "7": Action.LEFT,
    "9": Action.RIGHT,
    "8": Action.ROTATE,
    "4": Action.SOFT_TICK,
    "5": Action.HARD_DROP,
    " ": Action.HARD_DROP,
    "1": Action.TOGGLE_PREVIEW,
    "0": Action.ERASE_HELP,
}

# Seconds between two reads while waiting for a key.
POLL_GRANULARITY = 0.01


def action_for_key(key: str) -> Optional[Action]:
    """Return the action bound to ``key`` or ``None`` for unbound keys."""

    return KEY_BINDINGS.get(key)


def poll_key(
    read_key: Callable[[], Optional[str]],
    deadline: float,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    granularity: float = POLL_GRANULARITY,
) -> Optional[str]:
    """Wait until a key is read or ``clock()`` reaches ``deadline``.

    ``read_key`` must not block and returns ``None`` when no input is
    available.  The function returns the first key read, or ``None`` once the
    deadline has passed.
    """

    remaining = deadline - clock()
    while remaining > 0:
        key = read_key()
        if key is not None:
            return key
        sleep(min(granularity, remaining))
        remaining = deadline - clock()
    return None
