"""Terminal falling-block game.

Run with: `python -m termtris`

The game plays in the current terminal until a piece locks above the board,
then prints the final score, line count and level.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .game_state import GameState
from .run_curses import run


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termtris", description="Terminal falling-block game.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece sequence")
    parser.add_argument(
        "--show-next",
        action="store_true",
        help="start with the next piece preview visible (toggle in game with 1)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="write diagnostics to this file; the terminal is owned by the game",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level used with --log-file",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    state = GameState(rng=random.Random(args.seed))
    state.reset_game()
    state.show_next = args.show_next
    LOGGER.info("Starting game (seed=%s)", args.seed)

    final = run(state)
    for line in final.summary():
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
