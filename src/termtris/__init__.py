"""Terminal falling-block puzzle game."""

from .board import Board
from .geometry import HEIGHT, WIDTH, Point, inside_screen
from .tetromino import BAG, TETROMINOES, Tetromino, TetrominoType
from .game_state import GameState, Phase
from .input import Action, KEY_BINDINGS, action_for_key, poll_key
from .render import Renderer, Surface
from .utils import drop_distance, is_valid, rotate

__all__ = [
    "Board",
    "Point",
    "WIDTH",
    "HEIGHT",
    "inside_screen",
    "Tetromino",
    "TetrominoType",
    "TETROMINOES",
    "BAG",
    "GameState",
    "Phase",
    "Action",
    "KEY_BINDINGS",
    "action_for_key",
    "poll_key",
    "Renderer",
    "Surface",
    "is_valid",
    "rotate",
    "drop_distance",
]
