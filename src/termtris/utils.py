"""Collision and rotation helpers for the game engine."""

from __future__ import annotations

from .board import Board
from .geometry import Point, inside_screen
from .tetromino import Tetromino


DOWN = Point(0, 1)


def is_valid(piece: Tetromino, position: Point, board: Board) -> bool:
    """Return ``True`` if ``piece`` fits on ``board`` with its pivot at ``position``.

    Every block must be inside the board and on an unoccupied cell.  This is
    the only legality test used by the game: movement, rotation, gravity and
    hard drops all go through it.
    """

    for cell in piece.cells(position):
        if not inside_screen(cell) or board[cell]:
            return False
    return True


def rotate(piece: Tetromino, position: Point, board: Board) -> Tetromino:
    """Return ``piece`` rotated a quarter turn if the result fits.

    No kicks are attempted: a rotation that does not fit at ``position``
    leaves the piece unchanged, as does any rotation of a non-rotatable piece.
    """

    if not piece.rotatable:
        return piece
    turned = piece.rotated()
    if is_valid(turned, position, board):
        return turned
    return piece


def drop_distance(piece: Tetromino, position: Point, board: Board) -> int:
    """Return how many rows ``piece`` can fall from ``position``."""

    rows = 0
    while is_valid(piece, Point(position.x, position.y + rows + 1), board):
        rows += 1
    return rows
