"""Tetromino definitions and basic behaviour.

Each piece is stored as four offsets around an implicit pivot at ``(0, 0)``.
The pivot is what the game state positions on the board, and rotation is
performed around it.  Catalog entries are frozen values: rotating a piece
returns a new :class:`Tetromino` rather than changing the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .geometry import Point


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


@dataclass(frozen=True)
class Tetromino:
    """A four block piece described relative to its pivot."""

    shape: TetrominoType
    blocks: Tuple[Point, Point, Point, Point]
    rotatable: bool = True

    def cells(self, position: Point) -> List[Point]:
        """Return the absolute board cells when the pivot sits at ``position``."""

        return [block + position for block in self.blocks]

    def rotated(self) -> "Tetromino":
        """Return the piece turned 90 degrees around its pivot.

        Each offset ``(x, y)`` becomes ``(y, -x)``.  Pieces that are not
        rotatable are returned as is.
        """

        if not self.rotatable:
            return self
        turned = tuple(Point(p.y, -p.x) for p in self.blocks)
        return Tetromino(self.shape, turned, self.rotatable)


def _piece(shape: TetrominoType, *offsets: Tuple[int, int], rotatable: bool = True) -> Tetromino:
    return Tetromino(shape, tuple(Point(x, y) for x, y in offsets), rotatable)


TETROMINOES: Dict[TetrominoType, Tetromino] = {
    TetrominoType.I: _piece(TetrominoType.I, (0, 0), (1, 0), (2, 0), (-1, 0)),
    TetrominoType.J: _piece(TetrominoType.J, (0, 0), (1, 0), (-1, -1), (-1, 0)),
    TetrominoType.L: _piece(TetrominoType.L, (0, 0), (1, 0), (1, -1), (-1, 0)),
    # Turning the square only changes which block is which.
    TetrominoType.O: _piece(
        TetrominoType.O, (0, 0), (1, 0), (1, -1), (0, -1), rotatable=False
    ),
    TetrominoType.S: _piece(TetrominoType.S, (0, 0), (0, -1), (1, -1), (-1, 0)),
    TetrominoType.Z: _piece(TetrominoType.Z, (0, 0), (0, -1), (1, 0), (-1, -1)),
    TetrominoType.T: _piece(TetrominoType.T, (0, 0), (0, -1), (1, 0), (-1, 0)),
}

# Population for random draws.  Pieces are picked independently; this is not a
# 7-bag shuffle.
BAG: Tuple[Tetromino, ...] = tuple(
    TETROMINOES[t]
    for t in (
        TetrominoType.T,
        TetrominoType.I,
        TetrominoType.J,
        TetrominoType.L,
        TetrominoType.S,
        TetrominoType.Z,
        TetrominoType.O,
    )
)
