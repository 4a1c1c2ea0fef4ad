"""Integer geometry shared by the board, the pieces and the renderer."""

from __future__ import annotations

from dataclasses import dataclass


# Dimensions of the playfield.
WIDTH = 10
HEIGHT = 20


@dataclass(frozen=True)
class Point:
    """Integer ``(x, y)`` coordinate; ``y`` grows downward."""

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


def inside_screen(p: Point) -> bool:
    """Return ``True`` if ``p`` lies on the board.

    The limits come from the module constants so no window is needed.
    """

    return 0 <= p.x < WIDTH and 0 <= p.y < HEIGHT
