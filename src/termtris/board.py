"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, Iterator, List

import numpy as np
from numpy.typing import NDArray

from .geometry import HEIGHT, WIDTH, Point


Grid = NDArray[np.bool_]


def create_empty_grid() -> Grid:
    """Return a new board grid with every cell unoccupied."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.bool_)


class Board:
    """Occupancy grid holding the locked blocks.

    Cells are addressed with a :class:`~termtris.geometry.Point`, ``y`` picking
    the row and ``x`` the column.  Indexing does not check bounds; callers
    validate placements with :func:`termtris.utils.is_valid` first.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def __getitem__(self, p: Point) -> bool:
        return bool(self.grid[p.y, p.x])

    def __setitem__(self, p: Point, value: bool) -> None:
        self.grid[p.y, p.x] = value

    def is_full(self, row: int) -> bool:
        """Return ``True`` if every cell of ``row`` is occupied."""

        return bool(self.grid[row].all())

    def is_empty(self, row: int) -> bool:
        """Return ``True`` if no cell of ``row`` is occupied."""

        return not self.grid[row].any()

    def clear_row(self, row: int) -> None:
        self.grid[row] = False

    def shift_down(self, row: int) -> None:
        """Move rows ``0..row`` one step down.

        Row ``row`` wraps around to the top, so after a :meth:`clear_row` the
        top of the board receives the freshly emptied row.
        """

        self.grid[: row + 1] = np.roll(self.grid[: row + 1], 1, axis=0)

    def lock_cells(self, cells: Iterable[Point]) -> None:
        """Mark ``cells`` as occupied.

        Raises:
            IndexError: If any cell lies outside the board.  Nothing is written
                in that case.
        """

        coordinates = np.asarray([(p.y, p.x) for p in cells], dtype=np.int16)
        if coordinates.size == 0:
            return

        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")
        self.grid[rows, cols] = True

    def rows(self) -> Iterator[List[bool]]:
        """Yield each row, top to bottom, as a list of booleans."""

        for row in self.grid:
            yield [bool(cell) for cell in row]
