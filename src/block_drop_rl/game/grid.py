from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .pieces import Piece, Rotation, TetrominoType


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed 10x22 playfield.

    Cells hold 0 when empty, otherwise the ``TetrominoType`` value of the
    piece that was locked there. Row 0 is the top of the field. Every access
    is bounds-checked: an out-of-range coordinate raises ``IndexError`` rather
    than wrapping around like plain numpy indexing would.
    """

    WIDTH = 10
    HEIGHT = 22

    def __init__(self) -> None:
        self.width = self.WIDTH
        self.height = self.HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} playfield")

    def cell_at(self, x: int, y: int) -> Optional[TetrominoType]:
        self._check_bounds(x, y)
        value = int(self.grid[y, x])
        return TetrominoType(value) if value else None

    def set_cell(self, x: int, y: int, kind: Optional[TetrominoType]) -> None:
        self._check_bounds(x, y)
        self.grid[y, x] = 0 if kind is None else int(kind)

    def is_legal(
        self,
        kind: TetrominoType,
        rotation: Rotation,
        anchor: Coordinate,
        dx: int = 0,
        dy: int = 0,
    ) -> bool:
        """True iff the piece shifted by (dx, dy) lies inside the field on empty cells."""
        x, y = anchor
        return self.can_place(Piece(kind, rotation).cells_at(x + dx, y + dy))

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != 0:
                return False
        return True

    def lock_piece(self, kind: TetrominoType, rotation: Rotation, anchor: Coordinate) -> None:
        """Write the piece into the field. Legality is the caller's job."""
        x, y = anchor
        for cx, cy in Piece(kind, rotation).cells_at(x, y):
            self.set_cell(cx, cy, kind)

    def squash_filled_rows(self) -> int:
        """Remove every full row and let the rows above fall into the gaps.

        One pass from the bottom up: each surviving row is copied down by the
        number of full rows found below it. The walk stops at the topmost
        occupied row, since everything above it is already empty, and the
        rows vacated at the top of the shifted region are zeroed.
        """
        occupied = self.grid != 0
        filled = occupied.all(axis=1)
        cleared = int(filled.sum())
        if cleared == 0:
            return 0

        top = int(np.argmax(occupied.any(axis=1)))
        dst = self.height - 1
        for src in range(self.height - 1, top - 1, -1):
            if filled[src]:
                continue
            if dst != src:
                self.grid[dst] = self.grid[src]
            dst -= 1
        self.grid[top : dst + 1] = 0
        return cleared

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid))

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
