from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .bag import Bag
from .grid import EMPTY, GameGrid


@dataclass(frozen=True)
class Footprint:
    """Where the active piece sits: its current rotation and board offsets."""

    grid: GameGrid
    row_offset: int
    col_offset: int

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (row, col, tag) for every filled cell, in board coordinates."""
        rows, cols = np.nonzero(self.grid.grid != EMPTY)
        for r, c in zip(rows.tolist(), cols.tolist()):
            yield self.row_offset + r, self.col_offset + c, self.grid[r, c]


class Piece:
    """Falling piece with four precomputed rotations and a board position."""

    def __init__(self, grid: GameGrid) -> None:
        self.rotations: Bag[GameGrid] = Bag(grid.all_rotations())
        self.row_offset = 0
        self.col_offset = 0
        filled = grid.grid[grid.grid != EMPTY]
        self.kind = int(filled[0]) if filled.size else EMPTY

    @classmethod
    def from_grids(cls, grids: Iterable[GameGrid]) -> List["Piece"]:
        return [cls(grid) for grid in grids]

    @property
    def grid(self) -> GameGrid:
        return self.rotations.current()

    def reset_rotation(self) -> None:
        self.rotations.rewind()

    def footprint(self) -> Footprint:
        return Footprint(self.grid, self.row_offset, self.col_offset)

    def fits(self, board: GameGrid, row_offset: int, col_offset: int, grid: Optional[GameGrid] = None) -> bool:
        grid = grid if grid is not None else self.grid
        return board.contains(row_offset, col_offset, grid) and not board.overlaps(row_offset, col_offset, grid)

    def reset_position(self, board: GameGrid) -> bool:
        """Move to the top centre of `board`; False if that spot is already taken."""
        self.row_offset = 0
        self.col_offset = (board.cols - self.grid.cols) // 2
        return not board.overlaps(self.row_offset, self.col_offset, self.grid)

    def _shift(self, board: GameGrid, d_row: int, d_col: int) -> bool:
        row, col = self.row_offset + d_row, self.col_offset + d_col
        if not self.fits(board, row, col):
            return False
        self.row_offset, self.col_offset = row, col
        return True

    def move_left(self, board: GameGrid) -> bool:
        return self._shift(board, 0, -1)

    def move_right(self, board: GameGrid) -> bool:
        return self._shift(board, 0, 1)

    def move_down(self, board: GameGrid) -> bool:
        return self._shift(board, 1, 0)

    def fit_within(self, board: GameGrid, grid: GameGrid) -> Tuple[int, int]:
        """Offsets clamped so `grid` stays inside `board`.

        The row is only pulled up from the bottom edge, never pushed down to 0.
        """
        col = max(self.col_offset, 0)
        col = min(col, board.cols - grid.cols)
        row = self.row_offset
        if row + grid.rows > board.rows:
            row = board.rows - grid.rows
        return row, col

    def rotate(self, board: GameGrid) -> bool:
        rotated = self.rotations.next()
        row, col = self.fit_within(board, rotated)
        if board.overlaps(row, col, rotated):
            self.rotations.previous()
            return False
        self.row_offset, self.col_offset = row, col
        return True

    def commit_to(self, board: GameGrid) -> None:
        board.merge_from(self.row_offset, self.col_offset, self.grid)
