from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np


EMPTY = 0

Region = Tuple[slice, slice, slice, slice]


class GameGrid:
    """Rectangular grid of cells used for both the board and piece shapes.

    The grid uses 0 (`EMPTY`) for empty cells and positive integers for filled
    cells. Integer values are the tetromino colour tags, looked up by the
    renderer.
    """

    def __init__(self, cells: np.ndarray) -> None:
        cells = np.asarray(cells, dtype=np.int8)
        if cells.ndim != 2 or cells.shape[0] < 1 or cells.shape[1] < 1:
            raise ValueError(f"Grid needs at least one row and one column, got shape {cells.shape}")
        self.grid = cells

    @classmethod
    def empty(cls, rows: int, cols: int) -> "GameGrid":
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid size must be positive, got {rows}x{cols}")
        return cls(np.zeros((rows, cols), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GameGrid":
        """Build a grid from literal row data, rejecting empty or jagged input."""
        if len(rows) == 0:
            raise ValueError("Grid data has no rows")
        width = len(rows[0])
        if width == 0:
            raise ValueError("Grid data has an empty row")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Grid data is jagged: row {i} has {len(row)} cells, expected {width}")
        return cls(np.array(rows, dtype=np.int8))

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def cols(self) -> int:
        return int(self.grid.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, key: Tuple[int, int]) -> int:
        return int(self.grid[key])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GameGrid({self.grid.tolist()!r})"

    def copy(self) -> "GameGrid":
        return GameGrid(self.grid.copy())

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    # ---------- Rotation ----------
    def rotate(self) -> "GameGrid":
        # rotated[c][r] == original[rows - 1 - r][c]
        return GameGrid(np.rot90(self.grid, 1, axes=(1, 0)).copy())

    def all_rotations(self) -> List["GameGrid"]:
        rotations = [self]
        for _ in range(3):
            rotations.append(rotations[-1].rotate())
        return rotations

    # ---------- Placement ----------
    def _region(self, row_offset: int, col_offset: int, other: "GameGrid") -> Optional[Region]:
        """Slices of (self, other) covering the part of `other` that lands inside self."""
        top = max(row_offset, 0)
        left = max(col_offset, 0)
        bottom = min(self.rows, row_offset + other.rows)
        right = min(self.cols, col_offset + other.cols)
        if top >= bottom or left >= right:
            return None
        return (
            slice(top, bottom),
            slice(left, right),
            slice(top - row_offset, bottom - row_offset),
            slice(left - col_offset, right - col_offset),
        )

    def contains(self, row_offset: int, col_offset: int, other: "GameGrid") -> bool:
        if row_offset < 0 or col_offset < 0:
            return False
        return row_offset + other.rows <= self.rows and col_offset + other.cols <= self.cols

    def overlaps(self, row_offset: int, col_offset: int, other: "GameGrid") -> bool:
        """True if a filled cell of `other` sits on a filled cell of this grid.

        Cells of `other` outside this grid are not checked; use `contains`
        for the bounds test.
        """
        region = self._region(row_offset, col_offset, other)
        if region is None:
            return False
        rs, cs, ors, ocs = region
        return bool(np.any((self.grid[rs, cs] != EMPTY) & (other.grid[ors, ocs] != EMPTY)))

    def merge_from(self, row_offset: int, col_offset: int, other: "GameGrid") -> None:
        region = self._region(row_offset, col_offset, other)
        if region is None:
            return
        rs, cs, ors, ocs = region
        source = other.grid[ors, ocs]
        target = self.grid[rs, cs]
        filled = source != EMPTY
        target[filled] = source[filled]

    # ---------- Line clearing ----------
    def is_row_filled(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != EMPTY))

    def remove_row(self, row: int) -> None:
        """Drop `row`; everything above moves down one and a blank row enters at the top."""
        self.grid[1 : row + 1, :] = self.grid[0:row, :].copy()
        self.grid[0, :] = EMPTY

    def remove_filled_rows(self) -> int:
        count = 0
        row = self.rows - 1
        # The top `count` rows are the blanks just inserted, no need to test them.
        while row >= count:
            if self.is_row_filled(row):
                self.remove_row(row)
                count += 1
            else:
                row -= 1
        return count

    # ---------- Analytics ----------
    def get_max_height(self) -> int:
        # row 0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.rows - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for col in range(self.cols):
            seen_block = False
            for cell in self.grid[:, col]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
