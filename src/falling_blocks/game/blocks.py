from __future__ import annotations

from enum import IntEnum
from typing import Dict, List

from .grid import EMPTY, GameGrid


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


_ = EMPTY
I, J, L, O, S, T, Z = (int(t) for t in TetrominoType)

BASE_SHAPES: Dict[TetrominoType, List[List[int]]] = {
    TetrominoType.I: [[I, I, I, I]],
    TetrominoType.J: [[J, _, _], [J, J, J]],
    TetrominoType.L: [[_, _, L], [L, L, L]],
    TetrominoType.O: [[O, O], [O, O]],
    TetrominoType.S: [[_, S, S], [S, S, _]],
    TetrominoType.T: [[T, T, T], [_, T, _]],
    TetrominoType.Z: [[Z, Z, _], [_, Z, Z]],
}

# Base orientation of every piece, in TetrominoType order
BLOCKS: List[GameGrid] = [GameGrid.from_rows(BASE_SHAPES[t]) for t in TetrominoType]
