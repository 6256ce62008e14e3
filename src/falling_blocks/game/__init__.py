"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Bag: Cyclic container with random reselection
- GameGrid: Grid representation, collision and line clearing
- Piece: Tetromino piece with rotation mechanics
- TetrominoType / BLOCKS: The seven base shapes
- ScoringRules: Scoring configuration
- FallingBlocksGame: Main game loop and state management
"""

from .bag import Bag
from .grid import EMPTY, GameGrid
from .pieces import Footprint, Piece
from .blocks import BLOCKS, TetrominoType
from .rules import ScoringRules
from .core import (
    Action,
    CONTROL_ACTIONS,
    FallingBlocksGame,
    GameConfig,
    GameState,
    GameView,
    RenderTarget,
)

__all__ = [
    "Bag",
    "EMPTY",
    "GameGrid",
    "Footprint",
    "Piece",
    "BLOCKS",
    "TetrominoType",
    "ScoringRules",
    "Action",
    "CONTROL_ACTIONS",
    "FallingBlocksGame",
    "GameConfig",
    "GameState",
    "GameView",
    "RenderTarget",
]
