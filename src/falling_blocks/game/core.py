from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Deque, Optional, Protocol, Sequence

import numpy as np

from .bag import Bag
from .blocks import BLOCKS
from .grid import GameGrid
from .pieces import Footprint, Piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    TOGGLE_PAUSE = 6
    RESET = 7


CONTROL_ACTIONS = frozenset({Action.TOGGLE_PAUSE, Action.RESET})


class GameState(IntEnum):
    PLAYING = 0
    PAUSED = 1
    GAME_OVER = 2


@dataclass
class GameConfig:
    rows: int = 15
    cols: int = 10
    step_ms: int = 1000
    redraw_ms: int = 100
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class GameView:
    """Snapshot handed to the drawing layer."""

    board: GameGrid
    footprint: Footprint
    state: GameState
    score: int
    lines: int


class RenderTarget(Protocol):
    def draw(self, view: GameView) -> None:
        ...


class FallingBlocksGame:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        blocks: Optional[Sequence[GameGrid]] = None,
        render_target: Optional[RenderTarget] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.render_target = render_target
        if self.config.step_ms <= 0 or self.config.redraw_ms <= 0:
            raise ValueError("step_ms and redraw_ms must be positive")

        blocks = list(BLOCKS if blocks is None else blocks)
        if not blocks:
            raise ValueError("At least one block shape is required")
        for block in blocks:
            if block.rows > self.config.rows or block.cols > self.config.cols:
                raise ValueError(
                    f"Block {block.shape} does not fit a {self.config.rows}x{self.config.cols} board"
                )

        self.rng = random.Random(self.config.random_seed)
        self.shapes: Bag[Piece] = Bag(Piece.from_grids(blocks), rng=self.rng)
        self.board = GameGrid.empty(self.config.rows, self.config.cols)
        self.commands: Deque[Action] = deque()
        self.state = GameState.PLAYING
        self.score = 0
        self.lines = 0
        self.last_step = 0
        self.last_update = 0
        self.reset()

    @property
    def piece(self) -> Piece:
        return self.shapes.current()

    @property
    def game_over(self) -> bool:
        return self.state == GameState.GAME_OVER

    def reset(self, rewind: bool = False) -> None:
        """Start a new game.

        Queued commands are kept so that ones submitted after a RESET still
        apply. With `rewind`, every piece goes back to its base rotation.
        """
        if rewind:
            for piece in self.shapes:
                piece.reset_rotation()
        self.board.reset()
        self.state = GameState.PLAYING
        self.score = 0
        self.lines = 0
        self.last_step = 0
        self.last_update = 0
        logger.info("New game on a %dx%d board", self.board.rows, self.board.cols)
        self._next_piece()

    # ---------- Commands ----------
    def left(self) -> bool:
        return self.piece.move_left(self.board)

    def right(self) -> bool:
        return self.piece.move_right(self.board)

    def rotate(self) -> bool:
        return self.piece.rotate(self.board)

    def down(self) -> bool:
        return self._move_down()

    def hard_drop(self) -> int:
        """Drop the piece until it lands; returns the number of rows it fell."""
        moved = 0
        while self._move_down():
            moved += 1
        return moved

    def toggle_paused(self) -> None:
        if self.state == GameState.PLAYING:
            self.state = GameState.PAUSED
        elif self.state == GameState.PAUSED:
            self.state = GameState.PLAYING

    def handle(self, action: Action) -> bool:
        """Apply one command. Movement is ignored unless the game is playing."""
        action = Action(action)
        if action in CONTROL_ACTIONS:
            if action == Action.TOGGLE_PAUSE:
                self.toggle_paused()
            else:
                self.reset()
            return True
        if self.state != GameState.PLAYING:
            return False

        if action == Action.LEFT:
            self.left()
        elif action == Action.RIGHT:
            self.right()
        elif action == Action.ROTATE_CW:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.down()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        return True

    def submit(self, action: Action) -> None:
        self.commands.append(Action(action))

    # ---------- Clock ----------
    def tick(self, now: int) -> bool:
        """Gravity step. Returns True if the piece was moved or landed."""
        if self.state != GameState.PLAYING or now - self.last_step <= self.config.step_ms:
            return False
        self._move_down()
        self.last_step = now
        return True

    def update(self, now: int) -> bool:
        """Drain queued commands, apply gravity and redraw when due.

        Returns True when the render target was asked to draw.
        """
        while self.commands:
            self.handle(self.commands.popleft())
        self.tick(now)
        if now - self.last_update <= self.config.redraw_ms:
            return False
        if self.render_target is not None:
            self.render_target.draw(self.view())
        self.last_update = now
        return True

    # ---------- Queries ----------
    def view(self) -> GameView:
        board = self.board.copy()
        board.grid.setflags(write=False)
        footprint = self.piece.footprint()
        shape = footprint.grid.copy()
        shape.grid.setflags(write=False)
        return GameView(
            board=board,
            footprint=Footprint(shape, footprint.row_offset, footprint.col_offset),
            state=self.state,
            score=self.score,
            lines=self.lines,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board for observation
        state = self.board.clone_state()
        if not self.game_over:
            for row, col, tag in self.piece.footprint().cells():
                if 0 <= row < self.board.rows and 0 <= col < self.board.cols:
                    # Use negative to indicate falling piece overlay
                    state[row, col] = -tag
        return state

    # ---------- Internals ----------
    def _move_down(self) -> bool:
        if self.piece.move_down(self.board):
            return True
        self._land()
        return False

    def _land(self) -> None:
        landed = self.piece
        landed.commit_to(self.board)
        cleared = self.board.remove_filled_rows()
        self.lines += cleared
        gained = self.rules.score_for(cleared, self.lines)
        self.score += gained
        logger.debug("Piece %d landed: %d line(s) cleared, +%d points", landed.kind, cleared, gained)
        self._next_piece()

    def _next_piece(self) -> None:
        piece = self.shapes.random_select()
        if not piece.reset_position(self.board):
            self.state = GameState.GAME_OVER
            logger.info("Game over: score %d, lines %d", self.score, self.lines)
