from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_points: int = 10
    tetris_lines: int = 4
    tetris_points: int = 1000

    def score_for(self, lines_cleared: int, total_lines: int) -> int:
        """Points for one landing.

        A tetris scores a flat bonus. Anything smaller scores the running
        line total (after this landing) times `line_points`, including
        landings that clear nothing.
        """
        if lines_cleared >= self.tetris_lines:
            return self.tetris_points
        return total_lines * self.line_points
