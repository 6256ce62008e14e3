from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameState, GameView


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 255, 255),   # I
        2: (0, 0, 255),     # J
        3: (255, 127, 0),   # L
        4: (255, 255, 0),   # O
        5: (0, 255, 0),     # S
        6: (128, 0, 128),   # T
        7: (255, 0, 0),     # Z
    }
    return palette.get(abs(v), (200, 200, 200))


def _zero_pad(value: int, size: int = 5) -> str:
    return str(value).zfill(size)[-size:]


class Renderer:
    """Draws a `GameView` onto a pygame surface."""

    def __init__(self, cell_size: int = 20, margin: int = 20, screen: Optional[pygame.Surface] = None) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.screen = screen
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        return cols * self.cell_size + self.margin * 2, rows * self.cell_size + self.margin * 2

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 20)
            self._big_font = pygame.font.SysFont(None, 36)
        return self._font, self._big_font

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + col * self.cell_size,
            self.margin + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_board(self, screen: pygame.Surface, view: GameView) -> None:
        grid = view.board.grid
        h, w = grid.shape
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(screen, _color_for_value(int(grid[y, x])), self._cell_rect(y, x))
        for row, col, tag in view.footprint.cells():
            if 0 <= row < h and 0 <= col < w:
                pygame.draw.rect(screen, _color_for_value(tag), self._cell_rect(row, col))

    def _draw_stats(self, screen: pygame.Surface, view: GameView) -> None:
        font, big_font = self._fonts()
        text_color = (230, 230, 230)
        left = self.margin
        right = screen.get_width() - self.margin

        screen.blit(font.render("Lines", True, text_color), (left, 2))
        screen.blit(font.render(_zero_pad(view.lines), True, text_color), (left + 50, 2))

        score = font.render(f"Score {_zero_pad(view.score)}", True, text_color)
        screen.blit(score, score.get_rect(topright=(right, 2)))

        banner = None
        if view.state == GameState.GAME_OVER:
            banner = big_font.render("Game Over", True, (255, 0, 0))
        elif view.state == GameState.PAUSED:
            banner = big_font.render("Paused", True, (0, 255, 0))
        if banner is not None:
            center = (screen.get_width() // 2, screen.get_height() // 2)
            screen.blit(banner, banner.get_rect(center=center))

    def draw(self, view: GameView) -> None:
        if self.screen is None:
            self.screen = pygame.display.get_surface()
        screen = self.screen
        screen.fill((10, 10, 14))
        self._draw_board(screen, view)
        self._draw_stats(screen, view)
        pygame.display.flip()
