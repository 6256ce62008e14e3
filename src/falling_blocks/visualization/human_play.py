from __future__ import annotations

from typing import Dict

import pygame

from falling_blocks.game import Action, FallingBlocksGame, GameConfig
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_RETURN: Action.TOGGLE_PAUSE,
    pygame.K_r: Action.RESET,
}


def run(config: GameConfig | None = None) -> None:
    pygame.init()
    try:
        config = config or GameConfig()
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(config.rows, config.cols))
        pygame.display.set_caption("Falling Blocks")
        renderer.screen = screen
        game = FallingBlocksGame(config, render_target=renderer)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.submit(action)

            game.update(pygame.time.get_ticks())
            clock.tick(60)

        print(f"Final score: {game.score}  lines: {game.lines}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
