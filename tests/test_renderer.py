import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from falling_blocks.game import FallingBlocksGame, GameConfig, TetrominoType  # noqa: E402
from falling_blocks.visualization.renderer import Renderer, _color_for_value, _zero_pad  # noqa: E402


@pytest.fixture
def screen():
    pygame.init()
    renderer = Renderer(cell_size=10, margin=5)
    surface = pygame.display.set_mode(renderer.window_size(15, 10))
    yield surface
    pygame.quit()


def test_zero_pad():
    assert _zero_pad(42) == "00042"
    assert _zero_pad(0) == "00000"
    assert _zero_pad(1234567) == "34567"


def test_falling_piece_uses_same_colour():
    tag = int(TetrominoType.T)
    assert _color_for_value(-tag) == _color_for_value(tag)


def test_draw_paints_active_piece(screen):
    renderer = Renderer(cell_size=10, margin=5, screen=screen)
    game = FallingBlocksGame(GameConfig(random_seed=0), render_target=renderer)
    for _ in range(4):
        game.down()
    assert game.update(200)

    row, col, tag = next(game.piece.footprint().cells())
    x = 5 + col * 10 + 2
    y = 5 + row * 10 + 2
    assert tuple(screen.get_at((x, y)))[:3] == _color_for_value(tag)
