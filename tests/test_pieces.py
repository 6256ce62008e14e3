import pytest

from falling_blocks.game import BLOCKS, GameGrid, Piece, TetrominoType


def _block(kind: TetrominoType) -> GameGrid:
    return BLOCKS[list(TetrominoType).index(kind)]


def test_kind_is_colour_tag():
    assert [Piece(b).kind for b in BLOCKS] == [int(t) for t in TetrominoType]


@pytest.mark.parametrize("block", BLOCKS)
def test_reset_position_on_empty_board(block):
    board = GameGrid.empty(15, 10)
    piece = Piece(block)
    assert piece.reset_position(board)
    assert piece.row_offset == 0
    assert piece.col_offset == (10 - block.cols) // 2


def test_reset_position_reports_overlap():
    board = GameGrid.empty(15, 10)
    board.grid[0, 4] = 1
    piece = Piece(_block(TetrominoType.O))
    assert not piece.reset_position(board)


def test_move_left_and_right_stop_at_walls():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.I))
    piece.reset_position(board)
    assert piece.col_offset == 3

    moves = 0
    while piece.move_left(board):
        moves += 1
    assert moves == 3
    assert piece.col_offset == 0

    moves = 0
    while piece.move_right(board):
        moves += 1
    assert moves == 6
    assert piece.col_offset == 6


def test_move_blocked_by_board_cells():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.O))
    piece.reset_position(board)
    board.grid[0, 3] = 1
    assert not piece.move_left(board)
    assert piece.col_offset == 4


def test_move_down_stops_at_floor():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.O))
    piece.reset_position(board)
    moves = 0
    while piece.move_down(board):
        moves += 1
    assert moves == 13
    assert piece.row_offset == 13


def test_rotate_cycles_through_four_states():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.T))
    piece.reset_position(board)
    start = piece.grid
    for _ in range(4):
        assert piece.rotate(board)
    assert piece.grid == start


def test_rotate_clamps_into_right_wall():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.I))
    piece.reset_position(board)
    piece.rotate(board)
    assert piece.grid.shape == (4, 1)
    while piece.move_right(board):
        pass
    assert piece.col_offset == 9

    assert piece.rotate(board)
    assert piece.grid.shape == (1, 4)
    assert piece.col_offset == 6


def test_rotate_clamps_up_from_floor():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.I))
    piece.reset_position(board)
    while piece.move_down(board):
        pass
    assert piece.row_offset == 14

    assert piece.rotate(board)
    assert piece.grid.shape == (4, 1)
    assert piece.row_offset == 11


def test_rotate_rejected_when_blocked():
    board = GameGrid.empty(15, 10)
    piece = Piece(_block(TetrominoType.I))
    piece.reset_position(board)
    board.grid[1, 3:7] = 1
    before = (piece.grid, piece.row_offset, piece.col_offset)

    assert not piece.rotate(board)
    assert (piece.grid, piece.row_offset, piece.col_offset) == before
    assert piece.rotations.index == 0


def test_fits_is_pure():
    board = GameGrid.empty(5, 5)
    piece = Piece(_block(TetrominoType.O))
    assert piece.fits(board, 3, 3)
    assert not piece.fits(board, 4, 3)
    assert (piece.row_offset, piece.col_offset) == (0, 0)


def test_commit_and_footprint():
    board = GameGrid.empty(4, 4)
    piece = Piece(_block(TetrominoType.S))
    piece.row_offset, piece.col_offset = 2, 1
    cells = sorted(piece.footprint().cells())
    s = int(TetrominoType.S)
    assert cells == [(2, 2, s), (2, 3, s), (3, 1, s), (3, 2, s)]

    piece.commit_to(board)
    assert board.grid.tolist() == [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, s, s],
        [0, s, s, 0],
    ]
