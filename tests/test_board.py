import numpy as np
import pytest

from tilt2048.board import Board, Side, Tile


@pytest.fixture
def corner_board():
    board = Board(4)
    board.add_tile(Tile(2, 3, 0))
    return board


def test_round_trip_from_values():
    values = [
        [2, 0, 0, 4],
        [0, 8, 0, 0],
        [0, 0, 0, 0],
        [16, 0, 0, 0],
    ]
    board = Board.from_values(values)

    assert board.tile(0, 0) == Tile(2, 0, 0)
    assert board.tile(3, 0) == Tile(4, 3, 0)
    assert board.tile(1, 1) == Tile(8, 1, 1)
    assert board.tile(0, 3) == Tile(16, 0, 3)
    assert board.tile(1, 0) is None
    assert np.array_equal(board.values(), values)


def test_from_values_rejects_non_square():
    with pytest.raises(ValueError):
        Board.from_values([[2, 0, 0], [0, 0, 0]])


@pytest.mark.parametrize("col, row", [(4, 0), (0, 4), (-1, 0), (0, -1)])
def test_tile_out_of_range(corner_board, col, row):
    with pytest.raises(IndexError):
        corner_board.tile(col, row)


def test_add_tile_on_occupied_cell(corner_board):
    with pytest.raises(ValueError):
        corner_board.add_tile(Tile(4, 3, 0))


@pytest.mark.parametrize("value", [0, -2, 3])
def test_add_tile_rejects_bad_values(corner_board, value):
    with pytest.raises(ValueError):
        corner_board.add_tile(Tile(value, 0, 0))
    assert corner_board.tile(0, 0) is None


def test_add_tile_out_of_range(corner_board):
    with pytest.raises(IndexError):
        corner_board.add_tile(Tile(2, 4, 4))


@pytest.mark.parametrize("side, col, row", [
    (Side.NORTH, 3, 0),
    (Side.EAST, 3, 3),
    (Side.SOUTH, 0, 3),
    (Side.WEST, 0, 0),
])
def test_perspective_lookup(corner_board, side, col, row):
    corner_board.set_viewing_perspective(side)
    assert corner_board.tile(col, row) == Tile(2, 3, 0)


def test_side_accepts_direction_names():
    assert Side('up') is Side.NORTH
    assert Side('right') is Side.EAST
    assert Side('down') is Side.SOUTH
    assert Side('left') is Side.WEST
    with pytest.raises(ValueError):
        Side('diagonal')


def test_perspective_resets_on_error(corner_board):
    with pytest.raises(RuntimeError):
        with corner_board.perspective(Side.EAST):
            raise RuntimeError("boom")
    assert corner_board.tile(3, 0) == Tile(2, 3, 0)


def test_move_in_perspective_uses_board_coordinates():
    board = Board(4)
    board.add_tile(Tile(2, 0, 0))
    with board.perspective(Side.EAST):
        merged = board.move(3, 3, board.tile(3, 0))

    assert merged is False
    assert board.tile(0, 0) is None
    assert board.tile(3, 0) == Tile(2, 3, 0)


def test_move_merges_equal_tiles():
    board = Board.from_values([[2, 2], [0, 0]])
    assert board.move(1, 0, board.tile(0, 0)) is True
    assert board.tile(0, 0) is None
    assert board.tile(1, 0) == Tile(4, 1, 0)


def test_move_refuses_unequal_merge():
    board = Board.from_values([[2, 4], [0, 0]])
    with pytest.raises(ValueError):
        board.move(1, 0, board.tile(0, 0))
    assert np.array_equal(board.values(), [[2, 4], [0, 0]])
    assert board.tile(0, 0) == Tile(2, 0, 0)


def test_move_onto_own_cell_is_noop(corner_board):
    assert corner_board.move(3, 0, corner_board.tile(3, 0)) is False
    assert corner_board.tile(3, 0) == Tile(2, 3, 0)


def test_clear(corner_board):
    corner_board.clear()
    assert not corner_board.values().any()
    assert corner_board.tile(3, 0) is None
