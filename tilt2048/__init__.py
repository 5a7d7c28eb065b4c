from tilt2048.board import Board, Side, Tile
from tilt2048.game import (
    BOARD_SIZE,
    MAX_SIZE,
    MAX_PIECE,
    Model,
    MoveResult,
    at_least_one_move_exists,
    check_game_over,
    empty_space_exists,
    max_tile_exists,
    tilt_board,
)
