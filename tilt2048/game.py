from collections import namedtuple

import numpy as np

from tilt2048.board import Board, Side

BOARD_SIZE = 4
MAX_SIZE = 8
MAX_PIECE = 2048

MoveResult = namedtuple('MoveResult', ['changed', 'score'])


def tilt_board(board, side):
    """Slide and merge every tile on BOARD toward SIDE.

    The scan is written for a single direction, toward increasing row, and
    the board's viewing perspective maps it onto SIDE. A cell takes part in
    at most one merge per tilt.
    """
    size = board.size
    changed = False
    score = 0
    merged = np.zeros((size, size), dtype=bool)

    with board.perspective(side):
        for row in range(size - 2, -1, -1):
            for col in range(size):
                tile = board.tile(col, row)
                if tile is None:
                    continue
                for k in range(row + 1, size):
                    above = board.tile(col, k)
                    if above is None and k < size - 1:
                        continue
                    if above is not None and (above.value != tile.value or merged[k, col]):
                        if k - 1 != row:
                            board.move(col, k - 1, tile)
                            changed = True
                        break
                    changed = True
                    if board.move(col, k, tile):
                        score += board.tile(col, k).value
                        merged[k, col] = True
                        break

    return MoveResult(changed, score)


def empty_space_exists(board):
    return bool(np.any(board.values() == 0))


def max_tile_exists(board, max_piece=MAX_PIECE):
    return bool(np.any(board.values() == max_piece))


def at_least_one_move_exists(board):
    """True if a cell is empty or two neighbouring tiles have equal values."""
    values = board.values()
    if np.any(values == 0):
        return True
    if np.any(values[:, 1:] == values[:, :-1]):
        return True
    return bool(np.any(values[1:, :] == values[:-1, :]))


def check_game_over(board, max_piece=MAX_PIECE):
    return max_tile_exists(board, max_piece) or not at_least_one_move_exists(board)


class Model:
    """The state of one game: the board, the score and the best score so far."""

    def __init__(self, size=BOARD_SIZE, max_piece=MAX_PIECE):
        self.board = Board(size)
        self.max_piece = max_piece
        self._score = 0
        self._max_score = 0
        self._game_over = False

    @classmethod
    def from_values(cls, values, score=0, max_score=0, game_over=False, max_piece=MAX_PIECE):
        """Model whose tiles are values[row][col], (0, 0) the bottom left, 0 if empty."""
        model = cls(max_piece=max_piece)
        model.board = Board.from_values(values)
        model._score = score
        model._max_score = max_score
        model._game_over = game_over
        return model

    @property
    def size(self):
        return self.board.size

    @property
    def score(self):
        return self._score

    @property
    def max_score(self):
        return self._max_score

    def tile(self, col, row):
        return self.board.tile(col, row)

    def values(self):
        return self.board.values()

    def game_over(self):
        """True if no move is left or a tile has reached max_piece.

        Folds the current score into max_score once the game is over.
        """
        self._check_game_over()
        if self._game_over:
            self._max_score = max(self._score, self._max_score)
        return self._game_over

    def clear(self):
        self._score = 0
        self._game_over = False
        self.board.clear()

    def add_tile(self, tile):
        self.board.add_tile(tile)
        self._check_game_over()

    def tilt(self, side):
        """Tilt the board toward SIDE. Returns True if the board changed."""
        side = Side(side)
        result = tilt_board(self.board, side)
        self._score += result.score
        self._check_game_over()
        return result.changed

    def _check_game_over(self):
        self._game_over = check_game_over(self.board, self.max_piece)

    def __str__(self):
        lines = ['', '[']
        for row in range(self.size - 1, -1, -1):
            cells = []
            for col in range(self.size):
                tile = self.tile(col, row)
                cells.append('|    ' if tile is None else f"|{tile.value:4d}")
            lines.append(''.join(cells) + '|')
        over = 'over' if self.game_over() else 'not over'
        lines.append(f"] {self.score} (max: {self.max_score}) (game is {over}) ")
        return '\n'.join(lines) + '\n'
