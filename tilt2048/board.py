from collections import namedtuple
from contextlib import contextmanager
from enum import Enum

import numpy as np


class Side(Enum):
    """The four tilt directions. Each value is the name a client sends."""
    NORTH = 'up'
    EAST = 'right'
    SOUTH = 'down'
    WEST = 'left'

    @property
    def turns(self):
        return _TURNS[self]

    def to_board(self, col, row, size):
        """Map (col, row) seen from this side to board coordinates.

        Viewed from a side, "toward the side" is always toward increasing row.
        Each quarter turn maps (c, r) to (r, size - 1 - c), the same rotation
        np.rot90 applies to a [col, row] indexed array.
        """
        for _ in range(self.turns):
            col, row = row, size - 1 - col
        return col, row


_TURNS = {Side.NORTH: 0, Side.EAST: 1, Side.SOUTH: 2, Side.WEST: 3}


class Tile(namedtuple('Tile', ['value', 'col', 'row'])):
    """A placed tile. Tiles are never mutated; moves and merges replace them."""
    __slots__ = ()

    def moved(self, col, row):
        return Tile(self.value, col, row)

    def merged(self, col, row, other):
        if other.value != self.value:
            raise ValueError(f"Cannot merge tiles of value {self.value} and {other.value}")
        return Tile(self.value + other.value, col, row)


class Board:
    """Square grid of tiles, (col, row) with (0, 0) at the bottom left.

    All coordinates passed to tile() and move() are interpreted from the
    current viewing perspective.
    """

    def __init__(self, size):
        self.size = size
        self._cells = np.empty((size, size), dtype=object)
        self._side = Side.NORTH

    @classmethod
    def from_values(cls, values):
        """Build a board from values[row][col], row 0 at the bottom, 0 if empty."""
        values = np.asarray(values, dtype=int)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Board values must be square, got shape {values.shape}")
        board = cls(values.shape[0])
        for row, col in zip(*np.nonzero(values)):
            board.add_tile(Tile(int(values[row, col]), int(col), int(row)))
        return board

    def _check(self, col, row):
        if not (0 <= col < self.size and 0 <= row < self.size):
            raise IndexError(f"({col}, {row}) is outside a board of size {self.size}")

    def tile(self, col, row):
        self._check(col, row)
        return self._cells[self._side.to_board(col, row, self.size)]

    def add_tile(self, tile):
        self._check(tile.col, tile.row)
        if tile.value <= 0 or tile.value & (tile.value - 1):
            raise ValueError(f"Tile value must be a positive power of two, got {tile.value}")
        if self._cells[tile.col, tile.row] is not None:
            raise ValueError(f"Cell ({tile.col}, {tile.row}) is already occupied")
        self._cells[tile.col, tile.row] = tile

    def move(self, col, row, tile):
        """Move TILE to (COL, ROW), merging with any tile already there.

        Returns True iff the move was a merge.
        """
        self._check(col, row)
        col, row = self._side.to_board(col, row, self.size)
        if (tile.col, tile.row) == (col, row):
            return False
        current = self._cells[col, row]
        if current is None:
            self._cells[tile.col, tile.row] = None
            self._cells[col, row] = tile.moved(col, row)
            return False
        result = current.merged(col, row, tile)
        self._cells[tile.col, tile.row] = None
        self._cells[col, row] = result
        return True

    def set_viewing_perspective(self, side):
        self._side = Side(side)

    @contextmanager
    def perspective(self, side):
        self.set_viewing_perspective(side)
        try:
            yield self
        finally:
            self._side = Side.NORTH

    def clear(self):
        self._cells[:, :] = None

    def values(self):
        """Tile values as an int matrix indexed [row][col], 0 where empty."""
        values = np.zeros((self.size, self.size), dtype=int)
        for (col, row), tile in np.ndenumerate(self._cells):
            if tile is not None:
                values[row, col] = tile.value
        return values
