"""
core game logic and mechanics
"""
import random
from enum import Enum
from typing import NamedTuple

import numpy as np

SIZE = 4

# 90% chance for 2 and 10% chance for 4
SPAWN_TWO_PERCENT = 90

# largest tile a uint32 cell holds
MAX_TILE = 2 ** 31


class Direction(Enum):
    """direction to move, with its (start, row step, column step) walk"""
    LEFT = ('left', 0, 4, 1)
    RIGHT = ('right', 3, 4, -1)
    UP = ('up', 0, 1, 4)
    DOWN = ('down', 12, 1, -4)

    def __init__(self, label, start, row_step, col_step):
        self.label = label
        self.start = start
        self.row_step = row_step
        self.col_step = col_step

    def __str__(self):
        return self.label

    @classmethod
    def from_string(cls, name):
        for direction in cls:
            if direction.label == name.strip().lower():
                return direction
        raise ValueError(f"Unknown direction: {name}")

    def front(self, line):
        """index of the cell that tiles of a line slide toward"""
        return self.start + line * self.row_step + (SIZE - 1) * self.col_step


class MoveResult(NamedTuple):
    score: int
    moved: int

    @property
    def legal(self):
        """a move is legal when it changed at least one cell"""
        return self.moved > 0


def _valid_tile(value):
    return value == 0 or (2 <= value <= MAX_TILE and value & (value - 1) == 0)


class Board:
    """
    4x4 board stored as 16 cells in row-major order

    row 3 is the top row on screen and within a row cell 3 is the leftmost,
    so `grid` is the screen view of the same cells
    """

    def __init__(self, cells=None):
        if cells is None:
            self.cells = np.zeros(SIZE * SIZE, dtype=np.uint32)
        else:
            values = [int(v) for v in np.asarray(cells, dtype=object).reshape(-1).tolist()]
            if len(values) != SIZE * SIZE:
                raise ValueError(f"Board must have {SIZE * SIZE} cells, got {len(values)}")
            if not all(_valid_tile(v) for v in values):
                raise ValueError(f"Board cells must be 0 or a power of two up to {MAX_TILE}: {values}")
            self.cells = np.array(values, dtype=np.uint32)

    @classmethod
    def from_rows(cls, rows):
        """build a board from 4 rows as they appear on screen, top row first"""
        grid = np.array(rows, dtype=object)
        if grid.shape != (SIZE, SIZE):
            raise ValueError(f"Board must be {SIZE}x{SIZE}, got shape {grid.shape}")
        try:
            return cls(grid[::-1, ::-1].reshape(-1))
        except (OverflowError, TypeError) as e:
            raise ValueError(f"Board cells must be integers: {e}") from e

    @property
    def grid(self):
        """writable 4x4 view in screen order"""
        return self.cells.reshape(SIZE, SIZE)[::-1, ::-1]

    def rows(self):
        return [[int(v) for v in row] for row in self.grid]

    def lines(self, direction):
        """mutable views of the four lines of a direction, front first"""
        step = -direction.col_step
        return [self.cells[direction.front(i)::step][:SIZE] for i in range(SIZE)]

    def copy(self):
        clone = Board()
        clone.cells[:] = self.cells
        return clone

    def clear(self):
        self.cells[:] = 0

    def empty_count(self):
        return int(np.count_nonzero(self.cells == 0))

    def max_tile(self):
        return int(self.cells.max())

    def __getitem__(self, index):
        return int(self.cells[index])

    def __setitem__(self, index, value):
        self.cells[index] = value

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    __hash__ = None

    def __repr__(self):
        return f"Board.from_rows({self.rows()})"

    def __str__(self):
        return "\n".join(" ".join(f"{v:5d}" for v in row) for row in self.rows())


def collapse_line(line):
    """
    slide and merge one line toward its front (index 0)

    returns the merge score and the number of cell mutations
    """
    score = 0
    moved = 0
    for to in range(len(line)):
        for src in range(to + 1, len(line)):
            if not line[src]:
                continue
            if not line[to]:
                # skip over 0s, the slid tile may still merge with the next one
                line[to] = line[src]
                line[src] = 0
                moved += 1
                continue
            if line[to] == line[src]:
                line[to] = line[to] * 2
                score += int(line[to])
                line[src] = 0
                moved += 1
            break
    return score, moved


def move(board, direction):
    """move all tiles of the board into the given direction"""
    score = 0
    moved = 0
    for line in board.lines(direction):
        line_score, line_moved = collapse_line(line)
        score += line_score
        moved += line_moved
    return MoveResult(score, moved)


def spawn_tile(board, rng=random):
    """
    randomly put a 2 or 4 on an empty cell

    a single draw picks both the cell and the value. returns the number of
    empty cells before the spawn, 0 means the board was full
    """
    cells = board.cells
    empty = int(np.count_nonzero(cells == 0))
    if not empty:
        return 0

    r = rng.getrandbits(31)
    for n in reversed(range(SIZE * SIZE)):
        if cells[n]:
            continue
        hit = r % empty == 0
        r -= 1
        if hit:
            cells[n] = 2 if r % 100 < SPAWN_TWO_PERCENT else 4
            break
    return empty


def can_move(board):
    """check if any direction changes the board"""
    return any(move(board.copy(), direction).legal for direction in Direction)


class Game2048:
    def __init__(self, rng=None):
        """initialize 4x4 2048 game"""
        self.rng = rng if rng is not None else random.Random()
        self.board = Board()
        self.score = 0
        self.moves = 0
        self.game_over = False

        # add two starting tiles
        self.reset()

    def reset(self):
        """clear the board and spawn the two starting tiles"""
        self.board.clear()
        self.score = 0
        self.moves = 0
        self.game_over = False
        spawn_tile(self.board, self.rng)
        spawn_tile(self.board, self.rng)

    def make_move(self, direction):
        """
        make a move in the specified direction

        a legal move adds its merge score and spawns a tile, an illegal one
        leaves the board untouched
        """
        if isinstance(direction, str):
            direction = Direction.from_string(direction)
        if self.game_over:
            return MoveResult(0, 0)

        result = move(self.board, direction)
        if result.legal:
            self.score += result.score
            self.moves += 1
            spawn_tile(self.board, self.rng)
        return result

    def is_game_over(self):
        """check if game is over (no more moves possible)"""
        return not can_move(self.board)

    def print_board(self):
        """print the board to console"""
        print(self.board)
        print()
