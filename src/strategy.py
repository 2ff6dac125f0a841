"""
move selection strategies

up: try up, left, right, down and take whatever works
score: one-ply lookahead, biggest direct score gain
lr: like score, but rewards numbers ordered per row left - right - left ...
"""
import logging
import random
from abc import ABC, abstractmethod

from game import Direction, move, spawn_tile

logger = logging.getLogger(__name__)

# preferred directions to move
FIXED_ORDER = (Direction.UP, Direction.LEFT, Direction.RIGHT, Direction.DOWN)

# preferred order of cells on the board, rows alternate direction on screen
SERPENTINE = (15, 14, 13, 12, 8, 9, 10, 11, 7, 6, 5, 4, 0, 1, 2, 3)


class Strategy(ABC):
    """base class for all strategies"""

    name = None

    # strategies without lookahead never go through evaluate()
    lookahead = True

    def __init__(self, rng=None):
        # spawns on the clones draw from their own generator
        self.rng = rng if rng is not None else random.Random()

    def move_order(self, board):
        """directions to try, best first"""
        return list(FIXED_ORDER)

    @abstractmethod
    def score_candidate(self, original, candidate, result):
        """
        rate a legal move

        args:
            original: board before the move, never modified
            candidate: clone after the move and a spawn
            result: MoveResult of the move on the clone
        """

    def evaluate(self, board):
        """
        choose the next direction without touching the board

        returns UP when no direction is both legal and leaves room to spawn,
        the caller then has to fall back to the fixed order
        """
        best = Direction.UP
        best_score = None

        for direction in self.move_order(board):
            clone = board.copy()
            result = move(clone, direction)
            if not result.legal or not spawn_tile(clone, self.rng):
                continue

            candidate = self.score_candidate(board, clone, result)
            if best_score is None or candidate > best_score:
                best = direction
                best_score = candidate

        logger.debug("%s picked %s (candidate score %s)", self.name, best, best_score)
        return best


class FixedOrderStrategy(Strategy):
    """move up, left, right or down, whatever works"""

    name = 'up'
    lookahead = False

    def score_candidate(self, original, candidate, result):
        return 0


class ScoreStrategy(Strategy):
    """use the move with the best immediate merge score"""

    name = 'score'

    def score_candidate(self, original, candidate, result):
        return result.score


def ordered_bonus(board):
    """
    sum of the values that are not smaller than their predecessor along the
    serpentine order, the first cell always counts
    """
    bonus = 0
    previous = 0
    for index in SERPENTINE:
        value = board[index]
        if value >= previous:
            bonus += value
        previous = value
    return bonus


class LeftRightStrategy(Strategy):
    """keep the numbers ordered along the serpentine"""

    name = 'lr'

    def move_order(self, board):
        order = list(FIXED_ORDER)
        for i, index in enumerate(SERPENTINE):
            # find the first cell affected by the move
            empty = not board[index]
            if empty or (i % 4 != 3 and board[index] == board[SERPENTINE[i + 1]]):
                if i // 4 % 2 == 1:
                    # move the second, fourth row to the right
                    order[1] = Direction.RIGHT
                    order[2] = Direction.LEFT
                if empty:
                    # move up to fill up rows
                    order[0] = order[1]
                    order[1] = Direction.UP
                break
        return order

    def score_candidate(self, original, candidate, result):
        return result.score + ordered_bonus(original)


STRATEGIES = {
    strategy.name: strategy
    for strategy in (FixedOrderStrategy, ScoreStrategy, LeftRightStrategy)
}


def get_strategy(name, rng=None):
    """create a strategy by its command line name"""
    try:
        return STRATEGIES[name](rng)
    except KeyError:
        raise ValueError(f"Unknown strategy: {name}") from None
