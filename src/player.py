"""
game loop: play games until the board is stuck and keep session statistics
"""
import itertools
import logging
import random
from dataclasses import dataclass, field

from game import Board, Game2048, move
from remote_board import RemoteBoard
from strategy import FIXED_ORDER, get_strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """outcome of one finished game"""
    score: int
    moves: int
    max_tile: int
    board: Board = field(repr=False)


@dataclass
class SessionStats:
    """running numbers over all games of one session"""
    games_played: int = 0
    total_score: int = 0
    high_score: int = 0
    high_score_game: int = 0

    @property
    def average(self):
        if not self.games_played:
            return 0
        return self.total_score // self.games_played

    def record(self, result):
        """add a finished game, returns True on a new high score"""
        self.games_played += 1
        self.total_score += result.score
        if result.score > self.high_score:
            self.high_score = result.score
            self.high_score_game = self.games_played
            return True
        return False


def play_turn(game, strategy, verbose=False):
    """
    play one move on a local game

    returns the accepted direction, or None when no direction works
    """
    if strategy.lookahead:
        direction = strategy.evaluate(game.board)
        if verbose:
            print(f"move {direction}")
        if game.make_move(direction).legal:
            return direction

    # simple strategy: move up, left, right or down, whatever works
    for direction in FIXED_ORDER:
        if game.make_move(direction).legal:
            return direction
    return None


def play_game(game, strategy, verbose=False):
    """play one local game from a fresh board until no move is possible"""
    game.reset()
    while True:
        if verbose:
            game.print_board()
        if play_turn(game, strategy, verbose) is None:
            break

    game.game_over = True
    logger.debug("game over after %d moves, score %d", game.moves, game.score)
    return GameResult(game.score, game.moves, game.board.max_tile(), game.board.copy())


def _choose_remote(board, strategy):
    """pick a legal direction for a remote board, with its local move result"""
    if strategy.lookahead:
        direction = strategy.evaluate(board)
        result = move(board.copy(), direction)
        if result.legal:
            return direction, result
    for direction in FIXED_ORDER:
        result = move(board.copy(), direction)
        if result.legal:
            return direction, result
    return None, None


def play_remote_game(remote, strategy, verbose=False):
    """
    play one game on a remote board

    the server spawns the tiles, the score is counted from the local
    simulation of each accepted move
    """
    score = 0
    moves = 0
    direction = None
    while True:
        if direction is not None:
            remote.move(direction)
        board = remote.fetch_board()
        if verbose:
            print(board)
            print()

        direction, result = _choose_remote(board, strategy)
        if direction is None:
            break
        if verbose and strategy.lookahead:
            print(f"move {direction}")
        score += result.score
        moves += 1

    remote.game_over()
    return GameResult(score, moves, board.max_tile(), board)


def run_session(config):
    """
    play the configured number of games and report the results

    prints the score and board on every new high score and, with
    config.average, the running average when a report is due
    """
    rng = random.Random(config.seed)
    strategy = get_strategy(config.strategy, random.Random(rng.getrandbits(32)))
    game = Game2048(rng) if config.server is None else None
    stats = SessionStats()

    games = itertools.count() if config.unbounded else range(config.games)
    for _ in games:
        if config.server is None:
            result = play_game(game, strategy, config.verbose)
        else:
            with RemoteBoard.connect(config.server, config.timeout) as remote:
                result = play_remote_game(remote, strategy, config.verbose)

        if stats.record(result):
            print(f"score {result.score} ({stats.games_played})")
            print(result.board)
            print()
        elif config.average and config.report_due(stats.games_played):
            print(f"avg.  {stats.average}")

    return stats
