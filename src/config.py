"""
run configuration for the 2048 player
"""
from dataclasses import dataclass
from typing import Optional

# print the running average every N games
REPORT_EVERY = 16384

STRATEGY_NAMES = ('up', 'score', 'lr')


@dataclass
class GameConfig:
    """
    everything a session needs to know, built by the command line

    games: number of games to play, None plays until interrupted
    server: "host:port" of a remote board, None plays locally
    timeout: seconds to wait on the remote board, None waits forever
    """
    strategy: str = 'up'
    games: Optional[int] = 1
    verbose: bool = False
    average: bool = False
    server: Optional[str] = None
    seed: Optional[int] = None
    timeout: Optional[float] = None
    report_every: int = REPORT_EVERY

    def __post_init__(self):
        if self.strategy not in STRATEGY_NAMES:
            raise ValueError(f"Unknown strategy: {self.strategy}")
        if self.games is not None and self.games < 1:
            raise ValueError(f"Number of games must be positive, got {self.games}")
        if self.timeout is not None and not 0 < self.timeout < float("inf"):
            raise ValueError(f"Timeout must be a positive number of seconds, got {self.timeout}")

    @property
    def unbounded(self):
        return self.games is None

    def report_due(self, games_played):
        """
        check if the running average is due after this many games

        a bounded run counts down from its last game, an unbounded run
        reports one game before each multiple of report_every
        """
        if self.unbounded:
            return (games_played + 1) % self.report_every == 0
        return (self.games - games_played) % self.report_every == 0
