import random

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from game import Direction, Game2048, move


class Game2048Env(gym.Env):
    """
    gymnasium environment for 2048 game

    afterstate framework:
    - observation is the board in screen order
    - tracks board after the move, before the random tile
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, render_mode=None):
        super().__init__()

        self.render_mode = render_mode
        self.game = Game2048()

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # observation space -> 4x4 grid of raw tile values
        self.observation_space = spaces.Box(
            low=0,
            high=131072,  # biggest tile a 4x4 board can hold
            shape=(4, 4),
            dtype=np.int32
        )

        # map actions to game directions
        self.action_to_direction = {
            0: Direction.UP,
            1: Direction.DOWN,
            2: Direction.LEFT,
            3: Direction.RIGHT
        }

        # board after the last valid move, before the random tile
        self.last_afterstate = None

    def _get_observation(self):
        return np.array(self.game.board.grid, dtype=np.int32)

    def _get_info(self):
        return {
            "score": self.game.score,
            "moves": self.game.moves,
            "max_tile": self.game.board.max_tile(),
            "valid_actions": self.valid_actions(),
        }

    def valid_actions(self):
        """actions that would change the board"""
        return [
            action for action, direction in self.action_to_direction.items()
            if move(self.game.board.copy(), direction).legal
        ]

    def get_afterstate(self, action):
        """
        board after the move but before the random tile

        returns:
            afterstate_board: board after the move, None if the move is invalid
            reward: points earned from merging
            valid: if the move was valid
        """
        clone = self.game.board.copy()
        result = move(clone, self.action_to_direction[action])
        if not result.legal:
            return None, 0, False
        return np.array(clone.grid, dtype=np.int32), result.score, True

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self.last_afterstate = None

        return self._get_observation(), self._get_info()

    def step(self, action):
        """take one step, the reward is the points earned by merging"""
        afterstate_board, _, valid = self.get_afterstate(action)

        result = self.game.make_move(self.action_to_direction[action])
        reward = float(result.score) if result.legal else 0.0

        if valid:
            self.last_afterstate = afterstate_board

        terminated = self.game.is_game_over()
        self.game.game_over = terminated

        info = self._get_info()
        info["moved"] = result.legal
        info["afterstate"] = afterstate_board

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, info

    def render(self):
        """display the game state"""
        if self.render_mode == "ansi":
            return f"Score: {self.game.score}\n{self.game.board}\n"
        print(f"Score: {self.game.score}")
        self.game.print_board()
        return None
