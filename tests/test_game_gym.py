"""
Tests for the gymnasium environment.
"""

import numpy as np

from game_gym import Game2048Env


def test_reset():
    env = Game2048Env()
    observation, info = env.reset(seed=1)

    assert observation.shape == (4, 4)
    assert observation.dtype == np.int32
    assert np.count_nonzero(observation) == 2
    assert info["score"] == 0
    assert info["valid_actions"]
    assert env.observation_space.contains(observation)


def test_same_seed_same_start():
    env = Game2048Env()
    first, _ = env.reset(seed=7)
    second, _ = env.reset(seed=7)
    assert np.array_equal(first, second)


def test_afterstate_of_left_move(pair_board):
    env = Game2048Env()
    env.reset(seed=1)
    env.game.board.cells[:] = pair_board.cells

    afterstate, reward, valid = env.get_afterstate(2)

    assert valid
    assert reward == 4
    assert afterstate[0].tolist() == [4, 0, 0, 0]
    # the real board is untouched
    assert env.game.board == pair_board


def test_invalid_move(pair_board):
    env = Game2048Env()
    env.reset(seed=1)
    env.game.board.cells[:] = pair_board.cells

    observation, reward, terminated, truncated, info = env.step(0)

    assert reward == 0.0
    assert not info["moved"]
    assert info["afterstate"] is None
    assert not terminated
    assert np.array_equal(observation, np.array(pair_board.grid))


def test_random_play_until_terminated():
    env = Game2048Env()
    env.reset(seed=3)
    env.action_space.seed(3)

    total = 0.0
    for _ in range(10000):
        observation, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total += reward
        assert not truncated
        if terminated:
            break

    assert terminated
    assert info["score"] == total
    assert info["valid_actions"] == []


def test_render_ansi(pair_board):
    env = Game2048Env(render_mode="ansi")
    env.reset(seed=1)
    env.game.board.cells[:] = pair_board.cells
    assert env.render().startswith("Score: 0\n    0     0     2     2")
