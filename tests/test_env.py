import gymnasium as gym
import numpy as np

import block_drop_rl.env  # noqa: F401
from block_drop_rl.env.block_drop_env import ENV_ACTIONS, BlockDropEnv
from block_drop_rl.game import Action, GameGrid, GameState


def test_registered_env_resets_into_play():
    env = gym.make("BlockDrop-v0")
    obs, info = env.reset(seed=3)
    assert env.observation_space.contains(obs)
    assert env.unwrapped.game.state is GameState.PLAY
    assert info["score"] == 0
    env.close()


def test_step_is_one_frame():
    env = BlockDropEnv()
    env.reset(seed=0)
    x = env.game.current_x
    obs, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.LEFT))
    assert env.game.current_x == x - 1
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["steps"] == 1
    env.step(ENV_ACTIONS.index(Action.NONE))
    assert env.game.tick == 1


def test_hard_drops_eventually_terminate():
    env = BlockDropEnv(terminal_penalty=-5.0)
    env.reset(seed=11)
    hard_drop = ENV_ACTIONS.index(Action.HARD_DROP)
    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(hard_drop)
        if terminated:
            break
    assert terminated
    assert reward == -5.0
    assert info["pieces_locked"] > 0


def test_truncation_after_max_steps():
    env = BlockDropEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(ENV_ACTIONS.index(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_rgb_render_shape():
    env = BlockDropEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (GameGrid.HEIGHT * 12, GameGrid.WIDTH * 12, 3)
    assert img.dtype == np.uint8
    assert img.any()
