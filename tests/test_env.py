import gymnasium as gym
import numpy as np

import puyo_chain_rl.env  # noqa: F401
from puyo_chain_rl.env.puyo_env import ENV_ACTIONS, PuyoEnv
from puyo_chain_rl.env.wrappers import ResampleInvalidActionWrapper
from puyo_chain_rl.game import Action, GameConfig


def test_reset_observation_matches_space():
    env = PuyoEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert tuple(obs["pair"]) == (0, 3, 1, 3)
    assert obs["field"].shape == (12, 6)
    assert info["action_mask"].shape == (len(ENV_ACTIONS),)
    assert info["score"] == 0


def test_action_mask_reflects_walls():
    env = PuyoEnv()
    env.reset(seed=1)
    for _ in range(3):
        env.game.move_left()
    mask = env.get_action_mask()
    assert mask[ENV_ACTIONS.index(Action.NONE)]
    assert not mask[ENV_ACTIONS.index(Action.MOVE_LEFT)]
    assert mask[ENV_ACTIONS.index(Action.MOVE_RIGHT)]


def test_episode_terminates_on_game_over():
    env = PuyoEnv(terminal_penalty=-1.0)
    env.reset(seed=2)
    terminated = False
    reward = 0.0
    for _ in range(2000):
        _, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.NONE))
        assert not truncated
        if terminated:
            break
    assert terminated
    assert info["state"] == "game_over"
    assert info["reward_components"]["terminal"] == -1.0
    assert reward <= 0.0


def test_score_delta_is_rewarded():
    env = PuyoEnv(config=GameConfig(palette=("red",)), score_scale=0.5)
    env.reset(seed=3)
    total_delta = 0
    total_reward = 0.0
    for _ in range(40):
        _, reward, terminated, _, info = env.step(ENV_ACTIONS.index(Action.SOFT_DROP))
        total_delta += info["engine_score_delta"]
        total_reward += reward
        if terminated:
            break
    # two single-color pairs stacked in one column clear as a group of four
    assert total_delta >= 40
    assert np.isclose(total_reward, 0.5 * total_delta)


def test_registered_env_with_resample_wrapper():
    env = ResampleInvalidActionWrapper(gym.make("PuyoChain-6x12-v0", render_mode="rgb_array"))
    obs, info = env.reset(seed=4)
    for _ in range(3):
        env.unwrapped.game.move_left()
    # moving left is invalid now; the wrapper swaps in a valid action
    obs, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.MOVE_LEFT))
    assert "invalid" not in info["reward_components"]
    frame = env.render()
    assert frame.shape == (12 * 12, 6 * 12, 3)
    env.close()
