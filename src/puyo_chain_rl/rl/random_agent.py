from __future__ import annotations

import argparse

import gymnasium as gym

import puyo_chain_rl.env  # noqa: F401
from puyo_chain_rl.env.wrappers import ResampleInvalidActionWrapper


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = ResampleInvalidActionWrapper(gym.make("PuyoChain-6x12-v0"))
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    best_chain = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_chain = max(best_chain, int(info.get("max_chain", 0)))
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s), best chain {best_chain}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
