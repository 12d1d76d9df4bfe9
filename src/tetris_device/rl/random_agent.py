from __future__ import annotations

import argparse

import gymnasium as gym

import tetris_device.env  # noqa: F401


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("TetrisDevice-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            episodes += 1
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} episode(s)")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser(description="Drive the tetris device with random control codes")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
