# scripts/play_with_partner.py

import time
import traceback

import gymnasium as gym

# Import the package to register the environment
import blocks_world_planner

# --- Run Configuration ---
ENV_ID = "BlocksWorld-v0"
NUM_EPISODES = 3
TASK_CONFIG_FILE = "sorted_tower.yaml"
PARTNER_MODE = "hinderer"  # helper | hinderer | none
SEED = 0
# ---------------------------


def run_episode(env, seed):
    """Agent follows the optimal-plan hint each turn while the partner replies."""
    obs, info = env.reset(seed=seed)
    print(env.render())
    total_reward = 0.0
    terminated = truncated = False

    while not (terminated or truncated):
        move = env.unwrapped.hint()
        if move is None:
            break
        obs, reward, terminated, truncated, info = env.step(env.unwrapped.encode_move(move))
        total_reward += reward
        print(f"  agent: {info['agent_move']:<12} partner: {str(info['partner_move']):<12} "
              f"distance: {info['distance']}")

    print(env.render())
    return info["move_count"], total_reward, terminated


if __name__ == "__main__":
    env = None
    try:
        env = gym.make(ENV_ID, render_mode="ansi", task_config_file=TASK_CONFIG_FILE,
                       config_overrides={"partner": {"mode": PARTNER_MODE}})
        print(f"Action Space: {env.action_space}")
        print(f"Observation Space: {env.observation_space}")

        for episode in range(NUM_EPISODES):
            start = time.time()
            moves, total_reward, solved = run_episode(env, SEED + episode)
            print(f"Episode {episode + 1}: solved={solved}, moves={moves}, "
                  f"reward={total_reward:.2f}, {time.time() - start:.2f}s\n")

    except Exception:
        print("\n!!!!!! An error occurred during the run !!!!!!")
        print(traceback.format_exc())
    finally:
        if env is not None:
            env.close()
