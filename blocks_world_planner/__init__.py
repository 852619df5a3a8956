from gymnasium.envs.registration import register

register(
     id='BlocksWorld-v0',
     entry_point='blocks_world_planner.envs:BlocksWorldEnv',
     max_episode_steps=100,
)
