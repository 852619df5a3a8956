from blocks_world_planner.envs.blocks_world_env import BlocksWorldEnv
