import re
from pathlib import Path

import gymnasium as gym
import numpy as np
import yaml
from gymnasium import spaces

from blocks_world_planner.envs import tasks
from blocks_world_planner.envs.task_interface import BaseTask
from blocks_world_planner.planning.adversarial import AdversarialSearcher
from blocks_world_planner.planning.heuristic import heuristic
from blocks_world_planner.planning.moves import TABLE, Move, apply_move, describe_move, is_legal_move
from blocks_world_planner.planning.solver import AStarSolver
from blocks_world_planner.planning.state_codec import canonical_key, check_compatible, positional_key, to_state
from blocks_world_planner.utils.color_gen import generate_block_colors, to_uint8_rgb
from blocks_world_planner.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

PARTNER_MODES = ("helper", "hinderer", "none")


def deep_merge(a, b):
    """Recursive dict merge: values in b overwrite those in a."""
    for k, v in b.items():
        if isinstance(v, dict):
            a[k] = deep_merge(dict(a.get(k, {})), v)
        else:
            a[k] = v
    return a


class BlocksWorldEnv(gym.Env):
    """
    Gymnasium environment for the blocks-world stacking puzzle.

    The agent moves the top block of one column onto another column or onto
    the table. After each legal move an optional partner replies with one move
    of its own, either helping towards the goal or working against it.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 4}

    def __init__(self, render_mode=None,
                 task_config_file="sorted_tower.yaml",
                 base_config_file="base_config.yaml",
                 config_overrides=None):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'")
        self.render_mode = render_mode

        # --- Load configuration files ---
        self._load_and_merge_configs(base_config_file, task_config_file)
        if config_overrides:
            self.config = deep_merge(self.config, config_overrides)
        self._configure_logging()

        # --- Load task logic ---
        self._load_and_instantiate_task(tasks, BaseTask)
        self._load_env_settings()
        self._load_partner()
        self.block_colors = generate_block_colors(self.num_blocks)

        # --- Setup Gym RL interface ---
        self._setup_action_space()
        self._setup_observation_space()

        # --- Internal runtime state ---
        self.current_steps = 0
        self.move_count = 0
        self.state = None
        self.goal = None
        self.last_agent_move = None
        self.last_partner_move = None

        logger.info("Environment initialized.")

    # region CONFIGURATION LOADING + LOGGING

    def _load_and_merge_configs(self, base_config_file, task_config_file):
        """
        Loads and merges two YAML config files: base + task-specific.
        Result is stored in self.config.
        """
        config_dir = Path(__file__).parent / "configs"
        base_path = config_dir / base_config_file
        task_path = config_dir / "tasks" / task_config_file

        base_config = {}
        task_config = {}

        if base_path.exists():
            with open(base_path, 'r') as f:
                base_config = yaml.safe_load(f) or {}
        else:
            logger.warning(f"Base config {base_path} not found, using defaults.")

        if task_path.exists():
            with open(task_path, 'r') as f:
                task_config = yaml.safe_load(f) or {}
        else:
            # Fall back to a path relative to the config dir, or an absolute path
            alt_path = config_dir / task_config_file
            if alt_path.exists():
                with open(alt_path, 'r') as f:
                    task_config = yaml.safe_load(f) or {}
            else:
                logger.warning(f"Task config {task_config_file} not found, using base config only.")

        self.config = deep_merge(dict(base_config), task_config)

    def _configure_logging(self):
        """
        Applies the logging level from the config.
        """
        log_cfg = self.config.get("logging", {})
        level_str = log_cfg.get("level", "INFO").upper()
        set_logger_level(logger, get_level_from_string(level_str))
        logger.info(f"Log level set to {level_str}")

    # endregion

    # region TASK SETUP

    def _load_and_instantiate_task(self, task_package, base_class):
        """
        Dynamically loads the task class and instantiates it.
        """
        task_cfg = self.config.get("task", {})
        class_name = task_cfg.get("task_class_name", "SortedTowerTask")

        if not task_cfg.get("task_class_name"):
            logger.warning(f"task_class_name missing in config, defaulting to {class_name}")

        # Infer module name (e.g., SortedTowerTask → sorted_tower_task)
        module_name = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).lower()
        if not module_name.endswith("_task"):
            module_name += "_task"

        task_class = None
        task_module = getattr(task_package, module_name, None)
        if task_module:
            task_class = getattr(task_module, class_name, None)

        if not isinstance(task_class, type) or not issubclass(task_class, base_class):
            raise ValueError(f"Invalid task class '{class_name}' or not subclass of {base_class.__name__}.")

        self.task = task_class(self, task_cfg)
        logger.info(f"Loaded task class: {self.task.__class__.__name__}")

        self.num_blocks = self.task.num_blocks
        self.num_columns = self.task.num_columns

    def _load_env_settings(self):
        """
        Loads episode limits and reward parameters.
        """
        sim_cfg = self.config.get("simulation", {})
        reward_cfg = self.config.get("reward", {})
        render_cfg = self.config.get("render", {})

        self.max_steps = sim_cfg.get("max_episode_steps", 20 * self.num_blocks)
        self.max_expansions = sim_cfg.get("max_solver_expansions")

        # Rewards
        self.goal_reward = reward_cfg.get("goal_reward", 1.0)
        self.step_penalty = reward_cfg.get("step_penalty", -0.01)
        self.move_fail_penalty = reward_cfg.get("move_fail_penalty", -0.05)

        self.cell_size = render_cfg.get("cell_size", 16)

    def _load_partner(self):
        """
        Builds the searcher that answers each agent move, if any.
        """
        partner_cfg = self.config.get("partner", {})
        self.partner_mode = str(partner_cfg.get("mode", "none")).lower()
        if self.partner_mode not in PARTNER_MODES:
            raise ValueError(f"partner.mode must be one of {PARTNER_MODES}, got '{self.partner_mode}'")

        if self.partner_mode == "none":
            self.partner = None
        else:
            self.partner = AdversarialSearcher(
                depth=partner_cfg.get("depth", 4),
                cooperative=self.partner_mode == "helper",
            )
        logger.info(f"Partner mode: {self.partner_mode}")

    # endregion

    # region RL INTERFACE SETUP
    def _setup_action_space(self):
        """
        (from_column, to_column) pairs. to_column == max_columns means the table.

        Columns only get appended when no empty one exists, which caps the
        column count at max(num_columns, num_blocks) + 1.
        """
        self.max_columns = max(self.num_columns, self.num_blocks) + 1
        self.action_space = spaces.MultiDiscrete([self.max_columns, self.max_columns + 1])
        logger.info(f"Action space = MultiDiscrete([{self.max_columns}, {self.max_columns + 1}])")

    def _setup_observation_space(self):
        """One row per column slot holding block ids top-first, zero padded."""
        self.observation_space = spaces.Box(
            low=0, high=self.num_blocks,
            shape=(self.max_columns, self.num_blocks),
            dtype=np.int32
        )
        logger.info(f"Observation space = Box({self.max_columns}, {self.num_blocks})")
    # endregion

    # region RESET / STEP
    def reset(self, seed=None, options=None):
        """
        Starts a new episode.

        Options:
            board: start arrangement (Board or nested lists) instead of a generated one.
            goal: goal arrangement, required together with `board`.
        """
        super().reset(seed=seed)

        self.current_steps = 0
        self.move_count = 0
        self.last_agent_move = None
        self.last_partner_move = None

        options = options or {}
        if "board" in options:
            if "goal" not in options:
                raise ValueError("reset(options) with 'board' also needs 'goal'.")
            task_info = {"board": to_state(options["board"]), "goal": to_state(options["goal"]),
                         "task_type": "Custom"}
        else:
            task_info = self.task.reset_task_scenario()

        board, goal = task_info["board"], task_info["goal"]
        check_compatible(board, goal)
        if len(board) > self.max_columns:
            raise ValueError(f"Board with {len(board)} columns exceeds the {self.max_columns} column slots.")
        if sum(len(stack) for stack in board) != self.num_blocks:
            raise ValueError(f"Board holds {sum(len(s) for s in board)} blocks, task expects {self.num_blocks}.")

        self.state = board
        self.goal = goal

        obs = self._get_obs()
        info = self._get_info()
        info.update({k: v for k, v in task_info.items() if k not in ("board", "goal")})
        return obs, info

    def step(self, action):
        """Applies the agent's move, then the partner's reply."""
        if self.state is None:
            raise RuntimeError("Environment must be reset before step().")

        move = self.decode_action(action)
        self.current_steps += 1
        self.last_agent_move = None
        self.last_partner_move = None
        truncated = self.current_steps >= self.max_steps

        if not is_legal_move(self.state, move):
            logger.warning(f"Illegal move {tuple(move)} in state {positional_key(self.state)}")
            info = self._get_info()
            info["error"] = "illegal_move"
            return self._get_obs(), self.step_penalty + self.move_fail_penalty, False, truncated, info

        self.last_agent_move = describe_move(self.state, move)
        self.state = apply_move(self.state, move)
        self.move_count += 1
        terminated = self.task.check_goal(self.state, self.goal)

        if not terminated and self.partner is not None:
            reply = self.partner.choose_move(self.state, self.goal)
            if reply is not None:
                self.last_partner_move = describe_move(self.state, reply)
                self.state = apply_move(self.state, reply)
                self.move_count += 1
                terminated = self.task.check_goal(self.state, self.goal)
                logger.debug(f"Partner ({self.partner_mode}) played {self.last_partner_move}")

        reward = self.goal_reward if terminated else self.step_penalty
        return self._get_obs(), reward, terminated, truncated and not terminated, self._get_info()

    def decode_action(self, action):
        from_column, to_column = (int(a) for a in action)
        return Move(from_column, TABLE if to_column == self.max_columns else to_column)

    def encode_move(self, move):
        """Inverse of decode_action, e.g. for feeding solver plans back into step()."""
        from_column, to_column = move
        return np.array([from_column, self.max_columns if to_column is TABLE else to_column], dtype=np.int64)

    # endregion

    # region PLANNING HELPERS
    def hint(self):
        """Next move of an optimal plan from the current state, or None if solved."""
        if self.state is None:
            raise RuntimeError("Environment must be reset before hint().")
        return AStarSolver(max_expansions=self.max_expansions).hint(self.state, self.goal)

    def optimal_plan(self):
        """Full optimal plan from the current state."""
        if self.state is None:
            raise RuntimeError("Environment must be reset before optimal_plan().")
        return AStarSolver(max_expansions=self.max_expansions).solve(self.state, self.goal)

    # endregion

    # region RENDER
    def render(self):
        if self.render_mode == "ansi":
            return self._render_text()
        if self.render_mode == "rgb_array":
            return self._render_rgb()
        return None

    def _render_text(self):
        lines = [f"goal: {positional_key(self.goal)}   moves: {self.move_count}"]
        for idx, stack in enumerate(self.state):
            lines.append(f"[{idx}] " + " ".join(str(b) for b in stack))
        return "\n".join(lines)

    def _render_rgb(self):
        """Columns left to right, blocks drawn bottom-up with a one pixel gap."""
        cell = self.cell_size
        height = self.num_blocks * cell
        width = self.max_columns * cell
        img = np.full((height, width, 3), 255, dtype=np.uint8)

        for col_idx, stack in enumerate(self.state):
            for h, blk in enumerate(reversed(stack)):
                top = height - (h + 1) * cell
                left = col_idx * cell
                img[top + 1:top + cell - 1, left + 1:left + cell - 1] = to_uint8_rgb(self.block_colors[blk - 1])
        return img

    # endregion

    # region RL HELPER
    def get_state(self):
        """Current arrangement as a state tuple."""
        return self.state

    def _get_obs(self):
        obs = np.zeros((self.max_columns, self.num_blocks), dtype=np.int32)
        for col_idx, stack in enumerate(self.state):
            if stack:
                obs[col_idx, :len(stack)] = stack
        return obs

    def _get_info(self):
        return {
            "move_count": self.move_count,
            "distance": heuristic(self.state, self.goal),
            "state_label": positional_key(self.state),
            "state_key": canonical_key(self.state),
            "goal_key": canonical_key(self.goal),
            "agent_move": self.last_agent_move,
            "partner_move": self.last_partner_move,
        }

    # endregion
