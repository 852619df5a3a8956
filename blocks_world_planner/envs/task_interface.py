# blocks_world_planner/envs/task_interface.py
from abc import ABC, abstractmethod

from blocks_world_planner.planning.state_codec import canonical_key


class BaseTask(ABC):
    """Abstract Base Class for defining scenarios within the blocks-world environment."""

    def __init__(self, env_instance, task_config: dict):
        """
        Initializes the Task.

        Args:
            env_instance: A reference to the main BlocksWorldEnv instance.
            task_config (dict): A dictionary containing parameters specific to this task,
                                loaded from its configuration file.
        """
        self.env = env_instance
        self.config = task_config
        # --- Core Task Attributes (to be set in _load_task_params) ---
        self.num_blocks = 0
        self.num_columns = 0
        self._load_task_params()
        if self.num_blocks < 1 or self.num_columns < 1:
            raise ValueError(
                f"{self.__class__.__name__} needs at least one block and one column, "
                f"got num_blocks={self.num_blocks}, num_columns={self.num_columns}"
            )

    @abstractmethod
    def _load_task_params(self):
        """Load task-specific parameters from self.config into instance variables."""
        raise NotImplementedError

    @abstractmethod
    def reset_task_scenario(self):
        """
        Generate a new start board and goal for env.reset().

        Randomness must come from self.env.np_random so that seeding the
        environment reproduces the scenario.

        Returns:
            dict: At least "board" and "goal" (state tuples, top block first), plus
                  any task-specific info to be added to the env's info dict.
        """
        raise NotImplementedError

    def check_goal(self, state, goal) -> bool:
        """Goal reached when the arrangement matches regardless of column order."""
        return canonical_key(state) == canonical_key(goal)

    # --- Shared helpers ---
    def random_board(self, num_columns=None):
        """
        Drops blocks 1..N into random columns, then shuffles every column.

        Args:
            num_columns (int, optional): Column count, defaults to self.num_columns.

        Returns:
            tuple: State with exactly num_columns columns, some possibly empty.
        """
        num_columns = num_columns or self.num_columns
        rng = self.env.np_random
        columns = [[] for _ in range(num_columns)]
        for blk in range(1, self.num_blocks + 1):
            columns[int(rng.integers(0, num_columns))].append(blk)
        for col in columns:
            rng.shuffle(col)
        return tuple(tuple(int(b) for b in col) for col in columns)
