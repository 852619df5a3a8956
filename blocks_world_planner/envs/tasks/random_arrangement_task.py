from ..task_interface import BaseTask
from blocks_world_planner.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class RandomArrangementTask(BaseTask):
    """
    Task: start and goal are two independent random arrangements of the same
          blocks. `goal_columns` may be smaller than `num_columns`; the goal is
          then padded with empty columns.
    """
    def _load_task_params(self):
        self.num_blocks = self.config.get("num_blocks", 4)
        self.num_columns = self.config.get("num_columns", 3)
        self.goal_columns = self.config.get("goal_columns", self.num_columns)
        if not 1 <= self.goal_columns <= self.num_columns:
            raise ValueError(f"goal_columns must be in [1, {self.num_columns}], got {self.goal_columns}")

    def reset_task_scenario(self):
        board = self.random_board()

        goal = self.random_board(self.goal_columns)
        goal = goal + ((),) * (self.num_columns - len(goal))

        logger.info(f"Task Scenario Reset: {self.num_blocks} blocks, start {board}, goal {goal}.")
        return {"board": board, "goal": goal, "task_type": "RandomArrangement"}
