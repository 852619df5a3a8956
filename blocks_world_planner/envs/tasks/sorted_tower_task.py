from ..task_interface import BaseTask
from blocks_world_planner.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


class SortedTowerTask(BaseTask):
    """
    Task: blocks start scattered over the columns; the goal is one tower holding
          every block in ascending order, block 1 on top.
    """
    def _load_task_params(self):
        """Load parameters for the sorted-tower task."""
        self.num_blocks = self.config.get("num_blocks", 5)
        self.num_columns = self.config.get("num_columns", 3)
        self.avoid_solved_start = self.config.get("avoid_solved_start", True)

    def reset_task_scenario(self):
        goal = (tuple(range(1, self.num_blocks + 1)),) + ((),) * (self.num_columns - 1)

        board = self.random_board()
        # A single block is always a sorted tower
        while self.avoid_solved_start and self.num_blocks > 1 and self.check_goal(board, goal):
            logger.debug("Random start already solved, drawing again.")
            board = self.random_board()

        logger.info(f"Task Scenario Reset: sort {self.num_blocks} blocks from {self.num_columns} columns.")
        return {"board": board, "goal": goal, "task_type": "SortedTower"}
