# adversarial.py

import math

from blocks_world_planner.planning.heuristic import heuristic
from blocks_world_planner.planning.moves import successors
from blocks_world_planner.planning.solver import prepare_problem
from blocks_world_planner.planning.state_codec import canonical_key
from blocks_world_planner.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.WARNING
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

DEFAULT_DEPTH = 4


class AdversarialSearcher:
    """
    Depth-limited negamax that recommends a single move.

    Leaves score -heuristic, so being closer to the goal scores higher. Each
    ply negates its children's scores and keeps the maximum on the maximizing
    side and the minimum on the other; sides alternate below the root. A
    cooperative searcher (helper) maximizes at the root, an adversarial one
    (hinderer) minimizes there. Both readings assume an even depth, as with
    the default of 4.
    """

    def __init__(self, depth=DEFAULT_DEPTH, cooperative=True):
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        self.depth = depth
        self.cooperative = cooperative
        self.nodes_visited = 0

    def choose_move(self, state, goal):
        """
        Args:
            state (Board | tuple): Current arrangement.
            goal (Board | tuple): Goal arrangement.

        Returns:
            Move or None: Best move for the side to play, None if the state has no
            moves or already matches the goal.
        """
        state, goal = prepare_problem(state, goal)
        goal_key = canonical_key(goal)
        self.nodes_visited = 0

        score, best = self._negamax(state, goal, goal_key, self.depth, self.cooperative)
        if best is None:
            return None
        logger.debug(f"Chose {tuple(best.move)} with score {score} after {self.nodes_visited} nodes "
                     f"({'helper' if self.cooperative else 'hinderer'}, depth {self.depth})")
        return best.move

    def _negamax(self, state, goal, goal_key, depth, maximizing):
        self.nodes_visited += 1
        if depth == 0 or canonical_key(state) == goal_key:
            return -heuristic(state, goal), None

        best_score = -math.inf if maximizing else math.inf
        best = None
        for succ in successors(state):
            child_score, _ = self._negamax(succ.state, goal, goal_key, depth - 1, not maximizing)
            score = -child_score
            better = score > best_score if maximizing else score < best_score
            if better:
                best_score, best = score, succ
        return best_score, best


def choose_move(state, goal, depth=DEFAULT_DEPTH, cooperative=True):
    """Convenience wrapper around AdversarialSearcher."""
    return AdversarialSearcher(depth=depth, cooperative=cooperative).choose_move(state, goal)
