# solver.py

from collections import deque
from dataclasses import dataclass
from typing import List, Optional

from blocks_world_planner.planning.exceptions import SearchLimitExceeded
from blocks_world_planner.planning.frontier import PriorityFrontier
from blocks_world_planner.planning.heuristic import heuristic
from blocks_world_planner.planning.moves import Move, successors
from blocks_world_planner.planning.state_codec import canonical_key, check_compatible, pad_goal, to_state
from blocks_world_planner.utils.logging_utils import *

DEFAULT_INIT_LOG_LEVEL = logging.WARNING
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)


def prepare_problem(start, goal):
    """Converts, validates and pads a (start, goal) pair. Returns both states."""
    start = to_state(start)
    goal = to_state(goal)
    check_compatible(start, goal)
    return start, pad_goal(goal, len(start))


@dataclass
class SearchResult:
    moves: Optional[List[Move]]
    expanded: int = 0
    generated: int = 0

    @property
    def found(self):
        return self.moves is not None


class AStarSolver:
    """
    Optimal planner over the state graph induced by `successors`.

    States are identified by their canonical key, so plans may finish in any
    column permutation of the goal.
    """

    def __init__(self, max_expansions=None):
        self.max_expansions = max_expansions

    def solve(self, start, goal):
        """
        Finds a shortest move sequence from `start` to `goal`.

        Args:
            start (Board | tuple): Current arrangement.
            goal (Board | tuple): Desired arrangement, padded to the start's column count.

        Returns:
            list[Move] or None: The plan (empty if already solved), or None if the goal is unreachable.
        """
        return self.search(start, goal).moves

    def hint(self, start, goal):
        """Returns the first move of an optimal plan, or None if solved or unreachable."""
        moves = self.solve(start, goal)
        return moves[0] if moves else None

    def search(self, start, goal) -> SearchResult:
        """Runs A* and returns the plan together with expansion counts."""
        start, goal = prepare_problem(start, goal)
        goal_key = canonical_key(goal)
        start_key = canonical_key(start)

        frontier = PriorityFrontier()
        frontier.push(heuristic(start, goal), (0, start_key, start))

        came_from = {}  # key -> (parent_key, move)
        best_g = {start_key: 0}
        expanded = 0
        generated = 0

        while frontier:
            _, (g_cur, cur_key, cur_state) = frontier.pop()

            if cur_key == goal_key:
                moves = self._reconstruct(came_from, cur_key)
                logger.debug(f"A* found a {len(moves)}-move plan after {expanded} expansions")
                return SearchResult(moves, expanded, generated)

            expanded += 1
            if self.max_expansions is not None and expanded > self.max_expansions:
                raise SearchLimitExceeded(self.max_expansions, expanded - 1)

            for succ in successors(cur_state):
                generated += 1
                nxt_key = canonical_key(succ.state)
                tentative_g = g_cur + 1
                known_g = best_g.get(nxt_key)
                if known_g is None or tentative_g < known_g:
                    best_g[nxt_key] = tentative_g
                    f = tentative_g + heuristic(succ.state, goal)
                    frontier.push(f, (tentative_g, nxt_key, succ.state))
                    came_from[nxt_key] = (cur_key, succ.move)

        logger.warning(f"A* exhausted the frontier after {expanded} expansions without reaching the goal")
        return SearchResult(None, expanded, generated)

    @staticmethod
    def _reconstruct(came_from, key):
        path = []
        while key in came_from:
            parent_key, move = came_from[key]
            path.append(move)
            key = parent_key
        path.reverse()
        return path


class BreadthFirstSolver:
    """
    Exhaustive breadth-first planner.

    Much slower than A*, but needs no heuristic, which makes it the reference
    for checking plan lengths on small boards.
    """

    def __init__(self, max_depth=20):
        self.max_depth = max_depth

    def solve(self, start, goal):
        """
        Runs BFS to find a plan from start to goal.

        Args:
            start (Board | tuple): Initial arrangement.
            goal (Board | tuple): Desired arrangement.

        Returns:
            list[Move] or None: Shortest plan, or None if none exists within max_depth.
        """
        start, goal = prepare_problem(start, goal)
        goal_key = canonical_key(goal)

        visited = {canonical_key(start)}
        queue = deque([(start, [])])

        while queue:
            state, path = queue.popleft()

            if canonical_key(state) == goal_key:
                return path

            if len(path) >= self.max_depth:
                continue

            for succ in successors(state):
                key = canonical_key(succ.state)
                if key in visited:
                    continue
                visited.add(key)
                queue.append((succ.state, path + [succ.move]))

        return None

    def distance(self, start, goal):
        """Length of the shortest plan, or None."""
        path = self.solve(start, goal)
        return None if path is None else len(path)
