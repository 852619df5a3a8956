# heuristic.py


def _goal_columns(goal):
    """Map each block id to the bottom-up contents of the goal column holding it."""
    want = {}
    for stack in goal:
        bottom_up = tuple(reversed(stack))
        for blk in stack:
            want[blk] = bottom_up
    return want


def heuristic(state, goal) -> int:
    """
    Lower bound on the number of moves from `state` to `goal`.

    A block at height h (0 = bottom) is counted when it is not in its goal
    column, or when it is but the h + 1 blocks from the bottom up to and
    including it differ from the goal column's. A goal column is recognised
    by what it holds, not by its index, so the estimate is blind to column
    order like the canonical key. Every counted block sits on the wrong blocks
    and has to move at least once.

    Args:
        state (tuple): Current state.
        goal (tuple): Goal state holding the same blocks.

    Returns:
        int: Estimated remaining moves, 0 iff the arrangement matches the goal.
    """
    want = _goal_columns(goal)

    cost = 0
    for stack in state:
        bottom_up = tuple(reversed(stack))
        for h, blk in enumerate(bottom_up):
            goal_column = want[blk]
            if goal_column[:h + 1] != bottom_up[:h + 1]:
                cost += 1
    return cost
