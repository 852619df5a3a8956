# state_codec.py
"""
Conversion between front-end boards and the planner's internal state.

A state is a tuple of stacks, each stack a tuple of block ids with the top
block first. Tuples keep successors from sharing mutable storage with the
state they were derived from.
"""

from collections import Counter

from blocks_world_planner.planning.board import Board
from blocks_world_planner.planning.exceptions import InvalidStateError

STACK_SEPARATOR = "|"
BLOCK_SEPARATOR = ","


def to_state(board):
    """
    Copy a board into a state, keeping column order and top-first block order.

    Args:
        board (Board | Sequence[Sequence[int]]): A Board object or nested sequences of ids.

    Returns:
        tuple[tuple[int, ...], ...]: The state.
    """
    if isinstance(board, Board):
        return tuple(tuple(block.id for block in col.blocks) for col in board.columns)
    return tuple(tuple(col) for col in board)


def to_board(state):
    """Convert a state back into a Board object."""
    return Board.from_lists([list(stack) for stack in state])


def _stack_token(stack):
    return BLOCK_SEPARATOR.join(str(b) for b in stack)


def canonical_key(state) -> str:
    """
    Key that ignores which column each stack sits in.

    Empty stacks contribute nothing, so states that only differ in the number
    of empty columns share a key.
    """
    return STACK_SEPARATOR.join(sorted(_stack_token(stack) for stack in state if stack))


def positional_key(state) -> str:
    """Display label that keeps column order. Not used for equality."""
    return STACK_SEPARATOR.join(_stack_token(stack) for stack in state if stack)


def pad_goal(goal, column_count):
    """Append empty stacks to `goal` until it has `column_count` columns."""
    goal = to_state(goal)
    if len(goal) >= column_count:
        return goal
    return goal + ((),) * (column_count - len(goal))


def block_ids(state):
    """Multiset of block ids in a state."""
    return Counter(b for stack in state for b in stack)


def validate_state(state, name="state"):
    """
    Checks the structural preconditions on a state.

    Raises:
        InvalidStateError: zero columns, non-integer or non-positive ids,
            duplicates, or ids that are not exactly 1..N.
    """
    if len(state) == 0:
        raise InvalidStateError(f"{name} has no columns")

    ids = block_ids(state)
    for b, count in ids.items():
        if isinstance(b, bool) or not isinstance(b, int):
            raise InvalidStateError(f"{name} contains non-integer block id {b!r}")
        if count > 1:
            raise InvalidStateError(f"{name} contains block {b} {count} times")

    expected = set(range(1, len(ids) + 1))
    if set(ids) != expected:
        raise InvalidStateError(f"{name} block ids must be 1..{len(ids)}, got {sorted(ids)}")


def check_compatible(start, goal):
    """Validate both states and make sure they hold the same blocks."""
    validate_state(start, "start")
    validate_state(goal, "goal")
    if set(block_ids(start)) != set(block_ids(goal)):
        raise InvalidStateError(
            f"start and goal hold different blocks: {sorted(block_ids(start))} vs {sorted(block_ids(goal))}"
        )
