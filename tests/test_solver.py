import itertools
import random

import pytest

from blocks_world_planner.planning import solver as solver_module
from blocks_world_planner.planning.board import Board
from blocks_world_planner.planning.exceptions import InvalidStateError, SearchLimitExceeded
from blocks_world_planner.planning.heuristic import heuristic
from blocks_world_planner.planning.moves import TABLE, Move, apply_moves
from blocks_world_planner.planning.solver import AStarSolver, BreadthFirstSolver
from blocks_world_planner.planning.state_codec import canonical_key, pad_goal


def all_states(num_blocks, num_columns):
    """Every arrangement of blocks 1..num_blocks over exactly num_columns ordered columns."""
    states = []
    for perm in itertools.permutations(range(1, num_blocks + 1)):
        for cuts in itertools.combinations_with_replacement(range(num_blocks + 1), num_columns - 1):
            bounds = (0,) + cuts + (num_blocks,)
            states.append(tuple(perm[bounds[k]:bounds[k + 1]] for k in range(num_columns)))
    return states


def _assert_plan_reaches_goal(start, goal, plan):
    final = apply_moves(start, plan)
    assert canonical_key(final) == canonical_key(pad_goal(goal, len(start)))


def test_all_states_enumeration_is_complete():
    states = all_states(3, 2)
    assert len(states) == 24
    assert len(set(states)) == 24


def test_three_block_tower_scenario():
    start = ((1, 2), (3,))
    goal = ((3, 2, 1),)

    plan = AStarSolver().solve(start, goal)

    assert plan == [Move(0, TABLE), Move(0, 2), Move(1, 2)]
    _assert_plan_reaches_goal(start, goal, plan)


def test_solved_start_returns_empty_plan():
    assert AStarSolver().solve(((1, 2), (3,)), ((1, 2), (3,))) == []
    assert AStarSolver().solve(((3,), (1, 2)), ((1, 2), (3,))) == []
    assert AStarSolver().solve(((1, 2), (3,), ()), ((3,), (1, 2))) == []


def test_accepts_board_objects():
    start = Board.from_lists([[1, 2], [3]])
    goal = Board.from_lists([[3, 2, 1], []])
    assert len(AStarSolver().solve(start, goal)) == 3


def test_search_reports_statistics():
    result = AStarSolver().search(((1, 2), (3,)), ((3, 2, 1),))
    assert result.found
    assert result.expanded >= 3
    assert result.generated >= result.expanded


def test_hint_is_first_move_of_plan():
    assert AStarSolver().hint(((1, 2), (3,)), ((3, 2, 1),)) == Move(0, TABLE)
    assert AStarSolver().hint(((3, 2, 1),), ((3, 2, 1),)) is None


@pytest.mark.parametrize("start, goal", [
    ((), ((1,),)),
    (((1, 2), (3,)), ((1, 2),)),
    (((1, 1),), ((1, 1),)),
])
def test_invalid_inputs_raise(start, goal):
    with pytest.raises(InvalidStateError):
        AStarSolver().solve(start, goal)


def test_expansion_cap_raises():
    with pytest.raises(SearchLimitExceeded):
        AStarSolver(max_expansions=0).solve(((1, 2), (3,)), ((3, 2, 1),))
    # The cap only applies to expansions, a solved start needs none
    assert AStarSolver(max_expansions=0).solve(((1,),), ((1,),)) == []


def test_exhausted_frontier_returns_none(monkeypatch):
    monkeypatch.setattr(solver_module, "successors", lambda state: [])
    result = AStarSolver().search(((1, 2), (3,)), ((3, 2, 1),))
    assert result.moves is None
    assert not result.found


def test_breadth_first_depth_limit():
    assert BreadthFirstSolver(max_depth=2).solve(((1, 2), (3,)), ((3, 2, 1),)) is None
    assert len(BreadthFirstSolver(max_depth=3).solve(((1, 2), (3,)), ((3, 2, 1),))) == 3


def test_matches_breadth_first_on_all_three_block_problems():
    bfs = BreadthFirstSolver()
    astar = AStarSolver()
    states = all_states(3, 2)
    for start, goal in itertools.product(states, states):
        distance = bfs.distance(start, goal)
        assert distance is not None
        assert heuristic(start, pad_goal(goal, len(start))) <= distance

        plan = astar.solve(start, goal)
        assert len(plan) == distance, (start, goal)
        _assert_plan_reaches_goal(start, goal, plan)


def test_matches_breadth_first_on_sampled_four_block_problems():
    rng = random.Random(7)
    states = all_states(4, 3)
    bfs = BreadthFirstSolver()
    astar = AStarSolver()
    for _ in range(60):
        start, goal = rng.choice(states), rng.choice(states)
        distance = bfs.distance(start, goal)
        assert heuristic(start, goal) <= distance

        plan = astar.solve(start, goal)
        assert len(plan) == distance, (start, goal)
        _assert_plan_reaches_goal(start, goal, plan)
