import itertools

import pytest

from blocks_world_planner.planning.board import Block, Board, Column
from blocks_world_planner.planning.exceptions import InvalidStateError
from blocks_world_planner.planning.state_codec import (
    canonical_key, check_compatible, pad_goal, positional_key, to_board, to_state, validate_state,
)


def test_to_state_from_board_keeps_order():
    board = Board(columns=[Column(blocks=[Block(1), Block(2)]), Column(), Column(blocks=[Block(3)])])
    assert to_state(board) == ((1, 2), (), (3,))


def test_to_state_from_nested_lists():
    assert to_state([[1, 2], [3]]) == ((1, 2), (3,))


def test_to_board_inverts_to_state():
    state = ((3, 1), (), (2,))
    board = to_board(state)
    assert board.to_lists() == [[3, 1], [], [2]]
    assert board.num_blocks == 3
    assert to_state(board) == state


def test_to_state_copies_input():
    columns = [[1, 2], [3]]
    state = to_state(columns)
    columns[0].insert(0, 4)
    assert state == ((1, 2), (3,))


def test_canonical_key_format():
    assert canonical_key(((3, 1), (2,))) == "2|3,1"


@pytest.mark.parametrize("state", [
    ((1, 2), (3,)),
    ((4, 1), (), (2, 3)),
    ((1,), (2,), (3,), (4,)),
])
def test_canonical_key_ignores_column_order(state):
    keys = {canonical_key(perm) for perm in itertools.permutations(state)}
    assert len(keys) == 1


def test_canonical_key_ignores_empty_columns():
    assert canonical_key(((1, 2), ())) == canonical_key(((), (), (1, 2)))
    assert canonical_key(((1, 2),)) == "1,2"


def test_canonical_key_respects_stack_order():
    assert canonical_key(((1, 2),)) != canonical_key(((2, 1),))
    assert canonical_key(((1, 2), (3,))) != canonical_key(((1,), (2, 3)))


def test_positional_key_keeps_column_order_and_drops_empties():
    assert positional_key(((), (3, 1), (2,))) == "3,1|2"
    assert positional_key(((2,), (3, 1))) != positional_key(((3, 1), (2,)))


def test_pad_goal():
    assert pad_goal(((3, 2, 1),), 2) == ((3, 2, 1), ())
    assert pad_goal([[1], [2]], 2) == ((1,), (2,))
    assert pad_goal(((1,), (2,), ()), 2) == ((1,), (2,), ())


@pytest.mark.parametrize("state", [
    (),
    ((1, 1),),
    ((2,), (3,)),
    ((0, 1),),
    ((1, "2"),),
    ((True,),),
])
def test_validate_state_rejects_malformed(state):
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_validate_state_accepts_empty_columns():
    validate_state(((), (2, 1), ()))


def test_check_compatible_rejects_different_blocks():
    with pytest.raises(InvalidStateError, match="different blocks"):
        check_compatible(((1, 2), (3,)), ((1, 2),))
