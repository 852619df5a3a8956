import pytest

from blocks_world_planner.planning.frontier import PriorityFrontier


def test_pops_lowest_priority_first():
    frontier = PriorityFrontier()
    for priority, item in [(5, "e"), (1, "a"), (3, "c"), (2, "b"), (4, "d")]:
        frontier.push(priority, item)
    assert [frontier.pop() for _ in range(5)] == [(1, "a"), (2, "b"), (3, "c"), (4, "d"), (5, "e")]


def test_equal_priorities_pop_in_insertion_order():
    frontier = PriorityFrontier()
    frontier.push(2, "first")
    frontier.push(1, "low")
    frontier.push(2, "second")
    frontier.push(2, "third")
    assert [item for _, item in (frontier.pop() for _ in range(4))] == ["low", "first", "second", "third"]


def test_items_are_never_compared():
    frontier = PriorityFrontier()
    frontier.push(1, {"unorderable": True})
    frontier.push(1, {"unorderable": False})
    assert frontier.pop() == (1, {"unorderable": True})


def test_duplicates_coexist():
    frontier = PriorityFrontier()
    frontier.push(4, "state")
    frontier.push(2, "state")
    assert len(frontier) == 2
    assert frontier.pop() == (2, "state")
    assert frontier.pop() == (4, "state")


def test_len_bool_and_peek():
    frontier = PriorityFrontier()
    assert not frontier
    assert frontier.peek_priority() is None
    frontier.push(7, "x")
    assert frontier
    assert len(frontier) == 1
    assert frontier.peek_priority() == 7


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        PriorityFrontier().pop()
