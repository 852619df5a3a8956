# frontier.py

import heapq
import itertools


class PriorityFrontier:
    """
    Binary min-heap of (priority, item) entries.

    There is no decrease-key: a cheaper route to a state is pushed as a new
    entry and older entries for it stay in the heap. Entries with equal
    priority come out in the order they were pushed.
    """

    def __init__(self):
        self._heap = []
        self._counter = itertools.count()

    def push(self, priority, item):
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self):
        """Removes and returns the (priority, item) pair with the lowest priority."""
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        priority, _, item = heapq.heappop(self._heap)
        return priority, item

    def peek_priority(self):
        return self._heap[0][0] if self._heap else None

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)
