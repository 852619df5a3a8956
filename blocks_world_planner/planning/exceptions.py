# exceptions.py


class InvalidStateError(ValueError):
    """Raised when a board or goal violates the engine's input preconditions."""


class IllegalMoveError(ValueError):
    """Raised when a move cannot be applied to a state."""


class SearchLimitExceeded(RuntimeError):
    """Raised when a search hits its configured expansion cap."""

    def __init__(self, limit, expanded):
        super().__init__(f"Search gave up after expanding {expanded} states (limit {limit})")
        self.limit = limit
        self.expanded = expanded
