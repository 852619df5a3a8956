# moves.py

from typing import NamedTuple, Optional

from blocks_world_planner.planning.exceptions import IllegalMoveError

TABLE = None  # Destination meaning "onto an empty or newly created column"


class Move(NamedTuple):
    from_column: int
    to_column: Optional[int]

    @property
    def is_table_move(self):
        return self.to_column is TABLE


class Successor(NamedTuple):
    state: tuple
    from_column: int
    to_column: Optional[int]

    @property
    def move(self):
        return Move(self.from_column, self.to_column)


def _place_on_table(stacks, blk):
    """Put `blk` into the first empty column, appending one if none is free."""
    for idx, stack in enumerate(stacks):
        if not stack:
            stacks[idx] = (blk,)
            return
    stacks.append((blk,))


def successors(state):
    """
    Enumerates every successor reachable with one move.

    Order is part of the contract: source column ascending; for each source the
    table move (only generated for stacks holding more than one block) comes
    before the stack moves, which follow destination index ascending.

    Args:
        state (tuple): Current state.

    Returns:
        list[Successor]: (state, from_column, to_column) triples, to_column is TABLE for table moves.
    """
    out = []
    for i, src in enumerate(state):
        if not src:
            continue
        blk = src[0]

        # 1. Move onto the table
        if len(src) > 1:
            nxt = list(state)
            nxt[i] = src[1:]
            _place_on_table(nxt, blk)
            out.append(Successor(tuple(nxt), i, TABLE))

        # 2. Move onto another column
        for j, dst in enumerate(state):
            if i == j:
                continue
            nxt = list(state)
            nxt[i] = src[1:]
            nxt[j] = (blk,) + dst
            out.append(Successor(tuple(nxt), i, j))
    return out


def is_legal_move(state, move) -> bool:
    """A move is legal when its source exists and is non-empty and its destination is another column or TABLE."""
    src, dst = move
    if not 0 <= src < len(state) or not state[src]:
        return False
    if dst is TABLE:
        return True
    return 0 <= dst < len(state) and dst != src


def apply_move(state, move):
    """
    Returns the state after `move`.

    A table move from a single-block stack is legal here even though
    `successors` never offers it.

    Raises:
        IllegalMoveError: If the move is not legal in `state`.
    """
    if not is_legal_move(state, move):
        raise IllegalMoveError(f"Illegal move {tuple(move)} for state {state}")

    src, dst = move
    blk = state[src][0]
    nxt = list(state)
    nxt[src] = state[src][1:]
    if dst is TABLE:
        _place_on_table(nxt, blk)
    else:
        nxt[dst] = (blk,) + state[dst]
    return tuple(nxt)


def apply_moves(state, moves):
    """Replays a move sequence and returns the final state."""
    for move in moves:
        state = apply_move(state, move)
    return state


def describe_move(state, move) -> str:
    """
    Human-readable label naming blocks instead of columns, e.g. "3 -> TABLE" or "3 -> 5".

    Moving onto an empty column reads as a table move.
    """
    src, dst = move
    blk = state[src][0]
    if dst is TABLE or not state[dst]:
        return f"{blk} -> TABLE"
    return f"{blk} -> {state[dst][0]}"
