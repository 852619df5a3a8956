from blocks_world_planner.planning.adversarial import AdversarialSearcher, choose_move
from blocks_world_planner.planning.board import Block, Board, Column
from blocks_world_planner.planning.exceptions import IllegalMoveError, InvalidStateError, SearchLimitExceeded
from blocks_world_planner.planning.frontier import PriorityFrontier
from blocks_world_planner.planning.heuristic import heuristic
from blocks_world_planner.planning.moves import (
    TABLE, Move, Successor, apply_move, apply_moves, describe_move, is_legal_move, successors,
)
from blocks_world_planner.planning.solver import AStarSolver, BreadthFirstSolver, SearchResult
from blocks_world_planner.planning.state_codec import (
    canonical_key, check_compatible, pad_goal, positional_key, to_board, to_state, validate_state,
)
