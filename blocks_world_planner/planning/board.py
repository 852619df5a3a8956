# board.py

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Block:
    id: int


@dataclass
class Column:
    """A pile of blocks; blocks[0] is the top and the only one that can move."""
    blocks: list = field(default_factory=list)


@dataclass
class Board:
    """
    Board snapshot as handed over by a front end.

    Column order is kept for display; the planner treats boards that differ
    only in column order as the same puzzle state.
    """
    columns: list = field(default_factory=list)

    @classmethod
    def from_lists(cls, columns):
        """Build a board from nested lists of block ids, top block first."""
        return cls(columns=[Column(blocks=[Block(b) for b in col]) for col in columns])

    def to_lists(self):
        return [[block.id for block in col.blocks] for col in self.columns]

    @property
    def num_blocks(self):
        return sum(len(col.blocks) for col in self.columns)
