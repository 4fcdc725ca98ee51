"""
8 Queens Module - Place eight non-attacking queens, one per row.
"""

import random
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from ..search import SearchState, Transition
from .registry import PuzzleId, register_puzzle

BOARD_SIZE = 8

Queens = Tuple[Optional[int], ...]


def _attacks(row1: int, col1: int, row2: int, col2: int) -> bool:
    return col1 == col2 or abs(row1 - row2) == abs(col1 - col2)


@lru_cache(maxsize=None)
def all_solutions() -> Tuple[Tuple[int, ...], ...]:
    """Every complete non-attacking placement (92 on an 8x8 board)."""
    solutions = []

    def place(cols: List[int]) -> None:
        row = len(cols)
        if row == BOARD_SIZE:
            solutions.append(tuple(cols))
            return
        for col in range(BOARD_SIZE):
            if all(not _attacks(r, c, row, col) for r, c in enumerate(cols)):
                cols.append(col)
                place(cols)
                cols.pop()

    place([])
    return tuple(solutions)


@register_puzzle
@dataclass(frozen=True)
class EightQueensState(SearchState):
    """
    Queen column for each row of the board.

    Attributes:
        queens: queens[row] is the column of that row's queen, or None
    """
    queens: Queens = (None,) * BOARD_SIZE

    puzzle_id = PuzzleId.EIGHT_QUEENS
    name = "8 Queens Problem"
    summary = "Place 8 queens on a chessboard so none attack each other. Watch A* solve it!"

    def __post_init__(self):
        if len(self.queens) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(self.queens)}")
        for col in self.queens:
            if col is not None and not 0 <= col < BOARD_SIZE:
                raise ValueError(f"Queen column out of range: {col}")

    @classmethod
    def initial(cls) -> "EightQueensState":
        return cls()

    @classmethod
    def from_positions(cls, positions: List[Tuple[int, int]]) -> "EightQueensState":
        """
        Build a board from (row, col) pairs.

        Raises:
            ValueError: If two queens share a row or a position is off the board
        """
        queens: List[Optional[int]] = [None] * BOARD_SIZE
        for row, col in positions:
            if not 0 <= row < BOARD_SIZE:
                raise ValueError(f"Queen row out of range: {row}")
            if queens[row] is not None:
                raise ValueError(f"Row {row + 1} already holds a queen")
            queens[row] = col
        return cls(queens=tuple(queens))

    @classmethod
    def random_partial(cls, rng: Optional[random.Random] = None) -> "EightQueensState":
        """Keep 1-4 queens of a random full solution, so the board is always solvable."""
        rng = rng or random.Random()
        solution = rng.choice(all_solutions())
        rows = rng.sample(range(BOARD_SIZE), rng.randint(1, 4))
        return cls.from_positions([(row, solution[row]) for row in rows])

    @property
    def placed(self) -> int:
        return sum(1 for col in self.queens if col is not None)

    def positions(self) -> List[Tuple[int, int]]:
        return [(row, col) for row, col in enumerate(self.queens) if col is not None]

    def count_conflicts(self) -> int:
        """Number of attacking queen pairs."""
        placed = self.positions()
        return sum(
            1
            for i in range(len(placed))
            for j in range(i + 1, len(placed))
            if _attacks(*placed[i], *placed[j])
        )

    def is_valid_placement(self, row: int, col: int) -> bool:
        """True if no queen outside this row attacks (row, col)."""
        return all(
            not _attacks(r, c, row, col)
            for r, c in self.positions()
            if r != row
        )

    def toggle(self, row: int, col: int) -> "EightQueensState":
        """
        Editing action: remove the queen at (row, col) or move the row's queen there.

        Conflicting placements are allowed; count_conflicts() reports them.
        """
        queens = list(self.queens)
        queens[row] = None if queens[row] == col else col
        return EightQueensState(queens=tuple(queens))

    def is_goal(self) -> bool:
        return self.placed == BOARD_SIZE and self.count_conflicts() == 0

    def heuristic(self) -> int:
        return (BOARD_SIZE - self.placed) + self.count_conflicts()

    def key(self) -> Queens:
        return self.queens

    def successors(self) -> List[Transition]:
        # Queens are never removed, so an existing attack can't be repaired.
        if self.count_conflicts() > 0 or self.placed == BOARD_SIZE:
            return []
        row = self.queens.index(None)
        transitions = []
        for col in range(BOARD_SIZE):
            if self.is_valid_placement(row, col):
                queens = list(self.queens)
                queens[row] = col
                transitions.append(Transition(
                    self,
                    f"place queen at row {row + 1}, col {col + 1}",
                    EightQueensState(queens=tuple(queens)),
                ))
        return transitions

    def render(self) -> str:
        return "\n".join(
            " ".join("Q" if self.queens[row] == col else "." for col in range(BOARD_SIZE))
            for row in range(BOARD_SIZE)
        )
