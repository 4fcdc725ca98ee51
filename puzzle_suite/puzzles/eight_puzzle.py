"""
8-Puzzle Module - Sliding tiles on a 3x3 board with an editable goal layout.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..search import SearchState, Transition
from .registry import PuzzleId, register_puzzle

SIZE = 3
BLANK = 0
GOAL: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 0)

# Blank movement -> (row delta, col delta, direction the tile slides)
_BLANK_MOVES = (
    ("up", -1, 0, "down"),
    ("down", 1, 0, "up"),
    ("left", 0, -1, "right"),
    ("right", 0, 1, "left"),
)


def validate_tiles(tiles: Sequence[int]) -> Tuple[int, ...]:
    """
    Check that a grid holds each of 0..8 exactly once.

    Args:
        tiles: Flat row-major tile list, 0 for the blank

    Returns:
        The tiles as a tuple

    Raises:
        ValueError: If the grid is not a permutation of 0..8
    """
    tiles = tuple(tiles)
    if len(tiles) != SIZE * SIZE:
        raise ValueError(f"Expected {SIZE * SIZE} tiles, got {len(tiles)}")
    if sorted(tiles) != list(range(SIZE * SIZE)):
        missing = sorted(set(range(SIZE * SIZE)) - set(tiles))
        raise ValueError(f"Tiles must be a permutation of 0-8 (missing: {missing})")
    return tiles


def inversions(tiles: Sequence[int]) -> int:
    """Count tile pairs out of order, ignoring the blank."""
    values = [t for t in tiles if t != BLANK]
    return sum(
        1
        for i in range(len(values))
        for j in range(i + 1, len(values))
        if values[i] > values[j]
    )


def is_solvable(tiles: Sequence[int], goal: Sequence[int] = GOAL) -> bool:
    """
    Check whether goal is reachable from tiles.

    On an odd-width board slides preserve inversion parity, so two layouts
    are connected exactly when their parities match.
    """
    return inversions(tiles) % 2 == inversions(goal) % 2


@register_puzzle
@dataclass(frozen=True)
class EightPuzzleState(SearchState):
    """
    Tile arrangement plus the layout it must reach.

    Attributes:
        tiles: Row-major tile values, 0 is the blank
        goal: Target layout (defaults to 1..8 with the blank last)
    """
    tiles: Tuple[int, ...]
    goal: Tuple[int, ...] = GOAL

    puzzle_id = PuzzleId.EIGHT_PUZZLE
    name = "8-Puzzle Solver"
    summary = "Slide tiles into place, observe heuristic-driven search stats."

    @classmethod
    def from_list(cls, tiles: Sequence[int], goal: Sequence[int] = GOAL) -> "EightPuzzleState":
        """
        Create a validated state from plain lists.

        Raises:
            ValueError: If tiles or goal is not a permutation of 0..8
        """
        return cls(tiles=validate_tiles(tiles), goal=validate_tiles(goal))

    @classmethod
    def initial(cls) -> "EightPuzzleState":
        return cls(tiles=GOAL)

    @classmethod
    def random_solvable(cls, goal: Sequence[int] = GOAL,
                        rng: Optional[random.Random] = None) -> "EightPuzzleState":
        """Shuffle until the layout can reach goal."""
        rng = rng or random.Random()
        goal = validate_tiles(goal)
        tiles = list(goal)
        while True:
            rng.shuffle(tiles)
            if is_solvable(tiles, goal):
                return cls(tiles=tuple(tiles), goal=goal)

    @property
    def blank_index(self) -> int:
        return self.tiles.index(BLANK)

    def with_goal(self, goal: Sequence[int]) -> "EightPuzzleState":
        return EightPuzzleState(tiles=self.tiles, goal=validate_tiles(goal))

    def with_tiles(self, tiles: Sequence[int]) -> "EightPuzzleState":
        return EightPuzzleState(tiles=validate_tiles(tiles), goal=self.goal)

    def manhattan_distance(self) -> int:
        """Sum over tiles of the row + column distance to the goal position."""
        goal_index = {tile: idx for idx, tile in enumerate(self.goal)}
        total = 0
        for idx, tile in enumerate(self.tiles):
            if tile == BLANK:
                continue
            target = goal_index[tile]
            total += abs(idx // SIZE - target // SIZE) + abs(idx % SIZE - target % SIZE)
        return total

    def is_goal(self) -> bool:
        return self.tiles == self.goal

    def heuristic(self) -> int:
        return self.manhattan_distance()

    def key(self) -> Tuple[int, ...]:
        return self.tiles

    def successors(self) -> List[Transition]:
        blank = self.blank_index
        row, col = divmod(blank, SIZE)
        transitions = []
        for _, d_row, d_col, slide in _BLANK_MOVES:
            new_row, new_col = row + d_row, col + d_col
            if not (0 <= new_row < SIZE and 0 <= new_col < SIZE):
                continue
            target = new_row * SIZE + new_col
            tiles = list(self.tiles)
            tiles[blank], tiles[target] = tiles[target], tiles[blank]
            child = EightPuzzleState(tiles=tuple(tiles), goal=self.goal)
            transitions.append(
                Transition(self, f"slide tile {self.tiles[target]} {slide}", child)
            )
        return transitions

    def render(self) -> str:
        lines = []
        for row in range(SIZE):
            cells = self.tiles[row * SIZE:(row + 1) * SIZE]
            lines.append(" ".join(" " if t == BLANK else str(t) for t in cells))
        return "\n".join(lines)
