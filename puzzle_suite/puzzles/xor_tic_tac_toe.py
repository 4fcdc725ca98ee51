"""
XOR Tic-Tac-Toe Module - Fill the board without ever completing a line of three.

Players alternate placing marks (X when both have placed the same number).
A placement that would give three identical marks in a row, column or
diagonal is illegal. The puzzle is solved when the board is full and no
such line exists.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..search import SearchState, Transition
from .registry import PuzzleId, register_puzzle

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

CORNERS = (0, 2, 6, 8)
CENTER = 4


class Player(str, Enum):
    X = "X"
    O = "O"

    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X


Cells = Tuple[Optional[Player], ...]


def line_owner(cells: Cells) -> Optional[Player]:
    """Return the player holding a full line, if any."""
    for a, b, c in WINNING_LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return cells[a]
    return None


def count_near_complete(cells: Cells) -> int:
    """Count lines with two identical marks and one empty cell."""
    risky = 0
    for line in WINNING_LINES:
        marks = [cells[i] for i in line]
        filled = [m for m in marks if m is not None]
        if len(filled) == 2 and filled[0] == filled[1]:
            risky += 1
    return risky


def _cell_rank(index: int) -> int:
    if index == CENTER:
        return 0
    return 1 if index in CORNERS else 2


@register_puzzle
@dataclass(frozen=True)
class XorTicTacToeState(SearchState):
    """
    3x3 board of marks.

    Attributes:
        cells: Row-major cells, None for empty
    """
    cells: Cells = (None,) * 9

    puzzle_id = PuzzleId.XOR_TIC_TAC_TOE
    name = "XOR Tic-Tac-Toe"
    summary = "Fill the board with alternating marks without ever making three in a row."

    @classmethod
    def initial(cls) -> "XorTicTacToeState":
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "XorTicTacToeState":
        """
        Parse a 9-character board such as "X.O......".

        Raises:
            ValueError: If the text is not 9 cells of X, O or '.'
        """
        text = text.replace(" ", "").replace("\n", "")
        if len(text) != 9 or any(ch not in "XO." for ch in text.upper()):
            raise ValueError(f"Board must be 9 cells of X, O or '.', got {text!r}")
        return cls(cells=tuple(None if ch == "." else Player(ch) for ch in text.upper()))

    @classmethod
    def random_setup(cls, rng: Optional[random.Random] = None) -> "XorTicTacToeState":
        """Place 0-4 alternating marks at random empty cells without a full line."""
        rng = rng or random.Random()
        state = cls()
        for _ in range(rng.randint(0, 4)):
            legal = state.legal_cells()
            if not legal:
                break
            state = state.place(rng.choice(legal))
        return state

    @property
    def to_move(self) -> Player:
        x_count = self.cells.count(Player.X)
        o_count = self.cells.count(Player.O)
        return Player.X if x_count <= o_count else Player.O

    @property
    def empty_cells(self) -> List[int]:
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def winner(self) -> Optional[Player]:
        return line_owner(self.cells)

    def risk(self) -> int:
        """Near-complete lines on the board (higher means fewer safe cells)."""
        return count_near_complete(self.cells)

    def place(self, index: int, player: Optional[Player] = None) -> "XorTicTacToeState":
        """
        Put a mark on an empty cell.

        Args:
            index: Cell index 0-8
            player: Mark to place (defaults to the player to move)

        Raises:
            ValueError: If the index is out of range or the cell is occupied
        """
        if not 0 <= index < 9:
            raise ValueError(f"Cell index out of range: {index}")
        if self.cells[index] is not None:
            raise ValueError(f"Cell {index + 1} is already occupied")
        cells = list(self.cells)
        cells[index] = player or self.to_move
        return XorTicTacToeState(cells=tuple(cells))

    def cycle_cell(self, index: int) -> "XorTicTacToeState":
        """Setup-mode edit: empty -> X -> O -> empty."""
        order = {None: Player.X, Player.X: Player.O, Player.O: None}
        cells = list(self.cells)
        cells[index] = order[cells[index]]
        return XorTicTacToeState(cells=tuple(cells))

    def legal_cells(self) -> List[int]:
        """Empty cells where the player to move can play without completing a line."""
        if self.winner() is not None:
            return []
        player = self.to_move
        return [i for i in self.empty_cells if self.place(i, player).winner() is None]

    def is_goal(self) -> bool:
        return self.is_full() and self.winner() is None

    def heuristic(self) -> int:
        # Every placement fills exactly one cell.
        return len(self.empty_cells)

    def key(self) -> Cells:
        return self.cells

    def successors(self) -> List[Transition]:
        player = self.to_move
        children = [(i, self.place(i, player)) for i in self.legal_cells()]
        children.sort(key=lambda item: (item[1].risk(), item[0]))
        return [
            Transition(self, f"place {player.value} in cell {i + 1}", child)
            for i, child in children
        ]

    def pick_best_move(self, player: Player) -> Optional[int]:
        """
        Rule-based opponent move for game mode.

        Only cells where player's mark leaves no line are considered. Among
        those, the one leaving the fewest near-complete lines wins; ties go
        to the center, then a corner, then the lowest index.

        Returns:
            Cell index, or None if player has no legal cell
        """
        if self.winner() is not None:
            return None
        candidates = []
        for index in self.empty_cells:
            child = self.place(index, player)
            if child.winner() is None:
                candidates.append((child.risk(), _cell_rank(index), index))
        return min(candidates)[2] if candidates else None

    def render(self) -> str:
        rows = []
        for row in range(3):
            rows.append(" ".join(
                cell.value if cell is not None else "." for cell in self.cells[row * 3:row * 3 + 3]
            ))
        return "\n".join(rows)


def from_marks(marks: Sequence[Optional[str]]) -> XorTicTacToeState:
    """Build a state from a list of 'X', 'O' or None."""
    if len(marks) != 9:
        raise ValueError(f"Expected 9 cells, got {len(marks)}")
    return XorTicTacToeState(cells=tuple(None if m is None else Player(m) for m in marks))
