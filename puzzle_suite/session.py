"""
Session Module - Per-puzzle editing sessions and application state.

Each session owns the board the user edits, hands it to the search engine
on request and replays the resulting path one step at a time. Boards are
immutable states; every edit replaces the session's state with a new value.

For the search itself, see the puzzle_suite.search package.
"""

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Dict, List, Optional, Type

from puzzle_suite.search import (
    Exhausted, Outcome, ReplayCursor, SearchContext, SearchState, Solved, search
)
from puzzle_suite.puzzles import (
    BoatMove,
    EightPuzzleState,
    EightQueensState,
    MissionariesCannibalsState,
    Player,
    PuzzleId,
    XorTicTacToeState,
)
from puzzle_suite.puzzles.eight_puzzle import GOAL

logger = logging.getLogger(__name__)


__all__ = [
    "SessionState",
    "PuzzleSession",
    "EightPuzzleSession",
    "XorTicTacToeSession",
    "MissionariesCannibalsSession",
    "EightQueensSession",
    "AppRoute",
    "AppState",
    "create_session",
]


class SessionState(Enum):
    """
    Session state machine states.

    States:
        EDITING: Board may be changed, no solution cached
        SOLVING: A search is running (background worker)
        REPLAYING: Solution cached, stepping through it
        EXHAUSTED: Last search found no solution
    """
    EDITING = auto()
    SOLVING = auto()
    REPLAYING = auto()
    EXHAUSTED = auto()


class PuzzleSession(ABC):
    """
    Base session: current board, cached outcome and replay cursor.

    Subclasses add the puzzle's editing commands and a shuffle generator.
    """

    puzzle_id: PuzzleId
    base_status = "S solves, Space steps through the solution, R resets, H shuffles."
    solved_message = "Solution complete!"

    def __init__(self, state: Optional[SearchState] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.start: SearchState = state if state is not None else self.initial_state()
        self.state: SearchState = self.start
        self.outcome: Optional[Outcome] = None
        self.cursor: Optional[ReplayCursor] = None
        self.session_state = SessionState.EDITING
        self.status = self.base_status

    @abstractmethod
    def initial_state(self) -> SearchState:
        """Default board loaded on creation and by reset()."""

    @abstractmethod
    def random_state(self) -> SearchState:
        """Board loaded by shuffle()."""

    @property
    def is_solved(self) -> bool:
        return self.state.is_goal()

    def _set_state(self, state: SearchState, status: str) -> None:
        """Replace the board after an edit and drop any cached solution."""
        self.state = state
        self.outcome = None
        self.cursor = None
        self.session_state = SessionState.EDITING
        self.status = status

    def reset(self) -> None:
        """Return to the puzzle's default board."""
        self.start = self.initial_state()
        self._set_state(self.start, self.base_status)
        logger.info(f"{self.puzzle_id.value}: reset")

    def shuffle(self) -> None:
        """Load a random board."""
        self.start = self.random_state()
        self._set_state(self.start, "Board shuffled randomly.")
        logger.info(f"{self.puzzle_id.value}: shuffled")

    def begin_solve(self) -> SearchState:
        """Mark the session as solving and return the state to search from."""
        self.session_state = SessionState.SOLVING
        self.status = "Solving..."
        return self.state

    def solve(self, context: Optional[SearchContext] = None) -> Outcome:
        """Run the search synchronously and cache the outcome."""
        outcome = search(self.begin_solve(), context)
        self.apply_outcome(outcome)
        return outcome

    def apply_outcome(self, outcome: Outcome) -> None:
        """
        Store a finished search result.

        Args:
            outcome: Solved or Exhausted from search()
        """
        self.outcome = outcome
        stats = outcome.stats
        if isinstance(outcome, Solved):
            self.cursor = ReplayCursor(outcome)
            self.state = outcome.start
            self.session_state = SessionState.REPLAYING
            self.status = (
                f"Solution ready ({outcome.step_count} moves, cost {outcome.cost}). "
                f"Press Space to step."
            )
        else:
            self.cursor = None
            self.session_state = SessionState.EXHAUSTED
            self.status = self._exhausted_message(outcome)
        logger.info(
            f"{self.puzzle_id.value}: {self.session_state.name.lower()} "
            f"(expanded={stats.expanded}, visited={stats.visited}, "
            f"{stats.computation_time_ms:.1f}ms)"
        )

    def _exhausted_message(self, outcome: Exhausted) -> str:
        expanded = outcome.stats.expanded
        if outcome.reason == "limit":
            return f"Search stopped at the expansion limit ({expanded} nodes). Try shuffling (H)."
        if outcome.reason == "timeout":
            return f"Search timed out after {expanded} nodes. Try shuffling (H)."
        if outcome.reason == "cancelled":
            return "Search cancelled."
        return f"No solution exists from this board ({expanded} nodes explored)."

    def advance_solution(self) -> bool:
        """
        Replay the next step of the cached solution.

        Returns:
            True if the board moved, False if there is nothing to replay
        """
        if self.cursor is None:
            self.status = "Run the solver with 'S' first."
            return False
        transition = self.cursor.advance()
        if transition is None:
            self.status = "Already at final solution state."
            return False
        self.state = self.cursor.current_state
        if self.cursor.is_finished:
            self.status = self.solved_message
        else:
            self.status = (
                f"Step {self.cursor.step} / {self.cursor.total_steps}: {transition.action}"
            )
        return True

    def solution_actions(self) -> List[str]:
        if isinstance(self.outcome, Solved):
            return self.outcome.actions
        return []


class EightPuzzleSession(PuzzleSession):
    """8-Puzzle: edit start and goal boards cell by cell."""

    puzzle_id = PuzzleId.EIGHT_PUZZLE
    base_status = ("Select a cell and type 1-8 to place a number. Tab switches boards. "
                   "R resets, H shuffles, S solves, Space replays.")
    solved_message = "Solution complete! Board solved."

    def __init__(self, state=None, rng=None):
        super().__init__(state, rng)
        self.editing_goal = False

    def initial_state(self) -> EightPuzzleState:
        # Keeps an edited goal across reset(); None while the session is built.
        current = getattr(self, "state", None)
        goal = current.goal if current is not None else GOAL
        return EightPuzzleState.random_solvable(goal=goal, rng=self.rng)

    def random_state(self) -> EightPuzzleState:
        return EightPuzzleState.random_solvable(goal=self.state.goal, rng=self.rng)

    def toggle_editing_goal(self) -> None:
        self.editing_goal = not self.editing_goal
        self.status = "Editing goal board." if self.editing_goal else "Editing start board."

    def place_number(self, cell: int, number: int) -> bool:
        """
        Put a number (0 = blank) into a cell of the board being edited.

        The cell's previous value moves to wherever the number was, so the
        board always stays a permutation of 0..8.
        """
        if not 0 <= cell < 9 or not 0 <= number <= 8:
            self.status = "Choose a cell 1-9 and a number 0-8."
            return False
        board = list(self.state.goal if self.editing_goal else self.state.tiles)
        if board[cell] == number:
            self.status = f"Cell {cell + 1} already holds {number}."
            return False
        other = board.index(number)
        board[cell], board[other] = board[other], board[cell]
        if self.editing_goal:
            new_state = self.state.with_goal(board)
        else:
            new_state = self.state.with_tiles(board)
        self.start = new_state
        self._set_state(new_state, f"Swapped {number} with cell {cell + 1}.")
        return True

    def _exhausted_message(self, outcome: Exhausted) -> str:
        if outcome.proves_unsolvable:
            return "Goal unreachable: start and goal have different tile parity."
        return super()._exhausted_message(outcome)


class XorTicTacToeSession(PuzzleSession):
    """XOR Tic-Tac-Toe: setup mode edits cells, game mode plays against a rule-based O."""

    puzzle_id = PuzzleId.XOR_TIC_TAC_TOE
    base_status = "Game mode: playing X against the AI. Tab enters setup. S solves the fill."
    solved_message = "Board filled without a single line of three!"
    human = Player.X

    def __init__(self, state=None, rng=None):
        super().__init__(state, rng)
        self.setup_mode = False

    def initial_state(self) -> XorTicTacToeState:
        return XorTicTacToeState()

    def random_state(self) -> XorTicTacToeState:
        return XorTicTacToeState.random_setup(self.rng)

    @property
    def is_locked(self) -> bool:
        """True when the player to move has no legal cell."""
        return not self.state.legal_cells()

    def toggle_setup_mode(self) -> None:
        self.setup_mode = not self.setup_mode
        if self.setup_mode:
            self.status = "Setup mode: click cells to cycle X/O/empty. Tab to exit setup."
        else:
            self.status = "Game mode: playing against the AI. Tab to enter setup."
            self._ai_catch_up()

    def place_cell(self, index: int) -> bool:
        """Setup mode cycles a cell; game mode plays the human's mark and lets the AI reply."""
        if self.setup_mode:
            self.start = self.state.cycle_cell(index)
            self._set_state(self.start, f"Edited cell {index + 1}.")
            return True
        # Boards edited in setup mode may leave the AI to move first.
        self._ai_catch_up()
        if self.is_locked:
            self.status = "Game over. Press R to restart."
            return False
        try:
            new_state = self.state.place(index, self.human)
        except ValueError as e:
            self.status = f"{e}."
            return False
        if new_state.winner() is not None:
            self.status = (f"Placing {self.human.value} in cell {index + 1} "
                           f"would complete a line.")
            return False

        self._set_state(new_state, f"Placed {self.human.value} in cell {index + 1}.")
        self._update_outcome()
        self._ai_catch_up()
        return True

    def _ai_catch_up(self) -> None:
        while not self.is_locked and self.state.to_move != self.human:
            self._ai_move()

    def _ai_move(self) -> None:
        ai = self.human.opponent()
        index = self.state.pick_best_move(ai)
        self.state = self.state.place(index, ai)
        self.status = f"AI placed {ai.value} in cell {index + 1}."
        self._update_outcome()

    def _update_outcome(self) -> None:
        if self.state.is_full():
            self.status = "Board full with no line of three. Well played!"
        elif self.is_locked:
            self.status = (f"{self.state.to_move.value} has no legal move left. "
                           f"Press R to try again.")


class MissionariesCannibalsSession(PuzzleSession):
    """Missionaries & Cannibals: manual crossings or A* solution."""

    puzzle_id = PuzzleId.MISSIONARIES_CANNIBALS
    solved_message = "Solution complete! Everyone crossed safely."

    def initial_state(self) -> MissionariesCannibalsState:
        return MissionariesCannibalsState()

    def random_state(self) -> MissionariesCannibalsState:
        return MissionariesCannibalsState.random_start(self.rng)

    def valid_moves(self) -> List[BoatMove]:
        return self.state.valid_moves()

    def apply_move(self, move: BoatMove) -> bool:
        new_state = self.state.apply_move(move)
        if new_state is None:
            self.status = "Invalid move!"
            return False
        side = "near shore" if new_state.boat_near else "far shore"
        self._set_state(new_state, f"Moved {move.describe()} to the {side}.")
        if new_state.is_goal():
            self.status = "Solved! Everyone crossed safely."
        return True


class EightQueensSession(PuzzleSession):
    """8 Queens: toggle queens on the board, then let A* complete it."""

    puzzle_id = PuzzleId.EIGHT_QUEENS
    base_status = "Click a square to place/remove a queen. S solves, R resets, H shuffles."
    solved_message = "Solution complete! All 8 queens placed safely."

    def initial_state(self) -> EightQueensState:
        return EightQueensState()

    def random_state(self) -> EightQueensState:
        return EightQueensState.random_partial(self.rng)

    def toggle_queen(self, row: int, col: int) -> bool:
        if not (0 <= row < 8 and 0 <= col < 8):
            self.status = "Square is off the board."
            return False
        new_state = self.state.toggle(row, col)
        conflicts = new_state.count_conflicts()
        if new_state.queens[row] is None:
            status = f"Removed queen from row {row + 1}, col {col + 1}."
        elif new_state.is_goal():
            status = "Perfect! All 8 queens placed with no conflicts."
        elif conflicts:
            status = f"Placed queen at row {row + 1}, col {col + 1}. Conflicts: {conflicts}."
        else:
            status = f"Placed queen at row {row + 1}, col {col + 1}. No conflicts yet."
        self.start = new_state
        self._set_state(new_state, status)
        return True

    def _exhausted_message(self, outcome: Exhausted) -> str:
        if outcome.proves_unsolvable and self.state.count_conflicts():
            return "Queens on the board attack each other; remove one and solve again."
        return super()._exhausted_message(outcome)


_SESSION_TYPES: Dict[PuzzleId, Type[PuzzleSession]] = {
    cls.puzzle_id: cls
    for cls in (EightPuzzleSession, XorTicTacToeSession,
                MissionariesCannibalsSession, EightQueensSession)
}


def create_session(puzzle_id, rng: Optional[random.Random] = None) -> PuzzleSession:
    """
    Create the session for a puzzle.

    Raises:
        ValueError: If the puzzle id is unknown
    """
    names = {p.value: p for p in _SESSION_TYPES}
    key = names.get(getattr(puzzle_id, "value", puzzle_id))
    if key is None:
        available = ", ".join(names)
        raise ValueError(f"Unknown puzzle: {puzzle_id}. Available: {available}")
    return _SESSION_TYPES[key](rng=rng)


class AppRoute(Enum):
    MAIN_MENU = auto()
    PUZZLE = auto()
    QUIT = auto()


class AppState:
    """
    Application-level state: which screen is shown and one session per puzzle.

    The search engine never sees this object.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.route = AppRoute.MAIN_MENU
        self.active: PuzzleId = PuzzleId.EIGHT_PUZZLE
        self.sessions: Dict[PuzzleId, PuzzleSession] = {
            puzzle_id: create_session(puzzle_id, rng) for puzzle_id in PuzzleId
        }

    @property
    def session(self) -> PuzzleSession:
        """Session of the active puzzle."""
        return self.sessions[self.active]

    def select_puzzle(self, puzzle_id) -> PuzzleSession:
        self.active = PuzzleId(puzzle_id)
        self.route = AppRoute.PUZZLE
        logger.info(f"Active puzzle: {self.active.value}")
        return self.session

    def select_main_menu(self) -> None:
        self.route = AppRoute.MAIN_MENU

    def request_quit(self) -> None:
        self.route = AppRoute.QUIT

    @property
    def should_exit(self) -> bool:
        return self.route == AppRoute.QUIT
