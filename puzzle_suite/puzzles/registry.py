"""
Puzzle Registry Module - Closed set of puzzle identifiers and their descriptors.
"""

from enum import Enum
from typing import Dict, List, Type

from ..search import SearchState


class PuzzleId(str, Enum):
    """Identifiers of the puzzles shipped with the suite."""
    EIGHT_PUZZLE = "eight_puzzle"
    XOR_TIC_TAC_TOE = "xor_tic_tac_toe"
    MISSIONARIES_CANNIBALS = "missionaries_cannibals"
    EIGHT_QUEENS = "eight_queens"


# Global registry of puzzle state classes
_PUZZLES: Dict[PuzzleId, Type[SearchState]] = {}


def register_puzzle(cls: Type[SearchState]) -> Type[SearchState]:
    """
    Decorator to register a puzzle state class.

    The class must define puzzle_id, name and summary class attributes.

    Usage:
        @register_puzzle
        @dataclass(frozen=True)
        class MyState(SearchState):
            puzzle_id = PuzzleId.EIGHT_PUZZLE
            ...

    Args:
        cls: State class to register

    Returns:
        The same class (for decorator chaining)
    """
    _PUZZLES[cls.puzzle_id] = cls
    return cls


def get_puzzle_class(puzzle_id) -> Type[SearchState]:
    """
    Look up a registered state class.

    Args:
        puzzle_id: PuzzleId or its string value (e.g. "eight_queens")

    Returns:
        State class for the puzzle

    Raises:
        ValueError: If the puzzle is not registered
    """
    try:
        key = PuzzleId(puzzle_id)
    except ValueError:
        key = None
    if key not in _PUZZLES:
        available = ", ".join(p.value for p in _PUZZLES)
        raise ValueError(f"Unknown puzzle: {puzzle_id}. Available: {available}")
    return _PUZZLES[key]


def create_initial_state(puzzle_id) -> SearchState:
    """Build the default starting state of a puzzle."""
    return get_puzzle_class(puzzle_id).initial()


def get_puzzle_names() -> List[str]:
    """
    Get list of registered puzzle names.

    Returns:
        List of PuzzleId string values in registration order
    """
    return [p.value for p in _PUZZLES]


def get_puzzle_info() -> List[Dict[str, str]]:
    """
    Get id, display name and summary for all registered puzzles.

    Returns:
        List of dicts with 'id', 'name' and 'summary' keys
    """
    return [
        {"id": cls.puzzle_id.value, "name": cls.name, "summary": cls.summary}
        for cls in _PUZZLES.values()
    ]
