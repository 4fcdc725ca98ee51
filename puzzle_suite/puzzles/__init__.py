"""
Puzzles Package - Concrete SearchState implementations.

Importing this package registers all built-in puzzles.
"""

from .registry import (
    PuzzleId,
    register_puzzle,
    get_puzzle_class,
    get_puzzle_names,
    get_puzzle_info,
    create_initial_state,
)
from .eight_puzzle import EightPuzzleState
from .xor_tic_tac_toe import Player, XorTicTacToeState, WINNING_LINES
from .missionaries_cannibals import BoatMove, MissionariesCannibalsState
from .eight_queens import EightQueensState

__all__ = [
    # Registry
    "PuzzleId",
    "register_puzzle",
    "get_puzzle_class",
    "get_puzzle_names",
    "get_puzzle_info",
    "create_initial_state",
    # Domains
    "EightPuzzleState",
    "XorTicTacToeState",
    "Player",
    "WINNING_LINES",
    "MissionariesCannibalsState",
    "BoatMove",
    "EightQueensState",
]
