"""
Search Package - Generic A* engine for puzzle state graphs.

The engine knows nothing about individual puzzles. Any state class that
implements SearchState can be searched.

Public API:
    - SearchState: Abstract state contract
    - Transition: One (state, action, child, cost) edge
    - SearchContext: Expansion ceiling, timeout, cancellation
    - search(): Run A* and get an Outcome
    - Solved / Exhausted: The two Outcome variants
    - SearchStats: Expanded/visited counters and timing
    - ReplayCursor: Step-through playback of a Solved path

Usage:
    from puzzle_suite.search import search, SearchContext
    from puzzle_suite.puzzles import EightPuzzleState

    start = EightPuzzleState.from_list([1, 2, 3, 4, 5, 6, 0, 7, 8])
    outcome = search(start, SearchContext(max_expansions=100000))

    if outcome.is_solved:
        for transition in outcome.path:
            print(transition.action)
"""

from .state import SearchState, Transition
from .context import SearchContext
from .node import Frontier, SearchNode
from .outcome import Exhausted, Outcome, ReplayCursor, SearchStats, Solved
from .astar import search

__all__ = [
    # Contract
    "SearchState",
    "Transition",
    # Engine
    "SearchContext",
    "SearchNode",
    "Frontier",
    "search",
    # Results
    "Outcome",
    "Solved",
    "Exhausted",
    "SearchStats",
    "ReplayCursor",
]
