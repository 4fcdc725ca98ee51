"""
Outcome Module - Search results, statistics and step-through replay.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .state import SearchState, Transition


@dataclass
class SearchStats:
    """
    Counters collected during one search.

    Attributes:
        expanded: Nodes popped from the frontier
        visited: Distinct states discovered (frontier or closed)
        computation_time_ms: Wall-clock time spent searching
    """
    expanded: int = 0
    visited: int = 0
    computation_time_ms: float = 0.0


@dataclass
class Solved:
    """
    A goal was reached.

    Attributes:
        start: State the search started from
        path: Transitions from start to goal (empty if start is a goal)
        cost: Total path cost (optimal for admissible heuristics)
        stats: Search statistics
    """
    start: SearchState
    path: List[Transition] = field(default_factory=list)
    cost: int = 0
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def is_solved(self) -> bool:
        return True

    @property
    def states(self) -> List[SearchState]:
        """Every state along the path, start first."""
        return [self.start] + [t.child for t in self.path]

    @property
    def final_state(self) -> SearchState:
        """Goal state at the end of the path."""
        return self.path[-1].child if self.path else self.start

    @property
    def actions(self) -> List[str]:
        """Action labels along the path."""
        return [t.action for t in self.path]

    @property
    def step_count(self) -> int:
        return len(self.path)


@dataclass
class Exhausted:
    """
    The search stopped without reaching a goal.

    Attributes:
        stats: Search statistics
        reason: "frontier_empty" when the instance is unsolvable from the
                start, or "limit", "timeout", "cancelled" when the search
                context cut it short
    """
    stats: SearchStats = field(default_factory=SearchStats)
    reason: str = "frontier_empty"

    @property
    def is_solved(self) -> bool:
        return False

    @property
    def proves_unsolvable(self) -> bool:
        """True only when the whole reachable space was explored."""
        return self.reason == "frontier_empty"


Outcome = Union[Solved, Exhausted]


class ReplayCursor:
    """
    Step-through playback over an already computed solution.

    Step 0 shows the start state; step N shows the state after the
    N-th transition.
    """

    def __init__(self, solution: Solved):
        self.solution = solution
        self._states = solution.states
        self.step = 0

    @property
    def total_steps(self) -> int:
        return self.solution.step_count

    @property
    def current_state(self) -> SearchState:
        return self._states[self.step]

    @property
    def last_action(self) -> Optional[str]:
        """Label of the transition that produced the current state."""
        if self.step == 0:
            return None
        return self.solution.path[self.step - 1].action

    @property
    def is_finished(self) -> bool:
        return self.step >= self.total_steps

    def advance(self) -> Optional[Transition]:
        """
        Move one step forward.

        Returns:
            The transition just replayed, or None if already at the goal
        """
        if self.is_finished:
            return None
        transition = self.solution.path[self.step]
        self.step += 1
        return transition

    def rewind(self) -> None:
        """Return to the start state."""
        self.step = 0
