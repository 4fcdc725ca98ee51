"""
State Contract Module - Abstract interface every searchable puzzle state implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Hashable, List


class SearchState(ABC):
    """
    Abstract base class for puzzle states explored by the search engine.

    Implementations must be immutable values: successor generation builds
    new states and never modifies the parent in place.

    Subclasses provide the goal test, successor generation, an admissible
    heuristic and a canonical key. The engine relies on nothing else.
    """

    @abstractmethod
    def is_goal(self) -> bool:
        """
        Check whether this state satisfies the puzzle's success condition.

        Returns:
            True if the state is a goal
        """

    @abstractmethod
    def successors(self) -> List["Transition"]:
        """
        Generate every state reachable by one legal action.

        The list must be finite, must not contain this state itself and
        must come out in the same order on every call.

        Returns:
            List of Transition objects leaving this state
        """

    @abstractmethod
    def heuristic(self) -> int:
        """
        Estimate the remaining cost to the nearest goal.

        Must never overestimate the true cost and must return 0 when
        is_goal() is True.

        Returns:
            Non-negative cost estimate
        """

    @abstractmethod
    def key(self) -> Hashable:
        """
        Canonical identity used for deduplication.

        Returns:
            Hashable value; equal keys mean interchangeable states
        """


@dataclass(frozen=True)
class Transition:
    """
    One edge of the state graph.

    Attributes:
        state: State the action is applied to
        action: Human-readable label used during replay
        child: Resulting state
        cost: Step cost of the action (positive)
    """
    state: SearchState
    action: str
    child: SearchState
    cost: int = 1

    def __str__(self) -> str:
        return self.action
