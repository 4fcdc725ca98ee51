"""
Search Node Module - Frontier entries and the priority frontier for A*.
"""

import heapq
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

from .state import SearchState, Transition


@dataclass(eq=False)
class SearchNode:
    """
    A state reached by the search along a specific path.

    Attributes:
        state: The wrapped puzzle state
        g: Accumulated cost from the start state
        h: Heuristic estimate for the state
        sequence: Insertion order, used to break priority ties
        parent: Node this one was expanded from (None for the root)
        transition: Transition from the parent to this node
    """
    state: SearchState
    g: int
    h: int
    sequence: int
    parent: Optional["SearchNode"] = None
    transition: Optional[Transition] = None

    @property
    def f(self) -> int:
        """Total priority g + h."""
        return self.g + self.h

    def path(self) -> List[Transition]:
        """
        Walk parent links back to the root.

        Returns:
            Transitions from the root to this node, in order
        """
        transitions = []
        node = self
        while node.transition is not None:
            transitions.append(node.transition)
            node = node.parent
        transitions.reverse()
        return transitions


@dataclass
class Frontier:
    """
    Min-heap of SearchNodes ordered by (f, sequence).

    Replacing a node with a cheaper one pushes a new entry; the old entry
    stays in the heap and is skipped by the engine when popped.
    """
    _heap: List[Tuple[int, int, SearchNode]] = field(default_factory=list)
    _best_g: Dict[Hashable, int] = field(default_factory=dict)
    _counter: int = 0

    def next_sequence(self) -> int:
        """Hand out the next insertion sequence number."""
        sequence = self._counter
        self._counter += 1
        return sequence

    def push(self, node: SearchNode, key: Hashable) -> None:
        """Add a node and remember the best g seen for its key."""
        heapq.heappush(self._heap, (node.f, node.sequence, node))
        self._best_g[key] = node.g

    def pop(self) -> SearchNode:
        """Remove and return the node with the lowest (f, sequence)."""
        return heapq.heappop(self._heap)[2]

    def best_g(self, key: Hashable) -> Optional[int]:
        """Lowest g pushed for a key, or None if never pushed."""
        return self._best_g.get(key)

    def __len__(self) -> int:
        return len(self._heap)
