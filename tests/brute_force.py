"""
Brute-force reference distances used to check A* results and heuristics.
"""

import math
from collections import deque
from typing import Dict, Hashable, Optional, Tuple

from puzzle_suite.search import SearchState


def monotone_distances(start: SearchState) -> Dict[Hashable, Tuple[SearchState, float]]:
    """Exact cost-to-goal for puzzles whose moves only ever add pieces."""
    memo: Dict[Hashable, Tuple[SearchState, float]] = {}

    def visit(state: SearchState) -> float:
        key = state.key()
        if key in memo:
            return memo[key][1]
        if state.is_goal():
            best = 0.0
        else:
            best = math.inf
            for t in state.successors():
                best = min(best, t.cost + visit(t.child))
        memo[key] = (state, best)
        return best

    visit(start)
    return memo


def reversible_distances(goal: SearchState,
                         max_depth: Optional[int] = None) -> Dict[Hashable, Tuple[SearchState, int]]:
    """BFS distances from a goal for puzzles whose moves can be undone."""
    dist = {goal.key(): (goal, 0)}
    queue = deque([goal])
    while queue:
        state = queue.popleft()
        depth = dist[state.key()][1]
        if max_depth is not None and depth >= max_depth:
            continue
        for t in state.successors():
            if t.child.key() not in dist:
                dist[t.child.key()] = (t.child, depth + 1)
                queue.append(t.child)
    return dist


def bfs_cost(start: SearchState) -> Optional[int]:
    """Unit-cost shortest path length from start to any goal, or None."""
    seen = {start.key()}
    queue = deque([(start, 0)])
    while queue:
        state, depth = queue.popleft()
        if state.is_goal():
            return depth
        for t in state.successors():
            if t.child.key() not in seen:
                seen.add(t.child.key())
                queue.append((t.child, depth + 1))
    return None
