"""
A* Search Module - Domain-agnostic best-first search over SearchState graphs.

The frontier is ordered by f = g + h with ties going to the node inserted
first, so identical inputs always produce identical paths.
"""

import logging
import time
from typing import Dict, Hashable, Optional

from .context import SearchContext
from .node import Frontier, SearchNode
from .outcome import Exhausted, Outcome, SearchStats, Solved
from .state import SearchState

logger = logging.getLogger(__name__)


def search(start: SearchState, context: Optional[SearchContext] = None) -> Outcome:
    """
    Run A* from a start state.

    Args:
        start: State to search from; must satisfy the SearchState contract
        context: Optional limits and cancellation (unbounded if omitted)

    Returns:
        Solved with the optimal path, or Exhausted when the frontier empties
        or the context stops the search
    """
    if context is None:
        context = SearchContext()
    context.restart_clock()
    started = time.perf_counter()

    stats = SearchStats()
    frontier = Frontier()
    closed: Dict[Hashable, int] = {}

    root = SearchNode(state=start, g=0, h=start.heuristic(), sequence=frontier.next_sequence())
    frontier.push(root, start.key())
    stats.visited = 1

    logger.debug(f"A* started from {type(start).__name__} (h={root.h})")

    def finish(outcome: Outcome) -> Outcome:
        stats.computation_time_ms = (time.perf_counter() - started) * 1000
        return outcome

    while frontier:
        reason = context.stop_reason(stats.expanded)
        if reason is not None:
            logger.info(f"A* stopped ({reason}) after {stats.expanded} expansions")
            return finish(Exhausted(stats=stats, reason=reason))

        node = frontier.pop()
        stats.expanded += 1
        context.report_progress(stats.expanded, len(frontier))

        if node.state.is_goal():
            path = node.path()
            logger.info(
                f"A* solved: cost={node.g}, steps={len(path)}, "
                f"expanded={stats.expanded}, visited={stats.visited}"
            )
            return finish(Solved(start=start, path=path, cost=node.g, stats=stats))

        key = node.state.key()
        closed_g = closed.get(key)
        if closed_g is not None and closed_g <= node.g:
            continue
        closed[key] = node.g

        for transition in node.state.successors():
            child = transition.child
            child_key = child.key()
            child_g = node.g + transition.cost

            closed_g = closed.get(child_key)
            if closed_g is not None and closed_g <= child_g:
                continue
            frontier_g = frontier.best_g(child_key)
            if frontier_g is not None and frontier_g <= child_g:
                continue
            if frontier_g is None:
                stats.visited += 1

            frontier.push(
                SearchNode(
                    state=child,
                    g=child_g,
                    h=child.heuristic(),
                    sequence=frontier.next_sequence(),
                    parent=node,
                    transition=transition,
                ),
                child_key,
            )

    logger.info(f"A* exhausted the frontier after {stats.expanded} expansions")
    return finish(Exhausted(stats=stats, reason="frontier_empty"))
