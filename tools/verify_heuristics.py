"""
Diagnostic script that brute-forces exact goal distances and checks every
puzzle heuristic against them.

Usage:
    python tools/verify_heuristics.py
    python tools/verify_heuristics.py --eight-puzzle-depth 14
"""

import argparse
import math
import sys
from collections import deque
from pathlib import Path
from typing import Dict, Hashable, Tuple

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_suite.puzzles import (
    EightPuzzleState,
    EightQueensState,
    MissionariesCannibalsState,
    XorTicTacToeState,
)
from puzzle_suite.search import SearchState


def monotone_distances(start: SearchState) -> Dict[Hashable, Tuple[SearchState, float]]:
    """
    Exact cost-to-goal for every state reachable from start.

    Only valid for puzzles whose moves never return to an earlier state
    (queens and marks are only ever added).
    """
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


def reversible_distances(goal: SearchState, max_depth: int = None) -> Dict[Hashable, Tuple[SearchState, int]]:
    """Breadth-first distances from a goal, for puzzles whose moves can be undone."""
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


def check(name: str, distances) -> bool:
    """Print and return whether h <= exact cost everywhere."""
    violations = [
        (state, exact) for state, exact in distances.values()
        if state.heuristic() > exact
    ]
    goals_nonzero = [
        state for state, exact in distances.values()
        if state.is_goal() and state.heuristic() != 0
    ]
    print(f"  {name}: {len(distances)} states, "
          f"{len(violations)} overestimates, {len(goals_nonzero)} non-zero goals")
    for state, exact in violations[:3]:
        print(f"    h={state.heuristic()} > exact={exact}:\n{state.render()}")
    return not violations and not goals_nonzero


def main():
    parser = argparse.ArgumentParser(description="Check heuristic admissibility")
    parser.add_argument("--eight-puzzle-depth", type=int, default=12,
                        help="BFS depth around the 8-Puzzle goal (default: 12)")
    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("HEURISTIC ADMISSIBILITY")
    print("=" * 60)

    results = [
        check("8 Queens", monotone_distances(EightQueensState())),
        check("XOR Tic-Tac-Toe", monotone_distances(XorTicTacToeState())),
        check("Missionaries & Cannibals",
              reversible_distances(MissionariesCannibalsState(0, 0, False))),
        check("8-Puzzle", reversible_distances(EightPuzzleState.initial(),
                                               args.eight_puzzle_depth)),
    ]

    print()
    if all(results):
        print("All heuristics admissible!")
        return 0
    print("Some heuristics overestimate!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
