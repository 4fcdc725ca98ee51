"""
Tests for the domain-agnostic A* engine.

Uses a small hand-built graph so tie-breaking, stale frontier entries
and re-expansion can be checked exactly.

Usage:
    pytest tests/test_search.py
"""

import sys
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_suite.puzzles import EightPuzzleState
from puzzle_suite.search import (
    Exhausted,
    ReplayCursor,
    SearchContext,
    SearchState,
    Solved,
    Transition,
    search,
)


Edges = Dict[str, List[Tuple[str, int]]]


class GraphState(SearchState):
    """Node of an explicit weighted graph with a lookup-table heuristic."""

    def __init__(self, node: str, edges: Edges, goals, h: Dict[str, int] = None):
        self.node = node
        self.edges = edges
        self.goals = goals
        self.h = h or {}

    def is_goal(self) -> bool:
        return self.node in self.goals

    def successors(self):
        return [
            Transition(self, f"{self.node}->{target}",
                       GraphState(target, self.edges, self.goals, self.h), cost)
            for target, cost in self.edges.get(self.node, [])
        ]

    def heuristic(self) -> int:
        return self.h.get(self.node, 0)

    def key(self):
        return self.node


def test_start_is_goal():
    """A goal start gives an empty path at cost 0."""
    outcome = search(GraphState("G", {}, {"G"}))

    assert isinstance(outcome, Solved)
    assert outcome.path == []
    assert outcome.cost == 0
    assert outcome.final_state.node == "G"
    assert outcome.stats.expanded == 1
    assert outcome.stats.visited == 1


def test_cheapest_path_wins_over_fewer_steps():
    edges = {
        "S": [("G", 10), ("A", 1)],
        "A": [("B", 1)],
        "B": [("G", 1)],
    }
    outcome = search(GraphState("S", edges, {"G"}))

    assert outcome.is_solved
    assert outcome.cost == 3
    assert outcome.actions == ["S->A", "A->B", "B->G"]


def test_equal_priority_ties_go_to_first_inserted():
    """Two goals with the same f: the one generated first is returned."""
    first = search(GraphState("S", {"S": [("G1", 1), ("G2", 1)]}, {"G1", "G2"}))
    second = search(GraphState("S", {"S": [("G2", 1), ("G1", 1)]}, {"G1", "G2"}))

    assert first.actions == ["S->G1"]
    assert second.actions == ["S->G2"]


def test_closed_state_reopened_on_cheaper_path():
    """An admissible but inconsistent heuristic forces C to be expanded twice."""
    edges = {
        "S": [("A", 1), ("B", 2)],
        "A": [("C", 5)],
        "B": [("C", 1)],
        "C": [("G", 10)],
    }
    h = {"B": 5}
    outcome = search(GraphState("S", edges, {"G"}, h))

    assert outcome.cost == 13
    assert outcome.actions == ["S->B", "B->C", "C->G"]
    assert outcome.stats.visited == 5
    assert outcome.stats.expanded == 6


def test_worse_duplicate_is_not_pushed():
    edges = {
        "S": [("A", 1), ("B", 1)],
        "A": [("C", 1)],
        "B": [("C", 3)],
        "C": [("G", 1)],
    }
    outcome = search(GraphState("S", edges, {"G"}))

    assert outcome.cost == 3
    assert outcome.actions == ["S->A", "A->C", "C->G"]
    assert outcome.stats.visited == 5


def test_unreachable_goal_is_exhausted():
    edges = {"S": [("A", 1)], "A": [("S", 1)], "G": []}
    outcome = search(GraphState("S", edges, {"G"}))

    assert isinstance(outcome, Exhausted)
    assert outcome.reason == "frontier_empty"
    assert outcome.proves_unsolvable
    assert not outcome.is_solved
    assert outcome.stats.expanded == 2
    assert outcome.stats.visited == 2


def test_expansion_ceiling_stops_deterministically():
    start = EightPuzzleState.from_list([8, 6, 7, 2, 5, 4, 3, 0, 1])
    outcome = search(start, SearchContext(max_expansions=25))

    assert isinstance(outcome, Exhausted)
    assert outcome.reason == "limit"
    assert not outcome.proves_unsolvable
    assert outcome.stats.expanded == 25

    again = search(start, SearchContext(max_expansions=25))
    assert again.stats.visited == outcome.stats.visited


def test_cancelled_context_returns_immediately():
    context = SearchContext()
    context.cancel()
    outcome = search(EightPuzzleState.from_list([8, 6, 7, 2, 5, 4, 3, 0, 1]), context)

    assert isinstance(outcome, Exhausted)
    assert outcome.reason == "cancelled"
    assert outcome.stats.expanded == 0


def test_progress_callback_reports_expansions():
    reports = []
    context = SearchContext(progress_callback=lambda e, f: reports.append(e),
                            progress_interval=1)
    outcome = search(EightPuzzleState.from_list([1, 2, 3, 4, 5, 6, 0, 7, 8]), context)

    assert reports == list(range(1, outcome.stats.expanded + 1))


def test_repeated_search_is_identical():
    start = EightPuzzleState.from_list([4, 1, 3, 7, 2, 6, 0, 5, 8])
    first = search(start)
    second = search(start)

    assert first.actions == second.actions
    assert first.cost == second.cost
    assert [s.key() for s in first.states] == [s.key() for s in second.states]


def test_path_cost_increases_by_each_step_cost():
    edges = {
        "S": [("A", 2), ("B", 5)],
        "A": [("B", 1)],
        "B": [("G", 4)],
    }
    outcome = search(GraphState("S", edges, {"G"}))

    g = 0
    for transition in outcome.path:
        assert transition.cost > 0
        g += transition.cost
    assert g == outcome.cost == 7


def test_replay_cursor_walks_path():
    edges = {"S": [("A", 1)], "A": [("G", 1)]}
    outcome = search(GraphState("S", edges, {"G"}))
    cursor = ReplayCursor(outcome)

    assert cursor.total_steps == 2
    assert cursor.current_state.node == "S"
    assert cursor.last_action is None

    assert cursor.advance().action == "S->A"
    assert cursor.current_state.node == "A"
    assert cursor.advance().action == "A->G"
    assert cursor.is_finished
    assert cursor.last_action == "A->G"
    assert cursor.advance() is None

    cursor.rewind()
    assert cursor.step == 0
    assert cursor.current_state.node == "S"


def test_stats_record_time():
    outcome = search(EightPuzzleState.from_list([4, 1, 3, 7, 2, 6, 0, 5, 8]))
    assert outcome.stats.computation_time_ms >= 0.0


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
