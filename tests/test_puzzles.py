"""
Tests for the four puzzle domains.

Covers move rules, validation, heuristics checked against brute-force
distances, and end-to-end solves through the A* engine.

Usage:
    pytest tests/test_puzzles.py
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_suite.puzzles import (
    BoatMove,
    EightPuzzleState,
    EightQueensState,
    MissionariesCannibalsState,
    Player,
    XorTicTacToeState,
)
from puzzle_suite.puzzles.eight_puzzle import GOAL, is_solvable, validate_tiles
from puzzle_suite.puzzles.eight_queens import all_solutions
from puzzle_suite.puzzles.missionaries_cannibals import boat_loads
from puzzle_suite.search import Exhausted, Solved, search

from brute_force import bfs_cost, monotone_distances, reversible_distances


def assert_admissible(distances):
    for state, exact in distances.values():
        assert state.heuristic() <= exact, state.render()
        if state.is_goal():
            assert state.heuristic() == 0


# =============================================================================
# 8-Puzzle
# =============================================================================

class TestEightPuzzle:

    def test_solved_board_needs_no_moves(self):
        outcome = search(EightPuzzleState.initial())

        assert isinstance(outcome, Solved)
        assert outcome.path == []
        assert outcome.cost == 0

    def test_two_move_solution(self):
        start = EightPuzzleState.from_list([1, 2, 3, 4, 5, 6, 0, 7, 8])
        outcome = search(start)

        assert outcome.cost == 2
        assert outcome.actions == ["slide tile 7 left", "slide tile 8 left"]
        assert outcome.final_state.tiles == GOAL
        assert outcome.final_state.heuristic() == 0

    def test_custom_goal(self):
        start = EightPuzzleState.from_list(GOAL, goal=[1, 2, 3, 4, 5, 6, 0, 7, 8])
        outcome = search(start)

        assert outcome.cost == 2
        assert outcome.final_state.tiles == (1, 2, 3, 4, 5, 6, 0, 7, 8)

    def test_odd_parity_is_exhausted(self):
        start = EightPuzzleState.from_list([2, 1, 3, 4, 5, 6, 7, 8, 0])
        assert not is_solvable(start.tiles, start.goal)

        outcome = search(start)

        assert isinstance(outcome, Exhausted)
        assert outcome.reason == "frontier_empty"
        # Half of the 9! permutations share the start's parity.
        assert outcome.stats.visited == 181440

    def test_successor_order_and_labels(self):
        start = EightPuzzleState.from_list([1, 2, 3, 4, 0, 5, 6, 7, 8])
        actions = [t.action for t in start.successors()]

        assert actions == [
            "slide tile 2 down",
            "slide tile 7 up",
            "slide tile 4 right",
            "slide tile 5 left",
        ]

    def test_corner_blank_has_two_moves(self):
        assert len(EightPuzzleState.initial().successors()) == 2

    def test_manhattan_distance(self):
        state = EightPuzzleState.from_list([8, 1, 3, 4, 0, 2, 7, 6, 5])
        assert state.manhattan_distance() == 10

    @pytest.mark.parametrize("tiles", [
        [1, 2, 3, 4, 5, 6, 7, 8],
        [1, 1, 3, 4, 5, 6, 7, 8, 0],
        [1, 2, 3, 4, 5, 6, 7, 8, 9],
    ])
    def test_invalid_tiles_rejected(self, tiles):
        with pytest.raises(ValueError):
            validate_tiles(tiles)
        with pytest.raises(ValueError):
            EightPuzzleState.from_list(tiles)

    def test_random_solvable_respects_goal(self):
        rng = random.Random(3)
        goal = (0, 1, 2, 3, 4, 5, 6, 7, 8)
        for _ in range(20):
            state = EightPuzzleState.random_solvable(goal=goal, rng=rng)
            assert sorted(state.tiles) == list(range(9))
            assert state.goal == goal
            assert is_solvable(state.tiles, goal)

    def test_heuristic_admissible_near_goal(self):
        assert_admissible(reversible_distances(EightPuzzleState.initial(), max_depth=10))

    def test_cost_matches_breadth_first_distance(self):
        distances = reversible_distances(EightPuzzleState.initial(), max_depth=12)
        samples = sorted(
            (depth, key) for key, (_, depth) in distances.items() if depth >= 8
        )[::400][:6]
        for depth, key in samples:
            outcome = search(distances[key][0])
            assert outcome.cost == depth


# =============================================================================
# XOR Tic-Tac-Toe
# =============================================================================

class TestXorTicTacToe:

    def test_empty_board_fills_in_nine_moves(self):
        outcome = search(XorTicTacToeState())

        assert isinstance(outcome, Solved)
        assert outcome.cost == 9
        assert outcome.final_state.is_full()
        assert outcome.final_state.winner() is None
        assert outcome.final_state.heuristic() == 0
        for state in outcome.states:
            assert state.winner() is None

    def test_marks_alternate_starting_with_x(self):
        outcome = search(XorTicTacToeState())
        players = [t.action.split()[1] for t in outcome.path]

        assert players == ["X", "O"] * 4 + ["X"]

    def test_completing_move_is_illegal(self):
        state = XorTicTacToeState.from_string("XX.OO....")

        assert state.to_move == Player.X
        assert state.legal_cells() == [5, 6, 7, 8]
        assert all("cell 3" not in t.action for t in state.successors())

    def test_successors_ordered_by_risk(self):
        state = XorTicTacToeState.from_string("X...O....")
        risks = [t.child.risk() for t in state.successors()]

        assert risks == sorted(risks)

    def test_dead_end_is_exhausted(self):
        state = XorTicTacToeState.from_string("XX.XOO.OO")
        assert state.successors() == []

        outcome = search(state)
        assert isinstance(outcome, Exhausted)
        assert outcome.reason == "frontier_empty"
        assert outcome.stats.expanded == 1

    def test_board_with_line_has_no_successors(self):
        state = XorTicTacToeState.from_string("XXXOO....")
        assert state.winner() == Player.X
        assert state.successors() == []
        assert not state.is_goal()

    def test_place_rejects_occupied_cell(self):
        state = XorTicTacToeState.from_string("X........")
        with pytest.raises(ValueError):
            state.place(0)
        with pytest.raises(ValueError):
            state.place(9)

    def test_from_string_rejects_bad_board(self):
        with pytest.raises(ValueError):
            XorTicTacToeState.from_string("XO")
        with pytest.raises(ValueError):
            XorTicTacToeState.from_string("XOZ......")

    def test_cycle_cell(self):
        state = XorTicTacToeState()
        state = state.cycle_cell(4)
        assert state.cells[4] == Player.X
        state = state.cycle_cell(4)
        assert state.cells[4] == Player.O
        state = state.cycle_cell(4)
        assert state.cells[4] is None

    @pytest.mark.parametrize("board, player, expected", [
        ("OO.X.X...", Player.O, 6),
        ("XX.O.....", Player.O, 2),
        (".........", Player.O, 4),
        ("....X....", Player.O, 0),
    ])
    def test_pick_best_move(self, board, player, expected):
        state = XorTicTacToeState.from_string(board)
        assert state.pick_best_move(player) == expected

    def test_pick_best_move_never_completes_a_line(self):
        for board in ["OO.X.X...", "O.O.X.X..", "OXO.X.XO."]:
            state = XorTicTacToeState.from_string(board)
            index = state.pick_best_move(Player.O)
            assert state.place(index, Player.O).winner() is None

    def test_pick_best_move_without_legal_cell(self):
        state = XorTicTacToeState.from_string("XX.XOO.OO")
        assert state.pick_best_move(Player.X) is None

    def test_random_setup_has_no_line(self):
        rng = random.Random(11)
        for _ in range(30):
            state = XorTicTacToeState.random_setup(rng)
            assert state.winner() is None
            assert 9 - len(state.empty_cells) <= 4

    def test_heuristic_admissible(self):
        assert_admissible(monotone_distances(XorTicTacToeState()))


# =============================================================================
# Missionaries & Cannibals
# =============================================================================

class TestMissionariesCannibals:

    def test_classic_puzzle_takes_eleven_crossings(self):
        outcome = search(MissionariesCannibalsState())

        assert isinstance(outcome, Solved)
        assert outcome.cost == 11
        assert outcome.final_state.is_goal()
        for state in outcome.states:
            assert state.is_valid()
        assert outcome.actions[0].startswith("cross to far shore: ")
        assert outcome.actions[1].startswith("cross to near shore: ")

    def test_start_heuristic(self):
        assert MissionariesCannibalsState().heuristic() == 9
        assert MissionariesCannibalsState(0, 0, False).heuristic() == 0

    def test_boat_loads_order(self):
        assert boat_loads(2) == [
            BoatMove(2, 0), BoatMove(1, 1), BoatMove(1, 0), BoatMove(0, 2), BoatMove(0, 1)
        ]

    def test_apply_move(self):
        start = MissionariesCannibalsState()

        # Leaves one missionary with three cannibals
        assert start.apply_move(BoatMove(2, 0)) is None
        assert start.apply_move(BoatMove(3, 0)) is None
        assert start.apply_move(BoatMove(0, 0)) is None

        after = start.apply_move(BoatMove(0, 2))
        assert after.key() == (3, 1, False)
        assert after.far_cannibals == 2

    def test_describe(self):
        assert BoatMove(2, 0).describe() == "2 missionaries"
        assert BoatMove(1, 1).describe() == "1 missionary, 1 cannibal"
        assert BoatMove(0, 1).describe() == "1 cannibal"

    def test_capacity_below_two_rejected(self):
        with pytest.raises(ValueError):
            MissionariesCannibalsState(capacity=1)

    def test_out_of_range_counts_rejected(self):
        with pytest.raises(ValueError):
            MissionariesCannibalsState(near_missionaries=4)

    def test_larger_boat_is_optimal(self):
        start = MissionariesCannibalsState(5, 5, True, 5, 5, 3)
        outcome = search(start)

        assert outcome.cost == bfs_cost(start)

    @pytest.mark.parametrize("total, capacity", [(3, 2), (5, 3), (4, 3)])
    def test_heuristic_admissible(self, total, capacity):
        goal = MissionariesCannibalsState(0, 0, False, total, total, capacity)
        assert_admissible(reversible_distances(goal))

    def test_random_start_is_playable(self):
        rng = random.Random(5)
        for _ in range(20):
            state = MissionariesCannibalsState.random_start(rng)
            assert state.is_valid()
            assert not state.is_goal()
            assert state.valid_moves()


# =============================================================================
# 8 Queens
# =============================================================================

class TestEightQueens:

    def test_empty_board_places_eight_queens(self):
        outcome = search(EightQueensState())

        assert isinstance(outcome, Solved)
        assert outcome.cost == 8
        assert outcome.step_count == 8
        final = outcome.final_state
        assert final.placed == 8
        assert final.count_conflicts() == 0
        assert final.heuristic() == 0

    def test_partial_board_is_completed(self):
        start = EightQueensState.from_positions([(0, 0), (1, 4)])
        outcome = search(start)

        assert outcome.cost == 6
        assert outcome.final_state.queens[:2] == (0, 4)
        assert outcome.final_state.is_goal()

    def test_conflicting_board_is_exhausted(self):
        outcome = search(EightQueensState.from_positions([(0, 0), (1, 1)]))

        assert isinstance(outcome, Exhausted)
        assert outcome.reason == "frontier_empty"
        assert outcome.stats.expanded == 1

    @pytest.mark.parametrize("positions, conflicts", [
        ([(0, 0), (1, 1)], 1),
        ([(0, 0), (2, 0)], 1),
        ([(0, 0), (1, 1), (2, 2)], 3),
        ([(r, r) for r in range(8)], 28),
        ([(0, 0), (1, 2)], 0),
    ])
    def test_count_conflicts(self, positions, conflicts):
        assert EightQueensState.from_positions(positions).count_conflicts() == conflicts

    def test_successors_fill_first_empty_row(self):
        state = EightQueensState.from_positions([(1, 3)])
        for t in state.successors():
            assert t.child.queens[0] is not None
            assert t.child.count_conflicts() == 0

    def test_toggle(self):
        state = EightQueensState().toggle(2, 5)
        assert state.queens[2] == 5
        state = state.toggle(2, 6)
        assert state.queens[2] == 6
        state = state.toggle(2, 6)
        assert state.queens[2] is None

    def test_duplicate_row_rejected(self):
        with pytest.raises(ValueError):
            EightQueensState.from_positions([(0, 1), (0, 2)])
        with pytest.raises(ValueError):
            EightQueensState(queens=(8,) + (None,) * 7)

    def test_ninety_two_solutions(self):
        assert len(all_solutions()) == 92

    def test_random_partial_is_solvable(self):
        rng = random.Random(2)
        for _ in range(5):
            state = EightQueensState.random_partial(rng)
            assert 1 <= state.placed <= 4
            assert state.count_conflicts() == 0
            assert search(state).is_solved

    def test_heuristic_admissible(self):
        assert_admissible(monotone_distances(EightQueensState()))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
