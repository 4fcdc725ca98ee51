"""
Tests for the background solver worker.

run() is called directly so the signals fire on the test thread.

Usage:
    pytest tests/test_solver_worker.py
"""

import sys
from pathlib import Path

import pytest

QtCore = pytest.importorskip("PyQt5.QtCore")

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_suite.puzzles import EightPuzzleState, MissionariesCannibalsState
from puzzle_suite.search import Exhausted, Solved
from puzzle_suite.solver_worker import SolverWorker


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


class BrokenState(MissionariesCannibalsState):
    """State whose heuristic blows up, to exercise the error path."""

    def heuristic(self) -> int:
        raise RuntimeError("heuristic failed")


def run_worker(worker):
    finished, errors = [], []
    worker.search_finished.connect(finished.append)
    worker.error_occurred.connect(errors.append)
    worker.run()
    return finished, errors


def test_worker_emits_outcome(qt_app):
    finished, errors = run_worker(SolverWorker(MissionariesCannibalsState()))

    assert errors == []
    assert len(finished) == 1
    assert isinstance(finished[0], Solved)
    assert finished[0].cost == 11


def test_worker_honours_expansion_limit(qt_app):
    start = EightPuzzleState.from_list([8, 6, 7, 2, 5, 4, 3, 0, 1])
    finished, _ = run_worker(SolverWorker(start, max_expansions=50))

    assert isinstance(finished[0], Exhausted)
    assert finished[0].reason == "limit"
    assert finished[0].stats.expanded == 50


def test_stop_request_cancels_search(qt_app):
    worker = SolverWorker(MissionariesCannibalsState())
    worker.request_stop()
    finished, _ = run_worker(worker)

    assert finished[0].reason == "cancelled"


def test_worker_reports_progress(qt_app):
    worker = SolverWorker(MissionariesCannibalsState())
    worker.context.progress_interval = 1
    progress = []
    worker.progress_changed.connect(lambda expanded, size: progress.append(expanded))
    finished, _ = run_worker(worker)

    assert progress == list(range(1, finished[0].stats.expanded + 1))


def test_worker_reports_errors(qt_app):
    finished, errors = run_worker(SolverWorker(BrokenState()))

    assert finished == []
    assert errors == ["heuristic failed"]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
