"""
AI Puzzle Suite - Entry Point

Launches the control window, or solves one puzzle headlessly and prints
the solution.

Example:
    python main.py
    python main.py --solve missionaries_cannibals
    python main.py --solve eight_puzzle --shuffle --seed 7
"""

import sys
import logging
import argparse
import random
from typing import Optional

from PyQt5.QtWidgets import QApplication

from puzzle_suite.control_ui import ControlWindow
from puzzle_suite.puzzles import PuzzleId
from puzzle_suite.search import SearchContext, Solved
from puzzle_suite.session import AppState, create_session
from puzzle_suite.settings import load_settings, update_setting
from puzzle_suite.solver_worker import SolverWorker


logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("puzzle_suite.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    Main application controller.

    Manages the lifecycle of the window and the solver worker,
    connecting signals between them.
    """

    def __init__(self, max_expansions: Optional[int] = None):
        """
        Initialize the application.

        Args:
            max_expansions: Expansion ceiling (overrides saved setting)
        """
        self.settings = load_settings()
        self.max_expansions = max_expansions or self.settings.get("max_expansions")
        self.app_state = AppState()
        self.window: Optional[ControlWindow] = None
        self.worker: Optional[SolverWorker] = None

        self.app_state.select_puzzle(self.settings["last_puzzle"])

    def setup(self):
        """Set up the UI and connect signals."""
        self.window = ControlWindow(self.app_state)

        self.window.solve_requested.connect(self._on_solve)
        self.window.stop_requested.connect(self._on_stop)
        self.window.shutdown_requested.connect(self._on_shutdown)
        self.window.puzzle_changed.connect(self._on_puzzle_changed)

        logger.info(f"Application initialized, expansion limit: {self.max_expansions}")

    def _on_solve(self):
        """Handle Solve button click."""
        if self.worker and self.worker.isRunning():
            logger.warning("Worker already running")
            return

        start_state = self.app_state.session.begin_solve()
        self.worker = SolverWorker(start_state, max_expansions=self.max_expansions)
        self.worker.search_finished.connect(self._on_search_finished)
        self.worker.progress_changed.connect(self.window.set_progress)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.start()

        self.window.set_solving(True)

    def _on_search_finished(self, outcome):
        """Hand the worker's outcome to the session that requested it."""
        self.app_state.session.apply_outcome(outcome)
        self.worker = None
        self.window.set_solving(False)

    def _on_stop(self):
        """Handle Stop button click."""
        if not self.worker or not self.worker.isRunning():
            logger.warning("Worker not running")
            return

        logger.info("Stopping solver worker")
        self.worker.request_stop()
        self.worker.wait(2000)  # 2 second timeout

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        if self.worker and self.worker.isRunning():
            self._on_stop()
        self.app_state.request_quit()

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")
        self.worker = None
        self.app_state.session.status = f"Error: {error_msg}"
        self.window.set_solving(False)

    def _on_puzzle_changed(self, puzzle_id: str):
        """Remember the selected puzzle."""
        self.settings = update_setting("last_puzzle", puzzle_id)

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def run_headless(puzzle: str, shuffle: bool = False, max_expansions: Optional[int] = None,
                 seed: Optional[int] = None) -> int:
    """
    Solve one puzzle without a window and print the replay.

    Args:
        puzzle: Puzzle id (e.g. "eight_queens")
        shuffle: Start from a random board instead of the default one
        max_expansions: Expansion ceiling
        seed: Random seed for shuffling

    Returns:
        0 if solved, 1 otherwise
    """
    session = create_session(puzzle, rng=random.Random(seed))
    if shuffle:
        session.shuffle()

    print(f"Start:\n{session.state.render()}\n")
    outcome = session.solve(SearchContext(max_expansions=max_expansions))
    print(session.status)

    if isinstance(outcome, Solved):
        while session.advance_solution():
            print(f"\n{session.status}\n{session.state.render()}")
        print(f"\nCost: {outcome.cost}")

    stats = outcome.stats
    print(f"Expanded: {stats.expanded}  Visited: {stats.visited}  "
          f"Time: {stats.computation_time_ms:.1f}ms")
    return 0 if outcome.is_solved else 1


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AI Puzzle Suite - A* search over classic puzzles"
    )
    parser.add_argument(
        "--solve", "-s",
        choices=[p.value for p in PuzzleId],
        help="Solve a puzzle headlessly and print the solution"
    )
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Start the headless solve from a random board"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --shuffle"
    )
    parser.add_argument(
        "--max-expansions", "-m",
        type=int,
        default=None,
        help="Stop the search after this many expansions"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main():
    """Initialize and run the AI Puzzle Suite."""
    args = parse_args()
    setup_logging(args.debug or load_settings().get("debug_enabled", False))

    if args.solve:
        sys.exit(run_headless(args.solve, args.shuffle, args.max_expansions, args.seed))

    app = QApplication(sys.argv)

    application = Application(max_expansions=args.max_expansions)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
