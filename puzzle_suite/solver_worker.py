"""
Solver Worker Module for AI Puzzle Suite

Provides a background QThread worker that runs one A* search so the
window stays responsive. The outcome is handed back once via a Qt signal;
the worker shares nothing else with the UI apart from the cancel flag.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from puzzle_suite.search import SearchContext, SearchState, search


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for a single search.

    Signals:
        search_finished(object): Emitted with the Outcome (Solved or Exhausted)
        progress_changed(int, int): Emitted with (expanded, frontier size)
        error_occurred(str): Emitted when the search raises

    Example:
        worker = SolverWorker(session.begin_solve(), max_expansions=500000)
        worker.search_finished.connect(on_finished)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    search_finished = pyqtSignal(object)
    progress_changed = pyqtSignal(int, int)
    error_occurred = pyqtSignal(str)

    def __init__(self, start_state: SearchState, max_expansions: Optional[int] = None,
                 timeout_sec: Optional[float] = None):
        """
        Initialize the solver worker.

        Args:
            start_state: Immutable state to search from
            max_expansions: Expansion ceiling passed to the search context
            timeout_sec: Optional wall-clock budget
        """
        super().__init__()
        self.start_state = start_state
        self.context = SearchContext(
            max_expansions=max_expansions,
            timeout_sec=timeout_sec,
            progress_callback=self._on_progress,
        )

    def run(self):
        """
        Worker body. Called when thread starts.

        Runs the search and emits exactly one of search_finished or
        error_occurred.
        """
        logger.info(f"Solver worker started for {type(self.start_state).__name__}")
        try:
            outcome = search(self.start_state, self.context)
        except Exception as e:
            logger.exception("Error during search")
            self.error_occurred.emit(str(e))
            return
        logger.info("Solver worker finished")
        self.search_finished.emit(outcome)

    def _on_progress(self, expanded: int, frontier_size: int) -> None:
        self.progress_changed.emit(expanded, frontier_size)

    def request_stop(self):
        """
        Request the search to stop.

        The search returns Exhausted(reason="cancelled") at its next
        expansion. Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self.context.cancel()
