"""
Search Context Module - Limits, cancellation and progress for a search run.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class SearchContext:
    """
    Shared context passed to search() holding optional stopping rules.

    Attributes:
        max_expansions: Deterministic ceiling on expanded nodes (None = unbounded)
        timeout_sec: Wall-clock budget in seconds (None = unbounded)
        cancel_flag: Threading event set by another thread to stop the search
        start_time: When the search started
        progress_callback: Optional callback receiving (expanded, frontier_size)
        progress_interval: Expansions between progress reports
    """
    max_expansions: Optional[int] = None
    timeout_sec: Optional[float] = None
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    start_time: float = field(default_factory=time.perf_counter)
    progress_callback: Optional[Callable[[int, int], None]] = None
    progress_interval: int = 10000

    def restart_clock(self) -> None:
        """Reset start_time to now."""
        self.start_time = time.perf_counter()

    def stop_reason(self, expanded: int) -> Optional[str]:
        """
        Check whether the search must stop before the next expansion.

        Args:
            expanded: Nodes expanded so far

        Returns:
            "limit", "cancelled" or "timeout", or None to keep going
        """
        if self.max_expansions is not None and expanded >= self.max_expansions:
            return "limit"
        if self.cancel_flag.is_set():
            return "cancelled"
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return "timeout"
        return None

    def cancel(self) -> None:
        """Request the running search to stop."""
        self.cancel_flag.set()

    def report_progress(self, expanded: int, frontier_size: int) -> None:
        if self.progress_callback and expanded % self.progress_interval == 0:
            self.progress_callback(expanded, frontier_size)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since the search started.

        Returns:
            Elapsed time in seconds
        """
        return time.perf_counter() - self.start_time
