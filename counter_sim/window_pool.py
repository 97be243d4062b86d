"""
Fixed-capacity pool of service windows.
"""

from typing import List, Optional
import config
from counter_sim.errors import CapacityExceeded
from counter_sim.models import SimulationParameters, Window


class WindowPool:
    """Service windows with open/closed and idle/busy states."""

    def __init__(
        self,
        params: SimulationParameters,
        capacity: int = config.MAX_WINDOWS,
    ):
        """Initialize the pool with the first `initial_windows` open.

        Args:
            params: Simulation parameters (window bounds)
            capacity: Number of windows in the pool

        Raises:
            CapacityExceeded: If max_windows does not fit in the pool
        """
        if params.max_windows > capacity:
            raise CapacityExceeded(
                f"max_windows={params.max_windows} exceeds pool capacity {capacity}"
            )

        self.capacity = capacity
        self.min_windows = params.min_windows
        self.max_windows = params.max_windows
        self.windows: List[Window] = [Window(window_id=i) for i in range(capacity)]

        for window in self.windows[:params.initial_windows]:
            window.is_open = True
            window.ever_opened = True
            window.opened_at = 0.0
        self.active_count = params.initial_windows

    def __getitem__(self, window_id: int) -> Window:
        return self.windows[window_id]

    def __iter__(self):
        return iter(self.windows)

    def open_window(self, window_id: int, at_time: float) -> bool:
        """Open a closed window if the active count is below max_windows.

        Returns:
            True if the window was opened, False for a no-op
        """
        if not 0 <= window_id < self.capacity:
            return False
        window = self.windows[window_id]
        if window.is_open or self.active_count >= self.max_windows:
            return False

        window.is_open = True
        window.ever_opened = True
        window.opened_at = at_time
        self.active_count += 1
        return True

    def close_window(self, window_id: int, at_time: float) -> bool:
        """Close an open idle window if the active count is above min_windows.

        Returns:
            True if the window was closed, False for a no-op
        """
        if not 0 <= window_id < self.capacity:
            return False
        window = self.windows[window_id]
        if not window.is_open or window.is_busy or self.active_count <= self.min_windows:
            return False

        window.is_open = False
        window.total_open_time += at_time - window.opened_at
        window.opened_at = None
        self.active_count -= 1
        return True

    def find_idle_window(self) -> Optional[Window]:
        """Lowest-id window that is open and idle, or None."""
        for window in self.windows:
            if window.is_idle:
                return window
        return None

    def busy_windows(self) -> List[Window]:
        return [w for w in self.windows if w.is_busy]

    def credit_idle_time(self, start: float, end: float):
        """Add [start, end] to the idle time of every open idle window."""
        span = end - start
        if span <= 0:
            return
        for window in self.windows:
            if window.is_idle:
                window.total_idle_time += span

    def close_books(self, at_time: float):
        """Settle open spans and in-progress busy intervals at run end.

        The customer being served stays unfinished; only the window's
        time accounting is brought up to `at_time`.
        """
        for window in self.windows:
            if window.is_busy:
                window.total_busy_time += at_time - window.busy_start
                window.busy_start = at_time
            if window.is_open:
                window.total_open_time += at_time - window.opened_at
                window.opened_at = at_time
