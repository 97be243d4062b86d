"""
Queue-length driven window scaling.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from counter_sim.window_pool import WindowPool

logger = logging.getLogger(__name__)

OPEN = "open"
CLOSE = "close"


@dataclass
class ScalingAction:
    """A window toggled by one adjustment step."""
    action: str  # OPEN or CLOSE
    window_id: int


class WindowScaler:
    """Single-step hysteresis: toggles at most one window per call.

    Thresholds are not checked against each other; keeping
    open_threshold above close_threshold is up to whoever builds the
    parameters.
    """

    def __init__(self, pool: WindowPool, open_threshold: int, close_threshold: int):
        self.pool = pool
        self.open_threshold = open_threshold
        self.close_threshold = close_threshold

    def adjust(self, total_queue_length: int, at_time: float) -> Optional[ScalingAction]:
        """Open or close one window based on the combined queue length.

        Only ids below max_windows are considered. The first candidate
        (lowest id) is tried; if the pool refuses it, nothing changes.

        Args:
            total_queue_length: Customers waiting across all queues
            at_time: Current simulation time

        Returns:
            The action taken, or None
        """
        pool = self.pool
        candidates = pool.windows[:pool.max_windows]

        if total_queue_length > self.open_threshold:
            for window in candidates:
                if not window.is_open:
                    if pool.open_window(window.window_id, at_time):
                        logger.debug(
                            "t=%.2f queue=%d: opened window %d",
                            at_time, total_queue_length, window.window_id,
                        )
                        return ScalingAction(OPEN, window.window_id)
                    break

        elif total_queue_length < self.close_threshold:
            for window in candidates:
                if window.is_idle:
                    if pool.close_window(window.window_id, at_time):
                        logger.debug(
                            "t=%.2f queue=%d: closed window %d",
                            at_time, total_queue_length, window.window_id,
                        )
                        return ScalingAction(CLOSE, window.window_id)
                    break

        return None
