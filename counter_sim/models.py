"""
Data model for the service counter: customers, windows and run parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import config


class CustomerClass(str, Enum):
    """Customer category; each class has its own wait queue."""
    NORMAL = "normal"
    PRIORITY = "priority"


@dataclass
class Customer:
    """A customer visiting the counter.

    The simulation fills in start_time, waiting_time, window_id and
    finish_time, each exactly once.
    """
    customer_id: int
    customer_class: CustomerClass
    arrival_time: float
    service_time: float
    vip_level: int = 0  # informational only
    start_time: Optional[float] = None
    finish_time: Optional[float] = None
    waiting_time: Optional[float] = None
    window_id: int = -1

    @property
    def is_priority(self) -> bool:
        return self.customer_class == CustomerClass.PRIORITY

    @property
    def is_finished(self) -> bool:
        return self.finish_time is not None


@dataclass
class Window:
    """A service window. Closing is logical; counters keep accumulating."""
    window_id: int
    is_open: bool = False
    is_busy: bool = False
    current_customer: Optional[Customer] = None
    busy_start: float = 0.0
    total_busy_time: float = 0.0
    total_idle_time: float = 0.0
    served_count: int = 0
    opened_at: Optional[float] = None
    total_open_time: float = 0.0
    ever_opened: bool = False

    @property
    def is_idle(self) -> bool:
        return self.is_open and not self.is_busy

    @property
    def expected_finish(self) -> Optional[float]:
        """Time the current service completes, or None when not busy."""
        if not self.is_busy or self.current_customer is None:
            return None
        return self.busy_start + self.current_customer.service_time


@dataclass
class SimulationParameters:
    """Window bounds, scaling thresholds, dispatch ratio and run length."""
    initial_windows: int = config.INITIAL_WINDOWS
    max_windows: int = config.MAX_OPEN_WINDOWS
    min_windows: int = config.MIN_OPEN_WINDOWS
    open_threshold: int = config.OPEN_THRESHOLD
    close_threshold: int = config.CLOSE_THRESHOLD
    priority_ratio: float = config.PRIORITY_RATIO
    simulation_time: float = config.SIMULATION_TIME
    customer_count: int = config.CUSTOMER_COUNT

    @classmethod
    def demo(cls) -> "SimulationParameters":
        """Parameters used by the demo run."""
        return cls(
            initial_windows=config.DEMO_INITIAL_WINDOWS,
            max_windows=config.DEMO_MAX_WINDOWS,
            min_windows=config.DEMO_MIN_WINDOWS,
            open_threshold=config.DEMO_OPEN_THRESHOLD,
            close_threshold=config.DEMO_CLOSE_THRESHOLD,
            priority_ratio=config.DEMO_PRIORITY_RATIO,
            simulation_time=config.DEMO_SIMULATION_TIME,
            customer_count=config.DEMO_CUSTOMER_COUNT,
        )

    def validate(self, capacity: int = config.MAX_WINDOWS):
        """Check the parameter bounds before a run.

        The engine trusts its parameters, so callers that collect them
        from users should validate here first.

        Args:
            capacity: Size of the window pool

        Raises:
            ValueError: If any bound is violated
        """
        if not 1 <= self.min_windows <= self.initial_windows:
            raise ValueError(
                f"min_windows must be in [1, initial_windows], got {self.min_windows}"
            )
        if not self.initial_windows <= self.max_windows <= capacity:
            raise ValueError(
                f"max_windows must be in [initial_windows, {capacity}], "
                f"got {self.max_windows}"
            )
        if not 0.0 <= self.priority_ratio <= 1.0:
            raise ValueError(
                f"priority_ratio must be in [0, 1], got {self.priority_ratio}"
            )
        if self.simulation_time <= 0:
            raise ValueError(
                f"simulation_time must be positive, got {self.simulation_time}"
            )
        if self.customer_count < 0:
            raise ValueError(
                f"customer_count must be non-negative, got {self.customer_count}"
            )
