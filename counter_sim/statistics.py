"""
Statistics computed from the final customer and window records.
"""

from dataclasses import dataclass, asdict, field, fields
from typing import Dict, Iterable, List
import numpy as np
import pandas as pd
import config
from counter_sim.models import Customer, CustomerClass, Window


@dataclass
class ClassStats:
    """Waiting-time summary for one customer class."""
    served_count: int = 0
    total_wait_time: float = 0.0
    avg_wait_time: float = 0.0
    max_wait_time: float = 0.0


@dataclass
class WindowStats:
    """Utilization summary for one window that was ever open."""
    window_id: int
    utilization: float  # percent
    idle_rate: float  # percent
    busy_time: float
    idle_time: float
    served_count: int
    is_open: bool


@dataclass
class Statistics:
    """Snapshot of a finished run."""
    duration: float
    total_served: int
    throughput: float  # customers per reporting unit
    by_class: Dict[str, ClassStats] = field(default_factory=dict)
    windows: List[WindowStats] = field(default_factory=list)

    @property
    def weighted_avg_wait(self) -> float:
        """Average wait over all served customers."""
        if self.total_served == 0:
            return 0.0
        total = sum(s.total_wait_time for s in self.by_class.values())
        return total / self.total_served

    def to_dict(self) -> Dict:
        result = asdict(self)
        result["weighted_avg_wait"] = self.weighted_avg_wait
        return result

    def class_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"customer_class": name, **asdict(s)} for name, s in self.by_class.items()]
        )

    def window_dataframe(self) -> pd.DataFrame:
        columns = [f.name for f in fields(WindowStats)]
        if not self.windows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([asdict(w) for w in self.windows])


def compute_class_stats(customers: Iterable[Customer]) -> Dict[str, ClassStats]:
    """Per-class waiting stats over customers that finished service.

    Args:
        customers: All customer records of the run

    Returns:
        Dict keyed by class name
    """
    waits: Dict[CustomerClass, List[float]] = {c: [] for c in CustomerClass}
    for customer in customers:
        if customer.is_finished:
            waits[customer.customer_class].append(customer.waiting_time)

    result = {}
    for customer_class, values in waits.items():
        if values:
            result[customer_class.value] = ClassStats(
                served_count=len(values),
                total_wait_time=float(np.sum(values)),
                avg_wait_time=float(np.mean(values)),
                max_wait_time=float(np.max(values)),
            )
        else:
            result[customer_class.value] = ClassStats()
    return result


def compute_window_stats(windows: Iterable[Window]) -> List[WindowStats]:
    """Utilization and idle rate for every window that was ever open.

    A window with no tracked time reports 0% utilization and 100% idle.
    """
    result = []
    for window in windows:
        if not window.ever_opened:
            continue

        tracked = window.total_busy_time + window.total_idle_time
        if tracked > 0:
            utilization = window.total_busy_time / tracked * 100
        else:
            utilization = 0.0

        result.append(WindowStats(
            window_id=window.window_id,
            utilization=utilization,
            idle_rate=100 - utilization,
            busy_time=window.total_busy_time,
            idle_time=window.total_idle_time,
            served_count=window.served_count,
            is_open=window.is_open,
        ))
    return result


def compute_statistics(
    customers: Iterable[Customer],
    windows: Iterable[Window],
    current_time: float,
    throughput_scale: float = config.THROUGHPUT_SCALE,
) -> Statistics:
    """Compute the full statistics snapshot. Does not mutate its inputs.

    Args:
        customers: Final customer records
        windows: Final window records
        current_time: Clock value at the end of the run
        throughput_scale: Factor from served/time-unit to the reporting unit

    Returns:
        Statistics
    """
    by_class = compute_class_stats(customers)
    total_served = sum(s.served_count for s in by_class.values())
    throughput = (
        total_served / current_time * throughput_scale
        if current_time > 0 else 0.0
    )

    return Statistics(
        duration=current_time,
        total_served=total_served,
        throughput=throughput,
        by_class=by_class,
        windows=compute_window_stats(windows),
    )


def customer_dataframe(customers: Iterable[Customer]) -> pd.DataFrame:
    """Customer records as a DataFrame, one row per customer."""
    rows = []
    for c in customers:
        rows.append({
            "customer_id": c.customer_id,
            "customer_class": c.customer_class.value,
            "vip_level": c.vip_level,
            "arrival_time": c.arrival_time,
            "service_time": c.service_time,
            "start_time": c.start_time,
            "finish_time": c.finish_time,
            "waiting_time": c.waiting_time,
            "window_id": c.window_id,
        })
    return pd.DataFrame(rows)
