"""
Structured event records emitted by the simulation.
Kept in memory; exporting to CSV is an explicit call.
"""

import csv
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Callable, List, Optional
import pandas as pd
import config

WINDOW_OPEN = "window_open"
WINDOW_CLOSE = "window_close"
ARRIVAL = "arrival"
SERVICE_START = "service_start"
SERVICE_END = "service_end"


@dataclass
class SimEvent:
    """A single state transition in the counter."""
    timestamp: float
    event_type: str
    customer_id: Optional[int] = None
    customer_class: Optional[str] = None
    window_id: Optional[int] = None
    waiting_time: Optional[float] = None
    service_time: Optional[float] = None
    queue_length: int = 0
    active_windows: int = 0


class EventLog:
    """In-memory event log with subscriber callbacks."""

    def __init__(self, run_id: str = "default"):
        """Initialize event log.

        Args:
            run_id: Identifier for this run (used in export filenames)
        """
        self.run_id = run_id
        self.events: List[SimEvent] = []
        self._subscribers: List[Callable[[SimEvent], None]] = []

    def subscribe(self, callback: Callable[[SimEvent], None]):
        """Call `callback` with every event logged from now on."""
        self._subscribers.append(callback)

    def log_event(self, event: SimEvent):
        """Record an event and notify subscribers.

        Args:
            event: SimEvent to log
        """
        self.events.append(event)
        for callback in self._subscribers:
            callback(event)

    def get_dataframe(self) -> pd.DataFrame:
        """Return in-memory events as pandas DataFrame."""
        if not self.events:
            return pd.DataFrame(columns=config.EVENT_LOG_COLUMNS)

        return pd.DataFrame([asdict(e) for e in self.events])

    def get_events_since(self, timestamp: float) -> List[SimEvent]:
        """Get all events after a given timestamp."""
        return [e for e in self.events if e.timestamp > timestamp]

    def get_by_type(self, event_type: str) -> List[SimEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def get_arrivals(self) -> List[SimEvent]:
        """Get all arrival events."""
        return self.get_by_type(ARRIVAL)

    def get_completions(self) -> List[SimEvent]:
        """Get all service completion events."""
        return self.get_by_type(SERVICE_END)

    def save_csv(self, output_dir: str = config.LOG_DIR) -> str:
        """Write all events to `events_<run_id>.csv` under output_dir.

        Returns:
            Path to the CSV file
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        csv_path = out / f"events_{self.run_id}.csv"

        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=config.EVENT_LOG_COLUMNS)
            writer.writeheader()
            for event in self.events:
                writer.writerow(asdict(event))

        return str(csv_path)


def format_event(event: SimEvent) -> str:
    """Render an event as a human-readable log line."""
    prefix = f"t={event.timestamp:.2f}:"
    if event.event_type == WINDOW_OPEN:
        return f"{prefix} window {event.window_id} opened ({event.active_windows} active)"
    if event.event_type == WINDOW_CLOSE:
        return f"{prefix} window {event.window_id} closed ({event.active_windows} active)"
    if event.event_type == ARRIVAL:
        return (
            f"{prefix} {event.customer_class} customer {event.customer_id} arrived, "
            f"estimated service {event.service_time:.2f}"
        )
    if event.event_type == SERVICE_START:
        return (
            f"{prefix} {event.customer_class} customer {event.customer_id} started at "
            f"window {event.window_id}, waited {event.waiting_time:.2f}"
        )
    if event.event_type == SERVICE_END:
        return (
            f"{prefix} customer {event.customer_id} finished at window "
            f"{event.window_id}, service {event.service_time:.2f}"
        )
    return f"{prefix} {event.event_type}"
