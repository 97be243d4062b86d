"""
Discrete-event simulation of a multi-window service counter.

A single clock advances from one event to the next: either the earliest
pending arrival or the earliest service completion among busy windows.
Each event is applied, a waiting customer is dispatched if a window is
free, and the scaler gets one chance to open or close a window.
"""

import logging
from typing import Dict, List, Optional, Sequence
import numpy as np
import config
from counter_sim.dispatcher import Dispatcher
from counter_sim.errors import CapacityExceeded, InvalidWindowState
from counter_sim.event_log import (
    ARRIVAL,
    SERVICE_END,
    SERVICE_START,
    WINDOW_CLOSE,
    WINDOW_OPEN,
    EventLog,
    SimEvent,
)
from counter_sim.models import Customer, SimulationParameters, Window
from counter_sim.queue_store import QueueStore
from counter_sim.scaler import OPEN, ScalingAction, WindowScaler
from counter_sim.statistics import Statistics, compute_statistics
from counter_sim.window_pool import WindowPool

logger = logging.getLogger(__name__)

RUNNING = "running"
DRAINED = "drained"
FINISHED = "finished"


class Simulation:
    """Owns the clock, queues, window pool and event log for one run."""

    def __init__(
        self,
        customers: Sequence[Customer],
        params: SimulationParameters,
        event_log: Optional[EventLog] = None,
        rng: Optional[np.random.Generator] = None,
        random_seed: Optional[int] = None,
        capacity: int = config.MAX_WINDOWS,
        max_customers: int = config.MAX_CUSTOMERS,
    ):
        """Initialize a run.

        Args:
            customers: Customers to simulate, in any order
            params: Validated simulation parameters
            event_log: Sink for event records (a fresh one if None)
            rng: Random generator for dispatch draws
            random_seed: Seed used when rng is not given
            capacity: Window pool size
            max_customers: Largest customer list accepted

        Raises:
            CapacityExceeded: If there are too many customers or windows
        """
        if len(customers) > max_customers:
            raise CapacityExceeded(
                f"{len(customers)} customers exceeds capacity {max_customers}"
            )

        self.params = params
        self.customers: List[Customer] = list(customers)
        self.event_log = event_log if event_log is not None else EventLog()
        if rng is None:
            rng = np.random.default_rng(random_seed)

        self.queues = QueueStore()
        self.pool = WindowPool(params, capacity=capacity)
        self.dispatcher = Dispatcher(self.queues, params.priority_ratio, rng=rng)
        self.scaler = WindowScaler(
            self.pool, params.open_threshold, params.close_threshold
        )

        self.current_time = 0.0
        self.state = RUNNING
        # True when the run ended with time left but no events pending
        self.drained = False

        # Stable sort keeps input order among simultaneous arrivals
        self._arrivals = sorted(self.customers, key=lambda c: c.arrival_time)
        self._next_arrival = 0

    @property
    def windows(self) -> List[Window]:
        return self.pool.windows

    @property
    def active_windows(self) -> int:
        return self.pool.active_count

    def finished_customers(self) -> List[Customer]:
        return [c for c in self.customers if c.is_finished]

    def _emit(self, event_type: str, **fields):
        self.event_log.log_event(SimEvent(
            timestamp=self.current_time,
            event_type=event_type,
            queue_length=self.queues.total_size(),
            active_windows=self.pool.active_count,
            **fields,
        ))

    def _peek_arrival(self) -> Optional[Customer]:
        if self._next_arrival < len(self._arrivals):
            return self._arrivals[self._next_arrival]
        return None

    def _peek_completion(self) -> Optional[Window]:
        """Busy window finishing soonest; lowest id on ties."""
        best = None
        for window in self.pool.busy_windows():
            if best is None or window.expected_finish < best.expected_finish:
                best = window
        return best

    def _next_event(self):
        """Pick the next event no later than simulation_time.

        Returns:
            (time, kind, subject) or None when nothing remains. Completions
            win exact ties with arrivals so the freed window can serve.
        """
        end = self.params.simulation_time
        arrival = self._peek_arrival()
        completion = self._peek_completion()

        candidates = []
        if completion is not None and completion.expected_finish <= end:
            candidates.append((completion.expected_finish, 0, SERVICE_END, completion))
        if arrival is not None and arrival.arrival_time <= end:
            candidates.append((arrival.arrival_time, 1, ARRIVAL, arrival))
        if not candidates:
            return None

        event_time, _, kind, subject = min(candidates, key=lambda c: (c[0], c[1]))
        return event_time, kind, subject

    def step(self) -> bool:
        """Apply the next event.

        Returns:
            False once the run is finished
        """
        if self.state == FINISHED:
            return False

        nxt = self._next_event()
        if nxt is None:
            end = max(self.current_time, self.params.simulation_time)
            self.drained = self.current_time < end
            self.state = DRAINED
            self.pool.credit_idle_time(self.current_time, end)
            logger.debug("t=%.2f: drained, advancing to %.2f", self.current_time, end)
            self.current_time = end
            self._finish()
            return False

        event_time, kind, subject = nxt
        self.pool.credit_idle_time(self.current_time, event_time)
        self.current_time = event_time

        if kind == ARRIVAL:
            self._next_arrival += 1
            self.handle_arrival(subject)
        else:
            self.handle_completion(subject)
        return True

    def run(self) -> "Simulation":
        """Run until no event remains at or before simulation_time."""
        logger.debug(
            "Starting run: %d customers, %d windows open, until t=%.2f",
            len(self.customers), self.pool.active_count, self.params.simulation_time,
        )
        while self.step():
            pass
        return self

    def _finish(self):
        self.pool.close_books(self.current_time)
        self.state = FINISHED
        logger.debug(
            "Finished at t=%.2f: %d served, %d still waiting",
            self.current_time, len(self.finished_customers()), self.queues.total_size(),
        )

    def handle_arrival(self, customer: Customer):
        """Queue an arriving customer, serve if a window is idle, then scale."""
        self.queues.enqueue(customer.customer_class, customer)
        self._emit(
            ARRIVAL,
            customer_id=customer.customer_id,
            customer_class=customer.customer_class.value,
            service_time=customer.service_time,
        )

        window = self.pool.find_idle_window()
        if window is not None:
            self._dispatch_to(window)

        self._adjust()

    def handle_completion(self, window: Window):
        """Finish the window's service, refill it from the queues, then scale."""
        started = window.busy_start
        customer = self.dispatcher.complete_service(window, self.current_time)
        if customer is None:
            raise InvalidWindowState(
                f"completion scheduled on idle window {window.window_id}"
            )
        self._emit(
            SERVICE_END,
            customer_id=customer.customer_id,
            customer_class=customer.customer_class.value,
            window_id=window.window_id,
            service_time=self.current_time - started,
        )

        self._dispatch_to(window)
        self._adjust()

    def _dispatch_to(self, window: Window):
        customer = self.dispatcher.select_next_customer()
        if customer is None:
            return
        self.dispatcher.assign(window, customer, self.current_time)
        self._emit(
            SERVICE_START,
            customer_id=customer.customer_id,
            customer_class=customer.customer_class.value,
            window_id=window.window_id,
            waiting_time=customer.waiting_time,
        )

    def _adjust(self) -> Optional[ScalingAction]:
        action = self.scaler.adjust(self.queues.total_size(), self.current_time)
        if action is not None:
            event_type = WINDOW_OPEN if action.action == OPEN else WINDOW_CLOSE
            self._emit(event_type, window_id=action.window_id)
        return action

    def queue_snapshot(self) -> Dict[str, int]:
        """Customers still waiting, by class."""
        return self.queues.snapshot()

    def compute_statistics(
        self, throughput_scale: float = config.THROUGHPUT_SCALE
    ) -> Statistics:
        return compute_statistics(
            self.customers, self.windows, self.current_time, throughput_scale
        )


def run_simulation(
    customers: Sequence[Customer],
    params: SimulationParameters,
    event_log: Optional[EventLog] = None,
    random_seed: Optional[int] = None,
) -> Simulation:
    """Build and run a simulation.

    Args:
        customers: Customers to simulate
        params: Validated simulation parameters
        event_log: Optional event sink
        random_seed: Seed for dispatch draws

    Returns:
        The finished Simulation
    """
    return Simulation(
        customers, params, event_log=event_log, random_seed=random_seed
    ).run()
