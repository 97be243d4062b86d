"""
Dispatcher: picks the next waiting customer and moves customers on and
off windows.
"""

from typing import Optional
import numpy as np
from counter_sim.errors import InvalidWindowState
from counter_sim.models import Customer, CustomerClass, Window
from counter_sim.queue_store import QueueStore


class Dispatcher:
    """Probabilistic priority dispatch over the two class queues."""

    def __init__(
        self,
        queues: QueueStore,
        priority_ratio: float,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize dispatcher.

        Args:
            queues: Queue store to draw customers from
            priority_ratio: Probability of serving the priority queue
                when both queues have customers
            rng: Random generator for the contention draw
        """
        self.queues = queues
        self.priority_ratio = priority_ratio
        self.rng = rng if rng is not None else np.random.default_rng()

    def select_next_customer(self) -> Optional[Customer]:
        """Dequeue the next customer to serve.

        Under contention a uniform draw below priority_ratio picks the
        priority queue, otherwise the normal queue. With a single
        non-empty queue that queue is used.

        Returns:
            The dequeued customer, or None when both queues are empty
        """
        has_priority = not self.queues.is_empty(CustomerClass.PRIORITY)
        has_normal = not self.queues.is_empty(CustomerClass.NORMAL)

        if has_priority and has_normal:
            if self.rng.random() < self.priority_ratio:
                return self.queues.dequeue_front(CustomerClass.PRIORITY)
            return self.queues.dequeue_front(CustomerClass.NORMAL)
        if has_priority:
            return self.queues.dequeue_front(CustomerClass.PRIORITY)
        if has_normal:
            return self.queues.dequeue_front(CustomerClass.NORMAL)
        return None

    def assign(self, window: Window, customer: Customer, at_time: float):
        """Start serving an already-dequeued customer at an idle window.

        Raises:
            InvalidWindowState: If the window is closed or busy
        """
        if not window.is_open or window.is_busy:
            raise InvalidWindowState(
                f"window {window.window_id} is not open and idle "
                f"(open={window.is_open}, busy={window.is_busy})"
            )

        window.is_busy = True
        window.current_customer = customer
        window.busy_start = at_time
        window.served_count += 1

        customer.start_time = at_time
        customer.waiting_time = at_time - customer.arrival_time
        customer.window_id = window.window_id

    def complete_service(self, window: Window, at_time: float) -> Optional[Customer]:
        """Finish the current service at a window.

        Returns:
            The completed customer, or None if the window was not busy
        """
        if not window.is_busy:
            return None

        customer = window.current_customer
        window.total_busy_time += at_time - window.busy_start
        window.is_busy = False
        window.current_customer = None

        customer.finish_time = at_time
        return customer
