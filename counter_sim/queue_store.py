"""
Per-class FIFO queues of waiting customers.
"""

from collections import deque
from typing import Deque, Dict
from counter_sim.errors import EmptyQueue
from counter_sim.models import Customer, CustomerClass


class QueueStore:
    """One FIFO queue per customer class."""

    def __init__(self):
        self.queues: Dict[CustomerClass, Deque[Customer]] = {
            customer_class: deque() for customer_class in CustomerClass
        }

    def enqueue(self, customer_class: CustomerClass, customer: Customer):
        """Append a customer to the tail of its class queue."""
        self.queues[customer_class].append(customer)

    def dequeue_front(self, customer_class: CustomerClass) -> Customer:
        """Remove and return the head of a class queue.

        Raises:
            EmptyQueue: If the queue has no customers
        """
        queue = self.queues[customer_class]
        if not queue:
            raise EmptyQueue(f"{customer_class.value} queue is empty")
        return queue.popleft()

    def peek(self, customer_class: CustomerClass) -> Customer:
        """Return the head of a class queue without removing it.

        Raises:
            EmptyQueue: If the queue has no customers
        """
        queue = self.queues[customer_class]
        if not queue:
            raise EmptyQueue(f"{customer_class.value} queue is empty")
        return queue[0]

    def size(self, customer_class: CustomerClass) -> int:
        return len(self.queues[customer_class])

    def is_empty(self, customer_class: CustomerClass) -> bool:
        return not self.queues[customer_class]

    def total_size(self) -> int:
        """Combined length of all class queues."""
        return sum(len(queue) for queue in self.queues.values())

    def snapshot(self) -> Dict[str, int]:
        """Queue lengths keyed by class name."""
        return {
            customer_class.value: len(queue)
            for customer_class, queue in self.queues.items()
        }

    def __len__(self) -> int:
        return self.total_size()
