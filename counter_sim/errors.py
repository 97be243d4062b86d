"""
Exceptions raised by the simulation core.

All of them signal broken invariants rather than expected runtime
conditions: the event loop only dequeues, assigns and completes when the
preconditions hold.
"""


class SimulationError(Exception):
    """Base class for simulation invariant violations."""


class EmptyQueue(SimulationError):
    """Dequeue or peek on a queue with no customers."""


class InvalidWindowState(SimulationError):
    """Assign to a window that is not open and idle, or complete on one that is not busy."""


class CapacityExceeded(SimulationError):
    """More customers or windows than the fixed capacity allows."""
