"""Discrete-event simulation of a multi-window service counter."""

from counter_sim.errors import (
    CapacityExceeded,
    EmptyQueue,
    InvalidWindowState,
    SimulationError,
)
from counter_sim.event_log import EventLog, SimEvent
from counter_sim.models import Customer, CustomerClass, SimulationParameters, Window
from counter_sim.simulation import Simulation, run_simulation
from counter_sim.statistics import Statistics, compute_statistics

__all__ = [
    "CapacityExceeded",
    "Customer",
    "CustomerClass",
    "EmptyQueue",
    "EventLog",
    "InvalidWindowState",
    "SimEvent",
    "SimulationError",
    "SimulationParameters",
    "Simulation",
    "Statistics",
    "Window",
    "compute_statistics",
    "run_simulation",
]
