"""
Shared fixtures for the counter simulation tests.
"""

from pathlib import Path
import sys

# Ensure root directory is in path for config import
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from counter_sim.models import Customer, CustomerClass, SimulationParameters


def _make_customer(customer_id, arrival_time, service_time, priority=False):
    return Customer(
        customer_id=customer_id,
        customer_class=CustomerClass.PRIORITY if priority else CustomerClass.NORMAL,
        arrival_time=float(arrival_time),
        service_time=float(service_time),
    )


@pytest.fixture
def make_customer():
    """Factory for customers: make_customer(id, arrival, service, priority=False)."""
    return _make_customer


@pytest.fixture
def single_window_params():
    """One fixed window that never scales."""
    return SimulationParameters(
        initial_windows=1,
        max_windows=1,
        min_windows=1,
        open_threshold=100,
        close_threshold=0,
        priority_ratio=0.0,
        simulation_time=100.0,
    )
