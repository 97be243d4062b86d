"""
Customer data sources: a SimPy-driven random arrival stream and CSV input.
"""

import logging
from typing import List, Optional
import numpy as np
import pandas as pd
import simpy
import config
from counter_sim.models import Customer, CustomerClass

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["id", "type", "arrival_time", "service_time"]
DEFAULT_SERVICE_TIME = 1.0  # substituted for non-positive CSV service times


class CustomerGenerator:
    """Poisson arrivals with exponential, clamped service times."""

    def __init__(
        self,
        env: simpy.Environment,
        arrival_rate: float = config.ARRIVAL_RATE,
        service_rate: float = config.SERVICE_RATE,
        priority_share: float = config.PRIORITY_SHARE,
        min_service_time: float = config.MIN_SERVICE_TIME,
        max_service_time: float = config.MAX_SERVICE_TIME,
        random_seed: Optional[int] = None,
        start_id: int = 1,
    ):
        """Initialize generator.

        Args:
            env: SimPy environment driving the arrival clock
            arrival_rate: Poisson arrival rate (customers per time unit)
            service_rate: Exponential service rate
            priority_share: Fraction of priority customers
            min_service_time: Lower clamp on service time
            max_service_time: Upper clamp on service time
            random_seed: Random seed for reproducibility
            start_id: Id of the first generated customer
        """
        self.env = env
        self.arrival_rate = arrival_rate
        self.service_rate = service_rate
        self.priority_share = priority_share
        self.min_service_time = min_service_time
        self.max_service_time = max_service_time
        self.rng = np.random.default_rng(random_seed)

        self.next_id = start_id
        self.customers: List[Customer] = []

    def sample_service_time(self) -> float:
        service_time = self.rng.exponential(1.0 / self.service_rate)
        return float(np.clip(service_time, self.min_service_time, self.max_service_time))

    def make_customer(self) -> Customer:
        """Create a customer arriving now."""
        if self.rng.random() < self.priority_share:
            customer_class = CustomerClass.PRIORITY
            vip_level = int(self.rng.choice(config.VIP_LEVELS))
        else:
            customer_class = CustomerClass.NORMAL
            vip_level = 0

        customer = Customer(
            customer_id=self.next_id,
            customer_class=customer_class,
            arrival_time=float(self.env.now),
            service_time=self.sample_service_time(),
            vip_level=vip_level,
        )
        self.next_id += 1
        return customer

    def arrival_process(self, count: int):
        """SimPy process: emit `count` arrivals."""
        while len(self.customers) < count:
            interarrival = self.rng.exponential(1.0 / self.arrival_rate)
            yield self.env.timeout(interarrival)
            self.customers.append(self.make_customer())

    def run(self, count: int) -> List[Customer]:
        """Generate `count` customers and return them in arrival order."""
        self.env.process(self.arrival_process(count))
        self.env.run()
        return self.customers


def _cap_count(count: int, limit: int) -> int:
    if count > limit:
        logger.warning(
            "Requested %d customers exceeds the limit of %d; truncating", count, limit
        )
        return limit
    return count


def generate_customers(
    count: int,
    random_seed: Optional[int] = None,
    max_customers: int = config.MAX_CUSTOMERS,
    **kwargs,
) -> List[Customer]:
    """Generate a random customer list.

    Args:
        count: Number of customers (truncated to max_customers)
        random_seed: Random seed for reproducibility
        max_customers: Upper bound on the list length
        **kwargs: Passed to CustomerGenerator

    Returns:
        Customers in arrival order, ids starting at 1
    """
    count = _cap_count(max(count, 0), max_customers)
    generator = CustomerGenerator(simpy.Environment(), random_seed=random_seed, **kwargs)
    return generator.run(count)


def _parse_class(value) -> CustomerClass:
    if pd.isna(value):
        return CustomerClass.NORMAL
    text = str(value).strip().lower()
    if text == "priority" or pd.to_numeric(text, errors="coerce") == 1:
        return CustomerClass.PRIORITY
    return CustomerClass.NORMAL


def load_customers_csv(path: str, max_customers: int = config.MAX_CUSTOMERS) -> List[Customer]:
    """Load manually prepared customers from a CSV file.

    Expects columns id, type, arrival_time, service_time. Type 1 (or
    "priority") is a priority customer, anything else is normal.
    Non-positive service times are replaced by DEFAULT_SERVICE_TIME.

    Args:
        path: CSV file path
        max_customers: Rows beyond this are dropped

    Returns:
        Customers in file order

    Raises:
        ValueError: If a required column is missing
    """
    df = pd.read_csv(path, dtype={"type": str})
    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")

    rows = _cap_count(len(df), max_customers)
    customers = []
    for row in df.head(rows).itertuples(index=False):
        service_time = float(row.service_time)
        if service_time <= 0:
            service_time = DEFAULT_SERVICE_TIME
        customers.append(Customer(
            customer_id=int(row.id),
            customer_class=_parse_class(row.type),
            arrival_time=float(row.arrival_time),
            service_time=service_time,
        ))
    return customers
