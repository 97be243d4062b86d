"""
Side-by-side comparison of three counter layouts on identical customers.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple
import pandas as pd
import config
from counter_sim.generator import generate_customers
from counter_sim.models import CustomerClass, SimulationParameters
from counter_sim.simulation import Simulation


def comparison_models(params: SimulationParameters) -> List[Tuple[str, SimulationParameters]]:
    """The three layouts compared, as (name, parameters) pairs.

    The first two pin the counter to one window: without and with
    priority dispatch. The third is the caller's own configuration.
    """
    single = replace(
        params,
        initial_windows=1,
        max_windows=1,
        min_windows=1,
        priority_ratio=0.0,
    )
    single_priority = replace(
        single,
        priority_ratio=config.DEMO_PRIORITY_RATIO,
    )
    return [
        ("single_window", single),
        ("single_window_priority", single_priority),
        ("multi_window", params),
    ]


def compare_models(
    params: SimulationParameters,
    count: int = config.COMPARISON_CUSTOMER_COUNT,
    random_seed: int = config.COMPARISON_SEED,
    dispatch_seed: Optional[int] = None,
) -> pd.DataFrame:
    """Run every layout on the same generated customers.

    Args:
        params: Parameters for the multi-window layout
        count: Customers per run
        random_seed: Seed for customer generation, shared by all runs
        dispatch_seed: Seed for dispatch draws

    Returns:
        DataFrame with one row per layout
    """
    rows: List[Dict] = []
    for name, model_params in comparison_models(params):
        customers = generate_customers(count, random_seed=random_seed)
        sim = Simulation(customers, model_params, random_seed=dispatch_seed).run()
        stats = sim.compute_statistics()

        normal = stats.by_class[CustomerClass.NORMAL.value]
        priority = stats.by_class[CustomerClass.PRIORITY.value]
        rows.append({
            "model": name,
            "avg_wait_normal": normal.avg_wait_time,
            "avg_wait_priority": priority.avg_wait_time,
            "weighted_avg_wait": stats.weighted_avg_wait,
            "total_served": stats.total_served,
            "throughput": stats.throughput,
        })

    return pd.DataFrame(rows)
