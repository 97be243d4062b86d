"""
Tests for customer generation and CSV loading.
"""

import numpy as np
import pytest
import simpy
import config
from counter_sim.generator import CustomerGenerator, generate_customers, load_customers_csv
from counter_sim.models import CustomerClass


def test_generator_reproducible():
    """Same seed, same customers."""
    a = generate_customers(50, random_seed=42)
    b = generate_customers(50, random_seed=42)
    assert [(c.arrival_time, c.service_time, c.customer_class) for c in a] == \
        [(c.arrival_time, c.service_time, c.customer_class) for c in b]


def test_generator_shape():
    """Ids start at 1, arrivals are ordered and service times clamped."""
    customers = generate_customers(200, random_seed=1)
    assert len(customers) == 200
    assert [c.customer_id for c in customers] == list(range(1, 201))

    arrivals = [c.arrival_time for c in customers]
    assert arrivals == sorted(arrivals)
    assert arrivals[0] > 0

    for c in customers:
        assert config.MIN_SERVICE_TIME <= c.service_time <= config.MAX_SERVICE_TIME
        if c.customer_class == CustomerClass.PRIORITY:
            assert c.vip_level in config.VIP_LEVELS
        else:
            assert c.vip_level == 0


def test_generator_rates():
    """Arrival rate and priority share roughly match the configuration."""
    customers = generate_customers(1000, random_seed=5)
    gaps = np.diff([0.0] + [c.arrival_time for c in customers])
    assert 1.0 / np.mean(gaps) == pytest.approx(config.ARRIVAL_RATE, rel=0.15)

    share = np.mean([c.is_priority for c in customers])
    assert share == pytest.approx(config.PRIORITY_SHARE, abs=0.05)


def test_generator_truncates():
    """Requests beyond the customer limit are truncated."""
    assert len(generate_customers(10, random_seed=0, max_customers=4)) == 4
    assert generate_customers(0, random_seed=0) == []


def test_generator_process_on_shared_env():
    """The arrival process runs on the given SimPy clock."""
    env = simpy.Environment()
    gen = CustomerGenerator(env, arrival_rate=1.0, random_seed=3, start_id=10)
    customers = gen.run(5)
    assert [c.customer_id for c in customers] == [10, 11, 12, 13, 14]
    assert env.now == pytest.approx(customers[-1].arrival_time)


def test_load_customers_csv(tmp_path):
    """Manual CSV input with type codes and invalid service times."""
    path = tmp_path / "customers.csv"
    path.write_text(
        "id,type,arrival_time,service_time\n"
        "1,1,0.0,3.5\n"
        "2,0,1.0,2.0\n"
        "3,7,2.0,-1\n"
    )
    customers = load_customers_csv(str(path))

    assert [c.customer_id for c in customers] == [1, 2, 3]
    assert customers[0].customer_class == CustomerClass.PRIORITY
    assert customers[1].customer_class == CustomerClass.NORMAL
    assert customers[2].customer_class == CustomerClass.NORMAL
    assert customers[2].service_time == 1.0
    assert all(c.window_id == -1 and c.start_time is None for c in customers)

    assert len(load_customers_csv(str(path), max_customers=2)) == 2


def test_load_customers_csv_blank_and_float_types(tmp_path):
    """A blank type cell leaves the other rows' codes intact."""
    path = tmp_path / "customers.csv"
    path.write_text(
        "id,type,arrival_time,service_time\n"
        "1,1,0.0,3.5\n"
        "2,,1.0,2.0\n"
        "3,1.0,2.0,1.0\n"
        "4,Priority,3.0,1.0\n"
    )
    customers = load_customers_csv(str(path))

    assert [c.customer_class for c in customers] == [
        CustomerClass.PRIORITY,
        CustomerClass.NORMAL,
        CustomerClass.PRIORITY,
        CustomerClass.PRIORITY,
    ]


def test_load_customers_csv_missing_column(tmp_path):
    """CSV files without the required columns are rejected."""
    path = tmp_path / "bad.csv"
    path.write_text("id,arrival_time\n1,0.0\n")
    with pytest.raises(ValueError):
        load_customers_csv(str(path))
