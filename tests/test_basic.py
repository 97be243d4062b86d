"""
Basic tests for configuration, parameters and the event log.
"""

import csv
import pytest
import config
from counter_sim.event_log import (
    ARRIVAL,
    SERVICE_END,
    SERVICE_START,
    WINDOW_OPEN,
    EventLog,
    SimEvent,
    format_event,
)
from counter_sim.models import SimulationParameters


def test_event_log_creation(tmp_path):
    """Test event log in-memory storage and CSV export."""
    event_log = EventLog(run_id="test")

    event_log.log_event(SimEvent(timestamp=0.0, event_type=ARRIVAL, customer_id=1,
                                 customer_class="normal", service_time=2.0))
    event_log.log_event(SimEvent(timestamp=0.0, event_type=SERVICE_START, customer_id=1,
                                 customer_class="normal", window_id=0, waiting_time=0.0))
    event_log.log_event(SimEvent(timestamp=2.0, event_type=SERVICE_END, customer_id=1,
                                 customer_class="normal", window_id=0, service_time=2.0))

    assert len(event_log.events) == 3
    assert event_log.get_arrivals()[0].customer_id == 1
    assert len(event_log.get_completions()) == 1
    assert len(event_log.get_events_since(0.0)) == 1

    path = event_log.save_csv(str(tmp_path))
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 3
    assert list(rows[0].keys()) == config.EVENT_LOG_COLUMNS
    assert rows[2]["event_type"] == SERVICE_END


def test_event_log_dataframe():
    """Empty logs still produce the expected columns."""
    event_log = EventLog()
    df = event_log.get_dataframe()
    assert df.empty
    assert list(df.columns) == config.EVENT_LOG_COLUMNS

    event_log.log_event(SimEvent(timestamp=1.5, event_type=WINDOW_OPEN, window_id=3,
                                 queue_length=6, active_windows=4))
    df = event_log.get_dataframe()
    assert len(df) == 1
    assert df.loc[0, "window_id"] == 3


def test_event_log_subscribers():
    """Subscribers see every event in order."""
    event_log = EventLog()
    seen = []
    event_log.subscribe(seen.append)

    for t in (0.0, 1.0, 2.0):
        event_log.log_event(SimEvent(timestamp=t, event_type=ARRIVAL, customer_id=int(t) + 1,
                                     customer_class="priority", service_time=1.0))

    assert [e.timestamp for e in seen] == [0.0, 1.0, 2.0]


def test_format_event():
    """Event lines mention the ids and computed metrics."""
    line = format_event(SimEvent(timestamp=5.0, event_type=SERVICE_START, customer_id=2,
                                 customer_class="normal", window_id=0, waiting_time=4.0))
    assert "customer 2" in line
    assert "window 0" in line
    assert "4.00" in line


def test_config_parameters():
    """Test that config parameters are reasonable."""
    assert config.MAX_WINDOWS > 0
    assert config.MAX_CUSTOMERS > 0
    assert 1 <= config.MIN_OPEN_WINDOWS <= config.INITIAL_WINDOWS <= config.MAX_OPEN_WINDOWS
    assert config.MAX_OPEN_WINDOWS <= config.MAX_WINDOWS
    assert config.OPEN_THRESHOLD > config.CLOSE_THRESHOLD
    assert 0.0 <= config.PRIORITY_RATIO <= 1.0
    assert config.SIMULATION_TIME > 0
    assert config.THROUGHPUT_SCALE == 60.0


def test_default_and_demo_parameters_validate():
    """Shipped parameter sets pass validation."""
    SimulationParameters().validate()
    demo = SimulationParameters.demo()
    demo.validate()
    assert demo.initial_windows == config.DEMO_INITIAL_WINDOWS
    assert demo.simulation_time == config.DEMO_SIMULATION_TIME


@pytest.mark.parametrize("overrides", [
    {"min_windows": 0},
    {"min_windows": 4, "initial_windows": 3},
    {"max_windows": 2, "initial_windows": 3},
    {"max_windows": config.MAX_WINDOWS + 1},
    {"priority_ratio": 1.5},
    {"priority_ratio": -0.1},
    {"simulation_time": 0},
])
def test_parameter_validation_rejects(overrides):
    """Out-of-range parameters are rejected before a run."""
    params = SimulationParameters(**overrides)
    with pytest.raises(ValueError):
        params.validate()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
