"""
Tests for the statistics aggregator and reporting helpers.
"""

import json
import pytest
from counter_sim.comparison import compare_models, comparison_models
from counter_sim.models import SimulationParameters, Window
from counter_sim.report import (
    build_report,
    format_statistics,
    plot_queue_length,
    plot_window_utilization,
    save_report_json,
)
from counter_sim.simulation import run_simulation
from counter_sim.statistics import compute_statistics, compute_window_stats


@pytest.fixture
def fifo_run(make_customer, single_window_params):
    customers = [make_customer(i + 1, i, 5.0) for i in range(3)]
    return run_simulation(customers, single_window_params, random_seed=0)


def test_class_wait_stats(fifo_run):
    """Average and max wait per class over finished customers."""
    stats = fifo_run.compute_statistics()
    normal = stats.by_class["normal"]
    assert normal.served_count == 3
    assert normal.total_wait_time == pytest.approx(12.0)
    assert normal.avg_wait_time == pytest.approx(4.0)
    assert normal.max_wait_time == pytest.approx(8.0)
    assert stats.by_class["priority"].served_count == 0
    assert stats.weighted_avg_wait == pytest.approx(4.0)


def test_window_utilization(fifo_run):
    """Utilization is busy over busy+idle, in percent."""
    stats = fifo_run.compute_statistics()
    assert len(stats.windows) == 1
    window = stats.windows[0]
    assert window.utilization == pytest.approx(15.0)
    assert window.idle_rate == pytest.approx(85.0)
    assert window.served_count == 3


def test_throughput_scaled(fifo_run):
    """3 customers over 100 minutes is 1.8 per hour."""
    stats = fifo_run.compute_statistics()
    assert stats.total_served == 3
    assert stats.throughput == pytest.approx(3 / 100 * 60)
    assert fifo_run.compute_statistics(throughput_scale=1.0).throughput == pytest.approx(0.03)


def test_statistics_idempotent(fifo_run):
    """Aggregating the same final state twice gives the same snapshot."""
    first = fifo_run.compute_statistics()
    second = fifo_run.compute_statistics()
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_unfinished_customers_excluded(make_customer):
    """Customers without a finish time do not count."""
    done = make_customer(1, 0.0, 2.0)
    done.start_time, done.waiting_time, done.finish_time = 1.0, 1.0, 3.0
    waiting = make_customer(2, 0.0, 2.0)
    in_service = make_customer(3, 0.0, 2.0, priority=True)
    in_service.start_time, in_service.waiting_time = 3.0, 3.0

    stats = compute_statistics([done, waiting, in_service], [], current_time=10.0)
    assert stats.total_served == 1
    assert stats.by_class["normal"].max_wait_time == 1.0
    assert stats.by_class["priority"].served_count == 0


def test_window_stats_zero_denominator():
    """Windows with no tracked time report 0% busy; never-opened ones are skipped."""
    opened = Window(window_id=0, is_open=True, ever_opened=True)
    never = Window(window_id=1)
    result = compute_window_stats([opened, never])
    assert len(result) == 1
    assert result[0].utilization == 0.0
    assert result[0].idle_rate == 100.0


def test_zero_duration_throughput():
    """No elapsed time means zero throughput, not a division error."""
    stats = compute_statistics([], [], current_time=0.0)
    assert stats.throughput == 0.0
    assert stats.window_dataframe().empty


def test_report_outputs(fifo_run, tmp_path):
    """JSON report, text summary and plots are written for a run."""
    stats = fifo_run.compute_statistics()
    report = build_report(fifo_run, stats, run_id="fifo")
    assert report["total_served"] == 3
    assert report["remaining_queue"] == {"normal": 0, "priority": 0}

    path = save_report_json(report, str(tmp_path), run_id="fifo")
    with open(path) as f:
        loaded = json.load(f)
    assert loaded["windows"][0]["window_id"] == 0
    assert loaded["parameters"]["max_windows"] == 1

    text = format_statistics(stats, fifo_run.queue_snapshot())
    assert "Customers served: 3" in text
    assert "Window 0" in text

    assert plot_window_utilization(stats, str(tmp_path), run_id="fifo").endswith(".png")
    assert plot_queue_length(fifo_run.event_log, str(tmp_path), run_id="fifo").endswith(".png")


def test_compare_models_frame():
    """The comparison runs three layouts on the same customers."""
    df = compare_models(SimulationParameters.demo(), count=30, random_seed=1001, dispatch_seed=0)
    assert list(df["model"]) == ["single_window", "single_window_priority", "multi_window"]
    assert (df["total_served"] > 0).all()
    assert (df["weighted_avg_wait"] >= 0).all()
    assert (df["throughput"] > 0).all()


def test_single_window_layouts_do_not_scale():
    """Both single-window layouts are pinned to one window."""
    layouts = dict(comparison_models(SimulationParameters.demo()))
    for name in ("single_window", "single_window_priority"):
        params = layouts[name]
        assert params.initial_windows == params.max_windows == params.min_windows == 1
    assert layouts["single_window"].priority_ratio == 0.0
    assert layouts["single_window_priority"].priority_ratio == 0.7
