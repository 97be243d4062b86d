"""
Reporting for finished runs: summary text, JSON reports and plots.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Optional
import numpy as np
import matplotlib.pyplot as plt
import config
from counter_sim.event_log import ARRIVAL, SERVICE_END, SERVICE_START, EventLog
from counter_sim.simulation import Simulation
from counter_sim.statistics import Statistics


def build_report(sim: Simulation, stats: Statistics, run_id: str = "default") -> Dict:
    """Generate a report dictionary for one run.

    Args:
        sim: Finished simulation
        stats: Statistics computed from it
        run_id: Identifier for this run

    Returns:
        Report dictionary
    """
    return {
        "run_id": run_id,
        "simulation_time": sim.current_time,
        "parameters": asdict(sim.params),
        "drained": sim.drained,
        "total_customers": len(sim.customers),
        "total_served": stats.total_served,
        "throughput_per_hour": stats.throughput,
        "weighted_avg_wait": stats.weighted_avg_wait,
        "wait_times": {name: asdict(s) for name, s in stats.by_class.items()},
        "windows": [asdict(w) for w in stats.windows],
        "remaining_queue": sim.queue_snapshot(),
        "active_windows_at_end": sim.active_windows,
    }


def save_report_json(
    report: Dict,
    output_dir: str = config.REPORT_DIR,
    run_id: str = "default",
) -> str:
    """Save report as JSON file.

    Args:
        report: Report dictionary
        output_dir: Output directory
        run_id: Identifier used in the filename

    Returns:
        Path to saved file
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"report_{run_id}.json"

    # Handle non-serializable values
    def default_serializer(obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        return str(obj)

    with open(path, "w") as f:
        json.dump(report, f, indent=2, default=default_serializer)

    return str(path)


def format_statistics(stats: Statistics, queue_sizes: Optional[Dict[str, int]] = None) -> str:
    """Render the statistics summary as text."""
    lines = [
        "=" * 45,
        "SIMULATION STATISTICS",
        "=" * 45,
        f"Simulated time: {stats.duration:.2f} min",
        f"Customers served: {stats.total_served}",
        f"Throughput: {stats.throughput:.2f} customers/hour",
        "",
        "--- Waiting times ---",
    ]
    for name, s in stats.by_class.items():
        lines.append(
            f"{name.capitalize()}: avg {s.avg_wait_time:.2f} min, "
            f"max {s.max_wait_time:.2f} min, served {s.served_count}"
        )

    lines += ["", "--- Windows ---"]
    for w in stats.windows:
        lines.append(
            f"Window {w.window_id}: utilization {w.utilization:.2f}%, "
            f"idle {w.idle_rate:.2f}%, served {w.served_count}"
        )
    lines.append(f"Windows used: {len(stats.windows)}")

    if queue_sizes is not None:
        lines += ["", "--- Queues at end ---"]
        for name, size in queue_sizes.items():
            lines.append(f"{name.capitalize()} waiting: {size}")

    return "\n".join(lines)


def plot_window_utilization(
    stats: Statistics,
    output_dir: str = config.PLOT_DIR,
    run_id: str = "default",
) -> str:
    """Bar chart of busy vs idle share per window.

    Returns:
        Path to saved figure
    """
    if not stats.windows:
        return ""

    df = stats.window_dataframe()
    labels = [f"W{i}" for i in df["window_id"]]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(labels, df["utilization"], label="Busy")
    ax.bar(labels, df["idle_rate"], bottom=df["utilization"], label="Idle", alpha=0.5)
    ax.set_ylabel("Share of tracked time (%)")
    ax.set_title("Window Utilization")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)

    path = Path(output_dir) / f"utilization_{run_id}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)

    return str(path)


def plot_wait_times(
    event_log: EventLog,
    output_dir: str = config.PLOT_DIR,
    run_id: str = "default",
) -> str:
    """Scatter of waiting time against service start, per class.

    Returns:
        Path to saved figure
    """
    df = event_log.get_dataframe()
    if df.empty:
        return ""
    starts = df[df["event_type"] == SERVICE_START]
    if starts.empty:
        return ""

    fig, ax = plt.subplots(figsize=(12, 6))
    for name, group in starts.groupby("customer_class"):
        ax.scatter(group["timestamp"], group["waiting_time"], label=name, alpha=0.6, s=20)

    ax.set_xlabel("Simulation Time (min)")
    ax.set_ylabel("Waiting Time (min)")
    ax.set_title("Waiting Time at Service Start")
    ax.legend()
    ax.grid(True, alpha=0.3)

    path = Path(output_dir) / f"wait_{run_id}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)

    return str(path)


def plot_queue_length(
    event_log: EventLog,
    output_dir: str = config.PLOT_DIR,
    run_id: str = "default",
) -> str:
    """Step plot of combined queue length and active windows over time.

    Returns:
        Path to saved figure
    """
    df = event_log.get_dataframe()
    if df.empty:
        return ""

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.step(df["timestamp"], df["queue_length"], where="post", label="Queue length")
    ax.step(df["timestamp"], df["active_windows"], where="post", label="Active windows")

    arrivals = df[df["event_type"] == ARRIVAL]
    completions = df[df["event_type"] == SERVICE_END]
    ax.scatter(arrivals["timestamp"], arrivals["queue_length"], label="Arrivals", alpha=0.4, s=12)
    ax.scatter(completions["timestamp"], completions["queue_length"],
               label="Completions", alpha=0.4, s=12)

    ax.set_xlabel("Simulation Time (min)")
    ax.set_ylabel("Count")
    ax.set_title("Queue Length Over Time")
    ax.legend()
    ax.grid(True, alpha=0.3)

    path = Path(output_dir) / f"queue_{run_id}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)

    return str(path)
