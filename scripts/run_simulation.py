"""
Command-line runner for the service counter simulation.
Runs a demo, a custom configuration, or the three-layout comparison.
"""

from pathlib import Path
import argparse
import logging
import sys

# Ensure root directory is in path for config import
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import config
from counter_sim.comparison import compare_models
from counter_sim.event_log import EventLog, format_event
from counter_sim.generator import generate_customers, load_customers_csv
from counter_sim.models import SimulationParameters
from counter_sim.report import (
    build_report,
    format_statistics,
    plot_queue_length,
    plot_wait_times,
    plot_window_utilization,
    save_report_json,
)
from counter_sim.simulation import Simulation


def run_single_simulation(
    params: SimulationParameters,
    customers,
    run_id: str,
    output_dir: str = config.OUTPUT_DIR,
    dispatch_seed=None,
    quiet: bool = False,
    plots: bool = True,
) -> dict:
    """Run one simulation and write its outputs.

    Args:
        params: Validated simulation parameters
        customers: Customer list
        run_id: Identifier used in output filenames
        output_dir: Root output directory
        dispatch_seed: Seed for the dispatcher's draws
        quiet: Suppress per-event lines
        plots: Write PNG plots

    Returns:
        Report dictionary
    """
    event_log = EventLog(run_id=run_id)
    if not quiet:
        event_log.subscribe(lambda e: print(format_event(e)))

    print(f"[{run_id}] Starting simulation with {len(customers)} customers...")
    sim = Simulation(customers, params, event_log=event_log, random_seed=dispatch_seed).run()
    print(f"[{run_id}] Simulation complete at t={sim.current_time:.2f}.")

    stats = sim.compute_statistics()
    print()
    print(format_statistics(stats, sim.queue_snapshot()))

    out = Path(output_dir)
    report = build_report(sim, stats, run_id=run_id)
    csv_path = event_log.save_csv(str(out / "logs"))
    report_path = save_report_json(report, str(out / "reports"), run_id=run_id)
    if plots:
        plot_dir = str(out / "plots")
        plot_window_utilization(stats, plot_dir, run_id=run_id)
        plot_wait_times(event_log, plot_dir, run_id=run_id)
        plot_queue_length(event_log, plot_dir, run_id=run_id)

    print(f"\nEvent log: {csv_path}")
    print(f"Report:    {report_path}")
    return report


def print_parameters(params: SimulationParameters, count: int):
    print("Configuration:")
    print(f"  Initial windows: {params.initial_windows}")
    print(f"  Max windows: {params.max_windows}")
    print(f"  Min windows: {params.min_windows}")
    print(f"  Open threshold: {params.open_threshold}")
    print(f"  Close threshold: {params.close_threshold}")
    print(f"  Priority ratio: {params.priority_ratio:.2f}")
    print(f"  Simulation time: {params.simulation_time} min")
    print(f"  Customers: {count}")


def _cmd_demo(args: argparse.Namespace):
    params = SimulationParameters.demo()
    customers = generate_customers(params.customer_count, random_seed=config.DEMO_SEED)
    print_parameters(params, len(customers))
    run_single_simulation(
        params, customers, run_id="demo", output_dir=args.output_dir,
        dispatch_seed=config.DEMO_SEED, quiet=args.quiet, plots=not args.no_plots,
    )


def _params_from_args(args: argparse.Namespace) -> SimulationParameters:
    return SimulationParameters(
        initial_windows=args.initial_windows,
        max_windows=args.max_windows,
        min_windows=args.min_windows,
        open_threshold=args.open_threshold,
        close_threshold=args.close_threshold,
        priority_ratio=args.priority_ratio,
        simulation_time=args.duration,
        customer_count=args.count,
    )


def _cmd_simulate(args: argparse.Namespace):
    params = _params_from_args(args)
    params.validate()

    if args.customers_csv:
        customers = load_customers_csv(args.customers_csv)
    else:
        customers = generate_customers(params.customer_count, random_seed=args.seed)

    print_parameters(params, len(customers))
    run_single_simulation(
        params, customers, run_id=f"seed{args.seed}", output_dir=args.output_dir,
        dispatch_seed=args.seed, quiet=args.quiet, plots=not args.no_plots,
    )


def _cmd_compare(args: argparse.Namespace):
    params = _params_from_args(args)
    params.validate()

    print(f"Comparing layouts on {args.count} customers (seed {args.seed})")
    df = compare_models(params, count=args.count, random_seed=args.seed, dispatch_seed=args.seed)
    print(df.to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    out = Path(args.output_dir) / "reports"
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"comparison_seed{args.seed}.csv"
    df.to_csv(path, index=False)
    print(f"\nComparison saved to {path}")


def _add_parameter_args(parser: argparse.ArgumentParser, count: int, seed: int):
    parser.add_argument("--initial-windows", type=int, default=config.INITIAL_WINDOWS)
    parser.add_argument("--max-windows", type=int, default=config.MAX_OPEN_WINDOWS)
    parser.add_argument("--min-windows", type=int, default=config.MIN_OPEN_WINDOWS)
    parser.add_argument("--open-threshold", type=int, default=config.OPEN_THRESHOLD)
    parser.add_argument("--close-threshold", type=int, default=config.CLOSE_THRESHOLD)
    parser.add_argument("--priority-ratio", type=float, default=config.PRIORITY_RATIO)
    parser.add_argument("--duration", type=float, default=config.SIMULATION_TIME)
    parser.add_argument("--count", type=int, default=count)
    parser.add_argument("--seed", type=int, default=seed)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="run-simulation",
        description="Multi-window service counter simulation",
    )
    parser.add_argument("--output-dir", default=config.OUTPUT_DIR)
    parser.add_argument("--no-plots", action="store_true", help="Skip PNG plots")
    parser.add_argument("--quiet", action="store_true", help="Do not print events")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("demo", help="Run with the preset demo parameters")

    sim_p = sub.add_parser("simulate", help="Run with custom parameters")
    _add_parameter_args(sim_p, count=config.CUSTOMER_COUNT, seed=config.DEMO_SEED)
    sim_p.add_argument(
        "--customers-csv", default=None,
        help="CSV with columns id,type,arrival_time,service_time",
    )

    cmp_p = sub.add_parser("compare", help="Compare single and multi-window layouts")
    _add_parameter_args(
        cmp_p, count=config.COMPARISON_CUSTOMER_COUNT, seed=config.COMPARISON_SEED
    )

    return parser


def main(argv=None):
    """Entry point for the simulation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "demo": _cmd_demo,
        "simulate": _cmd_simulate,
        "compare": _cmd_compare,
    }
    try:
        dispatch[args.command](args)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
