#!/usr/bin/env python3
"""
Warehouse Wave Planner

Main entry point: reads an order input file, plans picking batches and
dispatch waves, and writes the assignment as JSON.

Usage:
    python3 main.py input.json
    python3 main.py input.json output.json --bi 200 --bg 300
    python3 main.py input.json --config config.yaml --seed 7 --no-output
    python3 main.py input.json out.json --history-dir runs/latest --plot
"""

import sys
import argparse
import logging
from pathlib import Path

from ga_engine import SearchError
from ga_engine.io_utils import save_history_log, save_run_metadata
from waveplan.catalog import Catalog, CatalogError, InputError
from waveplan.config_loader import (
    ConfigurationError,
    RunConfig,
    config_to_dict,
    load_config,
    print_config_summary
)
from waveplan.logging_setup import setup_logging
from waveplan.planner import PlanningError, PlanResult, plan_fulfillment
from waveplan.report_exporter import ReportExporter, print_plan_summary

logger = logging.getLogger("waveplan.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan warehouse picking batches and dispatch waves with genetic search"
    )
    parser.add_argument("input_file", help="Input JSON with ArticleLocations, Orders and Articles")
    parser.add_argument("output_file", nargs="?", default=None,
                        help="Output JSON file (default: print to stdout)")
    parser.add_argument("--bi", dest="num_batch_individuals", type=int, default=None,
                        help="Population size of the batch search (default: 100)")
    parser.add_argument("--bg", dest="num_batch_generations", type=int, default=None,
                        help="Generation budget of the batch search (default: 100)")
    parser.add_argument("--wi", dest="num_wave_individuals", type=int, default=None,
                        help="Population size of the wave search (default: 100)")
    parser.add_argument("--wg", dest="num_wave_generations", type=int, default=None,
                        help="Generation budget of the wave search (default: 100)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("-n", "--no-output", action="store_true",
                        help="Do not print the assignment to stdout")
    parser.add_argument("--history-dir", default=None,
                        help="Directory for fitness history CSVs and run metadata")
    parser.add_argument("--plot", action="store_true",
                        help="Also save convergence plots into --history-dir")
    parser.add_argument("--log-file", default=None, help="Additional log file")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Log fitness of every generation")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings")
    return parser


def resolve_config(args: argparse.Namespace) -> RunConfig:
    """Configuration file (if any) with command line overrides applied"""
    config = load_config(args.config) if args.config else RunConfig()

    for flag in ("num_batch_individuals", "num_wave_individuals"):
        value = getattr(args, flag)
        if value is not None and value <= 0:
            raise ConfigurationError(f"--{flag} must be a positive integer, got: {value}")
    for flag in ("num_batch_generations", "num_wave_generations"):
        value = getattr(args, flag)
        if value is not None and value < 0:
            raise ConfigurationError(f"--{flag} must be a non-negative integer, got: {value}")

    return config.with_search_overrides(
        batch_individuals=args.num_batch_individuals,
        batch_generations=args.num_batch_generations,
        wave_individuals=args.num_wave_individuals,
        wave_generations=args.num_wave_generations,
        random_seed=args.seed
    )


def save_run_artifacts(plan: PlanResult, history_dir: str, plot: bool):
    """Write fitness histories, run metadata and optional plots"""
    out_dir = Path(history_dir)
    extra = {'seed': plan.seed, 'config': config_to_dict(plan.config)}

    for name, search in (("batch", plan.batch_search), ("wave", plan.wave_search)):
        if search is None:
            continue
        save_history_log(search.history, out_dir / f"{name}_history.csv", overwrite=True)
        save_run_metadata(search, out_dir / f"{name}_run.yaml", extra=extra, overwrite=True)

    if plot:
        from waveplan.visualization import PlanVisualizer
        plot_path = out_dir / "plan_summary.png"
        PlanVisualizer(plan).plot_summary(save_path=plot_path)
        print(f"  ✓ Plot: {plot_path}")

    print(f"  ✓ History: {out_dir}")


def run(args: argparse.Namespace) -> PlanResult:
    config = resolve_config(args)

    if args.verbose:
        print_config_summary(config)

    catalog = Catalog.from_file(args.input_file)
    logger.info("Loaded %s from %s", catalog, args.input_file)
    plan = plan_fulfillment(catalog, config)

    print_plan_summary(plan)

    exporter = ReportExporter()
    report = exporter.create_report(plan)
    if args.output_file:
        file_path = exporter.export_json(report, args.output_file)
        print(f"  ✓ JSON: {file_path}")
    elif not args.no_output:
        exporter.write_json(report)

    if args.history_dir:
        save_run_artifacts(plan, args.history_dir, args.plot)

    return plan


def main(argv=None) -> int:
    """Main entry point for the planner CLI."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    setup_logging(level, args.log_file)

    try:
        run(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except (ConfigurationError, InputError, CatalogError, PlanningError, SearchError) as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
