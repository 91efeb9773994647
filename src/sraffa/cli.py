"""Command-line entry point: solve a scenario and report its price system."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from sraffa.config_loader import Scenario, load_scenario
from sraffa.errors import SnapshotValidationError
from sraffa.model import compute_metrics, price_schedule
from sraffa.qa import ensure_snapshot_valid, run_snapshot_checks
from sraffa.qa import format_report_summary as format_qa_summary
from sraffa.reporting import (
    breakdown_frame,
    build_price_report,
    distribution_frame,
    format_report_summary,
)
from sraffa.templates import wheat_iron_snapshot

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute Sraffian prices, maximum profit rate and distribution"
    )
    parser.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="YAML scenario file (default: built-in wheat/iron system)",
    )
    parser.add_argument("--profit-rate", type=float, default=None)
    parser.add_argument("--wage", type=float, default=None)
    parser.add_argument(
        "--sweep",
        type=int,
        default=0,
        help="Also solve N profit rates evenly spaced on [0, 1.2 R]",
    )
    parser.add_argument("--save-report", type=Path, default=None)
    parser.add_argument("--skip-qa", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser


def _load(args: argparse.Namespace) -> Scenario:
    if args.scenario is None:
        return Scenario(name="wheat_iron", snapshot=wheat_iron_snapshot())
    return load_scenario(args.scenario)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    if args.scenario is not None and not args.scenario.exists():
        print(f"Scenario file not found: {args.scenario}")
        return 1

    try:
        scenario = _load(args)
    except ValueError as exc:
        print(f"Invalid scenario: {exc}")
        return 1

    snapshot = scenario.snapshot.with_rates(profit_rate=args.profit_rate, wage=args.wage)
    config = scenario.engine

    try:
        if not args.skip_qa:
            qa_report = run_snapshot_checks(snapshot, zero_output_policy=config.zero_output_policy)
            print(format_qa_summary(qa_report))
            for check in qa_report.failed():
                logger.warning(f"{check.code} {check.title}: {check.failures} failure(s)")
            ensure_snapshot_valid(qa_report)
        metrics = compute_metrics(snapshot, config)
    except SnapshotValidationError as exc:
        print(str(exc))
        return 1

    schedule = None
    if args.sweep > 0:
        upper = max(1.0, metrics.max_profit_rate * 1.2)
        rates = np.linspace(0.0, upper, args.sweep)
        schedule = price_schedule(snapshot, rates, config)

    report = build_price_report(snapshot, metrics, scenario=scenario.name, schedule=schedule)
    print(format_report_summary(report))
    if metrics.prices.size:
        print(breakdown_frame(snapshot, metrics).to_string(float_format=lambda v: f"{v:.4f}"))
        print(distribution_frame(metrics).to_string(float_format=lambda v: f"{v:.2f}"))
    else:
        print("Singular matrix or calculation error.")

    if args.save_report is not None:
        report.save_json(args.save_report)
        print(f"Saved report: {args.save_report}")

    return 0 if metrics.is_valid else 2


if __name__ == "__main__":
    raise SystemExit(main())
