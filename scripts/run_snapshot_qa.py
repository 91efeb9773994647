#!/usr/bin/env python3
"""Run structural snapshot QA gates on a scenario file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sraffa.config_loader import load_scenario
from sraffa.qa import format_report_summary, run_snapshot_checks


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Run snapshot QA contracts")
    parser.add_argument("--scenario", type=Path, required=True)
    parser.add_argument("--zero-output-policy", type=str, default=None)
    parser.add_argument("--max-samples", type=int, default=8)
    parser.add_argument(
        "--save-report",
        type=Path,
        default=Path("output/snapshot_qa_report.json"),
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    _setup_logging(args.verbose)

    if not args.scenario.exists():
        print(f"Scenario file not found: {args.scenario}")
        return 1

    try:
        scenario = load_scenario(args.scenario)
    except ValueError as exc:
        print(f"Invalid scenario: {exc}")
        return 1

    policy = args.zero_output_policy or scenario.engine.zero_output_policy
    report = run_snapshot_checks(
        scenario.snapshot,
        zero_output_policy=policy,
        max_samples=args.max_samples,
    )

    print(format_report_summary(report))
    if report.failed():
        print("Failed checks:")
        for check in report.failed():
            print(f"  - {check.code} [{check.severity}] {check.title} failures={check.failures}")

    report.save_json(args.save_report)
    print(f"Saved report: {args.save_report}")
    return 0 if report.passed else 2


if __name__ == "__main__":
    raise SystemExit(main())
