"""Snapshot data-quality checks and reporting."""

from sraffa.qa.checks import ensure_snapshot_valid, run_snapshot_checks
from sraffa.qa.reporting import SnapshotQACheckResult, SnapshotQAReport, format_report_summary

__all__ = [
    "SnapshotQACheckResult",
    "SnapshotQAReport",
    "ensure_snapshot_valid",
    "format_report_summary",
    "run_snapshot_checks",
]
