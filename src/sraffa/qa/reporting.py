"""Report models for snapshot QA checks."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal

Severity = Literal["error", "warning"]


@dataclass
class SnapshotQACheckResult:
    """Outcome of one contract over a snapshot.

    ``evaluated`` counts what the contract looked at: matrix cells for
    SNP001, commodities for the per-commodity gates, 1 for whole-system
    properties.
    """

    code: str
    title: str
    category: str
    description: str
    severity: Severity
    evaluated: int
    failures: int
    samples: list[dict[str, Any]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.failures == 0

    @property
    def blocking(self) -> bool:
        """True when this check alone refuses the snapshot."""
        return self.severity == "error" and not self.passed

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["passed"] = self.passed
        return payload


@dataclass
class SnapshotQAReport:
    """All contract results for one snapshot, under one zero-output policy.

    Only error-severity failures fail the report; warnings are listed but
    do not block a recomputation.
    """

    schema_version: str
    zero_output_policy: str
    commodities: int
    profit_rate: float
    wage: float
    checks: list[SnapshotQACheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.blocking_codes

    @property
    def blocking_codes(self) -> list[str]:
        return [check.code for check in self.checks if check.blocking]

    @property
    def matrix_cells(self) -> int:
        return self.commodities * self.commodities

    def failed(self, severity: Severity | None = None) -> list[SnapshotQACheckResult]:
        """Failed checks, optionally restricted to one severity."""
        return [
            check
            for check in self.checks
            if not check.passed and (severity is None or check.severity == severity)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "passed": self.passed,
            "zero_output_policy": self.zero_output_policy,
            "commodities": self.commodities,
            "matrix_cells": self.matrix_cells,
            "profit_rate": self.profit_rate,
            "wage": self.wage,
            "blocking_codes": self.blocking_codes,
            "failed_errors": len(self.failed("error")),
            "failed_warnings": len(self.failed("warning")),
            "checks": [check.to_dict() for check in self.checks],
        }

    def save_json(self, path: Path | str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_dict(), indent=2))


def format_report_summary(report: SnapshotQAReport) -> str:
    """One line: verdict, system size, policy and failure counts."""
    status = "PASS" if report.passed else "FAIL"
    line = (
        f"Snapshot QA {status} | n={report.commodities} "
        f"policy={report.zero_output_policy} checks={len(report.checks)} "
        f"errors={len(report.failed('error'))} warnings={len(report.failed('warning'))}"
    )
    if report.blocking_codes:
        line += f" blocking={','.join(report.blocking_codes)}"
    return line
