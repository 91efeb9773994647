"""Snapshot QA checks run before a price-system recomputation.

The price model itself accepts any snapshot. These gates let a caller see
up front which inputs are economically meaningless and, under the
``reject`` zero-output policy, refuse them.
"""

from __future__ import annotations

from typing import Any

from sraffa.analysis import classify_commodities, is_productive
from sraffa.core.commodities import SystemSnapshot
from sraffa.enums import ZeroOutputPolicy
from sraffa.errors import SnapshotValidationError
from sraffa.model import build_coefficient_matrix
from sraffa.qa.contracts import SnapshotContractSpec, default_snapshot_contracts
from sraffa.qa.reporting import SnapshotQACheckResult, SnapshotQAReport
from sraffa.solver.eigen import dominant_eigenvalue


def _label(snapshot: SystemSnapshot, idx: int) -> str:
    commodity = snapshot.commodities[idx]
    return commodity.name or str(commodity.id)


def _build_check_result(
    spec: SnapshotContractSpec,
    *,
    evaluated: int,
    failures: list[dict[str, Any]],
    max_samples: int,
) -> SnapshotQACheckResult:
    return SnapshotQACheckResult(
        code=spec.code,
        title=spec.title,
        category=spec.category,
        description=spec.description,
        severity=spec.severity,
        evaluated=evaluated,
        failures=len(failures),
        samples=failures[:max_samples],
    )


def _check_non_negative_inputs(
    snapshot: SystemSnapshot,
    spec: SnapshotContractSpec,
    max_samples: int,
) -> SnapshotQACheckResult:
    failures: list[dict[str, Any]] = []
    for i in range(snapshot.n):
        for j in range(snapshot.n):
            value = float(snapshot.matrix[i, j])
            if value < -spec.abs_tol:
                failures.append(
                    {
                        "input": _label(snapshot, i),
                        "industry": _label(snapshot, j),
                        "value": value,
                    }
                )
    return _build_check_result(
        spec, evaluated=snapshot.n * snapshot.n, failures=failures, max_samples=max_samples
    )


def _check_positive_output(
    snapshot: SystemSnapshot,
    spec: SnapshotContractSpec,
    max_samples: int,
) -> SnapshotQACheckResult:
    failures = [
        {
            "commodity": _label(snapshot, idx),
            "total_output": snapshot.commodities[idx].total_output,
        }
        for idx in snapshot.non_positive_output(spec.abs_tol)
    ]
    return _build_check_result(
        spec, evaluated=snapshot.n, failures=failures, max_samples=max_samples
    )


def _check_non_negative_labor(
    snapshot: SystemSnapshot,
    spec: SnapshotContractSpec,
    max_samples: int,
) -> SnapshotQACheckResult:
    failures = [
        {"commodity": _label(snapshot, idx), "labor_input": c.labor_input}
        for idx, c in enumerate(snapshot.commodities)
        if c.labor_input < -spec.abs_tol
    ]
    return _build_check_result(
        spec, evaluated=snapshot.n, failures=failures, max_samples=max_samples
    )


def _check_productive(
    snapshot: SystemSnapshot,
    spec: SnapshotContractSpec,
    max_samples: int,
) -> SnapshotQACheckResult:
    failures: list[dict[str, Any]] = []
    if snapshot.n and not is_productive(snapshot.matrix, snapshot.total_outputs):
        a = build_coefficient_matrix(snapshot.matrix, snapshot.total_outputs)
        failures.append({"dominant_eigenvalue": dominant_eigenvalue(a)})
    return _build_check_result(spec, evaluated=1, failures=failures, max_samples=max_samples)


def _check_irreducible(
    snapshot: SystemSnapshot,
    spec: SnapshotContractSpec,
    max_samples: int,
) -> SnapshotQACheckResult:
    flags = classify_commodities(snapshot.matrix)
    failures = [
        {"commodity": _label(snapshot, idx), "basic": False}
        for idx, basic in enumerate(flags)
        if not basic
    ]
    return _build_check_result(
        spec, evaluated=snapshot.n, failures=failures, max_samples=max_samples
    )


def run_snapshot_checks(
    snapshot: SystemSnapshot,
    *,
    zero_output_policy: ZeroOutputPolicy | str = ZeroOutputPolicy.TOLERATE,
    max_samples: int = 8,
) -> SnapshotQAReport:
    """Run all snapshot QA contracts and collect them in one report."""
    policy = ZeroOutputPolicy.from_alias(zero_output_policy)
    specs = default_snapshot_contracts(zero_output_policy=policy)

    checks = [
        _check_non_negative_inputs(snapshot, specs["SNP001"], max_samples),
        _check_positive_output(snapshot, specs["SNP002"], max_samples),
        _check_non_negative_labor(snapshot, specs["SNP003"], max_samples),
        _check_productive(snapshot, specs["SNP004"], max_samples),
        _check_irreducible(snapshot, specs["SNP005"], max_samples),
    ]

    return SnapshotQAReport(
        schema_version="snapshot_qa_report/v1",
        zero_output_policy=policy.value,
        commodities=snapshot.n,
        profit_rate=snapshot.profit_rate,
        wage=snapshot.wage,
        checks=checks,
    )


def ensure_snapshot_valid(report: SnapshotQAReport) -> SnapshotQAReport:
    """Raise if any error-severity check failed, else return the report.

    Raises:
        SnapshotValidationError: Listing the failed error checks
    """
    failed = [check for check in report.checks if check.blocking]
    if failed:
        details = "; ".join(f"{check.code} {check.title} ({check.failures})" for check in failed)
        raise SnapshotValidationError(
            f"Snapshot rejected: {details}",
            codes=report.blocking_codes,
        )
    return report
