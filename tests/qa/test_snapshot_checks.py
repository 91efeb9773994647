from __future__ import annotations

import json
from pathlib import Path

import pytest

from sraffa.core import Commodity, SystemSnapshot
from sraffa.enums import ZeroOutputPolicy
from sraffa.errors import SnapshotValidationError
from sraffa.qa import (
    ensure_snapshot_valid,
    format_report_summary,
    run_snapshot_checks,
)
from sraffa.templates import wheat_iron_snapshot


def _snapshot(outputs, labor, matrix) -> SystemSnapshot:
    commodities = tuple(
        Commodity(id=i + 1, name=f"C{i + 1}", total_output=x, labor_input=l)
        for i, (x, l) in enumerate(zip(outputs, labor))
    )
    return SystemSnapshot(commodities=commodities, matrix=matrix)


def test_wheat_iron_passes_all_checks() -> None:
    report = run_snapshot_checks(wheat_iron_snapshot())

    assert report.passed
    assert len(report.checks) == 5
    assert report.failed() == []
    assert report.blocking_codes == []
    assert [check.code for check in report.checks] == [
        "SNP001",
        "SNP002",
        "SNP003",
        "SNP004",
        "SNP005",
    ]
    assert ensure_snapshot_valid(report) is report


def test_negative_input_is_an_error() -> None:
    snapshot = _snapshot([10.0, 10.0], [1.0, 1.0], [[1.0, -2.0], [1.0, 1.0]])
    report = run_snapshot_checks(snapshot)
    checks = {check.code: check for check in report.checks}

    assert not report.passed
    assert not checks["SNP001"].passed
    assert checks["SNP001"].failures == 1
    assert checks["SNP001"].samples[0] == {"input": "C1", "industry": "C2", "value": -2.0}


def test_negative_labor_is_an_error() -> None:
    snapshot = _snapshot([10.0, 10.0], [1.0, -1.0], [[1.0, 1.0], [1.0, 1.0]])
    report = run_snapshot_checks(snapshot)

    assert not report.passed
    assert [check.code for check in report.failed("error")] == ["SNP003"]


def test_zero_output_is_a_warning_when_tolerated() -> None:
    snapshot = _snapshot([10.0, 0.0], [1.0, 1.0], [[1.0, 1.0], [1.0, 1.0]])
    report = run_snapshot_checks(snapshot)
    checks = {check.code: check for check in report.checks}

    assert report.passed
    assert not checks["SNP002"].passed
    assert checks["SNP002"].severity == "warning"
    assert checks["SNP002"].blocking is False
    assert report.blocking_codes == []


def test_zero_output_is_an_error_when_rejected() -> None:
    snapshot = _snapshot([10.0, 0.0], [1.0, 1.0], [[1.0, 1.0], [1.0, 1.0]])
    report = run_snapshot_checks(snapshot, zero_output_policy="strict")

    assert not report.passed
    assert report.zero_output_policy == ZeroOutputPolicy.REJECT.value
    assert report.blocking_codes == ["SNP002"]
    with pytest.raises(SnapshotValidationError) as excinfo:
        ensure_snapshot_valid(report)
    assert excinfo.value.codes == ["SNP002"]


def test_unproductive_and_reducible_are_warnings() -> None:
    snapshot = _snapshot([10.0, 10.0], [1.0, 1.0], [[12.0, 0.0], [0.0, 1.0]])
    report = run_snapshot_checks(snapshot)
    warnings = {check.code for check in report.failed("warning")}

    assert report.passed
    assert warnings == {"SNP004", "SNP005"}


def test_samples_are_capped() -> None:
    snapshot = _snapshot([1.0] * 3, [1.0] * 3, [[-1.0] * 3] * 3)
    report = run_snapshot_checks(snapshot, max_samples=2)
    check = report.checks[0]

    assert check.evaluated == report.matrix_cells == 9
    assert check.failures == 9
    assert len(check.samples) == 2


def test_report_summary_and_json(tmp_path: Path) -> None:
    report = run_snapshot_checks(wheat_iron_snapshot())
    summary = format_report_summary(report)
    assert summary.startswith("Snapshot QA PASS | n=2 policy=tolerate checks=5")
    assert "blocking" not in summary

    path = tmp_path / "qa" / "report.json"
    report.save_json(path)
    payload = json.loads(path.read_text())
    assert payload["schema_version"] == "snapshot_qa_report/v1"
    assert payload["passed"] is True
    assert len(payload["checks"]) == 5
    assert payload["matrix_cells"] == 4
    assert payload["zero_output_policy"] == "tolerate"
    assert all(check["passed"] for check in payload["checks"])


def test_failed_summary_names_blocking_codes() -> None:
    snapshot = _snapshot([10.0, 10.0], [1.0, -1.0], [[1.0, -1.0], [1.0, 1.0]])
    report = run_snapshot_checks(snapshot)

    summary = format_report_summary(report)
    assert summary.startswith("Snapshot QA FAIL | n=2")
    assert summary.endswith("blocking=SNP001,SNP003")
