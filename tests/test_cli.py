from __future__ import annotations

import json
from pathlib import Path

import yaml

from sraffa.cli import main


def _write_zero_output(tmp_path: Path, policy: str) -> Path:
    path = tmp_path / "zero.yaml"
    payload = {
        "commodities": [
            {"name": "Corn", "total_output": 10, "labor_input": 1},
            {"name": "Idle", "total_output": 0, "labor_input": 0},
        ],
        "matrix": [[2, 0], [0, 0]],
        "engine": {"zero_output_policy": policy},
    }
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_default_system_is_valid(capsys) -> None:
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Snapshot QA PASS" in out
    assert "Price system VALID" in out


def test_profit_rate_above_maximum_exits_2(capsys) -> None:
    assert main(["--profit-rate", "0.3"]) == 2
    assert "INVALID_PRICE_REGIME" in capsys.readouterr().out


def test_singular_system_exits_2(capsys) -> None:
    assert main(["--profit-rate", "0.25"]) == 2
    assert "Singular matrix or calculation error." in capsys.readouterr().out


def test_missing_scenario_exits_1(tmp_path: Path) -> None:
    assert main(["--scenario", str(tmp_path / "missing.yaml")]) == 1


def test_invalid_scenario_exits_1(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("commodities: []\n", encoding="utf-8")
    assert main(["--scenario", str(path)]) == 1


def test_broken_yaml_exits_1(tmp_path: Path, capsys) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("commodities: [\n  - {id: 1\n", encoding="utf-8")
    assert main(["--scenario", str(path)]) == 1
    assert "Invalid scenario" in capsys.readouterr().out


def test_reject_policy_exits_1(tmp_path: Path) -> None:
    path = _write_zero_output(tmp_path, "reject")
    assert main(["--scenario", str(path)]) == 1
    assert main(["--scenario", str(path), "--skip-qa"]) == 1


def test_tolerate_policy_solves(tmp_path: Path) -> None:
    path = _write_zero_output(tmp_path, "tolerate")
    assert main(["--scenario", str(path)]) == 0


def test_save_report_with_sweep(tmp_path: Path) -> None:
    out = tmp_path / "out" / "report.json"
    assert main(["--sweep", "5", "--save-report", str(out)]) == 0

    payload = json.loads(out.read_text())
    assert payload["scenario"] == "wheat_iron"
    assert len(payload["schedule"]) == 5
    assert payload["schedule"][0]["status"] == "valid"
