from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SCRIPT = ROOT / "scripts" / "run_snapshot_qa.py"


def _run(args: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        cwd=ROOT,
        capture_output=True,
        text=True,
    )


def test_snapshot_qa_passes_for_wheat_iron(tmp_path: Path) -> None:
    report = tmp_path / "qa.json"
    proc = _run(
        ["--scenario", str(ROOT / "examples" / "wheat_iron.yaml"), "--save-report", str(report)]
    )

    assert proc.returncode == 0, proc.stdout + "\n" + proc.stderr
    assert "Snapshot QA PASS" in proc.stdout
    payload = json.loads(report.read_text())
    assert payload["passed"] is True


def test_snapshot_qa_invalid_scenario_exits_1(tmp_path: Path) -> None:
    scenario = tmp_path / "broken.yaml"
    scenario.write_text("commodities: [\n  - {id: 1\n", encoding="utf-8")

    proc = _run(["--scenario", str(scenario), "--save-report", str(tmp_path / "qa.json")])

    assert proc.returncode == 1, proc.stdout + "\n" + proc.stderr
    assert "Invalid scenario" in proc.stdout
    assert "Traceback" not in proc.stderr
