"""Load and validate YAML scenario files.

A scenario holds one snapshot plus optional engine settings::

    metadata:
      name: wheat_iron
    commodities:
      - {id: 1, name: Wheat, total_output: 575, labor_input: 18}
      - {id: 2, name: Iron, total_output: 20, labor_input: 12}
    matrix:
      - [280, 120]
      - [12, 8]
    profit_rate: 0.15
    wage: 1.0
    engine:
      zero_output_policy: tolerate
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sraffa.config import EngineConfig
from sraffa.core.commodities import Commodity, SystemSnapshot


class Scenario(BaseModel):
    """A named snapshot together with the engine settings to solve it with."""

    name: str
    description: str = ""
    snapshot: SystemSnapshot
    engine: EngineConfig = Field(default_factory=EngineConfig)
    source: Path | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


def _as_float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number, got {value!r}") from exc


def _parse_commodities(raw: Any) -> tuple[Commodity, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("commodities must be a non-empty list")
    commodities: list[Commodity] = []
    for position, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"commodities[{position}] must be a mapping")
        record = dict(entry)
        record.setdefault("id", position + 1)
        record.setdefault("name", f"Comm {record['id']}")
        try:
            commodities.append(Commodity.model_validate(record))
        except ValidationError as exc:
            raise ValueError(f"Invalid commodity at position {position}: {exc}") from exc
    return tuple(commodities)


def _parse_matrix(raw: Any, n: int) -> list[list[float]]:
    if not isinstance(raw, list) or len(raw) != n:
        raise ValueError(f"matrix must be a list of {n} rows")
    rows: list[list[float]] = []
    for i, row in enumerate(raw):
        if not isinstance(row, list) or len(row) != n:
            raise ValueError(f"matrix row {i} must have {n} entries")
        rows.append([_as_float(value, f"matrix[{i}][{j}]") for j, value in enumerate(row)])
    return rows


def scenario_from_mapping(
    payload: dict[str, Any],
    *,
    default_name: str = "scenario",
    source: Path | None = None,
) -> Scenario:
    """Build a ``Scenario`` from an already-parsed mapping."""
    if not isinstance(payload, dict):
        raise ValueError("Scenario must define a top-level mapping")

    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError("metadata must be a mapping")

    commodities = _parse_commodities(payload.get("commodities"))
    matrix = _parse_matrix(payload.get("matrix"), len(commodities))

    engine_cfg = payload.get("engine") or {}
    if not isinstance(engine_cfg, dict):
        raise ValueError("engine must be a mapping")
    try:
        engine = EngineConfig.model_validate(engine_cfg)
    except ValidationError as exc:
        raise ValueError(f"Invalid engine settings: {exc}") from exc

    snapshot = SystemSnapshot(
        commodities=commodities,
        matrix=matrix,
        profit_rate=_as_float(payload.get("profit_rate", 0.0), "profit_rate"),
        wage=_as_float(payload.get("wage", 1.0), "wage"),
    )
    return Scenario(
        name=str(metadata.get("name") or default_name).strip(),
        description=str(metadata.get("description") or ""),
        snapshot=snapshot,
        engine=engine,
        source=source,
    )


def load_scenario(path: Path | str) -> Scenario:
    """Read a YAML scenario file.

    Raises:
        ValueError: If the file is not a valid scenario
    """
    scenario_path = Path(path)
    try:
        payload = yaml.safe_load(scenario_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {scenario_path}: {exc}") from exc
    return scenario_from_mapping(payload, default_name=scenario_path.stem, source=scenario_path)


def dump_scenario(scenario: Scenario, path: Path | str) -> None:
    """Write ``scenario`` to YAML in the layout ``load_scenario`` reads."""
    snapshot = scenario.snapshot
    payload = {
        "metadata": {"name": scenario.name, "description": scenario.description},
        "commodities": [c.model_dump() for c in snapshot.commodities],
        "matrix": snapshot.matrix.tolist(),
        "profit_rate": snapshot.profit_rate,
        "wage": snapshot.wage,
        "engine": scenario.engine.model_dump(mode="json", exclude_defaults=True),
    }
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
