"""Reports and tables for computed price systems."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from sraffa.analysis import classify_commodities
from sraffa.core.commodities import SystemSnapshot
from sraffa.model import ComputedMetrics, PriceSolution


@dataclass
class PriceReport:
    """JSON-serialisable summary of one recomputation."""

    schema_version: str
    scenario: str
    status: str
    is_valid: bool
    profit_rate: float
    wage: float
    max_profit_rate: float
    commodities: list[dict[str, Any]]
    distribution: dict[str, float] | None
    schedule: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "scenario": self.scenario,
            "status": self.status,
            "is_valid": self.is_valid,
            "profit_rate": self.profit_rate,
            "wage": self.wage,
            "max_profit_rate": self.max_profit_rate,
            "commodities": self.commodities,
            "distribution": self.distribution,
            "schedule": self.schedule,
            "metadata": self.metadata,
        }

    def save_json(self, path: Path | str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_dict(), indent=2))


def build_price_report(
    snapshot: SystemSnapshot,
    metrics: ComputedMetrics,
    *,
    scenario: str = "",
    schedule: list[PriceSolution] | None = None,
) -> PriceReport:
    """Assemble a ``PriceReport`` from a snapshot and its metrics."""
    basics = classify_commodities(snapshot.matrix)
    rows: list[dict[str, Any]] = []
    for idx, commodity in enumerate(snapshot.commodities):
        row: dict[str, Any] = {
            "id": commodity.id,
            "name": commodity.name,
            "total_output": commodity.total_output,
            "labor_input": commodity.labor_input,
            "basic": basics[idx] if basics else False,
        }
        breakdown = metrics.cost_breakdown(idx)
        if breakdown is not None:
            row.update(breakdown.model_dump())
        rows.append(row)

    distribution = metrics.distribution.model_dump() if metrics.distribution else None
    schedule_rows = [
        {
            "profit_rate": solution.profit_rate,
            "status": solution.status.value,
            "min_price": solution.min_price,
            "prices": solution.prices.tolist(),
        }
        for solution in schedule or []
    ]

    return PriceReport(
        schema_version="price_report/v1",
        scenario=scenario,
        status=metrics.status.value,
        is_valid=metrics.is_valid,
        profit_rate=metrics.profit_rate,
        wage=metrics.wage,
        max_profit_rate=metrics.max_profit_rate,
        commodities=rows,
        distribution=distribution,
        schedule=schedule_rows,
        metadata={"commodities": snapshot.n},
    )


def breakdown_frame(snapshot: SystemSnapshot, metrics: ComputedMetrics) -> pd.DataFrame:
    """Per-commodity cost breakdown indexed by commodity name.

    Columns are empty (NaN) when the price system has no solution.
    """
    columns = ["constant_capital_value", "profit", "wage_cost", "price"]
    records = []
    for idx in range(snapshot.n):
        breakdown = metrics.cost_breakdown(idx)
        records.append(breakdown.model_dump() if breakdown is not None else {})
    frame = pd.DataFrame.from_records(records, columns=columns, index=snapshot.names)
    frame.index.name = "commodity"
    return frame.astype(float)


def distribution_frame(metrics: ComputedMetrics) -> pd.DataFrame:
    """Wages and profits with their shares of the net product."""
    dist = metrics.distribution
    if dist is None:
        return pd.DataFrame(columns=["amount", "share"], dtype=float)
    return pd.DataFrame(
        {
            "amount": [dist.total_wages, dist.total_profits, dist.net_product],
            "share": [dist.wage_share, dist.profit_share, dist.wage_share + dist.profit_share],
        },
        index=pd.Index(["wages", "profits", "net_product"], name="income"),
    )


def format_report_summary(report: PriceReport) -> str:
    """Compact human-readable summary line."""
    status = "VALID" if report.is_valid else report.status.upper()
    line = (
        f"Price system {status} | r={report.profit_rate:.2%} "
        f"R={report.max_profit_rate:.2%} w={report.wage:g}"
    )
    if report.distribution is not None:
        line += (
            f" wages={report.distribution['wage_share']:.1f}% "
            f"profits={report.distribution['profit_share']:.1f}%"
        )
    return line
