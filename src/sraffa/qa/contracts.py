"""Contract definitions for snapshot QA gates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sraffa.enums import ZeroOutputPolicy

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class SnapshotContractSpec:
    """Defines one snapshot QA contract gate."""

    code: str
    title: str
    category: str
    description: str
    severity: Severity
    abs_tol: float


def default_snapshot_contracts(
    *,
    zero_output_policy: ZeroOutputPolicy = ZeroOutputPolicy.TOLERATE,
    abs_tol: float = 0.0,
) -> dict[str, SnapshotContractSpec]:
    """Default structural QA contracts run before a recomputation."""
    zero_output_severity: Severity = (
        "error" if zero_output_policy == ZeroOutputPolicy.REJECT else "warning"
    )
    return {
        "SNP001": SnapshotContractSpec(
            code="SNP001",
            title="Non-negative Inputs",
            category="input_matrix",
            description="Every entry M(i,j) of the physical input matrix must be >= 0.",
            severity="error",
            abs_tol=abs_tol,
        ),
        "SNP002": SnapshotContractSpec(
            code="SNP002",
            title="Positive Total Output",
            category="commodities",
            description=(
                "Every commodity must have X(j) > 0. Zero output makes column j of A "
                "and l(j) zero under the tolerate policy."
            ),
            severity=zero_output_severity,
            abs_tol=abs_tol,
        ),
        "SNP003": SnapshotContractSpec(
            code="SNP003",
            title="Non-negative Labor",
            category="commodities",
            description="Every commodity must have labor input L(j) >= 0.",
            severity="error",
            abs_tol=abs_tol,
        ),
        "SNP004": SnapshotContractSpec(
            code="SNP004",
            title="Productive System",
            category="structure",
            description=(
                "The dominant eigenvalue of A must be below 1, otherwise no "
                "non-negative profit rate yields positive prices."
            ),
            severity="warning",
            abs_tol=abs_tol,
        ),
        "SNP005": SnapshotContractSpec(
            code="SNP005",
            title="Irreducible System",
            category="structure",
            description=(
                "Every commodity should be basic, i.e. enter directly or indirectly "
                "into the production of all commodities."
            ),
            severity="warning",
            abs_tol=abs_tol,
        ),
    }
