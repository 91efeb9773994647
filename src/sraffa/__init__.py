"""sraffa - Sraffian price systems from input-output data."""

from sraffa.config import EngineConfig
from sraffa.core import Commodity, SystemSnapshot
from sraffa.enums import PriceStatus, ZeroOutputPolicy
from sraffa.errors import SnapshotValidationError
from sraffa.model import (
    ComputedMetrics,
    CostBreakdown,
    Distribution,
    PriceSolution,
    aggregate_distribution,
    build_coefficient_matrix,
    build_labor_vector,
    compute_metrics,
    cost_breakdown,
    max_profit_rate,
    price_schedule,
    sraffian_prices,
)
from sraffa.solver import dominant_eigenvalue, power_iteration, solve_linear_system
from sraffa.version import __version__

__all__ = [
    "__version__",
    "Commodity",
    "SystemSnapshot",
    "EngineConfig",
    "PriceStatus",
    "ZeroOutputPolicy",
    "SnapshotValidationError",
    "ComputedMetrics",
    "CostBreakdown",
    "Distribution",
    "PriceSolution",
    "solve_linear_system",
    "dominant_eigenvalue",
    "power_iteration",
    "build_coefficient_matrix",
    "build_labor_vector",
    "max_profit_rate",
    "sraffian_prices",
    "aggregate_distribution",
    "cost_breakdown",
    "compute_metrics",
    "price_schedule",
]
