"""Sraffian price model.

Turns a snapshot of physical data into a consistent price system:

    p = (1 + r) A^T p + w l

where ``A[i, j] = M[i, j] / X[j]`` is the quantity of commodity ``i`` used
per unit of output of industry ``j`` and ``l[j] = L[j] / X[j]`` is the unit
labor requirement. The maximum rate of profit is bounded by the
Perron-Frobenius root of ``A``:

    R = 1 / lambda_max - 1

Every function here is a pure function of its arguments. Singular systems
and economically invalid regimes are reported through ``PriceStatus``
rather than exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike
from pydantic import BaseModel, ConfigDict, Field

from sraffa.config import DEFAULT_CONFIG, EngineConfig
from sraffa.core.commodities import Commodity, SystemSnapshot
from sraffa.enums import PriceStatus, ZeroOutputPolicy
from sraffa.errors import SnapshotValidationError
from sraffa.solver.eigen import DEFAULT_MAX_ITERATIONS, DEFAULT_NORM_FLOOR, dominant_eigenvalue
from sraffa.solver.linear import SINGULAR_TOLERANCE, solve_linear_system

logger = logging.getLogger(__name__)

PRICE_TOLERANCE = 1e-6
DEGENERATE_EIGENVALUE = 1e-9
MAX_PROFIT_RATE_CAP = 100.0


class PriceSolution(BaseModel):
    """Prices for one profit rate.

    Attributes:
        prices: Relative prices (empty when the system is singular)
        is_valid: True when every price exceeds ``-price_tolerance``
        status: Discriminates singular systems from invalid regimes
        profit_rate: Profit rate the prices were computed for
    """

    prices: np.ndarray
    is_valid: bool
    status: PriceStatus
    profit_rate: float = 0.0

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def has_solution(self) -> bool:
        return self.status != PriceStatus.SINGULAR_SYSTEM

    @property
    def min_price(self) -> float | None:
        """Smallest price, or None when there is no solution."""
        if self.prices.size == 0:
            return None
        return float(np.min(self.prices))


class Distribution(BaseModel):
    """Aggregate income distribution of the price system.

    Shares are percentages of the net product.
    """

    total_wages: float
    total_profits: float
    net_product: float
    total_capital: float
    wage_share: float
    profit_share: float

    model_config = ConfigDict(frozen=True)


class CostBreakdown(BaseModel):
    """Decomposition of one unit price into its cost components."""

    constant_capital_value: float = Field(..., description="Value of means of production per unit")
    profit: float = Field(..., description="Profit on the means of production")
    wage_cost: float = Field(..., description="Wages per unit")
    price: float = Field(..., description="Unit price")

    model_config = ConfigDict(frozen=True)

    @property
    def residual(self) -> float:
        """``price`` minus the sum of its components."""
        return self.price - (self.constant_capital_value + self.profit + self.wage_cost)


class ComputedMetrics(BaseModel):
    """Everything one recomputation yields for the presentation layer."""

    prices: np.ndarray
    is_valid: bool
    status: PriceStatus
    wage: float
    profit_rate: float
    max_profit_rate: float
    distribution: Distribution | None = None
    breakdowns: tuple[CostBreakdown, ...] = ()

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    def cost_breakdown(self, idx: int) -> CostBreakdown | None:
        """Breakdown for commodity ``idx``, None when there is no solution."""
        if not self.breakdowns:
            return None
        return self.breakdowns[idx]


def _safe_ratio(numerators: np.ndarray, outputs: np.ndarray) -> np.ndarray:
    # Broadcasts over the last axis; zero output gives zero.
    zero = outputs == 0
    denominators = np.where(zero, 1.0, outputs)
    return np.where(zero, 0.0, numerators / denominators)


def build_coefficient_matrix(input_matrix: ArrayLike, total_outputs: ArrayLike) -> np.ndarray:
    """Input-output coefficients ``A[i, j] = M[i, j] / X[j]``.

    Columns of industries with zero output are all zero.
    """
    matrix = np.array(input_matrix, dtype=float, copy=True)
    outputs = np.asarray(total_outputs, dtype=float).reshape(-1)
    if outputs.size == 0:
        return np.zeros((0, 0), dtype=float)
    return _safe_ratio(matrix, outputs[np.newaxis, :])


def build_labor_vector(
    labor_inputs: ArrayLike,
    total_outputs: ArrayLike,
    wage: float = 1.0,
) -> np.ndarray:
    """Wage cost per unit of output ``l[j] = (L[j] / X[j]) * w``."""
    labor = np.asarray(labor_inputs, dtype=float).reshape(-1)
    outputs = np.asarray(total_outputs, dtype=float).reshape(-1)
    return _safe_ratio(labor, outputs) * wage


def max_profit_rate(
    input_matrix: ArrayLike,
    total_outputs: ArrayLike,
    *,
    degenerate_eigenvalue: float = DEGENERATE_EIGENVALUE,
    cap: float = MAX_PROFIT_RATE_CAP,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    norm_floor: float = DEFAULT_NORM_FLOOR,
    convergence_tolerance: float | None = None,
) -> float:
    """Maximum uniform rate of profit ``R = 1 / lambda - 1``.

    When the dominant eigenvalue of the coefficient matrix is at or below
    ``degenerate_eigenvalue`` the system uses (almost) no produced inputs
    and ``cap`` is returned instead of an unbounded rate.
    """
    a = build_coefficient_matrix(input_matrix, total_outputs)
    lam = dominant_eigenvalue(
        a,
        max_iterations=max_iterations,
        norm_floor=norm_floor,
        convergence_tolerance=convergence_tolerance,
    )
    if lam <= degenerate_eigenvalue:
        logger.debug(f"Degenerate coefficient matrix (lambda={lam:.3e}); capping R at {cap}")
        return cap
    return 1.0 / lam - 1.0


def price_system_matrix(coefficients: ArrayLike, profit_rate: float) -> np.ndarray:
    """System matrix ``S = I - (1 + r) A^T`` of the price equations.

    Row ``k`` is the equation for the price of commodity ``k``, which sums
    over the inputs into industry ``k``, i.e. over column ``k`` of ``A``.
    """
    a = np.asarray(coefficients, dtype=float)
    n = a.shape[0] if a.ndim == 2 else 0
    return np.eye(n) - (1.0 + profit_rate) * a.T


def sraffian_prices(
    input_matrix: ArrayLike,
    labor_inputs: ArrayLike,
    total_outputs: ArrayLike,
    profit_rate: float,
    wage: float = 1.0,
    *,
    price_tolerance: float = PRICE_TOLERANCE,
    singular_tolerance: float = SINGULAR_TOLERANCE,
) -> PriceSolution:
    """Solve the price system for a given profit rate and wage.

    Returns a solution with empty prices and status ``SINGULAR_SYSTEM`` if
    the system matrix is singular. Prices at or below ``-price_tolerance``
    mark the regime invalid (typically ``r`` above the maximum rate) but
    are still returned.
    """
    a = build_coefficient_matrix(input_matrix, total_outputs)
    labor = build_labor_vector(labor_inputs, total_outputs, wage)
    system = price_system_matrix(a, profit_rate)

    prices = solve_linear_system(system, labor, tolerance=singular_tolerance)
    if prices is None:
        logger.debug(f"Price system singular at r={profit_rate}")
        return PriceSolution(
            prices=np.zeros(0, dtype=float),
            is_valid=False,
            status=PriceStatus.SINGULAR_SYSTEM,
            profit_rate=profit_rate,
        )

    is_valid = bool(np.all(prices > -price_tolerance))
    if not is_valid:
        logger.debug(f"Non-positive prices at r={profit_rate}: min={float(prices.min()):.6g}")
    return PriceSolution(
        prices=prices,
        is_valid=is_valid,
        status=PriceStatus.VALID if is_valid else PriceStatus.INVALID_PRICE_REGIME,
        profit_rate=profit_rate,
    )


def aggregate_distribution(
    commodities: Sequence[Commodity],
    input_matrix: ArrayLike,
    prices: ArrayLike,
    profit_rate: float,
    wage: float = 1.0,
) -> Distribution | None:
    """National accounts of the price system.

    Total capital is the value of the means of production, summed per
    industry and then across industries. Net product is wages plus profits;
    when it is exactly zero both shares read as zero.

    Returns:
        Distribution, or None when ``prices`` is empty.
    """
    p = np.asarray(prices, dtype=float).reshape(-1)
    if p.size == 0:
        return None
    matrix = np.asarray(input_matrix, dtype=float)
    labor = np.array([c.labor_input for c in commodities], dtype=float)

    total_wages = float(np.sum(wage * labor))
    industry_capital = p @ matrix
    total_capital = float(np.sum(industry_capital))
    total_profits = total_capital * profit_rate
    net_product = total_wages + total_profits
    denom = 1.0 if net_product == 0 else net_product

    return Distribution(
        total_wages=total_wages,
        total_profits=total_profits,
        net_product=net_product,
        total_capital=total_capital,
        wage_share=total_wages / denom * 100.0,
        profit_share=total_profits / denom * 100.0,
    )


def cost_breakdown(
    commodities: Sequence[Commodity],
    input_matrix: ArrayLike,
    prices: ArrayLike,
    idx: int,
    profit_rate: float,
    wage: float = 1.0,
) -> CostBreakdown | None:
    """Split the price of commodity ``idx`` into inputs, profit and wages.

    For valid prices the three components add up to the price.

    Returns:
        CostBreakdown, or None when ``prices`` is empty.
    """
    p = np.asarray(prices, dtype=float).reshape(-1)
    if p.size == 0:
        return None
    outputs = np.array([c.total_output for c in commodities], dtype=float)
    column = build_coefficient_matrix(input_matrix, outputs)[:, idx]
    commodity = commodities[idx]

    constant_capital_value = float(p @ column)
    return CostBreakdown(
        constant_capital_value=constant_capital_value,
        profit=constant_capital_value * profit_rate,
        wage_cost=commodity.unit_labor * wage,
        price=float(p[idx]),
    )


def _non_positive_output_names(snapshot: SystemSnapshot) -> list[str]:
    return [
        snapshot.commodities[idx].name or str(snapshot.commodities[idx].id)
        for idx in snapshot.non_positive_output()
    ]


def _solve_snapshot(snapshot: SystemSnapshot, config: EngineConfig) -> PriceSolution:
    return sraffian_prices(
        snapshot.matrix,
        snapshot.labor_inputs,
        snapshot.total_outputs,
        snapshot.profit_rate,
        snapshot.wage,
        price_tolerance=config.price_tolerance,
        singular_tolerance=config.singular_tolerance,
    )


def compute_metrics(
    snapshot: SystemSnapshot,
    config: EngineConfig | None = None,
) -> ComputedMetrics:
    """Recompute the whole price system for one snapshot.

    Args:
        snapshot: Commodities, input matrix, profit rate and wage
        config: Engine settings (defaults to ``DEFAULT_CONFIG``)

    Returns:
        ComputedMetrics with prices, validity, maximum profit rate,
        distribution and one cost breakdown per commodity.

    Raises:
        SnapshotValidationError: If the zero-output policy is ``REJECT``
            and some commodity has zero or negative total output.
    """
    config = config or DEFAULT_CONFIG

    if config.zero_output_policy == ZeroOutputPolicy.REJECT:
        zero_output = _non_positive_output_names(snapshot)
        if zero_output:
            raise SnapshotValidationError(
                f"Non-positive total output for: {', '.join(zero_output)}",
                codes=["SNP002"],
            )

    r_max = max_profit_rate(
        snapshot.matrix,
        snapshot.total_outputs,
        degenerate_eigenvalue=config.degenerate_eigenvalue,
        cap=config.max_profit_rate_cap,
        max_iterations=config.eigen_iterations,
        norm_floor=config.eigen_norm_floor,
        convergence_tolerance=config.convergence_tolerance,
    )
    solution = _solve_snapshot(snapshot, config)

    distribution = None
    breakdowns: tuple[CostBreakdown, ...] = ()
    if solution.has_solution:
        distribution = aggregate_distribution(
            snapshot.commodities,
            snapshot.matrix,
            solution.prices,
            snapshot.profit_rate,
            snapshot.wage,
        )
        breakdowns = tuple(
            cost_breakdown(
                snapshot.commodities,
                snapshot.matrix,
                solution.prices,
                idx,
                snapshot.profit_rate,
                snapshot.wage,
            )
            for idx in range(snapshot.n)
        )

    logger.debug(
        f"Recomputed {snapshot.n} commodities at r={snapshot.profit_rate}, "
        f"w={snapshot.wage}: R={r_max:.6g}, status={solution.status.value}"
    )

    return ComputedMetrics(
        prices=solution.prices,
        is_valid=solution.is_valid,
        status=solution.status,
        wage=snapshot.wage,
        profit_rate=snapshot.profit_rate,
        max_profit_rate=r_max,
        distribution=distribution,
        breakdowns=breakdowns,
    )


def price_schedule(
    snapshot: SystemSnapshot,
    rates: Iterable[float],
    config: EngineConfig | None = None,
) -> list[PriceSolution]:
    """Price solutions of ``snapshot`` for each profit rate in ``rates``."""
    config = config or DEFAULT_CONFIG
    return [_solve_snapshot(snapshot.with_rates(profit_rate=float(r)), config) for r in rates]
