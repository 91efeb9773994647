"""Reference systems shipped with the engine."""

from __future__ import annotations

from sraffa.core.commodities import Commodity, SystemSnapshot

WHEAT_IRON_COMMODITIES: tuple[Commodity, ...] = (
    Commodity(id=1, name="Wheat", total_output=575, labor_input=18),
    Commodity(id=2, name="Iron", total_output=20, labor_input=12),
)

# rows = inputs, columns = industries
WHEAT_IRON_MATRIX: tuple[tuple[float, ...], ...] = (
    (280.0, 120.0),
    (12.0, 8.0),
)


def wheat_iron_snapshot(profit_rate: float = 0.15, wage: float = 1.0) -> SystemSnapshot:
    """Two-sector surplus system after Sraffa's wheat/iron example.

    Its coefficient matrix has dominant eigenvalue 0.8, so the maximum rate
    of profit is 25%.
    """
    return SystemSnapshot(
        commodities=WHEAT_IRON_COMMODITIES,
        matrix=WHEAT_IRON_MATRIX,
        profit_rate=profit_rate,
        wage=wage,
    )
