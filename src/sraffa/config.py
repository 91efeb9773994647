"""Engine settings: numerical tolerances and input policies."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sraffa.enums import ZeroOutputPolicy


class EngineConfig(BaseModel):
    """Numerical settings shared by every recomputation.

    The defaults reproduce the reference behaviour: a fixed 1000-step power
    iteration, a 1e-10 singular-pivot threshold and a 1e-6 tolerance on the
    positivity of prices.

    Attributes:
        singular_tolerance: Pivot magnitude below which a system is singular
        eigen_iterations: Power-iteration ceiling
        eigen_norm_floor: Norm below which the iterate is annihilated
        convergence_tolerance: Optional early exit for power iteration
        price_tolerance: Prices must exceed ``-price_tolerance`` to be valid
        degenerate_eigenvalue: Eigenvalues at or below this give the cap
        max_profit_rate_cap: Maximum profit rate reported for degenerate
            coefficient matrices
        zero_output_policy: Treatment of commodities with zero output
    """

    singular_tolerance: float = Field(default=1e-10, gt=0)
    eigen_iterations: int = Field(default=1000, ge=1)
    eigen_norm_floor: float = Field(default=1e-12, gt=0)
    convergence_tolerance: float | None = Field(default=None, gt=0)
    price_tolerance: float = Field(default=1e-6, ge=0)
    degenerate_eigenvalue: float = Field(default=1e-9, ge=0)
    max_profit_rate_cap: float = Field(default=100.0, gt=0)
    zero_output_policy: ZeroOutputPolicy = Field(default=ZeroOutputPolicy.TOLERATE)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("zero_output_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, v: Any) -> ZeroOutputPolicy:
        return ZeroOutputPolicy.from_alias(v)


DEFAULT_CONFIG = EngineConfig()
