"""Commodity records and immutable system snapshots.

A snapshot bundles everything one recomputation needs: the commodity list,
the physical input matrix, the profit rate and the wage. The presentation
layer owns all editing and builds a fresh snapshot after every change; the
model functions only ever read one.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Commodity(BaseModel):
    """A produced good, i.e. a single-product industry.

    Attributes:
        id: Stable identifier assigned by the editor
        name: Display name
        total_output: Gross output X of the industry (zero tolerated)
        labor_input: Labor L employed by the industry

    Example:
        >>> wheat = Commodity(id=1, name="Wheat", total_output=575, labor_input=18)
        >>> round(wheat.unit_labor, 4)
        0.0313
    """

    id: int = Field(..., description="Stable commodity identifier")
    name: str = Field(default="", description="Display name")
    total_output: float = Field(..., description="Total output quantity X")
    labor_input: float = Field(default=0.0, description="Labor input L")

    model_config = ConfigDict(frozen=True)

    @property
    def unit_labor(self) -> float:
        """Labor per unit of output, 0 for an industry with no output."""
        if self.total_output == 0:
            return 0.0
        return self.labor_input / self.total_output

    def __repr__(self) -> str:
        return (
            f"Commodity({self.id}, {self.name!r}, X={self.total_output:g}, "
            f"L={self.labor_input:g})"
        )


class SystemSnapshot(BaseModel):
    """Immutable input to one price-system recomputation.

    ``matrix[i][j]`` is the quantity of commodity ``i`` used up by industry
    ``j``. The matrix is copied on construction and marked read-only, so a
    snapshot can be shared between concurrent computations.

    Attributes:
        commodities: Commodity records in matrix order
        matrix: Square physical input matrix (n x n)
        profit_rate: Uniform rate of profit r
        wage: Wage rate w (numeraire)
    """

    commodities: tuple[Commodity, ...] = Field(default_factory=tuple)
    matrix: np.ndarray = Field(default_factory=lambda: np.zeros((0, 0)))
    profit_rate: float = Field(default=0.0, description="Rate of profit r")
    wage: float = Field(default=1.0, description="Wage rate w")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("matrix", mode="before")
    @classmethod
    def _copy_matrix(cls, v: Any) -> np.ndarray:
        matrix = np.array(v, dtype=float, copy=True)
        if matrix.size == 0:
            matrix = np.zeros((0, 0), dtype=float)
        matrix.setflags(write=False)
        return matrix

    @model_validator(mode="after")
    def _check_dimensions(self) -> SystemSnapshot:
        n = len(self.commodities)
        if self.matrix.ndim != 2 or self.matrix.shape[0] != self.matrix.shape[1]:
            raise ValueError(f"Input matrix must be square, got shape {self.matrix.shape}")
        if self.matrix.shape[0] != n:
            raise ValueError(
                f"Input matrix is {self.matrix.shape[0]}x{self.matrix.shape[1]} "
                f"but there are {n} commodities"
            )
        return self

    @classmethod
    def from_records(
        cls,
        commodities: Sequence[Commodity | dict[str, Any]],
        matrix: Sequence[Sequence[float]] | np.ndarray,
        *,
        profit_rate: float = 0.0,
        wage: float = 1.0,
    ) -> SystemSnapshot:
        """Build a snapshot from plain records (dicts or ``Commodity``)."""
        records = tuple(
            c if isinstance(c, Commodity) else Commodity.model_validate(c)
            for c in commodities
        )
        return cls(commodities=records, matrix=matrix, profit_rate=profit_rate, wage=wage)

    def __len__(self) -> int:
        return len(self.commodities)

    @property
    def n(self) -> int:
        """Number of commodities."""
        return len(self.commodities)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.commodities]

    @property
    def total_outputs(self) -> np.ndarray:
        """Vector X of total outputs."""
        return np.array([c.total_output for c in self.commodities], dtype=float)

    @property
    def labor_inputs(self) -> np.ndarray:
        """Vector L of labor inputs."""
        return np.array([c.labor_input for c in self.commodities], dtype=float)

    def with_rates(
        self,
        profit_rate: float | None = None,
        wage: float | None = None,
    ) -> SystemSnapshot:
        """Return a copy with a different profit rate and/or wage."""
        return SystemSnapshot(
            commodities=self.commodities,
            matrix=self.matrix,
            profit_rate=self.profit_rate if profit_rate is None else profit_rate,
            wage=self.wage if wage is None else wage,
        )

    def non_positive_output(self, abs_tol: float = 0.0) -> list[int]:
        """Positions of commodities whose total output is ``<= abs_tol``."""
        return [
            idx for idx, c in enumerate(self.commodities) if c.total_output <= abs_tol
        ]

    def index(self, commodity_id: int) -> int:
        """Position of the commodity with ``commodity_id``.

        Raises:
            KeyError: If no commodity carries that id
        """
        for idx, commodity in enumerate(self.commodities):
            if commodity.id == commodity_id:
                return idx
        raise KeyError(f"No commodity with id {commodity_id}")
