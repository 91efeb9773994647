"""Enum definitions for engine configuration and result status."""

from __future__ import annotations

from enum import Enum


class ZeroOutputPolicy(str, Enum):
    """How a commodity with zero total output is treated.

    ``TOLERATE`` defines its coefficients and unit labor as zero.
    ``REJECT`` refuses to compute the snapshot at all.
    """

    TOLERATE = "tolerate"
    REJECT = "reject"

    @classmethod
    def from_alias(cls, value: str | ZeroOutputPolicy | None) -> ZeroOutputPolicy:
        """Normalize policy aliases into one canonical ``ZeroOutputPolicy``."""
        if isinstance(value, ZeroOutputPolicy):
            return value
        normalized = str(value or cls.TOLERATE.value).strip().lower()
        aliases: dict[str, ZeroOutputPolicy] = {
            "tolerate": cls.TOLERATE,
            "zero": cls.TOLERATE,
            "allow": cls.TOLERATE,
            "lenient": cls.TOLERATE,
            "reject": cls.REJECT,
            "strict": cls.REJECT,
            "error": cls.REJECT,
        }
        if normalized not in aliases:
            allowed = [m.value for m in cls]
            raise ValueError(f"Unsupported zero_output_policy '{value}'. Allowed: {allowed}")
        return aliases[normalized]


class PriceStatus(str, Enum):
    """Outcome of one price-system solve."""

    VALID = "valid"
    INVALID_PRICE_REGIME = "invalid_price_regime"
    SINGULAR_SYSTEM = "singular_system"
