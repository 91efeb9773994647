"""Core data structures for the price model.

- Commodity: one single-product industry
- SystemSnapshot: immutable input bundle for one recomputation
"""

from sraffa.core.commodities import Commodity, SystemSnapshot

__all__ = [
    "Commodity",
    "SystemSnapshot",
]
