"""Exceptions raised at the input boundary of the engine."""

from __future__ import annotations


class SnapshotValidationError(ValueError):
    """A snapshot was refused before computation.

    Attributes:
        codes: QA check codes (or reasons) that caused the rejection
    """

    def __init__(self, message: str, codes: list[str] | None = None) -> None:
        super().__init__(message)
        self.codes = list(codes or [])
