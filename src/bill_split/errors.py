"""Exceptions raised by the bill splitter."""

from __future__ import annotations


class BillSplitError(Exception):
    """Base class for all bill splitter errors."""


class BillValidationError(BillSplitError):
    """A bill description has the wrong shape or is missing required data."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid bill data")


class ZeroConsumptionError(BillSplitError):
    """Combined kWh is zero, so nothing can be split by consumption."""

    def __init__(self, message: str = "Combined kWh cannot be zero"):
        super().__init__(message)


class ExtractionFailure(BillSplitError):
    """The source document has no usable text layer."""


class HistoryUnreadableError(BillSplitError):
    """The history file exists but is not a JSON list of records."""
