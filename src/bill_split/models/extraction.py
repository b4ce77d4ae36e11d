"""Models produced by text extraction and bill text parsing.

These carry partially-confident data that a person reviews and completes
before anything reaches the split calculator.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from bill_split.models.schema import BillDescription, ChargeKey


class ConfidenceLevel(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TextExtraction(BaseModel):
    """Result of reading the text layer out of a document."""

    success: bool
    text: str = ""
    error: str | None = None


class ExtractedField(BaseModel):
    """A charge category matched on a single line of bill text."""

    key: ChargeKey
    label: str
    value: float | None = None
    raw_match: str
    confidence: ConfidenceLevel


class UnresolvedLine(BaseModel):
    """A line with a plausible amount that no category rule claimed."""

    text: str
    potential_amount: float | None = None


class ExtractionResult(BaseModel):
    """Output of the bill text parser."""

    period_from: str | None = None
    period_to: str | None = None
    total_kwh: float | None = None
    fields: list[ExtractedField] = Field(default_factory=list)
    unresolved_lines: list[UnresolvedLine] = Field(default_factory=list)
    raw_text: str = ""

    def field(self, key: ChargeKey | str) -> ExtractedField | None:
        for extracted in self.fields:
            if extracted.key == key:
                return extracted
        return None

    @property
    def needs_manual_assignment(self) -> bool:
        """True when leftover amounts should be offered for manual assignment."""
        return bool(self.unresolved_lines) and len(self.fields) < 5


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class CompletedBill(BaseModel):
    """A bill description assembled from parsed text plus human input."""

    bill: BillDescription
    warnings: list[str] = Field(default_factory=list)
