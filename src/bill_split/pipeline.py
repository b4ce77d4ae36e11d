"""Pipeline orchestrator: extract text → parse → complete → validate → calculate."""
from __future__ import annotations

from collections.abc import Mapping

import structlog

from .config import Settings
from .errors import ExtractionFailure
from .models.extraction import CompletedBill, ExtractionResult
from .models.schema import AreaSplit, BillDescription, BillingPeriod, CalculationResult, ChargeKey
from .passes.bill_parsing import parse_bill_text
from .passes.completion import complete_bill
from .passes.split_calculation import calculate_split
from .passes.text_extraction import extract_text
from .passes.validation import load_bill, load_bill_json
from .storage.history import HistoryStore, StoredBill

logger = structlog.get_logger(__name__)


class SplitPipeline:
    """Ties the extraction, parsing and calculation passes to one configuration."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.history = HistoryStore(self.settings.history_path)

    # ── Document → extraction ───────────────────────────────────────────

    def read_document(self, file_bytes: bytes) -> ExtractionResult:
        """Extract the text of a bill PDF and parse it.

        Raises:
            ExtractionFailure: the document has no usable text layer.
        """
        extracted = extract_text(file_bytes, min_chars=self.settings.min_text_chars)
        if not extracted.success:
            logger.warning("pipeline_extraction_failed", error=extracted.error)
            raise ExtractionFailure(extracted.error or "Text extraction failed")
        return parse_bill_text(extracted.text)

    def read_text(self, text: str) -> ExtractionResult:
        return parse_bill_text(text)

    # ── Extraction → bill ───────────────────────────────────────────────

    def complete(
        self,
        extraction: ExtractionResult,
        kwh_a: float,
        kwh_b: float,
        assignments: Mapping[int, ChargeKey | str] | None = None,
        period: BillingPeriod | None = None,
    ) -> CompletedBill:
        """Build a bill from a reviewed extraction using the configured areas and names."""
        return complete_bill(
            extraction,
            kwh_a,
            kwh_b,
            assignments=assignments,
            period=period,
            sqm=AreaSplit(occupant_a=self.settings.default_sqm_a, occupant_b=self.settings.default_sqm_b),
            occupant_names=(self.settings.occupant_a_name, self.settings.occupant_b_name),
        )

    # ── Bill → result ───────────────────────────────────────────────────

    def calculate(self, bill: BillDescription) -> CalculationResult:
        return calculate_split(bill)

    def calculate_data(self, candidate: object) -> tuple[BillDescription, CalculationResult]:
        """Validate a decoded JSON bill and calculate it."""
        bill = load_bill(candidate)
        return bill, calculate_split(bill)

    def calculate_json(self, text: str) -> tuple[BillDescription, CalculationResult]:
        """Validate JSON bill text and calculate it."""
        bill = load_bill_json(text)
        return bill, calculate_split(bill)

    def save(self, bill: BillDescription, result: CalculationResult, title: str | None = None) -> StoredBill:
        return self.history.save(bill, result, title=title)
