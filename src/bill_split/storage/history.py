"""JSON-file history of calculated bills."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import HistoryUnreadableError
from ..international.date_parsing import month_title
from ..models.schema import BillDescription, CalculationResult

logger = structlog.get_logger(__name__)


class StoredBill(BaseModel):
    """One saved calculation, newest first in the history file."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="date")
    bill: BillDescription = Field(alias="data")
    result: CalculationResult


class HistoryStore:
    """Whole-file read/modify/write store; not safe for concurrent writers."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ── Reads ────────────────────────────────────────────────────────────

    def list_bills(self) -> list[StoredBill]:
        """All saved bills, newest first.

        A missing or unreadable file reads as empty. Records that no longer
        validate are skipped here but stay in the file.
        """
        try:
            records = self._read_records()
        except HistoryUnreadableError as exc:
            logger.warning("history_unreadable", path=str(self._path), error=str(exc))
            return []

        entries: list[StoredBill] = []
        for position, record in enumerate(records):
            try:
                entries.append(StoredBill.model_validate(record))
            except ValidationError as exc:
                logger.warning("history_record_skipped", path=str(self._path), position=position,
                               error_count=exc.error_count())
        return entries

    def get(self, bill_id: str) -> StoredBill | None:
        for entry in self.list_bills():
            if entry.id == bill_id:
                return entry
        return None

    # ── Writes ───────────────────────────────────────────────────────────
    # Writes work on the raw records so that entries which fail validation
    # are carried over untouched.

    def save(self, bill: BillDescription, result: CalculationResult, title: str | None = None) -> StoredBill:
        """Prepend a new record; the default title is the period's month and year.

        Raises:
            HistoryUnreadableError: the existing file is not a list of records.
        """
        records = self._read_records()
        entry = StoredBill(
            title=title or month_title(bill.period.period_from),
            bill=bill,
            result=result,
        )
        self._write([entry.model_dump(mode="json", by_alias=True), *records])
        logger.info("history_saved", bill_id=entry.id, title=entry.title)
        return entry

    def delete(self, bill_id: str) -> bool:
        """Remove a record. Returns ``False`` when no record has that id.

        Raises:
            HistoryUnreadableError: the existing file is not a list of records.
        """
        records = self._read_records()
        remaining = [record for record in records if not _has_id(record, bill_id)]
        if len(remaining) == len(records):
            return False
        self._write(remaining)
        logger.info("history_deleted", bill_id=bill_id)
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _read_records(self) -> list:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise HistoryUnreadableError(f"Cannot read history file {self._path}: {exc}") from exc
        if not isinstance(raw, list):
            raise HistoryUnreadableError(f"History file {self._path} does not hold a list of records")
        return raw

    def _write(self, records: list) -> None:
        """Write to a staging file, then swap it in with a single rename."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_name(self._path.name + ".tmp")
        staging.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        staging.replace(self._path)


def _has_id(record: object, bill_id: str) -> bool:
    return isinstance(record, Mapping) and record.get("id") == bill_id


def export_payload(bill: BillDescription, result: CalculationResult) -> dict:
    """The JSON shape used when a calculation is copied or exported."""
    calculated = result.to_json_dict()
    return {
        "billData": bill.to_json_dict(),
        "result": {
            "totals": calculated["totals"],
            "breakdown": calculated["breakdown"],
        },
    }
