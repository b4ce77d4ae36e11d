"""Test the JSON-file bill history."""
import json

import pytest

from bill_split.errors import HistoryUnreadableError
from bill_split.passes.split_calculation import calculate_split
from bill_split.storage.history import HistoryStore, StoredBill, export_payload
from tests.factories import make_bill


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "nested" / "history.json")


class TestHistoryReads:
    def test_missing_file_is_empty(self, store):
        assert store.list_bills() == []

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")
        assert HistoryStore(path).list_bills() == []

    def test_wrong_shape_is_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text(json.dumps([{"title": "no data"}]), encoding="utf-8")
        assert HistoryStore(path).list_bills() == []

    def test_get_unknown(self, store):
        assert store.get("missing") is None


class TestHistoryWrites:
    def test_save_and_reload(self, store, demo_bill):
        result = calculate_split(demo_bill)
        saved = store.save(demo_bill, result)

        entries = store.list_bills()
        assert len(entries) == 1
        assert entries[0].id == saved.id
        assert entries[0].bill == demo_bill
        assert entries[0].result == result

    def test_default_title(self, store, demo_bill):
        saved = store.save(demo_bill, calculate_split(demo_bill))
        assert saved.title == "Ιούν 2025"

    def test_custom_title(self, store, demo_bill):
        saved = store.save(demo_bill, calculate_split(demo_bill), title="Summer")
        assert store.get(saved.id).title == "Summer"

    def test_newest_first(self, store, demo_bill):
        first = store.save(demo_bill, calculate_split(demo_bill), title="first")
        second = store.save(demo_bill, calculate_split(demo_bill), title="second")
        assert [entry.id for entry in store.list_bills()] == [second.id, first.id]

    def test_ids_unique(self, store, demo_bill):
        result = calculate_split(demo_bill)
        ids = {store.save(demo_bill, result).id for _ in range(3)}
        assert len(ids) == 3

    def test_delete(self, store, demo_bill):
        saved = store.save(demo_bill, calculate_split(demo_bill))
        assert store.delete(saved.id) is True
        assert store.list_bills() == []

    def test_delete_unknown(self, store, demo_bill):
        store.save(demo_bill, calculate_split(demo_bill))
        assert store.delete("missing") is False
        assert len(store.list_bills()) == 1

    def test_file_layout(self, store, demo_bill):
        store.save(demo_bill, calculate_split(demo_bill))
        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert set(raw[0]) == {"id", "title", "date", "data", "result"}
        assert raw[0]["data"]["period"]["from"] == "2025-06-01"
        assert raw[0]["title"] == "Ιούν 2025"

    def test_stored_bill_aliases(self, demo_bill):
        entry = StoredBill(title="t", bill=demo_bill, result=calculate_split(demo_bill))
        assert entry.model_dump(by_alias=True)["data"]["kwh"]["occupantA"] == 85


class TestExportPayload:
    def test_shape(self, demo_bill):
        payload = export_payload(demo_bill, calculate_split(demo_bill))
        assert set(payload) == {"billData", "result"}
        assert set(payload["result"]) == {"totals", "breakdown"}
        assert payload["billData"]["charges"]["credit"]["amount"] == 7.88
        assert payload["result"]["totals"]["total"] == pytest.approx(117.24)

    def test_breakdown_lines(self):
        bill = make_bill()
        payload = export_payload(bill, calculate_split(bill))
        assert [line["categoryKey"] for line in payload["result"]["breakdown"]] == ["energy_supply"]


def _raw_titles(store):
    return [record.get("title") for record in json.loads(store.path.read_text(encoding="utf-8"))]


class TestHistoryDamagedRecords:
    def test_invalid_record_survives_save(self, store, demo_bill):
        result = calculate_split(demo_bill)
        for index in range(3):
            store.save(demo_bill, result, title=f"old{index}")
        records = json.loads(store.path.read_text(encoding="utf-8"))
        records.append({"title": "hand-edited"})
        store.path.write_text(json.dumps(records), encoding="utf-8")

        store.save(demo_bill, result, title="new")

        assert _raw_titles(store) == ["new", "old2", "old1", "old0", "hand-edited"]
        assert [entry.title for entry in store.list_bills()] == ["new", "old2", "old1", "old0"]

    def test_invalid_record_survives_delete(self, store, demo_bill):
        result = calculate_split(demo_bill)
        keep = store.save(demo_bill, result, title="keep")
        drop = store.save(demo_bill, result, title="drop")
        records = json.loads(store.path.read_text(encoding="utf-8"))
        records.append("not a record")
        store.path.write_text(json.dumps(records), encoding="utf-8")

        assert store.delete(drop.id) is True

        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert raw[1] == "not a record"
        assert [entry.id for entry in store.list_bills()] == [keep.id]

    def test_unreadable_file_not_overwritten(self, tmp_path, demo_bill):
        path = tmp_path / "history.json"
        path.write_text("{broken", encoding="utf-8")
        store = HistoryStore(path)

        with pytest.raises(HistoryUnreadableError):
            store.save(demo_bill, calculate_split(demo_bill))
        with pytest.raises(HistoryUnreadableError):
            store.delete("anything")
        assert path.read_text(encoding="utf-8") == "{broken"

    def test_object_instead_of_list(self, tmp_path, demo_bill):
        path = tmp_path / "history.json"
        path.write_text(json.dumps({"bills": []}), encoding="utf-8")
        store = HistoryStore(path)

        assert store.list_bills() == []
        with pytest.raises(HistoryUnreadableError):
            store.save(demo_bill, calculate_split(demo_bill))

    def test_no_staging_file_left(self, store, demo_bill):
        store.save(demo_bill, calculate_split(demo_bill))
        assert [p.name for p in store.path.parent.iterdir()] == ["history.json"]
