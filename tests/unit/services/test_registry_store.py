"""
Tests for the JSON file registry store.
"""

import json
import os
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from src.models.token import TokenRecord
from src.services.registry_store import JsonFileTokenStore, TokenStore, utc_now_iso
from src.utils.exceptions import StorageUnavailable, TokenRegistryErrorCodes, ValidationError


def _fields(owner="A", token_name="AT", **overrides):
    fields = {
        "owner": owner,
        "tokenName": token_name,
        "balance": 10,
        "fundingSource": "F",
        "fee": 1,
        "liquidity": 100,
        "supplyPercentAdded": 1,
    }
    fields.update(overrides)
    return fields


def _parse_instant(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestInitialize:
    def test_creates_directory_and_empty_array(self, tmp_path):
        path = tmp_path / "nested" / "tokens.json"
        store = JsonFileTokenStore(str(path))

        store.initialize()

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_keeps_existing_file(self, tmp_path):
        path = tmp_path / "tokens.json"
        existing = [{**_fields(), "id": 1, "timestamp": "2023-10-15T14:30:00.000Z"}]
        path.write_text(json.dumps(existing), encoding="utf-8")

        JsonFileTokenStore(str(path)).initialize()

        assert json.loads(path.read_text(encoding="utf-8")) == existing

    def test_store_implements_interface(self, token_store):
        assert isinstance(token_store, TokenStore)


class TestCreate:
    def test_first_record_on_empty_store(self, token_store, token_fields):
        started = datetime.now(timezone.utc).replace(microsecond=0)

        record = token_store.create(token_fields)

        assert record.id == 1
        assert record.owner == "A"
        assert record.token_name == "AT"
        assert record.balance == 10
        assert _parse_instant(record.timestamp) >= started
        assert token_store.list() == [record]

    def test_ids_are_strictly_increasing(self, token_store):
        ids = [token_store.create(_fields(owner=f"owner-{i}")).id for i in range(7)]

        assert ids == [1, 2, 3, 4, 5, 6, 7]
        assert len(set(ids)) == len(ids)

    def test_list_preserves_call_order_and_prior_records(self, token_store):
        first = token_store.create(_fields(owner="first"))
        second = token_store.create(_fields(owner="second"))
        third = token_store.create(_fields(owner="third"))

        records = token_store.list()

        assert records == [first, second, third]
        assert [r.owner for r in records] == ["first", "second", "third"]

    def test_caller_cannot_supply_id_or_timestamp(self, token_store):
        record = token_store.create(_fields(id=99, timestamp="1999-01-01T00:00:00.000Z"))

        assert record.id == 1
        assert record.timestamp != "1999-01-01T00:00:00.000Z"

    def test_uses_injected_clock(self, data_file, token_fields):
        store = JsonFileTokenStore(str(data_file), clock=lambda: "2024-01-02T03:04:05.678Z")
        store.initialize()

        assert store.create(token_fields).timestamp == "2024-01-02T03:04:05.678Z"

    def test_persisted_layout(self, token_store, token_fields, data_file):
        token_store.create(token_fields)

        text = data_file.read_text(encoding="utf-8")
        stored = json.loads(text)

        assert text.startswith("[\n  {")
        assert list(stored[0].keys()) == [
            "owner",
            "tokenName",
            "balance",
            "fundingSource",
            "fee",
            "liquidity",
            "supplyPercentAdded",
            "id",
            "timestamp",
        ]

    def test_numeric_strings_are_parsed(self, token_store):
        record = token_store.create(_fields(balance="12.5", fee="0.3"))

        assert record.balance == 12.5
        assert record.fee == 0.3

    def test_missing_balance_writes_nothing(self, token_store, token_fields):
        del token_fields["balance"]

        with pytest.raises(ValidationError) as exc_info:
            token_store.create(token_fields)

        assert exc_info.value.field == "balance"
        assert exc_info.value.error_code == TokenRegistryErrorCodes.MISSING_FIELD
        assert token_store.list() == []

    def test_validation_happens_before_any_read(self, data_file, token_fields):
        store = JsonFileTokenStore(str(data_file))  # file never initialized

        with pytest.raises(ValidationError):
            store.create({**token_fields, "fee": -1})

    def test_failed_write_leaves_previous_file_intact(self, token_store, token_fields, data_file):
        token_store.create(token_fields)
        before = data_file.read_text(encoding="utf-8")

        with patch("src.services.registry_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailable) as exc_info:
                token_store.create(_fields(owner="B"))

        assert exc_info.value.error_code == TokenRegistryErrorCodes.STORAGE_WRITE_FAILED
        assert data_file.read_text(encoding="utf-8") == before
        assert [r.owner for r in token_store.list()] == ["A"]
        assert [p for p in os.listdir(data_file.parent) if p.endswith(".tmp")] == []

    def test_create_on_unreadable_store(self, tmp_path, token_fields):
        store = JsonFileTokenStore(str(tmp_path / "missing.json"))

        with pytest.raises(StorageUnavailable):
            store.create(token_fields)


class TestList:
    def test_empty_store(self, token_store):
        assert token_store.list() == []

    def test_missing_file(self, tmp_path):
        store = JsonFileTokenStore(str(tmp_path / "missing.json"))

        with pytest.raises(StorageUnavailable) as exc_info:
            store.list()

        assert exc_info.value.error_code == TokenRegistryErrorCodes.STORAGE_READ_FAILED

    def test_corrupt_file(self, data_file, token_store):
        data_file.write_text('[{"owner": "A", ', encoding="utf-8")

        with pytest.raises(StorageUnavailable):
            token_store.list()

    def test_not_an_array(self, data_file, token_store):
        data_file.write_text('{"owner": "A"}', encoding="utf-8")

        with pytest.raises(StorageUnavailable):
            token_store.list()

    def test_malformed_record_does_not_leak_partial_data(self, data_file, token_store):
        good = {**_fields(), "id": 1, "timestamp": "2023-10-15T14:30:00.000Z"}
        data_file.write_text(json.dumps([good, {"owner": "B"}]), encoding="utf-8")

        with pytest.raises(StorageUnavailable):
            token_store.list()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"owner": 5, "balance": "lots"},
            {"tokenName": None},
            {"id": True},
            {"id": "1"},
            {"fee": -1},
            {"liquidity": float("nan")},
        ],
    )
    def test_wrongly_typed_record_is_rejected(self, data_file, token_store, overrides):
        corrupt = {**_fields(), "id": 1, "timestamp": "2023-10-15T14:30:00.000Z", **overrides}
        data_file.write_text(json.dumps([corrupt]), encoding="utf-8")

        with pytest.raises(StorageUnavailable) as exc_info:
            token_store.list()

        assert exc_info.value.error_code == TokenRegistryErrorCodes.STORAGE_READ_FAILED

    def test_read_failure_is_logged(self, tmp_path):
        store = JsonFileTokenStore(str(tmp_path / "missing.json"))

        with patch.object(store.logger, "error") as mock_error:
            with pytest.raises(StorageUnavailable):
                store.list()
            mock_error.assert_called_once()

    def test_reads_records_written_elsewhere(self, data_file, token_store):
        stored = [{**_fields(owner=name), "id": i, "timestamp": "2023-10-15T14:30:00.000Z"}
                  for i, name in enumerate(["x", "y"], start=1)]
        data_file.write_text(json.dumps(stored, indent=2), encoding="utf-8")

        records = token_store.list()

        assert records == [TokenRecord.from_dict(item) for item in stored]


def test_utc_now_iso_format():
    value = utc_now_iso()

    assert value.endswith("Z")
    assert len(value) == len("2024-01-02T03:04:05.678Z")
    assert _parse_instant(value).tzinfo is not None
