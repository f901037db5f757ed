"""Data contract tests for the shipped merchant dataset."""

from pathlib import Path

import pytest

from smire.agents.tools import PaymentsAnalyticsTools
from smire.data.normalize import month_key, try_parse_number
from smire.data.quality import REQUIRED_COLUMNS, profile_dataset
from smire.data.store import RecordStore

DATASET = Path(__file__).resolve().parents[2] / "data" / "data_smire_final.json"


@pytest.fixture(scope="module")
def shipped_store() -> RecordStore:
    return RecordStore.from_path(DATASET)


class TestShippedDataset:
    VALID_CHURN_STATUS = {"ACTIVE", "RISK"}

    def test_dataset_is_not_empty(self, shipped_store):
        assert len(shipped_store) > 0

    def test_all_required_columns_present(self, shipped_store):
        for record in shipped_store:
            for col in REQUIRED_COLUMNS:
                assert col in record, f"Missing column: {col} in {dict(record)}"

    def test_month_tokens_use_mon_yy(self, shipped_store):
        for record in shipped_store:
            assert month_key(record["month"]) is not None
            assert record["month"][:3].isalpha()

    def test_churn_status_values(self, shipped_store):
        statuses = {record["Churn_Status"] for record in shipped_store}
        assert statuses <= self.VALID_CHURN_STATUS

    def test_profile_matches_contract(self, shipped_store):
        report = profile_dataset(shipped_store)
        assert report["missing_columns"] == []
        assert report["invalid_month_tokens"] == []
        assert report["rows_without_month"] == 0

    def test_tpv_values_are_mostly_numeric(self, shipped_store):
        parsed = [try_parse_number(record["tpv"]) for record in shipped_store]
        assert sum(value is not None for value in parsed) >= len(parsed) - 1

    def test_latest_month_is_chronological(self, shipped_store):
        assert shipped_store.latest_month == "Nov-24"
        assert PaymentsAnalyticsTools(shipped_store).summary()["filters"]["month"] == "Nov-24"
