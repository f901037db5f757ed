"""Shared pytest fixtures."""

from __future__ import annotations

import json

import pytest

from smire.agents.tools import PaymentsAnalyticsTools
from smire.data.store import RecordStore


@pytest.fixture
def sample_records() -> list[dict]:
    return [
        {"month": "Sep-24", "pillar": "Retail", "product_type": "QRIS", "brand_id": "B1",
         "merchant_name": "Toko Maju", "tpv": "1,000", "tpt": "10",
         "Churn_Prediction": "Stable", "Churn_Status": "ACTIVE", "Transaction_Type": "PROFIT"},
        {"month": "Oct-24", "pillar": "Retail", "product_type": "QRIS", "brand_id": "B1",
         "merchant_name": "Toko Maju", "tpv": "1,500", "tpt": "15",
         "Churn_Prediction": "Stable", "Churn_Status": "ACTIVE", "Transaction_Type": "PROFIT"},
        {"month": "Oct-24", "pillar": "Retail", "product_type": "Virtual Account", "brand_id": "B1",
         "merchant_name": "Toko Maju", "tpv": 500, "tpt": 5,
         "Churn_Prediction": "Stable", "Churn_Status": "ACTIVE", "Transaction_Type": "CHURN"},
        {"month": "Oct-24", "pillar": "F&B", "product_type": "QRIS", "brand_id": "B2",
         "merchant_name": "Kopi Senja", "tpv": "2,000", "tpt": "40",
         "Churn_Prediction": "Critical Risk", "Churn_Status": "RISK", "Transaction_Type": "CHURN"},
        {"month": "Oct-24", "pillar": "F&B", "product_type": "E-Wallet", "brand_id": "B3",
         "merchant_name": "Warung Sari", "tpv": "abc", "tpt": None,
         "Churn_Prediction": "Critical Risk", "Churn_Status": "risk"},
        {"month": "Oct-24", "product_type": "E-Wallet", "brand_id": "B4",
         "merchant_name": "Toko Baru", "tpv": "1,000", "tpt": "20"},
    ]


@pytest.fixture
def store(sample_records) -> RecordStore:
    return RecordStore(sample_records)


@pytest.fixture
def tools(store) -> PaymentsAnalyticsTools:
    return PaymentsAnalyticsTools(store)


@pytest.fixture
def empty_tools() -> PaymentsAnalyticsTools:
    return PaymentsAnalyticsTools(RecordStore([]))


@pytest.fixture
def dataset_path(tmp_path, sample_records):
    path = tmp_path / "data_smire_final.json"
    path.write_text(json.dumps(sample_records))
    return path
