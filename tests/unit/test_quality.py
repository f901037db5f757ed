"""Unit tests for the dataset quality profile."""

from smire.data.quality import profile_dataset


def test_profile_of_sample(store):
    report = profile_dataset(store)
    assert report["rows"] == 6
    assert report["missing_columns"] == []
    assert report["rows_without_month"] == 0
    assert report["invalid_month_tokens"] == []
    assert report["malformed_numeric"] == {"tpv": 1, "tpt": 0}
    assert report["distinct_brands"] == 4
    assert report["rows_per_month"] == {"Sep-24": 1, "Oct-24": 5}


def test_profile_flags_bad_rows():
    report = profile_dataset(
        [
            {"month": "jun 2025", "brand_id": "B1", "tpv": "1,000"},
            {"brand_id": "B2", "tpv": "n/a", "tpt": "x"},
        ]
    )
    assert set(report["missing_columns"]) == {"product_type", "pillar"}
    assert report["rows_without_month"] == 1
    assert report["invalid_month_tokens"] == ["jun 2025"]
    assert report["malformed_numeric"] == {"tpv": 1, "tpt": 1}


def test_profile_of_empty_dataset():
    report = profile_dataset([])
    assert report["rows"] == 0
    assert report["missing_columns"] == ["month", "brand_id", "product_type", "pillar", "tpv", "tpt"]
    assert report["rows_per_month"] == {}
