"""Data quality profile of the loaded dataset."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from smire.data.normalize import is_blank, month_key, try_parse_number

REQUIRED_COLUMNS = ["month", "brand_id", "product_type", "pillar", "tpv", "tpt"]
NUMERIC_COLUMNS = ["tpv", "tpt"]


def _is_missing(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return True
    return is_blank(value)


def _malformed_count(series: pd.Series) -> int:
    present = series[~series.map(_is_missing).astype(bool)]
    return int(present.map(lambda value: try_parse_number(value) is None).sum())


def profile_dataset(records: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    df = pd.DataFrame.from_records([dict(record) for record in records])

    missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    report: dict[str, Any] = {
        "rows": int(len(df)),
        "missing_columns": missing_columns,
        "rows_without_month": 0,
        "invalid_month_tokens": [],
        "malformed_numeric": {col: 0 for col in NUMERIC_COLUMNS},
        "distinct_brands": 0,
        "rows_per_month": {},
    }
    if df.empty:
        return report

    if "month" in df.columns:
        months = df["month"]
        blank = months.map(_is_missing).astype(bool)
        report["rows_without_month"] = int(blank.sum())
        present = months[~blank].astype(str)
        invalid = present[present.map(lambda token: month_key(token) is None).astype(bool)]
        report["invalid_month_tokens"] = sorted(invalid.unique().tolist())
        report["rows_per_month"] = {
            str(token): int(count) for token, count in present.value_counts(sort=False).items()
        }
    else:
        report["rows_without_month"] = int(len(df))

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            report["malformed_numeric"][col] = _malformed_count(df[col])

    if "brand_id" in df.columns:
        brands = df["brand_id"]
        present_brands = brands[~brands.map(_is_missing).astype(bool)]
        report["distinct_brands"] = int(present_brands.astype(str).nunique())

    return report
