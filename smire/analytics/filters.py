"""Equality filtering over the record store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Optional

from smire.data.normalize import is_blank, month_key

@dataclass(frozen=True)
class FilterCriteria:
    month: Optional[str] = None
    pillar: Optional[str] = None
    product_type: Optional[str] = None
    brand_id: Optional[str] = None
    merchant_name: Optional[str] = None

    def active(self) -> dict[str, str]:
        """Criteria that constrain the scan; blank values are wildcards."""
        return {name: value for name, value in asdict(self).items() if not is_blank(value)}

    def as_dict(self) -> dict[str, Optional[str]]:
        return asdict(self)


def _text(value: Any) -> str:
    return str(value).strip().casefold()


def _month_matches(expected: str, actual: Any) -> bool:
    expected_key = month_key(expected)
    actual_key = month_key(actual)
    if expected_key is not None and actual_key is not None:
        return expected_key == actual_key
    return _text(expected) == _text(actual)


def field_matches(field: str, expected: str, record: Mapping[str, Any]) -> bool:
    actual = record.get(field)
    if actual is None:
        return False
    if field == "month":
        return _month_matches(expected, actual)
    return _text(expected) == _text(actual)


def filter_records(
    records: Iterable[Mapping[str, Any]],
    criteria: FilterCriteria | None = None,
) -> list[Mapping[str, Any]]:
    """Single linear scan keeping records that satisfy every active criterion."""
    active = criteria.active() if criteria else {}
    if not active:
        return list(records)
    return [
        record
        for record in records
        if all(field_matches(field, expected, record) for field, expected in active.items())
    ]
