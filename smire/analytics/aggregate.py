"""Reductions over filtered record views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from smire.data.normalize import is_blank, parse_number

DEFAULT_GROUP = "Unknown"
INFINITE_GROWTH = "Inf"


def sum_field(records: Iterable[Mapping[str, Any]], field: str) -> float:
    return float(sum(parse_number(record.get(field)) for record in records))


def group_by(
    records: Iterable[Mapping[str, Any]],
    key_field: str,
    default_key: str = DEFAULT_GROUP,
) -> dict[str, list[Mapping[str, Any]]]:
    """Partition records by a field; records without it share ``default_key``."""
    groups: dict[str, list[Mapping[str, Any]]] = {}
    for record in records:
        value = record.get(key_field)
        key = default_key if is_blank(value) else str(value)
        groups.setdefault(key, []).append(record)
    return groups


def count_distinct(records: Iterable[Mapping[str, Any]], field: str) -> int:
    return len(distinct_values(records, field))


def distinct_values(records: Iterable[Mapping[str, Any]], field: str) -> list[str]:
    seen: dict[str, None] = {}
    for record in records:
        value = record.get(field)
        if not is_blank(value):
            seen.setdefault(str(value), None)
    return list(seen)


def tally(records: Iterable[Mapping[str, Any]], field: str) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        value = record.get(field)
        if is_blank(value):
            continue
        counts[str(value)] = counts.get(str(value), 0) + 1
    return counts


def percentage_of(part: float, whole: float) -> str:
    if not whole:
        return "0.00%"
    return f"{part / whole * 100.0:.2f}%"


def growth_percentage(before: float, after: float) -> str:
    if before > 0:
        return f"{(after - before) / before * 100.0:.2f}%"
    if after > 0:
        return INFINITE_GROWTH
    return "0.00%"


def tpv_tpt_breakdown(groups: Mapping[str, Sequence[Mapping[str, Any]]]) -> dict[str, dict[str, float]]:
    return {
        key: {"TPV_Value": sum_field(rows, "tpv"), "TPT_Value": sum_field(rows, "tpt")}
        for key, rows in groups.items()
    }
