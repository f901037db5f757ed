"""Value normalization: numeric coercion and month tokens.

Every numeric read of a record field goes through ``parse_number`` so that the
rest of the package never sees the dataset's mixed representations
(``"1,234"``, ``" 1 234 "``, ``1234``, ``1234.0``).
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from smire.common.errors import InvalidArgumentError

FALLBACK_MONTH = "N/A"

MONTH_ABBREVIATIONS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

_MON_YY = re.compile(r"^([A-Za-z]{3})-(\d{2})$")
_YYYY_MM = re.compile(r"^(\d{4})-(\d{2})$")

MONTH_FORMAT_HINT = "month must look like 'Oct-24' (Mon-YY) or '2024-10' (YYYY-MM)"


def try_parse_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    cleaned = re.sub(r"\s+", "", str(value).replace(",", ""))
    if not cleaned or cleaned.lower() == "null":
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_number(value: Any) -> float:
    """Coerce a record field to float; malformed or missing values count as 0."""
    number = try_parse_number(value)
    return 0.0 if number is None else number


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def month_key(token: Any) -> tuple[int, int] | None:
    """Return ``(year, month)`` for a token in either accepted spelling."""
    if not isinstance(token, str):
        return None
    text = token.strip()

    match = _MON_YY.match(text)
    if match:
        abbreviation = match.group(1).lower()
        if abbreviation not in MONTH_ABBREVIATIONS:
            return None
        return 2000 + int(match.group(2)), MONTH_ABBREVIATIONS.index(abbreviation) + 1

    match = _YYYY_MM.match(text)
    if match:
        month = int(match.group(2))
        if 1 <= month <= 12:
            return int(match.group(1)), month
    return None


def validate_month_format(month: str) -> str:
    if month_key(month) is None:
        raise InvalidArgumentError(f"{MONTH_FORMAT_HINT}; got {month!r}")
    return month


def latest_month(records: Iterable[Mapping[str, Any]]) -> str:
    """Latest month token across records, or ``FALLBACK_MONTH`` when there is none.

    Tokens that parse as a month compare chronologically and outrank any token
    that does not; unparseable tokens compare as plain strings.
    """
    best: tuple | None = None
    best_token = FALLBACK_MONTH
    for record in records:
        token = record.get("month")
        if is_blank(token):
            continue
        token = str(token)
        key = month_key(token)
        rank = (1, key, "") if key is not None else (0, (0, 0), token)
        if best is None or rank > best:
            best = rank
            best_token = token
    return best_token


def resolve_month(month: str | None, records: Iterable[Mapping[str, Any]]) -> str:
    if not is_blank(month):
        return validate_month_format(month)
    return latest_month(records)
