"""Dataset loader: reads the merchant-transaction JSON resource."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from smire.observability.logging import get_logger

logger = get_logger("loader")


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects.

    Never raises: a missing, unreadable or malformed resource yields ``[]`` so
    the tools still answer with zeroed aggregates.
    """
    source = Path(path)
    try:
        with source.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        logger.warning("dataset_load_failed", path=str(source), error=str(exc))
        return []

    if not isinstance(payload, list):
        logger.warning(
            "dataset_load_failed",
            path=str(source),
            error=f"expected a JSON array, got {type(payload).__name__}",
        )
        return []

    records: list[dict[str, Any]] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            logger.warning("dataset_entry_skipped", path=str(source), index=index)
            continue
        records.append(entry)

    if records:
        first = records[0]
        logger.info(
            "dataset_loaded",
            path=str(source),
            rows=len(records),
            first_tpv=first.get("tpv"),
            first_tpt=first.get("tpt"),
        )
    else:
        logger.warning("dataset_empty", path=str(source))
    return records
