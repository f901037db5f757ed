"""Immutable in-memory record store."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Any

from smire.data.loader import load_records
from smire.data.normalize import latest_month

Record = Mapping[str, Any]


class RecordStore:
    """Read-only snapshot of the dataset, loaded once and shared by every tool call.

    Each record is copied and wrapped in a read-only mapping, so neither the
    caller that supplied the rows nor any tool can change the snapshot later.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()):
        self._records: tuple[Record, ...] = tuple(
            MappingProxyType(dict(record)) for record in records
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "RecordStore":
        return cls(load_records(path))

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @cached_property
    def latest_month(self) -> str:
        return latest_month(self._records)
