from __future__ import annotations

from typing import Any, Hashable, Iterable, Sequence

from ..core.records import classify_record, get_field
from .render import render


def record_to_row(record: Any, keys: Iterable[Hashable]) -> dict[Hashable, str]:
    """Convert a record to a row of display strings, one entry per key.

    Missing fields render like any other ``None`` value.
    """
    record = classify_record(record)
    return {key: render(get_field(record, key)) for key in keys}


def records_to_rows(records: Iterable[Any], keys: Sequence[Hashable]) -> list[dict[Hashable, str]]:
    """Normalize a batch of records into rows keyed by the given column keys."""
    keys = list(keys)
    return [record_to_row(record, keys) for record in records]
