from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable

from ..schemas.table import Column
from ..utils.render import render
from .ordering import sort_terms
from .records import classify_record, keys_for_record


log = logging.getLogger("tabular.core.columns")


def keys_for_records(records: Iterable[Any]) -> list[Hashable]:
    """Compute table column keys that accommodate all the given records."""
    classified = [classify_record(record) for record in records]
    if not classified:
        return []

    first_keys = keys_for_record(classified[0])
    union: set[Hashable] = set()
    for record in classified:
        union.update(keys_for_record(record))
    all_keys = sort_terms(union)

    # Same structure everywhere keeps the first record's order,
    # otherwise fall back to the sorted accumulated keys
    if len(first_keys) == len(all_keys):
        return first_keys
    log.debug(
        "Heterogeneous records: %d keys in first record, %d overall",
        len(first_keys),
        len(all_keys),
    )
    return all_keys


def keys_to_columns(keys: Iterable[Hashable]) -> list[Column]:
    return [Column(key=key, label=render(key)) for key in keys]
