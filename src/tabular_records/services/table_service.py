from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, Sequence

from ..core.columns import keys_for_records, keys_to_columns
from ..core.ordering import term_key
from ..core.records import Record, classify_record, get_field
from ..schemas.table import TablePreview
from ..utils.rows import records_to_rows


log = logging.getLogger("tabular.services.table")


class TableService:
    """Builds display-ready table previews from ad-hoc record collections."""

    def preview(
        self,
        records: Iterable[Any],
        *,
        keys: Sequence[Hashable] | None = None,
        sort_by: Hashable | None = None,
        sort_order: str = "asc",
        name: str | None = None,
    ) -> TablePreview:
        classified = [classify_record(record) for record in records]

        if keys is None:
            selected = keys_for_records(classified)
        else:
            # Explicit keys select and order the columns; the first occurrence wins
            selected = list(dict.fromkeys(keys))

        direction = (sort_order or "").strip().casefold()
        if direction not in {"asc", "desc"}:
            raise ValueError(f"Invalid sort_order {sort_order!r} (expected: asc or desc)")

        if sort_by is not None:
            if sort_by not in selected:
                raise ValueError(f"Cannot sort by {sort_by!r}: not one of the table keys")
            classified = _sort_records(classified, sort_by, descending=direction == "desc")

        preview = TablePreview(
            name=name,
            columns=keys_to_columns(selected),
            rows=records_to_rows(classified, selected),
            total_rows=len(classified),
            sort_by=sort_by,
            sort_order=direction if sort_by is not None else None,
        )
        log.info(
            "Table preview built for %s: rows=%d, columns=%d (sort_by=%r, order=%s)",
            name or "<anonymous>",
            preview.total_rows,
            len(preview.columns),
            sort_by,
            preview.sort_order,
        )
        return preview


def _sort_records(records: list[Record], key: Hashable, *, descending: bool) -> list[Record]:
    """Stable sort on the raw field value; absent values always come last."""
    present: list[tuple[Any, Record]] = []
    absent: list[Record] = []
    for record in records:
        value = get_field(record, key)
        if value is None:
            absent.append(record)
        else:
            present.append((value, record))
    present.sort(key=lambda item: term_key(item[0]), reverse=descending)
    return [record for _, record in present] + absent
