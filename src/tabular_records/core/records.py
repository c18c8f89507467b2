"""Record shapes and polymorphic field access.

Arbitrary Python objects are classified once into one of four closed
record shapes; key extraction and field lookup then dispatch on the shape
instead of inspecting raw types at every call site.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Hashable, Mapping, Union

from pydantic import BaseModel
from sqlalchemy import Row, inspect

from .config import settings
from .ordering import sort_terms
from .schema import MappedSchema, SchemaDescriptor, orm_schema


log = logging.getLogger("tabular.core.records")


# Key of the single column exposed by scalar records.
ITEM_KEY = "item"


class RecordShapeError(RuntimeError):
    """Raised when a key cannot belong to the given record shape."""


@dataclass(frozen=True)
class Positional:
    items: tuple[Any, ...]


@dataclass(frozen=True)
class AssocOrdered:
    pairs: tuple[tuple[Hashable, Any], ...]


@dataclass(frozen=True)
class AssocUnordered:
    fields: Mapping[Hashable, Any]
    schema: SchemaDescriptor | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Scalar:
    value: Any


Record = Union[Positional, AssocOrdered, AssocUnordered, Scalar]

_RECORD_TYPES = (Positional, AssocOrdered, AssocUnordered, Scalar)
_PRIMITIVE_TYPES = (str, bytes, bytearray, int, float, complex)


def classify_record(record: Any) -> Record:
    """Classify ``record`` into its record shape.

    Already-classified records are returned unchanged.
    """
    if isinstance(record, _RECORD_TYPES):
        return record
    if record is None or isinstance(record, _PRIMITIVE_TYPES):
        return Scalar(record)
    if isinstance(record, tuple):
        return Positional(tuple(record))
    if isinstance(record, list):
        if all(_is_pair(item) for item in record):
            return AssocOrdered(tuple(record))
        return Scalar(record)
    if isinstance(record, type):
        return Scalar(record)
    if isinstance(record, Mapping):
        return AssocUnordered(dict(record), orm_schema(record))
    if isinstance(record, Row):
        # Result rows keep their column order; repeated labels resolve to the first one
        return AssocOrdered(tuple(record._mapping.items()))

    schema = orm_schema(record)
    fields = _struct_fields(record, schema)
    if fields is None:
        return Scalar(record)
    return AssocUnordered(fields, schema)


def keys_for_record(record: Any) -> list[Hashable]:
    record = classify_record(record)
    if isinstance(record, Positional):
        return list(range(len(record.items)))
    if isinstance(record, AssocUnordered):
        if record.schema is not None:
            return list(record.schema.field_list())
        return sort_terms(record.fields.keys())
    if isinstance(record, AssocOrdered):
        return list(dict.fromkeys(key for key, _ in record.pairs))
    if isinstance(record, Scalar):
        # Neither of the expected containers: a single column holding the value
        return [ITEM_KEY]
    raise TypeError(f"Unknown record shape: {type(record).__name__}")


def get_field(record: Any, key: Hashable) -> Any:
    """Look up the value of ``record`` at ``key``; absence is ``None``."""
    record = classify_record(record)
    if isinstance(record, Positional):
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(record.items):
                return record.items[key]
            return None
    elif isinstance(record, AssocOrdered):
        for pair_key, value in record.pairs:
            if pair_key == key:
                return value
        return None
    elif isinstance(record, AssocUnordered):
        return record.fields.get(key)
    elif isinstance(record, Scalar):
        if key == ITEM_KEY:
            return record.value
    return _shape_mismatch(record, key)


def _shape_mismatch(record: Record, key: Hashable) -> None:
    message = f"Key {key!r} does not apply to a {type(record).__name__} record"
    if settings.strict_shape_checks:
        raise RecordShapeError(message)
    log.warning("%s; treating the field as absent", message)
    return None


def _is_pair(item: Any) -> bool:
    if not isinstance(item, tuple) or len(item) != 2:
        return False
    try:
        hash(item[0])
    except TypeError:
        return False
    return True


def _struct_fields(record: Any, schema: SchemaDescriptor | None) -> dict[Hashable, Any] | None:
    """Capture the field values of a struct-like instance, or ``None`` for plain objects."""
    if isinstance(schema, MappedSchema):
        # Loaded state only: classification must never trigger a lazy load.
        loaded = inspect(record).dict
        return {key: loaded.get(key) for key in schema.field_list()}

    fields: dict[Hashable, Any] | None = None
    if dataclasses.is_dataclass(record):
        fields = {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    elif isinstance(record, BaseModel):
        fields = {name: getattr(record, name) for name in type(record).model_fields}

    if schema is not None:
        fields = dict(fields or {})
        for key in schema.field_list():
            if key not in fields:
                fields[key] = getattr(record, key, None) if isinstance(key, str) else None
    return fields
