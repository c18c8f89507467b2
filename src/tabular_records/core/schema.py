from __future__ import annotations

import logging
from dataclasses import dataclass
from inspect import getattr_static
from typing import Any, Hashable, Protocol, Sequence, runtime_checkable

from sqlalchemy import Select, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapper, Query


log = logging.getLogger("tabular.core.schema")


@runtime_checkable
class SchemaDescriptor(Protocol):
    """Capability exposing the canonical, ordered field list of a record type.

    Record types opt in by defining ``field_list``. A classmethod or
    staticmethod makes the class itself the descriptor; a plain method makes
    each instance its own descriptor. SQLAlchemy-mapped classes are adapted
    by ``MappedSchema``.
    """

    def field_list(self) -> Sequence[Hashable]:
        ...


@dataclass(frozen=True)
class MappedSchema:
    """Schema descriptor backed by a SQLAlchemy mapper."""

    mapper: Mapper

    @property
    def entity(self) -> type:
        return self.mapper.class_

    def field_list(self) -> Sequence[Hashable]:
        # Column attributes only, in declaration order; relationships are not fields.
        return tuple(attr.key for attr in self.mapper.column_attrs)


def mapper_for(obj: Any) -> Mapper | None:
    """Return the SQLAlchemy mapper behind a mapped class, alias or instance."""
    insp = inspect(obj, raiseerr=False)
    if insp is None:
        return None
    mapper = getattr(insp, "mapper", None)
    return mapper if isinstance(mapper, Mapper) else None


def orm_schema(candidate: Any) -> SchemaDescriptor | None:
    """Extract the schema descriptor from a queryable, a schema class or a struct.

    If no schema is found, ``None`` is returned; detection never raises for
    non-schema input.
    """
    if isinstance(candidate, (Select, Query)):
        return _schema_for_queryable(candidate)
    if isinstance(candidate, type):
        return _schema_for_class(candidate)
    if type(candidate) is dict:
        return None
    if _field_list_binding(type(candidate)) == "instance":
        return candidate
    return orm_schema(type(candidate))


def _schema_for_queryable(queryable: Select | Query) -> SchemaDescriptor | None:
    for description in queryable.column_descriptions:
        entity = description.get("entity")
        if entity is None:
            continue
        if isinstance(entity, type):
            return _schema_for_class(entity)
        mapper = mapper_for(entity)
        if mapper is not None:
            return _schema_for_mapper(mapper)
    return None


def _schema_for_class(cls: type) -> SchemaDescriptor | None:
    if _field_list_binding(cls) == "class":
        return cls  # type: ignore[return-value]
    mapper = mapper_for(cls)
    if mapper is None:
        return None
    return _schema_for_mapper(mapper)


def _schema_for_mapper(mapper: Mapper) -> MappedSchema | None:
    try:
        # Touching column_attrs configures the mapper; a broken mapping is not a usable schema.
        mapper.column_attrs
    except SQLAlchemyError as exc:
        log.warning("Mapper for %s could not be configured: %s", mapper.class_.__qualname__, exc)
        return None
    return MappedSchema(mapper)


def _field_list_binding(cls: type) -> str | None:
    """Tell whether ``field_list`` is callable on the class or only on its instances."""
    attr = getattr_static(cls, "field_list", None)
    if isinstance(attr, (classmethod, staticmethod)):
        return "class"
    if callable(attr):
        return "instance"
    return None
