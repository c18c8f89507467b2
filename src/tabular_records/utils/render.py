from __future__ import annotations

import dataclasses
import logging
import types
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import BaseModel
from sqlalchemy import inspect

from ..core.config import settings
from ..core.ordering import sort_terms
from ..core.schema import MappedSchema, mapper_for, orm_schema


log = logging.getLogger("tabular.utils.render")

_ELLIPSIS = "..."
_FUNCTION_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.BuiltinMethodType,
)


@dataclass(frozen=True)
class _Limits:
    max_items: int
    max_string: int


def render(value: Any, *, max_items: int | None = None, max_string: int | None = None) -> str:
    """Render any value as a deterministic, human-readable debug string.

    Never raises: values whose ``repr`` fails render as ``<TypeName>``.
    """
    limits = _Limits(
        max_items=settings.render_max_items if max_items is None else max_items,
        max_string=settings.render_max_string if max_string is None else max_string,
    )
    try:
        return _render(value, limits, frozenset())
    except Exception as exc:
        # A container whose iteration blows up still gets a placeholder
        log.debug("Rendering %s failed: %s", type(value).__qualname__, exc)
        return f"<{type(value).__qualname__}>"


def _render(value: Any, limits: _Limits, seen: frozenset[int]) -> str:
    if isinstance(value, (str, bytes, bytearray)):
        if len(value) > limits.max_string:
            return repr(value[: limits.max_string]) + _ELLIPSIS
        return repr(value)
    if value is None or isinstance(value, (bool, int, float, complex)):
        return repr(value)
    if isinstance(value, type):
        return _safe_repr(value)

    if id(value) in seen:
        return _cycle_placeholder(value)
    seen = seen | {id(value)}

    if isinstance(value, tuple):
        if _is_namedtuple(value):
            return _render_struct(type(value).__name__, value._asdict().items(), limits, seen)
        parts = _render_items(value, limits, seen)
        trailer = "," if len(parts) == 1 else ""
        return "(" + ", ".join(parts) + trailer + ")"
    if isinstance(value, list):
        return "[" + ", ".join(_render_items(value, limits, seen)) + "]"
    if isinstance(value, (set, frozenset)):
        if not value:
            return f"{type(value).__name__}()"
        body = "{" + ", ".join(_render_items(sort_terms(value), limits, seen)) + "}"
        return body if isinstance(value, set) else f"frozenset({body})"
    if isinstance(value, Mapping):
        return "{" + ", ".join(_render_pairs(value.items(), limits, seen, sep=": ")) + "}"

    fields = _struct_fields(value)
    if fields is not None:
        return _render_struct(type(value).__name__, fields.items(), limits, seen)
    if isinstance(value, _FUNCTION_TYPES):
        return f"<function {getattr(value, '__qualname__', type(value).__name__)}>"
    if type(value).__repr__ is object.__repr__:
        # The default repr embeds a memory address; dump the instance dict instead
        attrs = getattr(value, "__dict__", None)
        if attrs:
            return _render_struct(type(value).__name__, attrs.items(), limits, seen)
        return f"<{type(value).__qualname__}>"
    return _safe_repr(value)


def _render_items(values: Iterable[Any], limits: _Limits, seen: frozenset[int]) -> list[str]:
    parts: list[str] = []
    for index, item in enumerate(values):
        if index >= limits.max_items:
            parts.append(_ELLIPSIS)
            break
        parts.append(_render(item, limits, seen))
    return parts


def _render_pairs(
    pairs: Iterable[tuple[Any, Any]],
    limits: _Limits,
    seen: frozenset[int],
    *,
    sep: str,
    bare_keys: bool = False,
) -> list[str]:
    parts: list[str] = []
    for index, (key, item) in enumerate(pairs):
        if index >= limits.max_items:
            parts.append(_ELLIPSIS)
            break
        label = str(key) if bare_keys else _render(key, limits, seen)
        parts.append(f"{label}{sep}{_render(item, limits, seen)}")
    return parts


def _render_struct(
    name: str,
    pairs: Iterable[tuple[Any, Any]],
    limits: _Limits,
    seen: frozenset[int],
) -> str:
    return f"{name}(" + ", ".join(_render_pairs(pairs, limits, seen, sep="=", bare_keys=True)) + ")"


def _struct_fields(value: Any) -> dict[str, Any] | None:
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value) if f.repr}
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if mapper_for(value) is not None:
        schema = orm_schema(value)
        if isinstance(schema, MappedSchema):
            loaded = inspect(value).dict
            return {key: loaded[key] for key in schema.field_list() if key in loaded}
    return None


def _is_namedtuple(value: tuple) -> bool:
    return hasattr(value, "_fields") and hasattr(value, "_asdict")


def _cycle_placeholder(value: Any) -> str:
    if isinstance(value, list):
        return "[...]"
    if isinstance(value, tuple) and not _is_namedtuple(value):
        return "(...)"
    if isinstance(value, (set, frozenset, Mapping)):
        return "{...}"
    return f"{type(value).__name__}(...)"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception as exc:
        log.debug("repr() failed for %s: %s", type(value).__qualname__, exc)
        return f"<{type(value).__qualname__}>"
