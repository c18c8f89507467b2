from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Iterable


# Rank of each family of terms; lower ranks sort first.
_RANK_NUMBER = 0
_RANK_SYMBOL = 1
_RANK_TUPLE = 2
_RANK_STRING = 3
_RANK_BYTES = 4
_RANK_OTHER = 5

_NUMBER_TYPES = (int, float, Decimal, Fraction)


def term_key(value: Any) -> tuple:
    """Return a sort key giving a total, deterministic order over arbitrary terms.

    Numbers sort before symbols (``None``, booleans, enum members), then
    tuples (shorter first, then elementwise), strings, bytes and finally
    everything else grouped by type name and compared by ``repr``. NaNs
    sort after every other number.
    """
    if isinstance(value, bool) or value is None:
        return (_RANK_SYMBOL, "", str(value))
    if isinstance(value, Enum):
        return (_RANK_SYMBOL, type(value).__qualname__, value.name)
    if isinstance(value, _NUMBER_TYPES):
        if _is_nan(value):
            return (_RANK_NUMBER, 1, type(value).__qualname__, str(value))
        return (_RANK_NUMBER, 0, value)
    if isinstance(value, tuple):
        return (_RANK_TUPLE, len(value), tuple(term_key(item) for item in value))
    if isinstance(value, str):
        return (_RANK_STRING, value)
    if isinstance(value, (bytes, bytearray)):
        return (_RANK_BYTES, bytes(value))
    return (_RANK_OTHER, type(value).__qualname__, _safe_repr(value))


def sort_terms(values: Iterable[Any]) -> list[Any]:
    return sorted(values, key=term_key)


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__qualname__}>"
