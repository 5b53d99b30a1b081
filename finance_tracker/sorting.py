"""Tri-state column sorting for record tables.

A table has at most one active sort column.  Clicking a column cycles it
through ascending, descending and back to unsorted; clicking a different
column starts that column at ascending.  ``make_comparator`` turns the
active column into a ``cmp``-style function for use with
:func:`functools.cmp_to_key`.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import pandas as pd

from .records import get_field

Join = Callable[[Optional[int]], str]
Comparator = Callable[[Any, Any], int]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class SortField:
    name: str
    kind: FieldKind
    accessor: Callable[[Any, Join], Any]

    def value(self, record: Any, join: Join) -> Any:
        return self.accessor(record, join)


@dataclass(frozen=True)
class SortState:
    field: Optional[str] = None
    direction: Optional[SortDirection] = None

    @classmethod
    def inactive(cls) -> "SortState":
        return cls()

    @property
    def is_active(self) -> bool:
        return self.field is not None and self.direction is not None

    def activate(self, field: str, fields: Optional[Mapping[str, SortField]] = None) -> "SortState":
        """Return the state after the user activates ``field``.

        ``fields``, when given, restricts activation to known columns.
        """
        if fields is not None and field not in fields:
            raise ValueError(f"Unknown sort field '{field}'. Expected one of: {', '.join(fields)}")
        if self.field != field:
            return SortState(field, SortDirection.ASC)
        if self.direction is None:
            return SortState(field, SortDirection.ASC)
        if self.direction is SortDirection.ASC:
            return SortState(field, SortDirection.DESC)
        return SortState(field, None)


# ---------------------------------------------------------------------------
# Comparison keys
# ---------------------------------------------------------------------------


def _collation_key(value: Any) -> Tuple[str, str]:
    """Accent and case insensitive primary key, raw text as tie-break."""
    text = "" if value is None else str(value)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _epoch_millis(value: Any) -> int:
    if isinstance(value, (int, float)):
        return int(value)
    return pd.Timestamp(value).value // 1_000_000


def _sign(diff: float) -> int:
    return (diff > 0) - (diff < 0)


def make_comparator(field: SortField, direction: SortDirection, join: Join) -> Comparator:
    """Build a comparator for ``field``; descending swaps the operands."""

    def text(a: Any, b: Any) -> int:
        left, right = _collation_key(field.value(a, join)), _collation_key(field.value(b, join))
        return (left > right) - (left < right)

    def number(a: Any, b: Any) -> int:
        return _sign(float(field.value(a, join)) - float(field.value(b, join)))

    def instant(a: Any, b: Any) -> int:
        return _sign(_epoch_millis(field.value(a, join)) - _epoch_millis(field.value(b, join)))

    base = {FieldKind.TEXT: text, FieldKind.NUMBER: number, FieldKind.DATE: instant}[field.kind]
    if direction is SortDirection.DESC:
        return lambda a, b: base(b, a)
    return base


# ---------------------------------------------------------------------------
# Table columns
# ---------------------------------------------------------------------------


def _joined_category(record: Any, join: Join) -> str:
    return join(get_field(record, "category_id"))


def _plain(key: str) -> Callable[[Any, Join], Any]:
    return lambda record, _join: get_field(record, key)


EXPENSE_FIELDS: Dict[str, SortField] = {
    "category": SortField("category", FieldKind.TEXT, _joined_category),
    "amount": SortField("amount", FieldKind.NUMBER, _plain("amount")),
    "date": SortField("date", FieldKind.DATE, _plain("date")),
}

INCOME_FIELDS: Dict[str, SortField] = {
    "source": SortField("source", FieldKind.TEXT, _plain("source")),
    "amount": SortField("amount", FieldKind.NUMBER, _plain("amount")),
    "date": SortField("date", FieldKind.DATE, _plain("date")),
}

BUDGET_FIELDS: Dict[str, SortField] = {
    "category": SortField("category", FieldKind.TEXT, _joined_category),
    "amount": SortField("amount", FieldKind.NUMBER, _plain("amount")),
    "startDate": SortField("startDate", FieldKind.DATE, _plain("start_date")),
}
