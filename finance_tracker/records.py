"""Record types consumed by the transformation layer.

The backend list endpoints return plain JSON objects.  This module turns
them into small immutable dataclasses, coercing numbers and timestamps
along the way, and offers a helper to view a record list as a pandas
DataFrame for reports.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable
from zoneinfo import ZoneInfo

import pandas as pd

from . import config


class RecordError(ValueError):
    """Raised when a payload cannot be coerced into a record."""


@runtime_checkable
class Named(Protocol):
    """Anything with an ``id`` and a display ``name`` (categories and the like)."""

    id: int
    name: str


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def coerce_datetime(value: Any, tz: Optional[ZoneInfo] = None) -> datetime:
    """Coerce ``value`` into a naive datetime in the display timezone.

    Timezone-aware inputs (the backend sends RFC 3339 strings such as
    ``"2024-03-01T00:00:00Z"``) are converted to ``tz`` before the offset
    is dropped.  Naive inputs are taken as already local.
    """
    if isinstance(value, str) and not value.strip():
        raise RecordError("Empty date value")
    try:
        stamp = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"Unable to parse date {value!r}") from exc
    if pd.isna(stamp):
        raise RecordError(f"Unable to parse date {value!r}")
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(tz or config.get_timezone()).tz_localize(None)
    return stamp.to_pydatetime()


def _coerce_amount(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise RecordError(f"'{field_name}' must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"'{field_name}' must be numeric, got {value!r}") from exc


def _coerce_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise RecordError(f"'{field_name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"'{field_name}' must be an integer, got {value!r}") from exc


def _optional_id(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    return None if value is None else _coerce_id(value, key)


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise RecordError(f"Missing required field '{key}'")
    return payload[key]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    description: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Category":
        return cls(
            id=_coerce_id(_require(payload, "id"), "id"),
            name=str(_require(payload, "name")),
            description=str(payload.get("description") or ""),
        )


@dataclass(frozen=True)
class Income:
    id: int
    amount: float
    date: datetime
    source: str
    category_id: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Income":
        return cls(
            id=_coerce_id(_require(payload, "id"), "id"),
            amount=_coerce_amount(_require(payload, "amount"), "amount"),
            date=coerce_datetime(_require(payload, "date")),
            source=str(payload.get("source") or ""),
            category_id=_optional_id(payload, "category_id"),
        )


@dataclass(frozen=True)
class Expense:
    id: int
    amount: float
    date: datetime
    category_id: Optional[int] = None
    name: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Expense":
        return cls(
            id=_coerce_id(_require(payload, "id"), "id"),
            amount=_coerce_amount(_require(payload, "amount"), "amount"),
            date=coerce_datetime(_require(payload, "date")),
            category_id=_optional_id(payload, "category_id"),
            name=str(payload.get("name") or ""),
        )


@dataclass(frozen=True)
class Budget:
    id: int
    category_id: Optional[int]
    amount: float
    spent: float
    start_date: datetime
    end_date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Budget":
        end_raw = payload.get("end_date")
        return cls(
            id=_coerce_id(_require(payload, "id"), "id"),
            category_id=_optional_id(payload, "category_id"),
            amount=_coerce_amount(_require(payload, "amount"), "amount"),
            spent=_coerce_amount(payload.get("spent") or 0, "spent"),
            start_date=coerce_datetime(_require(payload, "start_date")),
            end_date=coerce_datetime(end_raw) if end_raw else None,
        )


RECORD_TYPES: Dict[str, type] = {
    "categories": Category,
    "expenses": Expense,
    "incomes": Income,
    "budgets": Budget,
}


def records_to_frame(records: Sequence[Any]) -> pd.DataFrame:
    """Return a DataFrame with one row per record, in input order."""
    if not records:
        return pd.DataFrame()
    first = records[0]
    columns = [f.name for f in fields(first)]
    return pd.DataFrame([asdict(record) for record in records], columns=columns)


def get_field(record: Any, key: str) -> Any:
    """Read ``key`` from a dataclass record or a raw payload dict."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)
