"""Chart series derived from income and expense records.

Two families of aggregation live here:

* ``aggregate`` groups records by a key (category, income source), sums
  the amounts and expresses each group as a share of the grand total.
  These feed the pie charts.
* ``monthly_series`` accumulates amounts into a rolling window of twelve
  calendar-month buckets ending at the reference month.  This feeds the
  monthly bar chart.

All functions are pure: inputs are never mutated and each call returns
fresh lists of frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from . import config
from .joiner import UNKNOWN_CATEGORY, name_resolver
from .logging_setup import get_logger
from .records import coerce_datetime, get_field

logger = get_logger(__name__)

MONTH_BUCKETS = 12

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Share:
    key: Any
    total: float
    percentage: str


@dataclass(frozen=True)
class MonthlyAmount:
    month: str
    amount: float


# ---------------------------------------------------------------------------
# Group shares
# ---------------------------------------------------------------------------


def _format_percentage(total: float, grand_total: float) -> str:
    # an all-zero aggregation reports 0.0 for every group instead of NaN
    if grand_total == 0 or not np.isfinite(grand_total):
        return "0.0"
    return f"{total / grand_total * 100:.1f}"


def _is_missing(key: Any) -> bool:
    return key is None or (isinstance(key, float) and np.isnan(key))


def aggregate(
    records: Sequence[Any],
    key_fn: Callable[[Any], Hashable],
    amount_fn: Callable[[Any], float],
    label_fn: Optional[Callable[[Any], Any]] = None,
) -> List[Share]:
    """Sum ``amount_fn`` per ``key_fn`` group and compute percentage shares.

    Groups appear in the order their key is first seen.  ``label_fn``
    optionally maps each group key to the key reported in the result,
    e.g. a category id to its name.  An empty input gives an empty list.

    Example
    -------
    >>> aggregate([{"s": "Job", "a": 30}, {"s": "Gift", "a": 10}],
    ...           lambda r: r["s"], lambda r: r["a"])
    [Share(key='Job', total=30.0, percentage='75.0'), Share(key='Gift', total=10.0, percentage='25.0')]
    """
    if not records:
        return []
    frame = pd.DataFrame(
        {
            "key": pd.Series([key_fn(record) for record in records], dtype=object),
            "amount": [float(amount_fn(record)) for record in records],
        }
    )
    totals = frame.groupby("key", sort=False, dropna=False)["amount"].sum()
    grand_total = float(frame["amount"].sum())
    label = label_fn or (lambda key: key)
    return [
        Share(
            key=label(None if _is_missing(key) else key),
            total=float(total),
            percentage=_format_percentage(float(total), grand_total),
        )
        for key, total in totals.items()
    ]


def expenses_by_category(expenses: Sequence[Any], categories: Sequence[Any]) -> List[Share]:
    """Expense shares per category, labelled with the category name.

    Grouping happens on the category id, so two dangling ids remain two
    separate "Unknown Category" slices.
    """
    resolve = name_resolver(categories, UNKNOWN_CATEGORY)
    return aggregate(
        expenses,
        lambda expense: get_field(expense, "category_id"),
        lambda expense: get_field(expense, "amount"),
        label_fn=resolve,
    )


def incomes_by_source(incomes: Sequence[Any]) -> List[Share]:
    """Income shares per free-text source."""
    return aggregate(
        incomes,
        lambda income: get_field(income, "source"),
        lambda income: get_field(income, "amount"),
    )


# ---------------------------------------------------------------------------
# Monthly buckets
# ---------------------------------------------------------------------------


def month_label(moment: Any) -> str:
    """Short month plus two digit year, e.g. ``"Jan/24"``."""
    stamp = pd.Timestamp(moment)
    return f"{_MONTH_ABBR[stamp.month - 1]}/{stamp.year % 100:02d}"


def _reference(reference_now: Optional[Any]) -> datetime:
    if reference_now is None:
        return datetime.now(config.get_timezone()).replace(tzinfo=None)
    return coerce_datetime(reference_now)


def monthly_series(
    records: Iterable[Any],
    amount_fn: Callable[[Any], float],
    date_fn: Callable[[Any], Any],
    reference_now: Optional[Any] = None,
    months: int = MONTH_BUCKETS,
) -> List[MonthlyAmount]:
    """Accumulate amounts into calendar-month buckets ending at ``reference_now``.

    Parameters
    ----------
    records : iterable
        Records carrying an amount and a date.
    amount_fn, date_fn : callable
        Accessors for the amount and the date of a record.
    reference_now : datetime-like, optional
        Anchor of the window; defaults to the current time in the
        configured timezone.
    months : int
        Number of buckets (12 for the monthly chart).

    Returns
    -------
    list of MonthlyAmount
        Exactly ``months`` entries, oldest month first, amounts rounded
        to two decimals.  Records dated before ``reference_now`` minus the
        window or after ``reference_now`` are ignored.

    Raises
    ------
    ValueError
        If ``months`` is smaller than 1.
    """
    if months < 1:
        raise ValueError(f"months must be at least 1, got {months}")
    now = _reference(reference_now)
    current = pd.Period(now, freq="M")

    buckets: Dict[str, float] = {}
    for offset in range(months):
        buckets[month_label((current - offset).start_time)] = 0.0

    rows = list(records)
    if rows:
        frame = pd.DataFrame(
            {
                "date": pd.to_datetime([coerce_datetime(date_fn(row)) for row in rows]),
                "amount": [float(amount_fn(row)) for row in rows],
            }
        )
        window_start = pd.Timestamp(now) - pd.DateOffset(months=months)
        in_window = frame[(frame["date"] >= window_start) & (frame["date"] <= pd.Timestamp(now))]
        if not in_window.empty:
            labels = in_window["date"].map(month_label)
            for label, amount in in_window["amount"].groupby(labels, sort=False).sum().items():
                if label in buckets:
                    buckets[label] += float(amount)
                else:
                    logger.debug("Dropping %.2f dated %s outside the monthly buckets", amount, label)

    # buckets were built newest first
    return [MonthlyAmount(month=label, amount=round(amount, 2)) for label, amount in reversed(buckets.items())]


def monthly_expenses(
    expenses: Iterable[Any],
    reference_now: Optional[Any] = None,
    months: int = MONTH_BUCKETS,
) -> List[MonthlyAmount]:
    return monthly_series(
        expenses,
        lambda expense: get_field(expense, "amount"),
        lambda expense: get_field(expense, "date"),
        reference_now,
        months,
    )


def monthly_incomes(
    incomes: Iterable[Any],
    reference_now: Optional[Any] = None,
    months: int = MONTH_BUCKETS,
) -> List[MonthlyAmount]:
    return monthly_series(
        incomes,
        lambda income: get_field(income, "amount"),
        lambda income: get_field(income, "date"),
        reference_now,
        months,
    )
