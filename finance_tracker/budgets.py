"""Budget filters and the series behind the two budget bar charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .joiner import UNKNOWN, name_resolver
from .records import coerce_datetime, get_field


@dataclass(frozen=True)
class BudgetSeries:
    """Parallel label/amount/spent lists for a grouped bar chart."""

    labels: List[str] = field(default_factory=list)
    amount: List[float] = field(default_factory=list)
    spent: List[float] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.labels


def budgets_for_month(budgets: Sequence[Any], reference: Any) -> List[Any]:
    """Budgets whose ``start_date`` lies in the calendar month of ``reference``."""
    target = coerce_datetime(reference)
    selected = []
    for budget in budgets:
        start = coerce_datetime(get_field(budget, "start_date"))
        if start.year == target.year and start.month == target.month:
            selected.append(budget)
    return selected


def budgets_for_category(budgets: Sequence[Any], category_id: Optional[int]) -> List[Any]:
    """Budgets attached to ``category_id``, in input order."""
    return [budget for budget in budgets if get_field(budget, "category_id") == category_id]


def _series(budgets: Sequence[Any], labels: List[str]) -> BudgetSeries:
    return BudgetSeries(
        labels=labels,
        amount=[float(get_field(budget, "amount")) for budget in budgets],
        spent=[float(get_field(budget, "spent") or 0) for budget in budgets],
    )


def month_budget_series(budgets: Sequence[Any], reference: Any, categories: Sequence[Any]) -> BudgetSeries:
    """Budget vs. spent per category for one calendar month."""
    selected = budgets_for_month(budgets, reference)
    resolve = name_resolver(categories, UNKNOWN)
    return _series(selected, [resolve(get_field(budget, "category_id")) for budget in selected])


def start_label(moment: Any) -> str:
    """``MM/YY`` label for a budget period."""
    start = coerce_datetime(moment)
    return f"{start.month:02d}/{start.year % 100:02d}"


def category_budget_series(budgets: Sequence[Any], category_id: Optional[int]) -> BudgetSeries:
    """Budget vs. spent per period for one category."""
    selected = budgets_for_category(budgets, category_id)
    return _series(selected, [start_label(get_field(budget, "start_date")) for budget in selected])
