from datetime import datetime

from finance_tracker.budgets import (
    budgets_for_category,
    budgets_for_month,
    category_budget_series,
    month_budget_series,
)
from finance_tracker.records import Budget, Category


def _budgets():
    return [
        Budget(1, 1, 400.0, 120.0, datetime(2024, 3, 1), datetime(2024, 3, 31)),
        Budget(2, 2, 1200.0, 1200.0, datetime(2024, 3, 1), datetime(2024, 3, 31)),
        Budget(3, 1, 450.0, 90.0, datetime(2024, 4, 1), datetime(2024, 4, 30)),
        Budget(4, 5, 80.0, 0.0, datetime(2023, 3, 1), datetime(2023, 3, 31)),
    ]


def test_month_filter_matches_year_and_month() -> None:
    march = budgets_for_month(_budgets(), datetime(2024, 3, 20))
    assert [b.id for b in march] == [1, 2]
    april = budgets_for_month(_budgets(), "2024-04-01")
    assert [b.id for b in april] == [3]


def test_single_budget_month_example() -> None:
    budget = Budget(9, 1, 10.0, 0.0, datetime(2024, 3, 1))
    assert budgets_for_month([budget], datetime(2024, 3, 1)) == [budget]
    assert budgets_for_month([budget], datetime(2024, 4, 1)) == []


def test_category_filter_preserves_order() -> None:
    assert [b.id for b in budgets_for_category(_budgets(), 1)] == [1, 3]
    assert budgets_for_category(_budgets(), 42) == []


def test_filters_accept_raw_payloads() -> None:
    raw = [{"id": 1, "category_id": 3, "amount": 5, "spent": 1, "start_date": "2024-03-01T00:00:00Z"}]
    assert budgets_for_month(raw, "2024-03-10") == raw
    assert budgets_for_category(raw, 3) == raw


def test_month_series_labels_categories_with_fallback() -> None:
    categories = [Category(1, "Food"), Category(2, "Rent")]
    series = month_budget_series(_budgets(), datetime(2023, 3, 1), categories)
    assert series.labels == ["Unknown"]
    series = month_budget_series(_budgets(), datetime(2024, 3, 1), categories)
    assert series.labels == ["Food", "Rent"]
    assert series.amount == [400.0, 1200.0]
    assert series.spent == [120.0, 1200.0]


def test_category_series_uses_month_year_labels() -> None:
    series = category_budget_series(_budgets(), 1)
    assert series.labels == ["03/24", "04/24"]
    assert series.amount == [400.0, 450.0]
    assert series.spent == [120.0, 90.0]
    assert category_budget_series(_budgets(), 77).empty
