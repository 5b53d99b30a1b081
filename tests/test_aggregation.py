from datetime import datetime

import pytest

from finance_tracker import aggregation as agg
from finance_tracker.records import Category, Expense, Income


def _categories():
    return [Category(1, "Food"), Category(2, "Rent")]


def test_expenses_by_category_matches_worked_example() -> None:
    expenses = [
        Expense(1, 100.0, datetime(2024, 3, 5), 1),
        Expense(2, 300.0, datetime(2024, 3, 9), 2),
    ]
    shares = agg.expenses_by_category(expenses, _categories())
    assert shares == [
        agg.Share(key="Food", total=100.0, percentage="25.0"),
        agg.Share(key="Rent", total=300.0, percentage="75.0"),
    ]


def test_groups_keep_first_seen_order() -> None:
    expenses = [
        Expense(1, 5.0, datetime(2024, 3, 5), 2),
        Expense(2, 50.0, datetime(2024, 3, 6), 1),
        Expense(3, 5.0, datetime(2024, 3, 7), 2),
    ]
    shares = agg.expenses_by_category(expenses, _categories())
    assert [s.key for s in shares] == ["Rent", "Food"]
    assert shares[0].total == pytest.approx(10.0)


def test_unresolved_categories_stay_separate_groups() -> None:
    expenses = [
        Expense(1, 10.0, datetime(2024, 3, 5), 7),
        Expense(2, 30.0, datetime(2024, 3, 6), 8),
        Expense(3, 60.0, datetime(2024, 3, 6), None),
    ]
    shares = agg.expenses_by_category(expenses, _categories())
    assert [s.key for s in shares] == ["Unknown Category"] * 3
    assert [s.percentage for s in shares] == ["10.0", "30.0", "60.0"]


def test_incomes_by_source_percentages_sum_to_hundred() -> None:
    incomes = [
        Income(1, 1000.0, datetime(2024, 1, 1), "Salary"),
        Income(2, 333.33, datetime(2024, 1, 2), "Freelance"),
        Income(3, 120.0, datetime(2024, 1, 3), "Gift"),
        Income(4, 250.0, datetime(2024, 2, 1), "Freelance"),
    ]
    shares = agg.incomes_by_source(incomes)
    assert [s.key for s in shares] == ["Salary", "Freelance", "Gift"]
    total = sum(float(s.percentage) for s in shares)
    assert total == pytest.approx(100.0, abs=0.1 + 1e-9)


def test_empty_input_gives_empty_list() -> None:
    assert agg.aggregate([], lambda r: r, lambda r: 0) == []
    assert agg.expenses_by_category([], _categories()) == []
    assert agg.incomes_by_source([]) == []


def test_zero_grand_total_reports_zero_percent() -> None:
    records = [{"k": "a", "v": 0}, {"k": "b", "v": 0.0}]
    shares = agg.aggregate(records, lambda r: r["k"], lambda r: r["v"])
    assert [s.percentage for s in shares] == ["0.0", "0.0"]
    assert all(s.total == 0.0 for s in shares)


def test_aggregate_does_not_mutate_input() -> None:
    records = [{"k": "a", "v": 1}, {"k": "b", "v": 3}]
    snapshot = [dict(r) for r in records]
    agg.aggregate(records, lambda r: r["k"], lambda r: r["v"])
    assert records == snapshot
