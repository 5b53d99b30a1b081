from datetime import datetime

import pytest

from finance_tracker.sorting import (
    BUDGET_FIELDS,
    EXPENSE_FIELDS,
    SortDirection,
    SortState,
    make_comparator,
)


def test_activating_same_field_cycles_through_three_states() -> None:
    state = SortState.inactive()
    state = state.activate("amount")
    assert state == SortState("amount", SortDirection.ASC)
    state = state.activate("amount")
    assert state.direction is SortDirection.DESC
    state = state.activate("amount")
    assert state.field == "amount"
    assert state.direction is None
    assert not state.is_active
    # a fourth activation starts over at ascending
    assert state.activate("amount").direction is SortDirection.ASC


def test_switching_field_always_resets_to_ascending() -> None:
    state = SortState("amount", SortDirection.DESC)
    assert state.activate("date") == SortState("date", SortDirection.ASC)
    idle = SortState("amount", None)
    assert idle.activate("category") == SortState("category", SortDirection.ASC)


def test_direction_compares_equal_to_plain_strings() -> None:
    assert SortDirection.ASC == "asc"
    assert SortDirection.DESC == "desc"


def test_unknown_field_is_rejected_when_fields_given() -> None:
    with pytest.raises(ValueError):
        SortState.inactive().activate("colour", BUDGET_FIELDS)


def test_numeric_comparator_and_descending_swap() -> None:
    field = EXPENSE_FIELDS["amount"]
    small, large = {"amount": 5.0}, {"amount": 12.5}
    asc = make_comparator(field, SortDirection.ASC, lambda _id: "")
    desc = make_comparator(field, SortDirection.DESC, lambda _id: "")
    assert asc(small, large) < 0
    assert desc(small, large) > 0
    assert asc(small, {"amount": 5}) == 0


def test_date_comparator_uses_instants() -> None:
    field = BUDGET_FIELDS["startDate"]
    early = {"start_date": datetime(2024, 1, 31, 23, 0)}
    late = {"start_date": "2024-02-01T00:00:00"}
    compare = make_comparator(field, SortDirection.ASC, lambda _id: "")
    assert compare(early, late) < 0
    assert compare(late, early) > 0


def test_text_comparator_ignores_case_and_accents() -> None:
    names = {1: "éclair", 2: "Eggs", 3: "apple"}
    field = EXPENSE_FIELDS["category"]
    compare = make_comparator(field, SortDirection.ASC, names.get)
    assert compare({"category_id": 3}, {"category_id": 1}) < 0
    assert compare({"category_id": 1}, {"category_id": 2}) < 0
