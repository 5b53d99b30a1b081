from finance_tracker.joiner import (
    UNKNOWN,
    UNKNOWN_CATEGORY,
    category_name,
    lookup_name,
    name_resolver,
)
from finance_tracker.records import Category


def test_lookup_resolves_name() -> None:
    categories = [Category(1, "Food"), Category(2, "Rent")]
    assert lookup_name(2, categories) == "Rent"
    assert category_name(1, categories) == "Food"


def test_unresolved_id_uses_fallback() -> None:
    lookup = [{"id": 1, "name": "Food"}]
    assert lookup_name(9999, lookup) == UNKNOWN
    assert category_name(9999, lookup) == UNKNOWN_CATEGORY
    assert category_name(0, lookup) == "Unknown Category"
    assert category_name(None, lookup) == "Unknown Category"
    assert lookup_name(1, []) == "Unknown"


def test_empty_name_falls_back() -> None:
    assert lookup_name(3, [{"id": 3, "name": ""}]) == UNKNOWN


def test_resolver_builds_fresh_callable_each_time() -> None:
    categories = [Category(1, "Food")]
    first = name_resolver(categories, UNKNOWN_CATEGORY)
    assert name_resolver(categories, UNKNOWN_CATEGORY) is not first
    assert name_resolver(categories, UNKNOWN)(5) == UNKNOWN
    assert first(1) == "Food"
    assert first(5) == UNKNOWN_CATEGORY


def test_category_satisfies_named_protocol() -> None:
    from finance_tracker.records import Named

    assert isinstance(Category(4, "Travel"), Named)
