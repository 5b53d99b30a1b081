"""Sorted table views over record collections."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Mapping, Optional, Sequence

from .joiner import UNKNOWN, name_resolver
from .memo import IdentityMemo
from .sorting import Join, SortField, SortState, make_comparator


def build_view(
    records: Sequence[Any],
    sort_state: SortState,
    join: Join,
    fields: Mapping[str, SortField],
) -> Sequence[Any]:
    """Return ``records`` ordered according to ``sort_state``.

    An inactive state hands back the input untouched.  Otherwise a new
    list is returned; ``sorted`` is stable, so rows comparing equal keep
    their input order in both directions.
    """
    if not sort_state.is_active:
        return records
    field = fields.get(sort_state.field)  # type: ignore[arg-type]
    if field is None:
        raise ValueError(f"Unknown sort field '{sort_state.field}'")
    comparator = make_comparator(field, sort_state.direction, join)  # type: ignore[arg-type]
    return sorted(records, key=cmp_to_key(comparator))


class TableView:
    """A table with its own sort state and a memoized row order.

    Rows are recomputed only when the records, the sort state or the join
    callable is a different object from the previous call.
    """

    def __init__(self, fields: Mapping[str, SortField], state: Optional[SortState] = None):
        self.fields = fields
        self.state = state or SortState.inactive()
        self._rows = IdentityMemo(build_view)
        self._join = IdentityMemo(name_resolver)

    def activate(self, field: str) -> SortState:
        self.state = self.state.activate(field, self.fields)
        return self.state

    def join_for(self, lookup: Sequence[Any], fallback: str = UNKNOWN) -> Join:
        """Name join for ``lookup``, the same callable while ``lookup`` is unchanged."""
        return self._join(lookup, fallback)

    def rows(self, records: Sequence[Any], join: Join) -> Sequence[Any]:
        return self._rows(records, self.state, join, self.fields)

    @property
    def recomputations(self) -> int:
        return self._rows.recomputations
