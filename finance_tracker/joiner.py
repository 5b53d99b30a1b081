"""Foreign key to display name resolution.

Expenses and budgets reference categories by id only.  The helpers here
look the id up in whatever category collection is at hand and fall back
to a fixed label when nothing matches, so a deleted category never breaks
a table or chart.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from .logging_setup import get_logger
from .records import Named, get_field

logger = get_logger(__name__)

UNKNOWN = "Unknown"
UNKNOWN_CATEGORY = "Unknown Category"


def lookup_name(entity_id: Optional[int], lookup: Iterable[Named], fallback: str = UNKNOWN) -> str:
    """Return the ``name`` of the entity in ``lookup`` whose ``id`` is ``entity_id``.

    ``lookup`` may hold dataclass records or plain dicts.  Missing ids,
    ``None`` and entities with an empty name all resolve to ``fallback``.
    """
    if entity_id is not None:
        for entity in lookup:
            if get_field(entity, "id") == entity_id:
                name = get_field(entity, "name")
                if name:
                    return str(name)
                break
    logger.debug("No name for id %r, using %r", entity_id, fallback)
    return fallback


def category_name(category_id: Optional[int], categories: Iterable[Named]) -> str:
    """Category-specific join used by the expense table and category chart."""
    return lookup_name(category_id, categories, UNKNOWN_CATEGORY)


def name_resolver(lookup: Any, fallback: str = UNKNOWN) -> Callable[[Optional[int]], str]:
    """Return an ``id -> name`` callable bound to ``lookup``.

    Each call builds a new callable; nothing is cached at module level.
    Owners that need a stable callable per collection (see
    :meth:`table_view.TableView.join_for`) wrap this factory in an
    :class:`memo.IdentityMemo` of their own.
    """

    def resolve(entity_id: Optional[int]) -> str:
        return lookup_name(entity_id, lookup, fallback)

    return resolve
