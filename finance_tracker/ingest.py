"""Load list-endpoint payloads into typed records.

The backend exposes ``GET /categories``, ``/expenses``, ``/incomes`` and
``/budgets``, each answering with a JSON array (or ``null`` when the table
is empty).  Saved responses can be loaded from disk with
:func:`load_export` for offline reports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Union

from .logging_setup import get_logger
from .records import RECORD_TYPES, Budget, Category, Expense, Income, RecordError

logger = get_logger(__name__)

Source = Union[str, Path, list, None, Any]


@dataclass
class Ledger:
    """Everything the tables and charts consume, as fetched."""

    categories: List[Category] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    incomes: List[Income] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)


def _read_payload(source: Source) -> Any:
    if source is None or isinstance(source, list):
        return source
    if hasattr(source, "read"):
        return json.load(source)
    path = Path(source)
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def load_collection(kind: str, source: Source) -> list:
    """Parse one collection (``"categories"``, ``"expenses"``, ...).

    ``source`` may be a path, an open file or an already decoded list.
    """
    record_type = RECORD_TYPES.get(kind)
    if record_type is None:
        raise ValueError(f"Unknown record kind '{kind}'. Expected one of: {', '.join(RECORD_TYPES)}")
    payload = _read_payload(source)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise RecordError(f"Expected a JSON array of {kind}, got {type(payload).__name__}")

    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RecordError(f"{kind}[{index}] is not an object")
        try:
            records.append(record_type.from_dict(item))
        except RecordError as exc:
            raise RecordError(f"{kind}[{index}]: {exc}") from exc
    logger.debug("Loaded %d %s", len(records), kind)
    return records


def load_export(directory: Union[str, Path]) -> Ledger:
    """Load ``<kind>.json`` files from ``directory``; missing files are empty."""
    root = Path(directory)
    ledger = Ledger()
    for kind in RECORD_TYPES:
        path = root / f"{kind}.json"
        if not path.exists():
            logger.info("No %s export at %s", kind, path)
            continue
        setattr(ledger, kind, load_collection(kind, path))
    return ledger
