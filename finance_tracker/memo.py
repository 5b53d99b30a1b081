"""Dependency-keyed memoization for derived views.

Derived collections (sorted tables, chart series) are recomputed only when
one of their inputs is replaced by a different object.  Equality is not
consulted: two equal lists are still two dependencies.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

from .logging_setup import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _same_dependencies(
    previous: Tuple[Tuple[Any, ...], Dict[str, Any]],
    current: Tuple[Tuple[Any, ...], Dict[str, Any]],
) -> bool:
    prev_args, prev_kwargs = previous
    args, kwargs = current
    if len(prev_args) != len(args) or prev_kwargs.keys() != kwargs.keys():
        return False
    if any(a is not b for a, b in zip(prev_args, args)):
        return False
    return all(prev_kwargs[key] is kwargs[key] for key in kwargs)


class IdentityMemo(Generic[T]):
    """Cache the most recent result of ``func`` keyed on argument identity."""

    def __init__(self, func: Callable[..., T]):
        self._func = func
        self._dependencies: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None
        self._result: Optional[T] = None
        self.recomputations = 0

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        current = (args, kwargs)
        if self._dependencies is not None and _same_dependencies(self._dependencies, current):
            return self._result  # type: ignore[return-value]
        logger.debug("Recomputing %s", getattr(self._func, "__name__", self._func))
        self._result = self._func(*args, **kwargs)
        self._dependencies = current
        self.recomputations += 1
        return self._result

    def clear(self) -> None:
        self._dependencies = None
        self._result = None
