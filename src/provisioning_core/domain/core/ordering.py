"""Composable three-way orderings and tie-aware maximum selection."""
import functools
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def _natural_compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


class Ordering(Generic[T]):
    """
    A comparator that can be chained into narrower orderings.

    ``compare`` returns a negative number, zero or a positive number when the
    left value ranks below, equal to or above the right value.
    """

    def __init__(self, compare: Callable[[T, T], int], description: str = "ordering"):
        self._compare = compare
        self._description = description

    @classmethod
    def natural(cls) -> "Ordering[Any]":
        """Ordering by the values' own comparison operators."""
        return cls(_natural_compare, "natural()")

    def compare(self, left: T, right: T) -> int:
        return self._compare(left, right)

    __call__ = compare

    def reverse(self) -> "Ordering[T]":
        return Ordering(lambda left, right: self._compare(right, left), f"{self}.reverse()")

    def nulls_first(self) -> "Ordering[Optional[T]]":
        """Treat ``None`` as lower than every other value."""

        def compare(left, right):
            if left is None:
                return 0 if right is None else -1
            if right is None:
                return 1
            return self._compare(left, right)

        return Ordering(compare, f"{self}.nullsFirst()")

    def nulls_last(self) -> "Ordering[Optional[T]]":
        """Treat ``None`` as greater than every other value."""

        def compare(left, right):
            if left is None:
                return 0 if right is None else 1
            if right is None:
                return -1
            return self._compare(left, right)

        return Ordering(compare, f"{self}.nullsLast()")

    def on_result_of(self, function: Callable[[U], T]) -> "Ordering[U]":
        """Order values by applying this ordering to ``function(value)``."""
        return Ordering(
            lambda left, right: self._compare(function(left), function(right)),
            f"{self}.onResultOf({getattr(function, '__name__', 'function')})",
        )

    def compound(self, secondary: Callable[[T, T], int]) -> "Ordering[T]":
        """Break ties of this ordering with ``secondary``."""

        def compare(left, right):
            result = self._compare(left, right)
            if result != 0:
                return result
            return secondary(left, right)

        return Ordering(compare, f"{self}.compound({secondary})")

    def max(self, values: Iterable[T]) -> T:
        """Return the first greatest value; raises ValueError when empty."""
        maxima = multi_max(self, values)
        if not maxima:
            raise ValueError("max() of an empty iterable")
        return maxima[0]

    def min(self, values: Iterable[T]) -> T:
        return self.reverse().max(values)

    def sort_key(self):
        """Adapter for ``sorted(..., key=ordering.sort_key())``."""
        return functools.cmp_to_key(self._compare)

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"Ordering({self._description})"


def multi_max(ordering: Callable[[T, T], int], values: Iterable[T]) -> List[T]:
    """
    Return every value tied for the maximum under ``ordering``.

    Relative input order of the tied values is preserved. ``None`` values are
    compared like any other value, so null-aware orderings decide where they
    rank.

    Args:
        ordering: Three-way comparator
        values: Candidate values

    Returns:
        List of maximal values, empty when ``values`` is empty
    """
    maxima: List[T] = []
    for value in values:
        if not maxima:
            maxima.append(value)
            continue
        result = ordering(value, maxima[0])
        if result > 0:
            maxima = [value]
        elif result == 0:
            maxima.append(value)
    return maxima
