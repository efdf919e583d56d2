from __future__ import annotations

from typing import Literal

from strarray.constants import SORT_DECREASING, SORT_INCREASING
from strarray.core.array import StringArray, encode_string
from strarray.errors import InvalidArgumentError

SortOrder = Literal["increasing", "decreasing"]


def compare_lexical(first: str, second: str) -> bool:
    """True when ``first`` sorts strictly after ``second`` by unsigned byte value.

    A string that is a strict prefix of the other sorts first.  Equal strings
    compare False, so they are never swapped.
    """
    if first is None or second is None:
        raise InvalidArgumentError("compare_lexical", "string not defined")
    operation = "compare_lexical"
    return encode_string(first, operation=operation) > encode_string(second, operation=operation)


def sort_array(
    out: StringArray | None,
    src: StringArray | None,
    order: SortOrder = SORT_INCREASING,
) -> StringArray:
    """Shell sort ``src`` by byte value.

    Pass ``out=None`` to sort a deep copy, or ``out=src`` to sort in place.
    """
    if src is None:
        raise InvalidArgumentError("sort_array", "source array not defined")
    src._check_alive("sort_array")
    if order not in (SORT_INCREASING, SORT_DECREASING):
        raise InvalidArgumentError("sort_array", f"invalid sort order: {order!r}")
    if out is None:
        out = src.copy()
    elif out is not src:
        raise InvalidArgumentError("sort_array", "output must be None or the source array (in-place)")

    # Gap halving shell sort over the backing list, after K&R.
    array = out._items
    n = len(array)
    keys = [encode_string(item, operation="sort_array") for item in array]
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            j = i - gap
            while j >= 0:
                if order == SORT_INCREASING:
                    swap = keys[j] > keys[j + gap]
                else:
                    swap = keys[j + gap] > keys[j]
                if swap:
                    array[j], array[j + gap] = array[j + gap], array[j]
                    keys[j], keys[j + gap] = keys[j + gap], keys[j]
                j -= gap
        gap //= 2
    return out


__all__ = ["SortOrder", "compare_lexical", "sort_array"]
