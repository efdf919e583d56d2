"""Reference-counted, growable array of strings.

Ownership rules:

* ``append_owned`` stores the given ``str`` object itself; the caller hands it
  over and keeps no claim on it.
* ``append_copy`` stores an independent duplicate, which also accepts mutable
  ``bytearray`` buffers so later changes to the caller's buffer never reach
  the array.
* ``get`` returns the stored element (borrowed); ``get_copy`` returns a
  duplicate the caller owns.

Several holders may share one array through ``clone``.  Each holder calls
``destroy`` when done; only the last one frees the elements.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Literal

from strarray.constants import (
    COPY_MODE_COPY,
    COPY_MODE_INSERT,
    COPY_MODE_NOCOPY,
    DEFAULT_CAPACITY,
    JOIN_SEPARATORS,
    STRING_ENCODING,
    STRING_ERRORS,
)
from strarray.errors import AllocationError, IndexOutOfRangeError, InvalidArgumentError

logger = logging.getLogger(__name__)

AddMode = Literal["insert", "copy"]
GetMode = Literal["nocopy", "copy"]
JoinMode = Literal["none", "newline", "space"]


def duplicate_string(item: str | bytes | bytearray, *, operation: str = "duplicate_string") -> str:
    """Return a ``str`` whose content no longer depends on the buffer behind ``item``."""
    if isinstance(item, (bytes, bytearray)):
        return bytes(item).decode(STRING_ENCODING, STRING_ERRORS)
    if isinstance(item, str):
        # str is immutable, so sharing it cannot leak later changes.
        return item
    raise InvalidArgumentError(operation, f"string required, got {type(item).__name__}")


def encode_string(item: str, *, operation: str = "encode_string") -> bytes:
    """Bytes of ``item`` as stored on disk and compared when sorting."""
    try:
        return item.encode(STRING_ENCODING, STRING_ERRORS)
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(operation, f"string cannot be encoded: {exc}") from exc


class StringArray:
    __slots__ = ("_capacity", "_destroyed", "_items", "_refcount")

    def __init__(self, capacity: int = 0) -> None:
        self._capacity = capacity if capacity > 0 else DEFAULT_CAPACITY
        self._items: list[str] = []
        self._refcount = 1
        self._destroyed = False

    @classmethod
    def from_strings(cls, strings: Iterable[str | bytes | bytearray]) -> StringArray:
        """Build an array holding copies of ``strings``."""
        values = list(strings)
        array = cls(len(values))
        for value in values:
            array.append_copy(value)
        return array

    # -- lifetime ---------------------------------------------------------

    def _check_alive(self, operation: str) -> None:
        if self._destroyed:
            raise InvalidArgumentError(operation, "array has been destroyed")

    @property
    def refcount(self) -> int:
        self._check_alive("refcount")
        return self._refcount

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def clone(self) -> StringArray:
        """Return another handle to this same array, bumping the refcount."""
        self._check_alive("clone")
        self._refcount += 1
        return self

    retain = clone

    def change_refcount(self, delta: int) -> None:
        self._check_alive("change_refcount")
        self._refcount += delta

    def release(self, delta: int = 1) -> bool:
        """Drop ``delta`` references; free the elements when none remain.

        Returns True when this call destroyed the array.
        """
        if self._destroyed:
            logger.warning("release called on an already destroyed string array")
            return False
        if delta <= 0:
            raise InvalidArgumentError("release", f"delta must be positive, got {delta}")
        self._refcount -= delta
        if self._refcount > 0:
            return False
        self._items.clear()
        self._capacity = 0
        self._refcount = 0
        self._destroyed = True
        logger.debug("string array destroyed")
        return True

    def destroy(self) -> bool:
        return self.release(1)

    def copy(self) -> StringArray:
        """Deep copy: a new array (refcount 1) holding duplicates of every element."""
        self._check_alive("copy")
        duplicate = StringArray(self._capacity)
        for item in self._items:
            duplicate.append_copy(item)
        return duplicate

    # -- mutation ---------------------------------------------------------

    def _extend_capacity(self) -> None:
        self._capacity *= 2
        logger.debug("string array capacity grown to %d", self._capacity)

    def _append(self, item: str) -> None:
        if len(self._items) >= self._capacity:
            self._extend_capacity()
        self._items.append(item)

    def append_owned(self, item: str) -> None:
        """Store ``item`` itself; the array becomes its owner."""
        self._check_alive("append_owned")
        if item is None:
            raise InvalidArgumentError("append_owned", "string not defined")
        if not isinstance(item, str):
            raise InvalidArgumentError(
                "append_owned", f"only str can be handed over, got {type(item).__name__}"
            )
        self._append(item)

    def append_copy(self, item: str | bytes | bytearray) -> None:
        """Store a duplicate of ``item``; the caller keeps its own value untouched."""
        self._check_alive("append_copy")
        if item is None:
            raise InvalidArgumentError("append_copy", "string not defined")
        self._append(duplicate_string(item, operation="append_copy"))

    def add_string(self, item: str, mode: AddMode = COPY_MODE_INSERT) -> None:
        if mode == COPY_MODE_INSERT:
            self.append_owned(item)
        elif mode == COPY_MODE_COPY:
            self.append_copy(item)
        else:
            raise InvalidArgumentError("add_string", f"invalid copy mode: {mode!r}")

    def remove(self, index: int) -> str:
        """Remove the element at ``index`` and hand it to the caller, keeping order."""
        self._check_alive("remove")
        self._check_index("remove", index)
        return self._items.pop(index)

    def clear(self) -> None:
        """Drop every element; capacity is retained."""
        self._check_alive("clear")
        self._items.clear()

    # -- accessors --------------------------------------------------------

    def _check_index(self, operation: str, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise InvalidArgumentError(operation, f"index must be an int, got {type(index).__name__}")
        if index < 0 or index >= len(self._items):
            raise IndexOutOfRangeError(
                operation,
                f"index {index} not in [0, {len(self._items)})",
                {"index": index, "count": len(self._items)},
            )

    @property
    def count(self) -> int:
        self._check_alive("count")
        return len(self._items)

    @property
    def capacity(self) -> int:
        self._check_alive("capacity")
        return self._capacity

    def get(self, index: int) -> str:
        """Borrowed element: do not keep it beyond the array's lifetime."""
        self._check_alive("get")
        self._check_index("get", index)
        return self._items[index]

    def get_copy(self, index: int) -> str:
        self._check_alive("get_copy")
        self._check_index("get_copy", index)
        return duplicate_string(self._items[index], operation="get_copy")

    def get_string(self, index: int, mode: GetMode = COPY_MODE_NOCOPY) -> str:
        if mode == COPY_MODE_NOCOPY:
            return self.get(index)
        if mode == COPY_MODE_COPY:
            return self.get_copy(index)
        raise InvalidArgumentError("get_string", f"invalid copy mode: {mode!r}")

    def items(self) -> tuple[str, ...]:
        self._check_alive("items")
        return tuple(self._items)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[str]:
        self._check_alive("iter")
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> str:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringArray):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._destroyed:
            return "StringArray(<destroyed>)"
        return f"StringArray({self._items!r})"

    # -- conversion to text -----------------------------------------------

    def to_string(self, join: JoinMode = "none") -> str:
        """Concatenate every element, appending the join separator after each one."""
        self._check_alive("to_string")
        _join_separator("to_string", join)
        if not self._items:
            return ""
        return self.to_string_range(0, 0, join)

    def to_string_range(self, first: int, count: int = 0, join: JoinMode = "none") -> str:
        """Concatenate elements ``[first, first + count)``; ``count == 0`` means to the end.

        The join separator follows every included element, the last one too.
        """
        self._check_alive("to_string_range")
        separator = _join_separator("to_string_range", join)
        total = len(self._items)
        if first < 0 or first >= total:
            raise IndexOutOfRangeError(
                "to_string_range",
                f"first {first} not in [0, {total})",
                {"first": first, "count": total},
            )
        if count < 0:
            raise InvalidArgumentError("to_string_range", f"count must be >= 0, got {count}")
        if count == 0 or count > total - first:
            count = total - first

        parts: list[str] = []
        for item in self._items[first : first + count]:
            parts.append(item)
            if separator:
                parts.append(separator)
        try:
            return "".join(parts)
        except MemoryError as exc:
            raise AllocationError("to_string_range", "output buffer not made") from exc


def _join_separator(operation: str, join: str) -> str:
    try:
        return JOIN_SEPARATORS[join]
    except KeyError:
        raise InvalidArgumentError(operation, f"invalid join mode: {join!r}") from None


def concatenate(dst: StringArray | None, src: StringArray | None) -> None:
    """Append duplicates of every element of ``src`` onto ``dst``; ``src`` is unchanged."""
    if dst is None:
        raise InvalidArgumentError("concatenate", "destination array not defined")
    if src is None:
        raise InvalidArgumentError("concatenate", "source array not defined")
    dst._check_alive("concatenate")
    for item in src.items():
        dst.append_copy(item)


__all__ = [
    "AddMode",
    "GetMode",
    "JoinMode",
    "StringArray",
    "concatenate",
    "duplicate_string",
    "encode_string",
]
