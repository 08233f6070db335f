"""
Append-only string array used to build argument and environment vectors.

The exec boundary expects a flat, terminated sequence of strings. StringArray
accumulates elements one at a time so callers never need to know the final
count up front, and only produces the terminated form when asked for it.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from typing import Any, overload

# Marks the end of a materialized array.
TERMINATOR = None


def _own(item: str | bytes) -> str:
    """Return an owned str copy of item, rejecting embedded NULs."""
    if isinstance(item, bytes):
        item = os.fsdecode(item)
    elif not isinstance(item, str):
        raise TypeError(f"expected str or bytes, got {type(item).__name__}")
    if "\x00" in item:
        raise ValueError(f"embedded null character in {item!r}")
    return str(item)


class StringArray:
    """
    Growable, ordered sequence of owned strings.

    Elements are copied on push and never mutated afterwards. Index access and
    iteration only cover real elements; terminated() appends the end marker.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[str | bytes] | None = None) -> None:
        self._items: list[str] = []
        if items is not None:
            for item in items:
                self.push(item)

    def push(self, item: str | bytes) -> None:
        """
        Append a copy of item.

        Raises:
            TypeError: If item is not str or bytes
            ValueError: If item contains a null character
        """
        self._items.append(_own(item))

    def clear(self) -> None:
        """Drop every element. Safe to call on an empty array."""
        self._items.clear()

    def count(self) -> int:
        """Number of elements before the terminator."""
        return len(self._items)

    def terminated(self) -> list[str | None]:
        """Flat copy with the terminator one past the last element."""
        return [*self._items, TERMINATOR]

    def to_list(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        return self._items[index]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, StringArray):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StringArray({self._items!r})"


def count(array: StringArray | None) -> int:
    """Element count of array; 0 when array is None."""
    if array is None:
        return 0
    return array.count()


def push(array: StringArray | None, item: str | bytes) -> StringArray:
    """
    Append item to array, creating the array when it is None.

    Returns the array so callers holding None can keep the result.
    """
    if array is None:
        array = StringArray()
    array.push(item)
    return array


def clear(array: StringArray | None) -> None:
    """Release every element of array. No-op when array is None."""
    if array is not None:
        array.clear()
