"""A growable sequence with set semantics on add and hole-tolerant indexing."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

KeyFunc = Callable[[Any], Any]


def _keyed(key: Optional[KeyFunc], item: Any) -> Any:
    return key(item) if key is not None else item


class Vector:
    """An ordered collection of items.

    Plain ``add`` refuses duplicates. ``set`` may leave ``None`` holes, which
    count toward the length. Iteration tolerates removal of the item just
    yielded.
    """

    def __init__(self) -> None:
        self._items: list[Any] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        index = 0
        while index < len(self._items):
            data = self._items[index]
            yield data
            # If the yielded item was removed meanwhile, the next one has
            # slid into its slot, so stay on the same index.
            if index < len(self._items) and self._items[index] is data:
                index += 1

    def __repr__(self) -> str:
        return f"Vector({self._items!r})"

    def sort(self, key: Optional[KeyFunc] = None) -> None:
        """Sort in place by ``key``; ``None`` holes go to the end."""
        self._items.sort(
            key=lambda item: (item is None, None if item is None else _keyed(key, item))
        )

    def lookup_index_bsearch(self, data: Any, key: Optional[KeyFunc] = None) -> int:
        """Binary-search a vector sorted by ``key``; return the index or -1."""
        target = _keyed(key, data)
        lo, hi = 0, len(self._items)
        while lo < hi:
            mid = (lo + hi) // 2
            item = self._items[mid]
            if item is None:
                hi = mid
                continue
            found = _keyed(key, item)
            if found == target:
                return mid
            if target < found:
                hi = mid
            else:
                lo = mid + 1
        return -1

    def lookup_index(self, data: Any) -> int:
        """Return the index of the first item equal to ``data``, or -1."""
        for index, item in enumerate(self._items):
            if item == data:
                return index
        return -1

    def lookup_bsearch(self, data: Any, key: Optional[KeyFunc] = None) -> Any:
        """Return the stored item matching ``data`` by binary search, or None."""
        index = self.lookup_index_bsearch(data, key)
        return None if index < 0 else self._items[index]

    def lookup(self, data: Any) -> Any:
        """Return the stored item equal to ``data``, or None."""
        index = self.lookup_index(data)
        return None if index < 0 else self._items[index]

    def add(self, data: Any) -> None:
        """Append ``data``; raise ValueError if it is already present."""
        if self.lookup(data) is not None:
            raise ValueError(f"can't add to vector: data {data!r} already exists")
        self._items.append(data)

    def add_allow_dup(self, data: Any) -> None:
        """Append ``data`` even if it is already present."""
        self._items.append(data)

    def add_sort(self, data: Any, key: Optional[KeyFunc] = None) -> None:
        """Add ``data`` and re-sort by ``key``."""
        self.add(data)
        self.sort(key)

    def remove(self, data: Any) -> None:
        """Remove the first item equal to ``data``; raise ValueError if absent."""
        index = self.lookup_index(data)
        if index < 0:
            raise ValueError(f"can't remove from vector: no such data: {data!r}")
        del self._items[index]

    def remove_index(self, index: int) -> None:
        """Remove the item at ``index``, shifting later items down."""
        if index < 0:
            raise IndexError(f"negative vector index: {index}")
        del self._items[index]

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def set(self, index: int, data: Any) -> None:
        """Store ``data`` at ``index``, padding with ``None`` holes if needed."""
        if index < 0:
            raise IndexError(f"negative vector index: {index}")
        if index >= len(self._items):
            self._items.extend([None] * (index + 1 - len(self._items)))
        self._items[index] = data

    def get(self, index: int) -> Any:
        """Return the item at ``index``, or None past the end."""
        if index < 0:
            raise IndexError(f"negative vector index: {index}")
        if index >= len(self._items):
            return None
        return self._items[index]

    def copy(self) -> "Vector":
        """Return a shallow copy."""
        duplicate = Vector()
        duplicate._items = list(self._items)
        return duplicate

    def is_same(self, other: "Vector") -> bool:
        """True if both vectors hold equal items in the same order."""
        return self._items == other._items

    def cap(self, other: "Vector") -> "Vector":
        """Return a new vector of the items present in both, in this order."""
        result = Vector()
        for a in self:
            for b in other:
                if a is not None and a == b:
                    result.add(a)
        return result

    def is_empty(self) -> bool:
        return not self._items

    def empty_index(self) -> int:
        """Index of the first ``None`` hole, or the length if there is none."""
        for index, item in enumerate(self._items):
            if item is None:
                return index
        return len(self._items)

    def catenate(self, other: "Vector") -> "Vector":
        """Add every item of ``other`` to this vector and return it."""
        for data in other:
            self.add(data)
        return self

    def merge(self, other: "Vector") -> "Vector":
        """Add the items of ``other`` not already present and return this vector."""
        for data in other:
            if self.lookup(data) is None:
                self.add(data)
        return self