"""
Ring Index

Sorted storage for ring entries. Hashes are kept in a plain sorted list next
to the entries so lookups can use bisect in O(log n); inserts and removals
shift the lists, which is fine for rings of a few thousand entries.
"""

import bisect
from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar('T')


class RingEntry(Generic[T]):
    """A node placed on the ring at `hash`."""

    __slots__ = ('hash', 'node')

    def __init__(self, hash_value: int, node: T):
        self.hash = hash_value
        self.node = node

    def __repr__(self) -> str:
        return f"RingEntry(hash={self.hash:#018x}, node={self.node!r})"


class RingIndex(Generic[T]):
    """
    Entries ordered by hash, with successor lookup and wrap-around.

    Several entries may share a hash. They are kept in insertion order
    among themselves, and both lookup and removal pick the first of them.
    """

    def __init__(self):
        self._hashes: List[int] = []  # sorted, parallel to _entries
        self._entries: List[RingEntry[T]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RingEntry[T]]:
        return iter(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    @property
    def hashes(self) -> List[int]:
        """Copy of the stored hashes in ring order."""
        return list(self._hashes)

    def insert(self, hash_value: int, node: T) -> None:
        """Place `node` at `hash_value`. Duplicate hashes go after existing ones."""
        idx = bisect.bisect_right(self._hashes, hash_value)
        self._hashes.insert(idx, hash_value)
        self._entries.insert(idx, RingEntry(hash_value, node))

    def remove_by_hash(self, hash_value: int) -> Optional[T]:
        """
        Detach one entry stored at `hash_value` and return its node.

        Returns None if no entry has that hash. Only a single entry is
        removed per call even when several share the hash.
        """
        idx = bisect.bisect_left(self._hashes, hash_value)
        if idx == len(self._hashes) or self._hashes[idx] != hash_value:
            return None

        del self._hashes[idx]
        return self._entries.pop(idx).node

    def find(self, hash_value: int) -> Optional[RingEntry[T]]:
        """Entry stored exactly at `hash_value`, or None."""
        idx = bisect.bisect_left(self._hashes, hash_value)
        if idx < len(self._hashes) and self._hashes[idx] == hash_value:
            return self._entries[idx]
        return None

    def successor(self, hash_value: int) -> Optional[RingEntry[T]]:
        """
        First entry clockwise from `hash_value`.

        That is the entry with the smallest hash >= hash_value, wrapping to
        the lowest entry when hash_value is past every stored hash.
        Returns None only for an empty index.
        """
        if not self._entries:
            return None

        idx = bisect.bisect_left(self._hashes, hash_value)
        if idx == len(self._hashes):
            # Wrap around to the beginning of the ring
            idx = 0

        return self._entries[idx]
