"""
Consistent Hashing Ring Implementation

This is the core algorithm behind routing requests to a changing set of
servers. When a node is added or removed, only the keys it owns move.

Nodes and keys can be any values. Each is reduced to an identity byte
string (see ring_hash.render_identity) and placed on a 64-bit ring by
hashing that identity. Virtual nodes are a caller concern: add several
nodes with distinct identities that point at the same backend (vnode.py
has a helper for that).
"""

import logging
from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from ring_hash import RING_SIZE, render_identity, ring_hash
from ring_index import RingEntry, RingIndex

logger = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')


class HashRing(Generic[T, U]):
    """
    Consistent hash ring mapping keys of type U to nodes of type T.

    The ring is a plain in-memory structure with a single owner. It does no
    locking; callers sharing it between threads must guard it themselves.

    Node identity, not object equality, is what the ring works with. Two
    nodes whose identities match are interchangeable for remove() and
    membership, and an identity must stay the same while its node is in
    the ring.
    """

    def __init__(self, nodes: Optional[Iterable[T]] = None):
        """
        Initialize the hash ring.

        Args:
            nodes: Optional initial nodes, added in order
        """
        self._index: RingIndex[T] = RingIndex()

        if nodes:
            for node in nodes:
                self.add(node)

    def _key(self, value) -> int:
        return ring_hash(render_identity(value))

    def __len__(self) -> int:
        """Number of entries on the ring."""
        return len(self._index)

    def is_empty(self) -> bool:
        return self._index.is_empty()

    def add(self, node: T) -> None:
        """
        Add `node` to the ring.

        Nodes with colliding identities are not deduplicated; each one gets
        its own entry and takes part in lookups.
        """
        key = self._key(node)
        self._index.insert(key, node)
        logger.debug("Added node %s at %#018x", node, key)

    def remove(self, node: T) -> Optional[T]:
        """
        Remove a node from the ring and return it.

        The entry is located by the hash of `node`'s identity, not by
        comparing node objects. The value returned is the one that was
        stored, which may be a different object from `node`. If several
        entries share the identity, exactly one of them is removed.

        Returns None if no entry has that identity.
        """
        key = self._key(node)
        removed = self._index.remove_by_hash(key)
        if removed is None:
            logger.debug("Node %s not on ring, nothing removed", node)
        else:
            logger.debug("Removed node %s from %#018x", removed, key)
        return removed

    def get(self, key: U) -> Optional[T]:
        """
        Find which node is responsible for `key`.

        Hashes the key's identity and walks clockwise to the first node at
        or after that position, wrapping past the top of the ring.
        Returns None only when the ring is empty.
        """
        entry = self._index.successor(self._key(key))
        if entry is None:
            return None
        return entry.node

    def __contains__(self, node) -> bool:
        return self._index.find(self._key(node)) is not None

    def __iter__(self) -> Iterator[T]:
        """Stored nodes in ring order."""
        for entry in self._index:
            yield entry.node

    def entries(self) -> List[RingEntry[T]]:
        """Ring entries in ascending hash order."""
        return list(self._index)

    def load_distribution(self) -> Dict[str, float]:
        """
        Analyze how much of the hash space each identity owns.

        An entry owns the arc between the previous entry's hash (exclusive)
        and its own (inclusive); the lowest entry also owns the wrap-around
        arc. Returns identity -> percentage of the ring. Useful for checking
        how evenly a set of virtual nodes spreads a backend.

        Identities are told apart by their bytes. Bytes that are not valid
        UTF-8 appear as backslash escapes in the returned keys.
        """
        entries = list(self._index)
        if not entries:
            return {}

        owned: Dict[bytes, int] = {}
        for i, entry in enumerate(entries):
            if i == 0:
                arc = entry.hash + RING_SIZE - entries[-1].hash
            else:
                arc = entry.hash - entries[i - 1].hash

            identity = render_identity(entry.node)
            owned[identity] = owned.get(identity, 0) + arc

        return {identity.decode('utf-8', errors='backslashreplace'): (size / RING_SIZE) * 100
                for identity, size in owned.items()}

    def __str__(self) -> str:
        """String representation showing ring status."""
        if self.is_empty():
            return "Empty hash ring"

        distribution = self.load_distribution()
        lines = [f"Hash ring with {len(self)} entries:"]
        for identity in sorted(distribution):
            lines.append(f"  {identity}: {distribution[identity]:.2f}% of hash space")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"HashRing(entries={len(self)})"
