"""
Ring Hash Function

Maps identity byte strings onto the 64-bit ring. The exact rule (MD5, first
8 digest bytes read little-endian) is shared with every peer routing over the
same ring, so changing it would relocate every key.
"""

import hashlib
from typing import Any

# Size of the hash space; positions live in [0, RING_SIZE)
RING_SIZE = 2 ** 64


def render_identity(value: Any) -> bytes:
    """
    Render a node or key to the byte string that gets hashed.

    Byte-like values are used as they are. Everything else goes through
    str() and is encoded as UTF-8, so callers control identity by defining
    __str__. Nothing is normalized: "Foo" and "foo" are different identities.
    Lone surrogates in a str are encoded as-is (surrogatepass) rather than
    rejected, so every str has an identity.

    The rendering must not change while the value sits in a ring, otherwise
    the entry can no longer be found by remove() or membership checks.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode('utf-8', errors='surrogatepass')


def ring_hash(data: bytes) -> int:
    """Position of `data` on the ring: little-endian u64 of the first 8 MD5 bytes."""
    digest = hashlib.md5(data).digest()

    n = 0
    for shift, byte in enumerate(digest[:8]):
        n |= byte << (8 * shift)
    return n
