"""syncmap: a thread-safe dict wrapper with filter/join/diff/chunk helpers."""
from syncmap.concurrency.rwlock import ReadWriteLock
from syncmap.maps import ConcurrentMap, each, from_sequence, join, m, wrap

__all__ = [
    "ConcurrentMap",
    "ReadWriteLock",
    "each",
    "from_sequence",
    "join",
    "m",
    "wrap",
]
