"""Locking primitives shared by the map types."""
from syncmap.concurrency.rwlock import ReadWriteLock

__all__ = ["ReadWriteLock"]
