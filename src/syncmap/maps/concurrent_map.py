"""ConcurrentMap: a dict behind one read-write lock, plus derived views.

Two kinds of operation:

  Point operations (add, delete, get, exists, length, update) take the
  instance lock for their own duration only. Two consecutive calls are
  two critical sections; nothing is atomic across calls except update().

  Derived operations (filter*, chunk, diff, join, only, each) never
  mutate anything. They copy the input's items under the shared lock,
  drop the lock, and build a fresh ConcurrentMap from the copy. User
  callbacks therefore run with no lock held and may call back into the
  same map, writers included.

Construction aliases the caller's dict rather than copying it:

    shared = {"x": 1}
    m = ConcurrentMap(shared)
    m.add("y", 2)
    assert shared == {"x": 1, "y": 2}

The lock belongs to the wrapper, not to the dict. Two wrappers built
over the same dict do not exclude each other.
"""
from __future__ import annotations

import logging
import reprlib
from typing import Callable, Generic, Hashable, TypeVar

from syncmap.concurrency.rwlock import ReadWriteLock

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
E = TypeVar("E")


class ConcurrentMap(Generic[K, V]):
    """Thread-safe mapping from unique keys to values.

    Args:
        data: Existing dict to wrap. It is aliased, not copied. When
            omitted a new empty dict is allocated.
    """

    __slots__ = ("_data", "_lock")

    def __init__(self, data: dict[K, V] | None = None) -> None:
        self._data: dict[K, V] = data if data is not None else {}
        self._lock = ReadWriteLock()

    # -- point operations -----------------------------------------------

    def add(self, key: K, value: V) -> ConcurrentMap[K, V]:
        """Insert or overwrite. Returns self so calls can be chained."""
        with self._lock.write():
            self._data[key] = value
        return self

    def delete(self, key: K) -> bool:
        """Remove key. Returns True if it was present."""
        with self._lock.write():
            if key in self._data:
                del self._data[key]
                return True
            return False

    def get(self, key: K, default: V | None = None) -> tuple[V | None, bool]:
        """Return (value, True) if key is present, else (default, False).

        The flag is what distinguishes a stored None from a missing key.
        """
        with self._lock.read():
            if key in self._data:
                return self._data[key], True
            return default, False

    def exists(self, key: K) -> bool:
        with self._lock.read():
            return key in self._data

    def length(self) -> int:
        """Number of entries, read under the shared lock."""
        with self._lock.read():
            return len(self._data)

    def update(self, key: K, func: Callable[[V | None], V], default: V | None = None) -> V:
        """Atomic read-modify-write under the exclusive lock.

        func receives the current value (default if key is absent) and
        returns the value to store. Nothing can interleave between the
        read and the write. func runs while the lock is held, so it must
        not touch this map.
        """
        with self._lock.write():
            new_val = func(self._data.get(key, default))
            self._data[key] = new_val
            return new_val

    # -- snapshots / export ---------------------------------------------

    def to_dict(self) -> dict[K, V]:
        """The underlying dict itself (not a copy, same as what was wrapped)."""
        return self._data

    def keys(self) -> list[K]:
        with self._lock.read():
            return list(self._data)

    def values(self) -> list[V]:
        with self._lock.read():
            return list(self._data.values())

    def items(self) -> list[tuple[K, V]]:
        """Point-in-time copy of all entries."""
        with self._lock.read():
            return list(self._data.items())

    # -- derived operations ---------------------------------------------

    def filter(self, predicate: Callable[[K, V], bool]) -> ConcurrentMap[K, V]:
        """Keep entries where predicate(key, value) holds."""
        return ConcurrentMap({k: v for k, v in self.items() if predicate(k, v)})

    def filter_values(self, predicate: Callable[[V], bool]) -> ConcurrentMap[K, V]:
        return ConcurrentMap({k: v for k, v in self.items() if predicate(v)})

    def filter_keys(self, predicate: Callable[[K], bool]) -> ConcurrentMap[K, V]:
        return ConcurrentMap({k: v for k, v in self.items() if predicate(k)})

    def chunk(self, size: int) -> list[ConcurrentMap[K, V]]:
        """Split into maps of at most size entries, in iteration order.

        Every chunk but the last holds exactly size entries. An empty
        map yields an empty list.

        Raises:
            ValueError: if size < 1.
        """
        if size < 1:
            raise ValueError(f"chunk size must be >= 1, got {size}")
        entries = self.items()
        chunks = [
            ConcurrentMap(dict(entries[i:i + size]))
            for i in range(0, len(entries), size)
        ]
        log.debug(
            "chunked %d entries into %d maps of <= %d", len(entries), len(chunks), size
        )
        return chunks

    def diff(self, other: ConcurrentMap[K, V]) -> ConcurrentMap[K, V]:
        """Entries of self whose key is absent from other.

        Asymmetric: keys only in other are not reported.
        """
        # Each input is snapshotted under its own lock, one at a time,
        # so diff(a, b) and diff(b, a) running together cannot deadlock.
        other_keys = set(other.keys())
        return ConcurrentMap(
            {k: v for k, v in self.items() if k not in other_keys}
        )

    def join(self, *others: ConcurrentMap[K, V]) -> ConcurrentMap[K, V]:
        """Right-biased union of others, then self.

        Maps are applied left to right and self goes last, so on a key
        collision self wins, and among the others the later argument wins.
        """
        joined: dict[K, V] = {}
        for source in (*others, self):
            joined.update(source.items())
        return ConcurrentMap(joined)

    def only(self, *keys: K) -> ConcurrentMap[K, V]:
        """Project onto the given keys. Keys not in the map are skipped."""
        with self._lock.read():
            data = self._data
            return ConcurrentMap({k: data[k] for k in keys if k in data})

    def each(self, mapper: Callable[[V], E]) -> ConcurrentMap[K, E]:
        """Apply mapper to every value, keeping keys. Value type may change."""
        return ConcurrentMap({k: mapper(v) for k, v in self.items()})

    # -- dunder conveniences --------------------------------------------

    def __len__(self) -> int:
        return self.length()

    def __contains__(self, key: K) -> bool:
        return self.exists(key)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        # format outside the lock: values may be maps, including self
        return f"ConcurrentMap({dict(self.items())!r})"
