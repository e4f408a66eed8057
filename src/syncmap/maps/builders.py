"""Free-function constructors and combinators for ConcurrentMap."""
from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

from syncmap.maps.concurrent_map import ConcurrentMap

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
E = TypeVar("E")


def wrap(data: dict[K, V]) -> ConcurrentMap[K, V]:
    """Wrap an existing dict without copying it.

    Writes through the returned map land in data, and writes to data
    show up in the map.
    """
    return ConcurrentMap(data)


# short alias, handy in expressions like m({"x": 1}).join(...)
m = wrap


def from_sequence(values: Iterable[V]) -> ConcurrentMap[int, V]:
    """Map each value to its 0-based position: ["a", "b"] -> {0: "a", 1: "b"}."""
    return ConcurrentMap(dict(enumerate(values)))


def join(*maps: ConcurrentMap[K, V]) -> ConcurrentMap[K, V]:
    """Union of all maps. On key collision the later argument wins."""
    return ConcurrentMap().join(*maps)


def each(source: ConcurrentMap[K, V], mapper: Callable[[V], E]) -> ConcurrentMap[K, E]:
    """Function form of ConcurrentMap.each."""
    return source.each(mapper)
