"""The ConcurrentMap container and its free-function builders."""
from syncmap.maps.builders import each, from_sequence, join, m, wrap
from syncmap.maps.concurrent_map import ConcurrentMap

__all__ = [
    "ConcurrentMap",
    "each",
    "from_sequence",
    "join",
    "m",
    "wrap",
]
