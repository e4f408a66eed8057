"""Shared fixtures for ConcurrentMap tests."""
from __future__ import annotations

import pytest

from syncmap.maps.concurrent_map import ConcurrentMap


@pytest.fixture
def xyz() -> ConcurrentMap[str, int]:
    return ConcurrentMap({"x": 1, "y": 2, "z": 3})


@pytest.fixture
def backing() -> dict[str, int]:
    """A plain dict that tests wrap and then inspect directly."""
    return {"x": 1}
