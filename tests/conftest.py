from __future__ import annotations

from collections import OrderedDict, deque

import pytest

from landlord_sim.catalog import Catalog, Item


def make_catalog(*rows) -> Catalog:
    """rows: (label, cost, size) triples"""
    return Catalog(Item(k, c, s) for k, c, s in rows)


@pytest.fixture
def unit_catalog() -> Catalog:
    return make_catalog(("A", 1, 1), ("B", 1, 1), ("C", 1, 1), ("D", 1, 1))


class RefLRU:
    """Count-based LRU used as an oracle for the uniform case."""
    def __init__(self, capacity):
        self.capacity = capacity
        self.cache = OrderedDict()

    def request(self, key) -> bool:
        if key in self.cache:
            self.cache.move_to_end(key)
            return True
        if len(self.cache) >= self.capacity:
            self.cache.popitem(last=False)
        self.cache[key] = True
        return False


class RefFIFO:
    def __init__(self, capacity):
        self.capacity = capacity
        self.queue = deque()

    def request(self, key) -> bool:
        if key in self.queue:
            return True
        if len(self.queue) >= self.capacity:
            self.queue.popleft()
        self.queue.append(key)
        return False
