import numpy as np

from .catalog import Catalog, Item


def generate_catalog(n=10, rng=None, max_cost=10, max_size=4):
    """Random integer-valued catalog with labels o0..o{n-1}."""
    rng = rng if rng is not None else np.random.default_rng()
    costs = rng.integers(1, max_cost + 1, n)
    sizes = rng.integers(1, max_size + 1, n)
    return Catalog(Item(f"o{i}", int(c), int(s)) for i, (c, s) in enumerate(zip(costs, sizes)))


def generate_trace(catalog, length=100, pattern_type='uniform', rng=None):
    """Generate a request trace over the catalog's labels"""
    rng = rng if rng is not None else np.random.default_rng()
    keys = list(catalog)

    if pattern_type == 'uniform':
        idx = rng.integers(0, len(keys), length)

    elif pattern_type == 'zipf':
        # skewed popularity, clipped into the catalog
        idx = np.minimum(rng.zipf(1.5, length) - 1, len(keys) - 1)

    elif pattern_type == 'loop':
        # cyclic scan, the classic LRU worst case
        idx = np.arange(length) % len(keys)

    else:
        raise ValueError(f"Unknown pattern type: {pattern_type}")
    return [keys[i] for i in idx]
