# landlord_sim/policies/metrics.py
from collections import defaultdict
from fractions import Fraction

import numpy as np

from ..simulator import CacheSim


def cost_series(result) -> np.ndarray:
    """Fault cost paid at each step of a replay."""
    return np.array([float(s.cost) for s in result.steps], dtype=float)


def competitive_ratio(suffix_cost, full_cost) -> float:
    if full_cost == 0:
        return float("inf") if suffix_cost > 0 else 0.0
    return float(Fraction(suffix_cost) / Fraction(full_cost))


def suffix_competitive_ratio(full, suffix, upto=None) -> float:
    """
    Cost of the suffix run over cost of the full run on the requests
    [suffix.start, upto). `upto` defaults to the end of the trace.
    """
    upto = len(full.steps) if upto is None else upto
    paid = sum(suffix.costs[:max(0, upto - suffix.start)], Fraction(0))
    baseline = sum((s.cost for s in full.steps[suffix.start:upto]), Fraction(0))
    return competitive_ratio(paid, baseline)


def item_competitive_ratios(full, suffix) -> dict:
    """Per-item suffix competitive ratio over the suffix span."""
    paid = defaultdict(Fraction)
    baseline = defaultdict(Fraction)
    for step, cost in zip(full.steps[suffix.start:], suffix.costs):
        paid[step.key] += cost
        baseline[step.key] += step.cost
    return {k: competitive_ratio(paid[k], baseline[k]) for k in baseline}


def replay_with_metrics(catalog, trace, config):
    catalog.check_fits(config.capacity)
    res = CacheSim(config).replay(catalog, trace, keep_snapshots=False)
    reqs = len(res.steps)
    cost_total = sum((Fraction(catalog[s.key].cost) for s in res.steps), Fraction(0))
    pressures = [float(s.pressure) for s in res.steps if not s.hit]

    return {
        "hit_ratio": res.hit_ratio,
        "total_cost": float(res.total_cost),
        "cost_saved_pct": float(1 - res.total_cost / cost_total) if reqs else 0.0,
        "avg_pressure": float(np.mean(pressures)) if pressures else 0.0,
    }
