"""
Suffix analysis: replay every trailing slice of a trace from an empty cache.

Each suffix run is independent of the others, so they can be spread over a
process pool. Results always come back ordered by start index.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, List, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

from .catalog import Catalog
from .config import SimConfig
from .policies.ledger import ResidentSnapshot
from .policies.metrics import competitive_ratio
from .simulator import CacheSim, Outcome, ReplayResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuffixResult:
    start: int
    outcomes: Tuple[Outcome, ...]
    costs: Tuple[Fraction, ...]
    final_state: Tuple[ResidentSnapshot, ...]

    @property
    def hits(self) -> int:
        return sum(o is Outcome.HIT for o in self.outcomes)

    @property
    def misses(self) -> int:
        return len(self.outcomes) - self.hits

    @property
    def total_cost(self) -> Fraction:
        return sum(self.costs, Fraction(0))


def _run_suffix(catalog: Catalog, trace: Sequence[str], config: SimConfig,
                start: int) -> SuffixResult:
    res = CacheSim(config).replay(catalog, trace[start:], keep_snapshots=False, start=start)
    return SuffixResult(start, res.outcomes, tuple(s.cost for s in res.steps),
                        res.final_state)


# per-process copy of the inputs, set once by the pool initializer
_shared = None


def _init_worker(catalog, trace, config):
    global _shared
    _shared = (catalog, trace, config)


def _run_shared(start: int) -> SuffixResult:
    return _run_suffix(*_shared, start)


def analyze_suffixes(catalog: Catalog, trace: Iterable[str], config: SimConfig,
                     workers: int = 1, progress: bool = False) -> List[SuffixResult]:
    trace = list(trace)
    catalog.check_fits(config.capacity)
    catalog.resolve(trace)
    starts = range(len(trace))
    logger.info("analyzing %d suffixes with %d worker(s)", len(trace), workers)

    if workers > 1 and len(trace) > 1:
        chunk = max(1, len(trace) // (workers * 4))
        with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                 initargs=(catalog, trace, config)) as pool:
            it = pool.map(_run_shared, starts, chunksize=chunk)
            return list(tqdm(it, total=len(trace), desc="suffixes", disable=not progress))

    return [_run_suffix(catalog, trace, config, i)
            for i in tqdm(starts, desc="suffixes", disable=not progress)]


def suffix_frame(full: ReplayResult, suffixes: Iterable[SuffixResult]) -> pd.DataFrame:
    """Per-suffix totals next to what the full run paid on the same requests."""
    full_costs = [s.cost for s in full.steps]
    rows = []
    for suf in suffixes:
        paid = suf.total_cost
        baseline = sum(full_costs[suf.start:], Fraction(0))
        rows.append((suf.start, suf.hits, suf.misses, float(paid), float(baseline),
                     competitive_ratio(paid, baseline)))
    return pd.DataFrame(rows, columns=["start", "hits", "misses", "cost",
                                       "full_cost", "competitive_ratio"])
