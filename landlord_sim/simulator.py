import logging
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .catalog import Catalog
from .config import SimConfig
from .policies.landlord import Landlord
from .policies.ledger import ResidentSnapshot

logger = logging.getLogger(__name__)


class Outcome(Enum):
    HIT = "HIT"
    MISS = "MISS"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class StepOutcome:
    index: int
    key: str
    outcome: Outcome
    cost: Fraction                  # paid on a miss, 0 on a hit
    pressure: Fraction              # total rent rate charged to admit `key`
    evicted: Tuple[str, ...] = ()
    snapshot: Optional[Tuple[ResidentSnapshot, ...]] = None

    @property
    def hit(self) -> bool:
        return self.outcome is Outcome.HIT


@dataclass
class ReplayResult:
    steps: List[StepOutcome] = field(default_factory=list)
    final_state: Tuple[ResidentSnapshot, ...] = ()

    @property
    def hits(self) -> int:
        return sum(s.hit for s in self.steps)

    @property
    def misses(self) -> int:
        return len(self.steps) - self.hits

    @property
    def hit_ratio(self) -> float:
        return self.hits / len(self.steps) if self.steps else 0.0

    @property
    def total_cost(self) -> Fraction:
        return sum((s.cost for s in self.steps), Fraction(0))

    @property
    def outcomes(self) -> Tuple[Outcome, ...]:
        return tuple(s.outcome for s in self.steps)

    def to_frame(self) -> pd.DataFrame:
        """One row per request; cache column lists residents after the step."""
        rows = [(s.index, s.key, s.outcome.value, float(s.cost), float(s.pressure),
                 " ".join(s.evicted),
                 None if s.snapshot is None else " ".join(r.key for r in s.snapshot))
                for s in self.steps]
        return pd.DataFrame(rows, columns=["step", "key", "outcome", "cost",
                                           "pressure", "evicted", "cache"])


class CacheSim:
    """
    Replays a trace of item labels through a fresh Landlord cache.
    """
    def __init__(self, config: SimConfig):
        self.config = config
        self.policy = Landlord(config.capacity, config.refresh, config.tiebreak)

    # ----------------------------------------------------------
    def replay(self, catalog: Catalog, trace: Iterable[str],
               keep_snapshots: bool = True, start: int = 0) -> ReplayResult:
        """
        `start` only offsets the reported step indices, so a suffix run
        numbers its steps by their position in the full trace.
        """
        result = ReplayResult()
        policy = self.policy
        for i, item in enumerate(catalog.resolve(trace), start):
            hit = policy.request(item.key, item.size, item.cost)
            result.steps.append(StepOutcome(
                index=i,
                key=item.key,
                outcome=Outcome.HIT if hit else Outcome.MISS,
                cost=Fraction(0) if hit else Fraction(item.cost),
                pressure=policy.last_pressure,
                evicted=policy.last_evicted,
                snapshot=policy.snapshot() if keep_snapshots else None,
            ))
        result.final_state = policy.snapshot()
        logger.debug("replayed %d requests from %d: %d hits",
                     len(result.steps), start, result.hits)
        return result


def replay(catalog: Catalog, trace: Iterable[str], config: SimConfig,
           keep_snapshots: bool = True, start: int = 0) -> ReplayResult:
    catalog.check_fits(config.capacity)
    return CacheSim(config).replay(catalog, trace, keep_snapshots, start)
