"""Turn replay and suffix results into a plain, serialisable report."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .config import SimConfig
from .errors import ConfigurationError
from .policies.metrics import item_competitive_ratios, suffix_competitive_ratio
from .simulator import ReplayResult
from .suffix import SuffixResult, suffix_frame

logger = logging.getLogger(__name__)


def _cache(state) -> List[Dict[str, Any]]:
    return [{"key": r.key, "credit": float(r.credit),
             "inserted": r.inserted, "last_access": r.last_access} for r in state]


def build_report(config: SimConfig, full: ReplayResult,
                 suffixes: Sequence[SuffixResult],
                 division: Optional[int] = None) -> Dict[str, Any]:
    report = {
        "config": config.as_dict(),
        "summary": {
            "requests": len(full.steps),
            "hits": full.hits,
            "misses": full.misses,
            "hit_ratio": full.hit_ratio,
            "total_cost": float(full.total_cost),
        },
        "steps": [
            {"index": s.index, "key": s.key, "outcome": s.outcome.value,
             "cost": float(s.cost), "pressure": float(s.pressure),
             "evicted": list(s.evicted),
             "cache": [r.key for r in s.snapshot] if s.snapshot is not None else None}
            for s in full.steps
        ],
        "final_cache": _cache(full.final_state),
        "suffixes": [],
    }

    table = suffix_frame(full, suffixes)
    for suf, row in zip(suffixes, table.itertuples(index=False)):
        report["suffixes"].append({
            "start": suf.start,
            "outcomes": [o.value for o in suf.outcomes],
            "hits": row.hits,
            "misses": row.misses,
            "cost": row.cost,
            "full_cost": row.full_cost,
            "competitive_ratio": row.competitive_ratio,
            "final_cache": _cache(suf.final_state),
        })

    if division is not None:
        by_start = {s.start: s for s in suffixes}
        if division not in by_start:
            raise ConfigurationError(
                f"Division {division} is outside the trace of length {len(full.steps)}")
        suf = by_start[division]
        report["division"] = {
            "start": division,
            "competitive_ratio": suffix_competitive_ratio(full, suf),
            "items": item_competitive_ratios(full, suf),
        }
    return report


def _plain(obj):
    # numpy scalars from the pandas table do not round-trip through safe_dump
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_plain(v) for v in obj]
    if hasattr(obj, "item") and not isinstance(obj, (str, bytes)):
        return obj.item()
    return obj


def write_report(report: Dict[str, Any], out_path) -> None:
    """Create `out_path`; an existing file is never overwritten."""
    with open(out_path, "x") as f:
        yaml.safe_dump(_plain(report), f, sort_keys=False)
    logger.info("Wrote report to %s", out_path)
