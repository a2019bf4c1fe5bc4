"""Run configuration: cache parameters and suffix-analysis options."""

import logging
import math
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigurationError
from .policies.landlord import Refresh
from .policies.tiebreak import TieBreak

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimConfig:
    """Immutable engine parameters, built once before a replay."""
    capacity: Real
    refresh: Refresh = Refresh.LRU
    tiebreak: TieBreak = TieBreak.LRU

    def __post_init__(self):
        cap = self.capacity
        if (isinstance(cap, bool) or not isinstance(cap, Real)
                or not cap > 0 or not math.isfinite(cap)):
            raise ConfigurationError(f"Cache size must be a positive finite number, got {cap!r}")
        object.__setattr__(self, "refresh", Refresh.parse(self.refresh))
        object.__setattr__(self, "tiebreak", TieBreak.parse(self.tiebreak))

    @classmethod
    def build(cls, capacity, refresh=Refresh.LRU, tiebreak=TieBreak.LRU) -> "SimConfig":
        return cls(_number("capacity", capacity), refresh, tiebreak)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "refresh": self.refresh.name,
            "tiebreak": self.tiebreak.name,
        }


@dataclass(frozen=True)
class AnalysisOptions:
    # prefix/suffix split reported in detail; None = no division section
    division: Optional[int] = None
    workers: int = 1
    progress: bool = False

    def __post_init__(self):
        if self.division is not None and (isinstance(self.division, bool)
                                          or not isinstance(self.division, int)
                                          or self.division < 0):
            raise ConfigurationError(f"Division must be a non-negative integer, got {self.division!r}")
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigurationError(f"Workers must be a positive integer, got {self.workers!r}")


def _number(name, value):
    if isinstance(value, str):
        try:
            value = int(value) if value.strip().lstrip("+-").isdigit() else float(value)
        except ValueError:
            raise ConfigurationError(f"{name} must be numeric, got {value!r}") from None
    return value


def dict_to_config(d: Dict[str, Any]) -> Tuple[SimConfig, AnalysisOptions]:
    """Split a flat mapping into engine config and analysis options."""
    known = {"capacity", "refresh", "tiebreak"} | {f.name for f in fields(AnalysisOptions)}
    unknown = set(d) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
    if d.get("capacity") is None:
        raise ConfigurationError("required capacity is not provided")
    sim = SimConfig.build(d["capacity"],
                          d.get("refresh", Refresh.LRU),
                          d.get("tiebreak", TieBreak.LRU))
    opts = AnalysisOptions(**{f.name: d[f.name] for f in fields(AnalysisOptions) if f.name in d})
    return sim, opts


def load_config(config_path: str, overrides: Optional[Dict[str, Any]] = None
                ) -> Tuple[SimConfig, AnalysisOptions]:
    """Read a YAML config file; non-None `overrides` win over file values."""
    data: Dict[str, Any] = {}
    if config_path:
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(f"Could not read {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} does not hold a mapping")
        logger.debug("loaded config %s: %s", config_path, data)
    for k, v in (overrides or {}).items():
        if v is not None:
            data[k] = v
    return dict_to_config(data)
