"""Landlord (weighted LRU/FIFO) cache replacement simulator."""

from .catalog import Catalog, Item
from .config import AnalysisOptions, SimConfig, load_config
from .errors import (CatalogValidationError, ConfigurationError,
                     InternalInvariantError, LandlordError, TraceValidationError)
from .policies.landlord import Landlord, Refresh
from .policies.tiebreak import TieBreak
from .simulator import CacheSim, Outcome, ReplayResult, StepOutcome, replay
from .suffix import SuffixResult, analyze_suffixes, suffix_frame

__all__ = [
    "AnalysisOptions", "CacheSim", "Catalog", "CatalogValidationError",
    "ConfigurationError", "InternalInvariantError", "Item", "Landlord",
    "LandlordError", "Outcome", "Refresh", "ReplayResult", "SimConfig",
    "StepOutcome", "SuffixResult", "TieBreak", "TraceValidationError",
    "analyze_suffixes", "load_config", "replay", "suffix_frame",
]
