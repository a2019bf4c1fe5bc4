"""Load an item catalog and request trace from a TOML or YAML file."""

import logging
import pathlib
import tomllib
from typing import List, Tuple

import yaml

from .catalog import Catalog
from .errors import CatalogValidationError, TraceValidationError

logger = logging.getLogger(__name__)


def load_trace_info(path) -> Tuple[Catalog, List[str]]:
    """
    The file holds an exhaustive `items` list (label, cost, size) and a
    `trace` list of labels. Every label in the trace must be defined.
    """
    path = pathlib.Path(path)
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            with path.open() as f:
                data = yaml.safe_load(f) or {}
        else:
            with path.open("rb") as f:
                data = tomllib.load(f)
    except OSError as e:
        raise CatalogValidationError(f"Could not read {path}: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise CatalogValidationError(f"Could not convert {path}: {e}") from e
    if not isinstance(data, dict):
        raise CatalogValidationError(f"{path} does not hold a table")

    items = data.get("items")
    if not isinstance(items, list) or not all(isinstance(r, dict) for r in items):
        raise CatalogValidationError(f"{path} needs an `items` list of tables")
    trace = data.get("trace", [])
    if not isinstance(trace, list):
        raise TraceValidationError(f"{path}: `trace` must be a list of labels")

    catalog = Catalog.from_records(items)
    trace = [str(k) for k in trace]
    catalog.resolve(trace)
    logger.info("Loaded %s: %d items, %d requests", path, len(catalog), len(trace))
    return catalog, trace
