import math
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Iterator, List

from .errors import CatalogValidationError, TraceValidationError


@dataclass(frozen=True)
class Item:
    """
    One cacheable object.
    cost = penalty paid on a miss, size = capacity units it occupies.
    """
    key: str
    cost: Real
    size: Real


def _positive(label, field, value):
    if value is None:
        raise CatalogValidationError(f"Item {label} is missing {field}")
    # bool is an int subclass; `cost = true` is a typo, not a number
    if isinstance(value, bool) or not isinstance(value, Real):
        raise CatalogValidationError(
            f"Item {label} has non-numeric {field} {value!r}")
    if not value > 0:
        raise CatalogValidationError(
            f"Item {label} has non-positive {field} {value!r}")
    if not math.isfinite(value):
        raise CatalogValidationError(
            f"Item {label} has infinite {field} {value!r}")
    return value


def validate_item(item: Item, capacity=None) -> Item:
    """Positive finite cost and size; optionally no larger than `capacity`."""
    _positive(item.key, "cost", item.cost)
    _positive(item.key, "size", item.size)
    if capacity is not None and item.size > capacity:
        raise CatalogValidationError(
            f"Item {item.key} has size {item.size} exceeding "
            f"cache size of {capacity}")
    return item


class Catalog(Mapping):
    """
    Read-only label -> Item mapping.
    Preserves definition order, which is also the order used in reports.
    """
    def __init__(self, items: Iterable[Item] = ()):
        self._items = {}
        for item in items:
            if item.key in self._items:
                raise CatalogValidationError(f"Duplicate item label {item.key}")
            validate_item(item)
            self._items[item.key] = item

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "Catalog":
        """Build from dicts shaped like `{label, cost, size}`."""
        items = []
        for i, rec in enumerate(records):
            label = rec.get("label")
            if label is None:
                raise CatalogValidationError(f"Item #{i} has no label")
            items.append(Item(str(label),
                              _positive(label, "cost", rec.get("cost")),
                              _positive(label, "size", rec.get("size"))))
        return cls(items)

    def __getitem__(self, key: str) -> Item:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        return f"Catalog({list(self._items.values())!r})"

    # ----------------------------------------------------------
    def check_fits(self, capacity) -> None:
        """Every item must be admissible into an empty cache."""
        for item in self._items.values():
            validate_item(item, capacity)

    def resolve(self, trace: Iterable[str]) -> List[Item]:
        """Map labels to items; the first unknown label aborts."""
        resolved = []
        for pos, key in enumerate(trace):
            try:
                resolved.append(self._items[key])
            except KeyError:
                raise TraceValidationError(
                    f"Request #{pos} refers to unknown item {key!r}") from None
        return resolved
