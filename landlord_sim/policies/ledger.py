from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Iterator, NamedTuple, Optional, Tuple

from ..catalog import Item
from ..errors import InternalInvariantError


class ResidentSnapshot(NamedTuple):
    key: str
    credit: Fraction
    inserted: int
    last_access: int


@dataclass
class ResidentEntry:
    item: Item
    cost: Fraction
    size: Fraction
    credit: Fraction
    inserted: int
    last_access: int

    @property
    def key(self) -> str:
        return self.item.key

    def freeze(self) -> ResidentSnapshot:
        return ResidentSnapshot(self.key, self.credit, self.inserted, self.last_access)


class CreditLedger:
    """
    Resident set of a Landlord cache with exact (Fraction) accounting.
    Stores {key: ResidentEntry}; every mutation re-checks the capacity bound.
    """
    def __init__(self, capacity):
        self.capacity = Fraction(capacity)
        self.entries: Dict[str, ResidentEntry] = {}
        self.used = Fraction(0)    # summed size of residents

    @property
    def free(self) -> Fraction:
        return self.capacity - self.used

    def __contains__(self, key) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[ResidentEntry]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key) -> Optional[ResidentEntry]:
        return self.entries.get(key)

    # ----------------------------------------------------------
    def insert(self, item: Item, credit, seq: int) -> ResidentEntry:
        if item.key in self.entries:
            raise InternalInvariantError(f"{item.key} is already resident")
        size = Fraction(item.size)
        if size > self.free:
            raise InternalInvariantError(
                f"admitting {item.key} (size {size}) with only {self.free} free")
        entry = ResidentEntry(item, Fraction(item.cost), size,
                              Fraction(0), seq, seq)
        self.entries[item.key] = entry
        self.used += size
        self.set_credit(item.key, credit)
        self._check_capacity()
        return entry

    def remove(self, key) -> ResidentEntry:
        try:
            entry = self.entries.pop(key)
        except KeyError:
            raise InternalInvariantError(f"{key} is not resident") from None
        self.used -= entry.size
        self._check_capacity()
        return entry

    def set_credit(self, key, value) -> None:
        entry = self._resident(key)
        value = Fraction(value)
        if not 0 <= value <= entry.cost:
            raise InternalInvariantError(
                f"credit {value} for {key} outside [0, {entry.cost}]")
        entry.credit = value

    def touch(self, key, seq: int) -> None:
        self._resident(key).last_access = seq

    def snapshot(self) -> Tuple[ResidentSnapshot, ...]:
        return tuple(e.freeze() for _, e in sorted(self.entries.items()))

    # ----------------------------------------------------------
    def _resident(self, key) -> ResidentEntry:
        entry = self.entries.get(key)
        if entry is None:
            raise InternalInvariantError(f"{key} is not resident")
        return entry

    def _check_capacity(self):
        if self.used > self.capacity or self.used < 0:
            raise InternalInvariantError(
                f"resident size {self.used} outside [0, {self.capacity}]")
