from enum import Enum
from typing import Callable, Dict, Iterable, List

from ..errors import ConfigurationError


class TieBreak(Enum):
    """
    Order in which zero-credit residents are evicted.
    Every ranking ends with the item key, so the order is strict even when
    two residents share a sequence number.
    """
    LRU = "lru"     # least recently requested first
    FIFO = "fifo"   # earliest admitted first

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            for member in cls:
                if member.value == value:
                    return member
        return None

    @classmethod
    def parse(cls, name) -> "TieBreak":
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(m.name for m in cls)
            raise ConfigurationError(
                f"Invalid tiebreaking policy {name!r}; select one of: {{{choices}}}"
            ) from None

    def rank(self, entry):
        return _RANKS[self](entry)

    def order(self, entries: Iterable) -> List:
        return sorted(entries, key=self.rank)

    def __repr__(self):
        return self.name


_RANKS: Dict[TieBreak, Callable] = {
    TieBreak.LRU: lambda e: (e.last_access, e.key),
    TieBreak.FIFO: lambda e: (e.inserted, e.key),
}
