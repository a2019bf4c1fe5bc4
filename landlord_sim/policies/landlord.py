# landlord_sim/policies/landlord.py
import logging
from enum import IntEnum
from fractions import Fraction

from ..catalog import Item, validate_item
from ..errors import ConfigurationError, InternalInvariantError
from .base import BasePolicy
from .ledger import CreditLedger
from .tiebreak import TieBreak

logger = logging.getLogger(__name__)


class Refresh(IntEnum):
    """What a hit does to the credit of the requested item."""
    FIFO = 0    # leave credit alone
    LRU = 1     # restore credit to full cost

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
            if value.isdigit():
                return cls._value2member_map_.get(int(value))
            return cls.__members__.get(value)
        return None

    @classmethod
    def parse(cls, value) -> "Refresh":
        if isinstance(value, cls):
            return value
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ConfigurationError(
            f"Invalid hit policy {value!r}; select one of: {{0, 1, FIFO, LRU}}")

    def __repr__(self):
        return self.name


class Landlord(BasePolicy):
    """
    Credit-based cache replacement (Young's Landlord).
    A resident holds credit in [0, cost]. To make room every resident pays
    rent at the lowest credit-per-size rate; zero-credit residents become
    evictable and the tie-break decides which ones actually go.
    """
    def __init__(self, capacity, refresh=Refresh.LRU, tiebreak=TieBreak.LRU):
        super().__init__(capacity)
        self.ledger   = CreditLedger(self.cap)
        self.refresh  = Refresh.parse(refresh)
        self.tiebreak = TieBreak.parse(tiebreak)
        self.clock    = 0               # request sequence number
        self.last_evicted = ()
        self.last_pressure = Fraction(0)

    # ----------------------------------------------------------
    def request(self, key: str, obj_size, cost) -> bool:
        """
        Process one request.
        Return True on hit, False on miss (after inserting).
        An unusable miss raises CatalogValidationError and changes nothing.
        """
        entry = self.ledger.get(key)
        if entry is None:
            # rejected before the clock or any resident changes
            item = validate_item(Item(key, cost, obj_size), self.cap)

        self.clock += 1
        self.last_evicted = ()
        self.last_pressure = Fraction(0)

        if entry is not None:
            self.ledger.touch(key, self.clock)
            if self.refresh is Refresh.LRU:
                self.ledger.set_credit(key, entry.cost)
            return True

        need = Fraction(obj_size)
        evicted = []
        while self.ledger.free < need:
            evicted.extend(self._evict_round(need))
        self.ledger.insert(item, Fraction(cost), self.clock)
        self.last_evicted = tuple(evicted)
        return False

    def snapshot(self):
        return self.ledger.snapshot()

    # ----------------------------------------------------------
    def _evict_round(self, need):
        residents = list(self.ledger)
        if not residents:
            raise InternalInvariantError(
                f"cannot free {need} units from an empty cache")

        delta = min(e.credit / e.size for e in residents)
        self.last_pressure += delta
        for e in residents:
            self.ledger.set_credit(e.key, max(Fraction(0), e.credit - delta * e.size))

        zero = [e for e in residents if e.credit == 0]
        gone = []
        for e in self.tiebreak.order(zero):
            if self.ledger.free >= need:
                break
            self.ledger.remove(e.key)
            gone.append(e.key)
        logger.debug("t=%d rent %s, %d at zero credit, evicted %s",
                     self.clock, delta, len(zero), gone)
        return gone
