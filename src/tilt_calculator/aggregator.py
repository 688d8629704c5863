"""Holdings aggregation by canonical symbol"""

from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional
import logging

from .models import HoldingRecord
from .money import Money, ZERO
from .policy import AllocationPolicy

Canonicalizer = Callable[[str], str]


def _identity(symbol: str) -> str:
    return symbol


class AggregatedHoldings(Mapping[str, Money]):
    """Read-only mapping of canonical symbol to summed holdings"""

    __slots__ = ("_totals",)

    def __init__(self, totals: Optional[Mapping[str, Money]] = None):
        self._totals: Dict[str, Money] = dict(totals or {})

    def __getitem__(self, symbol: str) -> Money:
        return self._totals[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    @property
    def total(self) -> Money:
        return sum(self._totals.values(), ZERO)

    def __repr__(self) -> str:
        return f"AggregatedHoldings({self._totals!r})"


class HoldingsAggregator:
    """
    Sum holding records per canonical policy symbol.

    Records are resolved through the policy's alias map after passing the
    symbol through the canonicalizer. Symbols the policy does not track are
    dropped and counted nowhere.
    """

    def __init__(self, policy: AllocationPolicy, canonicalize: Optional[Canonicalizer] = None,
                 logger: Optional[logging.Logger] = None):
        self.policy = policy
        self.canonicalize = canonicalize or _identity
        self.logger = logger or logging.getLogger(__name__)
        self._totals: Dict[str, Money] = {}
        self._skipped: List[str] = []

    def add(self, record: HoldingRecord) -> bool:
        """Count one record. Returns False when its symbol is not tracked."""
        canonical = self.policy.resolve(self.canonicalize(record.symbol))
        if canonical is None:
            self.logger.debug(f"Ignoring untracked symbol {record.symbol!r} ({record.amount})")
            self._skipped.append(record.symbol)
            return False

        self._totals[canonical] = self._totals.get(canonical, ZERO) + record.amount
        if canonical != record.symbol:
            self.logger.debug(f"Counting {record.symbol} toward {canonical}")
        return True

    def add_all(self, records: Iterable[HoldingRecord]) -> "HoldingsAggregator":
        for record in records:
            self.add(record)
        return self

    @property
    def skipped_symbols(self) -> List[str]:
        return list(self._skipped)

    def totals(self) -> AggregatedHoldings:
        return AggregatedHoldings(self._totals)


def aggregate(policy: AllocationPolicy, records: Iterable[HoldingRecord],
              canonicalize: Optional[Canonicalizer] = None) -> AggregatedHoldings:
    """Aggregate holding records into per-symbol totals"""
    return HoldingsAggregator(policy, canonicalize=canonicalize).add_all(records).totals()
