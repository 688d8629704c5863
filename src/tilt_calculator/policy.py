"""Allocation policy construction and validation"""

import logging
import math
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .exceptions import AllocationSumError, ConfigError, DuplicateSymbolError
from .models import AllocationEntry

logger = logging.getLogger(__name__)

SUM_TOLERANCE = 1e-9

RawEntry = Union[AllocationEntry, Mapping[str, Any]]


class AllocationPolicy:
    """
    Ordered, validated set of allocation entries.

    Target fractions sum to 1.0 and every canonical or alias symbol belongs
    to exactly one entry. Instances are immutable.
    """

    __slots__ = ("_entries", "_owners")

    def __init__(self, entries: Iterable[AllocationEntry]):
        entries = tuple(entries)
        _check_sum(entries)
        object.__setattr__(self, "_entries", entries)
        object.__setattr__(self, "_owners", _build_owner_map(entries))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def entries(self) -> Tuple[AllocationEntry, ...]:
        return self._entries

    @property
    def symbols(self) -> Tuple[str, ...]:
        """Canonical symbols in policy order"""
        return tuple(entry.symbol for entry in self._entries)

    def resolve(self, symbol: str) -> Optional[str]:
        """Map a canonical or alias symbol to its canonical symbol"""
        return self._owners.get(symbol)

    def entry(self, symbol: str) -> Optional[AllocationEntry]:
        canonical = self.resolve(symbol)
        for entry in self._entries:
            if entry.symbol == canonical:
                return entry
        return None

    def __iter__(self) -> Iterator[AllocationEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AllocationPolicy):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        targets = ", ".join(f"{e.symbol}={e.target_percentage:g}%" for e in self._entries)
        return f"AllocationPolicy({targets})"


def _check_sum(entries: Tuple[AllocationEntry, ...]) -> None:
    total = math.fsum(entry.target_fraction for entry in entries)
    if abs(total - 1.0) > SUM_TOLERANCE:
        raise AllocationSumError(total)


def _build_owner_map(entries: Tuple[AllocationEntry, ...]) -> Dict[str, str]:
    owners: Dict[str, str] = {}
    for entry in entries:
        for symbol in entry.symbols:
            if symbol in owners:
                raise DuplicateSymbolError(symbol, owner=owners[symbol], claimant=entry.symbol)
            owners[symbol] = entry.symbol
    return owners


def validate_policy(raw_entries: Iterable[RawEntry]) -> AllocationPolicy:
    """
    Build an AllocationPolicy from entries or plain mappings.

    Raises:
        AllocationSumError: target fractions do not sum to 1.0
        DuplicateSymbolError: a symbol is claimed by two entries
        ConfigError: an entry is malformed
    """
    entries = []
    for index, raw in enumerate(raw_entries):
        if isinstance(raw, AllocationEntry):
            entries.append(raw)
            continue
        try:
            entries.append(AllocationEntry.model_validate(raw))
        except ValidationError as e:
            raise ConfigError(f"Invalid allocation entry #{index + 1}: {e}") from e

    policy = AllocationPolicy(entries)
    logger.debug(f"Validated allocation policy with {len(policy)} entries")
    return policy
