from typing import Dict, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .money import Money, ZERO


# Allocation policy models
class AllocationEntry(BaseModel):
    """One target in an allocation policy, with optional alias symbols"""
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    target_fraction: float = Field(ge=0.0, le=1.0)
    description: str = ""
    aliases: Tuple[str, ...] = ()

    @field_validator("symbol")
    @classmethod
    def strip_symbol(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must not be blank")
        return v

    @field_validator("aliases")
    @classmethod
    def strip_aliases(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        aliases = tuple(alias.strip() for alias in v)
        if any(not alias for alias in aliases):
            raise ValueError("aliases must not be blank")
        return aliases

    @property
    def target_percentage(self) -> float:
        return self.target_fraction * 100

    @property
    def symbols(self) -> Tuple[str, ...]:
        """Canonical symbol followed by its aliases"""
        return (self.symbol,) + self.aliases


# Holdings input
class HoldingRecord(BaseModel):
    """A single holdings row: symbol and current value"""
    model_config = ConfigDict(frozen=True)

    symbol: str
    amount: Money


# Rebalance output
class DriftEntry(BaseModel):
    """Current versus target allocation for one policy symbol"""
    model_config = ConfigDict(frozen=True)

    symbol: str
    description: str = ""
    current_amount: Money
    current_percentage: float
    target_percentage: float
    drift: float
    amount_needed: Money

    @property
    def action(self) -> Literal['buy', 'sell', 'hold']:
        if self.amount_needed.cents > 0:
            return 'buy'
        if self.amount_needed.cents < 0:
            return 'sell'
        return 'hold'


class RebalanceReport(BaseModel):
    """Drift for every policy symbol, in policy order"""
    model_config = ConfigDict(frozen=True)

    total: Money
    deposit: Money = ZERO
    entries: Tuple[DriftEntry, ...]

    @property
    def holdings_total(self) -> Money:
        """Portfolio value excluding the pending deposit"""
        return self.total - self.deposit

    def entry(self, symbol: str) -> Optional[DriftEntry]:
        for entry in self.entries:
            if entry.symbol == symbol:
                return entry
        return None


# Deposit output
class SymbolAllocation(BaseModel):
    """Share of a deposit assigned to one symbol"""
    model_config = ConfigDict(frozen=True)

    symbol: str
    target_percentage: float
    amount: Money


class DepositAllocation(BaseModel):
    """Deposit split by target fractions plus the unassigned remainder"""
    model_config = ConfigDict(frozen=True)

    deposit: Money
    allocations: Tuple[SymbolAllocation, ...]
    remainder: Money

    @property
    def allocated(self) -> Money:
        return sum((a.amount for a in self.allocations), ZERO)

    def as_dict(self) -> Dict[str, Money]:
        return {a.symbol: a.amount for a in self.allocations}
