from .money import Money, ZERO, format_money
from .models import (
    AllocationEntry,
    HoldingRecord,
    DriftEntry,
    RebalanceReport,
    SymbolAllocation,
    DepositAllocation,
)
from .policy import AllocationPolicy, validate_policy
from .aggregator import AggregatedHoldings, HoldingsAggregator, aggregate
from .calculator import RebalanceEngine, rebalance
from .deposit import DepositAllocator, allocate
from .exceptions import (
    TiltError,
    ParseError,
    ConfigError,
    AllocationSumError,
    DuplicateSymbolError,
    ZeroTotalError,
    InvalidDepositError,
    HoldingsFormatError,
)

__version__ = "1.0.0"

__all__ = [
    "Money",
    "ZERO",
    "format_money",
    "AllocationEntry",
    "HoldingRecord",
    "DriftEntry",
    "RebalanceReport",
    "SymbolAllocation",
    "DepositAllocation",
    "AllocationPolicy",
    "validate_policy",
    "AggregatedHoldings",
    "HoldingsAggregator",
    "aggregate",
    "RebalanceEngine",
    "rebalance",
    "DepositAllocator",
    "allocate",
    "TiltError",
    "ParseError",
    "ConfigError",
    "AllocationSumError",
    "DuplicateSymbolError",
    "ZeroTotalError",
    "InvalidDepositError",
    "HoldingsFormatError",
    "__version__",
]
