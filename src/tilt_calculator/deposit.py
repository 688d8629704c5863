"""Deposit splitting by target fraction"""

from typing import Optional
import logging

from .exceptions import InvalidDepositError
from .models import DepositAllocation, SymbolAllocation
from .money import Money, ZERO
from .policy import AllocationPolicy


class DepositAllocator:
    """Split a deposit across policy symbols, flooring each share to whole cents"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def allocate(self, policy: AllocationPolicy, deposit: Money) -> DepositAllocation:
        """
        Allocate a deposit by target fraction.

        Flooring guarantees the shares never exceed the deposit; whatever is
        left over is returned as the remainder for the caller to place.
        """
        if deposit.cents < 0:
            raise InvalidDepositError(deposit)

        allocations = tuple(
            SymbolAllocation(
                symbol=entry.symbol,
                target_percentage=entry.target_percentage,
                amount=deposit.scale_floor(entry.target_fraction),
            )
            for entry in policy
        )
        remainder = deposit - sum((a.amount for a in allocations), ZERO)

        if remainder:
            self.logger.debug(f"Deposit {deposit} leaves {remainder} unallocated after rounding down")

        return DepositAllocation(deposit=deposit, allocations=allocations, remainder=remainder)


def allocate(policy: AllocationPolicy, deposit: Money) -> DepositAllocation:
    return DepositAllocator().allocate(policy, deposit)
