"""Drift calculation with round-half-away-from-zero trade amounts"""

from typing import List, Mapping, Optional
import logging

from .exceptions import ZeroTotalError
from .models import AllocationEntry, DriftEntry, RebalanceReport
from .money import Money, ZERO
from .policy import AllocationPolicy


class RebalanceEngine:
    """Calculate how far each holding is from target and what it takes to fix it"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def rebalance(self, policy: AllocationPolicy, holdings: Mapping[str, Money],
                  pending_deposit: Money = ZERO) -> RebalanceReport:
        """
        Build a drift report for every policy entry, in policy order.

        The pending deposit counts toward the portfolio total before any
        percentage is computed. Holdings are expected to be keyed by
        canonical symbol, as produced by HoldingsAggregator.

        Raises ZeroTotalError when the total is not positive.
        """
        total = pending_deposit + sum(holdings.values(), ZERO)

        if total.cents <= 0:
            self.logger.error(f"Cannot rebalance: portfolio total is {total}")
            raise ZeroTotalError(total)

        if pending_deposit:
            self.logger.debug(f"Portfolio total {total} includes pending deposit {pending_deposit}")

        entries: List[DriftEntry] = [
            self._calculate_drift(entry, holdings.get(entry.symbol, ZERO), total)
            for entry in policy
        ]
        return RebalanceReport(total=total, deposit=pending_deposit, entries=tuple(entries))

    def _calculate_drift(self, entry: AllocationEntry, current: Money, total: Money) -> DriftEntry:
        """Current percentage, drift and signed amount needed for one entry"""
        current_percentage = current.cents / total.cents * 100
        target_percentage = entry.target_percentage
        drift = current_percentage - target_percentage

        # Positive needed amount is a buy, negative a sell
        amount_needed = Money.from_float_rounded(total.cents * (-drift / 100))

        self.logger.debug(
            f"{entry.symbol}: current={current_percentage:.2f}% target={target_percentage:.2f}% "
            f"drift={drift:+.2f}% needed={amount_needed}"
        )

        return DriftEntry(
            symbol=entry.symbol,
            description=entry.description,
            current_amount=current,
            current_percentage=current_percentage,
            target_percentage=target_percentage,
            drift=drift,
            amount_needed=amount_needed,
        )


def rebalance(policy: AllocationPolicy, holdings: Mapping[str, Money],
              pending_deposit: Money = ZERO) -> RebalanceReport:
    return RebalanceEngine().rebalance(policy, holdings, pending_deposit)
