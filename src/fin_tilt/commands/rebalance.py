"""
Rebalance command implementation.
"""

from pathlib import Path
from typing import List, Optional

from tilt_calculator import (
    AllocationPolicy,
    HoldingsAggregator,
    Money,
    RebalanceEngine,
    TiltError,
    ZERO,
)
from tilt_config import HoldingsCsvConfig
from fin_tilt.commands.base import Command, CommandResult, CommandStatus
from fin_tilt.context import CommandContext, set_current_command, clear_current_command
from fin_tilt.holdings_csv import read_holdings
from fin_tilt.logger import AppLogger

app_logger = AppLogger(__name__)


class RebalanceCommand(Command):
    """Command to report drift and trades needed for a holdings export"""

    def __init__(self, policy: AllocationPolicy, holdings_path: str | Path,
                 deposit: Money = ZERO, csv_config: Optional[HoldingsCsvConfig] = None):
        super().__init__(policy)
        self.holdings_path = Path(holdings_path)
        self.deposit = deposit
        self.csv_config = csv_config or HoldingsCsvConfig()

    def _get_command_type(self) -> str:
        return "rebalance"

    def execute(self) -> CommandResult:
        """Aggregate the holdings file and compute the drift report"""

        set_current_command(CommandContext(self.command_type, source=str(self.holdings_path)))

        try:
            untracked: List[str] = []
            aggregator = HoldingsAggregator(self.policy)
            aggregator.add_all(read_holdings(
                self.holdings_path,
                symbol_column=self.csv_config.symbol_column,
                amount_column=self.csv_config.amount_column,
                policy=self.policy,
                on_untracked=untracked.append,
            ))

            skipped = untracked + aggregator.skipped_symbols
            if skipped:
                app_logger.log_info(f"Ignored {len(skipped)} rows for untracked symbols: {', '.join(sorted(set(skipped)))}")

            report = RebalanceEngine().rebalance(self.policy, aggregator.totals(), self.deposit)

            app_logger.log_info(f"Rebalance calculated - total: {report.total}, symbols: {len(report.entries)}")

            return CommandResult(
                status=CommandStatus.SUCCESS,
                data={"report": report, "skipped_symbols": skipped}
            )

        except FileNotFoundError as e:
            app_logger.log_error(str(e))
            return CommandResult(status=CommandStatus.FAILED, error=str(e))
        except TiltError as e:
            app_logger.log_error(f"Rebalance failed: {e}")
            return CommandResult(status=CommandStatus.FAILED, error=str(e))
        finally:
            clear_current_command()
