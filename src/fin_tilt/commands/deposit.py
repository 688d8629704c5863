"""
Deposit command implementation.
"""

from tilt_calculator import AllocationPolicy, DepositAllocator, Money, TiltError
from fin_tilt.commands.base import Command, CommandResult, CommandStatus
from fin_tilt.context import CommandContext, set_current_command, clear_current_command
from fin_tilt.logger import AppLogger

app_logger = AppLogger(__name__)


class DepositCommand(Command):
    """Command to split a new deposit across the target allocation"""

    def __init__(self, policy: AllocationPolicy, amount: Money):
        super().__init__(policy)
        self.amount = amount

    def _get_command_type(self) -> str:
        return "deposit"

    def execute(self) -> CommandResult:
        set_current_command(CommandContext(self.command_type))

        try:
            allocation = DepositAllocator().allocate(self.policy, self.amount)
            app_logger.log_info(
                f"Allocated {allocation.allocated} of {allocation.deposit}, remainder {allocation.remainder}"
            )
            return CommandResult(
                status=CommandStatus.SUCCESS,
                data={"allocation": allocation}
            )
        except TiltError as e:
            app_logger.log_error(f"Deposit failed: {e}")
            return CommandResult(status=CommandStatus.FAILED, error=str(e))
        finally:
            clear_current_command()
