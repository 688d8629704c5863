from fin_tilt.commands.base import Command, CommandResult, CommandStatus
from fin_tilt.commands.rebalance import RebalanceCommand
from fin_tilt.commands.deposit import DepositCommand

__all__ = [
    "Command",
    "CommandResult",
    "CommandStatus",
    "RebalanceCommand",
    "DepositCommand",
]
