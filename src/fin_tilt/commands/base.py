"""
Base classes for fin-tilt commands.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum

from tilt_calculator import AllocationPolicy


class CommandStatus(Enum):
    """Status of command execution"""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class CommandResult:
    """Result of command execution"""
    status: CommandStatus
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.SUCCESS


class Command(ABC):
    """Abstract base class for all commands run against an allocation policy"""

    def __init__(self, policy: AllocationPolicy):
        self.policy = policy
        self.command_type = self._get_command_type()

    @abstractmethod
    def _get_command_type(self) -> str:
        """Return the command type identifier"""
        pass

    @abstractmethod
    def execute(self) -> CommandResult:
        """
        Execute the command

        Returns:
            CommandResult: The result of command execution. Failures caused
            by bad input are reported here rather than raised.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(command_type={self.command_type}, symbols={len(self.policy)})"
