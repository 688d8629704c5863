"""
Command context management using ContextVar so log records carry the running command.
"""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommandContext:
    """What is being executed, for log enrichment"""
    command: str
    source: Optional[str] = None


# Context variable to store the command being executed
current_command: ContextVar[Optional[CommandContext]] = ContextVar('current_command', default=None)


def set_current_command(context: CommandContext) -> None:
    """Set the current command in the context."""
    current_command.set(context)


def get_current_command() -> Optional[CommandContext]:
    """Get the current command from the context."""
    return current_command.get()


def clear_current_command() -> None:
    """Clear the current command from the context."""
    current_command.set(None)
