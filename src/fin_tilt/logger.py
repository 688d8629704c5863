import logging
import sys
import json
from datetime import datetime
from typing import Optional, TextIO
from fin_tilt.context import get_current_command

# Attributes every LogRecord has; anything else came in through `extra`
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'message', 'taskName', 'command', 'source',
])


class StructuredFormatter(logging.Formatter):
    """Formatter for text or JSON log lines with command context support"""

    def __init__(self, fmt: str = 'text'):
        super().__init__()
        self.output_format = fmt

    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if hasattr(record, 'command'):
            log_data['command'] = record.command

        if getattr(record, 'source', None):
            log_data['source'] = record.source

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                if isinstance(value, datetime):
                    log_data[key] = value.strftime('%Y-%m-%d %H:%M:%S')
                else:
                    log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.output_format == 'json':
            return json.dumps(log_data, default=str)

        base_msg = f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"
        if 'command' in log_data:
            base_msg += f" [command={log_data['command']}]"
        if 'source' in log_data:
            base_msg += f" [source={log_data['source']}]"
        if 'exception' in log_data:
            base_msg += "\n" + log_data['exception']
        return base_msg


def configure_root_logger(level: str = 'WARNING', fmt: str = 'text',
                          stream: Optional[TextIO] = None) -> None:
    """Configure the root logger to use structured formatting on stderr"""
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(StructuredFormatter(fmt))
    root_logger.addHandler(console_handler)


def _extract_command_properties() -> dict:
    """Extract the running command from the context for logging"""
    context = get_current_command()
    if context is None:
        return {}
    return {'command': context.command, 'source': context.source}


class AppLogger:
    """Logger wrapper that attaches the current command context to every record"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_debug(self, message: str):
        self.logger.debug(message, extra=_extract_command_properties())

    def log_info(self, message: str):
        self.logger.info(message, extra=_extract_command_properties())

    def log_warning(self, message: str):
        self.logger.warning(message, extra=_extract_command_properties())

    def log_error(self, message: str):
        self.logger.error(message, extra=_extract_command_properties())
