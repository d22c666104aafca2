"""
Centralized Logging Configuration

Library modules only ask for loggers and attach a ``context`` dict to their
records; the CLI is the one place that calls setup_logging().
"""

import copy
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

DEBUG_ENV_VAR = 'CACHEMATRIX_DEBUG'


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    context = getattr(record, 'context', None)
    return context if isinstance(context, dict) else {}


class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno,
        }

        context = _record_context(record)
        if context:
            log_data['context'] = context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter that prefixes the message with ``[key: value]`` context."""

    def __init__(self, include_location: bool = False):
        """
        Args:
            include_location: Include module/function/line information
        """
        location = ' - %(module)s.%(funcName)s:%(lineno)d' if include_location else ''
        super().__init__(
            fmt='%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s' + location + ' - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        if not context:
            return super().format(record)

        # Records are shared between handlers, so prefix a copy
        prefixed = copy.copy(record)
        prefix = ' '.join(f"[{key}: {value}]" for key, value in context.items())
        prefixed.msg = f"{prefix} {record.getMessage()}"
        prefixed.args = None
        return super().format(prefixed)


def setup_logging(
    level: Optional[int] = None,
    format_type: str = 'readable',
    include_location: bool = False,
    log_file: Optional[str] = None
) -> None:
    """
    Configure the root logger with a stderr handler and an optional file handler.

    Args:
        level: Log level (defaults to INFO, or DEBUG if CACHEMATRIX_DEBUG is set)
        format_type: 'readable' for human-readable, 'json' for structured JSON
        include_location: Include module/function/line in readable format
        log_file: Optional file path that receives the same records
    """
    if level is None:
        debug = os.environ.get(DEBUG_ENV_VAR, '').lower() == 'true'
        level = logging.DEBUG if debug else logging.INFO

    if format_type == 'json':
        formatter = StructuredFormatter()
    else:
        formatter = ContextualFormatter(include_location=include_location)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            sys.stderr.write(f"Warning: Could not set up file logging to {log_file}: {e}\n")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Log message with an optional context dict attached to the record."""
    extra = {'context': context} if context else {}
    logger.log(level, message, extra=extra)


def log_info(logger: logging.Logger, message: str, **kwargs) -> None:
    log_with_context(logger, logging.INFO, message, **kwargs)


def log_warning(logger: logging.Logger, message: str, **kwargs) -> None:
    log_with_context(logger, logging.WARNING, message, **kwargs)


def log_debug(logger: logging.Logger, message: str, **kwargs) -> None:
    log_with_context(logger, logging.DEBUG, message, **kwargs)
