#!/usr/bin/env python3
"""
Structured logging with trace ID support for list search.

Every entry is emitted as one JSON line carrying the logger name, the
current trace ID and optional timing and metadata, and is mirrored to the
standard library logger so host applications keep their own handlers.
"""

import json
import time
import uuid
import logging
from contextvars import ContextVar
from typing import Dict, Any, Optional, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from enum import Enum


trace_id_var: ContextVar[str] = ContextVar('trace_id', default='')


class LogLevel(str, Enum):
    """Logging levels for structured output."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogEntry:
    """Structured log entry format."""
    timestamp: float
    level: str
    message: str
    logger_name: str
    trace_id: str
    operation: Optional[str] = None
    duration_ms: Optional[float] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, dropping empty fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}


class StructuredLogger:
    """
    Logger with structured JSON output and trace ID support.

    Console output respects the level of the underlying stdlib logger, so a
    ranker called on every keystroke stays quiet unless DEBUG is enabled.
    """

    def __init__(self, name: str, enable_console: bool = True, redact: bool = True):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically a dotted component name)
            enable_console: Whether to print JSON lines to stdout
            redact: Whether to mask sensitive metadata values
        """
        self.name = name
        self.enable_console = enable_console
        self.redact = redact
        self.stdlib_logger = logging.getLogger(name)
        self.redacted_keys = ['password', 'secret', 'token', 'auth', 'email']

    def _redact(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not self.redact:
            return data

        redacted = {}
        for key, value in data.items():
            if any(pattern in key.lower() for pattern in self.redacted_keys):
                redacted[key] = '***REDACTED***'
            elif isinstance(value, dict):
                redacted[key] = self._redact(value)
            else:
                redacted[key] = value
        return redacted

    def _emit_log(self, level: LogLevel, message: str, **kwargs) -> None:
        numeric_level = getattr(logging, level.value)
        if not self.stdlib_logger.isEnabledFor(numeric_level):
            return

        provided_trace_id = kwargs.pop('trace_id', None)
        trace_id = provided_trace_id or get_current_trace_id()

        entry_fields = {}
        for field in ['operation', 'duration_ms']:
            if field in kwargs:
                entry_fields[field] = kwargs.pop(field)

        entry = LogEntry(
            timestamp=time.time(),
            level=level.value,
            message=message,
            logger_name=self.name,
            trace_id=trace_id,
            metadata=kwargs or None,
            **entry_fields
        )

        log_dict = entry.to_dict()
        if log_dict.get('metadata'):
            log_dict['metadata'] = self._redact(log_dict['metadata'])

        if self.enable_console:
            print(json.dumps(log_dict, default=str))

        self.stdlib_logger.log(numeric_level, message)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._emit_log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self._emit_log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._emit_log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self._emit_log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        """Log critical message."""
        self._emit_log(LogLevel.CRITICAL, message, **kwargs)


@contextmanager
def log_timing(operation: str, logger: StructuredLogger) -> Iterator[Dict[str, Any]]:
    """
    Context manager timing a synchronous operation.

    Args:
        operation: Operation being performed (search, rank, ...)
        logger: Logger instance to use

    Yields:
        Dict the caller fills with metadata for the completion entry
    """
    start_time = time.perf_counter()
    metadata: Dict[str, Any] = {}

    try:
        yield metadata
    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.error(
            f"{operation} failed",
            operation=operation,
            duration_ms=duration_ms,
            error=str(e),
            **metadata
        )
        raise
    else:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"{operation} completed",
            operation=operation,
            duration_ms=duration_ms,
            **metadata
        )


@contextmanager
def trace_context(trace_id: Optional[str] = None) -> Iterator[str]:
    """
    Context manager for setting the trace ID of one search interaction.

    Args:
        trace_id: Optional trace ID (will generate if not provided)
    """
    if trace_id is None:
        trace_id = str(uuid.uuid4())

    token = trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        trace_id_var.reset(token)


def get_current_trace_id() -> str:
    """Get the current trace ID from context."""
    return trace_id_var.get() or str(uuid.uuid4())[:8]


search_logger = StructuredLogger("list_search.search")
ranking_logger = StructuredLogger("list_search.ranking")

_STRUCTURED_LOGGERS = (search_logger, ranking_logger)


DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "INFO",
    enable_json: bool = True,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> None:
    """
    Set up logging for the list_search loggers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json: Whether structured loggers print JSON lines
        log_format: Format of plain stdlib log records
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=log_format)
    logging.getLogger("list_search").setLevel(numeric_level)

    for structured_logger in _STRUCTURED_LOGGERS:
        structured_logger.enable_console = enable_json


def setup_logging_from_config(config: Dict[str, Any]) -> None:
    """
    Apply the ``logging`` section of a loaded configuration.

    Args:
        config: Configuration dictionary, e.g. from ``get_config()``
    """
    section = config.get("logging", {})
    setup_logging(
        level=section.get("level", "INFO"),
        enable_json=section.get("json", True),
        log_format=section.get("format", DEFAULT_LOG_FORMAT),
    )
