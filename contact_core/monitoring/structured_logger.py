"""
Structured logging for the Contact Engine.

This module wraps structlog so that every component logs through the same
processor chain, and provides helpers for configuring the stdlib root logger
and timing individual store operations.
"""

import logging
import time
import threading
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from enum import Enum
import structlog
import json


class LogLevel(Enum):
    """Log levels for structured logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _iso_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class TimestampProcessor:
    """Processor to add consistent timestamps."""

    def __call__(self, logger, method_name, event_dict):
        now = time.time()
        event_dict["timestamp"] = now
        event_dict["timestamp_iso"] = _iso_timestamp(now)
        return event_dict


class ComponentProcessor:
    """Processor to add component information."""

    def __init__(self, component: str):
        self.component = component

    def __call__(self, logger, method_name, event_dict):
        event_dict.setdefault("component", self.component)
        return event_dict


class ContactEngineFormatter:
    """Fills in the fields every Contact Engine log line carries."""

    def __call__(self, logger, method_name, event_dict):
        event_dict.setdefault("level", method_name)
        event_dict["thread_name"] = threading.current_thread().name
        return event_dict


class StructuredLogger:
    """
    Structured logger for the Contact Engine.

    Log calls take a message plus keyword fields; the fields are rendered
    next to the message by structlog and routed through stdlib logging, so
    the usual handlers and levels apply.
    """

    def __init__(
        self, name: str, component: Optional[str] = None, log_level: LogLevel = LogLevel.INFO
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            component: Component name for logging context
            log_level: Minimum log level to emit
        """
        self.name = name
        self.component = component or name
        self.log_level = log_level

        self._configure_structlog()

        self.logger = structlog.get_logger(name).bind(component=self.component)

    def _configure_structlog(self):
        """Configure structlog processors and formatters."""
        if structlog.is_configured():
            return

        processors = [
            structlog.stdlib.filter_by_level,
            TimestampProcessor(),
            ComponentProcessor(self.component),
            ContactEngineFormatter(),
            structlog.dev.ConsoleRenderer(colors=False),
        ]

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    def _log(self, level: LogLevel, message: str, **kwargs):
        getattr(self.logger, level.value)(message, **kwargs)

    def debug(self, message: str, **kwargs):
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, error: Optional[Exception] = None, **kwargs):
        """Log error message with optional exception."""
        if error:
            kwargs.update(_error_fields(error))
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, error: Optional[Exception] = None, **kwargs):
        """Log critical message with optional exception."""
        if error:
            kwargs.update(_error_fields(error))
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def with_context(self, **context) -> "StructuredLogger":
        """Create a new logger with additional context."""
        new_logger = StructuredLogger(self.name, self.component, self.log_level)
        new_logger.logger = self.logger.bind(**context)
        return new_logger


def _error_fields(error: Exception) -> Dict[str, Any]:
    return {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }


class OperationLogger:
    """Logger for tracking operations with timing."""

    def __init__(self, logger: StructuredLogger, operation: str, **context):
        """
        Initialize operation logger.

        Args:
            logger: Structured logger instance
            operation: Operation name
            **context: Fields attached to every line this operation logs
        """
        self.logger = logger
        self.operation = operation
        self.start_time = None
        self.context = context

    def start(self, **context):
        self.start_time = time.time()
        self.context = {**self.context, **context}
        self.logger.debug(
            f"Starting operation: {self.operation}",
            operation=self.operation,
            operation_status="started",
            **context,
        )

    def success(self, **additional_context):
        duration_ms = (time.time() - self.start_time) * 1000 if self.start_time else None
        self.logger.info(
            f"Operation completed successfully: {self.operation}",
            operation=self.operation,
            operation_status="success",
            duration_ms=duration_ms,
            **self.context,
            **additional_context,
        )

    def error(self, error: Exception, **additional_context):
        duration_ms = (time.time() - self.start_time) * 1000 if self.start_time else None
        self.logger.error(
            f"Operation failed: {self.operation}",
            error=error,
            operation=self.operation,
            operation_status="error",
            duration_ms=duration_ms,
            **self.context,
            **additional_context,
        )

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.error(exc_val)
        else:
            self.success()


class JSONFormatter(logging.Formatter):
    """JSON formatter for standard library logging integration."""

    def format(self, record):
        """Format log record as JSON."""
        log_entry = {
            "timestamp": record.created,
            "timestamp_iso": _iso_timestamp(record.created),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread_name": record.threadName,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, component: Optional[str] = None) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name
        component: Component name for context

    Returns:
        Configured structured logger
    """
    return StructuredLogger(name, component)


def configure_logging(
    log_level: str = "INFO", json_format: bool = False, log_format: str = DEFAULT_LOG_FORMAT
) -> logging.Handler:
    """
    Configure global logging settings.

    Args:
        log_level: Minimum log level
        json_format: Whether to use JSON formatting
        log_format: Format string used when json_format is False

    Returns:
        The console handler installed on the root logger
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(log_format)

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    return console_handler
