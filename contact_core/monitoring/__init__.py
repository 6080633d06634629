"""
Monitoring module for the Contact Engine.

This module provides structured logging for the store and its configuration.
"""

from .structured_logger import (
    StructuredLogger,
    OperationLogger,
    JSONFormatter,
    LogLevel,
    get_logger,
    configure_logging,
)

__all__ = [
    'StructuredLogger',
    'OperationLogger',
    'JSONFormatter',
    'LogLevel',
    'get_logger',
    'configure_logging',
]
