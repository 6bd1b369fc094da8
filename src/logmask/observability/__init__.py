"""Observability – logging."""

from logmask.observability.logging import JsonLoggerFactory, MaskingProcessor, get_logger, log_execution

__all__ = [
    "JsonLoggerFactory",
    "MaskingProcessor",
    "get_logger",
    "log_execution",
]
