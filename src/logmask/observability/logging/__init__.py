"""Observability – structured logging with masked values."""
from logmask.observability.logging.execution import log_execution
from logmask.observability.logging.factory import JsonLoggerFactory
from logmask.observability.logging.processors import MaskingProcessor, get_logger

__all__ = [
    "JsonLoggerFactory",
    "MaskingProcessor",
    "get_logger",
    "log_execution",
]
