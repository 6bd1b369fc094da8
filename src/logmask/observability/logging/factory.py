"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from logmask.application.masking import LogMasker, MaskingLogFilter
from logmask.observability.logging.processors import MaskingProcessor


class JsonLoggerFactory:
    """Configure structlog for JSON output with masking of sensitive values.

    Both structlog events and foreign stdlib records go through the same
    :class:`~logmask.application.masking.LogMasker`.
    """

    @staticmethod
    def configure(level: int | str = logging.INFO, masker: LogMasker | None = None) -> None:
        shared_processors: list[Any] = [
            MaskingProcessor(masker),
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors[1:],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        handler.addFilter(MaskingLogFilter(masker))
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level.upper() if isinstance(level, str) else level)


__all__ = ["JsonLoggerFactory"]
