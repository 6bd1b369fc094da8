"""Observability – structlog processors and get_logger helper.

MaskingProcessor – renders sensitive structured values in log events masked.
get_logger(name) – returns a bound structlog logger.
"""
from __future__ import annotations

from typing import Any

import structlog

from logmask.application.masking import LogMasker, default_masker


class MaskingProcessor:
    """structlog processor that passes event values through a :class:`LogMasker`.

    Only values whose type carries masking rules are replaced; strings,
    numbers and other plain values are left as they are.

    Usage::

        import structlog
        from logmask.observability.logging.processors import MaskingProcessor

        structlog.configure(processors=[MaskingProcessor(), ...])
    """

    _PLAIN = (str, bytes, int, float, bool)

    def __init__(self, masker: LogMasker | None = None) -> None:
        self._masker = masker or default_masker()

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if value is None or isinstance(value, self._PLAIN):
                continue
            if self._masker.is_sensitive(value):
                event_dict[key] = self._masker.mask(value)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["MaskingProcessor", "get_logger"]
