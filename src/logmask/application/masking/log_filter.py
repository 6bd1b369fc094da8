from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from logmask.application.masking.masker import LogMasker, default_masker

__all__ = ["MaskingLogFilter"]


class MaskingLogFilter(logging.Filter):
    """Renders record msg/args of sensitive types masked before emission."""

    def __init__(self, masker: LogMasker | None = None, name: str = "") -> None:
        super().__init__(name)
        self._masker = masker or default_masker()

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.msg = self._mask(record.msg)
        if isinstance(record.args, Mapping):
            record.args = {k: self._mask(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._mask(arg) for arg in record.args)
        return True

    def _mask(self, value: Any) -> Any:
        if value is None or isinstance(value, (str, int, float, bytes)):
            return value
        if self._masker.is_sensitive(value):
            return self._masker.mask(value)
        return value
