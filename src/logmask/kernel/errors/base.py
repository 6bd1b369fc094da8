"""Root of the logmask error hierarchy."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of every error raised by logmask.

    Each subclass fixes a machine-readable ``code`` and names the
    ``detail_keys`` it reports.  Detail is passed as keyword arguments and
    rendered in that order by :meth:`to_dict` and the JSON ``str()``, so a
    log line for a given error always has the same shape.

    Args:
        message: Human-readable description.
        cause: Original exception that triggered this error.
        **detail: Context values; every name in ``detail_keys`` is required.
    """

    code: ClassVar[str] = "logmask_error"
    detail_keys: ClassVar[tuple[str, ...]] = ()

    def __init__(self, message: str, *, cause: BaseException | None = None, **detail: Any) -> None:
        missing = [key for key in self.detail_keys if key not in detail]
        if missing:
            raise TypeError(f"{type(self).__name__} requires detail: {', '.join(missing)}")
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.detail: dict[str, Any] = {key: detail.pop(key) for key in self.detail_keys}
        self.detail.update(detail)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """``error``, ``code`` and ``message``, then ``detail`` and ``cause`` when set."""
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.detail:
            payload["detail"] = dict(self.detail)
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]
