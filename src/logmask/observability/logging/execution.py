"""Observability – log_execution decorator.

Logs entry (``execution.init``) and exit (``execution.finish``) of a callable
with its parameters and result rendered through a :class:`LogMasker`, plus
the elapsed time in milliseconds.
"""
from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable, TypeVar

from logmask.application.masking import LogMasker, default_masker
from logmask.config.settings import EnvSettingsLoader, LogMaskSettings
from logmask.observability.logging.processors import get_logger

F = TypeVar("F", bound=Callable[..., Any])


class _ExecutionLogger:
    def __init__(
        self,
        fn: Callable[..., Any],
        *,
        log_parameters: bool,
        log_return: bool,
        logger: Any,
        masker: LogMasker | None,
        settings: LogMaskSettings | None,
    ) -> None:
        self._settings = settings or EnvSettingsLoader().load(LogMaskSettings)
        self._log_parameters = log_parameters and self._settings.log_parameters
        self._log_return = log_return and self._settings.log_return
        self._logger = logger or get_logger(fn.__module__)
        self._masker = masker
        qualname = fn.__qualname__
        self._method = fn.__name__
        parts = qualname.split(".")
        # simple name of the enclosing class, module for plain functions
        owner = parts[-2] if len(parts) > 1 else ""
        self._owner = fn.__module__ if owner in ("", "<locals>") else owner
        params = list(inspect.signature(fn).parameters)
        # bound receiver is not a parameter
        self._skip_receiver = bool(params) and params[0] in ("self", "cls")

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def _render_parameters(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[str]:
        masker = self._masker or default_masker()
        if self._skip_receiver:
            args = args[1:]
        rendered = [masker.render(arg) for arg in args]
        rendered.extend(f"{key}={masker.render(value)}" for key, value in kwargs.items())
        return rendered

    def _emit(self, event: str, **fields: Any) -> None:
        getattr(self._logger, self._settings.log_level)(event, **fields)

    def init(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> float:
        fields: dict[str, Any] = {"method": self._method, "cls": self._owner}
        if self._log_parameters:
            fields["parameters"] = self._render_parameters(args, kwargs)
        self._emit("execution.init", **fields)
        return time.perf_counter()

    def finish(
        self,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        result: Any,
        started: float,
    ) -> None:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        fields: dict[str, Any] = {"method": self._method, "cls": self._owner}
        if self._log_parameters:
            fields["parameters"] = self._render_parameters(args, kwargs)
        if self._log_return:
            fields["result"] = (self._masker or default_masker()).render(result)
        fields["time_execution_ms"] = elapsed_ms
        self._emit("execution.finish", **fields)


def log_execution(
    fn: F | None = None,
    *,
    log_parameters: bool = True,
    log_return: bool = True,
    logger: Any = None,
    masker: LogMasker | None = None,
    settings: LogMaskSettings | None = None,
) -> Any:
    """Decorator: log entry and exit of *fn* with masked parameters/result.

    Usable bare (``@log_execution``) or configured
    (``@log_execution(log_return=False)``).  Coroutine functions get an async
    wrapper.  Exceptions raised by *fn* propagate untouched and no finish
    event is written for them.

    Parameters
    ----------
    log_parameters, log_return:
        Include rendered arguments / return value.  Both are also gated by
        the matching :class:`~logmask.config.LogMaskSettings` flag.
    logger:
        structlog-style logger; defaults to ``get_logger(fn.__module__)``.
    masker:
        Masker used to render values; defaults to :func:`default_masker`.
    settings:
        Layer toggles; read from ``LOGMASK_*`` environment variables at
        decoration time when omitted.  ``enabled = False`` turns logging off.
    """

    def decorator(func: F) -> F:
        execution = _ExecutionLogger(
            func,
            log_parameters=log_parameters,
            log_return=log_return,
            logger=logger,
            masker=masker,
            settings=settings,
        )

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                if not execution.enabled:
                    return await func(*args, **kwargs)
                started = execution.init(args, kwargs)
                result = await func(*args, **kwargs)
                execution.finish(args, kwargs, result, started)
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not execution.enabled:
                return func(*args, **kwargs)
            started = execution.init(args, kwargs)
            result = func(*args, **kwargs)
            execution.finish(args, kwargs, result, started)
            return result

        return wrapper  # type: ignore[return-value]

    if fn is not None:
        return decorator(fn)
    return decorator


__all__ = ["log_execution"]
