"""Masking errors – descriptor build and field read failures."""

from __future__ import annotations

from typing import Any

from logmask.kernel.errors.base import BaseError


class MaskingError(BaseError):
    """A value could not be rendered in masked form."""

    code = "masking_error"


class InvalidPatternError(MaskingError):
    """A custom masking pattern does not compile.

    Raised while building the descriptor of *type_name*; the type is left
    out of the cache so a later call rebuilds (and fails) again.
    """

    code = "invalid_pattern"
    detail_keys = ("type", "field", "pattern")

    def __init__(self, type_name: str, field_name: str, pattern: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid masking pattern {pattern!r} on {type_name}.{field_name}",
            type=type_name,
            field=field_name,
            pattern=pattern,
            **kwargs,
        )
        self.type_name = type_name
        self.field_name = field_name
        self.pattern = pattern


class UnresolvedAnnotationError(MaskingError):
    """A field annotation carrying masking metadata cannot be evaluated.

    Typically a name imported only under ``TYPE_CHECKING``.
    """

    code = "unresolved_annotation"
    detail_keys = ("type", "field", "annotation")

    def __init__(self, type_name: str, field_name: str, annotation: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot resolve annotation {annotation!r} of {type_name}.{field_name}",
            type=type_name,
            field=field_name,
            annotation=annotation,
            **kwargs,
        )
        self.type_name = type_name
        self.field_name = field_name
        self.annotation = annotation


class FieldAccessError(MaskingError):
    """A field could not be read from the instance being masked."""

    code = "field_access_error"
    detail_keys = ("type", "field")

    def __init__(self, type_name: str, field_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot read field {type_name}.{field_name}",
            type=type_name,
            field=field_name,
            **kwargs,
        )
        self.type_name = type_name
        self.field_name = field_name


class UnknownStrategyError(MaskingError):
    """Masking metadata names a strategy outside the pattern catalog."""

    code = "unknown_strategy"
    detail_keys = ("strategy",)

    def __init__(self, strategy: object, **kwargs: Any) -> None:
        super().__init__(f"Unknown masking strategy {strategy!r}", strategy=str(strategy), **kwargs)
        self.strategy = strategy


__all__ = [
    "FieldAccessError",
    "InvalidPatternError",
    "MaskingError",
    "UnknownStrategyError",
    "UnresolvedAnnotationError",
]
