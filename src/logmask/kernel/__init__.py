"""Kernel – framework-agnostic building blocks."""

from logmask.kernel.errors import (
    BaseError,
    FieldAccessError,
    InvalidPatternError,
    MaskingError,
    UnknownStrategyError,
    UnresolvedAnnotationError,
)

__all__ = [
    "BaseError",
    "FieldAccessError",
    "InvalidPatternError",
    "MaskingError",
    "UnknownStrategyError",
    "UnresolvedAnnotationError",
]
