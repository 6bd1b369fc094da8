"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── MaskingError             (masking.py)
    │   ├── InvalidPatternError
    │   ├── UnresolvedAnnotationError
    │   ├── FieldAccessError
    │   └── UnknownStrategyError
    └── ConfigError              (logmask.config.errors)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from logmask.kernel.errors.base import BaseError
from logmask.kernel.errors.masking import (
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
