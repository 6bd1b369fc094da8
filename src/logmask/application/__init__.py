"""Application – masking building blocks (framework-agnostic)."""

from logmask.application.masking import (
    DescriptorCache,
    LogMask,
    LogMasker,
    MaskingLogFilter,
    MaskingStrategy,
    MaskSensitiveData,
    default_masker,
    sensitive,
)

__all__ = [
    "DescriptorCache",
    "LogMask",
    "LogMasker",
    "MaskSensitiveData",
    "MaskingLogFilter",
    "MaskingStrategy",
    "default_masker",
    "sensitive",
]
