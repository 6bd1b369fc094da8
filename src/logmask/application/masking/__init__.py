"""Application Data Masking – pattern catalog, type descriptors and the masker."""
from logmask.application.masking.cache import DescriptorCache
from logmask.application.masking.catalog import MASK_CHAR, MaskingStrategy, mask_text
from logmask.application.masking.descriptor import (
    DescriptorBuilder,
    FieldDescriptor,
    TypeDescriptor,
    is_maskable_type,
)
from logmask.application.masking.log_filter import MaskingLogFilter
from logmask.application.masking.masker import LogMasker, default_masker
from logmask.application.masking.mixin import LogMask
from logmask.application.masking.rules import (
    NO_MASKING,
    MaskingRule,
    MaskSensitiveData,
    RuleKind,
    resolve_rule,
    sensitive,
)

__all__ = [
    "MASK_CHAR",
    "NO_MASKING",
    "DescriptorBuilder",
    "DescriptorCache",
    "FieldDescriptor",
    "LogMask",
    "LogMasker",
    "MaskSensitiveData",
    "MaskingLogFilter",
    "MaskingRule",
    "MaskingStrategy",
    "RuleKind",
    "TypeDescriptor",
    "default_masker",
    "is_maskable_type",
    "mask_text",
    "resolve_rule",
    "sensitive",
]
