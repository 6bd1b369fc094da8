from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from logmask.application.masking.catalog import MaskingStrategy

__all__ = [
    "MASK_METADATA_KEY",
    "NO_MASKING",
    "MaskSensitiveData",
    "MaskingRule",
    "RuleKind",
    "resolve_rule",
    "sensitive",
]

MASK_METADATA_KEY: Final = "logmask"


@dataclass(frozen=True)
class MaskSensitiveData:
    """Masking metadata attached to a single field.

    Use as ``Annotated[str, MaskSensitiveData(MaskingStrategy.EMAIL)]`` or
    through :func:`sensitive` on dataclass fields.  A non-blank
    *custom_pattern* wins over *strategy*.
    """

    strategy: MaskingStrategy = MaskingStrategy.ALL
    custom_pattern: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", MaskingStrategy.coerce(self.strategy))
        object.__setattr__(self, "custom_pattern", self.custom_pattern or "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MaskSensitiveData:
        """Build from ``{namedStrategy, customPattern}`` (snake_case also accepted)."""
        strategy = data.get("namedStrategy", data.get("strategy", MaskingStrategy.ALL))
        custom = data.get("customPattern", data.get("custom_pattern", ""))
        return cls(strategy=strategy, custom_pattern=custom or "")


class RuleKind(str, Enum):
    NAMED = "named"
    CUSTOM = "custom"
    NONE = "none"


@dataclass(frozen=True)
class MaskingRule:
    """How a field's text form is transformed."""

    kind: RuleKind
    strategy: MaskingStrategy | None = None
    custom_pattern: str | None = None

    @classmethod
    def named(cls, strategy: MaskingStrategy | str) -> MaskingRule:
        return cls(RuleKind.NAMED, strategy=MaskingStrategy.coerce(strategy))

    @classmethod
    def custom(cls, pattern: str) -> MaskingRule:
        return cls(RuleKind.CUSTOM, custom_pattern=pattern)

    @property
    def regex(self) -> str | None:
        if self.kind is RuleKind.CUSTOM:
            return self.custom_pattern
        if self.kind is RuleKind.NAMED and self.strategy is not None:
            return self.strategy.regex
        return None

    def compile(self) -> re.Pattern[str] | None:
        """Compile the bound pattern; ``re.error`` propagates for bad custom patterns."""
        if self.kind is RuleKind.NAMED and self.strategy is not None:
            return self.strategy.pattern
        if self.kind is RuleKind.CUSTOM and self.custom_pattern is not None:
            return re.compile(self.custom_pattern)
        return None


NO_MASKING: Final = MaskingRule(RuleKind.NONE)


def resolve_rule(metadata: MaskSensitiveData | None) -> MaskingRule:
    """Custom (non-blank) → Named → None."""
    if metadata is None:
        return NO_MASKING
    if metadata.custom_pattern and metadata.custom_pattern.strip():
        return MaskingRule.custom(metadata.custom_pattern)
    return MaskingRule.named(metadata.strategy)


def sensitive(
    strategy: MaskingStrategy | str = MaskingStrategy.ALL,
    custom_pattern: str = "",
    **field_kwargs: Any,
) -> Any:
    """``dataclasses.field`` carrying :class:`MaskSensitiveData` metadata.

    Extra keyword arguments (``default``, ``default_factory``, ``repr`` …)
    are forwarded to :func:`dataclasses.field`.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[MASK_METADATA_KEY] = MaskSensitiveData(strategy, custom_pattern)
    return dataclasses.field(metadata=metadata, **field_kwargs)
