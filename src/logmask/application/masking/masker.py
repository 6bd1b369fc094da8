from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from logmask.application.masking.cache import DescriptorCache
from logmask.application.masking.descriptor import NULL_TEXT, TypeDescriptor
from logmask.application.masking.rules import MaskSensitiveData

__all__ = ["LogMasker", "default_masker"]


class LogMasker:
    """Renders structured values as ``TypeName{field=value, ...}`` with
    sensitive fields masked.

    The descriptor cache is injected; a masker is safe to share across
    threads.
    """

    def __init__(self, cache: DescriptorCache | None = None) -> None:
        self._cache = cache if cache is not None else DescriptorCache()

    @property
    def cache(self) -> DescriptorCache:
        return self._cache

    def describe(self, cls: type) -> TypeDescriptor:
        return self._cache.get(cls)

    def mask(self, value: Any) -> str:
        if value is None:
            return NULL_TEXT
        descriptor = self._cache.get(type(value))
        parts = [f"{field.name}={field.render(field.read(value))}" for field in descriptor]
        return f"{descriptor.type_name}{{{', '.join(parts)}}}"

    def render(self, value: Any) -> str:
        """Masked form for values of sensitive types, ``str()`` otherwise."""
        if value is None:
            return NULL_TEXT
        if self.is_sensitive(value):
            return self.mask(value)
        return str(value)

    def is_sensitive(self, value: Any) -> bool:
        if value is None:
            return False
        return self._cache.get(type(value)).is_sensitive

    def register(
        self,
        cls: type,
        fields: Mapping[str, MaskSensitiveData | Mapping[str, Any] | None],
    ) -> None:
        """Declare the field table of *cls* and drop any stale descriptor."""
        self._cache.builder.register(cls, fields)
        self._cache.invalidate(cls)

    def invalidate(self, cls: type) -> None:
        self._cache.invalidate(cls)

    def clear(self) -> None:
        self._cache.clear()


_DEFAULT = LogMasker()


def default_masker() -> LogMasker:
    """Shared masker used by :class:`LogMask` and the logging integrations."""
    return _DEFAULT
