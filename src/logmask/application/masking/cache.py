from __future__ import annotations

import threading

import structlog

from logmask.application.masking.descriptor import DescriptorBuilder, TypeDescriptor

__all__ = ["DescriptorCache"]

_log = structlog.get_logger(__name__)


class DescriptorCache:
    """Type-keyed memo of :class:`DescriptorBuilder` output.

    Lookups of present entries are plain dict reads and never wait.  A miss
    serialises on a lock private to that type, so concurrent first use of one
    type builds exactly once while other types proceed independently.  A
    failed build stores nothing, and neither does one overtaken by
    :meth:`invalidate` or :meth:`clear`.
    """

    def __init__(self, builder: DescriptorBuilder | None = None) -> None:
        self._builder = builder or DescriptorBuilder()
        self._entries: dict[type, TypeDescriptor] = {}
        self._locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def builder(self) -> DescriptorBuilder:
        return self._builder

    def get(self, cls: type) -> TypeDescriptor:
        if cls is None:
            raise TypeError("Type cannot be None")
        descriptor = self._entries.get(cls)
        if descriptor is not None:
            return descriptor

        with self._guard:
            lock = self._locks.setdefault(cls, threading.Lock())
        with lock:
            # Double-check after acquiring lock
            descriptor = self._entries.get(cls)
            if descriptor is not None:
                return descriptor
            descriptor = self._builder.build(cls)
            with self._guard:
                # skip the store when invalidate/clear ran during the build
                if self._locks.get(cls) is lock:
                    self._entries[cls] = descriptor

        _log.debug(
            "masking.descriptor_built",
            type=cls.__qualname__,
            fields=len(descriptor),
            masked_fields=sum(1 for f in descriptor if f.has_rule),
        )
        return descriptor

    def peek(self, cls: type) -> TypeDescriptor | None:
        """Cached descriptor of *cls*, without building it."""
        return self._entries.get(cls)

    def invalidate(self, cls: type) -> None:
        with self._guard:
            self._entries.pop(cls, None)
            self._locks.pop(cls, None)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()
            self._locks.clear()

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def __len__(self) -> int:
        return len(self._entries)
