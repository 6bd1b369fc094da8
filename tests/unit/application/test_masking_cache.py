"""Unit tests for DescriptorCache."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import pytest

from logmask.application.masking import (
    DescriptorBuilder,
    DescriptorCache,
    MaskingStrategy,
    TypeDescriptor,
    sensitive,
)
from logmask.application.masking import cache as cache_module
from logmask.kernel.errors import InvalidPatternError


@dataclass
class Customer:
    name: str = sensitive(MaskingStrategy.NAME)
    age: int = 0


@dataclass
class Order:
    reference: str = ""


@dataclass
class BrokenVoucher:
    code: str = sensitive(custom_pattern=r"[unclosed")


class CountingBuilder(DescriptorBuilder):
    """Builder spy that counts builds per type, optionally slowly."""

    def __init__(self, delay: float = 0.0) -> None:
        super().__init__()
        self.delay = delay
        self.builds: dict[type, int] = {}
        self._lock = threading.Lock()

    def build(self, cls: type) -> TypeDescriptor:
        with self._lock:
            self.builds[cls] = self.builds.get(cls, 0) + 1
        if self.delay:
            time.sleep(self.delay)
        return super().build(cls)


class GatedBuilder(CountingBuilder):
    """Builder that blocks inside build until released."""

    def __init__(self) -> None:
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def build(self, cls: type) -> TypeDescriptor:
        self.started.set()
        assert self.release.wait(timeout=5)
        return super().build(cls)


class RecordingLog:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def debug(self, event: str, **kw: Any) -> None:
        self.events.append((event, kw))


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestDescriptorCacheGet:
    def test_same_instance_on_repeated_lookup(self) -> None:
        cache = DescriptorCache()
        assert cache.get(Customer) is cache.get(Customer)

    def test_builds_once_per_type(self) -> None:
        builder = CountingBuilder()
        cache = DescriptorCache(builder)
        for _ in range(5):
            cache.get(Customer)
        cache.get(Order)
        assert builder.builds == {Customer: 1, Order: 1}
        assert len(cache) == 2

    def test_none_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            DescriptorCache().get(None)  # type: ignore[arg-type]

    def test_default_builder(self) -> None:
        assert isinstance(DescriptorCache().builder, DescriptorBuilder)

    def test_peek_does_not_build(self) -> None:
        builder = CountingBuilder()
        cache = DescriptorCache(builder)
        assert cache.peek(Customer) is None
        assert Customer not in cache
        descriptor = cache.get(Customer)
        assert cache.peek(Customer) is descriptor
        assert Customer in cache
        assert builder.builds == {Customer: 1}

    def test_failed_build_is_not_cached(self) -> None:
        builder = CountingBuilder()
        cache = DescriptorCache(builder)
        for _ in range(2):
            with pytest.raises(InvalidPatternError):
                cache.get(BrokenVoucher)
        assert BrokenVoucher not in cache
        assert builder.builds[BrokenVoucher] == 2

    def test_build_is_logged(self, monkeypatch: pytest.MonkeyPatch) -> None:
        log = RecordingLog()
        monkeypatch.setattr(cache_module, "_log", log)
        cache = DescriptorCache()
        cache.get(Customer)
        cache.get(Customer)
        assert log.events == [
            ("masking.descriptor_built", {"type": "Customer", "fields": 2, "masked_fields": 1}),
        ]


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestDescriptorCacheConcurrency:
    def test_concurrent_first_use_builds_exactly_once(self) -> None:
        builder = CountingBuilder(delay=0.05)
        cache = DescriptorCache(builder)
        workers = 8
        barrier = threading.Barrier(workers)

        def lookup() -> TypeDescriptor:
            barrier.wait()
            return cache.get(Customer)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda _: lookup(), range(workers)))

        assert builder.builds == {Customer: 1}
        assert all(r is results[0] for r in results)

    def test_distinct_types_build_independently(self) -> None:
        builder = CountingBuilder(delay=0.02)
        cache = DescriptorCache(builder)
        types = [Customer, Order] * 4
        barrier = threading.Barrier(len(types))

        def lookup(cls: type) -> TypeDescriptor:
            barrier.wait()
            return cache.get(cls)

        with ThreadPoolExecutor(max_workers=len(types)) as pool:
            list(pool.map(lookup, types))

        assert builder.builds == {Customer: 1, Order: 1}


# ---------------------------------------------------------------------------
# Invalidation
# ---------------------------------------------------------------------------


class TestDescriptorCacheInvalidation:
    def test_invalidate_forces_rebuild(self) -> None:
        builder = CountingBuilder()
        cache = DescriptorCache(builder)
        first = cache.get(Customer)
        cache.invalidate(Customer)
        assert Customer not in cache
        second = cache.get(Customer)
        assert second is not first
        assert builder.builds == {Customer: 2}

    def test_invalidate_unknown_type_is_noop(self) -> None:
        cache = DescriptorCache()
        cache.get(Customer)
        cache.invalidate(Order)
        assert len(cache) == 1

    def test_clear(self) -> None:
        cache = DescriptorCache()
        cache.get(Customer)
        cache.get(Order)
        cache.clear()
        assert len(cache) == 0
        assert cache.peek(Customer) is None

    @pytest.mark.parametrize("reset", ["invalidate", "clear"])
    def test_build_overtaken_by_reset_is_not_stored(self, reset: str) -> None:
        builder = GatedBuilder()
        cache = DescriptorCache(builder)
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(cache.get, Customer)
            assert builder.started.wait(timeout=5)
            if reset == "invalidate":
                cache.invalidate(Customer)
            else:
                cache.clear()
            builder.release.set()
            stale = pending.result(timeout=5)

        assert isinstance(stale, TypeDescriptor)
        assert Customer not in cache
        assert cache.get(Customer) is not stale
        assert builder.builds == {Customer: 2}
