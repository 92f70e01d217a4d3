import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from contenthandler.services.terminology.cache.in_memory import InMemoryConceptNameCache

PATCHED_MONOTONIC = "contenthandler.services.terminology.cache.in_memory.time.monotonic"


@pytest.fixture()
def in_memory_cache() -> InMemoryConceptNameCache:
    return InMemoryConceptNameCache(namespace="test")


def test_get_should_return_none_for_missing_name(in_memory_cache: InMemoryConceptNameCache) -> None:
    assert in_memory_cache.get("Unstructured Attachment") is None


def test_put_if_absent_should_keep_first_value(in_memory_cache: InMemoryConceptNameCache) -> None:
    assert in_memory_cache.put_if_absent("Unstructured Attachment", 1) == 1
    assert in_memory_cache.put_if_absent("Unstructured Attachment", 2) == 1
    assert in_memory_cache.get("Unstructured Attachment") == 1


def test_get_or_create_should_only_call_factory_when_missing(
    in_memory_cache: InMemoryConceptNameCache,
) -> None:
    calls = []

    def factory() -> int:
        calls.append(1)
        return 42

    assert in_memory_cache.get_or_create("name", factory) == 42
    assert in_memory_cache.get_or_create("name", factory) == 42
    assert len(calls) == 1


def test_concurrent_get_or_create_should_call_factory_once(
    in_memory_cache: InMemoryConceptNameCache,
) -> None:
    threads = 16
    barrier = threading.Barrier(threads)
    calls = []
    lock = threading.Lock()

    def factory() -> int:
        with lock:
            calls.append(1)
            return len(calls)

    def run() -> int:
        barrier.wait()
        return in_memory_cache.get_or_create("name", factory)

    with ThreadPoolExecutor(max_workers=threads) as executor:
        results = [f.result() for f in [executor.submit(run) for _ in range(threads)]]

    assert set(results) == {1}
    assert len(calls) == 1


def test_keys_and_clear(in_memory_cache: InMemoryConceptNameCache) -> None:
    in_memory_cache.put_if_absent("a", 1)
    in_memory_cache.put_if_absent("b", 2)

    assert sorted(in_memory_cache.keys()) == ["a", "b"]
    assert in_memory_cache.is_healthy()

    in_memory_cache.clear()

    assert in_memory_cache.keys() == []
    assert in_memory_cache.get("a") is None


def test_namespaces_should_not_collide() -> None:
    cache = InMemoryConceptNameCache(namespace="one")

    assert cache.make_target_id("name") == "one:concept:name"


@patch(PATCHED_MONOTONIC)
def test_entries_should_expire_after_ttl(mock_monotonic: MagicMock) -> None:
    cache = InMemoryConceptNameCache(namespace="test", object_ttl_seconds=60)
    calls = []

    def factory() -> int:
        calls.append(1)
        return len(calls)

    mock_monotonic.return_value = 1000.0
    assert cache.get_or_create("name", factory) == 1

    mock_monotonic.return_value = 1059.0
    assert cache.get("name") == 1
    assert cache.keys() == ["name"]

    mock_monotonic.return_value = 1060.0
    assert cache.get("name") is None
    assert cache.keys() == []
    assert cache.get_or_create("name", factory) == 2
    assert len(calls) == 2


@patch(PATCHED_MONOTONIC)
def test_put_if_absent_should_replace_expired_entry(mock_monotonic: MagicMock) -> None:
    cache = InMemoryConceptNameCache(namespace="test", object_ttl_seconds=60)

    mock_monotonic.return_value = 1000.0
    cache.put_if_absent("name", 1)

    mock_monotonic.return_value = 2000.0
    assert cache.put_if_absent("name", 2) == 2
    assert cache.get("name") == 2


@patch(PATCHED_MONOTONIC)
def test_entries_without_ttl_should_never_expire(
    mock_monotonic: MagicMock, in_memory_cache: InMemoryConceptNameCache
) -> None:
    mock_monotonic.return_value = 1000.0
    in_memory_cache.put_if_absent("name", 1)

    mock_monotonic.return_value = 10_000_000.0
    assert in_memory_cache.get("name") == 1
