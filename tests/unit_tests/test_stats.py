import pytest

from contenthandler.config import get_config, set_config
from contenthandler.stats import MemoryClient, NoopStats, Statsd, get_stats, setup_stats
from tests.test_config import get_test_config


@pytest.fixture
def memory_client() -> MemoryClient:
    return MemoryClient()


def test_memory_client_timing(memory_client: MemoryClient) -> None:
    memory_client.timing("test.timing", 500)
    memory = memory_client.get_memory()
    assert memory["test.timing"] == [500]


def test_memory_client_incr(memory_client: MemoryClient) -> None:
    memory_client.incr("test.counter")
    memory_client.incr("test.counter", 2)
    assert memory_client.get_memory() == {"test.counter": 3}


def test_statsd_should_prefix_keys(memory_client: MemoryClient) -> None:
    stats = Statsd(memory_client, prefix="contenthandler")

    stats.inc("registry.resolve.hit")
    with stats.timer("payload.fetch"):
        pass

    memory = memory_client.get_memory()
    assert memory["contenthandler.registry.resolve.hit"] == 1
    assert len(memory["contenthandler.payload.fetch"]) == 1


def test_stats_should_be_noop_until_setup() -> None:
    stats = get_stats()

    assert isinstance(stats, NoopStats)
    with stats.timer("payload.fetch"):
        stats.inc("registry.resolve.hit")


def test_setup_stats_without_host_should_keep_stats_in_memory() -> None:
    setup_stats()

    stats = get_stats()
    assert isinstance(stats, Statsd)
    assert isinstance(stats.client, MemoryClient)
    assert stats.prefix == "contenthandler"


def test_setup_stats_when_disabled_should_do_nothing() -> None:
    config = get_test_config()
    config.stats.enabled = False
    set_config(config)

    setup_stats()

    assert get_config().stats.enabled is False
    assert isinstance(get_stats(), NoopStats)
