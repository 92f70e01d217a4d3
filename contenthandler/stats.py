from contextlib import contextmanager
from datetime import timedelta
from typing import Any, Generator

import statsd
from statsd.client.timer import Timer

from contenthandler.config import get_config


class Stats:
    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        raise NotImplementedError

    def timer(self, key: str) -> Timer:
        raise NotImplementedError


class NoopStats(Stats):
    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        """Empty method due to NoopStats implementation"""
        pass

    def timer(self, key: str) -> Timer:
        @contextmanager
        def noop_context_manager() -> Generator[Any, Any, Any]:
            yield

        return noop_context_manager()  # type: ignore


class MemoryClient:
    """Keeps stats in memory, used when stats are enabled without a statsd host"""

    def __init__(self) -> None:
        self.memory: dict[str, Any] = {}

    def timer(self, stat: str, rate: int = 1) -> Timer:
        return Timer(self, stat, rate)

    def timing(self, stat: str, delta: timedelta | float, rate: int = 1) -> None:
        if isinstance(delta, timedelta):
            delta = delta.total_seconds() * 1000.0
        if stat not in self.memory:
            self.memory[stat] = []
        self.memory[stat].append(delta)

    def incr(self, stat: str, count: int = 1, rate: int = 1) -> None:
        if stat not in self.memory:
            self.memory[stat] = 0
        self.memory[stat] += count

    def get_memory(self) -> dict[str, Any]:
        return self.memory


class Statsd(Stats):
    def __init__(self, client: statsd.StatsClient | MemoryClient, prefix: str = ""):
        self.client = client
        self.prefix = prefix

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        self.client.incr(self.__key(key), count, rate)

    def timer(self, key: str) -> Timer:
        return self.client.timer(self.__key(key))

    def __key(self, key: str) -> str:
        return f"{self.prefix}.{key}" if self.prefix else key


_STATS: Stats = NoopStats()


def setup_stats() -> None:
    config = get_config()

    if config.stats.enabled is False:
        return
    in_memory = config.stats.host is None or config.stats.port is None
    client = (
        MemoryClient()
        if in_memory
        else statsd.StatsClient(config.stats.host, config.stats.port)
    )
    global _STATS
    _STATS = Statsd(client, prefix=config.stats.module_name or "")


def reset_stats() -> None:
    global _STATS
    _STATS = NoopStats()


def get_stats() -> Stats:
    global _STATS
    return _STATS
