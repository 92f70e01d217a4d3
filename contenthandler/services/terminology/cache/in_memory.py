from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Tuple

from contenthandler.services.terminology.cache.concept_name_cache import ConceptNameCache


class InMemoryConceptNameCache(ConceptNameCache):
    """
    Process wide concept cache. Resolving a missing name holds a lock for that name, so
    concurrent first lookups of the same name only run the factory once.

    Entries expire after `object_ttl_seconds`. A TTL of None or zero keeps them forever.
    """

    def __init__(
        self, namespace: str = "contenthandler", object_ttl_seconds: int | None = None
    ) -> None:
        super().__init__(namespace=namespace, object_ttl_seconds=object_ttl_seconds)
        self.__data: Dict[str, Tuple[int, float | None]] = {}
        self.__lock = threading.Lock()
        self.__name_locks: Dict[str, threading.Lock] = {}

    def get(self, name: str) -> int | None:
        key = self.make_target_id(name)
        with self.__lock:
            entry = self.__data.get(key)
            if entry is None:
                return None
            if self.__is_expired(entry):
                del self.__data[key]
                return None
            return entry[0]

    def put_if_absent(self, name: str, concept_id: int) -> int:
        key = self.make_target_id(name)
        with self.__lock:
            entry = self.__data.get(key)
            if entry is not None and not self.__is_expired(entry):
                return entry[0]
            self.__data[key] = (concept_id, self.__expires_at())
            return concept_id

    def get_or_create(self, name: str, factory: Callable[[], int]) -> int:
        with self.__name_lock(name):
            return super().get_or_create(name, factory)

    def is_healthy(self) -> bool:
        return True

    def clear(self) -> None:
        with self.__lock:
            self.__data = {}
            self.__name_locks = {}

    def keys(self) -> List[str]:
        prefix = self.make_target_id("")
        with self.__lock:
            return [
                key.replace(prefix, "", 1)
                for key, entry in self.__data.items()
                if not self.__is_expired(entry)
            ]

    def __expires_at(self) -> float | None:
        if not self.object_ttl_seconds or self.object_ttl_seconds <= 0:
            return None
        return time.monotonic() + self.object_ttl_seconds

    @staticmethod
    def __is_expired(entry: Tuple[int, float | None]) -> bool:
        expires_at = entry[1]
        return expires_at is not None and time.monotonic() >= expires_at

    def __name_lock(self, name: str) -> threading.Lock:
        with self.__lock:
            return self.__name_locks.setdefault(name, threading.Lock())
