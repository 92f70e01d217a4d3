from __future__ import annotations

from typing import List

from redis import ConnectionError, Redis

from contenthandler.services.terminology.cache.concept_name_cache import ConceptNameCache


class ExternalConceptNameCache(ConceptNameCache):
    """
    Redis-backed concept cache, shared between processes.

    Key format:
        <namespace>:concept:<concept name>

    Entries are written with SET NX so the first writer for a name wins, also across
    processes. Entries expire after the configured ttl so concepts retired in the host
    dictionary eventually drop out.
    """

    def __init__(
        self,
        host: str,
        port: int,
        ssl: bool = False,
        ssl_keyfile: str | None = None,
        ssl_ca_certs: str | None = None,
        ssl_certfile: str | None = None,
        ssl_check_hostname: bool = True,
        namespace: str = "contenthandler",
        object_ttl_seconds: int | None = None,
    ) -> None:
        super().__init__(namespace=namespace, object_ttl_seconds=object_ttl_seconds)
        self.__redis = Redis(
            host=host,
            port=port,
            db=0,
            ssl=ssl,
            ssl_keyfile=ssl_keyfile,
            ssl_certfile=ssl_certfile,
            ssl_ca_certs=ssl_ca_certs,
            ssl_check_hostname=ssl_check_hostname,
        )

    def _pattern(self) -> str:
        return self.make_target_id("*")

    def get(self, name: str) -> int | None:
        value = self.__redis.get(self.make_target_id(name))
        if value is None:
            return None
        return int(value)  # type: ignore[arg-type]

    def put_if_absent(self, name: str, concept_id: int) -> int:
        target_id = self.make_target_id(name)
        ttl = self.object_ttl_seconds
        if ttl is not None and ttl > 0:
            created = self.__redis.set(target_id, concept_id, nx=True, ex=ttl)
        else:
            created = self.__redis.set(target_id, concept_id, nx=True)

        if created:
            return concept_id

        # Another writer got there first
        current = self.__redis.get(target_id)
        return int(current) if current is not None else concept_id  # type: ignore[arg-type]

    def clear(self) -> None:
        keys = list(self.__redis.scan_iter(match=self._pattern()))
        if not keys:
            return
        pipe = self.__redis.pipeline(transaction=False)
        for k in keys:
            pipe.delete(k)
        pipe.execute()

    def is_healthy(self) -> bool:
        try:
            return bool(self.__redis.ping())
        except ConnectionError:
            return False

    def keys(self) -> List[str]:
        prefix = self.make_target_id("")
        return [
            key.decode("utf-8").replace(prefix, "", 1)
            for key in self.__redis.scan_iter(match=self._pattern())
        ]
