import logging

from contenthandler.config import ConfigConceptCache
from contenthandler.services.terminology.cache.concept_name_cache import ConceptNameCache
from contenthandler.services.terminology.cache.external import ExternalConceptNameCache
from contenthandler.services.terminology.cache.in_memory import InMemoryConceptNameCache

logger = logging.getLogger(__name__)


class ConceptCacheProvider:
    """
    Factory class to create a concept name cache based on the provided configuration.

    - If an external cache is configured *and* healthy, use Redis.
    - Otherwise fall back to an in-memory cache.
    """

    def __init__(self, config: ConfigConceptCache) -> None:
        self.__config = config

    def create(self) -> ConceptNameCache:
        namespace = self.__config.namespace or "contenthandler"
        ttl = self.__config.object_ttl_in_sec

        if self.__config.host is not None and self.__config.port is not None:
            external_cache_instance = ExternalConceptNameCache(
                host=self.__config.host,
                port=self.__config.port,
                ssl=self.__config.ssl,
                ssl_keyfile=self.__config.key,
                ssl_certfile=self.__config.cert,
                ssl_ca_certs=self.__config.cafile,
                ssl_check_hostname=self.__config.check_hostname,
                namespace=namespace,
                object_ttl_seconds=ttl,  # type: ignore
            )
            if external_cache_instance.is_healthy():
                logger.info(
                    "Creating external concept cache instance. namespace=%s ttl=%s",
                    namespace,
                    ttl,
                )
                return external_cache_instance

            logger.warning(
                "External concept cache configured but unhealthy; falling back to in-memory. namespace=%s",
                namespace,
            )

        logger.info(
            "Creating in-memory concept cache instance. namespace=%s ttl=%s", namespace, ttl
        )
        return InMemoryConceptNameCache(namespace=namespace, object_ttl_seconds=ttl)  # type: ignore
