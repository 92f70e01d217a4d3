from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Generic, List, Tuple, TypeVar

from contenthandler.exceptions import (
    AlreadyRegisteredException,
    InvalidKeyException,
    NullArgumentException,
)
from contenthandler.services.handlers.content_handler import ContentHandler

logger = logging.getLogger(__name__)

K = TypeVar("K")


class HandlerRegistry(Generic[K]):
    """
    Table of handler prototypes for a single kind of key.

    Registration validates the key with the supplied predicate and refuses to overwrite
    a live registration. Deregistration never fails. Prototypes are stored as given, it
    is up to the caller to clone them before handing them out.

    All access goes through `lock`, which may be shared between registries so that a
    reader never observes a partially applied change across them.
    """

    def __init__(
        self,
        name: str,
        is_valid_key: Callable[[Any], bool],
        lock: threading.RLock | None = None,
    ) -> None:
        self.name = name
        self.__is_valid_key = is_valid_key
        self.__lock = lock if lock is not None else threading.RLock()
        self.__prototypes: Dict[K, ContentHandler] = {}

    def register(self, key: K, prototype: ContentHandler | None) -> None:
        if prototype is None:
            raise NullArgumentException(f"A prototype handler is required to register {key}")

        if not self.__is_valid_key(key):
            raise InvalidKeyException(f"Invalid {self.name} key: {key}")

        with self.__lock:
            if key in self.__prototypes:
                raise AlreadyRegisteredException(
                    f"A handler is already registered for {self.name} {key}"
                )
            self.__prototypes[key] = prototype

        logger.info(f"Registered {type(prototype).__name__} for {self.name} {key}")

    def deregister(self, key: K) -> None:
        if not self.__is_valid_key(key):
            return

        with self.__lock:
            prototype = self.__prototypes.pop(key, None)

        if prototype is not None:
            logger.info(f"Deregistered {type(prototype).__name__} for {self.name} {key}")

    def get(self, key: K) -> ContentHandler | None:
        if not self.__is_valid_key(key):
            return None

        with self.__lock:
            return self.__prototypes.get(key)

    def keys(self) -> List[K]:
        with self.__lock:
            return list(self.__prototypes.keys())

    def items(self) -> List[Tuple[K, ContentHandler]]:
        with self.__lock:
            return list(self.__prototypes.items())
