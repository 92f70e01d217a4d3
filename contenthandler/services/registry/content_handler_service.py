import logging
import threading
from typing import Any, List, Type

from pydantic import ValidationError

from contenthandler.exceptions import NullArgumentException
from contenthandler.models.coded_value import CodedValue
from contenthandler.models.handler_binding import HandlerBinding, TypeFormatCode
from contenthandler.services.handlers.content_handler import ContentHandler
from contenthandler.services.registry.handler_registry import HandlerRegistry
from contenthandler.services.registry.validators import (
    is_valid_content_type,
    is_valid_type_format_code,
)
from contenthandler.stats import get_stats

logger = logging.getLogger(__name__)


class ContentHandlerService:
    """
    Dispatches content to handlers, either by content type (e.g. "text/plain") or by a
    type code and format code pair.

    Handlers are registered as prototypes and every lookup returns a fresh clone. When
    nothing is registered for a key, the default unstructured handler is returned, bound
    to the requested key. With `fallback_to_default` disabled such lookups return None.
    """

    def __init__(
        self, default_handler: ContentHandler, fallback_to_default: bool = True
    ) -> None:
        if default_handler is None:
            raise NullArgumentException("A default unstructured handler is required")

        self.__lock = threading.RLock()
        self.__default_handler = default_handler
        self.__fallback_to_default = fallback_to_default
        self.__content_types: HandlerRegistry[str] = HandlerRegistry(
            "content type", is_valid_content_type, self.__lock
        )
        self.__type_format_codes: HandlerRegistry[TypeFormatCode] = HandlerRegistry(
            "type/format code", is_valid_type_format_code, self.__lock
        )

    def register_content_handler(
        self, content_type: str, prototype: ContentHandler | None
    ) -> None:
        self.__content_types.register(content_type, prototype)
        get_stats().inc("registry.register")

    def deregister_content_handler(self, content_type: str | None) -> None:
        self.__content_types.deregister(content_type)  # type: ignore[arg-type]

    def register_coded_content_handler(
        self,
        type_code: CodedValue | None,
        format_code: CodedValue | None,
        prototype: ContentHandler | None,
    ) -> None:
        self.__type_format_codes.register(
            _type_format_code(type_code, format_code), prototype  # type: ignore[arg-type]
        )
        get_stats().inc("registry.register")

    def deregister_coded_content_handler(
        self, type_code: CodedValue | None, format_code: CodedValue | None
    ) -> None:
        self.__type_format_codes.deregister(
            _type_format_code(type_code, format_code)  # type: ignore[arg-type]
        )

    def get_content_handler(self, content_type: str | None) -> ContentHandler | None:
        prototype = self.__content_types.get(content_type)  # type: ignore[arg-type]
        if prototype is not None:
            get_stats().inc("registry.resolve.hit")
            return prototype.clone_handler()

        binding = (
            HandlerBinding.for_content_type(content_type)
            if is_valid_content_type(content_type)
            else HandlerBinding()
        )
        return self.__fallback(binding)

    def get_coded_content_handler(
        self, type_code: CodedValue | None, format_code: CodedValue | None
    ) -> ContentHandler | None:
        key = _type_format_code(type_code, format_code)
        prototype = self.__type_format_codes.get(key)  # type: ignore[arg-type]
        if prototype is not None:
            get_stats().inc("registry.resolve.hit")
            return prototype.clone_handler()

        binding = (
            HandlerBinding.for_codes(type_code, format_code)
            if is_valid_type_format_code(key)
            else HandlerBinding()
        )
        return self.__fallback(binding)

    def get_default_unstructured_handler(self) -> ContentHandler:
        with self.__lock:
            prototype = self.__default_handler
        return prototype.clone_handler()

    def set_default_unstructured_handler(self, prototype: ContentHandler | None) -> None:
        if prototype is None:
            raise NullArgumentException("The default unstructured handler cannot be None")

        with self.__lock:
            self.__default_handler = prototype

        logger.info(f"Default unstructured handler set to {type(prototype).__name__}")

    def get_handler_by_implementation_type(
        self, handler_type: Type[ContentHandler]
    ) -> ContentHandler | None:
        """
        Returns a clone of the first registered handler that is an instance of
        `handler_type`. Content type registrations are searched before coded ones, each
        in registration order.
        """
        with self.__lock:
            prototypes = [p for _, p in self.__content_types.items()]
            prototypes += [p for _, p in self.__type_format_codes.items()]

        for prototype in prototypes:
            if isinstance(prototype, handler_type):
                return prototype.clone_handler()

        return None

    def registered_content_types(self) -> List[str]:
        return self.__content_types.keys()

    def registered_type_format_codes(self) -> List[TypeFormatCode]:
        return self.__type_format_codes.keys()

    def __fallback(self, binding: HandlerBinding) -> ContentHandler | None:
        if not self.__fallback_to_default:
            get_stats().inc("registry.resolve.miss")
            return None

        with self.__lock:
            prototype = self.__default_handler

        get_stats().inc("registry.resolve.default")
        return prototype.for_binding(binding)


def _type_format_code(type_code: Any, format_code: Any) -> TypeFormatCode | None:
    try:
        return TypeFormatCode(type_code=type_code, format_code=format_code)
    except ValidationError:
        return None
