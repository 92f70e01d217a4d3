from enum import Enum
from typing import List


class DetailType(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Detail:
    def __init__(self, detail_type: DetailType, detail: str) -> None:
        self.detail_type = detail_type
        self.detail = detail

    def __str__(self) -> str:
        return f"[{self.detail_type.value}] {self.detail}"


class ContentHandlerException(Exception):
    """
    Base exception for content handler operations.

    Handlers may attach a list of details (info, warnings and errors) that explain
    why processing a document failed. When details are present they are rendered
    as part of the string representation.
    """

    def __init__(self, message: str = "", details: List[Detail] | None = None) -> None:
        super().__init__(message)
        self.details: List[Detail] = details if details is not None else []

    def add_detail(self, detail: Detail) -> None:
        self.details.append(detail)

    def has_details(self) -> bool:
        return len(self.details) > 0

    def __str__(self) -> str:
        if not self.has_details():
            return super().__str__()

        lines = [f"[{self.__class__.__name__}] Details of this exception are:"]
        lines.extend(str(detail) for detail in self.details)
        return "\n".join(lines)


class NullArgumentException(ContentHandlerException):
    pass


class InvalidArgumentException(ContentHandlerException):
    pass


class InvalidKeyException(ContentHandlerException):
    """Raised when a content type or type/format code pair cannot be used as a registry key"""

    pass


class InvalidRepresentationException(ContentHandlerException):
    pass


class AlreadyRegisteredException(ContentHandlerException):
    pass


class PayloadException(ContentHandlerException):
    """Base exception for failures while resolving the raw bytes of a payload"""

    pass


class InvalidEncodingException(PayloadException):
    pass


class DecompressionFailedException(PayloadException):
    pass


class UnsupportedOperationException(PayloadException):
    pass


class InvalidPayloadReferenceException(PayloadException):
    pass


class PayloadUnavailableException(PayloadException):
    pass


class StoreFailureException(ContentHandlerException):
    pass
