from enum import Enum
from functools import total_ordering
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from contenthandler.exceptions import InvalidRepresentationException
from contenthandler.models.coded_value import CodedValue


class Representation(str, Enum):
    """HL7 ED representation of a payload"""

    TEXT = "TXT"
    BASE64 = "B64"
    # Only valid when the payload is a URL: the data stored at the URL is binary
    BINARY = "BINARY"


class CompressionFormat(str, Enum):
    """HL7 ED compression algorithms (RFC 1951, RFC 1952, RFC 1950 and Unix compress)"""

    DEFLATE = "DF"
    GZIP = "GZ"
    ZLIB = "ZL"
    # Deprecated by HL7, accepted but never decoded
    COMPRESS = "Z"


@total_ordering
class Content(BaseModel):
    """
    A document payload plus its metadata.

    Follows the HL7 Encapsulated Data (ED) datatype, extended with a type and a format
    code. The payload either holds the document itself or, when `payload_is_url` is set,
    a URL where the document can be retrieved from. All other metadata (content type,
    encoding, representation and compression) describes the document, never the URL.

    Two Content objects are considered equal when their payloads are equal, whatever
    their metadata.
    """

    model_config = ConfigDict(frozen=True)

    payload: str
    payload_is_url: bool = False
    type_code: CodedValue | None = None
    format_code: CodedValue | None = None
    content_type: str
    encoding: str | None = None
    representation: Representation = Representation.TEXT
    compression_format: CompressionFormat | None = None
    language: str | None = None
    content_id: str = Field(default_factory=lambda: str(uuid4()))

    @model_validator(mode="after")
    def check_representation(self) -> "Content":
        if (
            self.is_compressed
            and not self.payload_is_url
            and self.representation != Representation.BASE64
        ):
            raise InvalidRepresentationException("Compressed payload must be Base64 encoded")

        if not self.payload_is_url and self.representation == Representation.BINARY:
            raise InvalidRepresentationException(
                "Binary payload can only be referenced by URL, inline payloads must be Base64 encoded"
            )
        return self

    @classmethod
    def from_text(
        cls,
        payload: str,
        type_code: CodedValue | None,
        format_code: CodedValue | None,
        content_type: str,
    ) -> "Content":
        """
        Creates a Content object with a plain, inline text payload (an XML document for example).
        """
        return cls(
            payload=payload,
            type_code=type_code,
            format_code=format_code,
            content_type=content_type,
        )

    @property
    def is_compressed(self) -> bool:
        return self.compression_format is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Content):
            return NotImplemented
        return self.payload == other.payload

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Content):
            return NotImplemented
        return self.payload < other.payload

    def __hash__(self) -> int:
        return hash(self.payload)
