import base64
import binascii
import gzip
import zlib

from contenthandler.exceptions import DecompressionFailedException, InvalidEncodingException

DEFAULT_TEXT_ENCODING = "utf-8"


def encode_text(payload: str, encoding: str | None = None) -> bytes:
    """
    Returns the bytes of an inline text payload using the charset of the content.
    """
    charset = encoding or DEFAULT_TEXT_ENCODING
    try:
        return payload.encode(charset)
    except LookupError as e:
        raise InvalidEncodingException(f"Unknown character set '{charset}'") from e
    except UnicodeEncodeError as e:
        raise InvalidEncodingException(
            f"Payload cannot be represented in character set '{charset}'"
        ) from e


def decode_base64(data: bytes) -> bytes:
    # Base64 payloads are often line wrapped (MIME), whitespace carries no data
    stripped = b"".join(data.split())
    try:
        return base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncodingException(f"Payload is not valid Base64: {e}") from e


def decompress_deflate(data: bytes) -> bytes:
    """Raw deflate stream (RFC 1951), no zlib header or trailer"""
    try:
        return zlib.decompress(data, -zlib.MAX_WBITS)
    except zlib.error as e:
        raise DecompressionFailedException(f"Invalid deflate data: {e}") from e


def decompress_gzip(data: bytes) -> bytes:
    """Gzip container (RFC 1952)"""
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionFailedException(f"Invalid gzip data: {e}") from e


def decompress_zlib(data: bytes) -> bytes:
    """Zlib wrapped deflate stream (RFC 1950)"""
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise DecompressionFailedException(f"Invalid zlib data: {e}") from e
