import logging
from typing import Callable, Dict

from contenthandler.exceptions import PayloadException, UnsupportedOperationException
from contenthandler.models.content import CompressionFormat, Content, Representation
from contenthandler.services.payload import codec
from contenthandler.services.payload.payload_fetcher import PayloadFetcher

logger = logging.getLogger(__name__)

_DECOMPRESSORS: Dict[CompressionFormat, Callable[[bytes], bytes]] = {
    CompressionFormat.DEFLATE: codec.decompress_deflate,
    CompressionFormat.GZIP: codec.decompress_gzip,
    CompressionFormat.ZLIB: codec.decompress_zlib,
}


class PayloadResolver:
    """
    Turns a Content object into the raw bytes of the document it describes.

    The steps always run in the same order: fetch the payload when it is a URL, decode
    it when it is Base64 encoded and finally decompress it. Nothing is cached, every
    call resolves the payload again.
    """

    def __init__(self, fetcher: PayloadFetcher) -> None:
        self.__fetcher = fetcher

    def resolve(self, content: Content) -> bytes:
        # Z payloads are never decodable, fail before fetching
        if content.compression_format == CompressionFormat.COMPRESS:
            raise UnsupportedOperationException(
                "Decompression for the compress (Z) algorithm is not supported"
            )

        if content.payload_is_url:
            data = self.__fetcher.fetch(content.payload)
        elif content.representation == Representation.BASE64:
            data = codec.encode_text(content.payload, "ascii")
        else:
            data = codec.encode_text(content.payload, content.encoding)

        try:
            if content.representation == Representation.BASE64:
                data = codec.decode_base64(data)

            if content.compression_format is not None:
                data = self.decompress(data, content.compression_format)
        except PayloadException as e:
            logger.error(f"Failed to decode payload of content {content.content_id}: {e}")
            raise e

        return data

    @staticmethod
    def decompress(data: bytes, compression_format: CompressionFormat) -> bytes:
        if compression_format == CompressionFormat.COMPRESS:
            raise UnsupportedOperationException(
                "Decompression for the compress (Z) algorithm is not supported"
            )

        return _DECOMPRESSORS[compression_format](data)
