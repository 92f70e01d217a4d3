from abc import ABC
import logging
from typing import Dict, Any
from requests import request, Response
from yarl import URL

from contenthandler.services.api.authenticators.authenticator import Authenticator

logger = logging.getLogger(__name__)


class HttpService(ABC):
    """
    Base class for making blocking HTTP requests.

    Every request is bounded by the configured timeout and is attempted exactly once;
    transport errors from ``requests`` are propagated to the caller.
    """

    def __init__(
        self,
        timeout: int,
        authenticator: Authenticator | None = None,
        mtls_cert: str | None = None,
        mtls_key: str | None = None,
        verify_ca: str | bool = True,
    ) -> None:
        self.authenticator = authenticator
        self.__mtls_cert = mtls_cert
        self.__mtls_key = mtls_key
        self.__verify_ca = verify_ca
        self.__timeout = timeout

    def do_request(
        self,
        method: str,
        url: URL,
    ) -> Response:
        headers = self.make_headers()

        logger.info(f"Making HTTP {method} request to {url}")
        return request(
            method=method,
            url=str(url),
            headers=headers,
            timeout=self.__timeout,
            cert=(
                (self.__mtls_cert, self.__mtls_key)
                if self.__mtls_cert and self.__mtls_key
                else None
            ),
            verify=self.__verify_ca,
            auth=self.authenticator.get_auth() if self.authenticator else None,
        )

    def make_headers(self) -> Dict[str, Any]:
        headers: Dict[str, Any] = {}
        if self.authenticator:
            header = self.authenticator.get_authentication_header()
            if header:
                headers["Authorization"] = header

        return headers
