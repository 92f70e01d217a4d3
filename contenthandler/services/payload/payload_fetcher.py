import logging

from requests.exceptions import InvalidSchema, InvalidURL, MissingSchema, RequestException
from yarl import URL

from contenthandler.exceptions import (
    InvalidPayloadReferenceException,
    PayloadUnavailableException,
)
from contenthandler.services.api.api_service import HttpService
from contenthandler.services.api.authenticators.authenticator import Authenticator
from contenthandler.stats import get_stats

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


class PayloadFetcher(HttpService):
    """
    Retrieves the document a URL payload refers to with a single blocking GET.
    """

    def __init__(
        self,
        timeout: int,
        auth: Authenticator | None = None,
        mtls_cert: str | None = None,
        mtls_key: str | None = None,
        verify_ca: str | bool = True,
    ) -> None:
        super().__init__(
            timeout=timeout,
            authenticator=auth,
            mtls_cert=mtls_cert,
            mtls_key=mtls_key,
            verify_ca=verify_ca,
        )

    def fetch(self, url: str) -> bytes:
        target = parse_payload_url(url)

        try:
            with get_stats().timer("payload.fetch"):
                response = self.do_request("GET", target)
        except (InvalidURL, InvalidSchema, MissingSchema) as e:
            raise InvalidPayloadReferenceException(f"Invalid payload URL '{url}': {e}") from e
        except RequestException as e:
            logger.error(f"Failed to fetch payload from {target}: {e}")
            get_stats().inc("payload.fetch.failed")
            raise PayloadUnavailableException(f"Failed to fetch payload from {target}") from e
        except (ConnectionError, ValueError) as e:
            # raised by authenticators while obtaining credentials
            logger.error(f"Failed to authenticate for payload at {target}: {e}")
            get_stats().inc("payload.fetch.failed")
            raise PayloadUnavailableException(
                f"Failed to authenticate for payload at {target}"
            ) from e

        if response.status_code >= 400:
            logger.error(
                f"Failed to fetch payload from {target}, server responded with {response.status_code}"
            )
            get_stats().inc("payload.fetch.failed")
            raise PayloadUnavailableException(
                f"Failed to fetch payload from {target}: HTTP {response.status_code}"
            )

        return response.content


def parse_payload_url(url: str) -> URL:
    try:
        target = URL(url)
    except (TypeError, ValueError) as e:
        raise InvalidPayloadReferenceException(f"Malformed payload URL '{url}'") from e

    if not target.is_absolute() or target.scheme not in SUPPORTED_SCHEMES or not target.host:
        raise InvalidPayloadReferenceException(
            f"Payload URL '{url}' must be an absolute http(s) URL"
        )

    return target
