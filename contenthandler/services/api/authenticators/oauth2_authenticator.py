import logging
import threading
import time
from typing import Any

import requests
from requests.exceptions import RequestException

from contenthandler.services.api.authenticators.authenticator import Authenticator

logger = logging.getLogger(__name__)

# Refresh tokens this many seconds before they actually expire
EXPIRY_MARGIN = 60.0


class OAuth2Authenticator(Authenticator):
    """
    Authenticator for document repositories protected with the OAuth2 client
    credentials flow. Tokens are cached until shortly before they expire and are
    shared between threads.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: str | None = None,
        timeout: int = 10,
    ) -> None:
        self.__token_url = token_url
        self.__client_id = client_id
        self.__client_secret = client_secret
        self.__scope = scope
        self.__timeout = timeout
        self.__lock = threading.Lock()
        self.token: str | None = None
        self.expiry = 0.0

    def get_auth(self) -> Any:
        """
        The bearer token is sent as a header, there is no auth object.
        """
        return None

    def get_authentication_header(self) -> str:
        with self.__lock:
            if self.token is None or time.time() >= self.expiry:
                token_data = self.__get_token()
                self.token = str(token_data["access_token"])
                self.expiry = time.time() + float(token_data.get("expires_in", 0)) - EXPIRY_MARGIN
            return f"Bearer {self.token}"

    def __get_token(self) -> dict[str, Any]:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.__client_id,
            "client_secret": self.__client_secret,
        }
        if self.__scope:
            data["scope"] = self.__scope

        try:
            response = requests.post(self.__token_url, data=data, timeout=self.__timeout)
        except RequestException as e:
            logger.error(f"Failed to connect to token endpoint {self.__token_url}: {e}")
            raise ConnectionError(f"Failed to connect to token endpoint: {e}")

        if response.status_code >= 400:
            try:
                error_details = response.json()
            except requests.JSONDecodeError:
                error_details = response.text
            raise ValueError(
                f"Authentication failed with status {response.status_code}: {error_details}"
            )

        try:
            return response.json()  # type: ignore
        except requests.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON response from token endpoint: {e}")
