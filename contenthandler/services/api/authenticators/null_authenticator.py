from typing import Any
from contenthandler.services.api.authenticators.authenticator import Authenticator


class NullAuthenticator(Authenticator):
    """
    Performs no authentication. Used when payload authentication is turned off.
    """
    def get_authentication_header(self) -> str:
        return ""

    def get_auth(self) -> Any:
        return None
