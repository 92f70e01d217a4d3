from abc import ABC, abstractmethod
from typing import Any


class Authenticator(ABC):
    """
    Abstract base class for authenticating against remote document repositories.

    Payloads that reference a URL are fetched from repositories that may require
    credentials. Concrete implementations return either a header value or an
    auth object understood by ``requests``.
    """

    @abstractmethod
    def get_authentication_header(self) -> str:
        """
        Returns the value for the HTTP ``Authorization`` header, e.g. ``"Bearer <token>"``,
        or an empty string when no header should be sent.
        """
        ...

    @abstractmethod
    def get_auth(self) -> Any:
        """
        Returns authentication data in the format expected by the ``auth`` parameter
        of ``requests``, or None.
        """
        ...
