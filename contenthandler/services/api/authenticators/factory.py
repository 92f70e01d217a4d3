from contenthandler.config import Config
from contenthandler.services.api.authenticators.authenticator import Authenticator
from contenthandler.services.api.authenticators.null_authenticator import NullAuthenticator
from contenthandler.services.api.authenticators.oauth2_authenticator import (
    OAuth2Authenticator,
)


class AuthenticatorFactory:
    def __init__(self, config: Config) -> None:
        self.__config = config

    def create_authenticator(self) -> Authenticator:
        auth_type = self.__config.payload.authentication

        match auth_type:
            case "off":
                return NullAuthenticator()
            case "oauth2":
                if self.__config.oauth2 is None:
                    raise ValueError(
                        "oauth2 cannot be None when payload authentication is set to 'oauth2', please fix in app.conf"
                    )

                return OAuth2Authenticator(
                    token_url=self.__config.oauth2.token_url,
                    client_id=self.__config.oauth2.client_id,
                    client_secret=self.__config.oauth2.client_secret,
                    scope=self.__config.oauth2.scope,
                    timeout=self.__config.payload.timeout,
                )
            case _:
                raise ValueError(
                    "incorrect value for authenticator, supported types are 'oauth2' or 'off'. Please fix in app.conf"
                )
