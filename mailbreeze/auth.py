from abc import ABC, abstractmethod

from httpx import Request
from pydantic import SecretStr


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies"""

    @abstractmethod
    def authenticate(self, request: Request):
        """Apply authentication to the request"""
        pass


class HeaderAuth(AuthStrategy):
    """Puts a secret into a request header, optionally behind a prefix"""
    header_name: str = "Authorization"
    header_prefix: str = None

    def __init__(self, secret, header_name: str = None, header_prefix: str = None):
        if header_name is not None:
            self.header_name = header_name
        if header_prefix is not None:
            self.header_prefix = header_prefix
        if not isinstance(secret, SecretStr):
            secret = SecretStr(secret or "")
        self.__secret = secret

    def __repr__(self):
        return f"{type(self).__name__}(header_name={self.header_name!r}, header_prefix={self.header_prefix!r})"

    def authenticate(self, request: Request):
        secret = self.__secret.get_secret_value()
        if not secret:
            return
        if self.header_prefix:
            request.headers[self.header_name] = f"{self.header_prefix} {secret}"
        else:
            request.headers[self.header_name] = secret


class BearerTokenAuth(HeaderAuth):
    """Bearer token authentication, as used by the MailBreeze API"""
    header_prefix = "Bearer"

    def __init__(self, token):
        super().__init__(secret=token)
