from typing import Any, Optional, Type

from .config import ClientConfig, ClientConfigBuilder
from .executor import RequestExecutor
from .logging_config import configure_structlog
from .resources import Attachments, Contacts, Emails, Lists, Verification

import logging
import structlog

# Configure structlog
configure_structlog()
_logger = logging.getLogger(__name__)
log = structlog.wrap_logger(_logger)


class MailBreeze:
    """
    Async client for the MailBreeze API.

        async with MailBreeze("your_api_key") as client:
            result = await client.emails.send(from_="me@example.com", to=["you@example.com"], subject="Hi", html="<p>Hi</p>")
            contacts = client.contacts("list_123")
            page = await contacts.list()

    Failures raise MailBreezeError; branch on ``error.kind``.
    """
    emails: Emails
    lists: Lists
    verification: Verification
    attachments: Attachments

    def __init__(self,
                 api_key: Optional[str] = None,
                 *,  # Force key-value pairs for the rest
                 config: Optional[ClientConfig] = None,
                 executor: Optional[RequestExecutor] = None,
                 **config_kwargs,
                 ):
        if executor is not None:
            if config is not None:
                raise TypeError("Pass either a config or an executor, not both")
            config = executor.config
        if config is None:
            if api_key is None:
                raise ValueError("Either api_key or config is required")
            config = ClientConfig(api_key=api_key, **config_kwargs)
        elif api_key is not None or config_kwargs:
            raise TypeError("Pass either a config or api_key/settings, not both")
        self.config = config
        self._executor = executor or RequestExecutor(config)
        self.emails = Emails(self._executor)
        self.lists = Lists(self._executor)
        self.verification = Verification(self._executor)
        self.attachments = Attachments(self._executor)
        log.debug("Client initialized", base_url=config.base_url, max_retries=config.max_retries)

    def __repr__(self):
        return f"{type(self).__name__}(config={self.config!r})"

    async def __aenter__(self) -> 'MailBreeze':
        return self

    async def __aexit__(self, exc_type: Optional[Type[BaseException]], exc_value: Optional[BaseException], traceback: Optional[Any]):
        await self.aclose()

    async def aclose(self):
        await self._executor.aclose()

    def contacts(self, list_id: str) -> Contacts:
        """Contacts resource for one mailing list; every contact operation is scoped to a list"""
        return self.lists.contacts(list_id)

    @classmethod
    def builder(cls, api_key: str) -> 'MailBreezeBuilder':
        return MailBreezeBuilder(api_key)

    @classmethod
    def from_env(cls, **config_kwargs) -> 'MailBreeze':
        """Create a client from MAILBREEZE_API_KEY (and optionally MAILBREEZE_BASE_URL)"""
        return cls(config=ClientConfig.from_env(**config_kwargs))


class MailBreezeBuilder(ClientConfigBuilder):
    """Fluent construction of a MailBreeze client"""

    def build(self) -> MailBreeze:
        return MailBreeze(config=self.build_config())
