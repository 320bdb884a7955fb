import os
from datetime import timedelta
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .version import __version__

DEFAULT_BASE_URL = "https://api.mailbreeze.com/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_BASE = 0.5
DEFAULT_BACKOFF_MAX = 30.0
DEFAULT_BACKOFF_JITTER = 0.25

ENV_API_KEY = "MAILBREEZE_API_KEY"
ENV_BASE_URL = "MAILBREEZE_BASE_URL"


class ClientConfig(BaseModel):
    """Configuration model for the MailBreeze client. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)  # Per attempt, in seconds
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    backoff_base: float = Field(default=DEFAULT_BACKOFF_BASE, ge=0)
    backoff_max: float = Field(default=DEFAULT_BACKOFF_MAX, ge=0)
    backoff_jitter: float = Field(default=DEFAULT_BACKOFF_JITTER, ge=0, le=1)
    requests_per_second: Optional[float] = Field(default=None, gt=0)
    verify_ssl: bool = True
    user_agent: str = f"mailbreeze-python/{__version__}"
    verbose: bool = False
    httpx_kwargs: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout", mode="before")
    @classmethod
    def _timedelta_to_seconds(cls, value):
        if isinstance(value, timedelta):
            return value.total_seconds()
        return value

    @property
    def client_params(self) -> Dict[str, Any]:
        """Keyword arguments for the underlying httpx.AsyncClient"""
        client_params = {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "verify": self.verify_ssl,
            "headers": {"Accept": "application/json", "User-Agent": self.user_agent},
        }
        client_params.update(self.httpx_kwargs)
        return client_params

    @classmethod
    def builder(cls, api_key: str) -> "ClientConfigBuilder":
        return ClientConfigBuilder(api_key)

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a configuration from MAILBREEZE_* environment variables"""
        api_key = overrides.pop("api_key", None) or os.getenv(ENV_API_KEY)
        if not api_key:
            raise ValueError(f"Environment variable {ENV_API_KEY} must be set")
        base_url = os.getenv(ENV_BASE_URL)
        if base_url and "base_url" not in overrides:
            overrides["base_url"] = base_url
        return cls(api_key=api_key, **overrides)


class ClientConfigBuilder:
    """Fluent construction of a ClientConfig"""

    def __init__(self, api_key: str):
        self._values: Dict[str, Any] = {"api_key": api_key}

    def __repr__(self):
        shown = {k: v for k, v in self._values.items() if k != "api_key"}
        return f"{type(self).__name__}({shown})"

    def base_url(self, url: str):
        self._values["base_url"] = url
        return self

    def timeout(self, timeout: Union[float, timedelta]):
        self._values["timeout"] = timeout
        return self

    def max_retries(self, retries: int):
        self._values["max_retries"] = retries
        return self

    def backoff(self, base: float = None, maximum: float = None, jitter: float = None):
        if base is not None:
            self._values["backoff_base"] = base
        if maximum is not None:
            self._values["backoff_max"] = maximum
        if jitter is not None:
            self._values["backoff_jitter"] = jitter
        return self

    def requests_per_second(self, rate: float):
        self._values["requests_per_second"] = rate
        return self

    def verify_ssl(self, verify: bool):
        self._values["verify_ssl"] = verify
        return self

    def verbose(self, verbose: bool = True):
        self._values["verbose"] = verbose
        return self

    def httpx_kwargs(self, **kwargs):
        self._values.setdefault("httpx_kwargs", {}).update(kwargs)
        return self

    def build_config(self) -> ClientConfig:
        return ClientConfig(**self._values)

    def build(self):
        return self.build_config()
