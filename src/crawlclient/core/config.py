"""Client configuration resolved from arguments and the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from crawlclient.core.errors import ConfigurationError

DEFAULT_API_URL = "https://api.firecrawl.dev"
DEFAULT_VERSION = "v1"
DEFAULT_TIMEOUT = 60.0

API_KEY_ENV = "FIRECRAWL_API_KEY"
API_URL_ENV = "FIRECRAWL_API_URL"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every call a client makes."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    version: str = DEFAULT_VERSION
    timeout: float = DEFAULT_TIMEOUT  # per request, seconds

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        version: str = DEFAULT_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "ClientConfig":
        """Fill in missing values from the environment.

        Args:
            api_key: API key. Falls back to ``FIRECRAWL_API_KEY``.
            api_url: Base URL. Falls back to ``FIRECRAWL_API_URL``, then
                the public endpoint.
            version: API version tag, e.g. ``"v1"``.
            timeout: Per-request timeout in seconds.

        Raises:
            ConfigurationError: If no API key can be found.
        """
        api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not api_key:
            raise ConfigurationError("no API key provided")

        api_url = api_url or os.environ.get(API_URL_ENV, "") or DEFAULT_API_URL

        return cls(
            api_key=api_key,
            api_url=api_url.rstrip("/"),
            version=version,
            timeout=timeout,
        )
