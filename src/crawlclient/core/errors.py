"""Exception hierarchy for crawlclient.

Every failure raised by the client derives from :class:`CrawlClientError`,
so callers can catch one type or pick out the specific condition.
"""

from typing import Optional


class CrawlClientError(Exception):
    """Base class for all client errors."""


class ConfigurationError(CrawlClientError):
    """The client could not be configured (e.g. missing API key)."""


class TransportError(CrawlClientError):
    """A connection-level failure; never retried."""


class ApiError(CrawlClientError):
    """The service answered with a non-success HTTP status."""

    def __init__(
        self, message: str, status_code: int, action: str, detail: str
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.action = action
        self.detail = detail


class ProtocolError(CrawlClientError):
    """A response was malformed or missing a required field."""


class ErrorResponseParseError(ProtocolError):
    """An error response body was not valid JSON."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingJobIdError(ProtocolError):
    """A crawl submission succeeded but returned no job ID."""

    def __init__(self) -> None:
        super().__init__("failed to get job ID")


class InvalidStatusError(ProtocolError):
    """A status response carried no status value."""

    def __init__(self) -> None:
        super().__init__("invalid status in response")


class JobFailedError(CrawlClientError):
    """A crawl job ended without usable results."""

    def __init__(self, message: str, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status


class JobTimeoutError(CrawlClientError):
    """A crawl job did not finish before the caller's deadline."""


class OperationFailedError(CrawlClientError):
    """The service reported ``success: false`` for a request."""


class UnsupportedOperationError(CrawlClientError):
    """The selected API version does not offer this operation."""
