"""
crawlclient - Async client for a hosted scraping and crawling API.

Scrape single pages, crawl whole sites and map their links through the
service's HTTP API, with typed results and managed crawl job polling.

Usage:
    async with CrawlClient() as client:
        doc = await client.scrape_url("https://example.com")
"""

import logging

__version__ = "0.1.0"

from crawlclient.client import CrawlClient
from crawlclient.core.errors import (
    ApiError,
    ConfigurationError,
    CrawlClientError,
    JobFailedError,
    JobTimeoutError,
    OperationFailedError,
    ProtocolError,
    TransportError,
    UnsupportedOperationError,
)
from crawlclient.core.models import (
    CrawlJob,
    CrawlOptions,
    CrawlStatus,
    Document,
    DocumentMetadata,
    JobStatus,
    MapOptions,
    MapResult,
    RetryPolicy,
    ScrapeOptions,
    SearchOptions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "CrawlClient",
    # Models
    "CrawlJob",
    "CrawlOptions",
    "CrawlStatus",
    "Document",
    "DocumentMetadata",
    "JobStatus",
    "MapOptions",
    "MapResult",
    "RetryPolicy",
    "ScrapeOptions",
    "SearchOptions",
    # Errors
    "ApiError",
    "ConfigurationError",
    "CrawlClientError",
    "JobFailedError",
    "JobTimeoutError",
    "OperationFailedError",
    "ProtocolError",
    "TransportError",
    "UnsupportedOperationError",
]
