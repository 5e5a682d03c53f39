"""Core models, errors and interfaces for crawlclient."""

from crawlclient.core.config import ClientConfig
from crawlclient.core.interfaces import ApiSchema
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

__all__ = [
    "ApiSchema",
    "ClientConfig",
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
]
