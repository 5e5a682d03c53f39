"""Data models for crawlclient."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional


def wire(name: str, default: Any = None) -> Any:
    """Declare an optional request field sent under ``name`` on the wire."""
    return field(default=default, metadata={"wire": name})


class JobStatus(Enum):
    """Known states of a crawl job."""

    QUEUED = "queued"
    WAITING = "waiting"
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    SCRAPING = "scraping"
    COMPLETED = "completed"


IN_PROGRESS_STATUSES = frozenset(
    {
        JobStatus.QUEUED.value,
        JobStatus.WAITING.value,
        JobStatus.PENDING.value,
        JobStatus.ACTIVE.value,
        JobStatus.PAUSED.value,
        JobStatus.SCRAPING.value,
    }
)


def is_in_progress(status: str) -> bool:
    """Return True if the raw status string means the job is still running."""
    return status in IN_PROGRESS_STATUSES


def is_completed(status: str) -> bool:
    return status == JobStatus.COMPLETED.value


@dataclass(frozen=True)
class RetryPolicy:
    """Per-call retry budget for the transient 502 response.

    ``backoff`` is the base delay in seconds; attempt ``i`` (0-based) waits
    ``backoff * 2 ** i`` before the next try.
    """

    attempts: int = 1
    backoff: float = 0.0


class RequestOptions:
    """Mixin turning an options dataclass into a request payload."""

    def to_payload(self) -> dict[str, Any]:
        """Build the wire payload, omitting every field left as None."""
        payload: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, RequestOptions):
                value = value.to_payload()
            payload[f.metadata.get("wire", f.name)] = value
        return payload


@dataclass
class ScrapeOptions(RequestOptions):
    """Options for scraping a single page."""

    formats: Optional[list[str]] = wire("formats")
    headers: Optional[dict[str, str]] = wire("headers")
    include_tags: Optional[list[str]] = wire("includeTags")
    exclude_tags: Optional[list[str]] = wire("excludeTags")
    only_main_content: Optional[bool] = wire("onlyMainContent")
    wait_for: Optional[int] = wire("waitFor")  # milliseconds
    parse_pdf: Optional[bool] = wire("parsePDF")
    timeout: Optional[int] = wire("timeout")  # milliseconds
    mobile: Optional[bool] = wire("mobile")
    skip_tls_verification: Optional[bool] = wire("skipTlsVerification")
    remove_base64_images: Optional[bool] = wire("removeBase64Images")


@dataclass
class CrawlOptions(RequestOptions):
    """Options for a crawl job."""

    scrape_options: Optional[ScrapeOptions] = wire("scrapeOptions")
    webhook: Optional[str] = wire("webhook")
    limit: Optional[int] = wire("limit")
    include_paths: Optional[list[str]] = wire("includePaths")
    exclude_paths: Optional[list[str]] = wire("excludePaths")
    max_depth: Optional[int] = wire("maxDepth")
    allow_backward_links: Optional[bool] = wire("allowBackwardLinks")
    allow_external_links: Optional[bool] = wire("allowExternalLinks")
    ignore_sitemap: Optional[bool] = wire("ignoreSitemap")
    deduplicate_similar_urls: Optional[bool] = wire("deduplicateSimilarURLs")
    ignore_query_parameters: Optional[bool] = wire("ignoreQueryParameters")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        # An empty scrapeOptions object would override server defaults
        if payload.get("scrapeOptions") == {}:
            del payload["scrapeOptions"]
        return payload


@dataclass
class MapOptions(RequestOptions):
    """Options for mapping a site's links."""

    search: Optional[str] = wire("search")
    include_subdomains: Optional[bool] = wire("includeSubdomains")
    ignore_sitemap: Optional[bool] = wire("ignoreSitemap")
    sitemap_only: Optional[bool] = wire("sitemapOnly")
    limit: Optional[int] = wire("limit")
    timeout: Optional[int] = wire("timeout")


@dataclass
class SearchOptions:
    """Options for a search query."""

    limit: Optional[int] = None
    lang: Optional[str] = None
    country: Optional[str] = None
    scrape_options: Optional[ScrapeOptions] = None


@dataclass(frozen=True)
class DocumentMetadata:
    """Descriptive metadata attached to a scraped page."""

    title: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    keywords: Optional[str] = None
    robots: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_url: Optional[str] = None
    og_image: Optional[str] = None
    og_site_name: Optional[str] = None
    source_url: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = {
        "title": "title",
        "description": "description",
        "language": "language",
        "keywords": "keywords",
        "robots": "robots",
        "ogTitle": "og_title",
        "ogDescription": "og_description",
        "ogUrl": "og_url",
        "ogImage": "og_image",
        "ogSiteName": "og_site_name",
        "sourceURL": "source_url",
        "statusCode": "status_code",
        "error": "error",
    }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "DocumentMetadata":
        """Create from a decoded ``metadata`` object."""
        if not data:
            return cls()
        known = {cls._KEYS[k]: v for k, v in data.items() if k in cls._KEYS}
        extra = {k: v for k, v in data.items() if k not in cls._KEYS}
        return cls(**known, extra=extra)


@dataclass(frozen=True)
class Document:
    """A scraped or crawled page in the formats that were requested."""

    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    screenshot: Optional[str] = None
    links: tuple[str, ...] = ()
    content: Optional[str] = None
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    @property
    def url(self) -> Optional[str]:
        return self.metadata.source_url


@dataclass(frozen=True)
class CrawlJob:
    """Handle of a submitted crawl job."""

    id: str
    url: Optional[str] = None  # direct status location, when provided


@dataclass
class CrawlStatus:
    """One page of a crawl job's status.

    ``data`` is None when the response carried no ``data`` field at all,
    which is distinct from an empty page.
    """

    status: str
    total: int = 0
    completed: int = 0
    credits_used: int = 0
    expires_at: Optional[str] = None
    next: Optional[str] = None
    data: Optional[list[Document]] = None

    @property
    def has_status(self) -> bool:
        return bool(self.status)

    @property
    def has_data(self) -> bool:
        return self.data is not None or self.has_continuation

    @property
    def has_continuation(self) -> bool:
        return bool(self.next)


@dataclass(frozen=True)
class MapResult:
    """Links discovered by a map operation."""

    links: tuple[str, ...] = ()
