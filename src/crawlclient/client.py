"""Async client for the crawling service.

Usage:
    async with CrawlClient(api_key="fc-...") as client:
        doc = await client.scrape_url("https://example.com")
        result = await client.crawl_url("https://example.com", CrawlOptions(limit=10))
"""

import logging
from types import TracebackType
from typing import Optional

import httpx

from crawlclient.core.config import DEFAULT_TIMEOUT, DEFAULT_VERSION, ClientConfig
from crawlclient.core.errors import MissingJobIdError, OperationFailedError, ProtocolError
from crawlclient.core.models import (
    CrawlJob,
    CrawlOptions,
    CrawlStatus,
    Document,
    MapOptions,
    MapResult,
    ScrapeOptions,
    SearchOptions,
)
from crawlclient.engine.poller import MIN_POLL_INTERVAL, JobPoller
from crawlclient.engine.transport import SUBMIT_RETRY, Sleeper, Transport, decode_object
from crawlclient.schemas.factory import SchemaFactory

LOGGER = logging.getLogger(__name__)


class CrawlClient:
    """Client for the scrape, crawl, map and search endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        version: str = DEFAULT_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key; falls back to ``FIRECRAWL_API_KEY``.
            api_url: Base URL; falls back to ``FIRECRAWL_API_URL``.
            version: API version, "v1" or "v0".
            timeout: Per-request timeout in seconds.
            http_client: Shared client to use instead of creating one. It is
                not closed by :meth:`aclose`.
            sleep: Coroutine used for backoff and poll waits.

        Raises:
            ConfigurationError: If no API key is available or the version
                is unknown. No request is made in that case.
        """
        self._config = ClientConfig.resolve(api_key, api_url, version, timeout)
        self._schema = SchemaFactory.get_schema(self._config.version)
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)
        self._transport = Transport(self._http, sleep=sleep)
        self._poller = JobPoller(
            self._transport,
            self._schema,
            self._config.api_url,
            self._headers(),
            sleep=sleep,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "CrawlClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _headers(self, idempotency_key: Optional[str] = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        if idempotency_key is not None:
            headers["x-idempotency-key"] = idempotency_key
        return headers

    def _url(self, path: str) -> str:
        return f"{self._config.api_url}{path}"

    async def scrape_url(
        self, url: str, options: Optional[ScrapeOptions] = None
    ) -> Document:
        """Scrape a single page.

        Raises:
            OperationFailedError: If the service reports ``success: false``.
        """
        action = "scrape URL"
        body = await self._transport.request(
            "POST",
            self._url(self._schema.scrape_path()),
            headers=self._headers(),
            action=action,
            json=self._schema.scrape_body(url, options),
        )
        payload = decode_object(body, action)
        if not payload.get("success"):
            raise OperationFailedError("failed to scrape URL")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise ProtocolError("scrape response contained no document")
        return self._schema.parse_document(data)

    async def async_crawl_url(
        self,
        url: str,
        options: Optional[CrawlOptions] = None,
        idempotency_key: Optional[str] = None,
    ) -> CrawlJob:
        """Submit a crawl job without waiting for it.

        Args:
            url: Site to crawl.
            options: Optional crawl options.
            idempotency_key: Reusing a key for a different job raises a
                409 ApiError.

        Returns:
            Handle of the new job.

        Raises:
            MissingJobIdError: If the service accepted the job but sent no ID.
        """
        action = "start crawl job"
        body = await self._transport.request(
            "POST",
            self._url(self._schema.crawl_path()),
            headers=self._headers(idempotency_key),
            action=action,
            json=self._schema.crawl_body(url, options),
            retry=SUBMIT_RETRY,
        )
        job = self._schema.parse_crawl_job(decode_object(body, action))
        if not job.id:
            raise MissingJobIdError()

        LOGGER.info("started crawl job %s for %s", job.id, url)
        return job

    async def crawl_url(
        self,
        url: str,
        options: Optional[CrawlOptions] = None,
        idempotency_key: Optional[str] = None,
        poll_interval: float = MIN_POLL_INTERVAL,
        timeout: Optional[float] = None,
    ) -> CrawlStatus:
        """Crawl a site and wait for every result page.

        Args:
            url: Site to crawl.
            options: Optional crawl options.
            idempotency_key: Optional idempotency key for the submission.
            poll_interval: Seconds between status checks (minimum 2).
            timeout: Optional overall deadline in seconds for the wait.

        Returns:
            Final status with all crawled documents.
        """
        job = await self.async_crawl_url(url, options, idempotency_key)
        return await self._poller.wait(
            job.id, poll_interval=poll_interval, timeout=timeout
        )

    async def wait_for_crawl(
        self,
        job_id: str,
        status_url: Optional[str] = None,
        poll_interval: float = MIN_POLL_INTERVAL,
        timeout: Optional[float] = None,
    ) -> CrawlStatus:
        """Wait for an already submitted job to finish."""
        return await self._poller.wait(
            job_id, status_url=status_url, poll_interval=poll_interval, timeout=timeout
        )

    async def check_crawl_status(self, job_id: str) -> CrawlStatus:
        """Return the current status page of a job without waiting."""
        return await self._poller.fetch_status(
            self._url(self._schema.status_path(job_id))
        )

    async def cancel_crawl(self, job_id: str) -> str:
        """Cancel a job and return the status the service reports."""
        action = "cancel crawl job"
        body = await self._transport.request(
            "DELETE",
            self._url(self._schema.cancel_path(job_id)),
            headers=self._headers(),
            action=action,
        )
        status = self._schema.parse_cancel(decode_object(body, action))
        LOGGER.info("cancelled crawl job %s: %s", job_id, status)
        return status

    async def map_url(
        self, url: str, options: Optional[MapOptions] = None
    ) -> MapResult:
        """List the links of a site.

        Raises:
            UnsupportedOperationError: On API versions without map.
            OperationFailedError: If the service reports ``success: false``.
        """
        action = "map"
        request_body = self._schema.map_body(url, options)
        body = await self._transport.request(
            "POST",
            self._url(self._schema.map_path()),
            headers=self._headers(),
            action=action,
            json=request_body,
        )
        payload = decode_object(body, action)
        if not payload.get("success"):
            raise OperationFailedError(f"map operation failed: {payload.get('error') or ''}")
        return self._schema.parse_map(payload)

    async def search(
        self, query: str, options: Optional[SearchOptions] = None
    ) -> list[Document]:
        """Search the web and return the scraped results.

        Raises:
            UnsupportedOperationError: On API versions without search.
            OperationFailedError: If the service reports ``success: false``.
        """
        action = "search"
        request_body = self._schema.search_body(query, options)
        body = await self._transport.request(
            "POST",
            self._url(self._schema.search_path()),
            headers=self._headers(),
            action=action,
            json=request_body,
        )
        payload = decode_object(body, action)
        if not payload.get("success"):
            raise OperationFailedError(f"search failed: {payload.get('error') or ''}")
        return self._schema.parse_documents(payload.get("data")) or []
