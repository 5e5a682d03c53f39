"""Abstract interfaces for crawlclient."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from crawlclient.core.errors import UnsupportedOperationError
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


class ApiSchema(ABC):
    """One version of the service's request/response schema.

    A schema knows the endpoint paths of its version, how to shape request
    bodies and how to turn decoded JSON into typed results. The engine only
    ever sees the normalized models, never the raw payloads.
    """

    @property
    @abstractmethod
    def version(self) -> str:
        """Return the version tag used in endpoint paths."""
        ...

    @abstractmethod
    def scrape_body(
        self, url: str, options: Optional[ScrapeOptions]
    ) -> dict[str, Any]:
        """Build the request body for a scrape.

        Args:
            url: Page to scrape.
            options: Optional scrape options.

        Returns:
            JSON-serializable body.
        """
        ...

    @abstractmethod
    def crawl_body(
        self, url: str, options: Optional[CrawlOptions]
    ) -> dict[str, Any]:
        """Build the request body for a crawl submission."""
        ...

    @abstractmethod
    def status_path(self, job_id: str) -> str:
        """Return the path of a job's status endpoint."""
        ...

    @abstractmethod
    def cancel_path(self, job_id: str) -> str:
        """Return the path of a job's cancel endpoint."""
        ...

    @abstractmethod
    def parse_document(self, data: dict[str, Any]) -> Document:
        """Create a Document from one decoded document object."""
        ...

    @abstractmethod
    def parse_crawl_job(self, data: dict[str, Any]) -> CrawlJob:
        """Create a CrawlJob from a submission response.

        An empty ``id`` is returned as-is; the caller decides it is an error.
        """
        ...

    @abstractmethod
    def parse_status(self, data: dict[str, Any]) -> CrawlStatus:
        """Create a CrawlStatus from a status response."""
        ...

    def scrape_path(self) -> str:
        return f"/{self.version}/scrape"

    def crawl_path(self) -> str:
        return f"/{self.version}/crawl"

    def map_path(self) -> str:
        return f"/{self.version}/map"

    def search_path(self) -> str:
        return f"/{self.version}/search"

    def map_body(self, url: str, options: Optional[MapOptions]) -> dict[str, Any]:
        """Build the request body for a map.

        Raises:
            UnsupportedOperationError: If this version has no map endpoint.
        """
        raise UnsupportedOperationError(
            f"Map is not supported in {self.version}"
        )

    def search_body(
        self, query: str, options: Optional[SearchOptions]
    ) -> dict[str, Any]:
        """Build the request body for a search.

        Raises:
            UnsupportedOperationError: If this version has no search endpoint.
        """
        raise UnsupportedOperationError(
            f"Search is not supported in {self.version}"
        )

    def parse_map(self, data: dict[str, Any]) -> MapResult:
        return MapResult(links=tuple(data.get("links") or ()))

    def parse_cancel(self, data: dict[str, Any]) -> str:
        """Return the job status reported after cancellation."""
        return data.get("status") or ""

    def parse_documents(self, items: Optional[list[Any]]) -> Optional[list[Document]]:
        """Decode a ``data`` array; None stays None."""
        if items is None:
            return None
        return [self.parse_document(item) for item in items if isinstance(item, dict)]
