"""Current (v1) API schema."""

from typing import Any, Optional

from crawlclient.core.interfaces import ApiSchema
from crawlclient.core.models import (
    CrawlJob,
    CrawlOptions,
    CrawlStatus,
    Document,
    DocumentMetadata,
    MapOptions,
    ScrapeOptions,
)


class V1Schema(ApiSchema):
    """Flat request bodies, paginated crawl status."""

    @property
    def version(self) -> str:
        return "v1"

    def scrape_body(
        self, url: str, options: Optional[ScrapeOptions]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"url": url}
        if options is not None:
            body.update(options.to_payload())
        return body

    def crawl_body(
        self, url: str, options: Optional[CrawlOptions]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"url": url}
        if options is not None:
            body.update(options.to_payload())
        return body

    def status_path(self, job_id: str) -> str:
        return f"/v1/crawl/{job_id}"

    def cancel_path(self, job_id: str) -> str:
        return f"/v1/crawl/{job_id}"

    def map_body(self, url: str, options: Optional[MapOptions]) -> dict[str, Any]:
        body: dict[str, Any] = {"url": url}
        if options is not None:
            body.update(options.to_payload())
        return body

    def parse_document(self, data: dict[str, Any]) -> Document:
        return Document(
            markdown=data.get("markdown"),
            html=data.get("html"),
            raw_html=data.get("rawHtml"),
            screenshot=data.get("screenshot"),
            links=tuple(data.get("links") or ()),
            metadata=DocumentMetadata.from_dict(data.get("metadata")),
        )

    def parse_crawl_job(self, data: dict[str, Any]) -> CrawlJob:
        return CrawlJob(id=data.get("id") or "", url=data.get("url") or None)

    def parse_status(self, data: dict[str, Any]) -> CrawlStatus:
        return CrawlStatus(
            status=data.get("status") or "",
            total=data.get("total") or 0,
            completed=data.get("completed") or 0,
            credits_used=data.get("creditsUsed") or 0,
            expires_at=data.get("expiresAt"),
            next=data.get("next") or None,
            data=self.parse_documents(data.get("data")),
        )
