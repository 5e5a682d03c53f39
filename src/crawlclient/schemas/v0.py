"""Legacy (v0) API schema.

v0 nests page-level settings under ``pageOptions`` and crawl settings under
``crawlerOptions``, returns ``jobId`` instead of ``id`` and never paginates
crawl results. It has a search endpoint but no map endpoint.
"""

from typing import Any, Optional

from crawlclient.core.interfaces import ApiSchema
from crawlclient.core.models import (
    CrawlJob,
    CrawlOptions,
    CrawlStatus,
    Document,
    DocumentMetadata,
    ScrapeOptions,
    SearchOptions,
)


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _page_options(options: Optional[ScrapeOptions]) -> dict[str, Any]:
    if options is None:
        return {}

    formats = options.formats
    return _drop_none(
        {
            "headers": options.headers,
            "onlyIncludeTags": options.include_tags,
            "removeTags": options.exclude_tags,
            "onlyMainContent": options.only_main_content,
            "waitFor": options.wait_for,
            "parsePDF": options.parse_pdf,
            "includeHtml": "html" in formats if formats is not None else None,
            "includeRawHtml": "rawHtml" in formats if formats is not None else None,
            "screenshot": "screenshot" in formats if formats is not None else None,
        }
    )


class V0Schema(ApiSchema):
    """Nested request bodies, single-page crawl status."""

    @property
    def version(self) -> str:
        return "v0"

    def scrape_body(
        self, url: str, options: Optional[ScrapeOptions]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"url": url}
        page_options = _page_options(options)
        if page_options:
            body["pageOptions"] = page_options
        if options is not None and options.timeout is not None:
            body["timeout"] = options.timeout
        return body

    def crawl_body(
        self, url: str, options: Optional[CrawlOptions]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"url": url}
        if options is None:
            return body

        crawler_options = _drop_none(
            {
                "includes": options.include_paths,
                "excludes": options.exclude_paths,
                "maxDepth": options.max_depth,
                "limit": options.limit,
                "allowBackwardCrawling": options.allow_backward_links,
                "allowExternalContentLinks": options.allow_external_links,
                "ignoreSitemap": options.ignore_sitemap,
            }
        )
        if crawler_options:
            body["crawlerOptions"] = crawler_options

        page_options = _page_options(options.scrape_options)
        if page_options:
            body["pageOptions"] = page_options

        if options.webhook is not None:
            body["webhook"] = options.webhook
        return body

    def search_body(
        self, query: str, options: Optional[SearchOptions]
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"query": query}
        if options is None:
            return body

        search_options = _drop_none(
            {"limit": options.limit, "lang": options.lang, "country": options.country}
        )
        if search_options:
            body["searchOptions"] = search_options

        page_options = _page_options(options.scrape_options)
        if page_options:
            body["pageOptions"] = page_options
        return body

    def status_path(self, job_id: str) -> str:
        return f"/v0/crawl/status/{job_id}"

    def cancel_path(self, job_id: str) -> str:
        return f"/v0/crawl/cancel/{job_id}"

    def parse_document(self, data: dict[str, Any]) -> Document:
        return Document(
            markdown=data.get("markdown"),
            html=data.get("html"),
            raw_html=data.get("rawHtml"),
            screenshot=data.get("screenshot"),
            links=tuple(data.get("linksOnPage") or ()),
            content=data.get("content"),
            metadata=DocumentMetadata.from_dict(data.get("metadata")),
        )

    def parse_crawl_job(self, data: dict[str, Any]) -> CrawlJob:
        return CrawlJob(id=data.get("jobId") or "")

    def parse_status(self, data: dict[str, Any]) -> CrawlStatus:
        return CrawlStatus(
            status=data.get("status") or "",
            total=data.get("total") or 0,
            completed=data.get("current") or 0,
            data=self.parse_documents(data.get("data")),
        )
