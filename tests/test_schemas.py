"""Tests for the schema variants and their factory."""

import httpx
import pytest
import respx

from conftest import API_URL, run
from crawlclient.core.errors import ConfigurationError
from crawlclient.core.models import CrawlOptions, ScrapeOptions
from crawlclient.schemas.factory import SchemaFactory
from crawlclient.schemas.v0 import V0Schema
from crawlclient.schemas.v1 import V1Schema


class TestSchemaFactory:
    """Tests for the SchemaFactory."""

    def test_get_schema_v1(self):
        schema = SchemaFactory.get_schema("v1")
        assert isinstance(schema, V1Schema)
        assert schema.version == "v1"

    def test_get_schema_case_insensitive(self):
        assert isinstance(SchemaFactory.get_schema("V0"), V0Schema)

    def test_unknown_version(self):
        with pytest.raises(ConfigurationError, match="expected one of: v0, v1"):
            SchemaFactory.get_schema("v2")

    def test_list_versions(self):
        versions = SchemaFactory.list_versions()
        assert "v0" in versions
        assert "v1" in versions

    def test_register_schema(self, monkeypatch):
        """Test that a registered version resolves like the built-in ones."""
        monkeypatch.setattr(SchemaFactory, "_SCHEMAS", dict(SchemaFactory._SCHEMAS))

        class V2Schema(V1Schema):
            version = "v2"

        SchemaFactory.register_schema("V2", V2Schema)

        assert isinstance(SchemaFactory.get_schema("v2"), V2Schema)
        assert "v2" in SchemaFactory.list_versions()

    def test_registry_starts_with_known_versions(self):
        assert sorted(SchemaFactory.list_versions()) == ["v0", "v1"]


class TestV1Schema:
    """Tests for the v1 schema."""

    def test_paths(self):
        schema = V1Schema()
        assert schema.scrape_path() == "/v1/scrape"
        assert schema.crawl_path() == "/v1/crawl"
        assert schema.status_path("abc") == "/v1/crawl/abc"
        assert schema.cancel_path("abc") == "/v1/crawl/abc"
        assert schema.map_path() == "/v1/map"

    def test_crawl_body(self):
        body = V1Schema().crawl_body(
            "https://r.ai",
            CrawlOptions(
                scrape_options=ScrapeOptions(formats=["markdown"]),
                allow_external_links=True,
                webhook="https://hook.test",
            ),
        )
        assert body == {
            "url": "https://r.ai",
            "scrapeOptions": {"formats": ["markdown"]},
            "allowExternalLinks": True,
            "webhook": "https://hook.test",
        }

    def test_parse_status_without_data(self):
        page = V1Schema().parse_status({"status": "completed", "total": 3})
        assert page.data is None
        assert page.total == 3
        assert page.next is None


class TestV0Schema:
    """Tests for the legacy v0 schema."""

    def test_paths(self):
        schema = V0Schema()
        assert schema.status_path("abc") == "/v0/crawl/status/abc"
        assert schema.cancel_path("abc") == "/v0/crawl/cancel/abc"
        assert schema.search_path() == "/v0/search"

    def test_scrape_body_nests_page_options(self):
        body = V0Schema().scrape_body(
            "https://r.ai",
            ScrapeOptions(
                formats=["markdown", "html"],
                include_tags=["h1"],
                exclude_tags=["nav"],
                only_main_content=True,
                timeout=30000,
            ),
        )
        assert body == {
            "url": "https://r.ai",
            "pageOptions": {
                "onlyIncludeTags": ["h1"],
                "removeTags": ["nav"],
                "onlyMainContent": True,
                "includeHtml": True,
                "includeRawHtml": False,
                "screenshot": False,
            },
            "timeout": 30000,
        }

    def test_scrape_body_without_options(self):
        assert V0Schema().scrape_body("https://r.ai", None) == {"url": "https://r.ai"}

    def test_crawl_body_nests_crawler_options(self):
        body = V0Schema().crawl_body(
            "https://r.ai",
            CrawlOptions(
                include_paths=["/blog"],
                exclude_paths=["/tag"],
                limit=5,
                allow_backward_links=False,
            ),
        )
        assert body == {
            "url": "https://r.ai",
            "crawlerOptions": {
                "includes": ["/blog"],
                "excludes": ["/tag"],
                "limit": 5,
                "allowBackwardCrawling": False,
            },
        }

    def test_parse_document(self):
        doc = V0Schema().parse_document(
            {
                "content": "plain",
                "markdown": "# md",
                "linksOnPage": ["https://a"],
                "metadata": {"sourceURL": "https://r.ai"},
            }
        )
        assert doc.content == "plain"
        assert doc.links == ("https://a",)
        assert doc.url == "https://r.ai"

    def test_parse_status_never_paginates(self):
        page = V0Schema().parse_status(
            {"status": "active", "current": 2, "total": 5, "next": "ignored"}
        )
        assert page.completed == 2
        assert page.total == 5
        assert not page.has_continuation


class TestV0Crawl:
    """End to end crawl against the v0 endpoints."""

    def test_crawl_url(self, make_client, sleeps):
        with respx.mock(base_url=API_URL) as router:
            router.post("/v0/crawl").mock(
                return_value=httpx.Response(200, json={"jobId": "old-1"})
            )
            router.get("/v0/crawl/status/old-1").mock(
                side_effect=[
                    httpx.Response(200, json={"status": "active", "current": 0}),
                    httpx.Response(
                        200,
                        json={
                            "status": "completed",
                            "current": 1,
                            "total": 1,
                            "data": [{"content": "hello", "metadata": {}}],
                        },
                    ),
                ]
            )
            result = run(make_client("v0"), lambda c: c.crawl_url("https://r.ai"))

        assert [d.content for d in result.data] == ["hello"]
        assert sleeps.calls == [2]

    def test_cancel(self, make_client):
        with respx.mock(base_url=API_URL) as router:
            router.delete("/v0/crawl/cancel/old-1").mock(
                return_value=httpx.Response(200, json={"status": "cancelled"})
            )
            status = run(make_client("v0"), lambda c: c.cancel_crawl("old-1"))

        assert status == "cancelled"
