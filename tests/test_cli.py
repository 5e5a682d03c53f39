"""Tests for the CLI module."""

import json

import httpx
import respx
from typer.testing import CliRunner

from conftest import API_URL
from crawlclient import __version__
from crawlclient.cli import _split_csv, app

runner = CliRunner()


class TestSplitCsv:
    """Tests for option list parsing."""

    def test_none(self):
        assert _split_csv(None) is None
        assert _split_csv([]) is None

    def test_repeated_and_comma_separated(self):
        assert _split_csv(["markdown,html", " links "]) == ["markdown", "html", "links"]

    def test_drops_empty_items(self):
        assert _split_csv(["a,,b,"]) == ["a", "b"]


class TestCommands:
    """Tests for the typer commands."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_api_key(self):
        result = runner.invoke(app, ["scrape", "https://r.ai"])
        assert result.exit_code == 1
        assert "no API key provided" in " ".join(result.output.split())

    def test_scrape_json(self):
        with respx.mock(base_url=API_URL) as router:
            route = router.post("/v1/scrape").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "success": True,
                        "data": {"markdown": "# Hi", "metadata": {"title": "Hi"}},
                    },
                )
            )
            result = runner.invoke(
                app,
                [
                    "--api-key",
                    "test-key",
                    "--api-url",
                    API_URL,
                    "scrape",
                    "https://r.ai",
                    "-f",
                    "markdown",
                    "--json",
                ],
            )

        assert result.exit_code == 0, result.output
        assert json.loads(route.calls.last.request.content) == {
            "url": "https://r.ai",
            "formats": ["markdown"],
        }
        assert '"markdown": "# Hi"' in result.output

    def test_crawl_no_wait(self):
        with respx.mock(base_url=API_URL) as router:
            router.post("/v1/crawl").mock(
                return_value=httpx.Response(200, json={"success": True, "id": "job-9"})
            )
            result = runner.invoke(
                app,
                ["--api-key", "k", "--api-url", API_URL, "crawl", "https://r.ai", "--no-wait"],
            )

        assert result.exit_code == 0, result.output
        assert "job-9" in result.output

    def test_api_error_exits_nonzero(self):
        with respx.mock(base_url=API_URL) as router:
            router.delete("/v1/crawl/job-1").mock(
                return_value=httpx.Response(404, json={"error": "Job not found"})
            )
            result = runner.invoke(
                app, ["--api-key", "k", "--api-url", API_URL, "cancel", "job-1"]
            )

        assert result.exit_code == 1
        assert "Job not found" in " ".join(result.output.split())

    def test_search_json(self):
        with respx.mock(base_url=API_URL) as router:
            route = router.post("/v0/search").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "success": True,
                        "data": [{"content": "hit", "metadata": {"sourceURL": "https://a"}}],
                    },
                )
            )
            result = runner.invoke(
                app,
                [
                    "--api-key",
                    "k",
                    "--api-url",
                    API_URL,
                    "--api-version",
                    "v0",
                    "search",
                    "firecrawl",
                    "-m",
                    "3",
                    "--json",
                ],
            )

        assert result.exit_code == 0, result.output
        assert json.loads(route.calls.last.request.content) == {
            "query": "firecrawl",
            "searchOptions": {"limit": 3},
        }
        assert '"content": "hit"' in result.output

    def test_search_unsupported_in_v1(self):
        result = runner.invoke(
            app, ["--api-key", "k", "--api-url", API_URL, "search", "firecrawl"]
        )

        assert result.exit_code == 1
        assert "Search is not supported in v1" in " ".join(result.output.split())
