"""Pytest configuration and fixtures."""

import asyncio

import pytest

from crawlclient.client import CrawlClient

API_URL = "https://api.test"


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def run(client, operation):
    """Run ``operation(client)`` in a fresh event loop and close the client."""

    async def _main():
        async with client:
            return await operation(client)

    return asyncio.run(_main())


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv("FIRECRAWL_API_KEY", raising=False)
    monkeypatch.delenv("FIRECRAWL_API_URL", raising=False)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def make_client(sleeps):
    """Build a client pointed at the mocked API."""

    def _make(version="v1"):
        return CrawlClient(
            api_key="test-key", api_url=API_URL, version=version, sleep=sleeps
        )

    return _make


def document(url, markdown="# page"):
    """A v1 document payload."""
    return {"markdown": markdown, "metadata": {"sourceURL": url, "statusCode": 200}}
