"""Crawl job lifecycle: poll until done, then collect every result page."""

import asyncio
import dataclasses
import logging
import time
from typing import Callable, Optional

from crawlclient.core.errors import (
    InvalidStatusError,
    JobFailedError,
    JobTimeoutError,
    ProtocolError,
)
from crawlclient.core.interfaces import ApiSchema
from crawlclient.core.models import CrawlStatus, is_completed, is_in_progress
from crawlclient.engine.transport import (
    SUBMIT_RETRY,
    Sleeper,
    Transport,
    decode_object,
)

LOGGER = logging.getLogger(__name__)

MIN_POLL_INTERVAL = 2.0
# Completed-without-data responses tolerated before giving up
MAX_EMPTY_COMPLETIONS = 3

STATUS_ACTION = "check crawl status"
NEXT_PAGE_ACTION = "fetch next page of crawl status"


class JobPoller:
    """Drive a crawl job to a terminal state.

    The poller keeps no state between calls; every :meth:`wait` builds its
    own counters and page accumulator, so one instance can serve many jobs
    concurrently.
    """

    def __init__(
        self,
        transport: Transport,
        schema: ApiSchema,
        api_url: str,
        headers: dict[str, str],
        sleep: Optional[Sleeper] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._schema = schema
        self._api_url = api_url
        self._headers = headers
        self._sleep = sleep or asyncio.sleep
        self._clock = clock

    async def fetch_status(self, url: str, action: str = STATUS_ACTION) -> CrawlStatus:
        """GET one status page and decode it."""
        body = await self._transport.request(
            "GET", url, headers=self._headers, action=action, retry=SUBMIT_RETRY
        )
        return self._schema.parse_status(decode_object(body, action))

    async def wait(
        self,
        job_id: str,
        *,
        status_url: Optional[str] = None,
        poll_interval: float = MIN_POLL_INTERVAL,
        timeout: Optional[float] = None,
    ) -> CrawlStatus:
        """Poll a job until it completes and return all of its documents.

        Args:
            job_id: Job handle returned at submission.
            status_url: Direct status location; overrides the job's
                standard status endpoint when given.
            poll_interval: Seconds between polls, floored to 2.
            timeout: Optional overall deadline in seconds. None polls for as
                long as the job runs.

        Returns:
            The final status with the documents of every page, in fetch order.

        Raises:
            InvalidStatusError: If a response carries no status.
            JobFailedError: If the job stops, fails, or completes without data.
            JobTimeoutError: If ``timeout`` elapses first.
        """
        url = status_url or f"{self._api_url}{self._schema.status_path(job_id)}"
        interval = max(poll_interval, MIN_POLL_INTERVAL)
        deadline = self._clock() + timeout if timeout is not None else None
        empty_completions = 0

        while True:
            page = await self.fetch_status(url)
            if not page.has_status:
                raise InvalidStatusError()

            if is_completed(page.status):
                if page.has_data:
                    return await self._collect(page)
                empty_completions += 1
                LOGGER.debug(
                    "job %s completed without data (%d/%d)",
                    job_id,
                    empty_completions,
                    MAX_EMPTY_COMPLETIONS + 1,
                )
                if empty_completions > MAX_EMPTY_COMPLETIONS:
                    raise JobFailedError(
                        "crawl job completed but no data was returned",
                        status=page.status,
                    )
            elif is_in_progress(page.status):
                empty_completions = 0
                LOGGER.debug(
                    "job %s %s: %d/%d pages", job_id, page.status, page.completed, page.total
                )
            else:
                raise JobFailedError(
                    f"crawl job failed or was stopped. Status: {page.status}",
                    status=page.status,
                )

            if deadline is not None and self._clock() + interval > deadline:
                raise JobTimeoutError(
                    f"crawl job {job_id} did not finish within {timeout} seconds"
                )
            await self._sleep(interval)

    async def _collect(self, first: CrawlStatus) -> CrawlStatus:
        """Follow continuation links and concatenate their documents."""
        page = first
        documents = list(page.data or [])

        while page.has_continuation:
            LOGGER.debug("fetching next page %s", page.next)
            page = await self.fetch_status(page.next, NEXT_PAGE_ACTION)  # type: ignore[arg-type]
            if not page.has_status:
                raise ProtocolError(
                    "continuation page is not a crawl status response"
                )
            documents.extend(page.data or [])

        LOGGER.info("crawl finished with %d documents", len(documents))
        return dataclasses.replace(page, next=None, data=documents)
