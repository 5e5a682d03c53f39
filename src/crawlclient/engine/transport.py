"""HTTP request execution with bounded retries.

Each call sends one logical request. A 502 Bad Gateway answer is treated as
transient and retried with exponential backoff; any other status ends the
loop. Connection failures are raised straight away.
"""

import asyncio
import json as json_lib
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from crawlclient.core.errors import ProtocolError, TransportError
from crawlclient.core.models import RetryPolicy
from crawlclient.engine.classifier import classify_error

LOGGER = logging.getLogger(__name__)

TRANSIENT_STATUS = 502
SUBMIT_RETRY = RetryPolicy(attempts=3, backoff=0.5)

Sleeper = Callable[[float], Awaitable[Any]]


def decode_object(body: bytes, action: str) -> dict[str, Any]:
    """Decode a success body that must be a JSON object.

    Raises:
        ProtocolError: If the body is not a JSON object.
    """
    try:
        payload = json_lib.loads(body)
    except ValueError as e:
        raise ProtocolError(f"failed to decode {action} response: {e}") from e
    if not isinstance(payload, dict):
        raise ProtocolError(f"unexpected {action} response: expected a JSON object")
    return payload


class Transport:
    """Send requests through a shared httpx client."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        sleep: Optional[Sleeper] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Pooled async HTTP client; safe to share between calls.
            sleep: Coroutine used for backoff waits (defaults to asyncio.sleep).
        """
        self._client = client
        self._sleep = sleep or asyncio.sleep

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        action: str,
        json: Optional[dict[str, Any]] = None,
        retry: RetryPolicy = RetryPolicy(),
    ) -> bytes:
        """Send a request and return the body of a 200 response.

        Args:
            method: HTTP method.
            url: Absolute target URL.
            headers: Headers to send.
            action: Description used in error messages.
            json: Optional JSON body.
            retry: Retry budget for 502 responses.

        Returns:
            Raw response body.

        Raises:
            TransportError: On connection-level failures.
            ApiError: If the final status is not 200.
            ErrorResponseParseError: If the error body is not JSON.
        """
        attempts = max(retry.attempts, 1)
        attempt = 0

        while True:
            LOGGER.debug("%s %s (attempt %d/%d)", method, url, attempt + 1, attempts)
            try:
                response = await self._client.request(
                    method, url, json=json, headers=headers
                )
            except httpx.TransportError as e:
                raise TransportError(f"failed to {action}: {e}") from e

            if response.status_code != TRANSIENT_STATUS or attempt == attempts - 1:
                break

            delay = retry.backoff * 2**attempt
            LOGGER.debug(
                "%s returned %d, retrying in %.2fs",
                url,
                response.status_code,
                delay,
            )
            await self._sleep(delay)
            attempt += 1

        if response.status_code != 200:
            LOGGER.debug("%s failed with status %d", action, response.status_code)
            raise classify_error(response.status_code, response.content, action)

        return response.content
