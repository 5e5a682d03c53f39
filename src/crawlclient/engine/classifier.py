"""Map non-success HTTP responses to descriptive errors."""

import json
from typing import Union

from crawlclient.core.errors import ApiError, ErrorResponseParseError

NO_DETAILS = "No additional error details provided."


def _templates(status_code: int, action: str, detail: str) -> str:
    if status_code == 402:
        return f"Payment Required: Failed to {action}. {detail}"
    if status_code == 408:
        return f"Request Timeout: Failed to {action} as the request timed out. {detail}"
    if status_code == 409:
        return f"Conflict: Failed to {action} due to a conflict. {detail}"
    if status_code == 500:
        return f"Internal Server Error: Failed to {action}. {detail}"
    return f"Unexpected error during {action}: Status code {status_code}. {detail}"


def classify_error(
    status_code: int, body: bytes, action: str
) -> Union[ApiError, ErrorResponseParseError]:
    """Build the error for a failed request.

    Args:
        status_code: HTTP status of the final response.
        body: Raw response body.
        action: What the caller was doing, e.g. "scrape URL".

    Returns:
        ApiError with an action-specific message, or ErrorResponseParseError
        if the body is not JSON at all.
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        return ErrorResponseParseError(
            f"failed to parse error response: {e}", status_code
        )

    detail = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(detail, str) or not detail:
        detail = NO_DETAILS

    return ApiError(_templates(status_code, action, detail), status_code, action, detail)
