from __future__ import annotations

import httpx


class CompletionError(Exception):
    """Any failure between sending a completion request and reading its reply text."""


def parse_error_message(error: BaseException) -> str:
    """
    Map a completion failure into a short, human-readable line for the logs.

    The chained cause is inspected when present, so a CompletionError raised
    from an httpx error reports the underlying status or connection problem.
    """
    cause = error.__cause__ or error
    if isinstance(cause, httpx.HTTPStatusError):
        status = cause.response.status_code
        if status == 429:
            return "Rate Limited: API provider is temporarily rate-limited."
        if status == 401:
            return "Authentication Error: Invalid API key or credentials."
        if status == 403:
            return "Forbidden: No permission to access this resource."
        if status == 404:
            return "Not Found: The completion endpoint or model was not found."
        return f"HTTP {status}: {cause.response.reason_phrase}"
    if isinstance(cause, httpx.TimeoutException):
        return "Timeout: The API provider did not answer in time."
    if isinstance(cause, httpx.TransportError):
        return "Connection Error: Unable to connect to the API provider."
    s, t = str(error), type(cause).__name__
    return f"{t}: {s.split(chr(10))[0][:100]}"
