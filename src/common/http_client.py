"""Shared HTTP helpers used by the registry clients.

Encapsulates request/timeout error handling so callers only ever see a body
string or an ``HttpStatusError`` carrying the response status code. This
module is dependency-light and safe to import from registry/* without cycles.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class HttpStatusError(Exception):
    """Raised when a request fails; ``status_code`` is None for transport errors."""

    def __init__(self, url: str, status_code: Optional[int] = None, detail: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"GET {safe_url(url)} failed (status={status_code}) {detail}".rstrip())


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "maven").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        HttpStatusError: On timeouts and connection errors (status_code is None).
    """
    safe_target = safe_url(url)
    headers = {"User-Agent": Constants.USER_AGENT}
    headers.update(kwargs.pop("headers", None) or {})
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
        except requests.Timeout as exc:
            logger.warning(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise HttpStatusError(url, None, "timeout") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.warning("%s connection error: %s", context, exc)
            raise HttpStatusError(url, None, str(exc)) from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def fetch_text(url: str, *, context: str, **kwargs: Any) -> str:
    """Return the body of a successful GET, raising ``HttpStatusError`` otherwise."""
    res = safe_get(url, context=context, **kwargs)
    if not 200 <= res.status_code < 300:
        raise HttpStatusError(url, res.status_code)
    return res.text
