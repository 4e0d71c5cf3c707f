"""Maven repository document fetching and transport failure classification."""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Optional
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from constants import Constants
from common import http_client
from common.http_client import HttpStatusError
from common.logging_utils import extra_context, is_debug_enabled, safe_url

from .discovery import MavenDocument
from .models import DependencyCoordinate, FetchOutcome

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    """Classification of a failed HTTP fetch."""
    NOT_FOUND = "not_found"
    TEMPORARY = "temporary"
    UNKNOWN = "unknown"


def classify_failure(status_code: Optional[int]) -> FailureKind:
    """Map a status code to a failure kind; None (no response) is UNKNOWN."""
    if status_code == 404:
        return FailureKind.NOT_FOUND
    if status_code is not None and (status_code == 429 or 500 <= status_code < 600):
        return FailureKind.TEMPORARY
    return FailureKind.UNKNOWN


def is_primary_repository(url: str) -> bool:
    """True when ``url`` points at one of the canonical public repository hosts."""
    host = (urlparse(url).hostname or "").lower()
    return host in Constants.PRIMARY_REPOSITORY_HOSTS


def normalize_repository_url(repo_url: str) -> str:
    """Ensure a repository base URL ends with exactly one separator."""
    return repo_url.rstrip("/") + "/"


def build_url(dependency: DependencyCoordinate, repo_url: str, file_path: str) -> str:
    """Join ``<dependency path>/<file_path>`` onto a repository base URL."""
    return urljoin(normalize_repository_url(repo_url), f"{dependency.dependency_url}/{file_path}")


def download_file_protocol(pkg_url: str) -> FetchOutcome:
    """Read a ``file://`` target; a missing file is simply absent."""
    pkg_path = url2pathname(urlparse(pkg_url).path)
    if not os.path.isfile(pkg_path):
        return FetchOutcome.absent("missing file")
    try:
        with open(pkg_path, encoding="utf-8") as fh:
            return FetchOutcome.found(fh.read())
    except OSError as exc:
        logger.warning("Unable to read %s: %s", pkg_path, exc)
        return FetchOutcome.absent("unreadable file")


def download_http_protocol(pkg_url: str) -> FetchOutcome:
    """GET an http(s) target and classify any failure.

    Temporary failures against a primary repository come back FATAL; every
    other failure is ABSENT so the lookup can carry on.
    """
    try:
        return FetchOutcome.found(http_client.fetch_text(pkg_url, context="maven"))
    except HttpStatusError as err:
        kind = classify_failure(err.status_code)
        target = safe_url(pkg_url)
        if kind is FailureKind.NOT_FOUND:
            logger.debug("Url not found %s", target)
            return FetchOutcome.absent(kind.value)
        if kind is FailureKind.TEMPORARY:
            logger.warning(
                "Error requesting %s Error Code: %s",
                target,
                err.status_code,
                extra=extra_context(event="http_error", outcome="temporary",
                                    status_code=err.status_code, target=target),
            )
            if is_primary_repository(pkg_url):
                return FetchOutcome.fatal("registry-failure")
            return FetchOutcome.absent(kind.value)
        logger.warning(
            "Unknown error requesting %s Error Code: %s",
            target,
            err.status_code,
            extra=extra_context(event="http_error", outcome="unknown",
                                status_code=err.status_code, target=target),
        )
        return FetchOutcome.absent(kind.value)


def download_maven_xml(dependency: DependencyCoordinate, repo_url: str, file_path: str) -> FetchOutcome:
    """Fetch ``file_path`` for ``dependency`` from one repository and parse it.

    Returns:
        FOUND with a MavenDocument, ABSENT when the repository has nothing
        usable, or FATAL when the whole lookup must abort.
    """
    pkg_url = build_url(dependency, repo_url, file_path)
    scheme = urlparse(repo_url).scheme.lower()
    if scheme == "file":
        raw = download_file_protocol(pkg_url)
    elif scheme in ("http", "https"):
        raw = download_http_protocol(pkg_url)
    else:
        logger.error("Invalid protocol %s: in repository %s", scheme, safe_url(repo_url))
        return FetchOutcome.absent("invalid protocol")

    if raw.is_fatal:
        return raw
    if not raw.content:
        logger.debug("%s not found in repository %s", dependency.display, safe_url(repo_url))
        return FetchOutcome.absent(raw.reason)

    try:
        return FetchOutcome.found(MavenDocument.parse(raw.content))
    except ET.ParseError:
        if is_debug_enabled(logger):
            logger.debug("Can not parse %s for %s", safe_url(pkg_url), dependency.display,
                         extra=extra_context(event="parse", outcome="parse_error",
                                             target=safe_url(pkg_url)))
        return FetchOutcome.absent("parse error")
