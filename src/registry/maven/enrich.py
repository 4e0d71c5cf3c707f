"""Maven enrichment: homepage and source URL from the winning release's POM."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled, safe_url

from . import client
from .discovery import MavenDocument, contains_placeholder
from .models import DependencyCoordinate, DependencyInfo, FetchOutcome

logger = logging.getLogger(__name__)


def pom_path(dependency: DependencyCoordinate, version: str) -> str:
    """Relative path of the release descriptor, e.g. ``1.2/foo-1.2.pom``."""
    return f"{version}/{dependency.name}-{version}.pom"


def _resolved_value(pom: MavenDocument, path: str) -> Optional[str]:
    value = pom.value_at(path)
    if value and not contains_placeholder(value):
        return value
    return None


def extract_dependency_info(pom: MavenDocument) -> DependencyInfo:
    """Read ``url`` and ``scm.url``, dropping values with unresolved ``${...}`` properties."""
    return DependencyInfo(
        homepage=_resolved_value(pom, "url"),
        source_url=_resolved_value(pom, "scm.url"),
    )


def get_dependency_info(
    dependency: DependencyCoordinate, repo_url: str, version: str
) -> Tuple[DependencyInfo, FetchOutcome]:
    """Fetch the POM for ``version`` from ``repo_url`` and extract descriptive fields.

    Returns:
        The extracted info (empty when the POM is unavailable) and the fetch
        outcome, so callers can act on a FATAL fetch.
    """
    outcome = client.download_maven_xml(dependency, repo_url, pom_path(dependency, version))
    if outcome.content is None:
        if is_debug_enabled(logger):
            logger.debug("No POM available for enrichment", extra=extra_context(
                event="function_exit", component="enrich", action="get_dependency_info",
                outcome=outcome.status.value, target=safe_url(repo_url), package_manager="maven"
            ))
        return DependencyInfo(), outcome
    return extract_dependency_info(outcome.content), outcome
