"""Multi-repository release resolution for Maven dependencies.

Repositories are queried one at a time in the order given. Every repository
is always consulted (a later one may publish newer versions), versions are
merged first-seen with duplicates dropped, and the repository that introduced
the overall newest version is asked for that release's POM to fill in the
homepage and source URL.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from versioning.maven_compare import compare as maven_compare, latest_version

from . import client, enrich
from .coordinates import InvalidCoordinateError, parse_coordinate
from .discovery import extract_versions
from .models import (
    LookupOutcome,
    LookupStatus,
    Release,
    ResolutionResult,
    ResolutionState,
)

logger = logging.getLogger(__name__)

Comparator = Callable[[str, str], int]


class RegistryFailureError(Exception):
    """A primary repository failed temporarily; the lookup cannot be trusted."""

    def __init__(self, reason: str = "registry-failure"):
        self.reason = reason
        super().__init__(reason)


def merge_versions(
    state: ResolutionState,
    repo_url: str,
    versions: Sequence[str],
    comparator: Comparator = maven_compare,
) -> ResolutionState:
    """Fold one repository's versions into the accumulated state.

    Versions already seen in an earlier repository are dropped; the newest of
    the remaining ones is recorded as sourced from ``repo_url``.
    """
    seen = set(state.versions)
    new_versions = [v for v in versions if v not in seen]
    best_sources = dict(state.best_sources)
    origins = dict(state.origins)
    for version in new_versions:
        origins.setdefault(version, repo_url)
    local_best = latest_version(new_versions, comparator)
    if local_best:
        best_sources[local_best] = repo_url
    return ResolutionState(
        versions=state.versions + tuple(new_versions),
        best_sources=best_sources,
        origins=origins,
    )


def lookup_releases(
    lookup_name: str,
    registry_urls: Optional[Sequence[str]],
    comparator: Comparator = maven_compare,
) -> LookupOutcome:
    """Resolve all releases of ``group:name`` across ``registry_urls``.

    Returns:
        RESOLVED with a ResolutionResult, NOT_FOUND when nothing was found (or
        the input was unusable), or REGISTRY_FAILURE when a primary
        repository failed temporarily.
    """
    try:
        dependency = parse_coordinate(lookup_name)
    except InvalidCoordinateError as exc:
        logger.error("Invalid dependency name: %s", exc)
        return LookupOutcome(LookupStatus.NOT_FOUND, reason="invalid coordinate")

    if not registry_urls:
        logger.error("No repositories defined for %s", dependency.display)
        return LookupOutcome(LookupStatus.NOT_FOUND, reason="no repositories")

    repositories = [client.normalize_repository_url(url) for url in registry_urls]
    logger.debug("Found %d repositories for %s", len(repositories), dependency.display)

    state = ResolutionState()
    with Timer() as t:
        for index, repo_url in enumerate(repositories):
            logger.debug("Looking up %s in repository #%d - %s",
                         dependency.display, index, safe_url(repo_url))
            outcome = client.download_maven_xml(dependency, repo_url, Constants.METADATA_FILE)
            if outcome.is_fatal:
                return LookupOutcome(LookupStatus.REGISTRY_FAILURE, reason=outcome.reason)
            if outcome.content is None:
                continue
            before = len(state.versions)
            state = merge_versions(state, repo_url, extract_versions(outcome.content), comparator)
            logger.debug("Found %d new versions for %s in repository %s",
                         len(state.versions) - before, dependency.display, safe_url(repo_url))

    if not state.versions:
        logger.info("No versions found for %s in %d repositories",
                    dependency.display, len(repositories))
        return LookupOutcome(LookupStatus.NOT_FOUND, reason="no versions")

    latest = latest_version(state.versions, comparator)
    # A comparator that is not transitive can settle on a version that was
    # never a local best; fall back to the repository that first listed it.
    source_repo = state.best_sources.get(latest) or state.origins[latest]
    if is_debug_enabled(logger):
        logger.debug("Resolved latest version", extra=extra_context(
            event="decision", component="resolver", action="select_latest",
            count=len(state.versions), target=safe_url(source_repo),
            duration_ms=t.duration_ms(), package_manager="maven"
        ))

    info, pom_outcome = enrich.get_dependency_info(dependency, source_repo, latest)
    if pom_outcome.is_fatal:
        return LookupOutcome(LookupStatus.REGISTRY_FAILURE, reason=pom_outcome.reason)

    result = ResolutionResult(
        coordinate=dependency,
        releases=tuple(Release(version=v) for v in state.versions),
        homepage=info.homepage,
        source_url=info.source_url,
    )
    return LookupOutcome(LookupStatus.RESOLVED, result=result)


def get_pkg_releases(
    lookup_name: str,
    registry_urls: Optional[Sequence[str]],
    comparator: Comparator = maven_compare,
) -> Optional[ResolutionResult]:
    """Return the resolved releases for ``group:name`` or None when not found.

    Raises:
        RegistryFailureError: If a primary repository failed temporarily.
    """
    outcome = lookup_releases(lookup_name, registry_urls, comparator)
    if outcome.status is LookupStatus.REGISTRY_FAILURE:
        raise RegistryFailureError(outcome.reason or "registry-failure")
    return outcome.result
