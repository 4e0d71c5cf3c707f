"""Data models for Maven release resolution."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DependencyCoordinate:
    """A ``group:name`` coordinate and its repository-independent base path."""
    display: str
    group: str
    name: str
    dependency_url: str  # group with dots as slashes, then name


@dataclass(frozen=True)
class Release:
    """A single published version."""
    version: str


@dataclass(frozen=True)
class DependencyInfo:
    """Descriptive fields read from a release descriptor (POM)."""
    homepage: Optional[str] = None
    source_url: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    """Lookup outcome handed back to callers; immutable once built."""
    coordinate: DependencyCoordinate
    releases: Tuple[Release, ...]
    homepage: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def versions(self) -> List[str]:
        return [release.version for release in self.releases]

    def to_dict(self) -> Dict[str, Any]:
        """Render the result with the optional fields omitted when absent."""
        data: Dict[str, Any] = {
            "display": self.coordinate.display,
            "group": self.coordinate.group,
            "name": self.coordinate.name,
            "dependencyUrl": self.coordinate.dependency_url,
        }
        if self.homepage:
            data["homepage"] = self.homepage
        if self.source_url:
            data["sourceUrl"] = self.source_url
        data["releases"] = [{"version": release.version} for release in self.releases]
        return data


@dataclass(frozen=True)
class ResolutionState:
    """Accumulator threaded through the per-repository fold.

    ``versions`` holds every version seen so far in first-seen order;
    ``best_sources`` maps a repository's local best version to that repository;
    ``origins`` maps every version to the repository that first listed it.
    """
    versions: Tuple[str, ...] = ()
    best_sources: Dict[str, str] = field(default_factory=dict)
    origins: Dict[str, str] = field(default_factory=dict)


class FetchStatus(Enum):
    """Outcome of fetching one document from one repository."""
    FOUND = "found"
    ABSENT = "absent"
    FATAL = "fatal"


@dataclass(frozen=True)
class FetchOutcome:
    """Result variant for a single fetch; ``content`` is set only when FOUND."""
    status: FetchStatus
    content: Any = None
    reason: Optional[str] = None

    @property
    def is_fatal(self) -> bool:
        return self.status is FetchStatus.FATAL

    @classmethod
    def found(cls, content: Any) -> "FetchOutcome":
        return cls(FetchStatus.FOUND, content)

    @classmethod
    def absent(cls, reason: Optional[str] = None) -> "FetchOutcome":
        return cls(FetchStatus.ABSENT, None, reason)

    @classmethod
    def fatal(cls, reason: str) -> "FetchOutcome":
        return cls(FetchStatus.FATAL, None, reason)


class LookupStatus(Enum):
    """Outcome of a whole lookup across all repositories."""
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    REGISTRY_FAILURE = "registry_failure"


@dataclass(frozen=True)
class LookupOutcome:
    """Result variant for a lookup; ``result`` is set only when RESOLVED."""
    status: LookupStatus
    result: Optional[ResolutionResult] = None
    reason: Optional[str] = None
