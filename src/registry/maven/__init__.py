"""Maven registry package.

This package resolves published releases for ``group:name`` coordinates:
- coordinates.py: parsing of lookup names into repository-relative paths
- client.py: document fetching over file/http(s) and failure classification
- discovery.py: XML parsing and version/field extraction
- enrich.py: homepage and source URL from the winning release's POM
- resolver.py: multi-repository merge and latest-version selection
"""

from .coordinates import InvalidCoordinateError, parse_coordinate
from .models import (
    DependencyCoordinate,
    DependencyInfo,
    LookupOutcome,
    LookupStatus,
    Release,
    ResolutionResult,
)
from .resolver import RegistryFailureError, get_pkg_releases, lookup_releases

__all__ = [
    "DependencyCoordinate",
    "DependencyInfo",
    "InvalidCoordinateError",
    "LookupOutcome",
    "LookupStatus",
    "RegistryFailureError",
    "Release",
    "ResolutionResult",
    "get_pkg_releases",
    "lookup_releases",
    "parse_coordinate",
]
