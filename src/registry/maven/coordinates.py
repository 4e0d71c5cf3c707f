"""Parsing of ``group:name`` lookup names into repository-relative coordinates."""
from __future__ import annotations

from .models import DependencyCoordinate


class InvalidCoordinateError(ValueError):
    """Raised when a lookup name does not carry both a group and a name."""


def parse_coordinate(lookup_name: str) -> DependencyCoordinate:
    """Split ``group:name`` into a coordinate.

    Only the first two colon-separated segments matter; anything after a
    second colon (for example a version) is ignored.

    Raises:
        InvalidCoordinateError: If the group or the name is missing.
    """
    parts = (lookup_name or "").split(":")
    if len(parts) < 2 or not parts[0].strip() or not parts[1].strip():
        raise InvalidCoordinateError(f"Expected 'group:name', got {lookup_name!r}")
    group, name = parts[0].strip(), parts[1].strip()
    return DependencyCoordinate(
        display=lookup_name,
        group=group,
        name=name,
        dependency_url=f"{group.replace('.', '/')}/{name}",
    )
