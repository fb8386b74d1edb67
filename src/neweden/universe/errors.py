"""
Universe construction errors.

Raised while building, loading or layering space graphs. Navigation
errors (unknown systems, unreachable destinations) live in
neweden.services.navigation.errors.
"""

from __future__ import annotations


class UniverseBuildError(Exception):
    """Error building or loading a space graph."""

    pass


class ConstructionError(UniverseBuildError):
    """Malformed input data while constructing a SpaceGraph."""

    pass


class OverlayError(Exception):
    """An overlay connection references a system absent from the base graph."""

    def __init__(self, system_id: int, connection: object | None = None):
        self.system_id = system_id
        self.connection = connection
        super().__init__(f"Overlay connection references unknown system: {system_id}")
