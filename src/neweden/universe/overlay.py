"""
GraphOverlay - temporary connections layered over a SpaceGraph.

Used for "what-if" pathfinding, such as routing through wormholes scanned
during the current session. The base graph is never modified; reads
combine the base adjacency with the overlay's own additions and removals.

An overlay is not safe to mutate while another thread reads from it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from neweden.core.logging import get_logger

from .errors import OverlayError
from .graph import SpaceGraph
from .types import Connection, System, SystemId, Wormhole

logger = get_logger(__name__)

ConnectionPredicate = Callable[[Connection], bool]


class GraphOverlay:
    """
    Read-only view of a base graph plus extra (or hidden) connections.

    Example:
        overlay = GraphOverlay(universe)
        overlay.add_wormhole(jita_id, thera_id)
        route = find_path(overlay, jita_id, thera_id, UnitCost())
    """

    def __init__(self, base: SpaceGraph) -> None:
        self.base = base
        self._added: dict[SystemId, list[Connection]] = {}
        self._removed_pairs: set[tuple[SystemId, SystemId]] = set()
        self._removed_predicates: list[ConnectionPredicate] = []

    @classmethod
    def with_added(cls, base: SpaceGraph, connections: Iterable[Connection]) -> GraphOverlay:
        """Create an overlay pre-populated with connections."""
        overlay = cls(base)
        for connection in connections:
            overlay.add_connection(connection)
        return overlay

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_connection(self, connection: Connection) -> None:
        """
        Add a single directed connection.

        Raises:
            OverlayError: If either endpoint is absent from the base graph
        """
        for endpoint in (connection.from_id, connection.to_id):
            if endpoint not in self.base:
                raise OverlayError(endpoint, connection)
        self._added.setdefault(connection.from_id, []).append(connection)
        logger.debug("Overlay added %d -> %d", connection.from_id, connection.to_id)

    def add_wormhole(
        self,
        a: SystemId,
        b: SystemId,
        wormhole: Optional[Wormhole] = None,
    ) -> None:
        """Add a wormhole traversable in both directions."""
        kind = wormhole or Wormhole()
        forward = Connection(a, b, kind)
        self.add_connection(forward)
        self.add_connection(forward.reversed())

    def remove_connection(self, from_id: SystemId, to_id: SystemId) -> None:
        """Hide every connection from `from_id` to `to_id`, base or added."""
        self._removed_pairs.add((from_id, to_id))

    def remove_where(self, predicate: ConnectionPredicate) -> None:
        """Hide every connection for which `predicate` returns True."""
        self._removed_predicates.append(predicate)

    # =========================================================================
    # Read interface (same as SpaceGraph)
    # =========================================================================

    def get_system(self, system_id: SystemId) -> Optional[System]:
        return self.base.get_system(system_id)

    def get_connections(self, system_id: SystemId) -> Sequence[Connection]:
        """Base connections first, then overlay additions, minus removals."""
        base = self.base.get_connections(system_id)
        added = self._added.get(system_id)
        if not added and not self._removed_pairs and not self._removed_predicates:
            return base

        combined = list(base)
        if added:
            combined.extend(added)
        return [c for c in combined if not self._is_removed(c)]

    def all_systems(self) -> Sequence[System]:
        return self.base.all_systems()

    def resolve_name(self, name: str) -> Optional[SystemId]:
        return self.base.resolve_name(name)

    def added_connections(self) -> list[Connection]:
        """Overlay additions in insertion order per origin system."""
        return [c for conns in self._added.values() for c in conns]

    def __contains__(self, system_id: object) -> bool:
        return system_id in self.base

    def _is_removed(self, connection: Connection) -> bool:
        if (connection.from_id, connection.to_id) in self._removed_pairs:
            return True
        return any(predicate(connection) for predicate in self._removed_predicates)
