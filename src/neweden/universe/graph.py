"""
SpaceGraph - Core data structure for New Eden navigation.

An immutable, in-memory representation of the stargate network optimized
for O(1) system lookups and O(1) adjacency access. Systems are stored by
value and connections reference systems by ID only, so a built graph can
be shared read-only across any number of concurrent queries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from neweden.core.logging import get_logger

from .errors import ConstructionError
from .types import Connection, System, SystemId

if TYPE_CHECKING:
    from .overlay import GraphOverlay

logger = get_logger(__name__)


class SpaceGraph:
    """
    Pre-built graph of solar systems and their connections.

    Design principles:
    - Dict indexes for O(1) system and adjacency lookups
    - Tuples and mapping proxies so nothing changes after construction
    - Stargates are always reciprocal: a missing reverse jump is inserted

    Raises:
        ConstructionError: On duplicate system IDs or a connection that
            references an unknown system. No partial graph is returned.
    """

    __slots__ = ("_systems", "_ordered", "_adjacency", "_name_lookup", "_connection_count", "version")

    def __init__(
        self,
        systems: Iterable[System],
        connections: Iterable[Connection],
        version: str = "unknown",
    ) -> None:
        by_id: dict[SystemId, System] = {}
        for system in systems:
            if system.id in by_id:
                raise ConstructionError(f"Duplicate system ID: {system.id}")
            by_id[system.id] = system

        adjacency: dict[SystemId, list[Connection]] = {}
        seen: set[Connection] = set()
        ordered_connections: list[Connection] = []

        for connection in connections:
            for endpoint in (connection.from_id, connection.to_id):
                if endpoint not in by_id:
                    raise ConstructionError(
                        f"Connection {connection.from_id} -> {connection.to_id} "
                        f"references unknown system {endpoint}"
                    )
            if connection in seen:
                continue
            seen.add(connection)
            ordered_connections.append(connection)

        # Stargate reciprocity
        reverses: list[Connection] = []
        for connection in ordered_connections:
            if connection.is_stargate:
                reverse = connection.reversed()
                if reverse not in seen:
                    seen.add(reverse)
                    reverses.append(reverse)

        if reverses:
            logger.debug("Inserted %d missing reverse stargate connections", len(reverses))

        for connection in ordered_connections + reverses:
            adjacency.setdefault(connection.from_id, []).append(connection)

        self._systems = MappingProxyType(by_id)
        self._ordered: tuple[System, ...] = tuple(by_id[k] for k in sorted(by_id))
        self._adjacency = MappingProxyType({k: tuple(v) for k, v in adjacency.items()})
        self._name_lookup = MappingProxyType({s.name.lower(): s.id for s in self._ordered})
        self._connection_count = len(ordered_connections) + len(reverses)
        self.version = version

        logger.debug(
            "Built space graph: %d systems, %d connections",
            len(self._ordered),
            self._connection_count,
        )

    def get_system(self, system_id: SystemId) -> Optional[System]:
        """Return the system with this ID, or None."""
        return self._systems.get(system_id)

    def get_connections(self, system_id: SystemId) -> Sequence[Connection]:
        """Outgoing connections of a system; empty for unknown IDs."""
        return self._adjacency.get(system_id, ())

    def all_systems(self) -> Sequence[System]:
        """All systems in ascending ID order."""
        return self._ordered

    def resolve_name(self, name: str) -> Optional[SystemId]:
        """
        Resolve system name to system ID (case-insensitive).

        Args:
            name: System name to resolve

        Returns:
            System ID if found, None otherwise
        """
        return self._name_lookup.get(name.lower())

    def extend(self) -> GraphOverlay:
        """Start an overlay on top of this graph for temporary connections."""
        from .overlay import GraphOverlay

        return GraphOverlay(self)

    @property
    def system_count(self) -> int:
        return len(self._ordered)

    @property
    def connection_count(self) -> int:
        return self._connection_count

    def connections(self) -> Iterable[Connection]:
        """Every connection, grouped by origin in ascending ID order."""
        for system in self._ordered:
            yield from self._adjacency.get(system.id, ())

    def __contains__(self, system_id: object) -> bool:
        return system_id in self._systems

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return (
            f"SpaceGraph(systems={self.system_count}, "
            f"connections={self.connection_count}, version={self.version!r})"
        )
