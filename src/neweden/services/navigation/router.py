"""
Navigation Service Router.

Single-source shortest path search over any graph view (SpaceGraph,
GraphOverlay or a test double) with pluggable rules deciding which jumps
are admissible and what they cost.
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from neweden.core.logging import get_logger
from neweden.universe.types import Navigatable, System, SystemId

from .errors import RouteNotFoundError, SystemNotFoundError
from .rules import RouteMode, Rule, checked_cost, rules_for_mode

logger = get_logger(__name__)


@dataclass(frozen=True)
class Route:
    """
    An ordered walk from origin to destination, both inclusive.

    Plain value object: holds copies of the systems, no graph reference.
    """

    systems: tuple[System, ...]
    cost: float = 0.0

    @property
    def jumps(self) -> int:
        return len(self.systems) - 1

    @property
    def origin(self) -> System:
        return self.systems[0]

    @property
    def destination(self) -> System:
        return self.systems[-1]

    @property
    def system_ids(self) -> list[SystemId]:
        return [s.id for s in self.systems]

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": self.origin.name,
            "destination": self.destination.name,
            "jumps": self.jumps,
            "cost": self.cost,
            "systems": [s.to_dict() for s in self.systems],
        }


def _require_system(graph: Navigatable, system_id: SystemId) -> System:
    system = graph.get_system(system_id)
    if system is None:
        raise SystemNotFoundError(system_id)
    return system


def find_path(
    graph: Navigatable,
    source: SystemId,
    destination: SystemId,
    rules: Rule,
) -> Route:
    """
    Find the cheapest route from `source` to `destination`.

    Dijkstra's algorithm over a binary heap keyed by (accumulated cost,
    system ID), so equal-cost candidates settle in ascending ID order and
    repeated queries always return the same route.

    Args:
        graph: Any graph view
        source: Origin system ID
        destination: Destination system ID
        rules: Rule deciding admissibility and cost of each jump

    Returns:
        Route including both endpoints

    Raises:
        SystemNotFoundError: If source or destination is not in the graph
        RouteNotFoundError: If no admissible route exists
        InvalidCostError: If a rule returns an invalid cost
    """
    origin = _require_system(graph, source)
    _require_system(graph, destination)

    if source == destination:
        return Route((origin,), 0.0)

    best: dict[SystemId, float] = {source: 0.0}
    previous: dict[SystemId, SystemId] = {}
    settled: set[SystemId] = set()
    heap: list[tuple[float, SystemId]] = [(0.0, source)]

    while heap:
        cost, current = heapq.heappop(heap)
        if current in settled:
            continue
        settled.add(current)

        if current == destination:
            route = Route(_walk_back(graph, previous, source, destination), cost)
            logger.debug("Route %d -> %d: %d jumps, cost %.2f", source, destination, route.jumps, cost)
            return route

        from_system = graph.get_system(current)
        for connection in graph.get_connections(current):
            neighbor = connection.to_id
            if neighbor in settled:
                continue
            to_system = graph.get_system(neighbor)
            if to_system is None:
                raise RuntimeError(f"Connection {current} -> {neighbor} references a missing system")
            step = checked_cost(rules, from_system, to_system, connection)
            if step is None:
                continue
            candidate = cost + step
            if candidate < best.get(neighbor, float("inf")):
                best[neighbor] = candidate
                previous[neighbor] = current
                heapq.heappush(heap, (candidate, neighbor))

    logger.debug("No route %d -> %d after settling %d systems", source, destination, len(settled))
    raise RouteNotFoundError(source, destination)


def _walk_back(
    graph: Navigatable,
    previous: dict[SystemId, SystemId],
    source: SystemId,
    destination: SystemId,
) -> tuple[System, ...]:
    ids = [destination]
    while ids[-1] != source:
        ids.append(previous[ids[-1]])
    ids.reverse()
    return tuple(_require_system(graph, system_id) for system_id in ids)


@dataclass
class NavigationService:
    """
    Route calculations by named mode and system name.

    Example:
        service = NavigationService(universe)
        route = service.calculate_route(jita_id, amarr_id, "safe", avoid_systems={tama_id})
    """

    graph: Navigatable

    def calculate_route(
        self,
        origin: SystemId,
        destination: SystemId,
        mode: RouteMode = "shortest",
        avoid_systems: Optional[Iterable[SystemId]] = None,
    ) -> Route:
        """
        Calculate route between two systems using the specified mode.

        Args:
            origin: Starting system ID
            destination: Destination system ID
            mode: Routing mode
                - "shortest": Minimum jumps (ignores security)
                - "safe": Prefer high-sec, penalize low/null-sec
                - "unsafe": Prefer low/null-sec (for hunting)
            avoid_systems: System IDs to treat as blocked

        Raises:
            SystemNotFoundError: Unknown origin or destination
            RouteNotFoundError: No route under the chosen mode
        """
        return find_path(self.graph, origin, destination, rules_for_mode(mode, avoid_systems))

    def resolve_system(self, name: str) -> SystemId:
        """
        Resolve a system name, or a numeric ID string, to a system ID.

        Raises:
            SystemNotFoundError: If the name is unknown
        """
        resolver = getattr(self.graph, "resolve_name", None)
        system_id = resolver(name) if resolver is not None else None
        if system_id is None and name.isdecimal() and self.graph.get_system(int(name)) is not None:
            system_id = int(name)
        if system_id is None:
            raise SystemNotFoundError(name)
        return system_id

    def resolve_avoid_systems(
        self,
        system_names: Iterable[str],
    ) -> tuple[set[SystemId], list[str]]:
        """
        Resolve system names to IDs for avoidance.

        Returns:
            Tuple of (resolved_ids, unresolved_names)
        """
        avoid_ids: set[SystemId] = set()
        unresolved: list[str] = []

        for name in system_names:
            try:
                avoid_ids.add(self.resolve_system(name))
            except SystemNotFoundError:
                unresolved.append(name)

        return avoid_ids, unresolved
