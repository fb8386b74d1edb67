"""
Range Queries.

Two notions of "nearby":
- Jumps: systems reachable within N admissible jumps (graph topology)
- Distance: systems within a straight-line radius of a point, regardless
  of connectivity (jump drives, cyno ranges)

Raw coordinates are meters; distances are given in light years unless a
different unit conversion is supplied.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from neweden.universe.types import Coordinate, Navigatable, System, SystemId

from .errors import SystemNotFoundError
from .rules import Rule, UnitCost, checked_cost

# Meters per light year, the default unit conversion for distance queries
METERS_PER_LIGHT_YEAR = 9_460_730_472_580_800.0


def jump_distances(
    graph: Navigatable,
    source: SystemId,
    max_jumps: int,
    rules: Rule | None = None,
) -> dict[SystemId, int]:
    """
    Breadth-first jump counts from `source`, bounded by `max_jumps`.

    Only admissibility matters here: a jump is followed when the rule
    returns any cost, and the cost value itself is ignored.

    Args:
        graph: Any graph view
        source: Starting system ID (included at 0 jumps)
        max_jumps: Maximum search radius in jumps
        rules: Rule deciding which jumps are admissible (default: all)

    Returns:
        Mapping of system ID to minimum number of jumps

    Raises:
        SystemNotFoundError: If source is not in the graph
        ValueError: If max_jumps is negative
    """
    if max_jumps < 0:
        raise ValueError(f"max_jumps must be non-negative, got {max_jumps}")
    if graph.get_system(source) is None:
        raise SystemNotFoundError(source)

    rule = rules if rules is not None else UnitCost()
    visited: dict[SystemId, int] = {source: 0}
    queue: deque[tuple[SystemId, int]] = deque([(source, 0)])

    while queue:
        current, dist = queue.popleft()
        if dist >= max_jumps:
            continue

        from_system = graph.get_system(current)
        for connection in graph.get_connections(current):
            neighbor = connection.to_id
            if neighbor in visited:
                continue
            to_system = graph.get_system(neighbor)
            if to_system is None:
                raise RuntimeError(f"Connection {current} -> {neighbor} references a missing system")
            if checked_cost(rule, from_system, to_system, connection) is None:
                continue
            visited[neighbor] = dist + 1
            queue.append((neighbor, dist + 1))

    return visited


def systems_within_jumps(
    graph: Navigatable,
    source: SystemId,
    max_jumps: int,
    rules: Rule | None = None,
) -> list[System]:
    """
    All systems within `max_jumps` admissible jumps of `source`.

    Returns:
        Systems ordered by jump count, then ascending system ID
    """
    distances = jump_distances(graph, source, max_jumps, rules)
    ordered = sorted(distances.items(), key=lambda item: (item[1], item[0]))
    return [graph.get_system(system_id) for system_id, _ in ordered]


def systems_within_distance(
    graph: Navigatable,
    origin: Coordinate | tuple[float, float, float],
    max_distance: float,
    unit_conversion: float = METERS_PER_LIGHT_YEAR,
) -> list[System]:
    """
    All systems whose straight-line distance from `origin` is at most `max_distance`.

    Independent of connectivity: every system is checked.

    Args:
        graph: Any graph view
        origin: Point in raw coordinate units
        max_distance: Radius in converted units (light years by default)
        unit_conversion: Raw units per distance unit

    Returns:
        Matching systems in ascending system ID order

    Raises:
        ValueError: For a negative radius or non-positive conversion
    """
    if max_distance < 0:
        raise ValueError(f"max_distance must be non-negative, got {max_distance}")
    if unit_conversion <= 0:
        raise ValueError(f"unit_conversion must be positive, got {unit_conversion}")

    systems = sorted(graph.all_systems(), key=lambda s: s.id)
    if not systems:
        return []

    coords = np.array([s.coordinate for s in systems], dtype=np.float64)
    point = np.asarray(origin, dtype=np.float64)
    distances = np.linalg.norm(coords - point, axis=1) / unit_conversion
    mask = distances <= max_distance

    return [system for system, inside in zip(systems, mask) if inside]


def systems_in_jump_range(
    graph: Navigatable,
    system_id: SystemId,
    light_years: float,
) -> list[System]:
    """
    Systems within `light_years` of a system, excluding the system itself.

    Raises:
        SystemNotFoundError: If the system is not in the graph
    """
    center = graph.get_system(system_id)
    if center is None:
        raise SystemNotFoundError(system_id)
    in_range = systems_within_distance(graph, center.coordinate, light_years)
    return [s for s in in_range if s.id != system_id]


def distance_between(
    a: System,
    b: System,
    unit_conversion: float = METERS_PER_LIGHT_YEAR,
) -> float:
    """Straight-line distance between two systems in converted units."""
    return a.coordinate.distance_to(b.coordinate) / unit_conversion
