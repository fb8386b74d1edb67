"""
Graph Builder - Convert universe_cache.json to a SpaceGraph.

This module provides the build pipeline that converts the JSON universe
cache into a validated SpaceGraph, optionally saving it as a .universe
file for fast loading.

Security:
    The .universe format uses msgpack for system data and igraph's native
    format for topology, eliminating pickle.load() for arbitrary Python
    objects.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from neweden.core.config import get_settings
from neweden.core.logging import get_logger

from .errors import UniverseBuildError
from .graph import SpaceGraph
from .serialization import SerializationError, detect_format
from .serialization import load_space_graph as load_safe
from .serialization import save_space_graph as save_safe
from .types import Connection, Coordinate, Stargate, System, stargate_type_between

logger = get_logger(__name__)


def build_space_graph(
    cache_path: Path | None = None,
    output_path: Path | None = None,
) -> SpaceGraph:
    """
    Convert universe_cache.json to a SpaceGraph.

    Args:
        cache_path: Path to universe_cache.json (defaults to settings)
        output_path: Optional path to save .universe graph

    Returns:
        SpaceGraph instance ready for queries

    Raises:
        UniverseBuildError: If the cache is missing, malformed or inconsistent
    """
    if cache_path is None:
        cache_path = get_settings().cache_path

    try:
        with open(cache_path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise UniverseBuildError(
            f"Universe cache not found: {cache_path}\n"
            "Export one from ESI or point NEWEDEN_UNIVERSE_CACHE at an existing file."
        )
    except json.JSONDecodeError as e:
        raise UniverseBuildError(
            f"Invalid JSON in universe cache: {cache_path}\n"
            f"Parse error: {e}"
        )

    required_keys = ["systems", "stargates"]
    missing = [k for k in required_keys if k not in data]
    if missing:
        raise UniverseBuildError(f"Universe cache missing required keys: {missing}")

    graph = graph_from_cache_data(data)
    logger.info(
        "Built space graph from %s: %d systems, %d connections",
        cache_path,
        graph.system_count,
        graph.connection_count,
    )

    if output_path:
        save_safe(graph, output_path)
        logger.info("Saved space graph to %s", output_path)

    return graph


def graph_from_cache_data(data: dict[str, Any]) -> SpaceGraph:
    """
    Build a SpaceGraph from already-parsed universe cache data.

    System IDs are stored as string keys in the JSON cache. Region IDs are
    resolved through the constellation table.
    """
    systems_data: dict[str, dict[str, Any]] = data["systems"]
    stargates: dict[str, dict[str, Any]] = data["stargates"]
    constellations = data.get("constellations", {})
    regions = data.get("regions", {})

    const_to_region = {
        int(const_id): const_data.get("region_id", 0)
        for const_id, const_data in constellations.items()
    }
    region_names = {int(k): v["name"] for k, v in regions.items()}

    systems: list[System] = []
    missing_positions = 0
    try:
        for sys_id, sys_data in systems_data.items():
            constellation_id = sys_data.get("constellation_id", 0)
            region_id = const_to_region.get(constellation_id, 0)
            position = sys_data.get("position")
            if position is None:
                missing_positions += 1
                coordinate = Coordinate(0.0, 0.0, 0.0)
            else:
                coordinate = Coordinate(
                    float(position["x"]), float(position["y"]), float(position["z"])
                )
            systems.append(
                System(
                    id=int(sys_id),
                    name=sys_data["name"],
                    coordinate=coordinate,
                    security=float(sys_data["security"]),
                    region_name=region_names.get(region_id),
                    constellation_id=constellation_id,
                    region_id=region_id,
                )
            )
    except (KeyError, TypeError, ValueError) as e:
        raise UniverseBuildError(f"Malformed system record in universe cache: {e}") from e

    if missing_positions:
        logger.warning("%d systems have no position; placed at origin", missing_positions)

    connections = _build_connections(systems, systems_data, stargates)
    return SpaceGraph(systems, connections, version=data.get("generated", "unknown"))


def _build_connections(
    systems: list[System],
    systems_data: dict[str, dict[str, Any]],
    stargates: dict[str, dict[str, Any]],
) -> list[Connection]:
    """
    Build directed stargate connections from gate records.

    Gates whose destination is not part of the cache are skipped.

    Args:
        systems: Parsed systems
        systems_data: Raw system records keyed by system ID string
        stargates: Stargate data mapping gate_id -> {destination_system_id}

    Returns:
        Connections in system ID order, then gate order
    """
    by_id = {s.id: s for s in systems}
    connections: list[Connection] = []
    skipped = 0

    for source in sorted(systems, key=lambda s: s.id):
        for gate_id in systems_data[str(source.id)].get("stargates", []):
            gate = stargates.get(str(gate_id))
            if not gate:
                continue
            target = by_id.get(gate["destination_system_id"])
            if target is None:
                skipped += 1
                continue
            gate_type = stargate_type_between(
                source.region_id or 0,
                source.constellation_id or 0,
                target.region_id or 0,
                target.constellation_id or 0,
            )
            connections.append(Connection(source.id, target.id, Stargate(gate_type)))

    if skipped:
        logger.debug("Skipped %d stargates leading outside the cache", skipped)
    return connections


def load_space_graph(graph_path: Path | None = None) -> SpaceGraph:
    """
    Load pre-built space graph from file.

    Args:
        graph_path: Path to graph file (defaults to settings)

    Returns:
        SpaceGraph instance ready for queries

    Raises:
        UniverseBuildError: If the file is missing, corrupted, or incompatible
    """
    if graph_path is None:
        graph_path = get_settings().graph_path

    if not graph_path.exists():
        raise UniverseBuildError(
            f"Space graph not found: {graph_path}\n"
            "Run 'neweden build' to generate it."
        )

    try:
        file_format = detect_format(graph_path)
    except SerializationError as e:
        raise UniverseBuildError(str(e)) from e

    if file_format != "universe":
        raise UniverseBuildError(
            f"Unknown file format for {graph_path}. Expected .universe format.\n"
            "Try rebuilding with 'neweden build'."
        )

    try:
        graph = load_safe(graph_path)
    except SerializationError as e:
        raise UniverseBuildError(
            f"Failed to load space graph: {graph_path}\n"
            f"Error: {e}\n"
            "The file may be corrupted. Try rebuilding with 'neweden build'."
        ) from e

    logger.info("Loaded space graph from %s (%d systems)", graph_path, graph.system_count)
    return graph


def load_universe() -> SpaceGraph:
    """
    Load the configured universe.

    Uses the SQLite static dump when NEWEDEN_SQLITE_URI is set, otherwise
    the pre-built .universe file.
    """
    settings = get_settings()
    if settings.sqlite_uri:
        from .sqlite import DatabaseBuilder

        return DatabaseBuilder(settings.sqlite_uri).build()
    return load_space_graph()
