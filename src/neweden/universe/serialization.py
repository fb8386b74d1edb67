"""
.universe files: persisted SpaceGraphs without pickle.

System records and the graph version travel as msgpack; the connection
topology is a directed igraph stored in igraph's own gzipped format, with
one edge attribute per connection field.

Layout (all integers big-endian):
    magic            4 bytes   b"NEWE"
    format version   uint16
    metadata length  uint32    N
    metadata         N bytes   msgpack {"version", "systems"}
    topology length  uint32    M
    topology         M bytes   igraph picklez

Vertex i of the topology is the i-th metadata system, which is always in
ascending system ID order.
"""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

import igraph as ig
import msgpack

from neweden.core.logging import get_logger

from .types import Connection, Coordinate, Stargate, StargateType, System, Wormhole

if TYPE_CHECKING:
    from .graph import SpaceGraph

logger = get_logger(__name__)

MAGIC = b"NEWE"
FORMAT_VERSION = 1

_HEADER = struct.Struct(">4sHI")
_LENGTH = struct.Struct(">I")

KIND_WORMHOLE = "wormhole"


class SerializationError(Exception):
    """A .universe file could not be written or read."""


def _system_to_dict(system: System) -> dict[str, Any]:
    return {
        "id": system.id,
        "name": system.name,
        "coordinate": list(system.coordinate),
        "security": system.security,
        "region_name": system.region_name,
        "constellation_id": system.constellation_id,
        "region_id": system.region_id,
    }


def _system_from_dict(data: dict[str, Any]) -> System:
    return System(
        id=data["id"],
        name=data["name"],
        coordinate=Coordinate(*data["coordinate"]),
        security=data["security"],
        region_name=data.get("region_name"),
        constellation_id=data.get("constellation_id"),
        region_id=data.get("region_id"),
    )


def _build_topology(graph: SpaceGraph) -> ig.Graph:
    """Convert the graph's connections into a directed igraph with edge attributes."""
    index = {system.id: i for i, system in enumerate(graph.all_systems())}

    edges: list[tuple[int, int]] = []
    attrs: dict[str, list[Any]] = {
        "kind": [],
        "max_mass": [],
        "max_jump_mass": [],
        "remaining_hours": [],
        "signature": [],
    }
    for connection in graph.connections():
        edges.append((index[connection.from_id], index[connection.to_id]))
        kind = connection.kind
        if isinstance(kind, Wormhole):
            attrs["kind"].append(KIND_WORMHOLE)
            attrs["max_mass"].append(kind.max_mass)
            attrs["max_jump_mass"].append(kind.max_jump_mass)
            attrs["remaining_hours"].append(kind.remaining_hours)
            attrs["signature"].append(kind.signature)
        else:
            attrs["kind"].append(kind.type.value)
            for key in ("max_mass", "max_jump_mass", "remaining_hours", "signature"):
                attrs[key].append(None)

    return ig.Graph(n=len(index), edges=edges, directed=True, edge_attrs=attrs)


def _connections_from_topology(topology: ig.Graph, systems: list[System]) -> list[Connection]:
    connections = []
    for edge in topology.es:
        kind_name = edge["kind"]
        if kind_name == KIND_WORMHOLE:
            kind: Stargate | Wormhole = Wormhole(
                max_mass=edge["max_mass"],
                max_jump_mass=edge["max_jump_mass"],
                remaining_hours=edge["remaining_hours"],
                signature=edge["signature"],
            )
        else:
            kind = Stargate(StargateType(kind_name))
        connections.append(Connection(systems[edge.source].id, systems[edge.target].id, kind))
    return connections


def _read_exact(f: BinaryIO, size: int, what: str) -> bytes:
    data = f.read(size)
    if len(data) != size:
        raise SerializationError(f"Truncated file: expected {size} bytes of {what}, got {len(data)}")
    return data


def save_space_graph(graph: SpaceGraph, path: Path) -> None:
    """
    Write `graph` to `path` in the .universe container format.

    Raises:
        SerializationError: If the graph cannot be encoded or written
    """
    try:
        metadata = msgpack.packb(
            {"version": graph.version, "systems": [_system_to_dict(s) for s in graph.all_systems()]},
            use_bin_type=True,
        )
        topology = io.BytesIO()
        _build_topology(graph).write_picklez(topology)
        blob = topology.getvalue()

        with open(path, "wb") as f:
            f.write(_HEADER.pack(MAGIC, FORMAT_VERSION, len(metadata)))
            f.write(metadata)
            f.write(_LENGTH.pack(len(blob)))
            f.write(blob)
    except Exception as e:
        raise SerializationError(f"Failed to save space graph to {path}: {e}") from e

    logger.debug("Saved %s: metadata=%d bytes, topology=%d bytes", path, len(metadata), len(blob))


def load_space_graph(path: Path) -> SpaceGraph:
    """
    Read a SpaceGraph written by save_space_graph.

    The rebuilt graph goes through normal SpaceGraph validation.

    Raises:
        SerializationError: If the file is truncated, foreign, from a newer
            format version, or inconsistent
    """
    from .graph import SpaceGraph

    try:
        with open(path, "rb") as f:
            magic, version, metadata_len = _HEADER.unpack(_read_exact(f, _HEADER.size, "header"))
            if magic != MAGIC:
                raise SerializationError(f"Invalid file format: expected magic {MAGIC!r}, got {magic!r}")
            if version > FORMAT_VERSION:
                raise SerializationError(
                    f"Unsupported format version: {version} (this build reads up to {FORMAT_VERSION})"
                )
            metadata = msgpack.unpackb(_read_exact(f, metadata_len, "metadata"), raw=False)
            (blob_len,) = _LENGTH.unpack(_read_exact(f, _LENGTH.size, "topology length"))
            topology = ig.Graph.Read_Picklez(io.BytesIO(_read_exact(f, blob_len, "topology")))

        systems = [_system_from_dict(s) for s in metadata["systems"]]
        if topology.vcount() != len(systems):
            raise SerializationError(
                f"Topology has {topology.vcount()} vertices but metadata lists {len(systems)} systems"
            )
        return SpaceGraph(
            systems,
            _connections_from_topology(topology, systems),
            version=metadata.get("version", "unknown"),
        )
    except SerializationError:
        raise
    except Exception as e:
        raise SerializationError(f"Failed to load space graph from {path}: {e}") from e


def detect_format(path: Path) -> str:
    """
    Identify a graph file by its leading bytes.

    Returns:
        "universe" for the container format, "unknown" otherwise

    Raises:
        SerializationError: If the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            head = f.read(len(MAGIC))
    except OSError as e:
        raise SerializationError(f"Cannot read {path}: {e}") from e
    return "universe" if head == MAGIC else "unknown"
