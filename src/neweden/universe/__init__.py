"""
Universe module for New Eden navigation and graph queries.

This module provides the core data structures for the stargate network:
immutable systems and connections, the SpaceGraph that indexes them, and
the GraphOverlay used to layer temporary wormholes on top.
"""

from neweden.universe.builder import (
    build_space_graph,
    graph_from_cache_data,
    load_space_graph,
    load_universe,
)
from neweden.universe.errors import ConstructionError, OverlayError, UniverseBuildError
from neweden.universe.graph import SpaceGraph
from neweden.universe.overlay import GraphOverlay
from neweden.universe.serialization import SerializationError
from neweden.universe.types import (
    Connection,
    Coordinate,
    Navigatable,
    SecurityClass,
    Stargate,
    StargateType,
    System,
    SystemId,
    Wormhole,
    classify_security,
)

__all__ = [
    "SpaceGraph",
    "GraphOverlay",
    "Navigatable",
    "System",
    "SystemId",
    "Coordinate",
    "Connection",
    "Stargate",
    "StargateType",
    "Wormhole",
    "SecurityClass",
    "classify_security",
    "UniverseBuildError",
    "ConstructionError",
    "OverlayError",
    "SerializationError",
    "build_space_graph",
    "graph_from_cache_data",
    "load_space_graph",
    "load_universe",
]
