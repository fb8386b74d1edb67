"""
neweden - System information, wayfinding and range queries for New Eden

A Python library for navigating the EVE Online universe offline.
Provides both library access and CLI commands.

Usage as library:
    from neweden import AvoidSet, UnitCost, find_path, load_universe

    universe = load_universe()
    route = find_path(universe, 30000142, 30002187, AvoidSet({30002768}))
    print([s.name for s in route.systems])

    overlay = universe.extend()
    overlay.add_wormhole(30000142, 30002187)
    print(find_path(overlay, 30000142, 30002187, UnitCost()).jumps)  # 1

Usage as CLI:
    python -m neweden route Dodixie Jita --safe
    python -m neweden jumps Jita 3
    python -m neweden range Jita 5.0

Package structure:
    neweden/
    ├── core/           # Configuration, logging, formatters
    ├── universe/       # Space graph, overlay, loaders, name search
    ├── services/
    │   └── navigation/ # Rules, router, range queries, route results
    └── commands/       # CLI command implementations
"""

__version__ = "1.0.0"

from .services.navigation.errors import (
    InvalidCostError,
    NavigationError,
    RouteNotFoundError,
    SystemNotFoundError,
)
from .services.navigation.range_finder import (
    systems_within_distance,
    systems_within_jumps,
)
from .services.navigation.router import NavigationService, Route, find_path
from .services.navigation.rules import (
    AvoidSet,
    Composite,
    MinimumSecurity,
    SecurityWeighted,
    UnitCost,
)
from .universe import (
    Connection,
    ConstructionError,
    Coordinate,
    GraphOverlay,
    OverlayError,
    SpaceGraph,
    Stargate,
    StargateType,
    System,
    Wormhole,
    load_universe,
)

__all__ = [
    "__version__",
    "SpaceGraph",
    "GraphOverlay",
    "System",
    "Coordinate",
    "Connection",
    "Stargate",
    "StargateType",
    "Wormhole",
    "load_universe",
    "find_path",
    "Route",
    "NavigationService",
    "systems_within_jumps",
    "systems_within_distance",
    "UnitCost",
    "SecurityWeighted",
    "AvoidSet",
    "MinimumSecurity",
    "Composite",
    "NavigationError",
    "RouteNotFoundError",
    "SystemNotFoundError",
    "InvalidCostError",
    "ConstructionError",
    "OverlayError",
]
