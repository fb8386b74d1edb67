"""
neweden Navigation Commands

Route planning, jump range and spatial range queries against the local
space graph. All commands are offline.
"""

import argparse
from typing import Any

from ..core.formatters import format_light_years, format_security, get_utc_timestamp
from ..core.logging import get_logger
from ..services.navigation import (
    METERS_PER_LIGHT_YEAR,
    NavigationService,
    RouteNotFoundError,
    SystemNotFoundError,
    compute_security_summary,
    distance_between,
    generate_warnings,
    get_threat_level,
    jump_distances,
    rules_for_mode,
    systems_in_jump_range,
)
from ..universe import GraphOverlay, SpaceGraph, UniverseBuildError, load_universe
from ..universe.search import SystemNameIndex
from ..universe.types import System

logger = get_logger(__name__)

# CLI route flags -> routing modes
MODE_MAP = {
    "shortest": "shortest",
    "secure": "safe",
    "insecure": "unsafe",
}


def _load_graph(query_ts: str) -> SpaceGraph | dict[str, Any]:
    """Load the configured universe, or return an error payload."""
    try:
        return load_universe()
    except UniverseBuildError as e:
        return {
            "error": "graph_not_available",
            "message": str(e),
            "hint": "Run 'neweden build' to generate the graph.",
            "query_timestamp": query_ts,
        }


def _system_info(system: System) -> dict[str, Any]:
    return {
        "id": system.id,
        "name": system.name,
        "security": float(system.security),
        "security_display": format_security(system.security),
        "security_class": system.security_class,
        "region": system.region_name,
    }


def _not_found(name: str, query_ts: str) -> dict[str, Any]:
    return {
        "error": "system_not_found",
        "message": f"Could not find system: {name}",
        "hint": "Check spelling. System names are case-insensitive. Try 'neweden search'.",
        "query_timestamp": query_ts,
    }


def _parse_wormholes(
    universe: SpaceGraph,
    service: NavigationService,
    pairs: list[str],
) -> GraphOverlay:
    """Build an overlay from "A:B" wormhole arguments."""
    overlay = universe.extend()
    for pair in pairs:
        left, sep, right = pair.partition(":")
        if not sep:
            raise ValueError(f"Wormhole must be given as SYSTEM:SYSTEM, got {pair!r}")
        overlay.add_wormhole(service.resolve_system(left), service.resolve_system(right))
    return overlay


# =============================================================================
# Route Command
# =============================================================================


def cmd_route(args: argparse.Namespace) -> dict[str, Any]:
    """
    Calculate route between two solar systems using the local graph.

    Args:
        args: Parsed arguments with origin, destination, route_flag, avoid, wormhole

    Returns:
        Route data dict with systems, security summary, threat assessment
    """
    query_ts = get_utc_timestamp()
    route_flag = getattr(args, "route_flag", "shortest")
    avoid_names = getattr(args, "avoid", None) or []
    wormholes = getattr(args, "wormhole", None) or []

    universe = _load_graph(query_ts)
    if isinstance(universe, dict):
        return universe

    service = NavigationService(universe)
    try:
        origin_id = service.resolve_system(args.origin)
    except SystemNotFoundError:
        return _not_found(args.origin, query_ts)
    try:
        dest_id = service.resolve_system(args.destination)
    except SystemNotFoundError:
        return _not_found(args.destination, query_ts)

    warnings: list[str] = []
    avoid_ids, unresolved = service.resolve_avoid_systems(avoid_names)
    if unresolved:
        warnings.append(f"Unknown systems in --avoid: {', '.join(unresolved)}")

    graph = universe
    if wormholes:
        try:
            graph = _parse_wormholes(universe, service, wormholes)
        except (SystemNotFoundError, ValueError) as e:
            return {"error": "invalid_wormhole", "message": str(e), "query_timestamp": query_ts}
        service = NavigationService(graph)

    mode = MODE_MAP.get(route_flag, "shortest")
    try:
        route = service.calculate_route(origin_id, dest_id, mode, avoid_ids)  # type: ignore[arg-type]
    except RouteNotFoundError as e:
        result: dict[str, Any] = {
            "error": "no_route",
            "message": f"No route available from {args.origin} to {args.destination}",
            "query_timestamp": query_ts,
        }
        if avoid_ids:
            result["hint"] = "Route may be blocked by avoided systems. Try removing some from --avoid."
        if warnings:
            result["warnings"] = warnings
        logger.debug("Route lookup failed: %s", e)
        return result

    summary = compute_security_summary(route)
    warnings.extend(generate_warnings(graph, route, mode))

    return {
        "origin": route.origin.name,
        "destination": route.destination.name,
        "mode": mode,
        "jumps": route.jumps,
        "cost": route.cost,
        "systems": [_system_info(s) for s in route.systems],
        "security_summary": summary.to_dict(),
        "threat_level": get_threat_level(
            summary.highsec_jumps,
            summary.lowsec_jumps,
            summary.nullsec_jumps,
            summary.lowest_security,
        ),
        "warnings": warnings,
        "query_timestamp": query_ts,
    }


# =============================================================================
# Jumps Command
# =============================================================================


def cmd_jumps(args: argparse.Namespace) -> dict[str, Any]:
    """List systems within N jumps of a system."""
    query_ts = get_utc_timestamp()

    universe = _load_graph(query_ts)
    if isinstance(universe, dict):
        return universe

    service = NavigationService(universe)
    try:
        origin_id = service.resolve_system(args.system)
    except SystemNotFoundError:
        return _not_found(args.system, query_ts)

    avoid_ids, _ = service.resolve_avoid_systems(getattr(args, "avoid", None) or [])
    mode = MODE_MAP.get(getattr(args, "route_flag", "shortest"), "shortest")
    distances = jump_distances(universe, origin_id, args.max_jumps, rules_for_mode(mode, avoid_ids))

    systems = []
    for system_id, jumps in sorted(distances.items(), key=lambda item: (item[1], item[0])):
        info = _system_info(universe.get_system(system_id))
        info["jumps"] = jumps
        systems.append(info)

    return {
        "origin": args.system,
        "max_jumps": args.max_jumps,
        "count": len(systems),
        "systems": systems,
        "query_timestamp": query_ts,
    }


# =============================================================================
# Range Command
# =============================================================================


def cmd_range(args: argparse.Namespace) -> dict[str, Any]:
    """List systems within a light-year radius of a system."""
    query_ts = get_utc_timestamp()

    universe = _load_graph(query_ts)
    if isinstance(universe, dict):
        return universe

    service = NavigationService(universe)
    try:
        origin_id = service.resolve_system(args.system)
    except SystemNotFoundError:
        return _not_found(args.system, query_ts)

    center = universe.get_system(origin_id)
    in_range = systems_in_jump_range(universe, origin_id, args.light_years)

    systems = []
    for system in in_range:
        info = _system_info(system)
        distance = distance_between(center, system, METERS_PER_LIGHT_YEAR)
        info["distance_ly"] = round(distance, 3)
        info["distance_display"] = format_light_years(distance)
        systems.append(info)
    systems.sort(key=lambda s: (s["distance_ly"], s["id"]))

    return {
        "origin": center.name,
        "light_years": args.light_years,
        "count": len(systems),
        "systems": systems,
        "query_timestamp": query_ts,
    }


# =============================================================================
# Search Command
# =============================================================================


def cmd_search(args: argparse.Namespace) -> dict[str, Any]:
    """Fuzzy search for systems by name."""
    query_ts = get_utc_timestamp()

    universe = _load_graph(query_ts)
    if isinstance(universe, dict):
        return universe

    index = SystemNameIndex(universe.all_systems())
    results = index.search(args.query, limit=args.limit)

    return {
        "query": args.query,
        "results": [
            {**_system_info(universe.get_system(r.system_id)), "score": round(r.score, 3)}
            for r in results
        ],
        "query_timestamp": query_ts,
    }


# =============================================================================
# Parser Registration
# =============================================================================


def _add_mode_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--safe",
        "--secure",
        action="store_const",
        const="secure",
        dest="route_flag",
        help="Prefer high-sec route",
    )
    parser.add_argument(
        "--shortest",
        action="store_const",
        const="shortest",
        dest="route_flag",
        help="Shortest route (default)",
    )
    parser.add_argument(
        "--risky",
        "--insecure",
        "--unsafe",
        action="store_const",
        const="insecure",
        dest="route_flag",
        help="Prefer low-sec/null route",
    )
    parser.add_argument(
        "--avoid",
        nargs="+",
        metavar="SYSTEM",
        help="Systems to avoid (e.g., --avoid Uedama Niarja)",
    )


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register navigation command parsers."""

    route_parser = subparsers.add_parser("route", help="Calculate route between systems")
    route_parser.add_argument("origin", help="Origin system name")
    route_parser.add_argument("destination", help="Destination system name")
    _add_mode_flags(route_parser)
    route_parser.add_argument(
        "--wormhole",
        nargs="+",
        metavar="A:B",
        help="Temporary wormhole connections (e.g., --wormhole Jita:Amamake)",
    )
    route_parser.set_defaults(route_flag="shortest", func=cmd_route)

    jumps_parser = subparsers.add_parser("jumps", help="Systems within N jumps")
    jumps_parser.add_argument("system", help="Origin system name")
    jumps_parser.add_argument("max_jumps", type=int, help="Maximum number of jumps")
    _add_mode_flags(jumps_parser)
    jumps_parser.set_defaults(route_flag="shortest", func=cmd_jumps)

    range_parser = subparsers.add_parser("range", help="Systems within a light-year radius")
    range_parser.add_argument("system", help="Origin system name")
    range_parser.add_argument("light_years", type=float, help="Radius in light years")
    range_parser.set_defaults(func=cmd_range)

    search_parser = subparsers.add_parser("search", help="Search systems by name")
    search_parser.add_argument("query", help="Partial or misspelled system name")
    search_parser.add_argument("--limit", type=int, default=10, help="Maximum results")
    search_parser.set_defaults(func=cmd_search)
