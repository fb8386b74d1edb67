"""
Navigation Service.

Route calculation and range queries over a SpaceGraph or GraphOverlay.
Provides a single source of truth for routing rules, the shortest path
search, jump and distance range queries, and result construction.

Usage:
    from neweden.services.navigation import AvoidSet, UnitCost, find_path

    route = find_path(universe, jita_id, amarr_id, AvoidSet({uedama_id}, UnitCost()))
"""

from __future__ import annotations

__all__ = [
    # Router
    "find_path",
    "Route",
    "NavigationService",
    # Range queries
    "METERS_PER_LIGHT_YEAR",
    "distance_between",
    "jump_distances",
    "systems_in_jump_range",
    "systems_within_distance",
    "systems_within_jumps",
    # Errors
    "InvalidCostError",
    "NavigationError",
    "RouteNotFoundError",
    "SystemNotFoundError",
    # Rules
    "Rule",
    "UnitCost",
    "SecurityWeighted",
    "AvoidSet",
    "MinimumSecurity",
    "Composite",
    "checked_cost",
    "rules_for_mode",
    "RouteMode",
    "VALID_MODES",
    "SAFE_PENALTIES",
    "UNSAFE_PENALTIES",
    # Result utilities
    "SecuritySummary",
    "compute_security_summary",
    "generate_warnings",
    "get_threat_level",
]

_ROUTER = ("find_path", "Route", "NavigationService")
_RANGE = (
    "METERS_PER_LIGHT_YEAR",
    "distance_between",
    "jump_distances",
    "systems_in_jump_range",
    "systems_within_distance",
    "systems_within_jumps",
)
_ERRORS = ("InvalidCostError", "NavigationError", "RouteNotFoundError", "SystemNotFoundError")
_RULES = (
    "Rule",
    "UnitCost",
    "SecurityWeighted",
    "AvoidSet",
    "MinimumSecurity",
    "Composite",
    "checked_cost",
    "rules_for_mode",
    "RouteMode",
    "VALID_MODES",
    "SAFE_PENALTIES",
    "UNSAFE_PENALTIES",
)
_RESULTS = ("SecuritySummary", "compute_security_summary", "generate_warnings", "get_threat_level")


def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name in _ROUTER:
        from . import router

        return getattr(router, name)

    if name in _RANGE:
        from . import range_finder

        return getattr(range_finder, name)

    if name in _ERRORS:
        from . import errors

        return getattr(errors, name)

    if name in _RULES:
        from . import rules

        return getattr(rules, name)

    if name in _RESULTS:
        from . import result_builder

        return getattr(result_builder, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
