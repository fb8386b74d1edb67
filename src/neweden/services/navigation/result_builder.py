"""
Route presentation helpers.

Turns a Route into the security breakdown, hazard warnings and threat
level shown by `neweden route` and by library callers that display routes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

from neweden.universe.types import HIGHSEC_THRESHOLD, Navigatable

from .router import Route

ThreatLevel = Literal["MINIMAL", "ELEVATED", "HIGH", "CRITICAL"]


@dataclass
class SecuritySummary:
    """Per-class system counts for a route, origin included."""

    total_jumps: int
    highsec_jumps: int
    lowsec_jumps: int
    nullsec_jumps: int
    lowest_security: float
    lowest_security_system: str

    def to_dict(self) -> dict:
        return asdict(self)


def compute_security_summary(route: Route) -> SecuritySummary:
    counts = {"HIGH": 0, "LOW": 0, "NULL": 0}
    lowest = route.systems[0]

    for system in route.systems:
        counts[system.security_class] += 1
        if system.security < lowest.security:
            lowest = system

    return SecuritySummary(
        total_jumps=route.jumps,
        highsec_jumps=counts["HIGH"],
        lowsec_jumps=counts["LOW"],
        nullsec_jumps=counts["NULL"],
        lowest_security=float(lowest.security),
        lowest_security_system=lowest.name,
    )


def _is_pipe(graph: Navigatable, system_id: int) -> bool:
    return len({c.to_id for c in graph.get_connections(system_id)}) == 2


def generate_warnings(
    graph: Navigatable,
    route: Route,
    mode: str,
) -> list[str]:
    """
    Hazards a pilot should know about before flying `route`.

    Args:
        graph: The graph view the route was found on, so overlay wormholes count
        route: Route to inspect
        mode: Routing mode that produced the route

    Returns:
        Human-readable warnings, empty for an unremarkable high-sec route
    """
    warnings = []
    systems = route.systems
    hops = list(zip(systems, systems[1:]))

    entries = sum(
        1 for src, dst in hops if src.security_class == "HIGH" and dst.security_class != "HIGH"
    )
    if entries:
        warnings.append(f"Route enters low/null-sec {entries} time(s)")

    # Interior systems only; one warning is enough
    pipe = next(
        (s for s in systems[1:-1] if s.security < HIGHSEC_THRESHOLD and _is_pipe(graph, s.id)),
        None,
    )
    if pipe is not None:
        warnings.append(f"Pipe system: {pipe.name} (potential gatecamp)")

    wormhole_jumps = 0
    for src, dst in hops:
        links = [c for c in graph.get_connections(src.id) if c.to_id == dst.id]
        if links and all(c.is_wormhole for c in links):
            wormhole_jumps += 1
    if wormhole_jumps:
        warnings.append(f"Route uses {wormhole_jumps} wormhole jump(s)")

    if mode == "safe" and any(s.security < HIGHSEC_THRESHOLD for s in systems):
        warnings.append("No fully high-sec route available")

    return warnings


def get_threat_level(
    high_sec: int,
    low_sec: int,
    null_sec: int,
    lowest_sec: float,
) -> ThreatLevel:
    """
    Coarse danger rating from a route's security counts.

    Any null-sec system is CRITICAL and any low-sec system is HIGH. An
    all high-sec route touching 0.5 space is ELEVATED, otherwise MINIMAL.
    """
    if null_sec:
        return "CRITICAL"
    if low_sec:
        return "HIGH"
    if lowest_sec <= HIGHSEC_THRESHOLD:
        return "ELEVATED"
    return "MINIMAL"
