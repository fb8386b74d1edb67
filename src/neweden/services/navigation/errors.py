"""
Navigation Service Errors.

Domain-specific exceptions for route and range calculations.
These errors are independent of the transport layer (CLI, library use).
"""

from __future__ import annotations


class NavigationError(Exception):
    """Base exception for navigation operations."""

    pass


class RouteNotFoundError(NavigationError):
    """Raised when no route exists between systems under the active rules."""

    def __init__(self, origin: object, destination: object, reason: str | None = None):
        self.origin = origin
        self.destination = destination
        self.reason = reason
        msg = f"No route from {origin} to {destination}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SystemNotFoundError(NavigationError):
    """Raised when a system ID or name is not part of the graph."""

    def __init__(self, system: object):
        self.system = system
        super().__init__(f"Unknown system: {system}")


class InvalidCostError(NavigationError):
    """Raised when a rule returns a negative, NaN or infinite cost."""

    def __init__(self, cost: float, from_id: int, to_id: int):
        self.cost = cost
        self.from_id = from_id
        self.to_id = to_id
        super().__init__(f"Rule returned invalid cost {cost!r} for {from_id} -> {to_id}")
