"""
Route Rules.

A rule decides, for one candidate jump, whether it is admissible and at
what cost. Every rule has the same shape:

    rule(from_system, to_system, connection) -> float | None

None rejects the jump. Any other value must be a non-negative finite
cost. Rules are stateless values and can be reused across any number of
queries, including concurrent ones.

Rule Schemes:
- Shortest: UnitCost, every jump costs 1
- Safe: SecurityWeighted(SAFE_PENALTIES), penalize low-sec and null-sec
- Unsafe: SecurityWeighted(UNSAFE_PENALTIES), prefer null-sec, avoid high-sec
- Any scheme can be wrapped in AvoidSet or MinimumSecurity, or combined
  with Composite
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Optional, Protocol

from neweden.universe.types import Connection, SecurityClass, System, SystemId

from .errors import InvalidCostError

# =============================================================================
# Penalty Tables
# =============================================================================

# Safe mode: jump costs of 1 / 10 / 100 into high / low / null-sec
SAFE_PENALTIES: Mapping[SecurityClass, float] = MappingProxyType({"HIGH": 0.0, "LOW": 9.0, "NULL": 99.0})

# Unsafe mode (hunters): jump costs of 10 / 2 / 1 into high / low / null-sec
UNSAFE_PENALTIES: Mapping[SecurityClass, float] = MappingProxyType({"HIGH": 9.0, "LOW": 1.0, "NULL": 0.0})

BASE_COST = 1.0

Combinator = Literal["sum", "max", "min"]

_COMBINATORS = {"sum": sum, "max": max, "min": min}
RouteMode = Literal["shortest", "safe", "unsafe"]
VALID_MODES: frozenset[str] = frozenset({"shortest", "safe", "unsafe"})


class Rule(Protocol):
    """Admissibility and cost of a single jump."""

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]: ...


# =============================================================================
# Built-in Rules
# =============================================================================


@dataclass(frozen=True)
class UnitCost:
    """Every jump is admissible and costs 1 (fewest jumps)."""

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]:
        return BASE_COST


@dataclass(frozen=True)
class SecurityWeighted:
    """
    Cost 1 plus a penalty for the security class of the destination.

    Attributes:
        penalties: Penalty per security class; missing classes add nothing
    """

    penalties: Mapping[SecurityClass, float] = field(default_factory=lambda: SAFE_PENALTIES, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "penalties", MappingProxyType(dict(self.penalties)))
        for sec_class, penalty in self.penalties.items():
            if not math.isfinite(penalty) or penalty < 0:
                raise ValueError(f"Penalty for {sec_class} must be a non-negative finite number")

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]:
        return BASE_COST + self.penalties.get(to_system.security_class, 0.0)


@dataclass(frozen=True, init=False)
class AvoidSet:
    """
    Reject jumps into avoided systems; otherwise defer to `inner`.

    Attributes:
        avoid: System IDs to avoid
        inner: Rule used for admissible jumps
        include_origin: Also reject jumps leaving an avoided system
    """

    avoid: frozenset[SystemId]
    inner: Rule
    include_origin: bool

    def __init__(
        self,
        avoid: Iterable[SystemId],
        inner: Optional[Rule] = None,
        include_origin: bool = False,
    ) -> None:
        object.__setattr__(self, "avoid", frozenset(avoid))
        object.__setattr__(self, "inner", inner if inner is not None else UnitCost())
        object.__setattr__(self, "include_origin", include_origin)

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]:
        if to_system.id in self.avoid:
            return None
        if self.include_origin and from_system.id in self.avoid:
            return None
        return self.inner(from_system, to_system, connection)


@dataclass(frozen=True)
class MinimumSecurity:
    """Reject jumps into systems below `threshold` security."""

    threshold: float
    inner: Rule = field(default_factory=UnitCost)

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]:
        if to_system.security < self.threshold:
            return None
        return self.inner(from_system, to_system, connection)


@dataclass(frozen=True, init=False)
class Composite:
    """
    Conjunction of rules.

    Rejects if any child rejects. Otherwise child costs are combined with
    `combine`: "sum" adds them, "max" keeps the largest and "min" the smallest.
    """

    rules: tuple[Rule, ...]
    combine: Combinator = "sum"

    def __init__(self, rules: Iterable[Rule], combine: Combinator = "sum") -> None:
        rules = tuple(rules)
        if not rules:
            raise ValueError("Composite requires at least one rule")
        if combine not in _COMBINATORS:
            raise ValueError(f"Unknown combinator: {combine!r}")
        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "combine", combine)

    def __call__(self, from_system: System, to_system: System, connection: Connection) -> Optional[float]:
        costs = []
        for rule in self.rules:
            cost = rule(from_system, to_system, connection)
            if cost is None:
                return None
            costs.append(cost)
        return _COMBINATORS[self.combine](costs)


# =============================================================================
# Helpers
# =============================================================================


def checked_cost(
    rule: Rule,
    from_system: System,
    to_system: System,
    connection: Connection,
) -> Optional[float]:
    """
    Evaluate `rule` and enforce the cost contract.

    Raises:
        InvalidCostError: If the rule returned a negative, NaN or infinite cost
    """
    cost = rule(from_system, to_system, connection)
    if cost is None:
        return None
    if not math.isfinite(cost) or cost < 0:
        raise InvalidCostError(cost, from_system.id, to_system.id)
    return float(cost)


def rules_for_mode(mode: RouteMode, avoid: Optional[Iterable[SystemId]] = None) -> Rule:
    """
    Build the rule for a named routing mode.

    Args:
        mode: "shortest", "safe" or "unsafe"
        avoid: Optional system IDs to treat as blocked

    Raises:
        ValueError: For an unknown mode
    """
    rule: Rule
    if mode == "shortest":
        rule = UnitCost()
    elif mode == "safe":
        rule = SecurityWeighted(SAFE_PENALTIES)
    elif mode == "unsafe":
        rule = SecurityWeighted(UNSAFE_PENALTIES)
    else:
        raise ValueError(f"Unknown route mode: {mode!r} (expected one of {sorted(VALID_MODES)})")

    avoid_ids = frozenset(avoid or ())
    if avoid_ids:
        rule = AvoidSet(avoid_ids, rule)
    return rule
