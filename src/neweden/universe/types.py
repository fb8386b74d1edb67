"""
Core value types for New Eden navigation.

Systems, coordinates and connections are plain frozen values. They carry
no reference back into a graph and are safe to hand across threads or
serialize for a presentation layer.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Literal, NamedTuple, Optional, Protocol, Union

SystemId = int

SecurityClass = Literal["HIGH", "LOW", "NULL"]

# Security classification thresholds
HIGHSEC_THRESHOLD = 0.5  # security >= 0.5 is high-sec
LOWSEC_THRESHOLD = 0.0  # security <= 0.0 is null-sec


def classify_security(security: float) -> SecurityClass:
    """
    Return security classification for a raw security value.

    - HIGH: security >= 0.5
    - LOW: 0.0 < security < 0.5
    - NULL: security <= 0.0
    """
    if security >= HIGHSEC_THRESHOLD:
        return "HIGH"
    elif security > LOWSEC_THRESHOLD:
        return "LOW"
    return "NULL"


class Coordinate(NamedTuple):
    """Position of a system in raw universe units (meters)."""

    x: float
    y: float
    z: float

    def distance_to(self, other: Coordinate) -> float:
        """Euclidean distance in raw units."""
        return math.dist(self, other)


@dataclass(frozen=True, slots=True)
class System:
    """
    A solar system: a node of the space graph.

    Attributes:
        id: EVE solar system ID
        name: Display name ("Jita")
        coordinate: Position in meters
        security: Continuous security status in [-1.0, 1.0]
        region_name: Region name, when the data source provides it
        constellation_id: Constellation ID, when known
        region_id: Region ID, when known
    """

    id: SystemId
    name: str
    coordinate: Coordinate
    security: float
    region_name: Optional[str] = None
    constellation_id: Optional[int] = None
    region_id: Optional[int] = None

    @property
    def security_class(self) -> SecurityClass:
        return classify_security(self.security)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "coordinate": list(self.coordinate),
            "security": self.security,
            "security_class": self.security_class,
            "region_name": self.region_name,
            "constellation_id": self.constellation_id,
            "region_id": self.region_id,
        }


class StargateType(str, Enum):
    """Stargate sub-kind, derived from the endpoints' region and constellation."""

    LOCAL = "local"
    CONSTELLATION = "constellation"
    REGIONAL = "regional"


def stargate_type_between(
    from_region: int,
    from_constellation: int,
    to_region: int,
    to_constellation: int,
) -> StargateType:
    """Derive the stargate sub-kind for a jump between two systems."""
    if from_region != to_region:
        return StargateType.REGIONAL
    if from_constellation != to_constellation:
        return StargateType.CONSTELLATION
    return StargateType.LOCAL


@dataclass(frozen=True, slots=True)
class Stargate:
    type: StargateType = StargateType.LOCAL


@dataclass(frozen=True, slots=True)
class Wormhole:
    """
    A wormhole connection.

    All limits are optional; the navigation core never interprets them,
    they are carried for callers that display or filter on them.
    """

    max_mass: Optional[int] = None
    max_jump_mass: Optional[int] = None
    remaining_hours: Optional[float] = None
    signature: Optional[str] = None


ConnectionKind = Union[Stargate, Wormhole]


@dataclass(frozen=True, slots=True)
class Connection:
    """A directed traversable link between two systems."""

    from_id: SystemId
    to_id: SystemId
    kind: ConnectionKind = Stargate()

    @property
    def is_stargate(self) -> bool:
        return isinstance(self.kind, Stargate)

    @property
    def is_wormhole(self) -> bool:
        return isinstance(self.kind, Wormhole)

    def reversed(self) -> Connection:
        """Same connection in the opposite direction."""
        return Connection(self.to_id, self.from_id, self.kind)


class Navigatable(Protocol):
    """
    Read capability shared by every graph view.

    Router and range queries only depend on this protocol, so a SpaceGraph,
    a GraphOverlay or any in-memory test double can be navigated.
    """

    def get_system(self, system_id: SystemId) -> Optional[System]: ...

    def get_connections(self, system_id: SystemId) -> Sequence[Connection]: ...

    def all_systems(self) -> Sequence[System]: ...
