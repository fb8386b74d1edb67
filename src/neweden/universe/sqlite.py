"""
SQLite static dump loader.

Loads systems and stargate jumps from a CCP static data dump converted to
SQLite (for example the fuzzwork.co.uk dumps). The database is opened
read-only through a URI connection.

Usage:
    from neweden.universe.sqlite import DatabaseBuilder

    universe = DatabaseBuilder("file:sde.sqlite").build()
    jita = universe.get_system(30000142)
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from neweden.core.logging import get_logger

from .errors import UniverseBuildError
from .graph import SpaceGraph
from .types import Connection, Coordinate, Stargate, System, stargate_type_between

logger = get_logger(__name__)

SYSTEMS_QUERY = """
    SELECT solarSystemID, solarSystemName, s.x, s.y, s.z, security,
           regionName, constellationID, regionID
    FROM mapSolarSystems s
    JOIN mapRegions r USING (regionID)
"""

JUMPS_QUERY = """
    SELECT
        fromRegionID,
        fromConstellationID,
        fromSolarSystemID,
        toRegionID,
        toConstellationID,
        toSolarSystemID
    FROM mapSolarSystemJumps
"""


def _read_only_uri(uri: str) -> str:
    """Turn a path or file: URI into a read-only SQLite URI."""
    if not uri.startswith("file:"):
        uri = Path(uri).resolve().as_uri()
    if "mode=" in uri:
        return uri
    separator = "&" if "?" in uri else "?"
    return f"{uri}{separator}mode=ro"


class DatabaseBuilder:
    """
    Builds a SpaceGraph from a SQLite static dump.

    The resulting graph is immutable. To add dynamic connections such as
    wormholes, wrap it with `graph.extend()`.
    """

    def __init__(self, uri: str) -> None:
        self.uri = uri

    def build(self) -> SpaceGraph:
        """
        Open the database read-only and build the graph.

        Raises:
            UniverseBuildError: If the database cannot be read
        """
        try:
            conn = sqlite3.connect(_read_only_uri(self.uri), uri=True)
        except sqlite3.Error as e:
            raise UniverseBuildError(f"Cannot open static dump {self.uri}: {e}") from e
        try:
            return self.from_connection(conn)
        finally:
            conn.close()

    @staticmethod
    def from_connection(conn: sqlite3.Connection) -> SpaceGraph:
        """Build a graph from an already open connection."""
        try:
            systems = [
                System(
                    id=int(row[0]),
                    name=row[1],
                    coordinate=Coordinate(float(row[2]), float(row[3]), float(row[4])),
                    security=float(row[5]),
                    region_name=row[6],
                    constellation_id=row[7],
                    region_id=row[8],
                )
                for row in conn.execute(SYSTEMS_QUERY)
            ]

            connections = []
            for row in conn.execute(JUMPS_QUERY):
                from_region, from_constellation, from_system = row[0], row[1], row[2]
                to_region, to_constellation, to_system = row[3], row[4], row[5]
                gate_type = stargate_type_between(
                    from_region, from_constellation, to_region, to_constellation
                )
                connections.append(Connection(int(from_system), int(to_system), Stargate(gate_type)))
        except sqlite3.Error as e:
            raise UniverseBuildError(f"Failed to read static dump: {e}") from e

        logger.info(
            "Loaded %d systems and %d jumps from static dump",
            len(systems),
            len(connections),
        )
        return SpaceGraph(systems, connections, version="sde")
