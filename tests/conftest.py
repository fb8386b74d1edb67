"""
neweden Test Suite - Shared Fixtures and Configuration

Provides graph factories, standard test universes and the autouse
reset fixture that keeps settings and logging state isolated per test.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from neweden.services.navigation.range_finder import METERS_PER_LIGHT_YEAR
from neweden.universe import Connection, Coordinate, SpaceGraph, Stargate, System, Wormhole

LY = METERS_PER_LIGHT_YEAR


# =============================================================================
# Graph Factory
# =============================================================================


def create_space_graph(
    systems: list[dict[str, Any]],
    edges: list[tuple[int, int]],
    wormholes: list[tuple[int, int]] | None = None,
) -> SpaceGraph:
    """
    Factory function to create a SpaceGraph for testing.

    Args:
        systems: List of system dicts with keys: id, name, sec and optionally pos (in ly)
        edges: List of (from_id, to_id) stargates; the reverse is added by the graph
        wormholes: Optional list of (from_id, to_id) one-way wormhole connections

    Example:
        systems = [
            {"id": 1, "name": "A", "sec": 0.9},
            {"id": 2, "name": "B", "sec": 0.3},
        ]
        graph = create_space_graph(systems, [(1, 2)])
    """
    records = [
        System(
            id=s["id"],
            name=s["name"],
            coordinate=Coordinate(*(c * LY for c in s.get("pos", (0.0, 0.0, 0.0)))),
            security=s["sec"],
            region_name=s.get("region"),
        )
        for s in systems
    ]
    connections = [Connection(a, b, Stargate()) for a, b in edges]
    connections += [Connection(a, b, Wormhole()) for a, b in wormholes or []]
    return SpaceGraph(records, connections, version="test-1.0")


# Standard 6-system universe
#
#     Jita (0.95) -- Perimeter (0.90)
#        |                |
#     Maurasi (0.65) -- Urlen (0.85)
#        |
#     Sivala (0.35)
#        |
#     Ala (-0.2)
JITA = 30000142
PERIMETER = 30000144
MAURASI = 30000140
URLEN = 30000138
SIVALA = 30000160
ALA = 30000161

STANDARD_SYSTEMS = [
    {"id": JITA, "name": "Jita", "sec": 0.95, "pos": (0.0, 0.0, 0.0), "region": "The Forge"},
    {"id": PERIMETER, "name": "Perimeter", "sec": 0.90, "pos": (1.0, 0.0, 0.0), "region": "The Forge"},
    {"id": MAURASI, "name": "Maurasi", "sec": 0.65, "pos": (0.0, 2.0, 0.0), "region": "The Forge"},
    {"id": URLEN, "name": "Urlen", "sec": 0.85, "pos": (3.0, 0.0, 0.0), "region": "The Forge"},
    {"id": SIVALA, "name": "Sivala", "sec": 0.35, "pos": (0.0, 0.0, 4.0), "region": "The Forge"},
    {"id": ALA, "name": "Ala", "sec": -0.2, "pos": (0.0, 0.0, 10.0), "region": "Outer Region"},
]

STANDARD_EDGES = [
    (JITA, PERIMETER),
    (JITA, MAURASI),
    (PERIMETER, URLEN),
    (MAURASI, URLEN),
    (MAURASI, SIVALA),
    (SIVALA, ALA),
]

# Three systems in a line: A(1, 0.9) -- B(2, 0.3) -- C(3, -0.5)
LINE_SYSTEMS = [
    {"id": 1, "name": "A", "sec": 0.9, "pos": (0.0, 0.0, 0.0)},
    {"id": 2, "name": "B", "sec": 0.3, "pos": (1.0, 0.0, 0.0)},
    {"id": 3, "name": "C", "sec": -0.5, "pos": (2.0, 0.0, 0.0)},
]
LINE_EDGES = [(1, 2), (2, 3)]


@pytest.fixture
def standard_universe() -> SpaceGraph:
    """Standard 6-system universe for routing tests."""
    return create_space_graph(STANDARD_SYSTEMS, STANDARD_EDGES)


@pytest.fixture
def line_universe() -> SpaceGraph:
    """A -- B -- C line with high, low and null-sec systems."""
    return create_space_graph(LINE_SYSTEMS, LINE_EDGES)


# =============================================================================
# Universe Cache Fixtures
# =============================================================================


@pytest.fixture
def sample_cache_data() -> dict:
    """
    Minimal universe cache in the ESI export layout.

    Jita -- Perimeter -- Urlen -- Sivala -- Aufay <- Ala (one-way gate)

    Jita, Perimeter and Urlen share a constellation; Sivala is in another
    constellation of the same region; Aufay and Ala are in another region.
    """
    return {
        "systems": {
            "30000142": {
                "name": "Jita",
                "security": 0.9459,
                "constellation_id": 20000020,
                "stargates": [50001248],
                "position": {"x": 0.0, "y": 0.0, "z": 0.0},
            },
            "30000144": {
                "name": "Perimeter",
                "security": 0.9072,
                "constellation_id": 20000020,
                "stargates": [50001250, 50001251],
                "position": {"x": LY, "y": 0.0, "z": 0.0},
            },
            "30000139": {
                "name": "Urlen",
                "security": 0.6500,
                "constellation_id": 20000020,
                "stargates": [50001252, 50001253],
                "position": {"x": 2 * LY, "y": 0.0, "z": 0.0},
            },
            "30000138": {
                "name": "Sivala",
                "security": 0.5000,
                "constellation_id": 20000021,
                "stargates": [50001254, 50001255],
                "position": {"x": 3 * LY, "y": 0.0, "z": 0.0},
            },
            "30000137": {
                "name": "Aufay",
                "security": 0.3500,
                "constellation_id": 20000030,
                "stargates": [50001256],
                "position": {"x": 4 * LY, "y": 0.0, "z": 0.0},
            },
            "30000136": {
                "name": "Ala",
                "security": 0.2000,
                "constellation_id": 20000030,
                "stargates": [50001257, 50009999],
                "position": {"x": 5 * LY, "y": 0.0, "z": 0.0},
            },
        },
        "stargates": {
            "50001248": {"destination_system_id": 30000144},  # Jita -> Perimeter
            "50001250": {"destination_system_id": 30000142},  # Perimeter -> Jita
            "50001251": {"destination_system_id": 30000139},  # Perimeter -> Urlen
            "50001252": {"destination_system_id": 30000144},  # Urlen -> Perimeter
            "50001253": {"destination_system_id": 30000138},  # Urlen -> Sivala
            "50001254": {"destination_system_id": 30000139},  # Sivala -> Urlen
            "50001255": {"destination_system_id": 30000137},  # Sivala -> Aufay
            "50001256": {"destination_system_id": 30000138},  # Aufay -> Sivala
            "50001257": {"destination_system_id": 30000137},  # Ala -> Aufay (one-way in data)
            "50009999": {"destination_system_id": 31000005},  # Ala -> system outside cache
        },
        "constellations": {
            "20000020": {"name": "Kimotoro", "region_id": 10000002},
            "20000021": {"name": "Otanuomi", "region_id": 10000002},
            "20000030": {"name": "Okkelen", "region_id": 10000033},
        },
        "regions": {
            "10000002": {"name": "The Forge"},
            "10000033": {"name": "The Citadel"},
        },
        "generated": "test-1.0",
    }


@pytest.fixture
def sample_cache_path(tmp_path: Path, sample_cache_data: dict) -> Path:
    """Write the sample cache to a temporary JSON file."""
    path = tmp_path / "universe_cache.json"
    path.write_text(json.dumps(sample_cache_data))
    return path


@pytest.fixture
def sample_graph_path(tmp_path: Path, standard_universe: SpaceGraph) -> Path:
    """Standard universe saved in .universe format."""
    from neweden.universe.serialization import save_space_graph

    path = tmp_path / "universe.universe"
    save_space_graph(standard_universe, path)
    return path


# =============================================================================
# State Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_all_singletons():
    """Reset settings and logging state before and after each test."""

    def do_reset():
        from neweden.core.config import reset_settings
        from neweden.core.logging import reset_logging

        # Settings first - logging reads from settings
        reset_settings()
        reset_logging()

    do_reset()
    yield
    do_reset()
