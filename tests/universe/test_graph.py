"""
Tests for SpaceGraph construction and lookups.
"""

from __future__ import annotations

import pytest

from neweden.universe import (
    Connection,
    ConstructionError,
    Coordinate,
    GraphOverlay,
    SpaceGraph,
    Stargate,
    StargateType,
    System,
    UniverseBuildError,
    Wormhole,
)
from tests.conftest import JITA, MAURASI, PERIMETER, URLEN


def _system(system_id: int, name: str | None = None, sec: float = 0.9) -> System:
    return System(system_id, name or f"S{system_id}", Coordinate(0.0, 0.0, 0.0), sec)


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Test validation during construction."""

    def test_dangling_connection_rejected(self):
        """An edge to system 99 without a system 99 fails the build."""
        with pytest.raises(ConstructionError, match="99"):
            SpaceGraph([_system(1), _system(2)], [Connection(1, 2), Connection(2, 99)])

    def test_dangling_origin_rejected(self):
        with pytest.raises(ConstructionError):
            SpaceGraph([_system(1)], [Connection(99, 1)])

    def test_duplicate_system_rejected(self):
        with pytest.raises(ConstructionError, match="Duplicate"):
            SpaceGraph([_system(1), _system(1, "Other")], [])

    def test_construction_error_is_build_error(self):
        """Callers handling UniverseBuildError also catch construction failures."""
        assert issubclass(ConstructionError, UniverseBuildError)

    def test_empty_graph(self):
        graph = SpaceGraph([], [])

        assert len(graph) == 0
        assert graph.all_systems() == ()
        assert graph.get_connections(1) == ()


class TestStargateReciprocity:
    """Stargates are bidirectional with equal cost in both directions."""

    def test_missing_reverse_inserted(self):
        graph = SpaceGraph([_system(1), _system(2)], [Connection(1, 2, Stargate(StargateType.REGIONAL))])

        assert graph.get_connections(2) == (Connection(2, 1, Stargate(StargateType.REGIONAL)),)
        assert graph.connection_count == 2

    def test_existing_reverse_not_duplicated(self):
        graph = SpaceGraph([_system(1), _system(2)], [Connection(1, 2), Connection(2, 1)])

        assert len(graph.get_connections(1)) == 1
        assert len(graph.get_connections(2)) == 1
        assert graph.connection_count == 2

    def test_every_stargate_has_reverse(self, standard_universe):
        for system in standard_universe.all_systems():
            for connection in standard_universe.get_connections(system.id):
                reverse_targets = [c.to_id for c in standard_universe.get_connections(connection.to_id)]
                assert system.id in reverse_targets

    def test_wormholes_stay_directed(self):
        graph = SpaceGraph([_system(1), _system(2)], [Connection(1, 2, Wormhole())])

        assert len(graph.get_connections(1)) == 1
        assert graph.get_connections(2) == ()

    def test_exact_duplicates_collapsed(self):
        graph = SpaceGraph([_system(1), _system(2)], [Connection(1, 2), Connection(1, 2)])

        assert len(graph.get_connections(1)) == 1


# =============================================================================
# Lookups
# =============================================================================


class TestLookups:
    """Test read interface."""

    def test_get_system(self, standard_universe):
        jita = standard_universe.get_system(JITA)

        assert jita is not None
        assert jita.name == "Jita"

    def test_get_system_unknown(self, standard_universe):
        assert standard_universe.get_system(12345) is None

    def test_get_connections_unknown(self, standard_universe):
        assert standard_universe.get_connections(12345) == ()

    def test_get_connections_order_stable(self, standard_universe):
        first = [c.to_id for c in standard_universe.get_connections(JITA)]
        second = [c.to_id for c in standard_universe.get_connections(JITA)]

        assert first == second
        assert set(first) == {PERIMETER, MAURASI}

    def test_all_systems_id_order(self, standard_universe):
        ids = [s.id for s in standard_universe.all_systems()]

        assert ids == sorted(ids)
        assert standard_universe.all_systems() == standard_universe.all_systems()

    def test_contains_and_len(self, standard_universe):
        assert JITA in standard_universe
        assert 12345 not in standard_universe
        assert len(standard_universe) == 6
        assert standard_universe.system_count == 6

    def test_connections_iterates_all(self, standard_universe):
        assert len(list(standard_universe.connections())) == standard_universe.connection_count == 12


class TestResolveName:
    """Test case-insensitive name resolution."""

    @pytest.mark.parametrize("name", ["jita", "JITA", "JiTa", "Jita"])
    def test_case_variations(self, standard_universe, name):
        assert standard_universe.resolve_name(name) == JITA

    def test_unknown(self, standard_universe):
        assert standard_universe.resolve_name("Nowhere") is None


class TestImmutability:
    """Graph state cannot change after construction."""

    def test_adjacency_mapping_read_only(self, standard_universe):
        with pytest.raises(TypeError):
            standard_universe._adjacency[JITA] = ()  # type: ignore[index]

    def test_connections_are_tuples(self, standard_universe):
        assert isinstance(standard_universe.get_connections(JITA), tuple)

    def test_no_new_attributes(self, standard_universe):
        with pytest.raises(AttributeError):
            standard_universe.extra = 1  # type: ignore[attr-defined]

    def test_extend_returns_overlay(self, standard_universe):
        overlay = standard_universe.extend()

        assert isinstance(overlay, GraphOverlay)
        assert overlay.base is standard_universe

    def test_input_list_mutation_does_not_leak(self):
        systems = [_system(1), _system(2)]
        connections = [Connection(1, 2)]
        graph = SpaceGraph(systems, connections)

        systems.append(_system(3))
        connections.append(Connection(2, 3))

        assert len(graph) == 2
        assert [c.to_id for c in graph.get_connections(2)] == [1]

    def test_repr(self, standard_universe):
        assert "systems=6" in repr(standard_universe)
        assert URLEN in standard_universe
