"""
Tests for GraphOverlay.
"""

from __future__ import annotations

import pytest

from neweden.universe import Connection, GraphOverlay, OverlayError, Wormhole
from tests.conftest import JITA, PERIMETER, URLEN


class TestAddConnections:
    """Test adding temporary connections."""

    def test_wormhole_visible_both_ways(self, line_universe):
        overlay = line_universe.extend()
        overlay.add_wormhole(1, 3)

        assert 3 in [c.to_id for c in overlay.get_connections(1)]
        assert 1 in [c.to_id for c in overlay.get_connections(3)]

    def test_base_untouched(self, line_universe):
        before = line_universe.get_connections(1)
        overlay = line_universe.extend()
        overlay.add_wormhole(1, 3)

        assert line_universe.get_connections(1) == before
        assert [c.to_id for c in line_universe.get_connections(1)] == [2]

    def test_base_connections_first(self, line_universe):
        overlay = line_universe.extend()
        overlay.add_connection(Connection(1, 3, Wormhole()))

        assert [c.to_id for c in overlay.get_connections(1)] == [2, 3]

    def test_unknown_endpoint_rejected(self, line_universe):
        overlay = line_universe.extend()

        with pytest.raises(OverlayError) as exc_info:
            overlay.add_connection(Connection(1, 99, Wormhole()))

        assert exc_info.value.system_id == 99
        assert overlay.added_connections() == []

    def test_unknown_wormhole_origin_rejected(self, line_universe):
        overlay = line_universe.extend()

        with pytest.raises(OverlayError, match="42"):
            overlay.add_wormhole(42, 1)

    def test_with_added(self, line_universe):
        overlay = GraphOverlay.with_added(line_universe, [Connection(3, 1, Wormhole(signature="XYZ-001"))])

        assert overlay.added_connections() == [Connection(3, 1, Wormhole(signature="XYZ-001"))]
        assert [c.to_id for c in overlay.get_connections(1)] == [2]

    def test_wormhole_metadata_kept(self, line_universe):
        overlay = line_universe.extend()
        overlay.add_wormhole(1, 3, Wormhole(max_mass=1_000, remaining_hours=4.0))

        added = [c for c in overlay.get_connections(1) if c.is_wormhole]
        assert added[0].kind.max_mass == 1_000
        assert added[0].kind.remaining_hours == 4.0


class TestRemoveConnections:
    """Test hiding connections."""

    def test_remove_pair(self, standard_universe):
        overlay = standard_universe.extend()
        overlay.remove_connection(JITA, PERIMETER)

        assert PERIMETER not in [c.to_id for c in overlay.get_connections(JITA)]
        # Only the named direction is hidden
        assert JITA in [c.to_id for c in overlay.get_connections(PERIMETER)]
        assert PERIMETER in [c.to_id for c in standard_universe.get_connections(JITA)]

    def test_remove_where(self, standard_universe):
        overlay = standard_universe.extend()
        overlay.remove_where(lambda c: c.to_id == URLEN)

        for system in overlay.all_systems():
            assert URLEN not in [c.to_id for c in overlay.get_connections(system.id)]

    def test_remove_applies_to_additions(self, line_universe):
        overlay = line_universe.extend()
        overlay.add_wormhole(1, 3)
        overlay.remove_connection(1, 3)

        assert [c.to_id for c in overlay.get_connections(1)] == [2]
        assert [c.to_id for c in overlay.get_connections(3)] == [2, 1]


class TestReadDelegation:
    """Overlay answers system queries from the base graph."""

    def test_get_system(self, line_universe):
        overlay = line_universe.extend()

        assert overlay.get_system(2) is line_universe.get_system(2)
        assert overlay.get_system(99) is None

    def test_all_systems(self, line_universe):
        assert line_universe.extend().all_systems() == line_universe.all_systems()

    def test_resolve_name(self, line_universe):
        assert line_universe.extend().resolve_name("b") == 2

    def test_contains(self, line_universe):
        overlay = line_universe.extend()

        assert 1 in overlay
        assert 99 not in overlay

    def test_unchanged_overlay_returns_base(self, line_universe):
        overlay = line_universe.extend()

        assert overlay.get_connections(2) is line_universe.get_connections(2)
