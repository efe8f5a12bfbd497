import pytest

from orbitfield.core.complex import Complex
from orbitfield.errors import ConfigurationError
from orbitfield.state.markers import Marker, MarkerSet, default_markers


def test_default_markers_order_and_values():
    markers = default_markers()
    assert [m.name for m in markers] == ["A", "B"]
    assert [m.value for m in markers] == [Complex(0.1, 0.2), Complex(-0.3, -0.5)]


def test_move_notifies_listeners_once():
    markers = default_markers()
    heard = []
    markers.register_update(heard.append)
    moved = markers.move("B", 0.4, 0.6)
    assert heard == [moved]
    assert moved.value == Complex(0.4, 0.6)


def test_move_to_is_silent():
    markers = default_markers()
    heard = []
    markers.register_update(heard.append)
    markers.get("A").move_to(0.9, 0.9)
    assert heard == []


def test_unknown_marker_name():
    markers = default_markers()
    with pytest.raises(ConfigurationError):
        markers.get("C")


def test_duplicate_names_are_rejected():
    with pytest.raises(ConfigurationError):
        MarkerSet([Marker("A", 0, 0), Marker("A", 1, 1)])
