import pytest

from orbitfield.core.complex import Complex
from orbitfield.core.iteration import Iterator, iterate, trace_orbit
from orbitfield.errors import ConfigurationError
from orbitfield.state.markers import Marker, default_markers


def test_iterate_single_value_squares():
    assert iterate([Complex(0.5, 0.5)]) == Complex(0.0, 0.5)


def test_iterate_adds_second_value():
    assert iterate([Complex(0, 0), Complex(0.3, 0.4)]) == Complex(0.3, 0.4)


def test_trace_orbit_stops_near_origin():
    # 0.5 -> 0.25 -> 0.0625 -> 0.0039 (within 0.01 of 0)
    points = list(trace_orbit([Complex(0.5, 0.0)], max_iter=100))
    assert points == [Complex(0.25, 0.0), Complex(0.0625, 0.0), Complex(0.00390625, 0.0)]


def test_trace_orbit_respects_max_iter():
    points = list(trace_orbit([Complex(0.5, 0.5), Complex(-1.0, 0.0)], max_iter=3))
    assert points == [Complex(-1.0, 0.5), Complex(-0.25, -1.0), Complex(-1.9375, 0.5)]


def test_iterator_requires_a_marker():
    with pytest.raises(ConfigurationError):
        Iterator([])


def test_iterator_params_follow_markers():
    markers = default_markers((0.1, 0.2), (-0.3, -0.5))
    it = Iterator(markers.markers)
    assert it.params() == [Complex(0.1, 0.2), Complex(-0.3, -0.5)]
    markers.get("A").move_to(0.0, 0.0)
    assert it.params()[0] == Complex(0.0, 0.0)


def test_iterator_single_marker_trace():
    it = Iterator([Marker("A", 0.5, 0.0)])
    assert it.trace(1) == [Complex(0.25, 0.0)]
