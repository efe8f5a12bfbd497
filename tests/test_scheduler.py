import math

import numpy as np
import pytest

from orbitfield.config import FieldConfig
from orbitfield.core.classify import classify
from orbitfield.core.complex import Complex
from orbitfield.core.field import FieldBuffer
from orbitfield.core.palette import get_palette
from orbitfield.core.scheduler import FieldScheduler, VariableMarker
from orbitfield.errors import ConfigurationError
from orbitfield.state.markers import Marker, MarkerSet, default_markers
from orbitfield.view.transform import PlaneTransform

W, H = 12, 9
WHITE = (255, 255, 255, 255)


class RecordingMapper:
    def __init__(self, inner) -> None:
        self.inner = inner
        self.calls = []

    def to_plane(self, sx, sy):
        self.calls.append((sx, sy))
        return self.inner.to_plane(sx, sy)


def make_scheduler(batch=10, variable="A", markers=None, mapper=None):
    if markers is None:
        markers = default_markers()
    buf = FieldBuffer(W, H)
    mapper = mapper or PlaneTransform(W, H)
    sched = FieldScheduler(
        buf, markers, mapper, get_palette("indigo"),
        FieldConfig(pixel_batch=batch), variable,
    )
    return sched, buf, markers


def fill(sched, clock):
    while not sched.is_complete:
        sched.tick(clock)


def test_complete_after_bounded_number_of_ticks(frozen_clock):
    sched, buf, _ = make_scheduler(batch=10)
    ticks = 0
    while not sched.is_complete:
        sched.tick(frozen_clock)
        ticks += 1
    assert ticks == math.ceil(W * H / 10)
    assert buf.cursor == W * H


def test_ticks_after_completion_are_no_ops(frozen_clock):
    sched, buf, _ = make_scheduler(batch=50)
    fill(sched, frozen_clock)
    snapshot = buf.data.copy()
    assert sched.tick(frozen_clock) == 0
    assert buf.cursor == W * H
    assert np.array_equal(buf.data, snapshot)


def test_tick_stops_when_time_budget_is_spent(stepping_clock):
    sched, buf, _ = make_scheduler(batch=1000)
    # clock moves 1ms per reading: readings 1..10 are within a 10ms budget
    assert sched.tick(stepping_clock, budget_ms=10) == 10
    assert buf.cursor == 10


def test_pixel_batch_caps_a_tick_even_with_a_stuck_clock(frozen_clock):
    sched, buf, _ = make_scheduler(batch=7)
    assert sched.tick(frozen_clock) == 7
    assert buf.cursor == 7


def test_traversal_is_row_major_without_skips_or_repeats(frozen_clock):
    mapper = RecordingMapper(PlaneTransform(W, H))
    sched, _, _ = make_scheduler(batch=5, mapper=mapper)
    fill(sched, frozen_clock)
    assert mapper.calls == [(x, y) for y in range(H) for x in range(W)]


def test_every_pixel_is_written_opaque(frozen_clock):
    sched, buf, _ = make_scheduler(batch=500)
    fill(sched, frozen_clock)
    assert (buf.data[:, :, 3] == 255).all()


def test_variable_a_sweeps_the_orbit_start(frozen_clock):
    sched, buf, markers = make_scheduler(batch=500, variable=VariableMarker.A)
    fill(sched, frozen_clock)
    palette = get_palette("indigo")
    x, y = 3, 4
    px, py = sched.mapper.to_plane(x, y)
    expected = classify(Complex(px, py), markers.get("B").value, len(palette), len(palette))
    assert buf.pixel(x, y)[:3] == expected.color(palette)


def test_variable_b_sweeps_the_constant(frozen_clock):
    sched, buf, markers = make_scheduler(batch=500, variable="b")
    fill(sched, frozen_clock)
    palette = get_palette("indigo")
    x, y = 7, 2
    px, py = sched.mapper.to_plane(x, y)
    expected = classify(markers.get("A").value, Complex(px, py), len(palette), len(palette))
    assert buf.pixel(x, y)[:3] == expected.color(palette)


def test_moving_the_fixed_marker_resets_the_field(frozen_clock):
    sched, buf, markers = make_scheduler(batch=20)
    sched.tick(frozen_clock)
    sched.tick(frozen_clock)
    markers.move("B", 0.25, 0.1)
    assert buf.cursor == -1
    assert all(buf.pixel(x, y) == WHITE for y in range(H) for x in range(W))


def test_moving_the_variable_marker_keeps_the_field(frozen_clock):
    sched, buf, markers = make_scheduler(batch=20)
    sched.tick(frozen_clock)
    snapshot = buf.data.copy()
    markers.move("A", 0.5, -0.5)
    assert buf.cursor == 20
    assert np.array_equal(buf.data, snapshot)
    assert buf.generation == 0


def test_changing_the_variable_choice_resets_the_field(frozen_clock):
    sched, buf, _ = make_scheduler(batch=20)
    sched.tick(frozen_clock)
    sched.set_variable(VariableMarker.B)
    assert buf.cursor == -1
    assert buf.generation == 1
    # now A is the fixed one
    sched.tick(frozen_clock)
    sched.markers.move("A", 0.0, 0.0)
    assert buf.generation == 2


def test_setting_the_same_variable_is_not_a_change(frozen_clock):
    sched, buf, _ = make_scheduler(batch=20)
    sched.tick(frozen_clock)
    sched.set_variable("A")
    assert buf.cursor == 20


def test_toggle_variable_flips_between_markers():
    sched, _, _ = make_scheduler()
    assert sched.toggle_variable() is VariableMarker.B
    assert sched.toggle_variable() is VariableMarker.A


def test_fill_resumes_after_invalidation(frozen_clock):
    sched, buf, markers = make_scheduler(batch=30)
    sched.tick(frozen_clock)
    markers.move("B", 0.3, 0.4)
    assert sched.tick(frozen_clock) == 30
    assert buf.cursor == 30


def test_single_marker_is_always_variable(frozen_clock):
    markers = MarkerSet([Marker("A", 0.2, 0.2)])
    sched, buf, _ = make_scheduler(batch=500, variable="B", markers=markers)
    assert sched.variable_name() == "A"
    fill(sched, frozen_clock)
    palette = get_palette("indigo")
    px, py = sched.mapper.to_plane(0, 0)
    expected = classify(Complex(px, py), None, len(palette), len(palette))
    assert buf.pixel(0, 0)[:3] == expected.color(palette)
    markers.move("A", 0.0, 0.0)
    assert buf.is_complete


def test_zero_markers_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        make_scheduler(markers=MarkerSet([]))


def test_unknown_variable_name_is_rejected():
    with pytest.raises(ConfigurationError):
        VariableMarker.parse("C")


def test_variable_choice_follows_marker_order_not_names(frozen_clock):
    markers = MarkerSet([Marker("z0", 0.1, 0.2), Marker("c", -0.3, -0.5)])
    sched, buf, _ = make_scheduler(batch=500, markers=markers)
    assert sched.variable_marker() is markers.get("z0")
    fill(sched, frozen_clock)
    colors = {buf.pixel(x, y) for y in range(H) for x in range(W)}
    assert len(colors) > 1

    markers.move("z0", 0.4, 0.4)
    assert buf.generation == 0
    markers.move("c", 0.0, 0.5)
    assert buf.generation == 1

    sched.set_variable(VariableMarker.B)
    assert sched.variable_name() == "c"
    assert sched.params_for(Complex(1.0, 1.0)) == [Complex(0.4, 0.4), Complex(1.0, 1.0)]


def test_single_marker_ignores_variable_changes(frozen_clock):
    markers = MarkerSet([Marker("A", 0.2, 0.2)])
    sched, buf, _ = make_scheduler(batch=20, markers=markers)
    sched.tick(frozen_clock)
    sched.set_variable(VariableMarker.B)
    sched.toggle_variable()
    assert buf.generation == 0
    assert buf.cursor == 20
    assert sched.variable_name() == "A"
