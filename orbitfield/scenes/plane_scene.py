from __future__ import annotations

import logging
from typing import Optional, Tuple

import pygame

from orbitfield import config
from orbitfield.core.field import FieldBuffer
from orbitfield.core.iteration import Iterator
from orbitfield.core.palette import get_palette
from orbitfield.core.scheduler import FieldScheduler, VariableMarker
from orbitfield.state.markers import Marker, MarkerSet, default_markers
from orbitfield.ui.widgets import ChoiceWidget, StepperWidget, VBox, WidgetContext
from orbitfield.view.transform import PlaneTransform

from .base import Scene, surface_event

logger = logging.getLogger(__name__)

# marker grab distance, in multiples of the marker radius
GRAB_FACTOR = 4


class PlaneScene(Scene):
    """
    The complex plane with two draggable markers A and B.

    - Left drag a marker: move it; the field is recomputed on release
      unless the moved marker is the variable one
    - V / Tab: swap which marker is swept across the field
    - Up/Down: orbit iteration count; Left/Right: dot radius; [ / ]: line width
    - Esc: quit
    """

    def __init__(self, cfg: config.ToyConfig, markers: Optional[MarkerSet] = None) -> None:
        self.cfg = cfg
        self.transform = PlaneTransform(
            cfg.view_width,
            cfg.view_height,
            cfg.plane_width,
            cfg.plane_height,
            cfg.plane_unit,
        )
        if markers is None:
            markers = default_markers(cfg.marker_a, cfg.marker_b)
        self.markers = markers
        self.iterator = Iterator(self.markers.markers)
        self.palette = get_palette(cfg.palette)
        self.buffer = FieldBuffer(cfg.view_width, cfg.view_height)
        self.scheduler = FieldScheduler(
            self.buffer,
            self.markers,
            self.transform,
            self.palette,
            cfg.field,
            cfg.variable_marker,
        )

        # live orbit settings
        self.max_iter = cfg.max_iter
        self.iter_radius = cfg.iter_radius
        self.iter_line_width = cfg.iter_line_width

        self.dragging: Optional[Marker] = None
        self.mouse_plane: Tuple[float, float] = (0.0, 0.0)
        self.frame_ms = 0
        self._since_tick_ms = cfg.field.batch_interval_ms

        self.controls = self._build_controls()

    # ------------------------------------------------------------
    # Controls

    def _build_controls(self) -> VBox:
        panel = VBox(spacing=4, padding=6)
        panel.rect.topleft = (10, 30)
        self.iterations_ctl = panel.add_child(StepperWidget(
            "iterations", lambda: self.max_iter, self._set_max_iter,
            minimum=0, maximum=10000, step=10,
        ))
        self.radius_ctl = panel.add_child(StepperWidget(
            "radius", lambda: self.iter_radius, self._set_iter_radius,
            minimum=0, maximum=20,
        ))
        self.line_width_ctl = panel.add_child(StepperWidget(
            "line width", lambda: self.iter_line_width, self._set_iter_line_width,
            minimum=0, maximum=10,
        ))
        panel.add_child(ChoiceWidget(
            "variable", [v.value for v in VariableMarker],
            lambda: self.scheduler.variable.value, self.scheduler.set_variable,
        ))
        return panel

    def _set_max_iter(self, value: int) -> None:
        self.max_iter = value

    def _set_iter_radius(self, value: int) -> None:
        self.iter_radius = value

    def _set_iter_line_width(self, value: int) -> None:
        self.iter_line_width = value

    # ------------------------------------------------------------
    # Markers

    def marker_at(self, sx: float, sy: float) -> Optional[Marker]:
        for marker in self.markers:
            mx, my = self.transform.to_screen(marker.x, marker.y)
            reach = marker.radius * GRAB_FACTOR
            if (mx - sx) ** 2 + (my - sy) ** 2 < reach ** 2:
                return marker
        return None

    def _release(self) -> None:
        marker = self.dragging
        if marker is None:
            return
        marker.selected = False
        self.dragging = None
        logger.debug("marker %s released at (%.4f, %.4f)", marker.name, marker.x, marker.y)
        self.markers.notify(marker)

    # ------------------------------------------------------------
    # Live-loop hooks

    def handle_event(self, event, manager) -> None:  # type: ignore[override]
        event = surface_event(event, manager)
        ctx = WidgetContext(
            surface=getattr(manager.renderer, "surface", None),
            scene=self,
            renderer=manager.renderer,
        )
        if self.dragging is None and self.controls.handle_event(event, ctx):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            marker = self.marker_at(*event.pos)
            if marker is not None:
                marker.selected = True
                self.dragging = marker

        elif event.type == pygame.MOUSEMOTION:
            self.mouse_plane = self.transform.to_plane(*event.pos)
            if self.dragging is not None:
                self.dragging.move_to(*self.mouse_plane)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._release()

        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key, manager)

    def _handle_key(self, key: int, manager) -> None:
        if key == pygame.K_ESCAPE:
            manager.set_scene(None)
        elif key in (pygame.K_v, pygame.K_TAB):
            choice = self.scheduler.toggle_variable()
            logger.info("variable marker is now %s", choice.value)
        elif key == pygame.K_UP:
            self.iterations_ctl.nudge(1)
        elif key == pygame.K_DOWN:
            self.iterations_ctl.nudge(-1)
        elif key == pygame.K_RIGHT:
            self.radius_ctl.nudge(1)
        elif key == pygame.K_LEFT:
            self.radius_ctl.nudge(-1)
        elif key == pygame.K_RIGHTBRACKET:
            self.line_width_ctl.nudge(1)
        elif key == pygame.K_LEFTBRACKET:
            self.line_width_ctl.nudge(-1)

    def update(self, dt_ms: int, manager) -> None:  # type: ignore[override]
        self._since_tick_ms += dt_ms
        if self._since_tick_ms < self.cfg.field.batch_interval_ms:
            return
        self._since_tick_ms = 0
        self.scheduler.tick()

    def render(self, renderer, manager) -> None:  # type: ignore[override]
        start = pygame.time.get_ticks()
        tr = self.transform

        renderer.clear()
        renderer.draw_field(self.buffer)
        renderer.draw_axes(tr)

        params = self.iterator.params()
        renderer.draw_orbit(
            tr,
            params[0],
            self.iterator.trace(self.max_iter),
            self.iter_radius,
            self.iter_line_width,
        )
        for marker in self.markers:
            renderer.draw_marker(tr, marker)

        ctx = WidgetContext(surface=renderer.surface, scene=self, renderer=renderer)
        self.controls.layout(ctx)
        self.controls.draw(ctx)

        renderer.draw_status(
            self.mouse_plane,
            self.frame_ms,
            self.scheduler.progress,
            self.scheduler.variable_name(),
        )
        renderer.present()
        self.frame_ms = pygame.time.get_ticks() - start
