"""Pygame renderer for the complex plane: field, axes, orbit and markers."""
import math
from typing import Sequence, Tuple

import pygame

from orbitfield.core.complex import Complex
from orbitfield.core.field import FieldBuffer
from orbitfield.state.markers import Marker
from orbitfield.view.transform import PlaneTransform

TEXT_HEIGHT_PX = 15
MAX_SCREEN_COORD = 1e6


class CanvasRenderer:
    def __init__(self, width: int, height: int, caption: str = "orbitfield") -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.surface_flags = pygame.RESIZABLE
        # render surface at native resolution; display may be larger in fullscreen
        self.surface = pygame.Surface((width, height))
        self.fullscreen = False
        self.display = pygame.display.set_mode((width, height), self.surface_flags)
        self.lb_off = (0, 0)  # letterbox offset when centering
        self.lb_scale = 1.0   # letterbox scale factor
        pygame.display.set_caption(caption)
        self.font = pygame.font.SysFont("consolas", 16)
        self.small_font = pygame.font.SysFont("consolas", 13)
        self.bg = (255, 255, 255)
        self.fg = (220, 230, 240)
        self.ink = (0, 0, 0)
        self.dim = (120, 130, 150)
        self.sel = (255, 230, 120)
        self.orbit_dot_color = (211, 211, 211)  # lightgrey

    def _to_surface(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Convert display-space mouse coords to surface-space, accounting for letterbox and scale."""
        return (
            int((pos[0] - self.lb_off[0]) / max(1e-6, self.lb_scale)),
            int((pos[1] - self.lb_off[1]) / max(1e-6, self.lb_scale)),
        )

    def toggle_fullscreen(self) -> None:
        flags = self.display.get_flags()
        if flags & pygame.FULLSCREEN:
            self.display = pygame.display.set_mode((self.width, self.height), self.surface_flags)
            self.fullscreen = False
        else:
            self.display = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            self.fullscreen = True

    def handle_resize(self, w: int, h: int) -> None:
        # logical surface keeps its size; only the letterbox changes
        self.display = pygame.display.set_mode((w, h), self.surface_flags)

    # ------------------------------------------------------------------ #
    # Layers

    def clear(self) -> None:
        self.surface.fill(self.bg)

    def draw_field(self, buffer: FieldBuffer) -> None:
        """Blit a snapshot of the field buffer."""
        image = pygame.image.frombuffer(buffer.tobytes(), buffer.size, "RGBA")
        self.surface.blit(image, (0, 0))

    def _text(self, text: str, pos: Tuple[float, float], color=None) -> pygame.Surface:
        surf = self.small_font.render(text, True, color or self.ink)
        self.surface.blit(surf, (int(pos[0]), int(pos[1])))
        return surf

    def draw_axes(self, tr: PlaneTransform) -> None:
        ink = self.ink
        x0, y0 = tr.to_screen(-tr.width / 2, 0)
        x1, y1 = tr.to_screen(tr.width / 2, 0)
        pygame.draw.line(self.surface, ink, (x0, y0), (x1, y1), 1)
        x0, y0 = tr.to_screen(0, -tr.height / 2)
        x1, y1 = tr.to_screen(0, tr.height / 2)
        pygame.draw.line(self.surface, ink, (x0, y0), (x1, y1), 1)

        for peg in tr.pegs(tr.width):
            sx, sy = tr.to_screen(peg, 0)
            pygame.draw.line(self.surface, ink, (sx, sy - 5), (sx, sy + 5), 1)
            label = _peg_label(peg)
            tw, _ = self.small_font.size(label)
            dx = -tw * 2 if peg == 0 else -tw / 2
            self._text(label, (sx + dx, sy + 10))

        for peg in tr.pegs(tr.height):
            sx, sy = tr.to_screen(0, peg)
            pygame.draw.line(self.surface, ink, (sx - 5, sy), (sx + 5, sy), 1)
            if peg != 0:
                label = _peg_label(peg)
                tw, _ = self.small_font.size(label)
                self._text(label, (sx - tw - 10, sy - TEXT_HEIGHT_PX / 2))

    def draw_orbit(
        self,
        tr: PlaneTransform,
        start: Complex,
        points: Sequence[Complex],
        radius: int,
        line_width: int,
    ) -> None:
        prev = tr.to_screen(start.re, start.im)
        for z in points:
            cur = tr.to_screen(z.re, z.im)
            # pygame needs coordinates that fit a C int
            if not (math.isfinite(cur[0]) and math.isfinite(cur[1])):
                break
            if abs(cur[0]) > MAX_SCREEN_COORD or abs(cur[1]) > MAX_SCREEN_COORD:
                break
            if line_width > 0:
                pygame.draw.line(self.surface, self.ink, prev, cur, line_width)
            if radius > 0 and tr.on_canvas(z.re, z.im):
                pygame.draw.circle(self.surface, self.orbit_dot_color, cur, radius)
                pygame.draw.circle(self.surface, self.ink, cur, radius, 1)
            prev = cur

    def draw_marker(self, tr: PlaneTransform, marker: Marker) -> None:
        sx, sy = tr.to_screen(marker.x, marker.y)
        if not tr.on_canvas(marker.x, marker.y):
            return
        pygame.draw.circle(self.surface, marker.color, (sx, sy), marker.radius)
        if marker.selected:
            pygame.draw.line(self.surface, self.ink, (sx - 3, sy), (sx + 3, sy), 1)
            pygame.draw.line(self.surface, self.ink, (sx, sy - 3), (sx, sy + 3), 1)
        tw, _ = self.small_font.size(marker.name)
        self._text(marker.name, (sx - tw / 2, sy - TEXT_HEIGHT_PX * 1.2 - marker.radius))

    def draw_status(self, mouse_plane: Tuple[float, float], frame_ms: int, progress: float, variable: str) -> None:
        mx, my = mouse_plane
        self._text(f"({_peg_label(mx)}, {_peg_label(my)})", (10, 10))
        self._text(f"{frame_ms}ms", (10, self.height - 10 - TEXT_HEIGHT_PX))
        status = f"variable {variable}  field {progress * 100:5.1f}%"
        tw, _ = self.small_font.size(status)
        self._text(status, (self.width - tw - 10, 10))

    # ------------------------------------------------------------------ #

    def present(self) -> None:
        """Blit render surface to display with letterboxing (no stretch, aspect preserved)."""
        dw, dh = self.display.get_size()
        sw, sh = self.surface.get_size()
        scale = min(dw / sw, dh / sh)
        new_w = int(sw * scale)
        new_h = int(sh * scale)
        ox = max(0, (dw - new_w) // 2)
        oy = max(0, (dh - new_h) // 2)

        # kept for mouse unprojection
        self.lb_off = (ox, oy)
        self.lb_scale = scale

        self.display.fill((0, 0, 0))
        if scale != 1.0:
            panel = pygame.transform.smoothscale(self.surface, (new_w, new_h))
        else:
            panel = self.surface
        self.display.blit(panel, (ox, oy))
        pygame.display.flip()

    def teardown(self) -> None:
        pygame.quit()


def _peg_label(value: float) -> str:
    text = repr(round(value, 10)) if value != int(value) else str(int(value))
    return text[:5]
