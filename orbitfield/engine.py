from __future__ import annotations

"""
Engine entry point: owns the window and the scene loop.
"""

import logging

import pygame

from orbitfield import config
from orbitfield.render.canvas import CanvasRenderer
from orbitfield.scenes.manager import SceneManager

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, cfg: config.ToyConfig) -> None:
        pygame.init()
        self.cfg = cfg
        self.renderer = CanvasRenderer(cfg.view_width, cfg.view_height)
        self.manager = SceneManager(cfg, self.renderer)
        logger.info(
            "canvas %dx%d, plane %gx%g, palette %s, variable marker %s",
            cfg.view_width, cfg.view_height, cfg.plane_width, cfg.plane_height,
            cfg.palette, cfg.variable_marker,
        )

    def run(self) -> None:
        try:
            self.manager.run()
        finally:
            self.renderer.teardown()
