# manager.py
from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from orbitfield import config
from .base import Scene

logger = logging.getLogger(__name__)


class SceneManager:
    def __init__(self, cfg: config.ToyConfig, renderer, scene: Optional[Scene] = None) -> None:
        self.cfg = cfg
        self.renderer = renderer
        self.scene_stack: List[Scene] = []
        if scene is None:
            from .plane_scene import PlaneScene

            scene = PlaneScene(cfg)
        self.set_scene(scene)

    def set_scene(self, scene: Optional[Scene]) -> None:
        if scene is None:
            self.scene_stack.clear()
        else:
            self.scene_stack = [scene]

    # ------------------------------------------------------------------ #

    def run(self) -> None:
        """Drive the top scene until the stack empties."""
        while self.scene_stack:
            self._run_live_scene(self.scene_stack[-1])

    def _run_live_scene(self, scene: Scene) -> None:
        renderer = self.renderer
        clock = pygame.time.Clock()
        logger.debug("running scene %s", type(scene).__name__)

        # until the scene stack changes or the app is quit
        while self.scene_stack and self.scene_stack[-1] is scene:
            dt = clock.tick(self.cfg.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.set_scene(None)
                    return

                if event.type == pygame.VIDEORESIZE:
                    renderer.handle_resize(event.w, event.h)
                    continue

                if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    renderer.toggle_fullscreen()
                    continue

                scene.handle_event(event, self)

            if not self.scene_stack or self.scene_stack[-1] is not scene:
                return

            scene.update(dt, self)
            scene.render(renderer, self)
