from __future__ import annotations

import pygame


# ---------------------------------------------------------------------------
# Base Scene
# ---------------------------------------------------------------------------


class Scene:
    """
    Abstract base for all scenes.

    Scenes are driven by SceneManager's live loop, which calls
    handle_event / update / render once per frame.
    """

    def handle_event(self, event, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Process a single pygame event."""
        return None

    def update(self, dt_ms: int, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Advance scene state by dt_ms."""
        return None

    def render(self, renderer, manager: "SceneManager") -> None:  # type: ignore[name-defined]
        """Draw the scene."""
        return None


def surface_event(event, manager) -> "pygame.event.Event":
    """
    Return event with its mouse position mapped through the renderer's
    letterbox transform, when the renderer has one.
    """
    pos = getattr(event, "pos", None)
    renderer = getattr(manager, "renderer", None)
    to_surface = getattr(renderer, "_to_surface", None)
    if pos is None or to_surface is None:
        return event
    attrs = dict(event.dict)
    attrs["pos"] = to_surface(pos)
    return pygame.event.Event(event.type, attrs)
