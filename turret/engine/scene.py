"""Scene interface driven by the frame loop."""
from __future__ import annotations

import pygame


class Scene:
    """Base scene; subclasses receive their collaborators through ``on_enter``."""

    def on_enter(self, **kwargs) -> None:  # pragma: no cover - hooks
        pass

    def on_exit(self) -> None:  # pragma: no cover - hooks
        pass

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def update(self, dt: float) -> None:
        pass

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        pass


__all__ = ["Scene"]
