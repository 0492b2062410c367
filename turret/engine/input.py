"""Key bindings and per-tick intent snapshots."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from turret.world.arena import Intents

DEFAULT_BINDINGS = {
    "turn_left": ["K_a"],
    "turn_right": ["K_d"],
    "move_forward": ["K_w"],
    "move_backward": ["K_s"],
    "fire": ["K_SPACE"],
    "toggle_debug": ["K_F3"],
}


def _key_code(name: str) -> Optional[int]:
    code = getattr(pygame, name, None)
    return code if isinstance(code, int) else None


@dataclass
class InputBindings:
    """Action name to pygame key constant names."""

    actions: Dict[str, List[str]] = field(
        default_factory=lambda: {action: list(keys) for action, keys in DEFAULT_BINDINGS.items()}
    )

    @classmethod
    def load(cls, path: Path) -> "InputBindings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        actions = {action: list(keys) for action, keys in DEFAULT_BINDINGS.items()}
        actions.update({k: list(v) for k, v in data.get("bindings", {}).items()})
        return cls(actions=actions)

    def save(self, path: Path) -> None:
        path.write_text(json.dumps({"bindings": self.actions}, indent=2))

    def actions_for_key(self, key: int) -> List[str]:
        return [
            action
            for action, names in self.actions.items()
            if any(_key_code(name) == key for name in names)
        ]


class InputMapper:
    """Tracks held actions from events and turns them into tick snapshots.

    Movement intents report the held state. ``fire`` (and any other action
    queried through :meth:`just_pressed`) is edge triggered: it is true only
    on the first snapshot after the key went down.
    """

    def __init__(self, bindings: Optional[InputBindings] = None) -> None:
        self.bindings = bindings or InputBindings()
        self.action_state: Dict[str, bool] = {action: False for action in self.bindings.actions}
        self._held_last_tick: Dict[str, bool] = {action: False for action in self.bindings.actions}
        self._pressed_this_tick: Dict[str, bool] = {}
        # Presses released again before the next snapshot.
        self._taps: set[str] = set()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        pressed = event.type == pygame.KEYDOWN
        for action in self.bindings.actions_for_key(event.key):
            if pressed and not self.action_state.get(action, False):
                self._taps.add(action)
            self.action_state[action] = pressed

    def action(self, name: str) -> bool:
        return self.action_state.get(name, False)

    def just_pressed(self, name: str) -> bool:
        return self._pressed_this_tick.get(name, False)

    def snapshot(self) -> Intents:
        self._pressed_this_tick = {
            action: (held and not self._held_last_tick.get(action, False)) or action in self._taps
            for action, held in self.action_state.items()
        }
        self._held_last_tick = dict(self.action_state)
        self._taps.clear()
        return Intents(
            turn_left=self.action("turn_left"),
            turn_right=self.action("turn_right"),
            move_forward=self.action("move_forward"),
            move_backward=self.action("move_backward"),
            fire=self.just_pressed("fire"),
        )


__all__ = ["DEFAULT_BINDINGS", "InputBindings", "InputMapper"]
