# engine/input_handler.py
"""
Maps key names reported by the input collaborator to player intents,
based on the ``[bindings.<set>.<name>]`` tables of ``keybindings.toml``.
"""
from typing import Any, Iterable
from typing import Dict as PyDict
from typing import List, Tuple

import structlog

from engine.intents import Intent

log = structlog.get_logger(__name__)

# Used when keybindings.toml is missing or unreadable.
DEFAULT_KEYBINDINGS: PyDict[str, Any] = {
    "bindings": {
        "common": {
            "toggle_fullscreen": {
                "key": "enter",
                "mods": ["alt"],
                "action_type": "ui",
            },
            "exit": {"key": "escape", "action_type": "action"},
        },
        "movement": {
            "move_up": {"key": "up", "action_type": "move", "dx": 0, "dy": -1},
            "move_down": {"key": "down", "action_type": "move", "dx": 0, "dy": 1},
            "move_left": {"key": "left", "action_type": "move", "dx": -1, "dy": 0},
            "move_right": {"key": "right", "action_type": "move", "dx": 1, "dy": 0},
        },
    }
}

ACTIVE_BINDING_SETS: Tuple[str, ...] = ("common", "movement")

# Action names that end the session.
EXIT_ACTIONS = frozenset({"exit", "quit"})


def parse_key_line(line: str) -> Tuple[str, Tuple[str, ...]]:
    """Splits ``"alt+enter"`` into ``("enter", ("alt",))``.

    The last ``+``-separated part is the key; the rest are modifiers.
    """
    parts = [p.strip().lower() for p in line.strip().split("+") if p.strip()]
    if not parts:
        return "", ()
    return parts[-1], tuple(parts[:-1])


class InputHandler:
    """
    Translates key names into :class:`Intent` values.
    """

    def __init__(
        self,
        keybindings_config: PyDict[str, Any],
        active_keybinding_sets: Iterable[str] = ACTIVE_BINDING_SETS,
    ):
        self.keybindings_config: PyDict[str, Any] = keybindings_config
        self.active_keybinding_sets: List[str] = list(active_keybinding_sets)
        log.debug("InputHandler initialized.", sets=self.active_keybinding_sets)

    def _binding_to_intent(
        self, action_name: str, binding_data: PyDict[str, Any]
    ) -> Intent:
        action_type: str | None = binding_data.get("action_type")
        if action_type == "move":
            dx, dy = binding_data.get("dx", 0), binding_data.get("dy", 0)
            try:
                return Intent.move(int(dx), int(dy))
            except (ValueError, TypeError) as e:
                log.warning(
                    "Invalid move binding",
                    action_name=action_name,
                    dx=dx,
                    dy=dy,
                    error=str(e),
                )
                return Intent.no_op()
        elif action_type == "action":
            if action_name in EXIT_ACTIONS:
                return Intent.exit()
        elif action_type == "ui":
            if action_name == "toggle_fullscreen":
                return Intent.toggle_fullscreen()
        log.warning(
            "Unknown action in keybinding",
            action_name=action_name,
            type=action_type,
        )
        return Intent.no_op()

    def intent_for_key(self, key: str, mods: Iterable[str] = ()) -> Intent:
        """Finds the intent bound to ``key`` with exactly ``mods`` held.

        Unbound keys yield a no-op intent.
        """
        key = key.lower()
        pressed_mods = frozenset(m.lower() for m in mods)
        bindings = self.keybindings_config.get("bindings", {})
        for set_name in self.active_keybinding_sets:
            binding_set = bindings.get(set_name)
            if not binding_set or not isinstance(binding_set, dict):
                continue
            for action_name, binding_data in binding_set.items():
                if not isinstance(binding_data, dict):
                    continue
                bound_key = str(binding_data.get("key", "")).lower()
                bound_mods = frozenset(
                    m.lower() for m in binding_data.get("mods", [])
                )
                if key == bound_key and pressed_mods == bound_mods:
                    return self._binding_to_intent(action_name, binding_data)
        log.debug("Unbound key", key=key, mods=sorted(pressed_mods))
        return Intent.no_op()

    def intent_for_line(self, line: str) -> Intent:
        key, mods = parse_key_line(line)
        if not key:
            return Intent.no_op()
        return self.intent_for_key(key, mods)
