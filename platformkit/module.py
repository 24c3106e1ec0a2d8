"""Base class for engine modules with a shared lifecycle."""

from __future__ import annotations

from typing import Any


class Module:
    """An engine subsystem driven by the application loop.

    Every lifecycle hook returns ``True`` to let the loop carry on and
    ``False`` to ask it to stop.

    ``state`` holds the string values the module persists in saved games.
    It is empty by default, so a plain module saves and restores nothing.
    """

    def __init__(self, name: str = "", start_enabled: bool = True) -> None:
        self.name = name
        self.is_enabled = start_enabled
        self.state: dict[str, str] = {}
        self.last_clicked_control: Any = None

    def awake(self, config: Any) -> bool:
        """Called once before rendering is available, with this module's config node."""
        return True

    def start(self) -> bool:
        """Called before the first frame, or when the module is enabled."""
        return True

    def pre_update(self) -> bool:
        """Called at the start of each loop iteration."""
        return True

    def update(self, dt: float) -> bool:
        """Called once per loop iteration with the last frame time in milliseconds."""
        return True

    def post_update(self) -> bool:
        """Called at the end of each loop iteration."""
        return True

    def clean_up(self) -> bool:
        """Called before quitting, or when the module is disabled."""
        return True

    def load_state(self, node: Any) -> bool:
        """Restore ``state`` from the attributes of a saved-game node.

        Only keys already present in ``state`` are read; a missing node
        leaves the state untouched.
        """
        if node is None:
            return True
        attributes = getattr(node, "attrib", {})
        for key in self.state:
            if key in attributes:
                self.state[key] = attributes[key]
        return True

    def save_state(self, node: Any) -> bool:
        """Write ``state`` as attributes of a saved-game node."""
        if node is None:
            return True
        for key, value in self.state.items():
            node.set(key, str(value))
        return True

    def on_gui_mouse_click_event(self, control: Any) -> bool:
        """Called by GUI controls this module observes; remembers the control."""
        self.last_clicked_control = control
        return True

    def enable(self) -> None:
        """Enable the module and start it, if it was disabled."""
        if not self.is_enabled:
            self.is_enabled = True
            self.start()

    def disable(self) -> None:
        """Disable the module and clean it up, if it was enabled."""
        if self.is_enabled:
            self.is_enabled = False
            self.clean_up()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, enabled={self.is_enabled})"