"""Keyboard, mouse and window-event state tracked frame by frame."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Union

from platformkit.module import Module

MAX_KEYS = 300
NUM_MOUSE_BUTTONS = 5


class KeyState(IntEnum):
    """The state of a key or button in the current frame."""

    IDLE = 0
    DOWN = 1
    REPEAT = 2
    UP = 3


class WindowEvent(IntEnum):
    """Window events that are remembered once they happen."""

    QUIT = 0
    HIDE = 1
    SHOW = 2


@dataclass(frozen=True)
class QuitEvent:
    """The user asked to close the application."""


@dataclass(frozen=True)
class WindowChangeEvent:
    """The window was hidden or shown."""

    event: WindowEvent


@dataclass(frozen=True)
class MouseButtonEvent:
    """A mouse button (numbered from 1) was pressed or released."""

    button: int
    pressed: bool


@dataclass(frozen=True)
class MouseMotionEvent:
    """The mouse moved to ``(x, y)`` by ``(xrel, yrel)``."""

    x: int
    y: int
    xrel: int
    yrel: int


Event = Union[QuitEvent, WindowChangeEvent, MouseButtonEvent, MouseMotionEvent]


class Input(Module):
    """Turns raw key sets and events into per-frame key and button states."""

    def __init__(self, start_enabled: bool = True, key_count: int = MAX_KEYS) -> None:
        super().__init__("input", start_enabled)
        self._keyboard = [KeyState.IDLE] * key_count
        self._mouse_buttons = [KeyState.IDLE] * NUM_MOUSE_BUTTONS
        self._window_events = {event: False for event in WindowEvent}
        self._pressed: frozenset[int] = frozenset()
        self._events: deque[Event] = deque()
        self._mouse_x = 0
        self._mouse_y = 0
        self._motion_x = 0
        self._motion_y = 0

    def set_keyboard(self, pressed: Iterable[int]) -> None:
        """Set which key codes are physically held down."""
        keys = frozenset(pressed)
        for key in keys:
            if not 0 <= key < len(self._keyboard):
                raise ValueError(f"key code {key} out of range")
        self._pressed = keys

    def post_event(self, event: Event) -> None:
        """Queue an event to be handled by the next ``pre_update``."""
        if isinstance(event, MouseButtonEvent) and not 1 <= event.button <= NUM_MOUSE_BUTTONS:
            raise ValueError(f"mouse button {event.button} out of range")
        if isinstance(event, WindowChangeEvent) and event.event is WindowEvent.QUIT:
            raise ValueError("use QuitEvent to request quitting")
        self._events.append(event)

    def pre_update(self) -> bool:
        """Advance key and button states and handle queued events."""
        for code, state in enumerate(self._keyboard):
            if code in self._pressed:
                self._keyboard[code] = KeyState.DOWN if state is KeyState.IDLE else KeyState.REPEAT
            elif state in (KeyState.REPEAT, KeyState.DOWN):
                self._keyboard[code] = KeyState.UP
            else:
                self._keyboard[code] = KeyState.IDLE

        for index, state in enumerate(self._mouse_buttons):
            if state is KeyState.DOWN:
                self._mouse_buttons[index] = KeyState.REPEAT
            elif state is KeyState.UP:
                self._mouse_buttons[index] = KeyState.IDLE

        while self._events:
            event = self._events.popleft()
            if isinstance(event, QuitEvent):
                self._window_events[WindowEvent.QUIT] = True
            elif isinstance(event, WindowChangeEvent):
                self._window_events[event.event] = True
            elif isinstance(event, MouseButtonEvent):
                self._mouse_buttons[event.button - 1] = (
                    KeyState.DOWN if event.pressed else KeyState.UP
                )
            elif isinstance(event, MouseMotionEvent):
                self._motion_x, self._motion_y = event.xrel, event.yrel
                self._mouse_x, self._mouse_y = event.x, event.y
        return True

    def get_key(self, key: int) -> KeyState:
        """The state of key code ``key``."""
        if not 0 <= key < len(self._keyboard):
            raise IndexError(f"key code {key} out of range")
        return self._keyboard[key]

    def get_mouse_button(self, button: int) -> KeyState:
        """The state of mouse button ``button``, numbered from 1."""
        if not 1 <= button <= NUM_MOUSE_BUTTONS:
            raise IndexError(f"mouse button {button} out of range")
        return self._mouse_buttons[button - 1]

    def get_window_event(self, event: WindowEvent) -> bool:
        """Whether the window event has happened."""
        return self._window_events[WindowEvent(event)]

    def mouse_position(self) -> tuple[int, int]:
        """The last known mouse position."""
        return self._mouse_x, self._mouse_y

    def mouse_motion(self) -> tuple[int, int]:
        """The last relative mouse movement."""
        return self._motion_x, self._motion_y