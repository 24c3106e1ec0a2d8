"""Scripted movement made of timed constant-speed steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MAX_STEPS = 25


@dataclass
class Step:
    """A movement step: a per-frame speed held for a number of frames."""

    frames_duration: int = 1
    speed: tuple[float, float] = (0.0, 0.0)
    animation: Any = None


@dataclass
class MotionPath:
    """Accumulates a position relative to the start by following its steps."""

    loop: bool = True
    steps: list[Step] = field(default_factory=list)
    _current_step: int = field(default=0, init=False, repr=False)
    _current_step_frame: int = field(default=0, init=False, repr=False)
    _x: float = field(default=0.0, init=False, repr=False)
    _y: float = field(default=0.0, init=False, repr=False)

    def push_back(self, speed: tuple[float, float], frames: int, animation: Any = None) -> None:
        """Append a step; at most ``MAX_STEPS`` steps are allowed."""
        if len(self.steps) >= MAX_STEPS:
            raise ValueError(f"a path holds at most {MAX_STEPS} steps")
        self.steps.append(Step(frames, (float(speed[0]), float(speed[1])), animation))

    def update(self) -> None:
        """Advance one frame, moving to the next step when the current one ends."""
        if not self.steps:
            return
        self._current_step_frame += 1
        if self._current_step_frame > self.steps[self._current_step].frames_duration:
            if self._current_step < len(self.steps) - 1:
                self._current_step += 1
            elif self.loop:
                self._current_step = 0
            self._current_step_frame = 0
        dx, dy = self.steps[self._current_step].speed
        self._x += dx
        self._y += dy

    def relative_position(self) -> tuple[int, int]:
        """The position relative to the start, truncated to whole pixels."""
        return int(self._x), int(self._y)

    def current_animation(self) -> Any:
        """The animation linked to the current step, or None."""
        if not self.steps:
            return None
        return self.steps[self._current_step].animation

    def reset(self) -> None:
        """Go back to the first step; the accumulated position is kept."""
        self._current_step_frame = 0
        self._current_step = 0