"""A fade to black and back that swaps modules at the darkest point."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from platformkit.module import Module


class FadeStep(Enum):
    """The phase of a fade."""

    NONE = 0
    TO_BLACK = 1
    FROM_BLACK = 2


class FadeToBlack(Module):
    """Darkens the screen over some frames, swaps modules, then lightens it."""

    def __init__(self, start_enabled: bool = True) -> None:
        super().__init__("fadetoblack", start_enabled)
        self.step = FadeStep.NONE
        self.frame_count = 0
        self.max_fade_frames = 0
        self.level_index = 0
        self.activated = False
        self.fade_finished = True
        self.screen_rect = (0, 0, 2000, 2000)
        self.module_to_disable: Optional[Module] = None
        self.module_to_enable: Optional[Module] = None

    def update(self, dt: float) -> bool:
        """Advance the fade by one frame."""
        if self.step is FadeStep.NONE:
            return True

        if self.step is FadeStep.TO_BLACK:
            self.frame_count += 1
            if self.frame_count >= self.max_fade_frames:
                if self.module_to_disable is not None:
                    self.module_to_disable.disable()
                if self.module_to_enable is not None:
                    self.module_to_enable.enable()
                self.step = FadeStep.FROM_BLACK
        else:
            self.frame_count = max(self.frame_count - 1, 0)
            if self.frame_count <= 0:
                self.step = FadeStep.NONE
                self.fade_finished = True
            if not self.activated:
                self.activated = True
        return True

    def fade_alpha(self) -> Optional[int]:
        """The opacity (0-255) of the black overlay, or None when not fading."""
        if self.step is FadeStep.NONE:
            return None
        if self.max_fade_frames <= 0:
            ratio = 1.0 if self.frame_count > 0 else 0.0
        else:
            ratio = min(self.frame_count / self.max_fade_frames, 1.0)
        return int(ratio * 255.0)

    def _begin(self, frames: float) -> bool:
        if self.step is not FadeStep.NONE:
            return False
        self.step = FadeStep.TO_BLACK
        self.frame_count = 0
        self.max_fade_frames = int(frames)
        return True

    def fade(self, level_index: int, frames: float = 60) -> bool:
        """Start a fade for a level; False if a fade is already running."""
        started = self._begin(frames)
        if started:
            self.level_index = level_index
        self.activated = False
        self.fade_finished = False
        return started

    def pass_screens(self, to_disable: Module, to_enable: Module, frames: float = 60) -> bool:
        """Fade out, swap the two modules, fade in; False if already fading."""
        started = self._begin(frames)
        if started:
            self.module_to_disable = to_disable
            self.module_to_enable = to_enable
        return started