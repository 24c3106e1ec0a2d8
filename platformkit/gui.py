"""Mouse-driven GUI controls and the manager that updates them.

Controls do not draw anything themselves. Each ``update`` returns the draw
commands for the current frame, and the caller hands them to a renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from platformkit.inputstate import Input, KeyState
from platformkit.module import Module

LEFT_BUTTON = 1

Color = tuple[int, int, int, int]

_BLACK: Color = (0, 0, 0, 255)
_WHITE: Color = (255, 255, 255, 255)
_GREY: Color = (152, 152, 152, 255)

_BUTTON_COLORS: dict["GuiControlState", Color] = {}
_CHECKBOX_COLORS: dict["GuiControlState", Color] = {}


class GuiControlType(Enum):
    """The kinds of control the manager can create."""

    BUTTON = 0
    CHECKBOX = 1
    POPUP = 2
    SLIDER = 3


class GuiControlState(Enum):
    """The interaction state of a control."""

    DISABLED = 0
    NORMAL = 1
    FOCUSED = 2
    PRESSED = 3


_BUTTON_COLORS.update(
    {
        GuiControlState.DISABLED: _GREY,
        GuiControlState.NORMAL: _BLACK,
        GuiControlState.FOCUSED: (255, 165, 236, 255),
        GuiControlState.PRESSED: (255, 0, 175, 255),
    }
)

_CHECKBOX_COLORS.update(
    {
        GuiControlState.DISABLED: (200, 200, 200, 255),
        GuiControlState.NORMAL: (255, 250, 250, 255),
        GuiControlState.PRESSED: (100, 255, 137, 255),
    }
)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: int
    y: int
    w: int
    h: int

    def contains(self, x: int, y: int) -> bool:
        """Whether ``(x, y)`` lies strictly inside the rectangle."""
        return self.x < x < self.x + self.w and self.y < y < self.y + self.h


@dataclass(frozen=True)
class DrawText:
    """Draw ``text`` fitted into a box, in ``color``."""

    text: str
    x: int
    y: int
    w: int
    h: int
    color: Color = _BLACK


@dataclass(frozen=True)
class DrawRect:
    """Draw a rectangle in ``color``."""

    rect: Rect
    color: Color
    filled: bool = True
    use_camera: bool = True


DrawCommand = Union[DrawText, DrawRect]


class GuiControl:
    """Base of every control: an id, bounds, a label, a state and an observer."""

    def __init__(self, kind: GuiControlType, control_id: int) -> None:
        self.kind = kind
        self.id = control_id
        self.state = GuiControlState.NORMAL
        self.bounds = Rect(0, 0, 0, 0)
        self.text = ""
        self.observer: Optional[Module] = None

    def notify_observer(self) -> bool:
        """Tell the observer this control was clicked."""
        if self.observer is None:
            return False
        return self.observer.on_gui_mouse_click_event(self)

    def update(self, input_state: Input) -> list[DrawCommand]:
        """Update from the input and return this frame's draw commands."""
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, state={self.state.name})"


class GuiButton(GuiControl):
    """A text button that notifies its observer when released over it."""

    def __init__(self, control_id: int, bounds: Rect, text: str) -> None:
        super().__init__(GuiControlType.BUTTON, control_id)
        self.bounds = bounds
        self.text = text
        self.is_pressed = False
        self.is_focused = False

    def _label(self, color: Color) -> DrawText:
        b = self.bounds
        return DrawText(self.text, b.x + 5, b.y + 2, b.w - 10, b.h - 3, color)

    def update(self, input_state: Input) -> list[DrawCommand]:
        if self.state is GuiControlState.DISABLED:
            self.is_pressed = False
            self.is_focused = False
            return [self._label(_GREY)]

        mouse_x, mouse_y = input_state.mouse_position()
        if self.bounds.contains(mouse_x, mouse_y):
            self.is_focused = True
            self.state = GuiControlState.FOCUSED
            left = input_state.get_mouse_button(LEFT_BUTTON)
            if left is KeyState.REPEAT:
                self.is_pressed = True
                self.state = GuiControlState.PRESSED
            if left is KeyState.UP:
                self.notify_observer()
                self.is_pressed = False
        else:
            self.state = GuiControlState.NORMAL
            self.is_focused = False
            self.is_pressed = False

        return [self._label(_BUTTON_COLORS[self.state])]


class GuiCheckBox(GuiControl):
    """A box that toggles when clicked, with a label to its left."""

    def __init__(self, control_id: int, text: str, bounds: Rect) -> None:
        super().__init__(GuiControlType.CHECKBOX, control_id)
        self.bounds = bounds
        self.text = text
        self.is_checked = False
        self.is_focused = False
        # Tracks which half of a click (press or release) is expected next.
        self.no = True

    def update(self, input_state: Input) -> list[DrawCommand]:
        b = self.bounds
        draws: list[DrawCommand] = [DrawText(self.text, b.x - 190, b.y, 150, 30, _BLACK)]
        if self.state is GuiControlState.DISABLED:
            return draws

        mouse_x, mouse_y = input_state.mouse_position()
        if b.contains(mouse_x, mouse_y):
            left = input_state.get_mouse_button(LEFT_BUTTON)
            held = left is KeyState.REPEAT
            released = left is KeyState.UP
            if held and self.is_checked and not self.no:
                self.notify_observer()
                self.is_checked, self.no = False, False
                self.state = GuiControlState.NORMAL
            elif released and self.is_checked and self.no:
                self.is_checked, self.no = True, False
                self.state = GuiControlState.PRESSED
            elif held and not self.is_checked and self.no:
                self.is_checked, self.no = True, True
                self.state = GuiControlState.PRESSED
            elif released and not self.is_checked and not self.no:
                self.notify_observer()
                self.is_checked, self.no = False, True
                self.state = GuiControlState.NORMAL

        color = _CHECKBOX_COLORS.get(self.state)
        if color is not None:
            draws.append(DrawRect(b, color, filled=True, use_camera=False))
        return draws


class GuiPopUp(GuiControl):
    """A fixed panel drawn relative to a horizontal screen offset."""

    def __init__(self, control_id: int, offset_x: float = 0.0) -> None:
        super().__init__(GuiControlType.POPUP, control_id)
        self.offset_x = offset_x

    def update(self, input_state: Input) -> list[DrawCommand]:
        panel = Rect(int(self.offset_x + 130), 90, 200, 110)
        return [DrawRect(panel, (255, 134, 27, 240))]


class GuiSlider(GuiControl):
    """A horizontal slider mapping the mouse position to an integer value."""

    def __init__(
        self, control_id: int, text: str, bounds: Rect, min_value: int = 0, max_value: int = 0
    ) -> None:
        super().__init__(GuiControlType.SLIDER, control_id)
        self.bounds = bounds
        self.text = text
        self.min_value = min_value
        self.max_value = max_value
        self.is_pressed = False
        self.current_value = min_value
        self.current_pos = bounds.x
        self.handle = Rect(bounds.x, bounds.y - 5, bounds.w - 100, bounds.h + 10)

    def _handle_at(self, x: int) -> Rect:
        b = self.bounds
        return Rect(x, b.y - 5, b.w - 100, b.h + 10)

    def update(self, input_state: Input) -> list[DrawCommand]:
        b = self.bounds
        draws: list[DrawCommand] = [DrawText(self.text, b.x - 110, b.y - 10, 80, 30, _BLACK)]
        if self.state is GuiControlState.DISABLED:
            return draws

        mouse_x, mouse_y = input_state.mouse_position()
        self.handle = self._handle_at(self.current_pos)
        if b.contains(mouse_x, mouse_y):
            left = input_state.get_mouse_button(LEFT_BUTTON)
            if left is KeyState.REPEAT:
                self.is_pressed = True
                fraction = (mouse_x - b.x) / float(b.w)
                self.current_value = int((self.max_value - self.min_value) * fraction + self.min_value)
                self.current_pos = mouse_x
                self.handle = self._handle_at(mouse_x)
                self.state = GuiControlState.PRESSED
            if left is KeyState.UP:
                self.is_pressed = False
                self.notify_observer()
        else:
            self.is_pressed = False
            self.state = GuiControlState.NORMAL

        value_text = DrawText(str(self.current_value), b.x + b.w + 15, b.y - 2, 20, 15, _BLACK)
        if self.state is GuiControlState.NORMAL:
            draws += [
                DrawRect(b, _WHITE, use_camera=False),
                value_text,
                DrawRect(self.handle, _BLACK, use_camera=False),
            ]
        elif self.state is GuiControlState.PRESSED:
            draws += [
                DrawRect(b, _WHITE, use_camera=False),
                value_text,
                DrawRect(self.handle, (100, 255, 137, 255), use_camera=False),
            ]
        return draws

    def draw(self) -> bool:
        """Sliders draw through ``update``; nothing extra to draw."""
        return False


class GuiManager(Module):
    """Creates controls and updates them every frame."""

    def __init__(self, start_enabled: bool = True, input_state: Optional[Input] = None) -> None:
        super().__init__("guiManager", start_enabled)
        self.input_state = input_state if input_state is not None else Input()
        self.controls: list[GuiControl] = []
        self.draw_list: list[DrawCommand] = []

    def create_control(
        self,
        kind: GuiControlType,
        control_id: int,
        text: str,
        bounds: Rect,
        observer: Optional[Module],
        min_value: int = 0,
        max_value: int = 0,
    ) -> GuiControl:
        """Build a control of ``kind``, attach ``observer`` and keep it."""
        kind = GuiControlType(kind)
        control: GuiControl
        if kind is GuiControlType.BUTTON:
            control = GuiButton(control_id, bounds, text)
        elif kind is GuiControlType.POPUP:
            control = GuiPopUp(control_id)
        elif kind is GuiControlType.CHECKBOX:
            control = GuiCheckBox(control_id, text, bounds)
        else:
            control = GuiSlider(control_id, text, bounds, min_value, max_value)
        control.observer = observer
        self.controls.append(control)
        return control

    def update(self, dt: float) -> bool:
        """Update every control and collect their draw commands in ``draw_list``."""
        self.draw_list = [
            command for control in list(self.controls) for command in control.update(self.input_state)
        ]
        return True

    def clean_up(self) -> bool:
        """Drop every control."""
        self.controls.clear()
        self.draw_list = []
        return True

    def remove_control(self, control: GuiControl) -> bool:
        """Remove ``control``; False if it is not managed here."""
        for index, existing in enumerate(self.controls):
            if existing is control:
                del self.controls[index]
                return True
        return False