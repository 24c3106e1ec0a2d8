"""The application: owns the modules and drives their shared lifecycle."""

from __future__ import annotations

import logging
import sys
import time
import xml.etree.ElementTree as ET
from typing import Optional, Sequence

from platformkit.inputstate import Input, WindowEvent
from platformkit.module import Module

log = logging.getLogger(__name__)

DEFAULT_MAX_FRAME_DURATION = 16


def _child(node: Optional[ET.Element], tag: str) -> Optional[ET.Element]:
    """The first direct child of ``node`` named ``tag``, or None."""
    if node is None:
        return None
    return next((child for child in node if child.tag == tag), None)


def _int_attribute(node: Optional[ET.Element], name: str) -> int:
    """An integer attribute, 0 when missing or not a number."""
    if node is None:
        return 0
    try:
        return int(node.get(name, "0"))
    except ValueError:
        return 0


class App:
    """Runs every added module through awake, start, the update loop and clean-up.

    Modules are awakened, started and updated in the order they were added
    and cleaned up in reverse order.
    """

    def __init__(
        self,
        argv: Optional[Sequence[str]] = None,
        config_path: str = "config.xml",
        save_path: str = "save_game.xml",
    ) -> None:
        self.argv = list(sys.argv if argv is None else argv)
        self.config_path = config_path
        self.save_path = save_path
        self.modules: list[Module] = []
        self.input: Optional[Input] = None

        self.title = ""
        self.organization = ""
        self.window_title = ""
        self.config_node: Optional[ET.Element] = None

        self.load_requested = False
        self.save_requested = False

        self.max_frame_duration = DEFAULT_MAX_FRAME_DURATION
        self.dt = 0.0
        self.frame_count = 0
        self.frames_per_second = 0
        self.average_fps = 0.0
        self.seconds_since_startup = 0
        self._last_sec_frame_count = 0

        self._startup_time = time.monotonic()
        self._frame_start = time.perf_counter()
        self._last_sec_start = time.perf_counter()

    def add_module(self, module: Module) -> None:
        """Append a module; the first Input module added becomes the app's input."""
        self.modules.append(module)
        if self.input is None and isinstance(module, Input):
            self.input = module

    def _load_config(self) -> bool:
        try:
            root = ET.parse(self.config_path).getroot()
        except (OSError, ET.ParseError) as error:
            log.error("Error loading config %s: %s", self.config_path, error)
            return False
        self.config_node = root if root.tag == "config" else None
        return True

    def awake(self) -> bool:
        """Load the config and awaken every module with its own config node."""
        started = time.perf_counter()
        ok = self._load_config()
        if ok:
            app_node = _child(self.config_node, "app")
            title_node = _child(app_node, "title")
            self.title = (title_node.text or "") if title_node is not None else ""
            self.window_title = self.title
            self.max_frame_duration = _int_attribute(
                _child(app_node, "maxFrameDuration"), "value"
            )
            for module in self.modules:
                ok = module.awake(_child(self.config_node, module.name))
                if not ok:
                    break
        log.debug("App awake took %.3f ms", (time.perf_counter() - started) * 1000)
        return ok

    def start(self) -> bool:
        """Start every enabled module, stopping at the first failure."""
        started = time.perf_counter()
        for module in self.modules:
            log.debug("Starting %s", module.name)
            if module.is_enabled and not module.start():
                return False
        log.debug("App start took %.3f ms", (time.perf_counter() - started) * 1000)
        return True

    def update(self) -> bool:
        """Run one frame; False means the application should stop."""
        self._frame_start = time.perf_counter()

        ok = not (self.input is not None and self.input.get_window_event(WindowEvent.QUIT))
        if ok:
            ok = self._enabled_all(lambda module: module.pre_update())
        if ok:
            dt = self.dt
            ok = self._enabled_all(lambda module: module.update(dt))
        if ok:
            ok = self._enabled_all(lambda module: module.post_update())

        self._finish_update()
        return ok

    def _enabled_all(self, hook) -> bool:
        return all(hook(module) for module in self.modules if module.is_enabled)

    def _elapsed_ms(self, since: float) -> float:
        return (time.perf_counter() - since) * 1000.0

    def _finish_update(self) -> None:
        current_dt = self._elapsed_ms(self._frame_start)
        if self.max_frame_duration > 0 and current_dt < self.max_frame_duration:
            delay_ms = int(self.max_frame_duration - current_dt)
            time.sleep(delay_ms / 1000.0)

        self.frame_count += 1
        self.seconds_since_startup = int(time.monotonic() - self._startup_time)
        self.dt = self._elapsed_ms(self._frame_start)
        self._last_sec_frame_count += 1

        if self._elapsed_ms(self._last_sec_start) > 1000:
            self._last_sec_start = time.perf_counter()
            self.average_fps = (self.average_fps + self._last_sec_frame_count) / 2
            self.frames_per_second = self._last_sec_frame_count
            self._last_sec_frame_count = 0

        self.window_title = (
            f"{self.title}: Av.FPS: {self.average_fps:.2f} "
            f"Last sec frames: {self.frames_per_second} "
            f"Last dt: {self.dt:.3f} "
            f"Time since startup: {self.seconds_since_startup} "
            f"Frame Count: {self.frame_count} "
        )

        if self.load_requested:
            self.load_requested = False
            self.load()
        if self.save_requested:
            self.save_requested = False
            self.save()

    def clean_up(self) -> bool:
        """Clean up modules in reverse order, stopping at the first failure."""
        started = time.perf_counter()
        ok = all(module.clean_up() for module in reversed(self.modules))
        log.debug("App clean-up took %.3f ms", (time.perf_counter() - started) * 1000)
        return ok

    def arg(self, index: int) -> Optional[str]:
        """The command-line argument at ``index``, or None when there is none."""
        if 0 <= index < len(self.argv):
            return self.argv[index]
        return None

    def request_load(self) -> None:
        """Load the saved game at the end of the current frame."""
        self.load_requested = True

    def request_save(self) -> None:
        """Save the game at the end of the current frame."""
        self.save_requested = True

    def load(self) -> bool:
        """Hand every module its node from the saved-game file."""
        try:
            root = ET.parse(self.save_path).getroot()
        except (OSError, ET.ParseError) as error:
            log.error("Error loading %s: %s", self.save_path, error)
            return True
        state = root if root.tag == "game_state" else None
        for module in self.modules:
            module.load_state(_child(state, module.name))
        return True

    def save(self) -> bool:
        """Write a saved-game file with one node per module."""
        root = ET.Element("game_state")
        for module in self.modules:
            module.save_state(ET.SubElement(root, module.name))
        ET.ElementTree(root).write(self.save_path, encoding="utf-8", xml_declaration=True)
        return True