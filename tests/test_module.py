import pytest

from platformkit.module import Module


class Recorder(Module):
    def __init__(self, start_enabled):
        super().__init__("recorder", start_enabled)
        self.calls = []

    def start(self):
        self.calls.append("start")
        return True

    def clean_up(self):
        self.calls.append("clean_up")
        return True


def test_constructor_stores_name_and_flag():
    module = Module("audio", False)
    assert module.name == "audio"
    assert module.is_enabled is False


@pytest.mark.parametrize(
    "hook",
    [
        lambda m: m.awake(None),
        lambda m: m.start(),
        lambda m: m.pre_update(),
        lambda m: m.update(16.0),
        lambda m: m.post_update(),
        lambda m: m.clean_up(),
        lambda m: m.load_state(None),
        lambda m: m.save_state(None),
        lambda m: m.on_gui_mouse_click_event(None),
    ],
)
def test_default_hooks_continue(hook):
    assert hook(Module("plain", True)) is True


def test_plain_module_enable_and_disable():
    module = Module("plain", False)
    module.enable()
    assert module.is_enabled is True
    module.disable()
    assert module.is_enabled is False


def test_enable_starts_disabled_module_once():
    plain = Module("plain", False)
    plain.enable()
    plain.enable()
    assert plain.is_enabled is True

    module = Recorder(False)
    Module.enable(module)
    Module.enable(module)
    assert module.is_enabled is True
    assert module.calls == ["start"]


def test_enable_on_enabled_module_does_nothing():
    plain = Module("plain", True)
    plain.enable()
    assert plain.is_enabled is True

    module = Recorder(True)
    Module.enable(module)
    assert module.calls == []


def test_disable_cleans_up_once():
    plain = Module("plain", True)
    plain.disable()
    plain.disable()
    assert plain.is_enabled is False

    module = Recorder(True)
    Module.disable(module)
    Module.disable(module)
    assert module.is_enabled is False
    assert module.calls == ["clean_up"]


def test_enable_disable_cycle():
    module = Recorder(False)
    Module.enable(module)
    Module.disable(module)
    Module.enable(module)
    assert module.is_enabled is True
    assert module.calls == ["start", "clean_up", "start"]