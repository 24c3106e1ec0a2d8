import xml.etree.ElementTree as ET

import pytest

from platformkit.app import App
from platformkit.inputstate import Input, QuitEvent
from platformkit.module import Module


class Recorder(Module):
    def __init__(self, name, log, enabled=True, fail=None):
        super().__init__(name, enabled)
        self.log = log
        self.fail = fail
        self.config = "unset"
        self.loaded = "unset"
        self.dts = []

    def _hook(self, hook):
        self.log.append((self.name, hook))
        return hook != self.fail

    def awake(self, config):
        self.config = config
        return self._hook("awake")

    def start(self):
        return self._hook("start")

    def pre_update(self):
        return self._hook("pre_update")

    def update(self, dt):
        self.dts.append(dt)
        return self._hook("update")

    def post_update(self):
        return self._hook("post_update")

    def clean_up(self):
        return self._hook("clean_up")

    def save_state(self, node):
        node.set("value", self.name.upper())
        return True

    def load_state(self, node):
        self.loaded = None if node is None else node.get("value")
        return True


CONFIG = """<config>
  <app>
    <title>Demo</title>
    <maxFrameDuration value="0"/>
  </app>
  <alpha speed="3"/>
</config>"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.xml"
    path.write_text(CONFIG)
    return path


def make_app(tmp_path, config_path, *modules):
    app = App(["game", "--debug"], str(config_path), str(tmp_path / "save.xml"))
    for module in modules:
        app.add_module(module)
    return app


def test_awake_reads_title_and_module_nodes(tmp_path, config_path):
    log = []
    alpha = Recorder("alpha", log)
    beta = Recorder("beta", log, enabled=False)
    app = make_app(tmp_path, config_path, alpha, beta)
    assert app.awake() is True
    assert app.title == "Demo"
    assert app.max_frame_duration == 0
    assert alpha.config.get("speed") == "3"
    assert beta.config is None
    assert log == [("alpha", "awake"), ("beta", "awake")]


def test_awake_stops_at_first_failure(tmp_path, config_path):
    log = []
    app = make_app(
        tmp_path, config_path, Recorder("a", log, fail="awake"), Recorder("b", log)
    )
    assert app.awake() is False
    assert log == [("a", "awake")]


def test_awake_fails_without_config(tmp_path):
    log = []
    app = App([], str(tmp_path / "missing.xml"), str(tmp_path / "save.xml"))
    app.add_module(Recorder("a", log))
    assert app.awake() is False
    assert log == []


def test_start_skips_disabled_modules(tmp_path, config_path):
    log = []
    app = make_app(
        tmp_path, config_path, Recorder("a", log), Recorder("b", log, enabled=False)
    )
    assert app.start() is True
    assert log == [("a", "start")]


def test_update_runs_phases_in_order(tmp_path, config_path):
    log = []
    app = make_app(
        tmp_path,
        config_path,
        Recorder("a", log),
        Recorder("b", log),
        Recorder("c", log, enabled=False),
    )
    app.awake()
    log.clear()
    assert app.update() is True
    assert log == [
        ("a", "pre_update"),
        ("b", "pre_update"),
        ("a", "update"),
        ("b", "update"),
        ("a", "post_update"),
        ("b", "post_update"),
    ]
    assert app.frame_count == 1
    assert app.window_title.startswith("Demo: Av.FPS:")


def test_update_stops_when_a_phase_fails(tmp_path, config_path):
    log = []
    app = make_app(
        tmp_path, config_path, Recorder("a", log, fail="pre_update"), Recorder("b", log)
    )
    app.awake()
    log.clear()
    assert app.update() is False
    assert log == [("a", "pre_update")]


def test_update_passes_last_frame_time(tmp_path, config_path):
    log = []
    module = Recorder("a", log)
    app = make_app(tmp_path, config_path, module)
    app.awake()
    app.update()
    app.update()
    assert module.dts[0] == 0.0
    assert module.dts[1] == app.dt or module.dts[1] >= 0.0


def test_quit_event_stops_the_loop_on_next_frame(tmp_path, config_path):
    input_module = Input()
    app = make_app(tmp_path, config_path, input_module)
    app.awake()
    input_module.post_event(QuitEvent())
    assert app.update() is True
    assert app.update() is False


def test_clean_up_runs_in_reverse(tmp_path, config_path):
    log = []
    app = make_app(tmp_path, config_path, Recorder("a", log), Recorder("b", log))
    assert app.clean_up() is True
    assert log == [("b", "clean_up"), ("a", "clean_up")]


def test_clean_up_stops_at_failure(tmp_path, config_path):
    log = []
    app = make_app(
        tmp_path, config_path, Recorder("a", log), Recorder("b", log, fail="clean_up")
    )
    assert app.clean_up() is False
    assert log == [("b", "clean_up")]


def test_arg(tmp_path, config_path):
    app = make_app(tmp_path, config_path)
    assert app.arg(0) == "game"
    assert app.arg(1) == "--debug"
    assert app.arg(2) is None
    assert app.arg(-1) is None


def test_save_and_load_round_trip(tmp_path, config_path):
    log = []
    alpha = Recorder("alpha", log)
    beta = Recorder("beta", log)
    app = make_app(tmp_path, config_path, alpha, beta)
    assert app.save() is True
    root = ET.parse(tmp_path / "save.xml").getroot()
    assert root.tag == "game_state"
    assert [child.tag for child in root] == ["alpha", "beta"]
    assert app.load() is True
    assert alpha.loaded == "ALPHA"
    assert beta.loaded == "BETA"


def test_load_without_file_leaves_modules_alone(tmp_path, config_path):
    module = Recorder("alpha", [])
    app = make_app(tmp_path, config_path, module)
    assert app.load() is True
    assert module.loaded == "unset"


def test_requested_save_happens_at_end_of_frame(tmp_path, config_path):
    app = make_app(tmp_path, config_path, Recorder("alpha", []))
    app.awake()
    app.request_save()
    assert not (tmp_path / "save.xml").exists()
    app.update()
    assert (tmp_path / "save.xml").exists()
    assert app.save_requested is False


def test_requested_load_happens_at_end_of_frame(tmp_path, config_path):
    module = Recorder("alpha", [])
    app = make_app(tmp_path, config_path, module)
    app.awake()
    app.save()
    app.request_load()
    assert module.loaded == "unset"
    app.update()
    assert module.loaded == "ALPHA"
    assert app.load_requested is False