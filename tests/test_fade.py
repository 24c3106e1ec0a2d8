from platformkit.fade import FadeStep, FadeToBlack
from platformkit.module import Module


class Screen(Module):
    def __init__(self, name, enabled):
        super().__init__(name, enabled)
        self.starts = 0
        self.cleanups = 0

    def start(self):
        self.starts += 1
        return True

    def clean_up(self):
        self.cleanups += 1
        return True


def test_idle_fade_has_no_overlay():
    fade = FadeToBlack()
    assert fade.name == "fadetoblack"
    assert fade.step is FadeStep.NONE
    assert fade.fade_alpha() is None
    assert fade.update(16.0) is True
    assert fade.step is FadeStep.NONE


def test_pass_screens_swaps_modules_at_darkest_point():
    old = Screen("intro", True)
    new = Screen("scene", False)
    fade = FadeToBlack()
    assert fade.pass_screens(old, new, 3) is True
    fade.update(0)
    fade.update(0)
    assert old.is_enabled is True
    assert fade.step is FadeStep.TO_BLACK
    fade.update(0)
    assert fade.step is FadeStep.FROM_BLACK
    assert fade.fade_alpha() == 255
    assert (old.is_enabled, old.cleanups) == (False, 1)
    assert (new.is_enabled, new.starts) == (True, 1)


def test_fade_comes_back_to_idle():
    fade = FadeToBlack()
    fade.pass_screens(Screen("a", True), Screen("b", False), 3)
    for _ in range(3):
        fade.update(0)
    for _ in range(3):
        assert fade.step is FadeStep.FROM_BLACK
        fade.update(0)
    assert fade.step is FadeStep.NONE
    assert fade.fade_alpha() is None
    assert fade.fade_finished is True
    assert fade.activated is True


def test_alpha_grows_while_darkening():
    fade = FadeToBlack()
    fade.pass_screens(Screen("a", True), Screen("b", False), 10)
    alphas = [fade.fade_alpha()]
    for _ in range(9):
        fade.update(0)
        alphas.append(fade.fade_alpha())
    assert alphas[0] == 0
    assert alphas == sorted(alphas)
    assert all(0 <= alpha < 255 for alpha in alphas)


def test_second_request_is_ignored_while_fading():
    first = Screen("a", True)
    fade = FadeToBlack()
    assert fade.pass_screens(first, Screen("b", False), 5) is True
    assert fade.pass_screens(Screen("c", True), Screen("d", False), 5) is False
    assert fade.module_to_disable is first
    assert fade.fade(2, 5) is False


def test_fade_records_level_and_resets_flags():
    fade = FadeToBlack()
    assert fade.fade(2, 4) is True
    assert fade.level_index == 2
    assert fade.max_fade_frames == 4
    assert fade.fade_finished is False
    assert fade.activated is False
    for _ in range(8):
        fade.update(0)
    assert fade.step is FadeStep.NONE
    assert fade.fade_finished is True


def test_fade_without_modules_still_completes():
    fade = FadeToBlack()
    fade.fade(1, 2)
    fade.update(0)
    fade.update(0)
    assert fade.step is FadeStep.FROM_BLACK
    fade.update(0)
    fade.update(0)
    assert fade.step is FadeStep.NONE