"""SettingsPanelのテスト"""
import pygame
pygame.init()

import pytest

from yubisaki import config
from yubisaki.params import ParticleParams
from yubisaki.ui.settings_panel import SettingsPanel, step_value


def _click(button):
    pos = button.rect.center
    button.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, {'pos': pos, 'button': 1}))
    return button.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, {'pos': pos, 'button': 1}))


def _buttons_for(panel, key):
    """(−ボタン, ＋ボタン)"""
    row = list(panel.ranges).index(key)
    return panel.buttons[2 * row], panel.buttons[2 * row + 1]


def test_step_value_float_rounding():
    """0.98 + 0.01 が 0.99 になる（浮動小数点誤差を残さない）"""
    assert step_value("friction", 0.98, +1) == 0.99
    assert step_value("size", 0.5, -1) == 0.4


def test_step_value_clamped():
    assert step_value("friction", 1.0, +1) == 1.0
    assert step_value("gravity", -0.1, -1) == -0.1
    assert step_value("count", 5000, +1) == 5000


def test_step_value_integer_keys():
    value = step_value("count", 1000, +1)
    assert value == 1100
    assert isinstance(value, int)


def test_initial_values_are_defaults():
    panel = SettingsPanel((0, 0), lambda k, v: None)
    assert panel.values["count"] == config.PARTICLE_COUNT
    assert panel.values["emissionRate"] == config.PARTICLE_EMISSION_RATE


def test_plus_button_notifies_change():
    changes = []
    panel = SettingsPanel((0, 0), lambda k, v: changes.append((k, v)))
    _, plus = _buttons_for(panel, "emissionRate")
    assert _click(plus) is True
    assert changes == [("emissionRate", config.PARTICLE_EMISSION_RATE + 1)]


def test_no_notification_at_limit():
    changes = []
    panel = SettingsPanel((0, 0), lambda k, v: changes.append((k, v)))
    panel.values["friction"] = 1.0
    _, plus = _buttons_for(panel, "friction")
    _click(plus)
    assert changes == []


def test_reset_restores_defaults():
    resets = []
    panel = SettingsPanel((0, 0), lambda k, v: None, on_reset=lambda: resets.append(True))
    panel.values["gravity"] = 0.1
    _click(panel.reset_button)
    assert panel.values["gravity"] == config.PARTICLE_GRAVITY
    assert resets == [True]


def test_set_values_from_params():
    panel = SettingsPanel((0, 0), lambda k, v: None)
    panel.set_values(ParticleParams(count=300, size=1.5))
    assert panel.values["count"] == 300
    assert panel.values["size"] == 1.5


def test_hidden_panel_ignores_events():
    panel = SettingsPanel((0, 0), lambda k, v: None)
    panel.visible = False
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {'pos': panel.buttons[0].rect.center, 'button': 1})
    assert panel.handle_event(event) is False
    assert panel.contains(panel.buttons[0].rect.center) is False


def test_contains():
    panel = SettingsPanel((10, 10), lambda k, v: None)
    assert panel.contains((15, 15)) is True
    assert panel.contains((1000, 700)) is False


@pytest.mark.parametrize("key", list(config.SETTINGS_RANGES))
def test_every_setting_has_label(key):
    assert key in config.SETTINGS_LABELS_JP


def test_add_color_appends_to_palette():
    """＋で色を追加すると colors として通知"""
    changes = []
    panel = SettingsPanel((0, 0), lambda k, v: changes.append((k, v)))
    before = len(panel.palette)
    _click(panel.add_color_button)
    assert len(panel.palette) == before + 1
    key, colors = changes[-1]
    assert key == "colors"
    assert len(colors) == before + 1
    assert all(0.0 <= c <= 1.0 for c in colors[-1])


def test_palette_limits():
    """パレットは1色以上・PALETTE_MAX_COLORS 以下"""
    changes = []
    panel = SettingsPanel((0, 0), lambda k, v: changes.append((k, v)))
    panel.set_values(ParticleParams(colors=("#ffffff",)))
    _click(panel.remove_color_button)
    assert panel.palette == [(1.0, 1.0, 1.0)]

    for _ in range(config.PALETTE_MAX_COLORS + 3):
        _click(panel.add_color_button)
    assert len(panel.palette) == config.PALETTE_MAX_COLORS
    assert len(changes) == config.PALETTE_MAX_COLORS - 1


def test_palette_change_is_valid_config():
    """通知される色は ParticleParams がそのまま受け付ける"""
    changes = []
    panel = SettingsPanel((0, 0), lambda k, v: changes.append((k, v)))
    _click(panel.add_color_button)
    params = ParticleParams().with_changes(dict(changes))
    assert len(params.colors) == len(config.PARTICLE_COLORS) + 1


def test_save_button_calls_on_save():
    saves = []
    panel = SettingsPanel((0, 0), lambda k, v: None, on_save=lambda: saves.append(True))
    _click(panel.save_button)
    assert saves == [True]


def test_skeleton_toggle():
    """骨格表示ボタンはクリックごとに切り替わり、新しい状態を通知"""
    states = []
    panel = SettingsPanel((0, 0), lambda k, v: None, on_toggle_skeleton=states.append)
    assert panel.skeleton_button.selected is config.SHOW_HAND_SKELETON
    _click(panel.skeleton_button)
    _click(panel.skeleton_button)
    assert states == [not config.SHOW_HAND_SKELETON, config.SHOW_HAND_SKELETON]


def test_changes_includes_palette():
    panel = SettingsPanel((0, 0), lambda k, v: None)
    changes = panel.changes()
    assert set(changes) == set(config.SETTINGS_RANGES) | {"colors"}
    assert ParticleParams().with_changes(changes) == ParticleParams()


def test_render_does_not_fail():
    panel = SettingsPanel((0, 0), lambda k, v: None)
    panel.render(pygame.Surface((400, 400)))
