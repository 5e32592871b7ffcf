"""設定パネル（−/＋ボタンでパラメータを段階的に変更）"""

from typing import Callable, Mapping, Optional

import numpy as np
import pygame

from yubisaki import config
from yubisaki.params import CONFIG_KEYS, ParticleParams
from yubisaki.ui.button import UIButton

ROW_HEIGHT = 32
BUTTON_SIZE = 26
LABEL_WIDTH = 130
VALUE_WIDTH = 70
SWATCH_SIZE = 14


def step_value(key: str, current: float, direction: int,
               ranges: Mapping = config.SETTINGS_RANGES) -> float:
    """
    現在値を1ステップ増減し、範囲内にクランプする

    Args:
        key: 設定キー（SETTINGS_RANGES のキー）
        current: 現在値
        direction: +1 または -1
    """
    low, high, step = ranges[key]
    value = current + direction * step
    value = min(high, max(low, value))
    # ステップ幅の小数桁に丸める（0.1 + 0.2 のような誤差を残さない）
    if isinstance(step, int):
        return int(round(value))
    decimals = max(0, len(repr(float(step)).split(".")[1]))
    return round(value, decimals)


class SettingsPanel:
    """
    粒子設定パネル

    各行: ラベル、現在値、−/＋ボタン。その下にパレット行（色の追加・削除）、
    リセット・保存ボタン、骨格表示の切り替えを並べる。
    変更は on_change(key, value) で通知し、実際の適用（フレーム間）は
    呼び出し側が行う。
    """

    def __init__(
        self,
        origin: tuple[int, int],
        on_change: Callable[[str, object], None],
        on_reset: Optional[Callable[[], None]] = None,
        on_save: Optional[Callable[[], None]] = None,
        on_toggle_skeleton: Optional[Callable[[bool], None]] = None,
        ranges: Mapping = config.SETTINGS_RANGES,
        font_loader: Optional[Callable[[int], pygame.font.Font]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.origin = origin
        self.on_change = on_change
        self.on_reset = on_reset
        self.on_save = on_save
        self.on_toggle_skeleton = on_toggle_skeleton
        self.ranges = ranges
        self.font_loader = font_loader
        self.rng = rng if rng is not None else np.random.default_rng()
        self.visible = True

        defaults = ParticleParams()
        self.values = {key: getattr(defaults, CONFIG_KEYS[key]) for key in ranges}
        self.palette = list(defaults.colors)

        self.buttons: list[UIButton] = []
        self.rows: list[tuple[str, pygame.Rect]] = []
        x0, y0 = origin
        bx = x0 + LABEL_WIDTH + VALUE_WIDTH
        for row, key in enumerate(ranges):
            y = y0 + row * ROW_HEIGHT
            self.rows.append((key, pygame.Rect(x0, y, LABEL_WIDTH + VALUE_WIDTH, BUTTON_SIZE)))
            self.buttons.append(UIButton(
                pygame.Rect(bx, y, BUTTON_SIZE, BUTTON_SIZE), "-",
                lambda key=key: self._step(key, -1),
            ))
            self.buttons.append(UIButton(
                pygame.Rect(bx + BUTTON_SIZE + 4, y, BUTTON_SIZE, BUTTON_SIZE), "+",
                lambda key=key: self._step(key, +1),
            ))

        # パレット行
        palette_y = y0 + len(ranges) * ROW_HEIGHT
        self.palette_rect = pygame.Rect(x0, palette_y, LABEL_WIDTH + VALUE_WIDTH, BUTTON_SIZE)
        self.remove_color_button = UIButton(
            pygame.Rect(bx, palette_y, BUTTON_SIZE, BUTTON_SIZE), "-", self._remove_color,
        )
        self.add_color_button = UIButton(
            pygame.Rect(bx + BUTTON_SIZE + 4, palette_y, BUTTON_SIZE, BUTTON_SIZE), "+",
            self._add_color,
        )
        self.buttons += [self.remove_color_button, self.add_color_button]

        full_width = LABEL_WIDTH + VALUE_WIDTH + 2 * BUTTON_SIZE + 4
        half_width = (full_width - 4) // 2
        action_y = palette_y + ROW_HEIGHT + 4
        self.reset_button = UIButton(
            pygame.Rect(x0, action_y, half_width, BUTTON_SIZE),
            "リセット", self._reset, color=(192, 57, 43),
        )
        self.save_button = UIButton(
            pygame.Rect(x0 + half_width + 4, action_y, half_width, BUTTON_SIZE),
            "設定を保存", self._save, color=(39, 174, 96),
        )
        self.skeleton_button = UIButton(
            pygame.Rect(x0, action_y + ROW_HEIGHT, full_width, BUTTON_SIZE),
            "骨格表示", self._toggle_skeleton, color=(90, 90, 90),
            toggle=True, selected=config.SHOW_HAND_SKELETON,
        )
        self.buttons += [self.reset_button, self.save_button, self.skeleton_button]

    def _step(self, key: str, direction: int):
        value = step_value(key, self.values[key], direction, self.ranges)
        if value == self.values[key]:
            return
        self.values[key] = value
        self.on_change(key, value)

    def _add_color(self):
        """ランダムな色をパレットに追加"""
        if len(self.palette) >= config.PALETTE_MAX_COLORS:
            return
        rgb = tuple(float(c) / 255.0 for c in self.rng.integers(0, 256, size=3))
        self.palette.append(rgb)
        self.on_change("colors", tuple(self.palette))

    def _remove_color(self):
        """最後の色を削除（パレットは1色以上）"""
        if len(self.palette) <= 1:
            return
        self.palette.pop()
        self.on_change("colors", tuple(self.palette))

    def _reset(self):
        self.set_values(ParticleParams())
        if self.on_reset is not None:
            self.on_reset()

    def _save(self):
        if self.on_save is not None:
            self.on_save()

    def _toggle_skeleton(self):
        if self.on_toggle_skeleton is not None:
            self.on_toggle_skeleton(self.skeleton_button.selected)

    def set_values(self, params: ParticleParams):
        """表示値をパラメータに合わせる（適用済みの設定を反映）"""
        for key in self.ranges:
            self.values[key] = getattr(params, CONFIG_KEYS[key])
        self.palette = list(params.colors)

    def changes(self) -> dict:
        """パネルの表示値すべて（apply_config にそのまま渡せる）"""
        return {**self.values, "colors": tuple(self.palette)}

    def handle_event(self, event: pygame.event.Event) -> bool:
        """パネル上のイベントを処理。いずれかのボタンが押されたら True"""
        if not self.visible:
            return False
        handled = False
        for button in self.buttons:
            handled = button.handle_event(event) or handled
        return handled

    def contains(self, pos) -> bool:
        """座標がパネル上か（パネル操作中は放出しないため）"""
        if not self.visible:
            return False
        rects = [rect for _, rect in self.rows] + [self.palette_rect]
        return any(rect.collidepoint(pos) for rect in rects) or \
            any(button.contains(pos) for button in self.buttons)

    def render(self, screen: pygame.Surface):
        if not self.visible:
            return
        font = self.font_loader(18) if self.font_loader else pygame.font.Font(None, 22)
        for key, rect in self.rows:
            label = config.SETTINGS_LABELS_JP.get(key, key)
            value = self.values[key]
            text = f"{value:.2f}" if isinstance(value, float) else f"{value}"
            screen.blit(font.render(label, True, (220, 220, 220)), (rect.left, rect.top + 4))
            screen.blit(font.render(text, True, (255, 255, 255)),
                        (rect.left + LABEL_WIDTH, rect.top + 4))

        # パレットの色見本
        rect = self.palette_rect
        screen.blit(font.render("色", True, (220, 220, 220)), (rect.left, rect.top + 4))
        for k, rgb in enumerate(self.palette):
            swatch = pygame.Rect(rect.left + 40 + k * (SWATCH_SIZE + 4), rect.top + 6,
                                 SWATCH_SIZE, SWATCH_SIZE)
            pygame.draw.rect(screen, [int(c * 255) for c in rgb], swatch)

        for button in self.buttons:
            button.render(screen)
