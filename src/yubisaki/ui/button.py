"""設定パネル用のボタン（Pygame用）"""
from typing import Callable, Optional

import pygame

# 状態ごとの明るさ倍率
_BRIGHTNESS = {"pressed": 0.7, "hovered": 1.3, "normal": 1.0}


class UIButton:
    """
    クリックで on_click を呼ぶボタン

    MOUSEBUTTONDOWN と MOUSEBUTTONUP が両方ボタン上で起きたときだけ
    クリックとみなす。toggle=True なら確定ごとに selected が反転し、
    on_click が呼ばれる時点で新しい状態になっている。
    """

    def __init__(
        self,
        rect: pygame.Rect,
        label: str,
        on_click: Callable,
        color: tuple = (52, 152, 219),
        font: Optional[pygame.font.Font] = None,
        toggle: bool = False,
        selected: bool = False,
    ):
        self.rect = rect
        self.label = label
        self.on_click = on_click
        self.color = color
        self.toggle = toggle
        self.selected = selected
        self.hovered = False
        self.pressed = False
        self._font = font

    def contains(self, pos) -> bool:
        return bool(self.rect.collidepoint(pos))

    def state(self) -> str:
        if self.pressed:
            return "pressed"
        return "hovered" if self.hovered else "normal"

    def handle_event(self, event: pygame.event.Event) -> bool:
        """クリックが確定したら True"""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.contains(event.pos)
            return False
        if getattr(event, "button", None) != 1:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN:
            self.pressed = self.contains(event.pos)
            return False
        if event.type == pygame.MOUSEBUTTONUP:
            clicked = self.pressed and self.contains(event.pos)
            self.pressed = False
            if clicked:
                if self.toggle:
                    self.selected = not self.selected
                self.on_click()
            return clicked
        return False

    def fill_color(self) -> tuple[int, int, int]:
        factor = _BRIGHTNESS[self.state()]
        return tuple(min(255, int(c * factor)) for c in self.color)

    def render(self, screen: pygame.Surface):
        # フォントは描画時に生成（イベント処理だけならfont初期化不要）
        if self._font is None:
            self._font = pygame.font.Font(None, 22)

        pygame.draw.rect(screen, self.fill_color(), self.rect, border_radius=4)
        if self.selected:
            pygame.draw.rect(screen, (255, 255, 255), self.rect, 2, border_radius=4)

        text = self._font.render(self.label, True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=self.rect.center))
