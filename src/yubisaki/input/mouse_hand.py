"""マウス入力による疑似ハンド"""

import numpy as np
import pygame

from yubisaki import config
from yubisaki.entities.hand import HandPose, HandSnapshot


class MouseHandInput:
    """
    マウスカーソルを1つの手として扱う

    カーソルの周囲に5本の指先を配置し、左ボタンを押している間は
    すべての指が開いている（放出・相互作用あり）とみなす。
    """

    def __init__(self, screen_width: int, screen_height: int):
        self.screen_width = screen_width
        self.screen_height = screen_height

        # 状態
        self.is_pressed = False
        self.has_position = False
        self.position = np.array([0.0, 0.0])
        self.velocity = np.array([0.0, 0.0])

    def screen_to_scene(self, mouse_pos) -> np.ndarray:
        """スクリーン座標 → シーン座標"""
        return np.array([
            (mouse_pos[0] / self.screen_width - 0.5) * config.SCENE_EXTENT,
            (mouse_pos[1] / self.screen_height - 0.5) * config.SCENE_EXTENT,
        ])

    def update(self):
        """入力状態を更新（毎フレーム1回）"""
        self.feed(pygame.mouse.get_pos(), pygame.mouse.get_pressed()[0])

    def feed(self, mouse_pos, pressed: bool):
        """
        マウスの位置とボタン状態を反映

        速度はシーン単位/フレーム。ボタンを離している間は減衰する。
        """
        new_position = self.screen_to_scene(mouse_pos)

        if pressed:
            if self.is_pressed:
                self.velocity = new_position - self.position
            else:
                self.velocity = np.array([0.0, 0.0])
        else:
            self.velocity *= config.MOUSE_VELOCITY_DECAY  # 減衰

        self.position = new_position
        self.has_position = True
        self.is_pressed = bool(pressed)

    def get_position(self) -> np.ndarray:
        """カーソル位置（シーン座標）を取得"""
        return self.position.copy()

    def get_velocity(self) -> np.ndarray:
        return self.velocity.copy()

    def to_hand_pose(self) -> HandPose:
        """カーソル位置を中心とした HandPose"""
        cx, cy = self.position
        tips = tuple((cx + ox, cy + oy, 0.0) for ox, oy in config.MOUSE_FINGER_OFFSETS)
        return HandPose(
            tips=tips,
            finger_extension=(self.is_pressed,) * len(tips),
            velocity=(float(self.velocity[0]), float(self.velocity[1])),
            palm=(float(cx), float(cy), 0.0),
            handedness="Mouse",
        )

    def to_snapshot(self, frame: int = 0) -> HandSnapshot:
        """現在の状態をスナップショットにする（カーソル未取得なら空）"""
        if not self.has_position:
            return HandSnapshot(hands=(), frame=frame)
        return HandSnapshot(hands=(self.to_hand_pose(),), frame=frame)
