"""手のスケルトン オーバーレイ"""

from typing import Optional

import pygame

from yubisaki import config
from yubisaki.entities.hand import HandSnapshot
from yubisaki.rendering.particle_view import scene_to_screen

# 手の骨格を構成する接続（MediaPipeの21点のインデックス）
HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),          # 親指
    (0, 5), (5, 6), (6, 7), (7, 8),          # 人差し指
    (0, 9), (9, 10), (10, 11), (11, 12),     # 中指
    (0, 13), (13, 14), (14, 15), (15, 16),   # 薬指
    (0, 17), (17, 18), (18, 19), (19, 20),   # 小指
    (5, 9), (9, 13), (13, 17),               # 手のひら
)


class HandOverlayRenderer:
    """
    手の関節と骨格を描画

    関節データのない手（マウス入力など）は指先のみ描く。
    開いている指先は白で強調する。
    """

    def __init__(self, show_skeleton: bool = config.SHOW_HAND_SKELETON):
        self.show_skeleton = show_skeleton
        self.color = pygame.Color(config.COLOR_SKELETON)

    def _to_px(self, point, view_rect: pygame.Rect) -> tuple[int, int]:
        sx, sy = scene_to_screen(point[0], point[1], view_rect)
        return int(sx), int(sy)

    def render(self, screen: pygame.Surface, view_rect: pygame.Rect,
               snapshot: Optional[HandSnapshot]):
        if snapshot is None or snapshot.is_empty():
            return

        for hand in snapshot.hands:
            joints = [self._to_px(j, view_rect) for j in hand.joints]

            if self.show_skeleton and len(joints) == 21:
                for a, b in HAND_CONNECTIONS:
                    pygame.draw.line(screen, self.color, joints[a], joints[b], 2)

            for point in joints:
                pygame.draw.circle(screen, self.color, point, config.JOINT_RADIUS)

            for tip, extended in zip(hand.tips, hand.finger_extension):
                color = config.COLOR_TIP_EXTENDED if extended else self.color
                pygame.draw.circle(screen, color, self._to_px(tip, view_rect),
                                   config.JOINT_RADIUS, 0 if extended else 1)
