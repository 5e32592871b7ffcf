"""パーティクルビュー レンダラー"""

import numpy as np
import pygame

from yubisaki import config
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.params import ParticleParams


def scene_to_screen(x, y, view_rect: pygame.Rect):
    """
    シーン座標 → スクリーン座標（配列対応）

    シーンの ±SCENE_EXTENT/2 を view_rect 全体に対応させる。
    """
    sx = view_rect.left + (np.asarray(x) / config.SCENE_EXTENT + 0.5) * view_rect.width
    sy = view_rect.top + (np.asarray(y) / config.SCENE_EXTENT + 0.5) * view_rect.height
    return sx, sy


class ParticleViewRenderer:
    """
    粒子の描画（表示専用、シミュレーション状態は変更しない）

    位置・色バッファのみを読み、z がセンチネルのスロットは描かない。
    色は残り寿命のフェード係数を掛けて加算合成する。
    """

    def __init__(self):
        self._layer = None

    def particle_radius(self, params: ParticleParams) -> int:
        """size パラメータから描画半径（px）を決める"""
        return max(1, int(round(params.size * config.PARTICLE_RADIUS_PX_PER_SIZE)))

    def visible_particles(self, pool: ParticlePool):
        """
        描画対象の (添字, RGB[0-255]) を返す

        Returns:
            (indices, colors_255): colors_255 は (n, 3) の int 配列
        """
        positions = pool.position_buffer.reshape(-1, 3)
        colors = pool.color_buffer.reshape(-1, 3)
        visible = np.flatnonzero(positions[:, 2] != config.OFFSCREEN_Z)

        fade = pool.fade_factors()[visible]
        colors_255 = np.clip(colors[visible] * fade[:, None] * 255.0, 0, 255).astype(np.int32)
        return visible, colors_255

    def render(self, screen: pygame.Surface, view_rect: pygame.Rect,
               pool: ParticlePool, params: ParticleParams):
        """粒子を描画"""
        if self._layer is None or self._layer.get_size() != view_rect.size:
            self._layer = pygame.Surface(view_rect.size)
        layer = self._layer
        layer.fill((0, 0, 0))

        indices, colors_255 = self.visible_particles(pool)
        if indices.size > 0:
            positions = pool.position_buffer.reshape(-1, 3)
            local_rect = pygame.Rect(0, 0, view_rect.width, view_rect.height)
            sx, sy = scene_to_screen(positions[indices, 0], positions[indices, 1], local_rect)
            radius = self.particle_radius(params)

            for x, y, color in zip(sx.astype(np.int32), sy.astype(np.int32), colors_255):
                if 0 <= x < view_rect.width and 0 <= y < view_rect.height:
                    pygame.draw.circle(layer, color.tolist(), (int(x), int(y)), radius)

        # 加算合成
        screen.blit(layer, view_rect.topleft, special_flags=pygame.BLEND_ADD)
