"""特殊な粒子エフェクトのコレクション"""

import math
from typing import Optional

import numpy as np

from yubisaki import config
from yubisaki.entities.hand import HandSnapshot
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.params import parse_color

# バースト用の虹色パレット
BURST_COLORS = (
    "#ff0000", "#ff7700", "#ffff00", "#00ff00",
    "#00ffff", "#0000ff", "#7700ff", "#ff00ff",
)

TRAIL_LIFETIME = 30  # フレーム


def _uniform(rng: np.random.Generator, low: float, high: float) -> float:
    return float(rng.uniform(low, high))


class ParticleEffects:
    """
    一度に放出するエフェクト（爆発・バースト・軌跡）

    すべてプールの emit() を通すので、飽和時は通常の放出と同じく
    ランダムなスロットを上書きする。
    """

    def __init__(self, pool: ParticlePool):
        self.pool = pool

    @property
    def rng(self) -> np.random.Generator:
        return self.pool.rng

    def explosion(self, x: float, y: float, z: float = 0.0, particle_count: int = 50,
                  radius: float = 10.0, color=None) -> list[int]:
        """
        爆発エフェクト

        半径内のランダムな位置に放出（速度は通常のランダム初速）。

        Returns:
            使用したスロット番号
        """
        rgb = parse_color(color) if color is not None else None
        slots = []
        for _ in range(particle_count):
            angle = self.rng.random() * 2.0 * math.pi
            distance = self.rng.random() * radius
            i = self.pool.emit(x + math.cos(angle) * distance, y + math.sin(angle) * distance, z)
            if rgb is not None:
                self.pool.set_color(i, rgb)
            slots.append(i)
        return slots

    def burst(self, x: float, y: float, particle_count: int = 200) -> list[int]:
        """一点から放射状に、速度 [1, 5) の虹色の粒子を放出"""
        palette = [parse_color(c) for c in BURST_COLORS]
        slots = []
        for _ in range(particle_count):
            angle = self.rng.random() * 2.0 * math.pi
            speed = _uniform(self.rng, 1.0, 5.0)
            i = self.pool.emit(x, y, 0.0)
            self.pool.set_velocity(i, math.cos(angle) * speed, math.sin(angle) * speed)
            self.pool.set_color(i, palette[int(self.rng.integers(len(palette)))])
            slots.append(i)
        return slots

    def trail(self, snapshot: Optional[HandSnapshot], color=None) -> list[int]:
        """
        軌跡エフェクト（開いている指先に短寿命の粒子を1つずつ置く）

        手の速度があれば、その10%を粒子の速度にする。
        """
        if snapshot is None or snapshot.is_empty():
            return []

        rgb = parse_color(color) if color is not None else None
        slots = []
        for hand in snapshot.hands:
            for _, (tip_x, tip_y, _) in hand.extended_tips():
                i = self.pool.emit(tip_x, tip_y, 0.0)
                self.pool.set_lifetime(i, TRAIL_LIFETIME)
                if hand.velocity is not None:
                    self.pool.set_velocity(
                        i,
                        hand.velocity[0] * config.HAND_VELOCITY_TRANSFER,
                        hand.velocity[1] * config.HAND_VELOCITY_TRANSFER,
                    )
                if rgb is not None:
                    self.pool.set_color(i, rgb)
                slots.append(i)
        return slots


class FountainEffect:
    """
    噴水エフェクト（フレーム駆動）

    duration フレームの間、毎フレーム particles_per_frame 個を
    上向き ±45度、速度 [3, 6) で放出する。
    """

    def __init__(self, x: float, y: float, particles_per_frame: int = 5, duration: int = 60):
        self.x = x
        self.y = y
        self.particles_per_frame = particles_per_frame
        self.duration = duration
        self.frames_done = 0

    @property
    def finished(self) -> bool:
        return self.frames_done >= self.duration

    def step(self, pool: ParticlePool) -> bool:
        """1フレーム分放出。終了したら True"""
        if self.finished:
            return True

        rng = pool.rng
        for _ in range(self.particles_per_frame):
            # y軸は下向きなので -π/2 が画面上方向
            angle = _uniform(rng, -math.pi / 4, math.pi / 4) - math.pi / 2
            speed = _uniform(rng, 3.0, 6.0)
            i = pool.emit(self.x + _uniform(rng, -2.0, 2.0), self.y, 0.0)
            pool.set_velocity(i, math.cos(angle) * speed, math.sin(angle) * speed)

        self.frames_done += 1
        return self.finished


class VortexEffect:
    """渦巻きエフェクト（フレーム駆動、1フレームに1粒子）"""

    def __init__(self, x: float, y: float, particle_count: int = 100,
                 radius: float = 30.0, rotation_speed: float = 0.1):
        self.x = x
        self.y = y
        self.particle_count = particle_count
        self.radius = radius
        self.rotation_speed = rotation_speed
        self.angle = 0.0
        self.emitted = 0

    @property
    def finished(self) -> bool:
        return self.emitted >= self.particle_count

    def step(self, pool: ParticlePool) -> bool:
        if self.finished:
            return True

        r = _uniform(pool.rng, 0.0, self.radius)
        px = self.x + math.cos(self.angle) * r
        py = self.y + math.sin(self.angle) * r
        i = pool.emit(px, py, 0.0)

        # 中心に近いほど速い接線方向の速度
        distance = math.hypot(px - self.x, py - self.y)
        tangential_speed = self.rotation_speed * (self.radius - distance) / self.radius
        pool.set_velocity(
            i,
            -math.sin(self.angle) * tangential_speed,
            math.cos(self.angle) * tangential_speed,
        )

        self.angle += 0.1
        self.emitted += 1
        return self.finished
