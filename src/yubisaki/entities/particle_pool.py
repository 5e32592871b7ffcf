"""粒子プール（固定容量・スロット添字の列指向ストレージ）"""

from typing import Optional

import numpy as np

from yubisaki import config
from yubisaki.params import ParticleParams


class ParticlePool:
    """
    全粒子の状態を保持する固定容量プール

    位置・速度・色・寿命の並列配列と、アクティブフラグ配列で構成する。
    非アクティブなスロットの z 座標は常に OFFSCREEN_Z。
    容量は生成時に固定され、変更するには新しいプールを作る。
    """

    def __init__(self, params: ParticleParams, rng: Optional[np.random.Generator] = None):
        self.params = params
        self.rng = rng if rng is not None else np.random.default_rng()
        self.capacity = params.count

        n = self.capacity
        self.positions = np.zeros((n, 3), dtype=np.float32)
        self.velocities = np.zeros((n, 3), dtype=np.float32)
        self.colors = np.zeros((n, 3), dtype=np.float32)
        self.lifetimes = np.zeros(n, dtype=np.int32)
        self.active = np.zeros(n, dtype=bool)

        # すべての粒子を画面外に配置
        self.positions[:, 2] = config.OFFSCREEN_Z
        palette = np.asarray(params.colors, dtype=np.float32)
        self.colors[:] = palette[self.rng.integers(len(palette), size=n)]

    def apply_params(self, params: ParticleParams):
        """容量以外のパラメータを差し替える（フレーム間でのみ呼ぶ）"""
        if params.count != self.capacity:
            raise ValueError(
                f"プール容量は変更できません: {self.capacity} → {params.count}"
            )
        self.params = params

    def _random_color(self) -> tuple[float, float, float]:
        colors = self.params.colors
        return colors[int(self.rng.integers(len(colors)))]

    def _find_slot(self) -> int:
        """最初の非アクティブスロット。満杯ならランダムなスロットを上書き"""
        i = int(np.argmin(self.active))
        if not self.active[i]:
            return i
        return int(self.rng.integers(self.capacity))

    def emit(self, x: float, y: float, z: float = 0.0) -> int:
        """
        新しい粒子を放出

        満杯（飽和）の場合はエラーにせず、一様ランダムに選んだ
        既存の粒子を上書きする。

        Returns:
            使用したスロット番号（次のフレーム以降は保持しないこと）
        """
        i = self._find_slot()
        params = self.params

        self.active[i] = True
        self.positions[i] = (x, y, z)

        # ランダムな方向 × [0, max_speed) の初速
        angle = self.rng.random() * 2.0 * np.pi
        speed = self.rng.random() * params.max_speed
        self.velocities[i] = (
            np.cos(angle) * speed,
            np.sin(angle) * speed,
            (self.rng.random() - 0.5) * config.INITIAL_Z_JITTER,
        )

        self.lifetimes[i] = params.lifetime
        self.colors[i] = self._random_color()
        return i

    def deactivate(self, i: int):
        """粒子を非アクティブ化し、z座標を画面外に移す"""
        self.active[i] = False
        self.positions[i, 2] = config.OFFSCREEN_Z

    def deactivate_many(self, indices: np.ndarray):
        self.active[indices] = False
        self.positions[indices, 2] = config.OFFSCREEN_Z

    def reset(self):
        """すべての粒子を非アクティブ化"""
        self.active[:] = False
        self.positions[:, 2] = config.OFFSCREEN_Z

    def set_velocity(self, i: int, vx: float, vy: float, vz: Optional[float] = None):
        self.velocities[i, 0] = vx
        self.velocities[i, 1] = vy
        if vz is not None:
            self.velocities[i, 2] = vz

    def set_color(self, i: int, rgb: tuple[float, float, float]):
        self.colors[i] = rgb

    def set_lifetime(self, i: int, lifetime: int):
        self.lifetimes[i] = lifetime

    @property
    def active_count(self) -> int:
        return int(np.count_nonzero(self.active))

    def active_indices(self) -> np.ndarray:
        return np.flatnonzero(self.active)

    def fade_factors(self) -> np.ndarray:
        """描画用の不透明度 min(1, lifetime / FADE_FRAMES)（非アクティブは0）"""
        fade = np.clip(self.lifetimes.astype(np.float32) / config.FADE_FRAMES, 0.0, 1.0)
        return np.where(self.active, fade, 0.0).astype(np.float32)

    @property
    def position_buffer(self) -> np.ndarray:
        """レンダラー向けの読み取り専用フラット位置バッファ（長さ 3N）"""
        view = self.positions.reshape(-1).view()
        view.flags.writeable = False
        return view

    @property
    def color_buffer(self) -> np.ndarray:
        """レンダラー向けの読み取り専用フラット色バッファ（長さ 3N）"""
        view = self.colors.reshape(-1).view()
        view.flags.writeable = False
        return view
