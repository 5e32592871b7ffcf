"""指先からの粒子放出"""

from typing import Optional

import numpy as np

from yubisaki import config
from yubisaki.entities.hand import HandSnapshot
from yubisaki.entities.particle_pool import ParticlePool


class FingerEmitter:
    """
    開いている指先から粒子を放出するコントローラ

    放出は frame % interval == 0 のフレームのみ（既定で偶数フレーム）。
    指先1本あたり [1, emission_rate] の一様な整数個を z=0 に放出する。
    """

    def __init__(self, rng: np.random.Generator, interval: int = config.EMISSION_INTERVAL):
        if interval < 1:
            raise ValueError(f"放出間隔は1フレーム以上: {interval}")
        self.rng = rng
        self.interval = interval

    def is_emission_frame(self, frame: int) -> bool:
        return frame % self.interval == 0

    def emit_from_fingers(self, pool: ParticlePool, snapshot: Optional[HandSnapshot]) -> int:
        """
        スナップショットの全ての手・開いている指先から放出

        Returns:
            放出した粒子数
        """
        if snapshot is None or snapshot.is_empty():
            return 0

        rate = pool.params.emission_rate
        emitted = 0
        for hand in snapshot.hands:
            for _, (tip_x, tip_y, _) in hand.extended_tips():
                emit_count = int(self.rng.integers(1, rate + 1))
                for _ in range(emit_count):
                    pool.emit(tip_x, tip_y, 0.0)
                emitted += emit_count
        return emitted

    def update(self, frame: int, pool: ParticlePool, snapshot: Optional[HandSnapshot]) -> int:
        """放出フレームなら放出し、放出数を返す"""
        if not self.is_emission_frame(frame):
            return 0
        return self.emit_from_fingers(pool, snapshot)
