"""粒子シミュレーション本体（1フレーム1ステップのオーケストレーション）"""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional

import numpy as np

from yubisaki import config
from yubisaki.effects.finger_emitter import FingerEmitter
from yubisaki.effects.particle_effects import ParticleEffects
from yubisaki.entities.hand import HandSnapshot, SnapshotMailbox
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.params import ParticleParams
from yubisaki.physics.integrator import integrate_particles
from yubisaki.physics.interaction import apply_finger_interaction


@dataclass(frozen=True)
class ParticleStatus:
    """定期的に発行するプール使用状況"""
    active_particles: int
    max_particles: int
    usage_percentage: float
    frame: int = 0

    def to_dict(self) -> dict:
        return {
            "activeParticles": self.active_particles,
            "maxParticles": self.max_particles,
            "usagePercentage": self.usage_percentage,
        }


class ParticleSimulation:
    """
    指先パーティクルのシミュレーション

    1フレームの処理順:
        放出（偶数フレーム）→ フレーム駆動エフェクト → 積分 → 指との相互作用
    手のスナップショットは1スロットのメールボックス経由で受け取り、
    新しいものが届かない間は最後のスナップショットを使い続ける。
    """

    def __init__(
        self,
        params: Optional[ParticleParams] = None,
        seed: Optional[int] = None,
        status_interval: int = config.STATUS_INTERVAL,
        on_status: Optional[Callable[[ParticleStatus], None]] = None,
    ):
        if status_interval < 1:
            raise ValueError(f"status_interval は1フレーム以上: {status_interval}")
        self.params = params if params is not None else ParticleParams()
        self.rng = np.random.default_rng(seed)
        self.pool = ParticlePool(self.params, rng=self.rng)
        self.emitter = FingerEmitter(self.rng)
        self.mailbox = SnapshotMailbox()
        self.effects = []
        self.status_interval = status_interval
        self.on_status = on_status

        self.frame_count = 0
        self.last_status: Optional[ParticleStatus] = None
        self._in_frame = False

        if config.DEBUG_MODE:
            print(f"[DEBUG] particle simulation initialized: {self.pool.capacity} particles")

    def submit_snapshot(self, snapshot: Optional[HandSnapshot]):
        """最新の手のスナップショットを差し替える（待機しない）"""
        self.mailbox.put(snapshot)

    @property
    def particle_effects(self) -> ParticleEffects:
        """一度に放出するエフェクト（現在のプールに対して）"""
        return ParticleEffects(self.pool)

    def add_effect(self, effect):
        """フレーム駆動エフェクト（step(pool) -> 終了フラグ）を登録"""
        self.effects.append(effect)

    def step(self) -> Optional[ParticleStatus]:
        """
        シミュレーションを1フレーム進める

        Returns:
            status_interval フレームごとに ParticleStatus、それ以外は None
        """
        self.frame_count += 1
        frame = self.frame_count
        snapshot = self.mailbox.latest()

        self._in_frame = True
        try:
            self.emitter.update(frame, self.pool, snapshot)

            self.effects = [effect for effect in self.effects if not effect.step(self.pool)]

            active = integrate_particles(self.pool)
            apply_finger_interaction(self.pool, snapshot)
        finally:
            self._in_frame = False

        if frame % self.status_interval != 0:
            return None

        status = ParticleStatus(
            active_particles=active,
            max_particles=self.pool.capacity,
            usage_percentage=active / self.pool.capacity * 100.0,
            frame=frame,
        )
        self.last_status = status
        if config.DEBUG_MODE:
            print(f"[DEBUG] frame={frame}: active={active}/{status.max_particles} "
                  f"({status.usage_percentage:.1f}%)")
        if self.on_status is not None:
            self.on_status(status)
        return status

    def apply_config(self, changes: Mapping) -> ParticleParams:
        """
        設定を適用（フレーム間でのみ）

        count が変わる場合はプールを作り直す（既存の粒子はすべて破棄）。
        検証に失敗した場合は ParticleConfigError を送出し、現在の設定を維持する。

        Raises:
            RuntimeError: フレーム処理中に呼ばれた場合
            ParticleConfigError: 不正な設定
        """
        if self._in_frame:
            raise RuntimeError("フレーム処理中は設定を変更できません")

        new_params = self.params.with_changes(changes)
        if new_params.count != self.pool.capacity:
            self.pool = ParticlePool(new_params, rng=self.rng)
        else:
            self.pool.apply_params(new_params)
        self.params = new_params

        if config.DEBUG_MODE:
            print(f"[DEBUG] particle properties updated: {dict(changes)}")
        return new_params

    def reset(self):
        """すべての粒子を非アクティブ化（フレーム駆動エフェクトも破棄）"""
        self.pool.reset()
        self.effects.clear()
        if config.DEBUG_MODE:
            print("[DEBUG] particle simulation reset")

    def status(self) -> ParticleStatus:
        """現在の使用状況（即時）"""
        active = self.pool.active_count
        return ParticleStatus(
            active_particles=active,
            max_particles=self.pool.capacity,
            usage_percentage=active / self.pool.capacity * 100.0,
            frame=self.frame_count,
        )

    def get_properties(self) -> dict:
        """現在の設定と粒子数"""
        props = self.params.to_dict()
        props["particleCount"] = self.pool.active_count
        props["maxParticles"] = self.pool.capacity
        return props
