"""指先と粒子の相互作用（力場）"""

from typing import Optional

import numpy as np

from yubisaki import config
from yubisaki.entities.hand import HandSnapshot
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.physics.utils import guard_distance, linear_falloff, planar_distance


def apply_finger_interaction(pool: ParticlePool, snapshot: Optional[HandSnapshot]) -> int:
    """
    開いている指先の周囲にいる粒子の速度・色・寿命を変化させる

    半径 interaction_radius 内の粒子に対して（z は無視した平面距離）:
        - 強さ s = 0.5 * (1 - d / r) で指先の方向へ引き寄せる
        - 手の速度の10%を加える（同じ手の全指先で共通）
        - Rチャンネルを 0.05 ずつ 1.0 に近づける
        - 寿命を 5 フレーム延長する

    複数の指・手からの寄与は加算。加算順は手はスナップショット順、
    指は親指→小指の順で固定（同じ入力なら結果は同一）。

    Args:
        pool: 粒子プール
        snapshot: 最新の手のスナップショット（None/空なら何もしない）

    Returns:
        接触した粒子の数
    """
    if snapshot is None or snapshot.is_empty():
        return 0

    idx = pool.active_indices()
    if idx.size == 0:
        return 0

    radius = pool.params.interaction_radius
    px = pool.positions[idx, 0].astype(np.float64)
    py = pool.positions[idx, 1].astype(np.float64)

    dvx = np.zeros(idx.size)
    dvy = np.zeros(idx.size)
    contacts = np.zeros(idx.size, dtype=np.int32)

    for hand in snapshot.hands:
        hand_vx, hand_vy = hand.velocity_or_zero()
        push_vx = hand_vx * config.HAND_VELOCITY_TRANSFER
        push_vy = hand_vy * config.HAND_VELOCITY_TRANSFER

        for _, (tip_x, tip_y, _) in hand.extended_tips():
            # 粒子 → 指先 の方向
            dx = tip_x - px
            dy = tip_y - py
            distance = planar_distance(dx, dy)
            inside = distance < radius
            if not np.any(inside):
                continue

            d = guard_distance(distance[inside])
            strength = linear_falloff(d, radius, config.INTERACTION_STRENGTH)

            dvx[inside] += dx[inside] / d * strength + push_vx
            dvy[inside] += dy[inside] / d * strength + push_vy
            contacts[inside] += 1

    touched = contacts > 0
    if not np.any(touched):
        return 0

    hit = idx[touched]
    pool.velocities[hit, 0] += dvx[touched].astype(np.float32)
    pool.velocities[hit, 1] += dvy[touched].astype(np.float32)

    # 色の変化（インタラクション効果）
    channel = config.INTERACTION_COLOR_CHANNEL
    boosted = pool.colors[hit, channel] + config.INTERACTION_COLOR_BOOST * contacts[touched]
    pool.colors[hit, channel] = np.minimum(1.0, boosted)

    # 寿命を延長（指に触れた粒子は「餌を与えられる」）
    pool.lifetimes[hit] += config.INTERACTION_LIFETIME_BONUS * contacts[touched]

    return int(hit.size)
