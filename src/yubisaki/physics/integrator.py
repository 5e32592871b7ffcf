"""数値積分器 (1フレーム = 単位時間の陽的オイラー法)"""

import numpy as np

from yubisaki.entities.particle_pool import ParticlePool


def integrate_particles(pool: ParticlePool) -> int:
    """
    アクティブな全粒子を1フレーム進める

    各粒子について以下の順で処理する（全粒子が独立なのでベクトル化）:
        1. 寿命を1減らし、0以下になったら非アクティブ化して以降を省略
        2. 重力: vy += gravity
        3. 摩擦: v *= friction
        4. 位置更新: p += v（サブステップなし）

    寿命切れの判定を力の適用より先に行うので、消える粒子に
    最後の余計なインパルスが描画されることはない。

    Args:
        pool: 粒子プール（pool.params の重力・摩擦を使用）

    Returns:
        積分後のアクティブ粒子数
    """
    params = pool.params
    idx = pool.active_indices()
    if idx.size == 0:
        return 0

    # 1. 寿命
    pool.lifetimes[idx] -= 1
    expired = pool.lifetimes[idx] <= 0
    if np.any(expired):
        pool.deactivate_many(idx[expired])
        idx = idx[~expired]
        if idx.size == 0:
            return 0

    # 2-3. 重力と摩擦
    velocity = pool.velocities[idx]
    velocity[:, 1] += params.gravity
    velocity *= params.friction
    pool.velocities[idx] = velocity

    # 4. 位置更新
    pool.positions[idx] += velocity

    return int(idx.size)
