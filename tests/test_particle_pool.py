"""ParticlePoolのテスト"""

import numpy as np
import pytest

from yubisaki import config
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.params import ParticleParams


def _pool(count=10, seed=0, **kwargs):
    return ParticlePool(ParticleParams(count=count, **kwargs), rng=np.random.default_rng(seed))


def test_new_pool_is_inactive_and_offscreen():
    """生成直後は全スロットが非アクティブで z がセンチネル"""
    pool = _pool(count=20)
    assert pool.capacity == 20
    assert pool.active_count == 0
    assert np.all(pool.positions[:, 2] == config.OFFSCREEN_Z)


def test_initial_colors_come_from_palette():
    """初期色はパレットのいずれか"""
    pool = _pool(count=50, colors=("#ff0000", "#0000ff"))
    palette = {(1.0, 0.0, 0.0), (0.0, 0.0, 1.0)}
    for rgb in pool.colors:
        assert tuple(float(c) for c in rgb) in palette


def test_emit_uses_first_free_slot():
    """最初の非アクティブスロットを使う"""
    pool = _pool()
    assert pool.emit(1.0, 2.0) == 0
    assert pool.emit(3.0, 4.0) == 1
    pool.deactivate(0)
    assert pool.emit(5.0, 6.0) == 0


def test_emit_sets_state():
    """放出時に位置・寿命・速度上限が設定される"""
    pool = _pool(lifetime=123, max_speed=2.0)
    i = pool.emit(1.5, -2.5, 0.0)
    assert pool.active[i]
    assert tuple(pool.positions[i]) == pytest.approx((1.5, -2.5, 0.0))
    assert pool.lifetimes[i] == 123
    planar_speed = float(np.hypot(pool.velocities[i, 0], pool.velocities[i, 1]))
    assert planar_speed < 2.0 + 1e-6
    assert abs(pool.velocities[i, 2]) <= config.INITIAL_Z_JITTER / 2 + 1e-6


def test_emit_color_from_palette():
    pool = _pool(colors=("#00ff00",))
    i = pool.emit(0.0, 0.0)
    assert tuple(pool.colors[i]) == pytest.approx((0.0, 1.0, 0.0))


def test_saturation_overwrites_without_growth():
    """容量1で2回放出しても1スロットのみ（2回目は上書き）"""
    pool = _pool(count=1)
    pool.emit(0.0, 0.0)
    i = pool.emit(5.0, 5.0)
    assert i == 0
    assert pool.active_count == 1
    assert tuple(pool.positions[0, :2]) == pytest.approx((5.0, 5.0))


def test_capacity_invariant_under_many_emits():
    """何回放出してもアクティブ数は容量を超えない"""
    pool = _pool(count=16)
    for k in range(200):
        slot = pool.emit(float(k % 7), 0.0)
        assert 0 <= slot < pool.capacity
        assert pool.active_count <= pool.capacity
    assert pool.active_count == 16


def test_deactivate_moves_to_sentinel():
    """非アクティブ化で z がセンチネルになる"""
    pool = _pool()
    i = pool.emit(1.0, 1.0, 3.0)
    pool.deactivate(i)
    assert not pool.active[i]
    assert pool.positions[i, 2] == config.OFFSCREEN_Z


def test_reset_deactivates_all():
    pool = _pool()
    for _ in range(5):
        pool.emit(0.0, 0.0)
    pool.reset()
    assert pool.active_count == 0
    assert np.all(pool.positions[:, 2] == config.OFFSCREEN_Z)


def test_apply_params_rejects_capacity_change():
    """容量の変更は apply_params では行えない"""
    pool = _pool(count=10)
    with pytest.raises(ValueError):
        pool.apply_params(ParticleParams(count=20))


def test_apply_params_updates_other_values():
    pool = _pool(count=10)
    pool.apply_params(ParticleParams(count=10, lifetime=42))
    i = pool.emit(0.0, 0.0)
    assert pool.lifetimes[i] == 42


def test_fade_factors():
    """残り寿命が FADE_FRAMES 未満になるとフェード、非アクティブは0"""
    pool = _pool(count=3)
    a = pool.emit(0.0, 0.0)
    b = pool.emit(0.0, 0.0)
    pool.set_lifetime(a, 1000)
    pool.set_lifetime(b, config.FADE_FRAMES // 2)
    fade = pool.fade_factors()
    assert fade[a] == pytest.approx(1.0)
    assert fade[b] == pytest.approx(0.5, abs=0.05)
    assert fade[2] == 0.0


def test_buffers_are_flat_and_read_only():
    """位置・色バッファは長さ 3N の読み取り専用"""
    pool = _pool(count=4)
    positions = pool.position_buffer
    colors = pool.color_buffer
    assert positions.shape == (12,)
    assert colors.shape == (12,)
    with pytest.raises(ValueError):
        positions[0] = 1.0
    # プール本体は書き込み可能なまま
    pool.emit(7.0, 0.0)
    assert pool.position_buffer[0] == pytest.approx(7.0)
