"""FingerEmitter（指先からの放出）のテスト"""

import numpy as np
import pytest

from yubisaki.effects import FingerEmitter
from yubisaki.entities.hand import HandPose, HandSnapshot
from yubisaki.entities.particle_pool import ParticlePool
from yubisaki.params import ParticleParams

TIPS = (
    (-10.0, 0.0, 3.0),
    (-5.0, -5.0, 3.0),
    (0.0, -8.0, 3.0),
    (5.0, -5.0, 3.0),
    (10.0, 0.0, 3.0),
)


def _setup(emission_rate=5, count=500, seed=0):
    rng = np.random.default_rng(seed)
    pool = ParticlePool(ParticleParams(count=count, emission_rate=emission_rate), rng=rng)
    return FingerEmitter(rng), pool


def _snapshot(flags):
    return HandSnapshot(hands=(HandPose(tips=TIPS, finger_extension=flags),))


def test_emission_frames_are_even():
    emitter, _ = _setup()
    assert [f for f in range(1, 9) if emitter.is_emission_frame(f)] == [2, 4, 6, 8]


def test_no_emission_on_odd_frame():
    emitter, pool = _setup()
    assert emitter.update(3, pool, _snapshot((True,) * 5)) == 0
    assert pool.active_count == 0


def test_emit_count_per_tip_within_rate():
    """指先1本あたり 1〜emission_rate 個"""
    emitter, pool = _setup(emission_rate=4)
    for frame in range(2, 60, 2):
        pool.reset()
        emitted = emitter.update(frame, pool, _snapshot((False, True, False, False, False)))
        assert 1 <= emitted <= 4
        assert pool.active_count == emitted


def test_rate_one_emits_exactly_one_per_tip():
    emitter, pool = _setup(emission_rate=1)
    emitted = emitter.update(2, pool, _snapshot((True, True, False, True, False)))
    assert emitted == 3
    assert pool.active_count == 3


def test_emitted_at_tip_with_zero_depth():
    """放出位置は指先の (x, y)、z は 0"""
    emitter, pool = _setup(emission_rate=1)
    emitter.update(2, pool, _snapshot((False, False, True, False, False)))
    i = pool.active_indices()[0]
    assert tuple(pool.positions[i]) == (0.0, -8.0, 0.0)


def test_closed_hand_and_missing_snapshot():
    emitter, pool = _setup()
    assert emitter.update(2, pool, _snapshot((False,) * 5)) == 0
    assert emitter.update(2, pool, None) == 0
    assert emitter.update(2, pool, HandSnapshot()) == 0
    assert pool.active_count == 0


def test_saturated_pool_keeps_capacity():
    emitter, pool = _setup(emission_rate=20, count=8)
    emitter.update(2, pool, _snapshot((True,) * 5))
    assert pool.active_count == 8


@pytest.mark.parametrize("interval", [0, -2])
def test_interval_must_be_positive(interval):
    """放出間隔0では frame % 0 になるので生成時に拒否"""
    with pytest.raises(ValueError):
        FingerEmitter(np.random.default_rng(0), interval=interval)
