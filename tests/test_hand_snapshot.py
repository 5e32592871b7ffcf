"""HandPose / HandSnapshot / SnapshotMailbox のテスト"""

import dataclasses
import math

import pytest

from yubisaki.entities import HandPose, HandSnapshot, SnapshotMailbox

TIPS = tuple((float(k), float(-k), 0.0) for k in range(5))


def test_extended_tips_in_finger_order():
    hand = HandPose(tips=TIPS, finger_extension=(True, False, True, False, True))
    assert [i for i, _ in hand.extended_tips()] == [0, 2, 4]
    assert list(hand.extended_tips())[1][1] == (2.0, -2.0, 0.0)


def test_velocity_or_zero():
    assert HandPose(tips=TIPS, finger_extension=(False,) * 5).velocity_or_zero() == (0.0, 0.0)
    hand = HandPose(tips=TIPS, finger_extension=(False,) * 5, velocity=(1, 2))
    assert hand.velocity_or_zero() == (1.0, 2.0)


def test_invalid_tip_count():
    with pytest.raises(ValueError):
        HandPose(tips=TIPS[:4], finger_extension=(True,) * 5)


def test_invalid_extension_count():
    with pytest.raises(ValueError):
        HandPose(tips=TIPS, finger_extension=(True,) * 3)


def test_non_finite_velocity_rejected():
    """NaN や無限大の速度は粒子状態を壊すので生成時に拒否"""
    with pytest.raises(ValueError):
        HandPose(tips=TIPS, finger_extension=(True,) * 5, velocity=(math.nan, 0.0))
    with pytest.raises(ValueError):
        HandPose(tips=TIPS, finger_extension=(True,) * 5, velocity=(0.0, math.inf))


def test_non_finite_tip_rejected():
    tips = ((math.nan, 0.0, 0.0),) + TIPS[1:]
    with pytest.raises(ValueError):
        HandPose(tips=tips, finger_extension=(True,) * 5)


def test_from_dict_rejects_non_finite():
    data = {
        "hands": [{
            "tips": [{"x": 1.0, "y": 0.0, "z": 0.0}] * 5,
            "fingerExtension": [True] * 5,
            "velocity": {"x": float("nan"), "y": 0.0},
        }]
    }
    with pytest.raises(ValueError):
        HandSnapshot.from_dict(data)


def test_snapshot_is_immutable():
    snapshot = HandSnapshot(hands=[HandPose(tips=TIPS, finger_extension=(True,) * 5)], frame=3)
    assert isinstance(snapshot.hands, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.frame = 4


def test_from_dict():
    data = {
        "hands": [{
            "tips": [{"x": 1.0, "y": 2.0, "z": 0.5}] * 5,
            "fingerExtension": [True, True, False, False, False],
            "velocity": {"x": 0.5, "y": -0.5},
        }]
    }
    snapshot = HandSnapshot.from_dict(data, frame=12)
    assert snapshot.frame == 12
    hand = snapshot.hands[0]
    assert hand.tips[0] == (1.0, 2.0, 0.5)
    assert hand.finger_extension == (True, True, False, False, False)
    assert hand.velocity == (0.5, -0.5)


def test_from_dict_without_hands():
    assert HandSnapshot.from_dict({}).is_empty()


def test_mailbox_latest_value_wins():
    """新しい値で上書きされ、読み出しても消えない"""
    mailbox = SnapshotMailbox()
    assert mailbox.latest() is None

    first = HandSnapshot(frame=1)
    second = HandSnapshot(frame=2)
    mailbox.put(first)
    mailbox.put(second)
    assert mailbox.latest() is second
    assert mailbox.latest() is second

    mailbox.clear()
    assert mailbox.latest() is None
