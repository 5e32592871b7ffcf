"""MediaPipe ランドマーク → 手のスナップショット 変換"""

from collections import deque
from typing import Optional, Sequence

from yubisaki import config
from yubisaki.entities.hand import HandPose, HandSnapshot, Point3


def _xyz(landmark) -> tuple[float, float, float]:
    """NormalizedLandmark（.x .y .z）または (x, y, z) タプルを受け付ける"""
    if hasattr(landmark, "x"):
        return float(landmark.x), float(landmark.y), float(getattr(landmark, "z", 0.0))
    x, y, *rest = landmark
    return float(x), float(y), float(rest[0]) if rest else 0.0


def to_scene(landmark) -> Point3:
    """
    正規化座標（0-1）をシーン座標に変換

    左右反転（鏡像）して中心を原点に、±50 の範囲にする。
    """
    u, v, w = _xyz(landmark)
    return (
        (0.5 - u) * config.SCENE_EXTENT,
        (v - 0.5) * config.SCENE_EXTENT,
        w * config.SCENE_EXTENT,
    )


def finger_extension(landmarks: Sequence, threshold: float = config.FINGER_EXTENSION_THRESHOLD) -> tuple[bool, ...]:
    """
    指の開き具合を判定

    指先と付け根（親指はランドマーク2、それ以外は指先-3）の
    正規化座標での平面距離が閾値を超えたら開いているとみなす。
    """
    flags = []
    for tip_index in config.FINGER_TIP_INDICES:
        base_index = 2 if tip_index == 4 else tip_index - 3
        bx, by, _ = _xyz(landmarks[base_index])
        tx, ty, _ = _xyz(landmarks[tip_index])
        distance = ((bx - tx) ** 2 + (by - ty) ** 2) ** 0.5
        flags.append(distance > threshold)
    return tuple(flags)


def palm_center(landmarks: Sequence) -> Point3:
    """手のひらの中心（手首と各指の第1関節の平均、シーン座標）"""
    points = [to_scene(landmarks[i]) for i in config.PALM_INDICES]
    n = len(points)
    return (
        sum(p[0] for p in points) / n,
        sum(p[1] for p in points) / n,
        sum(p[2] for p in points) / n,
    )


def hand_pose_from_landmarks(
    landmarks: Sequence,
    handedness: str = "Unknown",
    velocity: Optional[tuple[float, float]] = None,
) -> HandPose:
    """21点のランドマークから HandPose を生成"""
    if len(landmarks) != 21:
        raise ValueError(f"ランドマークは21点必要です: {len(landmarks)}")
    return HandPose(
        tips=tuple(to_scene(landmarks[i]) for i in config.FINGER_TIP_INDICES),
        finger_extension=finger_extension(landmarks),
        velocity=velocity,
        palm=palm_center(landmarks),
        joints=tuple(to_scene(lm) for lm in landmarks),
        handedness=handedness,
    )


class HandVelocityEstimator:
    """
    手の速度推定（手のひら中心の移動量 / 経過フレーム数）

    検出の履歴を最大 HAND_HISTORY_LENGTH 件保持する。
    手の対応付けはスナップショット内の順番で行う。
    """

    def __init__(self, history_length: int = config.HAND_HISTORY_LENGTH):
        self.history = deque(maxlen=history_length)  # (frame, [palm, ...])

    def update(self, palms: Sequence[Point3], frame: int) -> list[Optional[tuple[float, float]]]:
        """
        新しい検出結果を記録し、手ごとの速度を返す

        Returns:
            手ごとの (vx, vy)（シーン単位/フレーム）。前回の検出に
            同じ番号の手がない場合は None
        """
        velocities: list[Optional[tuple[float, float]]] = []
        previous = self.history[-1] if self.history else None

        for hand_index, palm in enumerate(palms):
            if previous is None or hand_index >= len(previous[1]) or frame <= previous[0]:
                velocities.append(None)
                continue
            prev_frame, prev_palms = previous
            elapsed = frame - prev_frame
            prev = prev_palms[hand_index]
            velocities.append(((palm[0] - prev[0]) / elapsed, (palm[1] - prev[1]) / elapsed))

        self.history.append((frame, list(palms)))
        return velocities

    def reset(self):
        self.history.clear()


def snapshot_from_landmarks(
    multi_hand_landmarks: Sequence[Sequence],
    frame: int,
    handedness: Optional[Sequence[str]] = None,
    estimator: Optional[HandVelocityEstimator] = None,
) -> HandSnapshot:
    """
    複数の手のランドマークからスナップショットを生成

    Args:
        multi_hand_landmarks: 手ごとの21点ランドマーク
        frame: 検出したフレーム番号（速度推定に使用）
        handedness: 手ごとの "Left" / "Right"
        estimator: 速度推定器（None なら速度なし）
    """
    poses = [
        hand_pose_from_landmarks(
            landmarks,
            handedness=handedness[i] if handedness is not None else "Unknown",
        )
        for i, landmarks in enumerate(multi_hand_landmarks)
    ]

    if estimator is not None:
        velocities = estimator.update([pose.palm for pose in poses], frame)
        poses = [
            HandPose(
                tips=pose.tips,
                finger_extension=pose.finger_extension,
                velocity=velocity,
                palm=pose.palm,
                joints=pose.joints,
                handedness=pose.handedness,
            )
            for pose, velocity in zip(poses, velocities)
        ]

    return HandSnapshot(hands=tuple(poses), frame=frame)
