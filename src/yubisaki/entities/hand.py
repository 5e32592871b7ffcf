"""手のポーズ スナップショット（検出結果の受け渡し用データ）"""

import math
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

NUM_FINGERS = 5

Point3 = tuple[float, float, float]


@dataclass(frozen=True)
class HandPose:
    """
    1つの手の検出結果

    - tips: 指先位置 (x, y, z) ×5（親指→小指）
    - finger_extension: 指が開いているか ×5
    - velocity: 手全体の速度 (vx, vy)（シーン単位/フレーム、任意）
    """
    tips: tuple[Point3, ...]
    finger_extension: tuple[bool, ...]
    velocity: Optional[tuple[float, float]] = None
    palm: Optional[Point3] = None
    joints: tuple[Point3, ...] = ()
    handedness: str = "Unknown"

    def __post_init__(self):
        tips = tuple(tuple(float(c) for c in tip) for tip in self.tips)
        if len(tips) != NUM_FINGERS or any(len(tip) != 3 for tip in tips):
            raise ValueError(f"指先は (x, y, z) ×{NUM_FINGERS} で指定: {self.tips!r}")
        if not all(math.isfinite(c) for tip in tips for c in tip):
            raise ValueError(f"指先に有限値でない座標があります: {tips!r}")
        extension = tuple(bool(flag) for flag in self.finger_extension)
        if len(extension) != NUM_FINGERS:
            raise ValueError(f"指の開閉フラグは{NUM_FINGERS}個で指定: {self.finger_extension!r}")
        object.__setattr__(self, "tips", tips)
        object.__setattr__(self, "finger_extension", extension)
        if self.velocity is not None:
            vx, vy = self.velocity
            vx, vy = float(vx), float(vy)
            if not (math.isfinite(vx) and math.isfinite(vy)):
                raise ValueError(f"手の速度が有限値ではありません: {self.velocity!r}")
            object.__setattr__(self, "velocity", (vx, vy))

    def extended_tips(self) -> Iterator[tuple[int, Point3]]:
        """開いている指の (指番号, 指先位置) を親指→小指の順に返す"""
        for finger_index, (tip, extended) in enumerate(zip(self.tips, self.finger_extension)):
            if extended:
                yield finger_index, tip

    def velocity_or_zero(self) -> tuple[float, float]:
        return self.velocity if self.velocity is not None else (0.0, 0.0)

    @classmethod
    def from_dict(cls, data: Mapping) -> "HandPose":
        """{tips: [{x, y, z}]×5, fingerExtension: [bool]×5, velocity?: {x, y}} から生成"""
        tips = tuple((tip["x"], tip["y"], tip.get("z", 0.0)) for tip in data["tips"])
        velocity = data.get("velocity")
        if velocity is not None:
            velocity = (velocity["x"], velocity["y"])
        return cls(
            tips=tips,
            finger_extension=tuple(data["fingerExtension"]),
            velocity=velocity,
            handedness=data.get("handedness", "Unknown"),
        )


@dataclass(frozen=True)
class HandSnapshot:
    """ある時点の手の一覧（スナップショット順 = 相互作用の適用順）"""
    hands: tuple[HandPose, ...] = ()
    frame: int = 0

    def __post_init__(self):
        object.__setattr__(self, "hands", tuple(self.hands))

    def is_empty(self) -> bool:
        return len(self.hands) == 0

    @classmethod
    def from_dict(cls, data: Mapping, frame: int = 0) -> "HandSnapshot":
        return cls(hands=tuple(HandPose.from_dict(h) for h in data.get("hands", ())), frame=frame)


class SnapshotMailbox:
    """
    1スロットのメールボックス（最新値優先）

    put() は参照の差し替えのみ。スナップショットは不変なので、
    検出を別スレッドで行っても読み手が途中状態を見ることはない。
    """

    def __init__(self):
        self._latest: Optional[HandSnapshot] = None

    def put(self, snapshot: Optional[HandSnapshot]):
        self._latest = snapshot

    def latest(self) -> Optional[HandSnapshot]:
        return self._latest

    def clear(self):
        self._latest = None
