"""粒子シミュレーションのパラメータ（フレーム間でのみ更新される設定値）"""

import math
from dataclasses import dataclass, field, fields, replace
from typing import Mapping

import pygame

from yubisaki import config


class ParticleConfigError(ValueError):
    """不正な設定値（適用時に拒否される）"""


# 外部設定キー（camelCase）→ フィールド名
CONFIG_KEYS = {
    "count": "count",
    "size": "size",
    "maxSpeed": "max_speed",
    "lifetime": "lifetime",
    "emissionRate": "emission_rate",
    "gravity": "gravity",
    "friction": "friction",
    "bounceStrength": "bounce_strength",
    "interactionRadius": "interaction_radius",
    "colors": "colors",
}


def parse_color(value) -> tuple[float, float, float]:
    """
    色指定を正規化RGBに変換

    Args:
        value: "#ff4444" などの色文字列、pygame.Color、
               または正規化済み (r, g, b) の3要素シーケンス

    Returns:
        (r, g, b) 各成分 0.0-1.0
    """
    if isinstance(value, (str, pygame.Color)):
        try:
            color = pygame.Color(value)
        except ValueError as e:
            raise ParticleConfigError(f"色を解釈できません: {value!r}") from e
        return (color.r / 255.0, color.g / 255.0, color.b / 255.0)

    try:
        r, g, b = (float(c) for c in value)
    except (TypeError, ValueError) as e:
        raise ParticleConfigError(f"色を解釈できません: {value!r}") from e

    if not all(0.0 <= c <= 1.0 for c in (r, g, b)):
        raise ParticleConfigError(f"正規化RGBは0-1の範囲で指定: {value!r}")
    return (r, g, b)


@dataclass(frozen=True)
class ParticleParams:
    """
    シミュレーションパラメータ

    不変値。変更は with_changes() で新しい値を作り、
    ParticleSimulation.apply_config() 経由でフレーム間に適用する。
    bounce_strength は保持・検証のみで、物理計算では使用しない。
    """
    count: int = config.PARTICLE_COUNT
    size: float = config.PARTICLE_SIZE
    max_speed: float = config.PARTICLE_MAX_SPEED
    lifetime: int = config.PARTICLE_LIFETIME
    emission_rate: int = config.PARTICLE_EMISSION_RATE
    gravity: float = config.PARTICLE_GRAVITY
    friction: float = config.PARTICLE_FRICTION
    bounce_strength: float = config.PARTICLE_BOUNCE_STRENGTH
    interaction_radius: float = config.PARTICLE_INTERACTION_RADIUS
    colors: tuple = field(default=config.PARTICLE_COLORS)

    def __post_init__(self):
        # 整数項目（スライダー経由の float も受け付ける）
        for name in ("count", "lifetime", "emission_rate"):
            value = getattr(self, name)
            try:
                is_integer = not isinstance(value, bool) and float(value).is_integer()
            except (TypeError, ValueError):
                is_integer = False
            if not is_integer:
                raise ParticleConfigError(f"{name} は整数で指定: {value!r}")
            object.__setattr__(self, name, int(value))
        for name in ("size", "max_speed", "gravity", "friction",
                     "bounce_strength", "interaction_radius"):
            try:
                value = float(getattr(self, name))
            except (TypeError, ValueError) as e:
                raise ParticleConfigError(f"{name} は数値で指定: {getattr(self, name)!r}") from e
            if not math.isfinite(value):
                raise ParticleConfigError(f"{name} が有限値ではありません: {value!r}")
            object.__setattr__(self, name, value)

        if self.count < 1:
            raise ParticleConfigError(f"count は1以上: {self.count}")
        if self.lifetime < 1:
            raise ParticleConfigError(f"lifetime は1以上: {self.lifetime}")
        if self.emission_rate < 1:
            raise ParticleConfigError(f"emission_rate は1以上: {self.emission_rate}")
        if self.size < 0.0:
            raise ParticleConfigError(f"size は0以上: {self.size}")
        if self.max_speed < 0.0:
            raise ParticleConfigError(f"max_speed は0以上: {self.max_speed}")
        if not 0.0 < self.friction <= 1.0:
            raise ParticleConfigError(f"friction は (0, 1] の範囲: {self.friction}")
        if not 0.0 <= self.bounce_strength <= 1.0:
            raise ParticleConfigError(f"bounce_strength は [0, 1] の範囲: {self.bounce_strength}")
        if self.interaction_radius <= 0.0:
            raise ParticleConfigError(f"interaction_radius は正の値: {self.interaction_radius}")

        if isinstance(self.colors, str) or len(self.colors) == 0:
            raise ParticleConfigError("colors は1色以上のパレットで指定")
        object.__setattr__(self, "colors", tuple(parse_color(c) for c in self.colors))

    def with_changes(self, changes: Mapping) -> "ParticleParams":
        """
        設定変更を適用した新しいパラメータを返す

        Args:
            changes: camelCase の設定キー（count, maxSpeed, ...）
                     またはフィールド名をキーとする辞書

        Raises:
            ParticleConfigError: 未知のキー、または不正な値
        """
        field_names = {f.name for f in fields(self)}
        updates = {}
        for key, value in changes.items():
            name = CONFIG_KEYS.get(key, key)
            if name not in field_names:
                raise ParticleConfigError(f"未知の設定キー: {key!r}")
            updates[name] = value
        return replace(self, **updates)

    def to_dict(self) -> dict:
        """外部向けの camelCase 辞書（色は正規化RGBのリスト）"""
        out = {key: getattr(self, name) for key, name in CONFIG_KEYS.items()}
        out["colors"] = [list(c) for c in self.colors]
        return out
