"""物理計算の共通ユーティリティ"""
import numpy as np

from yubisaki import config


def planar_distance(dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
    """
    平面距離（z は無視）

    Args:
        dx: X方向の差
        dy: Y方向の差

    Returns:
        距離の配列
    """
    return np.sqrt(dx * dx + dy * dy)


def guard_distance(distance: np.ndarray, epsilon: float = config.INTERACTION_DISTANCE_EPSILON) -> np.ndarray:
    """ゼロ除算防止: epsilon 未満の距離を epsilon に置換"""
    return np.maximum(distance, epsilon)


def linear_falloff(distance: np.ndarray, radius: float, strength: float) -> np.ndarray:
    """
    線形減衰の力の強さ

    中心で strength、半径上でゼロ、半径外は負にならないようクランプ。

    Args:
        distance: 距離
        radius: 影響半径（正の値）
        strength: 中心での強さ

    Returns:
        strength * (1 - distance / radius)
    """
    return strength * np.clip(1.0 - distance / radius, 0.0, 1.0)
