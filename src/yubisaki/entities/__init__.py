"""エンティティ モジュール"""

from .particle_pool import ParticlePool
from .hand import HandPose, HandSnapshot, SnapshotMailbox

__all__ = ["ParticlePool", "HandPose", "HandSnapshot", "SnapshotMailbox"]
