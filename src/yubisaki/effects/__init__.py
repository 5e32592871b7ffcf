"""粒子の放出・エフェクト モジュール"""

from .finger_emitter import FingerEmitter
from .particle_effects import ParticleEffects, FountainEffect, VortexEffect

__all__ = ["FingerEmitter", "ParticleEffects", "FountainEffect", "VortexEffect"]
