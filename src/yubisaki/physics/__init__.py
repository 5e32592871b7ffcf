"""物理エンジン モジュール"""

from .integrator import integrate_particles
from .interaction import apply_finger_interaction

__all__ = [
    "integrate_particles",
    "apply_finger_interaction",
]
