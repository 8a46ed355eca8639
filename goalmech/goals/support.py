# goalmech/goals/support.py
"""
SUPPORT GOALS: Boundary Conditions as Very Stiff Springs
========================================================

A support pulls its particle back to a target position (and, for the 6-DOF
variant, a target orientation) along the fixed world axes only:

    move   = (target − current) masked per axis
    torque = rotvec(R_target · R_current⁻¹) masked per axis

The weighting is large (1e15 for translations, 1e12 for the 6-DOF support)
so the support dominates the weighted average on its particle. Free axes
carry zero weighting in axis_weighting(); otherwise the support would damp
the free directions of the particle.

The reaction is the force the support must deliver: weighting × move, in kN
(and kNm for the moment, expressed in the support plane's axes).
"""

import warnings
from typing import Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from ..geometry import Plane, as_point
from ..kernel.goal import ConfigurationError, FreeSupportWarning, Goal, Particle
from ..results import SupportResult
from ..post import transform_moment


def _mask(fixed: Sequence[bool], size: int, label: str) -> np.ndarray:
    mask = np.asarray([bool(f) for f in fixed], dtype=bool)
    if mask.shape != (size,):
        raise ConfigurationError(f"{label} needs {size} fixity flags, got {len(mask)}")
    return mask


class SupportGoal(Goal):
    """
    Translational support.

    Parameters:
    -----------
    point : array-like (3,)
        Support position (m), also the target position
    fixed : (bool, bool, bool)
        Which world axes (x, y, z) are restrained
    strength : float
        Weighting (N/m)
    """

    def __init__(self, point, fixed: Tuple[bool, bool, bool] = (True, True, True),
                 strength: float = 1e15):
        self.fixed = _mask(fixed, 3, "SupportGoal")
        if not self.fixed.any():
            warnings.warn(
                f"Support at {tuple(as_point(point))} restrains no degree of freedom",
                FreeSupportWarning,
            )
        self._init_buffers([point], [strength])
        self.target = self.ppos[0].copy()

    def axis_weighting(self) -> np.ndarray:
        return (self.weighting[:, None] * self.fixed[None, :]).astype(float)

    def calculate(self, particles: Sequence[Particle]) -> None:
        current = particles[self.pindex[0]].position
        self.move[0] = np.where(self.fixed, self.target - current, 0.0)

    def output(self, particles: Sequence[Particle]) -> SupportResult:
        self.calculate(particles)
        return SupportResult(
            point=particles[self.pindex[0]].position.copy(),
            reaction_force_kn=self.move[0] * self.weighting[0] * 1e-3,
        )


class Support6DOFGoal(Goal):
    """
    Support restraining translations and rotations.

    Parameters:
    -----------
    plane : Plane
        Support position and target orientation
    fixed : 6 bools
        Restrained world axes (x, y, z, rx, ry, rz)
    strength : float
        Weighting for both translations (N/m) and rotations (N·m/rad)
    """

    def __init__(self, plane: Plane,
                 fixed: Tuple[bool, ...] = (True, True, True, True, True, True),
                 strength: float = 1e12):
        mask = _mask(fixed, 6, "Support6DOFGoal")
        self.fixed = mask[:3]
        self.fixed_rotation = mask[3:]
        if not mask.any():
            warnings.warn(
                f"6-DOF support at {tuple(plane.origin)} restrains no degree of freedom",
                FreeSupportWarning,
            )
        self.plane = plane
        self._init_buffers([plane.origin], [strength], torque_weighting=[strength],
                           initial_orientation=[plane])
        self.target = self.ppos[0].copy()
        self.target_rotation: Rotation = plane.to_rotation()

    def axis_weighting(self) -> np.ndarray:
        return (self.weighting[:, None] * self.fixed[None, :]).astype(float)

    def torque_axis_weighting(self) -> np.ndarray:
        return (self.torque_weighting[:, None] * self.fixed_rotation[None, :]).astype(float)

    def calculate(self, particles: Sequence[Particle]) -> None:
        particle = particles[self.pindex[0]]
        self.move[0] = np.where(self.fixed, self.target - particle.position, 0.0)
        rotvec = (self.target_rotation * particle.orientation.inv()).as_rotvec()
        self.torque[0] = np.where(self.fixed_rotation, rotvec, 0.0)

    def output(self, particles: Sequence[Particle]) -> SupportResult:
        self.calculate(particles)
        particle = particles[self.pindex[0]]
        moment_global = self.torque[0] * self.torque_weighting[0] * 1e-3
        return SupportResult(
            point=particle.position.copy(),
            reaction_force_kn=self.move[0] * self.weighting[0] * 1e-3,
            plane=particle.plane,
            reaction_moment_knm=transform_moment(moment_global, Plane.world_xy(), self.plane),
        )
