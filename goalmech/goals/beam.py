# goalmech/goals/beam.py
"""
BEAM GOAL: 6-DOF Member With Axial, Bending and Torsional Stiffness
===================================================================

PURPOSE:
--------
A two-particle goal that uses particle orientations. Each end carries a
frame (plane) whose x-axis runs along the member and whose y/z axes are the
principal axes of the cross-section. The goal returns translational moves
AND rotational corrections (torques) for both particles.

KINEMATICS (current state):
---------------------------
    c   = unit(p1 − p0),  L = |p1 − p0|
    y_e, z_e = current section axes at end e (particle orientation applied
               to the section frame bound at the first evaluation)

    θy_e = z_e · c           bending rotation about y
    θz_e = −y_e · c          bending rotation about z
    φ    = (z0·y1 − y0·z1)/2 twist about the member axis

Each proxy is measured relative to its value in the construction geometry,
so a pre-curved or pre-twisted member is stress-free at rest.

CONSTITUTIVE LAW (units N, m):
------------------------------
    N     = EA/L0 · (L − L0)
    M_e   = N·L0/30 · (4θ_e − θ_o) + EI/L0 · (4θ_e + 2θ_o)     per axis y, z
    Mx    = GIt/L0 · φ

The first term of M_e is the geometric (P-Δ) contribution of the normal
force, the second the classic 4EI/L, 2EI/L end stiffness.

NODAL ACTIONS:
--------------
Forces and moments are the chain rule of the proxies above (virtual work).
Every proxy depends only on relative positions and relative rotations, so
the element forces sum to zero and the element moments, including the
moment of the end forces, sum to zero for any values of N, M and Mx.

    f1 = −N c − (1/L) Σ_e [ My_e (z_e − (z_e·c) c) − Mz_e (y_e − (y_e·c) c) ]
    f0 = −f1
    m0 = −[ My0 (z0 × c) − Mz0 (y0 × c) + Mx (z0 × y1 − y0 × z1)/2 ]
    m1 = −[ My1 (z1 × c) − Mz1 (y1 × c) + Mx (y1 × z0 − z1 × y0)/2 ]

The solver consumes move = f / weighting and torque = m / torque_weighting,
where the weightings are the member stiffnesses rounded up to the next
power of ten (see stiffness_scale).
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from ..geometry import WORLD_Y, WORLD_Z, Line, Plane, permutation_cross, unitize
from ..kernel.goal import ConfigurationError, DegenerateGeometryError, Goal, Particle
from ..results import BeamResult


logger = logging.getLogger(__name__)


def stiffness_scale(k: float) -> float:
    """
    Round a stiffness up to the next power of ten: 10**(floor(log10 k) + 1).

    Used as the solver weighting so that weighting >= stiffness, which keeps
    move = force / weighting inside the stable range of the projection.
    """
    if k <= 0.0:
        raise ConfigurationError(f"Stiffness must be positive, got {k}")
    return 10.0 ** (math.floor(math.log10(k)) + 1)


def beam_planes_from_line(line: Line, flip: bool = False) -> Tuple[Plane, Plane]:
    """
    End planes for a straight member.

    The x-axis follows the line. For a non-vertical member the y-axis is
    horizontal and z points upwards; a vertical member uses the world y-axis
    as section y. flip=True turns the section by 90° about the member axis
    (strong and weak axes swap).
    """
    edge = line.direction
    if not edge.any():
        raise DegenerateGeometryError("Cannot orient a zero-length member")
    yaxis = unitize(np.cross(WORLD_Z, edge))
    if not yaxis.any():
        yaxis = WORLD_Y.copy()
    if flip:
        yaxis = np.cross(edge, yaxis)
    return Plane(line.start, edge, yaxis), Plane(line.end, edge, yaxis)


class BeamGoal(Goal):
    """
    Linear elastic 6-DOF beam between two oriented planes.

    Parameters:
    -----------
    start_plane, end_plane : Plane
        End frames (m); x along the member, y/z section principal axes
    E, G : float
        Young's and shear modulus (MPa)
    A : float
        Area (mm²)
    Iy, Iz : float
        Second moments of area about the section y and z axes (mm⁴)
    It : float
        Torsion constant (mm⁴)
    """

    def __init__(self, start_plane: Plane, end_plane: Plane, E: float, G: float,
                 A: float, Iy: float, Iz: float, It: float):
        for name, value in (("E", E), ("G", G), ("A", A), ("Iy", Iy), ("Iz", Iz), ("It", It)):
            if value <= 0.0:
                raise ConfigurationError(f"Beam property {name} must be positive, got {value}")
        self.L0 = float(np.linalg.norm(end_plane.origin - start_plane.origin))
        if self.L0 <= 0.0:
            raise DegenerateGeometryError(
                f"Beam has zero length (both planes at {tuple(start_plane.origin)})"
            )

        # Stiffness terms in N/m and N·m
        self.EA = E * A
        self.EIy = E * Iy * 1e-6
        self.EIz = E * Iz * 1e-6
        self.GIt = G * It * 1e-6

        axial = self.EA / self.L0
        rotational = max(4.0 * self.EIy / self.L0, 4.0 * self.EIz / self.L0, self.GIt / self.L0)
        self.axis_weightings: Dict[str, float] = {
            "axial": stiffness_scale(axial),
            "bending_y": stiffness_scale(4.0 * self.EIy / self.L0),
            "bending_z": stiffness_scale(4.0 * self.EIz / self.L0),
            "torsion": stiffness_scale(self.GIt / self.L0),
        }
        w = self.axis_weightings["axial"]
        wt = stiffness_scale(rotational)

        initial = [Plane.world_xy(start_plane.origin), Plane.world_xy(end_plane.origin)]
        self._init_buffers([start_plane.origin, end_plane.origin], [w, w],
                           torque_weighting=[wt, wt], initial_orientation=initial)

        # Section frames relative to the particle orientations, bound on first use
        self._rest_rotations = [start_plane.to_rotation(), end_plane.to_rotation()]
        self._rest_relative: Optional[List[Rotation]] = None
        self._rest_proxies = self._proxies(
            self.ppos[0], self.ppos[1],
            [start_plane.yaxis, end_plane.yaxis], [start_plane.zaxis, end_plane.zaxis],
        )
        logger.debug("Beam L0=%.3f m, weighting=%.0e, torque weighting=%.0e", self.L0, w, wt)

    @staticmethod
    def _proxies(p0, p1, yaxes, zaxes):
        c = unitize(p1 - p0)
        return {
            "ty": np.array([zaxes[0] @ c, zaxes[1] @ c]),
            "tz": np.array([-(yaxes[0] @ c), -(yaxes[1] @ c)]),
            "phi": 0.5 * (zaxes[0] @ yaxes[1] - yaxes[0] @ zaxes[1]),
        }

    def _bind_rest_frames(self, particles: Sequence[Particle]) -> None:
        self._rest_relative = [
            particles[index].orientation.inv() * rest
            for index, rest in zip(self.pindex, self._rest_rotations)
        ]

    def current_frames(self, particles: Sequence[Particle]) -> Tuple[Plane, Plane]:
        """
        End frames at the current particle state.

        The first call fixes the section frames relative to the particle
        orientations it finds, so the beam works with whatever orientation
        another goal gave a shared particle.
        """
        if self._rest_relative is None:
            self._bind_rest_frames(particles)
        planes = []
        for slot, index in enumerate(self.pindex):
            particle = particles[index]
            rotation: Rotation = particle.orientation * self._rest_relative[slot]
            planes.append(Plane.from_rotation(particle.position, rotation))
        return planes[0], planes[1]

    def internal_forces(self, particles: Sequence[Particle]):
        """
        Section forces at the current state (N, N·m).

        Returns:
        --------
        (N, Mx, My, Mz, frames) with My/Mz arrays of [start, end] values
        """
        frames = self.current_frames(particles)
        p0, p1 = frames[0].origin, frames[1].origin
        yaxes = [f.yaxis for f in frames]
        zaxes = [f.zaxis for f in frames]
        current = self._proxies(p0, p1, yaxes, zaxes)
        rest = self._rest_proxies

        L = float(np.linalg.norm(p1 - p0))
        N = self.EA / self.L0 * (L - self.L0)
        L0 = self.L0

        def end_moments(theta, EI):
            t0, t1 = theta
            m0 = N * L0 / 30.0 * (4.0 * t0 - t1) + EI / L0 * (4.0 * t0 + 2.0 * t1)
            m1 = N * L0 / 30.0 * (4.0 * t1 - t0) + EI / L0 * (4.0 * t1 + 2.0 * t0)
            return np.array([m0, m1])

        My = end_moments(current["ty"] - rest["ty"], self.EIy)
        Mz = end_moments(current["tz"] - rest["tz"], self.EIz)
        Mx = self.GIt / L0 * (current["phi"] - rest["phi"])
        return N, Mx, My, Mz, frames

    def nodal_actions(self, particles: Sequence[Particle]):
        """Forces (N) and moments (N·m) exerted by the beam on both particles."""
        N, Mx, My, Mz, frames = self.internal_forces(particles)
        p0, p1 = frames[0].origin, frames[1].origin
        yaxes = [f.yaxis for f in frames]
        zaxes = [f.zaxis for f in frames]
        L = float(np.linalg.norm(p1 - p0))
        c = unitize(p1 - p0)

        f1 = -N * c
        if L > 0.0:
            for e in range(2):
                z_perp = zaxes[e] - (zaxes[e] @ c) * c
                y_perp = yaxes[e] - (yaxes[e] @ c) * c
                f1 = f1 - (My[e] * z_perp - Mz[e] * y_perp) / L
        f0 = -f1

        y0, y1 = yaxes
        z0, z1 = zaxes
        m0 = -(My[0] * permutation_cross(z0, c) - Mz[0] * permutation_cross(y0, c)
               + Mx * 0.5 * (permutation_cross(z0, y1) - permutation_cross(y0, z1)))
        m1 = -(My[1] * permutation_cross(z1, c) - Mz[1] * permutation_cross(y1, c)
               + Mx * 0.5 * (permutation_cross(y1, z0) - permutation_cross(z1, y0)))
        return np.array([f0, f1]), np.array([m0, m1])

    def calculate(self, particles: Sequence[Particle]) -> None:
        forces, moments = self.nodal_actions(particles)
        self.move[:] = forces / self.weighting[:, None]
        self.torque[:] = moments / self.torque_weighting[:, None]

    def output(self, particles: Sequence[Particle]) -> BeamResult:
        N, Mx, My, Mz, frames = self.internal_forces(particles)
        return BeamResult(
            plane_start=frames[0],
            plane_end=frames[1],
            normal_force_kn=N / 1e3,
            torsion_knm=Mx / 1e3,
            my_start_knm=My[0] / 1e3,
            mz_start_knm=Mz[0] / 1e3,
            my_end_knm=My[1] / 1e3,
            mz_end_knm=Mz[1] / 1e3,
        )
