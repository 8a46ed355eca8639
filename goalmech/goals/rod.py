# goalmech/goals/rod.py
"""
ROD GOAL: Bending Stiffness Between Two Consecutive Segments
============================================================

PURPOSE:
--------
A four-point goal acting on two consecutive segments A = (A0, A1) and
B = (B0, B1) that share a point (A1 == B0). It resists the change of angle
at the shared point through pairs of shear forces perpendicular to each
segment, so the segments carry bending only (axial behaviour is left to
bar goals on the same lines).

Particles are ordered P0 = A0, P1 = A1, P2 = B0, P3 = B1. When B is given
in the opposite direction it is flipped so that P1 and P2 coincide.

FORMULATIONS:
-------------
"angle" (discrete bending angle):

    dev    = rest_angle − angle(P0 − P1, P3 − P2)
    n      = (P0 − P1) × (P3 − P2)
    a      = unit((P0 − P1) × n) · 2 sin(dev) / (|A| · |P3 − P0|)
    b      = unit((P3 − P2) × n) · 2 sin(dev) / (|B| · |P3 − P0|)
    move   = [a, −a, b, −b]

"curvature" (circle through P0, P1, P3 with radius R):

    a      = unit shear direction of A pointing at the circle centre
             · (1/|A|)(1/R − 1/R0)
    b      = same for B
    move   = [−a, a, b, −b]

With weighting E·I·1e-6 (N·m², E in MPa, I in mm⁴) on all four points,
weighting × |move_0| × |A| is the bending moment at the shared point.

Rest state: "straight" (rest angle π, rest curvature 0) or "current"
(the angle/curvature of the construction geometry).
"""

from typing import Sequence

import numpy as np

from ..geometry import Line, Plane, circumcenter, perpendicular, unitize, vector_angle
from ..kernel.goal import ConfigurationError, DegenerateGeometryError, Goal, Particle
from ..results import RodResult


REST_OPTIONS = ("straight", "current")
FORMULATIONS = ("angle", "curvature")


def _curvature(p0: np.ndarray, p1: np.ndarray, p3: np.ndarray):
    """Circumcentre and curvature 1/R of three points; (None, 0.0) when collinear."""
    cc = circumcenter(p0, p1, p3)
    if cc is None:
        return None, 0.0
    return cc, 1.0 / float(np.linalg.norm(cc - p1))


class RodGoal(Goal):
    """
    Elastic rod bending goal.

    Parameters:
    -----------
    line_a, line_b : Line
        Consecutive segments (m). line_b may start or end at line_a.end.
    E : float
        Young's modulus (MPa)
    I : float
        Second moment of area (mm⁴)
    z : float
        Distance from the neutral axis to the extreme fibre (mm)
    rest : str
        "straight" or "current"
    formulation : str
        "angle" or "curvature"
    """

    def __init__(self, line_a: Line, line_b: Line, E: float, I: float, z: float,
                 rest: str = "straight", formulation: str = "angle",
                 tol: float = 1e-9):
        if rest not in REST_OPTIONS:
            raise ConfigurationError(f"Unknown rest option '{rest}', expected one of {REST_OPTIONS}")
        if formulation not in FORMULATIONS:
            raise ConfigurationError(
                f"Unknown rod formulation '{formulation}', expected one of {FORMULATIONS}"
            )
        if E <= 0.0 or I <= 0.0:
            raise ConfigurationError(f"Rod needs positive E and I, got E={E}, I={I}")
        if line_a.length <= 0.0 or line_b.length <= 0.0:
            raise DegenerateGeometryError("Rod segments must have non-zero length")

        if np.linalg.norm(line_a.end - line_b.start) > tol:
            line_b = line_b.flipped()

        self.E = float(E)
        self.I = float(I)
        self.z = float(z)
        self.rest = rest
        self.formulation = formulation

        w = self.E * self.I * 1e-6
        self._init_buffers([line_a.start, line_a.end, line_b.start, line_b.end], [w] * 4)

        p0, p1, p2, p3 = self.ppos
        if rest == "straight":
            self.rest_angle = np.pi
            self.rest_curvature = 0.0
        else:
            self.rest_angle = vector_angle(p0 - p1, p3 - p2)
            self.rest_curvature = _curvature(p0, p1, p3)[1]

    def calculate(self, particles: Sequence[Particle]) -> None:
        p0, p1, p2, p3 = self._positions(particles)
        if self.formulation == "angle":
            self._calculate_angle(p0, p1, p2, p3)
        else:
            self._calculate_curvature(p0, p1, p2, p3)

    def _shear_directions(self, p0, p1, p2, p3):
        n = np.cross(p0 - p1, p3 - p2)
        return n, unitize(np.cross(p0 - p1, n)), unitize(np.cross(p3 - p2, n))

    def _calculate_angle(self, p0, p1, p2, p3) -> None:
        len_a = np.linalg.norm(p1 - p0)
        len_b = np.linalg.norm(p3 - p2)
        span = np.linalg.norm(p3 - p0)
        if len_a == 0.0 or len_b == 0.0 or span == 0.0:
            self.move[:] = 0.0
            return
        deviation = self.rest_angle - vector_angle(p0 - p1, p3 - p2)
        _, shear_a, shear_b = self._shear_directions(p0, p1, p2, p3)
        shear_a = shear_a * 2.0 * np.sin(deviation) / (len_a * span)
        shear_b = shear_b * 2.0 * np.sin(deviation) / (len_b * span)
        self.move[:] = [shear_a, -shear_a, shear_b, -shear_b]

    def _calculate_curvature(self, p0, p1, p2, p3) -> None:
        centre, curvature = _curvature(p0, p1, p3)
        # Collinear: no defined bending direction
        if centre is None:
            self.move[:] = 0.0
            return
        _, shear_a, shear_b = self._shear_directions(p0, p1, p2, p3)
        if np.linalg.norm(centre - (p1 + shear_a)) > np.linalg.norm(centre - (p1 - shear_a)):
            shear_a = -shear_a
        if np.linalg.norm(centre - (p1 + shear_b)) > np.linalg.norm(centre - (p1 - shear_b)):
            shear_b = -shear_b
        delta = curvature - self.rest_curvature
        shear_a = shear_a * delta / np.linalg.norm(p1 - p0)
        shear_b = shear_b * delta / np.linalg.norm(p3 - p2)
        self.move[:] = [-shear_a, shear_a, shear_b, -shear_b]

    def bending_moment(self, particles: Sequence[Particle]) -> float:
        """Bending moment at the shared point (Nmm) from the current move buffer."""
        p0, p1 = self._positions(particles)[:2]
        return float(np.linalg.norm(self.move[0]) * self.weighting[0]
                     * np.linalg.norm(p1 - p0) * 1e3)

    def bending_plane(self, particles: Sequence[Particle]) -> Plane:
        """
        Plane at the shared point with the y-axis along the resultant shear
        on the shared point. Straight geometry gives a plane spanned by the
        tangent of A and an arbitrary perpendicular.
        """
        p0, p1, p2, p3 = self._positions(particles)
        n = np.cross(p0 - p1, p3 - p2)
        yaxis = -(self.move[1] + self.move[2]) / 2.0
        xaxis = np.cross(yaxis, n)
        if unitize(yaxis).any() and unitize(xaxis).any():
            return Plane(p1, xaxis, yaxis)
        tangent = unitize(p1 - p0)
        return Plane(p1, tangent, perpendicular(tangent))

    def output(self, particles: Sequence[Particle]) -> RodResult:
        self.calculate(particles)
        moment = self.bending_moment(particles)
        return RodResult(
            shared_index=self.pindex[1],
            bending_plane=self.bending_plane(particles),
            moment_knm=moment * 1e-6,
            stress_mpa=moment * self.z / self.I,
        )
