# goalmech/goals/bar.py
"""
BAR AND CABLE GOALS: Axial Members
==================================

PURPOSE:
--------
Two-point goals that resist change of length. The correction splits the
extension equally between both ends:

    e      = L − L_rest
    move_0 = +dir · e/2
    move_1 = −dir · e/2        (dir = unit vector start → end)

    weighting = 2·E·A / L_rest      (N/m, E in MPa, A in mm²)

Because each end moves by e/2, weighting × |move| = (EA/L_rest)·e, the
axial force of a linear elastic bar in N.

CABLE:
------
Same law with two differences:
- rest length is shortened by a pretension P (N):
      L_rest = L · EA / (P + EA)
  so the cable carries P once it sits at its initial length;
- compression is not resisted: when e <= 0 the move is zero.

Output force is in kN (negative = compression) and stress in MPa.
"""

import numpy as np
from typing import Sequence

from ..geometry import Line, unitize
from ..kernel.goal import ConfigurationError, DegenerateGeometryError, Goal, Particle
from ..results import BarResult


class BarGoal(Goal):
    """
    Linear elastic axial member.

    Parameters:
    -----------
    line : Line
        Member geometry at construction (m); its length is the rest length
    E : float
        Young's modulus (MPa)
    A : float
        Cross-section area (mm²)
    """

    def __init__(self, line: Line, E: float, A: float):
        if E <= 0.0 or A <= 0.0:
            raise ConfigurationError(f"Bar needs positive E and A, got E={E}, A={A}")
        length = line.length
        if length <= 0.0:
            raise DegenerateGeometryError(
                f"Bar has zero length (start and end at {tuple(line.start)})"
            )
        self.E = float(E)
        self.A = float(A)
        self.rest_length = self._rest_length(length)
        w = 2.0 * self.E * self.A / self.rest_length
        self._init_buffers([line.start, line.end], [w, w])

    def _rest_length(self, length: float) -> float:
        return length

    def _extension(self, particles: Sequence[Particle]):
        p0, p1 = self._positions(particles)
        current = p1 - p0
        return unitize(current), float(np.linalg.norm(current)) - self.rest_length

    def calculate(self, particles: Sequence[Particle]) -> None:
        direction, e = self._extension(particles)
        self.move[0] = direction * 0.5 * e
        self.move[1] = -direction * 0.5 * e

    def output(self, particles: Sequence[Particle]) -> BarResult:
        self.calculate(particles)
        direction, e = self._extension(particles)
        force = self.weighting[0] * abs(self.move[0] @ direction)
        if e < 0.0:
            force = -force
        p0, p1 = self._positions(particles)
        return BarResult(
            start_index=self.pindex[0],
            end_index=self.pindex[1],
            line=Line(p0, p1),
            force_kn=force / 1e3,
            stress_mpa=force / self.A,
        )


class CableGoal(BarGoal):
    """
    Tension-only axial member with optional pretension.

    Parameters:
    -----------
    line : Line
        Member geometry at construction (m)
    E, A : float
        Young's modulus (MPa) and area (mm²)
    pretension : float
        Initial force (N). Must be greater than −E·A so the rest length stays
        positive.
    """

    def __init__(self, line: Line, E: float, A: float, pretension: float = 0.0):
        if pretension <= -E * A:
            raise ConfigurationError(
                f"Cable pretension {pretension} N gives a non-positive rest length (EA={E * A})"
            )
        self.pretension = float(pretension)
        super().__init__(line, E, A)

    def _rest_length(self, length: float) -> float:
        ea = self.E * self.A
        return length * ea / (self.pretension + ea)

    def calculate(self, particles: Sequence[Particle]) -> None:
        direction, e = self._extension(particles)
        if e <= 0.0:
            self.move[:] = 0.0
            return
        self.move[0] = direction * 0.5 * e
        self.move[1] = -direction * 0.5 * e
